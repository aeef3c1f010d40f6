"""
Intake Validator

Responsibility:
    Turns the file parts and job title of a multipart upload into a validated
    Submission, or rejects the request with a ClientInputError.

Validation order (first failure wins, nothing is sent after a rejection):
    1. No file part                   -> MissingFileError (400)
    2. More than one file part        -> TooManyFilesError (400)
    3. MIME type != application/pdf   -> UnsupportedTypeError (415)
    4. Size > 5 MiB                   -> PayloadTooLargeError (413)

Architecture Notes:
    - Part of Application Layer (Services)
    - Called by API Layer (upload router) before ResumeDispatchUseCase
    - No side effects: files stay in memory, nothing is written anywhere
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from recruitment.domain.shared.exceptions import (
    MissingFileError,
    PayloadTooLargeError,
    TooManyFilesError,
    UnsupportedTypeError,
)
from recruitment.domain.submission.constants import (
    ALLOWED_MIME_TYPE,
    MAX_FILE_SIZE_BYTES,
)
from recruitment.domain.submission.entities import (
    Submission,
    UploadedFile,
    normalize_mime_type,
)
from recruitment.domain.submission.filename import normalize_job_title

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IncomingFile:
    """
    Raw file part as received by the API Layer.

    Attributes:
        filename: Client filename (may be None/empty when the part is empty)
        content_type: Declared Content-Type of the part
        content: File bytes (the router reads at most MAX_FILE_SIZE_BYTES + 1)
        size_bytes: Full size reported by the multipart parser, when known
    """

    filename: Optional[str]
    content_type: Optional[str]
    content: bytes = field(repr=False)
    size_bytes: Optional[int] = None

    @property
    def size(self) -> int:
        if self.size_bytes is not None:
            return max(self.size_bytes, len(self.content))
        return len(self.content)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class IntakeValidator:
    """
    Validates one résumé upload.

    Examples:
        >>> validator = IntakeValidator()
        >>> submission = validator.validate(
        ...     files=[IncomingFile("resume.pdf", "application/pdf", b"%PDF-1.7")],
        ...     job_title="Data Engineer",
        ... )
        >>> submission.job_title
        'Data Engineer'
    """

    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        """
        Args:
            clock: Returns the submission timestamp (injected for tests)
        """
        self.clock = clock

    def validate(
        self, files: Sequence[IncomingFile], job_title: Optional[str] = None
    ) -> Submission:
        """
        Validate file parts and job title.

        Args:
            files: All parts received under the `file` field
            job_title: Value of the `jobTitle` field (optional)

        Returns:
            Submission ready for dispatch

        Raises:
            MissingFileError: No file part, or a part without a filename
            TooManyFilesError: More than one file part
            UnsupportedTypeError: MIME type is not application/pdf
            PayloadTooLargeError: File is larger than 5 MiB
        """
        present = [f for f in files if f.filename]
        if not present:
            logger.warning("Upload rejected: no file received")
            raise MissingFileError("No file received")

        if len(present) > 1:
            logger.warning(f"Upload rejected: {len(present)} files received")
            raise TooManyFilesError(
                "Exactly one file must be uploaded", file_count=len(present)
            )

        incoming = present[0]

        mime_type = normalize_mime_type(incoming.content_type)
        if mime_type != ALLOWED_MIME_TYPE:
            logger.warning(
                f"Upload rejected: unsupported type {incoming.content_type!r} "
                f"for {incoming.filename!r}"
            )
            raise UnsupportedTypeError(
                "unsupported type: only PDF files are accepted",
                mime_type=incoming.content_type,
                allowed_mime_type=ALLOWED_MIME_TYPE,
            )

        if incoming.size > MAX_FILE_SIZE_BYTES:
            logger.warning(
                f"Upload rejected: {incoming.filename!r} is {incoming.size} bytes "
                f"(max {MAX_FILE_SIZE_BYTES})"
            )
            raise PayloadTooLargeError(
                "File is too large",
                file_size_bytes=incoming.size,
                max_size_bytes=MAX_FILE_SIZE_BYTES,
            )

        title = normalize_job_title(job_title)

        uploaded = UploadedFile(
            original_name=incoming.filename,
            mime_type=mime_type,
            size_bytes=len(incoming.content),
            content=incoming.content,
        )

        logger.info(
            f"Upload accepted: {uploaded.original_name} ({uploaded.size_bytes} bytes) "
            f"for position {title!r}"
        )

        return Submission(job_title=title, file=uploaded, submitted_at=self.clock())
