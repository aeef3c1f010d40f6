"""
Submission Entities

Responsibility:
    - UploadedFile: one file part of a multipart upload, buffered in memory
    - Submission: a validated résumé upload together with its job title

Architecture Notes:
    - Uses Pydantic for validation (invariants enforced at construction)
    - Lives for a single request, never persisted
    - Built by IntakeValidator in the Application Layer
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator, model_validator

from .constants import ALLOWED_MIME_TYPE, MAX_FILE_SIZE_BYTES, PLACEHOLDER_JOB_TITLE


def normalize_mime_type(mime_type: str | None) -> str:
    """
    Drop MIME parameters and lowercase the type.

    Examples:
        >>> normalize_mime_type("Application/PDF; charset=binary")
        'application/pdf'
    """
    if not mime_type:
        return ""
    return mime_type.split(";", 1)[0].strip().lower()


class UploadedFile(BaseModel):
    """
    A single PDF file received in a submission.

    Attributes:
        original_name: Filename as sent by the client
        mime_type: Declared content type (normalized, always application/pdf)
        size_bytes: Size of `content` in bytes (<= 5 MiB)
        content: Raw file bytes

    Business Rules:
        - mime_type must be application/pdf
        - size_bytes must not exceed MAX_FILE_SIZE_BYTES
        - size_bytes must equal len(content)
    """

    original_name: str = Field(min_length=1, description="Client filename")
    mime_type: str = Field(description="Normalized MIME type")
    size_bytes: int = Field(ge=0, le=MAX_FILE_SIZE_BYTES, description="File size in bytes")
    content: bytes = Field(repr=False, description="Raw file bytes")

    class Config:
        frozen = True

    @field_validator("mime_type")
    @classmethod
    def _must_be_pdf(cls, value: str) -> str:
        normalized = normalize_mime_type(value)
        if normalized != ALLOWED_MIME_TYPE:
            raise ValueError(f"mime_type must be {ALLOWED_MIME_TYPE}, got {value!r}")
        return normalized

    @model_validator(mode="after")
    def _size_matches_content(self) -> "UploadedFile":
        if self.size_bytes != len(self.content):
            raise ValueError(
                f"size_bytes ({self.size_bytes}) does not match content length "
                f"({len(self.content)})"
            )
        return self

    @property
    def size_mb(self) -> float:
        """File size in megabytes (2 decimal places)."""
        return round(self.size_bytes / (1024 * 1024), 2)


class Submission(BaseModel):
    """
    One résumé upload for a job posting.

    Attributes:
        job_title: Title from the form, placeholder when none was given
        file: The single validated PDF
        submitted_at: Time the submission was accepted (UTC)

    Examples:
        >>> submission = Submission(
        ...     job_title="Data Engineer",
        ...     file=UploadedFile(
        ...         original_name="resume.pdf",
        ...         mime_type="application/pdf",
        ...         size_bytes=4,
        ...         content=b"%PDF",
        ...     ),
        ... )
    """

    job_title: str = Field(default=PLACEHOLDER_JOB_TITLE, min_length=1)
    file: UploadedFile
    submitted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        frozen = True
