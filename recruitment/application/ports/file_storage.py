"""
Upload Staging Port

Used by ResumeDispatchUseCase when uploads are staged on disk instead of
being handed to the transport as bytes.
"""

from contextlib import AbstractContextManager
from pathlib import Path
from typing import Protocol


class UploadStagingProtocol(Protocol):
    """
    Protocol for scoped temporary storage of an uploaded file.

    `staged_upload()` writes the file completely, yields its path and removes
    it when the block exits, whatever the outcome.

    Examples:
        >>> with storage.staged_upload(content, "resume.pdf") as path:
        ...     await sender.send(path, filename, subject, body)
    """

    def staged_upload(
        self, content: bytes, filename: str
    ) -> AbstractContextManager[Path]:
        ...

    def cleanup_old_uploads(self, hours: int = 24) -> int:
        ...
