"""
File Storage Service

Temporary on-disk staging of uploaded résumés while they are being sent.

Responsibility:
    - Write an upload into its own directory: {base_dir}/{upload_id}/{filename}
    - Remove that directory when the send is over (scoped acquisition)
    - Best-effort sweep of leftover upload directories older than a threshold
    - Implements UploadStagingProtocol from Application Layer

Architecture Notes:
    - Infrastructure Layer (file system operations)
    - Used only when UPLOAD_STORAGE=disk; the default keeps uploads in memory
    - The sweep removes directories by age only, so it never touches an
      upload younger than the threshold
"""

import logging
import os
import shutil
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union
from uuid import UUID, uuid4

from recruitment.domain.submission.filename import original_basename

# Configure logger for file storage operations
logger = logging.getLogger(__name__)


class FileStorageService:
    """
    Service for staging uploads in a temporary directory.

    Storage Structure:
        Base directory: /tmp/recruitment/uploads/ (from settings: UPLOAD_TEMP_DIR)
        Staged upload:  /tmp/recruitment/uploads/{upload_id}/{filename}

    Examples:
        >>> service = FileStorageService(base_dir="/tmp/recruitment/uploads")
        >>> with service.staged_upload(pdf_bytes, "Data Engineer_20240115_resume.pdf") as path:
        ...     await sender.send(path, path.name, subject, body)
        >>> # Directory is gone here, whatever happened inside the block
        >>>
        >>> removed = service.cleanup_old_uploads(hours=24)
    """

    def __init__(self, base_dir: Union[str, Path]) -> None:
        """
        Initialize file storage service.

        Args:
            base_dir: Base directory for staged uploads

        Raises:
            OSError: If base directory cannot be created
        """
        self.base_dir = Path(base_dir)

        # Ensure base directory exists
        self._ensure_directory_exists(self.base_dir)

    @contextmanager
    def staged_upload(self, content: bytes, filename: str) -> Iterator[Path]:
        """
        Write an upload to disk for the duration of a `with` block.

        The file is fully written and closed before the path is yielded.
        The upload directory is removed when the block exits, including on
        exceptions and task cancellation.

        Args:
            content: File bytes
            filename: Name to store the file under (reduced to its basename)

        Yields:
            Path to the staged file

        Raises:
            OSError: If the file cannot be written
        """
        upload_id = uuid4()
        upload_dir = self._get_upload_dir(upload_id)
        self._ensure_directory_exists(upload_dir)

        try:
            file_path = upload_dir / original_basename(filename)
            file_path.write_bytes(content)
            self._set_permissions(file_path, 0o644)
            logger.info(
                f"Staged upload: {file_path.name} ({len(content)} bytes) in {upload_id}/"
            )
            yield file_path
        finally:
            self.remove_upload(upload_id)

    def remove_upload(self, upload_id: UUID) -> bool:
        """
        Delete an upload directory and everything in it.

        Removal errors are logged, not raised: a leftover directory is picked
        up later by cleanup_old_uploads().

        Returns:
            True if the directory was removed, False otherwise
        """
        upload_dir = self._get_upload_dir(upload_id)
        if not upload_dir.exists():
            logger.warning(f"Upload directory not found for cleanup: {upload_id}")
            return False
        try:
            shutil.rmtree(upload_dir)
        except OSError as e:
            logger.error(f"Failed to remove upload directory {upload_id}: {e}")
            return False
        logger.debug(f"Removed upload directory: {upload_id}")
        return True

    def cleanup_old_uploads(self, hours: int = 24) -> int:
        """
        Remove upload directories older than the given age.

        Scans base_dir and deletes every subdirectory whose modification time
        is older than (now - hours). Entries that are not UUID-named
        directories are left alone.

        Args:
            hours: Age threshold in hours (default 24)

        Returns:
            Number of upload directories removed

        Examples:
            >>> service = FileStorageService(base_dir="/tmp/recruitment/uploads")
            >>> count = service.cleanup_old_uploads(hours=24)
            >>> print(f"Cleaned up {count} old uploads")
        """
        if hours <= 0:
            raise ValueError(f"hours must be positive, got {hours}")

        if not self.base_dir.exists():
            return 0

        cleaned_count = 0
        for upload_dir in self.base_dir.iterdir():
            if not upload_dir.is_dir():
                continue
            if not self._is_directory_old(upload_dir, hours):
                continue
            try:
                upload_id = UUID(upload_dir.name)
            except ValueError:
                logger.warning(f"Skipping non-UUID directory: {upload_dir.name}")
                continue
            if self.remove_upload(upload_id):
                cleaned_count += 1

        logger.info(f"Cleaned up {cleaned_count} uploads older than {hours} hours")
        return cleaned_count

    def _get_upload_dir(self, upload_id: UUID) -> Path:
        return self.base_dir / str(upload_id)

    def _ensure_directory_exists(self, dir_path: Path) -> None:
        """Create directory (mkdir -p) with 755 permissions."""
        if dir_path.exists():
            return
        dir_path.mkdir(parents=True, exist_ok=True)
        self._set_permissions(dir_path, 0o755)
        logger.debug(f"Created directory: {dir_path}")

    def _set_permissions(self, path: Path, mode: int) -> None:
        """
        Set file/directory permissions (cross-platform).

        Windows and some filesystems do not support chmod; the failure is
        logged at DEBUG level and ignored.
        """
        try:
            os.chmod(path, mode)
        except (OSError, NotImplementedError):
            logger.debug(f"Could not set permissions on {path}")

    def _is_directory_old(self, dir_path: Path, hours: int, now: Optional[float] = None) -> bool:
        """
        Check if directory modification time is older than threshold.

        Args:
            dir_path: Directory to check
            hours: Age threshold in hours
            now: Current Unix timestamp (defaults to time.time())

        Returns:
            True if directory is older than threshold, False otherwise
        """
        if not dir_path.exists():
            return False
        cutoff_timestamp = (now if now is not None else time.time()) - hours * 3600
        return dir_path.stat().st_mtime < cutoff_timestamp
