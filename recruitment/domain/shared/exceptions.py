"""
Domain Layer Exceptions

This module defines the exception hierarchy for the Domain Layer.
All domain-specific exceptions inherit from DomainException.

Responsibility:
    - Base exception class for domain errors
    - Client input errors raised by intake validation (no file, wrong type, too large)
    - HTTP status and machine-readable code carried on each client error

Architecture Notes:
    - Part of Shared Domain
    - API Layer converts ClientInputError subclasses to 4xx responses
    - Infrastructure Layer should not raise DomainException (use own exceptions,
      e.g. MailDeliveryError from the mail sender port)
"""


class DomainException(Exception):
    """
    Base exception for all domain layer errors.

    Usage:
        - Catch this in Application Layer to handle all domain errors
        - API Layer converts to appropriate HTTP status codes

    Examples:
        >>> raise DomainException("Business rule violation")
    """

    def __init__(self, message: str) -> None:
        """
        Initialize domain exception with error message.

        Args:
            message: Human-readable error description
        """
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        """String representation of the exception."""
        return f"{self.__class__.__name__}: {self.message}"

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return f"{self.__class__.__name__}(message={self.message!r})"


class ClientInputError(DomainException):
    """
    Raised when a submission is rejected before any delivery attempt.

    Subclasses set `code` (machine-readable, used in ErrorResponse) and
    `status_code` (HTTP status used by the global exception handler).
    Raising any of these guarantees the mail transport is never invoked.
    """

    code: str = "INVALID_SUBMISSION"
    status_code: int = 400


class MissingFileError(ClientInputError):
    """
    Raised when the multipart body carries no file in the `file` field.

    Examples:
        >>> raise MissingFileError("No file received")
    """

    code = "MISSING_FILE"
    status_code = 400


class TooManyFilesError(ClientInputError):
    """
    Raised when more than one file is submitted.

    Attributes:
        file_count: Number of file parts received
    """

    code = "TOO_MANY_FILES"
    status_code = 400

    def __init__(self, message: str, file_count: int | None = None) -> None:
        self.file_count = file_count
        super().__init__(message)


class UnsupportedTypeError(ClientInputError):
    """
    Raised when the uploaded file is not a PDF.

    Attributes:
        mime_type: MIME type declared by the client
        allowed_mime_type: The only accepted MIME type

    Examples:
        >>> raise UnsupportedTypeError(
        ...     "unsupported type: only PDF files are accepted",
        ...     mime_type="application/msword",
        ...     allowed_mime_type="application/pdf",
        ... )
    """

    code = "UNSUPPORTED_TYPE"
    status_code = 415

    def __init__(
        self,
        message: str,
        mime_type: str | None = None,
        allowed_mime_type: str | None = None,
    ) -> None:
        self.mime_type = mime_type
        self.allowed_mime_type = allowed_mime_type
        super().__init__(message)


class PayloadTooLargeError(ClientInputError):
    """
    Raised when the uploaded file exceeds the size limit (5 MiB by default).

    Attributes:
        file_size_bytes: Actual file size in bytes
        max_size_bytes: Maximum allowed size in bytes

    Examples:
        >>> raise PayloadTooLargeError(
        ...     "File is too large",
        ...     file_size_bytes=6 * 1024 * 1024,
        ...     max_size_bytes=5 * 1024 * 1024,
        ... )
    """

    code = "PAYLOAD_TOO_LARGE"
    status_code = 413

    def __init__(
        self,
        message: str,
        file_size_bytes: int | None = None,
        max_size_bytes: int | None = None,
    ) -> None:
        self.file_size_bytes = file_size_bytes
        self.max_size_bytes = max_size_bytes

        # Build detailed message with human-readable sizes
        if file_size_bytes and max_size_bytes:
            file_mb = file_size_bytes / (1024 * 1024)
            max_mb = max_size_bytes / (1024 * 1024)
            detailed_message = f"{message} (File: {file_mb:.2f}MB, Max: {max_mb:.2f}MB)"
            super().__init__(detailed_message)
        else:
            super().__init__(message)
