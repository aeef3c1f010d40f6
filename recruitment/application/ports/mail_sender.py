"""
Mail Sender Port

The single capability the dispatch use case needs from the outside world:
deliver one email with one attachment and report the provider message id.

Architecture Notes:
    - Protocol interface (structural typing for Dependency Injection)
    - Implemented in Infrastructure layer (SMTP relay, Mailgun API, Resend API)
    - Authentication, connection handling and any provider-specific retry
      policy belong to the implementation, never to the use case
    - Implementations report failures by raising MailDeliveryError; the use
      case translates it into a DeliveryFailed outcome
"""

from pathlib import Path
from typing import Optional, Protocol, Union

# Either the raw bytes or a path to a fully written file
Attachment = Union[bytes, Path]


class MailDeliveryError(Exception):
    """
    Raised by a mail sender when the message could not be delivered.

    Covers authentication failures, connection failures and provider-side
    rejections (e.g. unverified sender domain). `detail` carries the
    provider-supplied text when there is one.

    Attributes:
        message: Human-readable summary
        provider: Transport name ("smtp", "mailgun", "resend")
        detail: Provider-supplied detail text (optional)
        status_code: Provider HTTP status or SMTP reply code (optional)

    Examples:
        >>> raise MailDeliveryError(
        ...     "Provider rejected the message",
        ...     provider="resend",
        ...     detail="The example.com domain is not verified",
        ...     status_code=403,
        ... )
    """

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        detail: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        self.message = message
        self.provider = provider
        self.detail = detail
        self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        if self.detail and self.detail != self.message:
            return f"{self.message}: {self.detail}"
        return self.message


class MailSenderProtocol(Protocol):
    """
    Protocol for delivering a résumé email.

    Examples:
        >>> sender: MailSenderProtocol = create_mail_sender(settings)
        >>> message_id = await sender.send(
        ...     attachment=b"%PDF-1.7 ...",
        ...     filename="Data Engineer_20240115_resume.pdf",
        ...     subject="New résumé submission: Data Engineer",
        ...     body="...",
        ... )
    """

    name: str

    async def send(
        self, attachment: Attachment, filename: str, subject: str, body: str
    ) -> str:
        """
        Send one email to the configured recipient with one attachment.

        Args:
            attachment: File bytes, or Path to a fully written file
            filename: Name the attachment carries in the email
            subject: Email subject line
            body: Plain-text email body

        Returns:
            Provider message id

        Raises:
            MailDeliveryError: If the transport could not deliver the message
        """
        ...
