"""
SMTP Mail Sender

Delivers the résumé email through an SMTP relay (Outlook 365, 163.com,
any provider with SMTP submission).

Connection policy:
    - Port 465: implicit TLS (SMTP_SSL)
    - Any other port: plain connection upgraded with STARTTLS
    - LOGIN only when both username and password are configured

smtplib is blocking, so the whole exchange runs in the default executor.
The send budget is an absolute deadline for the session: before each step
(connect, STARTTLS, LOGIN, message transfer) the socket timeout is re-armed
with what is left of it. No step starts after the deadline or after the
awaiting task was cancelled, so a send the caller reported as timed out is
never started afterwards.
"""

import asyncio
import logging
import smtplib
import ssl
import threading
import time
from email.message import EmailMessage
from email.utils import make_msgid
from functools import partial
from typing import Optional

from recruitment.application.ports.mail_sender import Attachment, MailDeliveryError
from recruitment.domain.submission.filename import single_line
from recruitment.infrastructure.mail.common import (
    ATTACHMENT_CONTENT_TYPE,
    read_attachment,
    require_settings,
)

logger = logging.getLogger(__name__)

IMPLICIT_TLS_PORT = 465


def _smtp_reply_text(error: smtplib.SMTPResponseException) -> str:
    reply = error.smtp_error
    if isinstance(reply, bytes):
        reply = reply.decode("utf-8", errors="replace")
    return f"{error.smtp_code} {reply}".strip()


class SmtpMailSender:
    """
    MailSenderProtocol implementation over smtplib.

    Attributes:
        host, port: SMTP relay address
        username, password: Credentials (optional for open relays)
        sender: From address (defaults to username)
        recipient: Recruiting mailbox
        timeout_seconds: Deadline for the whole SMTP session

    Examples:
        >>> sender = SmtpMailSender(
        ...     host="smtp.163.com", port=465,
        ...     username="jobs@163.com", password="app-password",
        ...     sender=None, recipient="hr@example.com",
        ... )
        >>> message_id = await sender.send(pdf_bytes, "cv.pdf", "Subject", "Body")
    """

    name = "smtp"

    def __init__(
        self,
        host: Optional[str],
        port: int,
        username: Optional[str],
        password: Optional[str],
        sender: Optional[str],
        recipient: Optional[str],
        timeout_seconds: float = 30.0,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender or username
        self.recipient = recipient
        self.timeout_seconds = timeout_seconds

    async def send(
        self, attachment: Attachment, filename: str, subject: str, body: str
    ) -> str:
        """
        Send the email and return its Message-ID.

        Raises:
            MailDeliveryError: Not configured, message could not be built,
                authentication failure, refused sender/recipient, connection failure
            TimeoutError: The SMTP session did not finish within timeout_seconds
        """
        require_settings(
            self.name,
            SMTP_HOST=self.host,
            MAIL_FROM=self.sender,
            TARGET_EMAIL=self.recipient,
        )

        try:
            message = self.build_message(
                read_attachment(attachment), filename, subject, body
            )
        except (ValueError, TypeError) as e:
            raise MailDeliveryError(
                "Could not build the email message",
                provider=self.name,
                detail=str(e) or type(e).__name__,
            ) from e

        session = _SessionBudget(self.timeout_seconds)
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(
                None, partial(self._send_blocking, message, session)
            )
        except asyncio.CancelledError:
            # The worker thread checks this before every SMTP step
            session.cancel()
            raise

    def build_message(
        self, content: bytes, filename: str, subject: str, body: str
    ) -> EmailMessage:
        """Build the MIME message with the PDF attached under `filename`."""
        maintype, subtype = ATTACHMENT_CONTENT_TYPE.split("/")

        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = self.recipient
        message["Subject"] = single_line(subject)
        message["Message-ID"] = make_msgid(domain=self._message_id_domain())
        message.set_content(body)
        message.add_attachment(
            content, maintype=maintype, subtype=subtype, filename=single_line(filename)
        )
        return message

    def _message_id_domain(self) -> Optional[str]:
        if self.sender and "@" in self.sender:
            return self.sender.rsplit("@", 1)[1].strip(" >")
        return None

    def _open_connection(self, session: "_SessionBudget") -> smtplib.SMTP:
        context = ssl.create_default_context()
        timeout = session.remaining()
        if self.port == IMPLICIT_TLS_PORT:
            return smtplib.SMTP_SSL(self.host, self.port, timeout=timeout, context=context)
        return smtplib.SMTP(self.host, self.port, timeout=timeout)

    def _send_blocking(self, message: EmailMessage, session: "_SessionBudget") -> str:
        logger.info(f"Connecting to SMTP server {self.host}:{self.port}...")
        try:
            with self._open_connection(session) as server:
                if self.port != IMPLICIT_TLS_PORT:
                    session.arm(server)
                    server.starttls(context=ssl.create_default_context())
                if self.username and self.password:
                    session.arm(server)
                    server.login(self.username, self.password)
                session.arm(server)
                server.send_message(message)

        except smtplib.SMTPAuthenticationError as e:
            raise MailDeliveryError(
                "SMTP authentication failed, check the account and password",
                provider=self.name,
                detail=_smtp_reply_text(e),
                status_code=e.smtp_code,
            ) from e
        except smtplib.SMTPRecipientsRefused as e:
            refused = ", ".join(e.recipients) or str(self.recipient)
            raise MailDeliveryError(
                f"SMTP server refused recipient {refused}", provider=self.name
            ) from e
        except smtplib.SMTPSenderRefused as e:
            raise MailDeliveryError(
                f"SMTP server refused sender {self.sender}",
                provider=self.name,
                detail=_smtp_reply_text(e),
                status_code=e.smtp_code,
            ) from e
        except smtplib.SMTPResponseException as e:
            raise MailDeliveryError(
                "SMTP server rejected the message",
                provider=self.name,
                detail=_smtp_reply_text(e),
                status_code=e.smtp_code,
            ) from e
        except TimeoutError as e:
            raise TimeoutError(
                f"SMTP server {self.host}:{self.port} did not respond in time"
            ) from e
        except smtplib.SMTPException as e:
            raise MailDeliveryError(
                "SMTP error", provider=self.name, detail=str(e) or type(e).__name__
            ) from e
        except OSError as e:
            raise MailDeliveryError(
                f"Could not connect to SMTP server {self.host}:{self.port}",
                provider=self.name,
                detail=str(e) or type(e).__name__,
            ) from e

        message_id = message["Message-ID"]
        logger.info(f"Email sent successfully to {self.recipient}: {message_id}")
        return message_id


class _SessionBudget:
    """
    Absolute deadline for one SMTP session, shared with the worker thread.

    Every step gets only what is left of the budget as its socket timeout,
    and no step starts once the deadline has passed or the awaiting task
    was cancelled.
    """

    def __init__(self, timeout_seconds: float) -> None:
        self.deadline = time.monotonic() + timeout_seconds
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        self._cancelled.set()

    def remaining(self) -> float:
        """Seconds left; raises TimeoutError when none are left or the send was abandoned."""
        if self._cancelled.is_set():
            raise TimeoutError("SMTP send abandoned by the caller")
        left = self.deadline - time.monotonic()
        if left <= 0:
            raise TimeoutError("SMTP session exceeded its time budget")
        return left

    def arm(self, server: smtplib.SMTP) -> None:
        """Re-arm the socket timeout with the remaining budget before the next step."""
        left = self.remaining()
        if server.sock is not None:
            server.sock.settimeout(left)
