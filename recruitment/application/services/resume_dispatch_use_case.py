"""
Résumé Dispatch Use Case

Responsibility:
    Forwards a validated Submission to the recruiting mailbox and classifies
    the outcome of that single attempt.

Process Flow:
    Submission (from IntakeValidator)
    → derive destination filename (before any transport call)
    → build subject/body
    → stage attachment (bytes in memory, or a scoped temporary file)
    → MailSenderProtocol.send() once, bounded by send_timeout_seconds
    → DeliverySent | DeliveryFailed(reason="transport" | "timeout")
    → DispatchResult(filename, outcome) to API Layer

Architecture Notes:
    - Part of Application Layer (Services)
    - Depends only on ports (MailSenderProtocol, UploadStagingProtocol)
    - No retries: at most one send attempt per submission
    - MailDeliveryError and timeouts are translated into outcomes here;
      any other exception propagates to the API global handler
"""

import asyncio
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from recruitment.application.ports.file_storage import UploadStagingProtocol
from recruitment.application.ports.mail_sender import (
    Attachment,
    MailDeliveryError,
    MailSenderProtocol,
)
from recruitment.domain.submission.entities import Submission
from recruitment.domain.submission.filename import derive_filename, single_line
from recruitment.domain.submission.value_objects import (
    DeliveryFailed,
    DeliveryOutcome,
    DeliverySent,
    DispatchResult,
)

logger = logging.getLogger(__name__)


def build_notification(submission: Submission, filename: str) -> tuple[str, str]:
    """
    Build subject and plain-text body of the notification email.

    The subject is always a single line.

    Returns:
        (subject, body)
    """
    subject = f"New résumé submission: {single_line(submission.job_title)}"
    body = (
        f"A new résumé has been submitted for the position: {submission.job_title}\n"
        f"Attachment: {filename}\n"
        f"Original filename: {submission.file.original_name}\n"
        f"Size: {submission.file.size_mb:.2f} MB\n"
        f"Received at: {submission.submitted_at.isoformat()}\n"
    )
    return subject, body


class ResumeDispatchUseCase:
    """
    Use case for delivering one résumé submission by email.

    Attributes:
        mail_sender: Transport implementing MailSenderProtocol (injected)
        send_timeout_seconds: Upper bound on the wait for the transport call
        file_storage: Optional staging storage; when set, the attachment is
            written to disk for the duration of the send and passed as a path

    Examples:
        >>> use_case = ResumeDispatchUseCase(mail_sender=sender, send_timeout_seconds=30)
        >>> result = await use_case.execute(submission)
        >>> result.filename
        'Data Engineer_20240115_resume.pdf'
        >>> result.email_sent
        True
    """

    def __init__(
        self,
        mail_sender: MailSenderProtocol,
        send_timeout_seconds: float = 30.0,
        file_storage: Optional[UploadStagingProtocol] = None,
    ) -> None:
        if send_timeout_seconds <= 0:
            raise ValueError(
                f"send_timeout_seconds must be positive, got {send_timeout_seconds}"
            )
        self.mail_sender = mail_sender
        self.send_timeout_seconds = send_timeout_seconds
        self.file_storage = file_storage

    async def execute(self, submission: Submission) -> DispatchResult:
        """
        Derive the filename and attempt delivery exactly once.

        Args:
            submission: Validated submission

        Returns:
            DispatchResult with the derived filename and the delivery outcome.
            The filename is the one used as attachment name.

        Raises:
            Exception: Anything other than MailDeliveryError/timeout raised
                while staging or sending (handled by the API global handler)
        """
        filename = derive_filename(
            submission.job_title, submission.file.original_name, submission.submitted_at
        )
        subject, body = build_notification(submission, filename)

        with self._staged_attachment(submission, filename) as attachment:
            outcome = await self._send_once(attachment, filename, subject, body)

        return DispatchResult(filename=filename, outcome=outcome)

    @contextmanager
    def _staged_attachment(
        self, submission: Submission, filename: str
    ) -> Iterator[Attachment]:
        if self.file_storage is None:
            yield submission.file.content
            return

        # File is fully written before the transport call and removed on every exit path
        with self.file_storage.staged_upload(submission.file.content, filename) as path:
            yield path

    async def _send_once(
        self, attachment: Attachment, filename: str, subject: str, body: str
    ) -> DeliveryOutcome:
        transport = getattr(self.mail_sender, "name", type(self.mail_sender).__name__)
        logger.info(
            f"Sending résumé email: {filename} via {transport} "
            f"(timeout {self.send_timeout_seconds:g}s)"
        )

        try:
            message_id = await asyncio.wait_for(
                self.mail_sender.send(
                    attachment=attachment, filename=filename, subject=subject, body=body
                ),
                timeout=self.send_timeout_seconds,
            )
        except (asyncio.TimeoutError, TimeoutError):
            detail = f"Email delivery timed out after {self.send_timeout_seconds:g}s"
            logger.warning(f"{detail}: {filename} via {transport}")
            return DeliveryFailed(error_detail=detail, reason="timeout")
        except MailDeliveryError as e:
            detail = str(e) or "Email delivery failed"
            logger.warning(f"Email delivery failed: {filename} via {transport} - {detail}")
            return DeliveryFailed(error_detail=detail, reason="transport")

        logger.info(f"Email sent: {filename} via {transport} (message id: {message_id})")
        return DeliverySent(message_id=message_id)
