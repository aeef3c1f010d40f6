"""
Infrastructure Layer - External Dependencies

Implements the Application Layer ports against real systems.

Modules:
    - mail: SMTP relay and transactional-email API transports (MailSenderProtocol)
    - file_storage: temporary upload staging (UploadStagingProtocol)

Usage:
    >>> from recruitment.infrastructure import create_mail_sender, FileStorageService
    >>> sender = create_mail_sender(settings)
"""

from .file_storage import FileStorageService
from .mail import (
    MailgunMailSender,
    ResendMailSender,
    SmtpMailSender,
    create_mail_sender,
)

__all__ = [
    "FileStorageService",
    "SmtpMailSender",
    "MailgunMailSender",
    "ResendMailSender",
    "create_mail_sender",
]
