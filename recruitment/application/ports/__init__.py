"""
Application Layer Ports (Interfaces)

Contains Protocol definitions for dependency inversion.
Infrastructure Layer implements these protocols.
"""

from recruitment.application.ports.file_storage import UploadStagingProtocol
from recruitment.application.ports.mail_sender import (
    Attachment,
    MailDeliveryError,
    MailSenderProtocol,
)

__all__ = [
    "Attachment",
    "MailDeliveryError",
    "MailSenderProtocol",
    "UploadStagingProtocol",
]
