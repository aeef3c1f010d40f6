"""
Helpers shared by the mail transports.
"""

from pathlib import Path
from typing import Optional

import httpx

from recruitment.application.ports.mail_sender import Attachment, MailDeliveryError

ATTACHMENT_CONTENT_TYPE = "application/pdf"

# Longest provider error text copied into MailDeliveryError.detail
MAX_DETAIL_LENGTH = 500


def read_attachment(attachment: Attachment) -> bytes:
    """Return attachment bytes, reading the file when a path is given."""
    if isinstance(attachment, Path):
        return attachment.read_bytes()
    return bytes(attachment)


def require_settings(provider: str, **values: Optional[str]) -> None:
    """
    Raise MailDeliveryError naming every missing setting.

    Examples:
        >>> require_settings("smtp", SMTP_HOST="smtp.example.com", TARGET_EMAIL=None)
        Traceback (most recent call last):
        ...
        MailDeliveryError: smtp transport is not configured: missing TARGET_EMAIL
    """
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise MailDeliveryError(
            f"{provider} transport is not configured: missing {', '.join(missing)}",
            provider=provider,
        )


def provider_error_detail(response: httpx.Response) -> str:
    """
    Extract the provider's error text from an HTTP error response.

    Mailgun and Resend both return JSON with a "message" field; anything
    else falls back to the raw body, then to the status line.
    """
    detail: Optional[str] = None
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        for key in ("message", "error", "name"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                detail = value.strip()
                break

    if detail is None:
        detail = response.text.strip() or f"HTTP {response.status_code} {response.reason_phrase}"

    return detail[:MAX_DETAIL_LENGTH]
