"""
Resend Mail Sender

Delivers the résumé email through the Resend HTTP API:

    POST {base_url}/emails
    Authorization: Bearer <RESEND_API_KEY>
    {"from", "to", "subject", "text", "attachments": [{"filename", "content"}]}

Attachment content is base64. Resend answers {"id": "..."} on success and
{"statusCode": 403, "name": "validation_error", "message": "..."} when, for
example, the sending domain has not been verified.
"""

import base64
import logging
from typing import Optional

import httpx

from recruitment.application.ports.mail_sender import Attachment, MailDeliveryError
from recruitment.domain.submission.filename import single_line
from recruitment.infrastructure.mail.common import (
    provider_error_detail,
    read_attachment,
    require_settings,
)

logger = logging.getLogger(__name__)


class ResendMailSender:
    """MailSenderProtocol implementation over the Resend emails API."""

    name = "resend"

    def __init__(
        self,
        api_key: Optional[str],
        sender: Optional[str],
        recipient: Optional[str],
        base_url: str = "https://api.resend.com",
        timeout_seconds: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.sender = sender
        self.recipient = recipient
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    def build_payload(
        self, content: bytes, filename: str, subject: str, body: str
    ) -> dict:
        return {
            "from": self.sender,
            "to": [self.recipient],
            "subject": single_line(subject),
            "text": body,
            "attachments": [
                {
                    "filename": single_line(filename),
                    "content": base64.b64encode(content).decode("ascii"),
                }
            ],
        }

    async def send(
        self, attachment: Attachment, filename: str, subject: str, body: str
    ) -> str:
        """
        Send the email and return the Resend email id.

        Raises:
            MailDeliveryError: Not configured, network failure, or a non-2xx
                response (detail carries Resend's "message")
            TimeoutError: Resend did not answer within timeout_seconds
        """
        require_settings(
            self.name,
            RESEND_API_KEY=self.api_key,
            MAIL_FROM=self.sender,
            TARGET_EMAIL=self.recipient,
        )

        payload = self.build_payload(read_attachment(attachment), filename, subject, body)

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    "/emails",
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    json=payload,
                )
        except httpx.TimeoutException as e:
            raise TimeoutError("Resend API did not respond in time") from e
        except httpx.HTTPError as e:
            raise MailDeliveryError(
                "Resend request failed", provider=self.name, detail=str(e) or type(e).__name__
            ) from e

        if response.is_error:
            raise MailDeliveryError(
                "Resend rejected the message",
                provider=self.name,
                detail=provider_error_detail(response),
                status_code=response.status_code,
            )

        try:
            message_id = response.json().get("id")
        except ValueError:
            message_id = None
        if not message_id:
            raise MailDeliveryError(
                "Resend response did not include a message id",
                provider=self.name,
                status_code=response.status_code,
            )

        logger.info(f"Resend accepted email {message_id}")
        return message_id
