"""
Mailgun Mail Sender

Delivers the résumé email through the Mailgun HTTP API:

    POST {base_url}/v3/{domain}/messages
    Basic auth "api:<MAILGUN_API_KEY>", multipart body with the attachment

Successful responses look like {"id": "<...@domain>", "message": "Queued. Thank you."}.
"""

import logging
from typing import Optional

import httpx

from recruitment.application.ports.mail_sender import Attachment, MailDeliveryError
from recruitment.domain.submission.filename import single_line
from recruitment.infrastructure.mail.common import (
    ATTACHMENT_CONTENT_TYPE,
    provider_error_detail,
    read_attachment,
    require_settings,
)

logger = logging.getLogger(__name__)


class MailgunMailSender:
    """
    MailSenderProtocol implementation over the Mailgun messages API.

    Attributes:
        api_key: Mailgun private API key
        domain: Sending domain registered in Mailgun
        sender: From address (defaults to "Recruitment <recruitment@{domain}>")
        recipient: Recruiting mailbox
        base_url: API host (https://api.eu.mailgun.net for EU accounts)
        timeout_seconds: HTTP timeout for the whole request
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    name = "mailgun"

    def __init__(
        self,
        api_key: Optional[str],
        domain: Optional[str],
        sender: Optional[str],
        recipient: Optional[str],
        base_url: str = "https://api.mailgun.net",
        timeout_seconds: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.domain = domain
        self.sender = sender or (f"Recruitment <recruitment@{domain}>" if domain else None)
        self.recipient = recipient
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def send(
        self, attachment: Attachment, filename: str, subject: str, body: str
    ) -> str:
        """
        Send the email and return the Mailgun message id.

        Raises:
            MailDeliveryError: Not configured, network failure, or a non-2xx
                response (detail carries Mailgun's "message")
            TimeoutError: Mailgun did not answer within timeout_seconds
        """
        require_settings(
            self.name,
            MAILGUN_API_KEY=self.api_key,
            MAILGUN_DOMAIN=self.domain,
            TARGET_EMAIL=self.recipient,
        )

        data = {
            "from": self.sender,
            "to": self.recipient,
            "subject": single_line(subject),
            "text": body,
        }
        files = {
            "attachment": (
                single_line(filename), read_attachment(attachment), ATTACHMENT_CONTENT_TYPE
            )
        }

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    f"/v3/{self.domain}/messages",
                    auth=("api", self.api_key),
                    data=data,
                    files=files,
                )
        except httpx.TimeoutException as e:
            raise TimeoutError("Mailgun API did not respond in time") from e
        except httpx.HTTPError as e:
            raise MailDeliveryError(
                "Mailgun request failed", provider=self.name, detail=str(e) or type(e).__name__
            ) from e

        if response.is_error:
            raise MailDeliveryError(
                "Mailgun rejected the message",
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
                "Mailgun response did not include a message id",
                provider=self.name,
                status_code=response.status_code,
            )

        logger.info(f"Mailgun accepted message {message_id}")
        return message_id
