"""
Mail Sender Factory

Selects the one transport configured for this deployment (MAIL_TRANSPORT).
"""

import logging

from recruitment.application.ports.mail_sender import MailSenderProtocol
from recruitment.infrastructure.mail.mailgun_sender import MailgunMailSender
from recruitment.infrastructure.mail.resend_sender import ResendMailSender
from recruitment.infrastructure.mail.smtp_sender import SmtpMailSender
from recruitment.shared.settings import AppSettings

logger = logging.getLogger(__name__)


def create_mail_sender(settings: AppSettings) -> MailSenderProtocol:
    """
    Build the mail sender selected by settings.mail_transport.

    Missing credentials are not an error here: the sender reports them as
    MailDeliveryError when a send is attempted, so uploads still get the
    partial-success response.

    Args:
        settings: Application settings

    Returns:
        SmtpMailSender, MailgunMailSender or ResendMailSender

    Raises:
        ValueError: If settings.mail_transport is not a known transport
    """
    transport = settings.mail_transport
    timeout = settings.send_timeout_seconds

    if transport == "smtp":
        sender: MailSenderProtocol = SmtpMailSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username,
            password=settings.smtp_password,
            sender=settings.mail_from,
            recipient=settings.target_email,
            timeout_seconds=timeout,
        )
    elif transport == "mailgun":
        sender = MailgunMailSender(
            api_key=settings.mailgun_api_key,
            domain=settings.mailgun_domain,
            sender=settings.mail_from,
            recipient=settings.target_email,
            base_url=settings.mailgun_base_url,
            timeout_seconds=timeout,
        )
    elif transport == "resend":
        sender = ResendMailSender(
            api_key=settings.resend_api_key,
            sender=settings.mail_from,
            recipient=settings.target_email,
            base_url=settings.resend_base_url,
            timeout_seconds=timeout,
        )
    else:
        raise ValueError(f"Unknown mail transport: {transport!r}")

    logger.info(f"Mail transport selected: {transport}")
    return sender
