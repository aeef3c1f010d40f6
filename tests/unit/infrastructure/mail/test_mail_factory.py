"""
Tests for create_mail_sender.
"""

import pytest

from recruitment.infrastructure.mail import (
    MailgunMailSender,
    ResendMailSender,
    SmtpMailSender,
    create_mail_sender,
)
from recruitment.shared.settings import AppSettings


def test_factory_builds_smtp_sender():
    settings = AppSettings.for_testing(
        smtp_host="smtp.163.com",
        smtp_username="jobs@163.com",
        smtp_password="secret",
        target_email="hr@example.com",
        send_timeout_seconds=12,
    )

    sender = create_mail_sender(settings)

    assert isinstance(sender, SmtpMailSender)
    assert sender.host == "smtp.163.com"
    assert sender.port == 465
    assert sender.sender == "jobs@163.com"
    assert sender.timeout_seconds == 12


def test_factory_builds_mailgun_sender():
    settings = AppSettings.for_testing(
        mail_transport="mailgun",
        mailgun_api_key="key-123",
        mailgun_domain="mg.example.com",
        mailgun_base_url="https://api.eu.mailgun.net",
    )

    sender = create_mail_sender(settings)

    assert isinstance(sender, MailgunMailSender)
    assert sender.domain == "mg.example.com"
    assert sender.base_url == "https://api.eu.mailgun.net"
    assert sender.sender == "Recruitment <recruitment@mg.example.com>"


def test_factory_builds_resend_sender():
    settings = AppSettings.for_testing(
        mail_transport="resend", resend_api_key="re_123", mail_from="jobs@example.com"
    )

    sender = create_mail_sender(settings)

    assert isinstance(sender, ResendMailSender)
    assert sender.sender == "jobs@example.com"


def test_factory_does_not_require_credentials():
    """Missing credentials surface at send time, not at startup."""
    sender = create_mail_sender(AppSettings.for_testing(mail_transport="resend"))

    assert sender.api_key is None


def test_factory_rejects_unknown_transport():
    settings = AppSettings.for_testing()
    # Bypass __post_init__ validation to reach the factory branch
    object.__setattr__(settings, "mail_transport", "carrier-pigeon")

    with pytest.raises(ValueError, match="carrier-pigeon"):
        create_mail_sender(settings)
