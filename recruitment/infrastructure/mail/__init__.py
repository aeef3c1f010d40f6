"""
Mail Infrastructure Module

Transports implementing MailSenderProtocol. One is selected per deployment
through MAIL_TRANSPORT.

Exports:
    - SmtpMailSender: SMTP relay (smtplib)
    - MailgunMailSender: Mailgun HTTP API (httpx)
    - ResendMailSender: Resend HTTP API (httpx)
    - create_mail_sender: factory from AppSettings
"""

from .factory import create_mail_sender
from .mailgun_sender import MailgunMailSender
from .resend_sender import ResendMailSender
from .smtp_sender import SmtpMailSender

__all__ = [
    "SmtpMailSender",
    "MailgunMailSender",
    "ResendMailSender",
    "create_mail_sender",
]
