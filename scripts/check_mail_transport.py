#!/usr/bin/env python3
"""
CLI tool for checking the configured mail transport.

Loads settings the same way the API does (.env + environment), reports which
mail variables are present (never their values), then sends one test
submission through the configured transport and prints the classified outcome.

Usage:
    python scripts/check_mail_transport.py
    python scripts/check_mail_transport.py --transport mailgun --timeout 10
    python scripts/check_mail_transport.py --dry-run

Exit codes:
    0 - Email sent (or --dry-run with a complete configuration)
    1 - Delivery failed (transport error or timeout)
    2 - Invalid settings
"""

import argparse
import asyncio
import dataclasses
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from recruitment.application.services.intake_validator import (
    IncomingFile,
    IntakeValidator,
)
from recruitment.application.services.resume_dispatch_use_case import (
    ResumeDispatchUseCase,
)
from recruitment.infrastructure.mail import create_mail_sender
from recruitment.shared.settings import MAIL_TRANSPORTS, AppSettings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Smallest well-formed PDF: one empty page
TEST_PDF = (
    b"%PDF-1.4\n"
    b"1 0 obj<</Type/Catalog/Pages 2 0 R>>endobj\n"
    b"2 0 obj<</Type/Pages/Kids[3 0 R]/Count 1>>endobj\n"
    b"3 0 obj<</Type/Page/Parent 2 0 R/MediaBox[0 0 612 792]>>endobj\n"
    b"trailer<</Root 1 0 R>>\n"
    b"%%EOF\n"
)

REQUIRED_VARIABLES = {
    "smtp": ("SMTP_HOST", "TARGET_EMAIL"),
    "mailgun": ("MAILGUN_API_KEY", "MAILGUN_DOMAIN", "TARGET_EMAIL"),
    "resend": ("RESEND_API_KEY", "MAIL_FROM", "TARGET_EMAIL"),
}


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Send a test résumé email through the configured transport",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check the transport selected by MAIL_TRANSPORT
  python scripts/check_mail_transport.py

  # Try another transport with a shorter budget
  python scripts/check_mail_transport.py --transport resend --timeout 10

  # Only report which variables are set
  python scripts/check_mail_transport.py --dry-run
        """,
    )

    parser.add_argument(
        "--transport",
        choices=MAIL_TRANSPORTS,
        default=None,
        help="Override MAIL_TRANSPORT",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Override MAIL_SEND_TIMEOUT_SECONDS",
    )
    parser.add_argument(
        "--job-title",
        default="Mail transport check",
        help="Job title used for the test submission",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report configuration only, do not send",
    )

    return parser.parse_args()


def report_configuration(settings: AppSettings) -> bool:
    """Log which variables are set; return True when the transport has what it needs."""
    configured = settings.configured_variables()
    logger.info(f"Mail transport: {settings.mail_transport}")
    for name, present in configured.items():
        logger.info(f"  {name}: {'set' if present else 'missing'}")

    required = list(REQUIRED_VARIABLES[settings.mail_transport])
    if settings.mail_transport == "smtp" and not configured["SMTP_USERNAME"]:
        required.append("MAIL_FROM")
    missing = [name for name in required if not configured[name]]
    if missing:
        logger.error(f"Missing variables for {settings.mail_transport}: {', '.join(missing)}")
        return False
    return True


async def main():
    args = parse_args()

    try:
        settings = AppSettings.from_env()
        overrides = {}
        if args.transport:
            overrides["mail_transport"] = args.transport
        if args.timeout is not None:
            overrides["send_timeout_seconds"] = args.timeout
        if overrides:
            settings = dataclasses.replace(settings, **overrides)
    except ValueError as e:
        logger.error(f"Invalid settings: {e}")
        sys.exit(2)

    complete = report_configuration(settings)
    if args.dry_run:
        sys.exit(0 if complete else 1)

    submission = IntakeValidator().validate(
        [IncomingFile("transport-check.pdf", "application/pdf", TEST_PDF)],
        job_title=args.job_title,
    )
    use_case = ResumeDispatchUseCase(
        mail_sender=create_mail_sender(settings),
        send_timeout_seconds=settings.send_timeout_seconds,
    )

    result = await use_case.execute(submission)
    outcome = result.outcome

    if outcome.is_sent:
        logger.info(f"Email sent: {result.filename} (message id: {outcome.message_id})")
        sys.exit(0)

    if outcome.timed_out:
        logger.error(f"Timed out: the mail server did not respond. {outcome.error_detail}")
    elif "authentication" in outcome.error_detail.lower():
        logger.error(f"Authentication failed: check the account and password. {outcome.error_detail}")
    elif "connect" in outcome.error_detail.lower():
        logger.error(f"Network problem: the mail server is unreachable. {outcome.error_detail}")
    else:
        logger.error(f"Delivery failed: {outcome.error_detail}")
    sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
