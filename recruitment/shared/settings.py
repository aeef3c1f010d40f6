"""
Application Settings

Immutable configuration built once at startup and injected into the app.

Responsibility:
    - Load .env file (python-dotenv) and read environment variables
    - Validate and convert values (ints, floats, enumerations)
    - Expose a single frozen AppSettings object

Architecture Notes:
    - Read only by create_app() and the CLI scripts
    - Application and Infrastructure layers receive AppSettings (or values
      taken from it) through their constructors; nothing inside the upload
      pipeline reads os.environ directly
"""

import os
from dataclasses import dataclass, replace
from typing import Any, Final, Mapping, Optional

from dotenv import load_dotenv

# ============================================================================
# DEFAULTS
# ============================================================================

DEFAULT_APP_ENV: Final[str] = "development"
DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_MAIL_TRANSPORT: Final[str] = "smtp"
DEFAULT_SEND_TIMEOUT_SECONDS: Final[float] = 30.0
DEFAULT_SMTP_PORT: Final[int] = 465
DEFAULT_MAILGUN_BASE_URL: Final[str] = "https://api.mailgun.net"
DEFAULT_RESEND_BASE_URL: Final[str] = "https://api.resend.com"
DEFAULT_UPLOAD_STORAGE: Final[str] = "memory"
DEFAULT_UPLOAD_TEMP_DIR: Final[str] = "/tmp/recruitment/uploads"
DEFAULT_UPLOAD_RETENTION_HOURS: Final[int] = 24

MAIL_TRANSPORTS: Final[tuple[str, ...]] = ("smtp", "mailgun", "resend")
UPLOAD_STORAGE_MODES: Final[tuple[str, ...]] = ("memory", "disk")


@dataclass(frozen=True)
class AppSettings:
    """
    Complete service configuration.

    Attributes:
        app_env: "development", "production", ... ("production" hides error details)
        log_level: Root logging level name
        cors_allow_origins: Allowed CORS origins (empty tuple = all)
        mail_transport: "smtp", "mailgun" or "resend"
        send_timeout_seconds: Upper bound on the wait for one transport call
        target_email: Recruiting mailbox receiving submissions
        mail_from: Sender address (falls back to smtp_username for SMTP)
        smtp_*: SMTP relay settings
        mailgun_*: Mailgun API settings
        resend_*: Resend API settings
        upload_storage: "memory" (bytes passed to the transport) or "disk"
            (file staged in upload_temp_dir for the duration of the send)
        upload_temp_dir: Base directory for staged uploads
        upload_retention_hours: Age after which leftover staged uploads are swept

    Usage:
        settings = AppSettings.from_env()
        app = create_app(settings)
    """

    app_env: str = DEFAULT_APP_ENV
    log_level: str = DEFAULT_LOG_LEVEL
    cors_allow_origins: tuple[str, ...] = ()

    mail_transport: str = DEFAULT_MAIL_TRANSPORT
    send_timeout_seconds: float = DEFAULT_SEND_TIMEOUT_SECONDS
    target_email: Optional[str] = None
    mail_from: Optional[str] = None

    smtp_host: Optional[str] = None
    smtp_port: int = DEFAULT_SMTP_PORT
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None

    mailgun_api_key: Optional[str] = None
    mailgun_domain: Optional[str] = None
    mailgun_base_url: str = DEFAULT_MAILGUN_BASE_URL

    resend_api_key: Optional[str] = None
    resend_base_url: str = DEFAULT_RESEND_BASE_URL

    upload_storage: str = DEFAULT_UPLOAD_STORAGE
    upload_temp_dir: str = DEFAULT_UPLOAD_TEMP_DIR
    upload_retention_hours: int = DEFAULT_UPLOAD_RETENTION_HOURS

    def __post_init__(self) -> None:
        """Validate enumerations and numeric ranges."""
        if self.mail_transport not in MAIL_TRANSPORTS:
            raise ValueError(
                f"MAIL_TRANSPORT must be one of {', '.join(MAIL_TRANSPORTS)}, "
                f"got {self.mail_transport!r}"
            )
        if self.upload_storage not in UPLOAD_STORAGE_MODES:
            raise ValueError(
                f"UPLOAD_STORAGE must be one of {', '.join(UPLOAD_STORAGE_MODES)}, "
                f"got {self.upload_storage!r}"
            )
        if self.send_timeout_seconds <= 0:
            raise ValueError(
                f"MAIL_SEND_TIMEOUT_SECONDS must be positive, got {self.send_timeout_seconds}"
            )
        if self.upload_retention_hours <= 0:
            raise ValueError(
                f"UPLOAD_RETENTION_HOURS must be positive, got {self.upload_retention_hours}"
            )

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, load_dotenv_file: bool = True
    ) -> "AppSettings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read instead of os.environ (tests)
            load_dotenv_file: Load .env into os.environ first (ignored when
                environ is given)

        Returns:
            AppSettings

        Raises:
            ValueError: If a numeric variable cannot be parsed or an
                enumeration has an unknown value

        Examples:
            >>> settings = AppSettings.from_env({"MAIL_TRANSPORT": "resend"})
            >>> settings.mail_transport
            'resend'
        """
        if environ is None:
            if load_dotenv_file:
                load_dotenv()
            environ = os.environ

        def get(name: str) -> Optional[str]:
            value = environ.get(name)
            if value is None:
                return None
            value = value.strip()
            return value or None

        origins = get("CORS_ALLOW_ORIGINS") or ""

        return cls(
            app_env=get("APP_ENV") or DEFAULT_APP_ENV,
            log_level=(get("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
            cors_allow_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
            mail_transport=(get("MAIL_TRANSPORT") or DEFAULT_MAIL_TRANSPORT).lower(),
            send_timeout_seconds=_parse_number(
                "MAIL_SEND_TIMEOUT_SECONDS",
                get("MAIL_SEND_TIMEOUT_SECONDS"),
                DEFAULT_SEND_TIMEOUT_SECONDS,
                float,
            ),
            target_email=get("TARGET_EMAIL"),
            mail_from=get("MAIL_FROM"),
            smtp_host=get("SMTP_HOST"),
            smtp_port=_parse_number("SMTP_PORT", get("SMTP_PORT"), DEFAULT_SMTP_PORT, int),
            smtp_username=get("SMTP_USERNAME"),
            smtp_password=get("SMTP_PASSWORD"),
            mailgun_api_key=get("MAILGUN_API_KEY"),
            mailgun_domain=get("MAILGUN_DOMAIN"),
            mailgun_base_url=get("MAILGUN_BASE_URL") or DEFAULT_MAILGUN_BASE_URL,
            resend_api_key=get("RESEND_API_KEY"),
            resend_base_url=get("RESEND_BASE_URL") or DEFAULT_RESEND_BASE_URL,
            upload_storage=(get("UPLOAD_STORAGE") or DEFAULT_UPLOAD_STORAGE).lower(),
            upload_temp_dir=get("UPLOAD_TEMP_DIR") or DEFAULT_UPLOAD_TEMP_DIR,
            upload_retention_hours=_parse_number(
                "UPLOAD_RETENTION_HOURS",
                get("UPLOAD_RETENTION_HOURS"),
                DEFAULT_UPLOAD_RETENTION_HOURS,
                int,
            ),
        )

    @classmethod
    def for_testing(cls, **overrides: Any) -> "AppSettings":
        """Default settings with selected fields overridden."""
        return replace(cls(), **overrides)

    def configured_variables(self) -> dict[str, bool]:
        """
        Report which mail settings are present, without exposing their values.

        Used by the startup log and scripts/check_mail_transport.py.
        """
        return {
            "TARGET_EMAIL": bool(self.target_email),
            "MAIL_FROM": bool(self.mail_from),
            "SMTP_HOST": bool(self.smtp_host),
            "SMTP_USERNAME": bool(self.smtp_username),
            "SMTP_PASSWORD": bool(self.smtp_password),
            "MAILGUN_API_KEY": bool(self.mailgun_api_key),
            "MAILGUN_DOMAIN": bool(self.mailgun_domain),
            "RESEND_API_KEY": bool(self.resend_api_key),
        }


def _parse_number(name: str, raw: Optional[str], default, converter):
    if raw is None:
        return default
    try:
        return converter(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e
