from pydantic_settings import BaseSettings
from pydantic import ConfigDict, field_validator, model_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import blank_to_none, normalize_choice, whatsapp_sender

_DEV_JWT_SECRET = "icms-dev-secret-change-me"


class Settings(BaseSettings):
    """
    Application settings loaded from environment.

    Every collaborator the service talks to (database, email provider, WhatsApp
    provider) is configured here. Provider credentials are optional: when they are
    missing the matching channel reports itself as not configured instead of failing
    at import time.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Database configuration
    # A full DATABASE_URL wins over the POSTGRES_* parts.
    DATABASE_URL: str | None = None
    POSTGRES_DRIVER: str = "asyncpg"
    POSTGRES_USERNAME: str = "icms"
    POSTGRES_PASSWORD: str = "icms"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "icms"

    # Test database configuration
    TEST_POSTGRES_DB: str | None = None
    TESTING: bool = False

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False
    DB_TIMEOUT_SECONDS: float = 10.0

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/icms")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # Queue-backed logging: handlers run on a listener thread
    LOG_USE_QUEUE: bool = False
    LOG_QUEUE_MAX_SIZE: int = 0  # 0 = unbounded
    LOG_QUEUE_BLOCKING: bool = False
    LOG_QUEUE_DROP_WARNING_THRESHOLD: int = 100

    # Auth
    JWT_SECRET: str = _DEV_JWT_SECRET
    JWT_ALGORITHM: str = "HS256"
    AUTH_TOKEN_TTL_SECONDS: int = 24 * 60 * 60
    FINANCE_USERNAME: str | None = None
    FINANCE_PASSWORD_HASH: str | None = None
    FINANCE_EMAIL: str | None = None

    # Email (Resend)
    RESEND_API_KEY: str | None = None
    EMAIL_FROM: str = "ICMS <notifications@adminofficeqa.com>"

    # WhatsApp (Twilio)
    TWILIO_ACCOUNT_SID: str | None = None
    TWILIO_AUTH_TOKEN: str | None = None
    TWILIO_WHATSAPP_FROM: str = "whatsapp:+14155238886"
    TWILIO_API_BASE: str = "https://api.twilio.com/2010-04-01"

    NOTIFICATION_TIMEOUT_SECONDS: float = 15.0

    # --- Derived settings ---
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """
        Return the database URL for the current environment.

        - An explicit DATABASE_URL is used as-is.
        - With TESTING=True and TEST_POSTGRES_DB set, the test database name replaces POSTGRES_DB.
        - Otherwise the URL is composed from the POSTGRES_* parts.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL

        database = self.POSTGRES_DB
        if self.TESTING and self.TEST_POSTGRES_DB:
            database = self.TEST_POSTGRES_DB

        return (
            f"postgresql+{self.POSTGRES_DRIVER}://"
            f"{self.POSTGRES_USERNAME}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/"
            f"{database}"
        )

    @property
    def is_development(self) -> bool:
        return self.ENV == "development"

    @property
    def email_configured(self) -> bool:
        return bool(self.RESEND_API_KEY)

    @property
    def whatsapp_configured(self) -> bool:
        return bool(self.TWILIO_ACCOUNT_SID and self.TWILIO_AUTH_TOKEN)

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize LOG_LEVEL to uppercase before Literal validation runs,
        so `LOG_LEVEL=debug` in the environment is accepted.
        """
        return normalize_choice(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        return normalize_choice(v, upper=False)

    @field_validator(
        "DATABASE_URL",
        "RESEND_API_KEY",
        "TWILIO_ACCOUNT_SID",
        "TWILIO_AUTH_TOKEN",
        "FINANCE_USERNAME",
        "FINANCE_PASSWORD_HASH",
        mode="before",
    )
    def unset_when_blank(cls, v: str | None) -> str | None:
        return blank_to_none(v)

    @field_validator("TWILIO_WHATSAPP_FROM", mode="before")
    def whatsapp_scheme(cls, v: str | None) -> str | None:
        return whatsapp_sender(v)

    @model_validator(mode="after")
    def require_real_secret_in_production(self) -> "Settings":
        if self.ENV == "production" and self.JWT_SECRET == _DEV_JWT_SECRET:
            raise ValueError("JWT_SECRET must be set in production")
        return self

    # --- ConfigDict settings ---
    model_config = ConfigDict(
        # .env next to the package root (src/icms/.env)
        env_file=str(Path(__file__).parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
