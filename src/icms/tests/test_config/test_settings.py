import pytest
from pydantic import ValidationError

from icms.config.settings import Settings


def test_choices_accept_any_casing():
    settings = Settings(LOG_LEVEL="debug", LOG_FORMAT="TEXT")

    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.LOG_FORMAT == "text"


def test_blank_credentials_mean_not_configured():
    settings = Settings(RESEND_API_KEY="   ", TWILIO_ACCOUNT_SID="", TWILIO_AUTH_TOKEN="token")

    assert settings.RESEND_API_KEY is None
    assert not settings.email_configured
    assert not settings.whatsapp_configured


def test_whatsapp_sender_gets_scheme():
    assert Settings(TWILIO_WHATSAPP_FROM="+14155238886").TWILIO_WHATSAPP_FROM == "whatsapp:+14155238886"
    assert Settings(TWILIO_WHATSAPP_FROM="whatsapp:+1555").TWILIO_WHATSAPP_FROM == "whatsapp:+1555"


def test_database_url_composition():
    composed = Settings(DATABASE_URL=None, POSTGRES_HOST="db", POSTGRES_PORT=5432, TESTING=True, TEST_POSTGRES_DB="icms_test")
    explicit = Settings(DATABASE_URL="sqlite+aiosqlite:///:memory:")

    assert composed.SQLALCHEMY_DATABASE_URI.endswith("@db:5432/icms_test")
    assert explicit.SQLALCHEMY_DATABASE_URI == "sqlite+aiosqlite:///:memory:"


def test_production_refuses_dev_secret():
    with pytest.raises(ValidationError):
        Settings(ENV="production")

    assert Settings(ENV="production", JWT_SECRET="a-real-secret").ENV == "production"
