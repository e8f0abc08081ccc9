import asyncio
import logging
from typing import Optional

import resend
from resend.exceptions import ResendError

from ..config.settings import Settings
from .base import DeliveryResult, NotificationChannel

logger = logging.getLogger(__name__)


def configure_resend(settings: Settings) -> None:
    """Install the Resend API key on the SDK. Called once at startup."""
    if settings.email_configured:
        resend.api_key = settings.RESEND_API_KEY


class EmailChannel(NotificationChannel):
    """
    Email through Resend. The SDK is blocking, so calls run in a worker thread.
    The SDK key is process-wide and set by `configure_resend`, never per send.
    """

    name = "email"

    def __init__(self, settings: Settings):
        self.api_key = settings.RESEND_API_KEY
        self.from_address = settings.EMAIL_FROM

    @property
    def configured(self) -> bool:
        return bool(self.api_key and self.from_address)

    async def send(self, to: str, subject: str, body: str, html: Optional[str] = None) -> DeliveryResult:
        if not self.configured:
            logger.warning("notifications.email.not_configured")
            return self.not_configured

        params = {
            "from": self.from_address,
            "to": [to],
            "subject": subject,
            "html": html or body,
            "text": body,
        }
        try:
            response = await asyncio.to_thread(resend.Emails.send, params)
        except (ResendError, OSError) as exc:
            logger.warning("notifications.email.failed", extra={"error": str(exc)})
            return DeliveryResult.failed(str(exc) or "Failed to send email")

        message_id = response.get("id") if isinstance(response, dict) else getattr(response, "id", None)
        logger.info("notifications.email.sent", extra={"message_id": message_id})
        return DeliveryResult(success=True, message_id=message_id)
