import logging
import re
from typing import Optional

import httpx

from ..config.settings import Settings
from .base import DeliveryResult, NotificationChannel

logger = logging.getLogger(__name__)

WHATSAPP_PREFIX = "whatsapp:"
DEFAULT_COUNTRY_CODE = "1"


def format_whatsapp_number(phone: str) -> str:
    """
    `whatsapp:+<digits>`. Formatting characters are dropped; a number without a
    leading `+` gets the default country code.

    >>> format_whatsapp_number("(555) 010-9999")
    'whatsapp:+15550109999'
    """
    raw = phone.strip()
    if raw.startswith(WHATSAPP_PREFIX):
        raw = raw[len(WHATSAPP_PREFIX):]
    digits = re.sub(r"\D", "", raw)
    if not raw.startswith("+"):
        digits = DEFAULT_COUNTRY_CODE + digits
    return f"{WHATSAPP_PREFIX}+{digits}"


class WhatsAppChannel(NotificationChannel):
    """WhatsApp through Twilio's Messages REST endpoint."""

    name = "whatsapp"
    label = "WhatsApp"

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None):
        self.account_sid = settings.TWILIO_ACCOUNT_SID
        self.auth_token = settings.TWILIO_AUTH_TOKEN
        self.from_number = settings.TWILIO_WHATSAPP_FROM
        self.api_base = settings.TWILIO_API_BASE.rstrip("/")
        self.timeout = settings.NOTIFICATION_TIMEOUT_SECONDS
        self.client = client

    @property
    def configured(self) -> bool:
        return bool(self.account_sid and self.auth_token and self.from_number)

    @property
    def messages_url(self) -> str:
        return f"{self.api_base}/Accounts/{self.account_sid}/Messages.json"

    async def send(self, to: str, subject: str, body: str, html: Optional[str] = None) -> DeliveryResult:
        if not self.configured:
            logger.warning("notifications.whatsapp.not_configured")
            return self.not_configured

        form = {"From": self.from_number, "To": format_whatsapp_number(to), "Body": body}
        try:
            if self.client is not None:
                response = await self._post(self.client, form)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await self._post(client, form)
        except httpx.HTTPError as exc:
            logger.warning("notifications.whatsapp.failed", extra={"error": str(exc)})
            return DeliveryResult.failed(str(exc) or "Failed to send WhatsApp message")

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if response.is_error:
            error = f"Twilio error {payload.get('code', response.status_code)}: {payload.get('message', response.reason_phrase)}"
            logger.warning("notifications.whatsapp.rejected", extra={"status_code": response.status_code, "error": error})
            return DeliveryResult.failed(error)

        logger.info("notifications.whatsapp.sent", extra={"message_id": payload.get("sid")})
        return DeliveryResult(success=True, message_id=payload.get("sid"))

    async def _post(self, client: httpx.AsyncClient, form: dict[str, str]) -> httpx.Response:
        return await client.post(self.messages_url, data=form, auth=(self.account_sid, self.auth_token))
