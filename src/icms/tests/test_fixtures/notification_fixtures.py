"""In-memory notification channels for service and API tests."""

import asyncio
from typing import Optional

from icms.notifications import DeliveryResult, NotificationChannel


class FakeChannel(NotificationChannel):
    """
    Records every send. `fail_with` makes each send fail with that error and
    `delay` holds each send open, to exercise the per-channel timeout.
    `raise_with` makes each send raise, like a provider SDK error.
    """

    def __init__(self, name: str, *, fail_with: str | None = None, delay: float = 0.0,
                 raise_with: Exception | None = None):
        self.name = name
        self.fail_with = fail_with
        self.delay = delay
        self.raise_with = raise_with
        self.sent: list[dict] = []

    @property
    def configured(self) -> bool:
        return True

    async def send(self, to: str, subject: str, body: str, html: Optional[str] = None) -> DeliveryResult:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.raise_with:
            raise self.raise_with
        self.sent.append({"to": to, "subject": subject, "body": body, "html": html})
        if self.fail_with:
            return DeliveryResult.failed(self.fail_with)
        return DeliveryResult(success=True, message_id=f"{self.name}-{len(self.sent)}")
