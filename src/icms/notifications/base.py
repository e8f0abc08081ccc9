from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of one delivery attempt on one channel."""

    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def failed(cls, error: str) -> "DeliveryResult":
        return cls(success=False, error=error)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"success": self.success}
        if self.message_id:
            out["messageId"] = self.message_id
        if self.error:
            out["error"] = self.error
        return out


class NotificationChannel(ABC):
    """A delivery channel. `send` reports failures in the result instead of raising."""

    name: str = "channel"

    @property
    @abstractmethod
    def configured(self) -> bool:
        """True when the provider credentials are present."""

    @property
    def not_configured(self) -> DeliveryResult:
        return DeliveryResult.failed(f"{self.label} service not configured")

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @abstractmethod
    async def send(self, to: str, subject: str, body: str, html: Optional[str] = None) -> DeliveryResult:
        """
        Deliver one message.

        Args:
            to: Recipient address (email address or phone number)
            subject: Subject line; channels without subjects ignore it
            body: Plain-text body
            html: HTML body for channels that render it
        """
