"""
Outbound delivery channels. Routes receive them through `get_email_channel` /
`get_whatsapp_channel` so tests can swap in fakes with `dependency_overrides`.
"""

from fastapi import Depends

from ..config.settings import Settings, get_settings
from .base import DeliveryResult, NotificationChannel
from .email import EmailChannel, configure_resend
from .templates import Message, render
from .whatsapp import WhatsAppChannel, format_whatsapp_number


def get_email_channel(settings: Settings = Depends(get_settings)) -> NotificationChannel:
    return EmailChannel(settings)


def get_whatsapp_channel(settings: Settings = Depends(get_settings)) -> NotificationChannel:
    return WhatsAppChannel(settings)


__all__ = [
    "DeliveryResult",
    "EmailChannel",
    "Message",
    "NotificationChannel",
    "WhatsAppChannel",
    "configure_resend",
    "format_whatsapp_number",
    "get_email_channel",
    "get_whatsapp_channel",
    "render",
]
