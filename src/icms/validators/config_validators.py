"""Normalizers applied to raw environment values before `Settings` validates them."""

from typing import Any

WHATSAPP_SCHEME = "whatsapp:"


def blank_to_none(value: Any) -> Any:
    """Strip strings; an empty one means the setting is not configured."""
    if not isinstance(value, str):
        return value
    return value.strip() or None


def normalize_choice(value: Any, upper: bool = True) -> Any:
    """`debug` -> `DEBUG` (or the lower-case form) so Literal fields accept any casing."""
    value = blank_to_none(value)
    if not isinstance(value, str):
        return value
    return value.upper() if upper else value.lower()


def whatsapp_sender(value: Any) -> Any:
    """Twilio sender addresses carry the `whatsapp:` scheme; a bare number gets it added."""
    value = blank_to_none(value)
    if not isinstance(value, str) or value.startswith(WHATSAPP_SCHEME):
        return value
    return f"{WHATSAPP_SCHEME}{value}"
