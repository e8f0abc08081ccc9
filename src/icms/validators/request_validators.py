"""
Request-level validation helpers.

Route handlers call these before touching persistence. All of them raise
`ValidationException` (400) with a field-specific message instead of letting a
malformed value reach the database.
"""

import re
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable, Mapping, Type, TypeVar

from ..exceptions.base import FieldError, ValidationException
from ..utils.dates import to_utc

E = TypeVar("E", bound=Enum)

_INT_RE = re.compile(r"^\d+$")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
EMAIL_MAX_LENGTH = 255


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def parse_id(raw: Any, field: str = "id") -> int:
    """Path ids must be positive integers; '0', '-1', 'abc' and '1.5' are rejected."""
    text = str(raw).strip() if raw is not None else ""
    if not _INT_RE.match(text) or int(text) <= 0:
        raise ValidationException.from_field_error(field, "ID must be a positive integer", raw)
    return int(text)


def require_fields(data: Mapping[str, Any], fields: Iterable[str], labels: Mapping[str, str] | None = None) -> None:
    """
    Raise one ValidationException listing every missing field.
    None and blank strings count as missing.
    """
    labels = labels or {}
    missing = [
        FieldError(name, f"{labels.get(name, name)} is required")
        for name in fields
        if is_blank(data.get(name))
    ]
    if len(missing) == 1:
        raise ValidationException.from_field_error(missing[0].field, missing[0].message)
    if missing:
        raise ValidationException.from_field_errors(missing)


def parse_date(raw: Any, field: str) -> datetime | None:
    """ISO date or datetime string -> UTC datetime. Blank -> None. Anything else -> 400."""
    if is_blank(raw):
        return None
    if isinstance(raw, datetime):
        return to_utc(raw)
    if isinstance(raw, date):
        return to_utc(datetime(raw.year, raw.month, raw.day))
    try:
        return to_utc(datetime.fromisoformat(str(raw).strip().replace("Z", "+00:00")))
    except ValueError:
        raise ValidationException.from_field_error(field, f"{field} must be a valid date", raw) from None


def parse_number(raw: Any, field: str, *, minimum: float | None = None, maximum: float | None = None) -> float | None:
    if is_blank(raw):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ValidationException.from_field_error(field, f"{field} must be a number", raw) from None
    if minimum is not None and value < minimum:
        raise ValidationException.from_field_error(field, f"{field} must be at least {minimum:g}", raw)
    if maximum is not None and value > maximum:
        raise ValidationException.from_field_error(field, f"{field} must be at most {maximum:g}", raw)
    return value


def parse_limit(raw: Any, default: int, maximum: int = 100) -> int:
    """Result cap from a query string. Blank means `default`; '2.5' is truncated."""
    value = parse_number(raw, "limit", minimum=1, maximum=maximum)
    return default if value is None else int(value)


def parse_enum(raw: Any, enum_cls: Type[E], field: str) -> E | None:
    if is_blank(raw):
        return None
    if isinstance(raw, enum_cls):
        return raw
    try:
        return enum_cls(str(raw).strip().upper())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationException.from_field_error(field, f"{field} must be one of: {allowed}", raw) from None


def parse_bool(raw: Any) -> bool:
    """Query-string flags: 'true', '1', 'yes' are truthy."""
    if isinstance(raw, bool):
        return raw
    return str(raw or "").strip().lower() in {"true", "1", "yes"}


def normalize_email(raw: Any, field: str = "email") -> str:
    """
    Trim and lower-case, then check format and length.
    """
    if is_blank(raw):
        raise ValidationException.from_field_error(field, "Email cannot be empty")
    email = str(raw).strip().lower()
    if len(email) > EMAIL_MAX_LENGTH or not _EMAIL_RE.match(email):
        raise ValidationException.from_field_error(field, "Invalid email format", raw)
    return email


def sanitize_string(raw: Any) -> str | None:
    """Strip whitespace and angle brackets; blank -> None."""
    if raw is None:
        return None
    cleaned = str(raw).strip().replace("<", "").replace(">", "")
    return cleaned or None


def blank_to_none(data: Mapping[str, Any]) -> dict[str, Any]:
    """Empty strings in a payload mean 'not provided'."""
    return {k: (None if isinstance(v, str) and v.strip() == "" else v) for k, v in data.items()}
