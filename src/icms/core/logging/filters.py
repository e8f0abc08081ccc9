"""
Logging filters.

- `RequestIdFilter` stamps every record with the id of the HTTP request it was
  emitted in (kept in a ContextVar so it follows the request across awaits).
- `RedactFilter` masks record attributes that carry credentials or personal
  identifiers. It looks at `extra={...}` keys, not at the message text.
"""

import contextvars
import logging
from logging import LogRecord

REDACTED = "***REDACTED***"

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar("request_id", default=None)


def set_request_id(request_id: str | None) -> contextvars.Token:
    """Returns the token for `reset_request_id`."""
    return _request_id_ctx.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Guarantees `record.request_id`: an explicit `extra={"request_id": ...}` wins,
    then the current request's id, then "-". Never drops a record.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = getattr(record, "request_id", None) or get_request_id() or "-"
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {
        "password",
        "password_hash",
        "secret",
        "token",
        "access_token",
        "refresh_token",
        "authorization",
        "cookie",
        "ssn",
        "social_security_number",
        "tax_id",
        "account_number",
    }

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = REDACTED
        return True
