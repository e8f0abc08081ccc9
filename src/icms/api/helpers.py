"""
Helpers shared by the routers.

Query values arrive as raw strings and go through the request validators
(`parse_date`, `parse_enum`, `parse_bool`), so a malformed filter is a 400
naming the parameter rather than a silently ignored one.
"""

from typing import Any

from ..validators.request_validators import is_blank, parse_id


def envelope(data: Any, **extra: Any) -> dict[str, Any]:
    """`{success: true, data, ...}`; `count` is added for lists."""
    body: dict[str, Any] = {"success": True, "data": data}
    if isinstance(data, list):
        body["count"] = len(data)
    body.update(extra)
    return body


def optional_id(raw: str | None, name: str) -> int | None:
    """An id filter from the query string; blank means no filter."""
    return None if is_blank(raw) else parse_id(raw, name)
