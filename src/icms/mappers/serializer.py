"""
Generic ORM -> JSON-ready dict conversion for the bare and enveloped endpoints.

Keys are camelCase in column declaration order, every column is present (None
stays None), datetimes become ISO-8601 UTC strings and enums their values.
Owned collections (`cascade="all, delete-orphan"`) are serialized recursively
unless excluded; back-references to a parent are never followed.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable

from sqlalchemy import inspect as sa_inspect

from ..utils.dates import isoformat_utc

# attribute -> wire key where the camelCase form is not what clients send
WIRE_ALIASES = {
    "flight_class": "class",
    "train_class": "class",
    "property_uk_id": "propertyUKId",
}


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def wire_key(attr: str) -> str:
    return WIRE_ALIASES.get(attr) or to_camel(attr)


def serialize_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return isoformat_utc(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


def serialize(entity: Any, *, exclude: Iterable[str] = (), extra: dict[str, Any] | None = None) -> dict[str, Any]:
    """
    `exclude` drops top-level attributes or collections by attribute name.
    `extra` keys are appended after the columns, already in wire form.
    """
    excluded = set(exclude)
    mapper = sa_inspect(entity).mapper
    out: dict[str, Any] = {}

    for column_attr in mapper.column_attrs:
        if column_attr.key in excluded:
            continue
        out[wire_key(column_attr.key)] = serialize_value(getattr(entity, column_attr.key))

    for rel in mapper.relationships:
        if rel.key in excluded or not rel.uselist or not rel.cascade.delete_orphan:
            continue
        out[wire_key(rel.key)] = [serialize(child) for child in getattr(entity, rel.key)]

    if extra:
        out.update(extra)
    return out


def serialize_many(entities: Iterable[Any], **kwargs) -> list[dict[str, Any]]:
    return [serialize(entity, **kwargs) for entity in entities]
