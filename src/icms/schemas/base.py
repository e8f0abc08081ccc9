"""
Request body base classes.

Clients send camelCase JSON; models expose snake_case attributes that match the
ORM columns, so `to_fields()` output can be handed straight to a repository.
"""

from datetime import datetime
from typing import Annotated, Any, ClassVar, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, create_model
from pydantic.alias_generators import to_camel
from pydantic.fields import FieldInfo

from ..utils.dates import to_utc

# A string that must contain something other than whitespace
RequiredStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

M = TypeVar("M", bound=BaseModel)


def _clean(value: Any) -> Any:
    if isinstance(value, str) and value.strip() == "":
        return None
    if isinstance(value, datetime):
        return to_utc(value)
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )

    # child collections handled by the service, never passed to the repository
    nested_fields: ClassVar[frozenset[str]] = frozenset()

    def to_fields(self, *, exclude: set[str] | None = None, drop_none: bool = False) -> dict[str, Any]:
        """
        Only the fields the client actually sent. Empty strings become None and
        datetimes are normalised to UTC. `nested_fields` are left to the caller.

        Creates pass `drop_none=True` so column defaults apply to explicit nulls.
        """
        exclude = exclude or set()
        out = {}
        for name in self.model_fields_set:
            if name in exclude or name in self.nested_fields:
                continue
            value = _clean(getattr(self, name))
            if drop_none and value is None:
                continue
            out[name] = value
        return out

    def nested_payload(self) -> dict[str, list[dict[str, Any]]]:
        """`nested_fields` as plain dicts, children's own nested lists included."""
        out = {}
        for name in self.nested_fields:
            children = getattr(self, name, None)
            if children is None:
                continue
            out[name] = [{**child.to_fields(drop_none=True), **child.nested_payload()} for child in children]
        return out


def _constrained(info: FieldInfo) -> Any:
    if not info.metadata:
        return info.annotation
    return Annotated[(info.annotation, *info.metadata)]


def make_partial(model: Type[M], name: str) -> Type[M]:
    """
    Copy of `model` where every field is optional, for PUT/PATCH bodies.
    Constraints such as `RequiredStr` still apply to a value that is sent.
    """
    fields = {
        field_name: (Optional[_constrained(info)], Field(None, alias=info.alias))
        for field_name, info in model.model_fields.items()
    }
    partial = create_model(name, __base__=CamelModel, **fields)
    partial.nested_fields = model.nested_fields
    return partial
