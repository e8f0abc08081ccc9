"""
Router factory for the finance resources.

Every resource has the same five routes and the `{success, data, count,
summary}` envelope; what differs is the service, the request bodies and which
query parameters filter the list. A filter maps a query parameter to the
service keyword and the parser that turns the raw string into a value.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Type

from fastapi import APIRouter, Request, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from ....core.dependencies import DbSession, EntityId
from ....mappers.serializer import serialize
from ....models.enums import RecordStatus
from ....services.finance_service import FinanceRecordService
from ....validators.request_validators import parse_enum, parse_number
from ...helpers import envelope

Parser = Callable[[str | None, str], Any]


def text(raw: str | None, name: str) -> str | None:
    return raw.strip() or None if raw is not None else None


def record_status(raw: str | None, name: str) -> RecordStatus | None:
    return parse_enum(raw, RecordStatus, name)


def year(raw: str | None, name: str) -> int | None:
    value = parse_number(raw, name, minimum=1900, maximum=9999)
    return int(value) if value is not None else None


@dataclass
class FinanceResource:
    label: str
    service: Callable[[AsyncSession], FinanceRecordService]
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]
    # query parameter -> (service keyword, parser)
    filters: dict[str, tuple[str, Parser]] = field(default_factory=dict)
    render: Callable[[Any], dict[str, Any]] = serialize

    def parse_filters(self, request: Request) -> dict[str, Any]:
        params = request.query_params
        return {kwarg: parse(params.get(name), name) for name, (kwarg, parse) in self.filters.items()}


def finance_router(resource: FinanceResource) -> APIRouter:
    router = APIRouter()
    Create = resource.create_schema
    Update = resource.update_schema

    @router.get("")
    async def list_records(request: Request, db: DbSession) -> dict[str, Any]:
        rows, summary = await resource.service(db).list(**resource.parse_filters(request))
        return envelope([resource.render(row) for row in rows], summary=summary)

    @router.post("", status_code=status.HTTP_201_CREATED)
    async def create_record(body: Create, db: DbSession) -> dict[str, Any]:  # type: ignore[valid-type]
        record = await resource.service(db).create(body.to_fields(drop_none=True))
        return envelope(resource.render(record))

    @router.get("/{id}")
    async def get_record(id: EntityId, db: DbSession) -> dict[str, Any]:
        return envelope(resource.render(await resource.service(db).get(id)))

    @router.put("/{id}")
    async def update_record(id: EntityId, body: Update, db: DbSession) -> dict[str, Any]:  # type: ignore[valid-type]
        record = await resource.service(db).update(id, body.to_fields())
        return envelope(resource.render(record))

    @router.delete("/{id}")
    async def delete_record(id: EntityId, db: DbSession) -> dict[str, Any]:
        await resource.service(db).delete(id)
        return {"success": True, "message": f"{resource.label} deleted successfully"}

    return router
