"""
Single-table CRUD shared by the simpler resources (stakeholders, task helpers,
meetings, daily tasks) and extended by the finance services.

Writes run inside `unit_of_work`, reads raise the resource's own 404 message.
"""

import logging
from typing import Any, Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from ..database.unit_of_work import unit_of_work
from ..repositories.base_repository import BaseRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RecordService(Generic[T]):
    def __init__(self, db: AsyncSession, repository: BaseRepository[T], label: str | None = None):
        self.db = db
        self.repository = repository
        self.label = label or repository.name

    @property
    def not_found_message(self) -> str:
        return f"{self.label} not found"

    def prepare_create(self, fields: dict[str, Any]) -> dict[str, Any]:
        return fields

    def prepare_update(self, entity: T, fields: dict[str, Any]) -> dict[str, Any]:
        return fields

    async def get(self, record_id: int) -> T:
        return await self.repository.get_by_id_or_raise(record_id, message=self.not_found_message)

    async def create(self, fields: dict[str, Any]) -> T:
        values = self.prepare_create(dict(fields))
        async with unit_of_work(self.db, self.repository.name):
            record = await self.repository.create(**values)
        logger.info("records.created", extra={"record": self.repository.name, "id": record.id})
        return record

    async def update(self, record_id: int, fields: dict[str, Any]) -> T:
        record = await self.get(record_id)
        values = self.prepare_update(record, dict(fields))
        async with unit_of_work(self.db, self.repository.name):
            record = await self.repository.update(record, **values)
        return record

    async def delete(self, record_id: int) -> None:
        record = await self.get(record_id)
        async with unit_of_work(self.db, self.repository.name):
            await self.repository.delete(record)
        logger.info("records.deleted", extra={"record": self.repository.name, "id": record_id})
