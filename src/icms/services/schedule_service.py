from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..models.schedule import DailyTask, Meeting
from ..repositories.schedule_repository import DailyTaskRepository, MeetingRepository
from .record_service import RecordService


class MeetingService(RecordService[Meeting]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, MeetingRepository(db), label="Meeting")

    async def list(self, **filters: Any) -> list[Meeting]:
        return await self.repository.search(**filters)


class DailyTaskService(RecordService[DailyTask]):
    """Tasks list most urgent first, then by due time."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, DailyTaskRepository(db), label="Task")

    async def list(self, **filters: Any) -> list[DailyTask]:
        return await self.repository.search(**filters)
