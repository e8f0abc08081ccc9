from datetime import datetime

from sqlalchemy import case
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.enums import MeetingStatus, TaskPriority, TaskStatus
from ..models.schedule import DailyTask, Meeting
from ..utils.dates import day_bounds, end_of_day
from .base_repository import BaseRepository

# URGENT first; unknown strings sort last
PRIORITY_RANK = case(
    {priority.value: priority.rank for priority in TaskPriority},
    value=DailyTask.priority,
    else_=0,
)


def _date_conditions(column, date: datetime | None, start_date: datetime | None, end_date: datetime | None) -> list:
    """A single `date` wins over a range; a range needs both ends and is inclusive."""
    if date is not None:
        start, end = day_bounds(date)
        return [column >= start, column < end]
    if start_date is not None and end_date is not None:
        return [column >= day_bounds(start_date)[0], column <= end_of_day(end_date)]
    return []


class MeetingRepository(BaseRepository[Meeting]):
    default_order = (Meeting.date, Meeting.start_time)

    def __init__(self, db: AsyncSession):
        super().__init__(Meeting, db)

    async def search(
        self,
        date: datetime | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        status: MeetingStatus | None = None,
        category: str | None = None,
    ) -> list[Meeting]:
        conditions = _date_conditions(Meeting.date, date, start_date, end_date)
        if status:
            conditions.append(Meeting.status == status)
        if category:
            conditions.append(Meeting.category == category)
        return await self.find_all(*conditions)

    async def scheduled_between(self, start: datetime, end: datetime) -> list[Meeting]:
        return await self.find_all(
            Meeting.status == MeetingStatus.SCHEDULED,
            Meeting.date >= start,
            Meeting.date < end,
        )


class DailyTaskRepository(BaseRepository[DailyTask]):
    entity_name = "Task"
    default_order = (PRIORITY_RANK.desc(), DailyTask.due_time.asc().nulls_last(), DailyTask.created_at)

    def __init__(self, db: AsyncSession):
        super().__init__(DailyTask, db)

    async def search(
        self,
        date: datetime | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
        category: str | None = None,
    ) -> list[DailyTask]:
        conditions = _date_conditions(DailyTask.date, date, start_date, end_date)
        if status:
            conditions.append(DailyTask.status == status)
        if priority:
            conditions.append(DailyTask.priority == priority)
        if category:
            conditions.append(DailyTask.category == category)
        return await self.find_all(*conditions)

    async def open_tasks_for_day(self, day: datetime, assigned_to: str | None = None) -> list[DailyTask]:
        conditions = _date_conditions(DailyTask.date, day, None, None)
        conditions.append(DailyTask.status.in_([TaskStatus.PENDING, TaskStatus.IN_PROGRESS]))
        if assigned_to:
            conditions.append(DailyTask.assigned_to == assigned_to)
        return await self.find_all(*conditions)
