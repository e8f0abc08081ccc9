"""
Meetings and daily tasks. Bare responses.

Both lists accept `date` (that calendar day) or an inclusive
`startDate`/`endDate` range; `date` wins when both are given.
"""

from typing import Any

from fastapi import APIRouter, Query, status

from ...core.dependencies import DbSession, EntityId
from ...mappers.serializer import serialize, serialize_many
from ...models.enums import MeetingStatus, TaskPriority, TaskStatus
from ...schemas.schedule import DailyTaskCreate, DailyTaskUpdate, MeetingCreate, MeetingUpdate
from ...services.schedule_service import DailyTaskService, MeetingService
from ...validators.request_validators import parse_date, parse_enum

# ======================================================================
# Meetings
# ======================================================================

meetings_router = APIRouter()


@meetings_router.get("")
async def list_meetings(
    db: DbSession,
    date: str | None = None,
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    status: str | None = None,
    category: str | None = None,
) -> list[dict[str, Any]]:
    meetings = await MeetingService(db).list(
        date=parse_date(date, "date"),
        start_date=parse_date(start_date, "startDate"),
        end_date=parse_date(end_date, "endDate"),
        status=parse_enum(status, MeetingStatus, "status"),
        category=category,
    )
    return serialize_many(meetings)


@meetings_router.post("", status_code=status.HTTP_201_CREATED)
async def create_meeting(body: MeetingCreate, db: DbSession) -> dict[str, Any]:
    return serialize(await MeetingService(db).create(body.to_fields(drop_none=True)))


@meetings_router.get("/{id}")
async def get_meeting(id: EntityId, db: DbSession) -> dict[str, Any]:
    return serialize(await MeetingService(db).get(id))


@meetings_router.put("/{id}")
async def update_meeting(id: EntityId, body: MeetingUpdate, db: DbSession) -> dict[str, Any]:
    return serialize(await MeetingService(db).update(id, body.to_fields()))


@meetings_router.delete("/{id}")
async def delete_meeting(id: EntityId, db: DbSession) -> dict[str, str]:
    await MeetingService(db).delete(id)
    return {"message": "Meeting deleted successfully"}


# ======================================================================
# Daily tasks
# ======================================================================

tasks_router = APIRouter()


@tasks_router.get("")
async def list_tasks(
    db: DbSession,
    date: str | None = None,
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    status: str | None = None,
    priority: str | None = None,
    category: str | None = None,
) -> list[dict[str, Any]]:
    tasks = await DailyTaskService(db).list(
        date=parse_date(date, "date"),
        start_date=parse_date(start_date, "startDate"),
        end_date=parse_date(end_date, "endDate"),
        status=parse_enum(status, TaskStatus, "status"),
        priority=parse_enum(priority, TaskPriority, "priority"),
        category=category,
    )
    return serialize_many(tasks)


@tasks_router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(body: DailyTaskCreate, db: DbSession) -> dict[str, Any]:
    return serialize(await DailyTaskService(db).create(body.to_fields(drop_none=True)))


@tasks_router.get("/{id}")
async def get_task(id: EntityId, db: DbSession) -> dict[str, Any]:
    return serialize(await DailyTaskService(db).get(id))


@tasks_router.put("/{id}")
async def update_task(id: EntityId, body: DailyTaskUpdate, db: DbSession) -> dict[str, Any]:
    return serialize(await DailyTaskService(db).update(id, body.to_fields()))


@tasks_router.delete("/{id}")
async def delete_task(id: EntityId, db: DbSession) -> dict[str, str]:
    await DailyTaskService(db).delete(id)
    return {"message": "Task deleted successfully"}
