from datetime import datetime

from ..models.enums import LocationType, MeetingStatus, TaskPriority, TaskStatus
from .base import CamelModel, RequiredStr, make_partial


class MeetingCreate(CamelModel):
    title: RequiredStr
    description: str | None = None
    date: datetime
    start_time: RequiredStr
    end_time: str | None = None
    location: str | None = None
    location_type: LocationType | None = None
    meeting_link: str | None = None
    purpose: str | None = None
    category: str | None = None
    organizer: str | None = None
    participants: list[str] | None = None
    related_to: str | None = None
    related_id: int | None = None
    status: MeetingStatus | None = None
    notes: str | None = None
    reminder_before: int | None = None


MeetingUpdate = make_partial(MeetingCreate, "MeetingUpdate")


class DailyTaskCreate(CamelModel):
    title: RequiredStr
    description: str | None = None
    date: datetime
    priority: TaskPriority | None = None
    category: str | None = None
    status: TaskStatus | None = None
    notes: str | None = None
    action_taken: str | None = None
    next_step: str | None = None
    related_to: str | None = None
    related_id: int | None = None
    assigned_to: str | None = None
    created_by: str | None = None
    due_time: str | None = None


DailyTaskUpdate = make_partial(DailyTaskCreate, "DailyTaskUpdate")
