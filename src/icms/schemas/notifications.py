from datetime import datetime

from .base import CamelModel


class SendItineraryRequest(CamelModel):
    travel_request_id: int | None = None
    email: str | None = None
    phone: str | None = None


class SendMeetingReminderRequest(CamelModel):
    meeting_id: int | None = None
    email: str | None = None
    phone: str | None = None
    recipient_name: str | None = None


class SendDailyTasksRequest(CamelModel):
    date: datetime | None = None
    assigned_to: str | None = None
    send_email: bool = False
    send_whats_app: bool = False
    recipient_email: str | None = None
    recipient_phone: str | None = None
    recipient_name: str | None = None


class SendTaskAssignmentRequest(CamelModel):
    task_id: int | None = None
    send_email: bool = False
    send_whats_app: bool = False
    recipient_email: str | None = None
    recipient_phone: str | None = None
    recipient_name: str | None = None
    assigned_by: str | None = None
