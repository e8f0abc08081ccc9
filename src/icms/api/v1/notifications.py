"""
Notification routes. Sends run through `ErrorHandler.wrap`, so a failure is
answered with the shared error shape and logged under the route's own context.
"""

from typing import Annotated, Any, Literal

from fastapi import APIRouter, Depends

from ...core.dependencies import AppSettings, DbSession
from ...exceptions.handler import ErrorHandler
from ...mappers.serializer import serialize_value
from ...notifications import NotificationChannel, get_email_channel, get_whatsapp_channel
from ...schemas.notifications import (
    SendDailyTasksRequest,
    SendItineraryRequest,
    SendMeetingReminderRequest,
    SendTaskAssignmentRequest,
)
from ...services.notification_service import NotificationService

router = APIRouter()


def get_notification_service(
    db: DbSession,
    settings: AppSettings,
    email: Annotated[NotificationChannel, Depends(get_email_channel)],
    whatsapp: Annotated[NotificationChannel, Depends(get_whatsapp_channel)],
) -> NotificationService:
    return NotificationService(db, email, whatsapp, timeout=settings.NOTIFICATION_TIMEOUT_SECONDS)


Notifier = Annotated[NotificationService, Depends(get_notification_service)]


@router.post("/send-itinerary")
async def send_itinerary(body: SendItineraryRequest, notifier: Notifier) -> Any:
    return await ErrorHandler.wrap(
        lambda: notifier.send_itinerary(body.travel_request_id, body.email, body.phone),
        "notifications.send-itinerary",
    )


@router.post("/send-meeting-reminder")
async def send_meeting_reminder(body: SendMeetingReminderRequest, notifier: Notifier) -> Any:
    return await ErrorHandler.wrap(
        lambda: notifier.send_meeting_reminder(body.meeting_id, body.email, body.phone, body.recipient_name),
        "notifications.send-meeting-reminder",
    )


@router.get("/send-meeting-reminder")
async def meetings_due(notifier: Notifier, type: Literal["today", "upcoming"] = "today") -> dict[str, Any]:  # noqa: A002
    """Meetings a reminder job should pick up."""
    meetings = await notifier.meetings_due(type)
    return {
        "success": True,
        "meetingsCount": len(meetings),
        "meetings": [
            {
                "id": m.id,
                "title": m.title,
                "date": serialize_value(m.date),
                "startTime": m.start_time,
                "organizer": m.organizer,
                "participants": m.participants,
            }
            for m in meetings
        ],
    }


@router.post("/send-daily-tasks")
async def send_daily_tasks(body: SendDailyTasksRequest, notifier: Notifier) -> Any:
    return await ErrorHandler.wrap(
        lambda: notifier.send_daily_tasks(
            day=body.date,
            assigned_to=body.assigned_to,
            send_email=body.send_email,
            send_whatsapp=body.send_whats_app,
            recipient_email=body.recipient_email,
            recipient_phone=body.recipient_phone,
            recipient_name=body.recipient_name,
        ),
        "notifications.send-daily-tasks",
    )


@router.post("/send-task-assignment")
async def send_task_assignment(body: SendTaskAssignmentRequest, notifier: Notifier) -> Any:
    return await ErrorHandler.wrap(
        lambda: notifier.send_task_assignment(
            body.task_id,
            send_email=body.send_email,
            send_whatsapp=body.send_whats_app,
            recipient_email=body.recipient_email,
            recipient_phone=body.recipient_phone,
            recipient_name=body.recipient_name,
            assigned_by=body.assigned_by,
        ),
        "notifications.send-task-assignment",
    )
