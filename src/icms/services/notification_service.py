"""
Notification use cases: travel itineraries, meeting reminders, daily task
digests and task assignments.

Each use case loads its aggregate, flattens it into a template context and
hands the rendered message to the email and WhatsApp channels. The channels
run concurrently, each under its own timeout, and report independently: the
response carries `results.email` and `results.whatsapp` for whichever channels
were attempted, and `success` is true when at least one of them delivered.
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Any, Literal

from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions.base import FieldError, ValidationException
from ..models.schedule import DailyTask, Meeting
from ..models.travel import TravelRequest
from ..notifications.base import DeliveryResult, NotificationChannel
from ..notifications.templates import PRIORITY_COLORS, Message, render
from ..repositories.schedule_repository import DailyTaskRepository, MeetingRepository
from ..repositories.travel_repository import TravelRequestRepository
from ..utils.dates import day_bounds, long_date, utc_now
from .person_resolver import PersonResolver

logger = logging.getLogger(__name__)

ReminderWindow = Literal["today", "upcoming"]


def _short_date(value: datetime | None) -> str:
    return value.strftime("%d %b %Y") if value else ""


def _required_id(raw: Any, label: str, field: str) -> int:
    if raw is None:
        raise ValidationException(f"{label} ID is required", [FieldError(field=field, message=f"{label} ID is required")])
    return raw


# ======================================================================
# Template contexts
# ======================================================================

def itinerary_context(travel_request: TravelRequest, recipient_name: str | None) -> dict[str, Any]:
    first_stop = travel_request.destinations[0] if travel_request.destinations else None
    return {
        "recipient_name": recipient_name or "Traveler",
        "reference": travel_request.request_number,
        "destination": (first_stop and (first_stop.city or first_stop.country)) or "Destination",
        "travel_date": long_date(travel_request.trip_start_date),
        "flights": [
            {
                "airline": f.airline or "Unknown",
                "flight_number": f.flight_number or "",
                "departure_city": f.departure_airport or "",
                "arrival_city": f.arrival_airport or "",
                "departure_date": _short_date(f.departure_date),
                "departure_time": f.departure_time or "",
            }
            for f in travel_request.flights
        ],
        "hotels": [
            {
                "hotel_name": h.hotel_name or "Hotel",
                "city": h.city or "",
                "check_in": _short_date(h.check_in_date),
                "check_out": _short_date(h.check_out_date),
            }
            for h in travel_request.hotels
        ],
        "cars": [
            {
                "car_type": c.car_type or "Rental Car",
                "pickup_location": c.pickup_location or "",
                "pickup_date": _short_date(c.pickup_date),
                "dropoff_date": _short_date(c.return_date),
            }
            for c in travel_request.rental_cars
        ],
    }


def meeting_context(meeting: Meeting, recipient_name: str | None) -> dict[str, Any]:
    return {
        "recipient_name": recipient_name or "Participant",
        "meeting_title": meeting.title,
        "meeting_date": long_date(meeting.date),
        "meeting_time": meeting.meeting_time,
        "location": meeting.location or "",
        "location_type": meeting.location_type.value,
        "meeting_link": meeting.meeting_link or "",
        "purpose": meeting.purpose or "",
        "organizer": meeting.organizer or "",
    }


def task_summary(task: DailyTask) -> dict[str, Any]:
    return {
        "title": task.title,
        "description": task.description or "",
        "priority": task.priority.value,
        "due_time": task.due_time or "",
        "category": task.category,
    }


def task_assignment_context(task: DailyTask, recipient_name: str | None, assigned_by: str | None) -> dict[str, Any]:
    return {
        "recipient_name": recipient_name or task.assigned_to or "Team Member",
        "task_title": task.title,
        "task_description": task.description or "",
        "priority": task.priority.value,
        "priority_color": PRIORITY_COLORS.get(task.priority.value, PRIORITY_COLORS["LOW"]),
        "due_date": long_date(task.date),
        "due_time": task.due_time or "",
        "assigned_by": assigned_by or task.created_by or "",
    }


# ======================================================================
# Service
# ======================================================================

class NotificationService:
    def __init__(
        self,
        db: AsyncSession,
        email: NotificationChannel,
        whatsapp: NotificationChannel,
        timeout: float,
    ):
        self.db = db
        self.email = email
        self.whatsapp = whatsapp
        self.timeout = timeout
        self.travel_requests = TravelRequestRepository(db)
        self.meetings = MeetingRepository(db)
        self.tasks = DailyTaskRepository(db)
        self.persons = PersonResolver(db)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def _deliver(self, channel: NotificationChannel, to: str, message: Message) -> DeliveryResult:
        try:
            return await asyncio.wait_for(
                channel.send(to, message.subject, message.text, html=message.html),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("notifications.timeout", extra={"channel": channel.name, "timeout": self.timeout})
            return DeliveryResult.failed(f"{channel.label} delivery timed out after {self.timeout:g}s")
        except Exception as e:
            # one channel failing must not cost the other its result
            logger.exception("notifications.channel_error", extra={"channel": channel.name})
            return DeliveryResult.failed(f"{channel.label} delivery failed: {e}")

    async def dispatch(self, message: Message, email: str | None, phone: str | None) -> dict[str, dict[str, Any]]:
        """
        Send on every channel that has an address. Raises a 400 when neither does.
        """
        targets = [(name, channel, to) for name, channel, to in (
            ("email", self.email, email),
            ("whatsapp", self.whatsapp, phone),
        ) if to]
        if not targets:
            raise ValidationException.from_field_errors([
                FieldError(field="email", message="An email address or phone number is required"),
                FieldError(field="phone", message="An email address or phone number is required"),
            ])

        outcomes = await asyncio.gather(*(self._deliver(channel, to, message) for _, channel, to in targets))
        results = {name: outcome.to_dict() for (name, _, _), outcome in zip(targets, outcomes)}
        logger.info(
            "notifications.dispatched",
            extra={"channels": {name: r["success"] for name, r in results.items()}},
        )
        return results

    @staticmethod
    def _envelope(results: dict[str, dict[str, Any]], sent: str, failed: str, **extra: Any) -> dict[str, Any]:
        success = any(r["success"] for r in results.values())
        return {"success": success, "message": sent if success else failed, **extra, "results": results}

    # ------------------------------------------------------------------
    # Use cases
    # ------------------------------------------------------------------

    async def send_itinerary(self, travel_request_id: int | None, email: str | None, phone: str | None) -> dict[str, Any]:
        request_id = _required_id(travel_request_id, "Travel request", "travelRequestId")
        travel_request = await self.travel_requests.get_by_id_or_raise(request_id, message="Travel request not found")

        recipient_name = None
        if travel_request.passengers:
            first = travel_request.passengers[0]
            person = await self.persons.resolve(first.person_type, first.person_id)
            recipient_name = person.name if person else None

        message = render("itinerary", **itinerary_context(travel_request, recipient_name))
        results = await self.dispatch(message, email, phone)
        return self._envelope(results, "Itinerary sent successfully", "Itinerary could not be delivered")

    async def send_meeting_reminder(
        self,
        meeting_id: int | None,
        email: str | None,
        phone: str | None,
        recipient_name: str | None = None,
    ) -> dict[str, Any]:
        meeting_id = _required_id(meeting_id, "Meeting", "meetingId")
        meeting = await self.meetings.get_by_id_or_raise(meeting_id, message="Meeting not found")

        message = render("meeting_reminder", **meeting_context(meeting, recipient_name))
        results = await self.dispatch(message, email, phone)
        return self._envelope(results, "Meeting reminder sent successfully", "Meeting reminder could not be delivered")

    async def meetings_due(self, window: ReminderWindow = "today") -> list[Meeting]:
        """SCHEDULED meetings today, or within the next 24 hours for `upcoming`."""
        now = utc_now()
        if window == "upcoming":
            return await self.meetings.scheduled_between(now, now + timedelta(hours=24))
        return await self.meetings.scheduled_between(*day_bounds(now))

    async def send_daily_tasks(
        self,
        day: datetime | None = None,
        assigned_to: str | None = None,
        send_email: bool = False,
        send_whatsapp: bool = False,
        recipient_email: str | None = None,
        recipient_phone: str | None = None,
        recipient_name: str | None = None,
    ) -> dict[str, Any]:
        day = day or utc_now()
        tasks = await self.tasks.open_tasks_for_day(day, assigned_to=assigned_to)
        if not tasks:
            return {"success": True, "message": "No tasks found for the specified criteria", "tasksCount": 0}

        message = render(
            "daily_tasks",
            recipient_name=recipient_name or assigned_to or "Team Member",
            date=long_date(day),
            tasks=[task_summary(t) for t in tasks],
        )
        results = await self.dispatch(
            message,
            recipient_email if send_email else None,
            recipient_phone if send_whatsapp else None,
        )
        return self._envelope(
            results,
            "Daily tasks notification sent successfully",
            "Daily tasks notification could not be delivered",
            tasksCount=len(tasks),
        )

    async def send_task_assignment(
        self,
        task_id: int | None,
        send_email: bool = False,
        send_whatsapp: bool = False,
        recipient_email: str | None = None,
        recipient_phone: str | None = None,
        recipient_name: str | None = None,
        assigned_by: str | None = None,
    ) -> dict[str, Any]:
        task_id = _required_id(task_id, "Task", "taskId")
        task = await self.tasks.get_by_id_or_raise(task_id, message="Task not found")

        message = render("task_assignment", **task_assignment_context(task, recipient_name, assigned_by))
        results = await self.dispatch(
            message,
            recipient_email if send_email else None,
            recipient_phone if send_whatsapp else None,
        )
        return self._envelope(
            results,
            "Task assignment notification sent successfully",
            "Task assignment notification could not be delivered",
        )
