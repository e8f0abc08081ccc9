from datetime import timedelta

import pytest

from icms.exceptions.base import NotFoundException, ValidationException
from icms.models import Flight
from icms.models.enums import MeetingStatus, PersonType, TaskPriority, TaskStatus
from icms.services.notification_service import NotificationService
from icms.services.travel_service import PassengerService, TravelComponentService
from icms.tests.test_fixtures.notification_fixtures import FakeChannel
from icms.utils.dates import utc_now


def _service(db_session, email=None, whatsapp=None, timeout=1.0):
    return NotificationService(
        db_session,
        email or FakeChannel("email"),
        whatsapp or FakeChannel("whatsapp"),
        timeout=timeout,
    )


class TestDispatch:

    async def test_no_address_is_a_validation_error(self, db_session, create_meeting):
        meeting = await create_meeting()

        with pytest.raises(ValidationException) as info:
            await _service(db_session).send_meeting_reminder(meeting.id, None, None)

        assert info.value.fields == ["email", "phone"]

    async def test_only_channels_with_an_address_are_attempted(self, db_session, create_meeting):
        email, whatsapp = FakeChannel("email"), FakeChannel("whatsapp")
        meeting = await create_meeting(title="Board review")

        result = await _service(db_session, email, whatsapp).send_meeting_reminder(
            meeting.id, "ceo@icms.test", None, recipient_name="Ms Chair"
        )

        assert result["success"] is True
        assert result["message"] == "Meeting reminder sent successfully"
        assert set(result["results"]) == {"email"}
        assert whatsapp.sent == []
        assert email.sent[0]["subject"].startswith("Reminder: Board review on ")
        assert "Ms Chair" in email.sent[0]["html"]

    async def test_one_channel_succeeding_is_success(self, db_session, create_meeting):
        meeting = await create_meeting()
        service = _service(db_session, FakeChannel("email", fail_with="Mailbox full"))

        result = await service.send_meeting_reminder(meeting.id, "a@icms.test", "+15550100")

        assert result["success"] is True
        assert result["results"]["email"] == {"success": False, "error": "Mailbox full"}
        assert result["results"]["whatsapp"] == {"success": True, "messageId": "whatsapp-1"}

    async def test_raising_channel_is_isolated(self, db_session, create_meeting, caplog):
        meeting = await create_meeting()
        whatsapp = FakeChannel("whatsapp")
        service = _service(db_session, FakeChannel("email", raise_with=RuntimeError("sdk blew up")), whatsapp)

        with caplog.at_level("ERROR", logger="icms.services.notification_service"):
            result = await service.send_meeting_reminder(meeting.id, "a@icms.test", "+15550100")

        assert result["success"] is True
        assert result["results"]["email"] == {"success": False, "error": "Email delivery failed: sdk blew up"}
        assert result["results"]["whatsapp"]["success"] is True
        assert len(whatsapp.sent) == 1
        assert any(r.getMessage() == "notifications.channel_error" for r in caplog.records)

    async def test_every_channel_failing_is_reported(self, db_session, create_meeting):
        meeting = await create_meeting()
        service = _service(db_session, FakeChannel("email", fail_with="down"), FakeChannel("whatsapp", fail_with="down"))

        result = await service.send_meeting_reminder(meeting.id, "a@icms.test", "+15550100")

        assert result["success"] is False
        assert result["message"] == "Meeting reminder could not be delivered"

    async def test_slow_channel_times_out_on_its_own(self, db_session, create_meeting):
        meeting = await create_meeting()
        slow = FakeChannel("whatsapp", delay=0.5)
        service = _service(db_session, whatsapp=slow, timeout=0.05)

        result = await service.send_meeting_reminder(meeting.id, "a@icms.test", "+15550100")

        assert result["success"] is True
        assert result["results"]["whatsapp"] == {"success": False, "error": "Whatsapp delivery timed out after 0.05s"}

    async def test_missing_ids(self, db_session):
        service = _service(db_session)

        with pytest.raises(ValidationException) as info:
            await service.send_meeting_reminder(None, "a@icms.test", None)
        assert info.value.message == "Meeting ID is required"

        with pytest.raises(NotFoundException) as info:
            await service.send_meeting_reminder(4040, "a@icms.test", None)
        assert info.value.message == "Meeting not found"


class TestUseCases:

    async def test_itinerary_uses_first_passenger_and_components(self, db_session, create_travel_request, create_employee):
        email = FakeChannel("email")
        travel_request = await create_travel_request(destinations=[{"city": "Lisbon", "country": "Portugal"}])
        employee = await create_employee(first_name="Rui", last_name="Costa")
        await PassengerService(db_session).create({
            "travel_request_id": travel_request.id,
            "person_type": PersonType.EMPLOYEE,
            "person_id": employee.id,
        })
        await TravelComponentService(db_session, Flight, "Flight").create({
            "travel_request_id": travel_request.id,
            "airline": "TAP",
            "flight_number": "TP1351",
            "departure_airport": "LHR",
            "arrival_airport": "LIS",
        })

        result = await _service(db_session, email).send_itinerary(travel_request.id, "rui@icms.test", None)

        assert result["success"] is True
        sent = email.sent[0]
        assert sent["subject"].startswith("Travel itinerary: Lisbon (")
        assert "Dear Rui Costa" in sent["body"]
        assert "TAP TP1351: LHR to LIS" in sent["body"]

    async def test_itinerary_requires_request_id(self, db_session):
        with pytest.raises(ValidationException) as info:
            await _service(db_session).send_itinerary(None, "a@icms.test", None)
        assert info.value.fields == ["travelRequestId"]

    async def test_daily_tasks_without_tasks_short_circuits(self, db_session):
        email = FakeChannel("email")

        result = await _service(db_session, email).send_daily_tasks(send_email=True, recipient_email="a@icms.test")

        assert result == {"success": True, "message": "No tasks found for the specified criteria", "tasksCount": 0}
        assert email.sent == []

    async def test_daily_tasks_lists_open_tasks_only(self, db_session, create_daily_task):
        email = FakeChannel("email")
        await create_daily_task(title="Book car", priority=TaskPriority.HIGH)
        await create_daily_task(title="Pay bills")
        await create_daily_task(title="Already done", status=TaskStatus.DONE)

        result = await _service(db_session, email).send_daily_tasks(
            send_email=True, recipient_email="a@icms.test", recipient_name="Sam"
        )

        assert result["tasksCount"] == 2
        body = email.sent[0]["body"]
        assert "1. Book car [HIGH]" in body
        assert "Already done" not in body

    async def test_daily_tasks_channel_flags_gate_addresses(self, db_session, create_daily_task):
        await create_daily_task()

        with pytest.raises(ValidationException):
            await _service(db_session).send_daily_tasks(recipient_email="a@icms.test")

    async def test_task_assignment(self, db_session, create_daily_task):
        whatsapp = FakeChannel("whatsapp")
        task = await create_daily_task(title="Collect visas", assigned_to="Maria", created_by="Office")

        result = await _service(db_session, whatsapp=whatsapp).send_task_assignment(
            task.id, send_whatsapp=True, recipient_phone="+15550100"
        )

        assert result["message"] == "Task assignment notification sent successfully"
        assert whatsapp.sent[0]["to"] == "+15550100"
        assert "Dear Maria" in whatsapp.sent[0]["body"]
        assert "Assigned by: Office" in whatsapp.sent[0]["body"]

    async def test_upcoming_window_is_next_24_hours(self, db_session, create_meeting):
        soon = await create_meeting(title="Soon", date=utc_now() + timedelta(hours=3))
        await create_meeting(title="Later", date=utc_now() + timedelta(days=3))
        await create_meeting(title="Cancelled", date=utc_now() + timedelta(hours=1), status=MeetingStatus.CANCELLED)

        due = await _service(db_session).meetings_due("upcoming")

        assert [m.id for m in due] == [soon.id]
