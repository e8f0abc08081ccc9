from datetime import timedelta

from icms.models.enums import MeetingStatus
from icms.services.notification_service import NotificationService
from icms.utils.dates import utc_now


class TestMeetingReminders:

    async def test_reminder_goes_to_both_channels(self, client, create_meeting, email_channel, whatsapp_channel):
        meeting = await create_meeting(title="Budget")

        response = await client.post("/api/notifications/send-meeting-reminder", json={
            "meetingId": meeting.id,
            "email": "cfo@icms.test",
            "phone": "+447700900123",
            "recipientName": "Sam",
        })

        body = response.json()
        assert response.status_code == 200
        assert body["success"] is True
        assert set(body["results"]) == {"email", "whatsapp"}
        assert email_channel.sent[0]["to"] == "cfo@icms.test"
        assert whatsapp_channel.sent[0]["to"] == "+447700900123"

    async def test_no_address_is_bad_request(self, client, create_meeting):
        meeting = await create_meeting()

        response = await client.post("/api/notifications/send-meeting-reminder", json={"meetingId": meeting.id})

        assert response.status_code == 400
        assert [e["field"] for e in response.json()["validationErrors"]] == ["email", "phone"]

    async def test_missing_meeting_id(self, client):
        response = await client.post("/api/notifications/send-meeting-reminder", json={"email": "a@icms.test"})

        assert response.status_code == 400
        assert response.json()["error"] == "Meeting ID is required"

    async def test_upcoming_window_lists_scheduled_meetings(self, client, create_meeting):
        soon = await create_meeting(title="Soon")
        await create_meeting(title="Next week", date=utc_now() + timedelta(days=7))
        await create_meeting(title="Called off", status=MeetingStatus.CANCELLED)

        body = (await client.get("/api/notifications/send-meeting-reminder", params={"type": "upcoming"})).json()

        assert body["meetingsCount"] == 1
        assert body["meetings"][0]["id"] == soon.id
        assert body["meetings"][0]["startTime"] == "10:00"

    async def test_unknown_window_is_rejected(self, client):
        response = await client.get("/api/notifications/send-meeting-reminder", params={"type": "someday"})

        assert response.status_code == 400


class TestTaskNotifications:

    async def test_daily_tasks_without_tasks(self, client, email_channel):
        response = await client.post("/api/notifications/send-daily-tasks", json={
            "sendEmail": True,
            "recipientEmail": "ops@icms.test",
        })

        assert response.json() == {
            "success": True,
            "message": "No tasks found for the specified criteria",
            "tasksCount": 0,
        }
        assert email_channel.sent == []

    async def test_daily_tasks_only_uses_requested_channels(
        self, client, create_daily_task, email_channel, whatsapp_channel
    ):
        await create_daily_task(title="File expenses", assigned_to="Kim")

        response = await client.post("/api/notifications/send-daily-tasks", json={
            "assignedTo": "Kim",
            "sendEmail": True,
            "recipientEmail": "kim@icms.test",
            "recipientPhone": "+15550100",
        })

        body = response.json()
        assert body["tasksCount"] == 1
        assert set(body["results"]) == {"email"}
        assert "File expenses" in email_channel.sent[0]["body"]
        assert whatsapp_channel.sent == []

    async def test_task_assignment(self, client, create_daily_task, whatsapp_channel):
        task = await create_daily_task(title="Book venue")

        response = await client.post("/api/notifications/send-task-assignment", json={
            "taskId": task.id,
            "sendWhatsApp": True,
            "recipientPhone": "+15550100",
            "assignedBy": "Office manager",
        })

        assert response.json()["message"] == "Task assignment notification sent successfully"
        assert whatsapp_channel.sent[0]["subject"] == "New task: Book venue"

    async def test_task_assignment_for_missing_task(self, client):
        response = await client.post("/api/notifications/send-task-assignment", json={
            "taskId": 4242,
            "sendEmail": True,
            "recipientEmail": "a@icms.test",
        })

        assert response.status_code == 404
        assert response.json()["error"] == "Task not found"


class TestItinerary:

    async def test_itinerary_for_request(self, client, create_travel_request, email_channel):
        travel_request = await create_travel_request(destinations=[{"city": "Lisbon", "country": "Portugal"}])

        response = await client.post("/api/notifications/send-itinerary", json={
            "travelRequestId": travel_request.id,
            "email": "traveller@icms.test",
        })

        assert response.json()["success"] is True
        assert "Lisbon" in email_channel.sent[0]["subject"]

    async def test_itinerary_for_missing_request(self, client):
        response = await client.post("/api/notifications/send-itinerary", json={
            "travelRequestId": 4242,
            "email": "traveller@icms.test",
        })

        assert response.status_code == 404

    async def test_unexpected_failure_is_logged_under_the_route(self, client, monkeypatch, caplog):
        async def broken(self, *args, **kwargs):
            raise RuntimeError("template store offline")

        monkeypatch.setattr(NotificationService, "send_itinerary", broken)

        with caplog.at_level("ERROR", logger="icms.exceptions.handler"):
            response = await client.post("/api/notifications/send-itinerary", json={
                "travelRequestId": 1,
                "email": "traveller@icms.test",
            })

        assert response.status_code == 500
        assert response.json()["code"] == "INTERNAL_ERROR"
        contexts = [getattr(r, "context", None) for r in caplog.records if r.getMessage() == "error.unhandled"]
        assert contexts == ["notifications.send-itinerary"]
