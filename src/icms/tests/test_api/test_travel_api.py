import pytest


async def _request(client, **overrides):
    body = {
        "tripStartDate": "2025-09-01T00:00:00Z",
        "tripEndDate": "2025-09-05T00:00:00Z",
        "destinations": [{"city": "Paris", "country": "France"}, {"city": "Rome", "country": "Italy"}],
    }
    body.update(overrides)
    response = await client.post("/api/travel/requests", json=body)
    assert response.status_code == 201
    return response.json()["data"]


class TestTravelRequests:

    async def test_create_starts_at_request_with_ordered_stops(self, client):
        created = await _request(client, status="COMPLETED", requestNumber="TR-CHOSEN")

        assert created["status"] == "REQUEST"
        assert created["requestNumber"].startswith("TR-")
        assert created["requestNumber"] != "TR-CHOSEN"
        assert [(d["city"], d["sequenceOrder"]) for d in created["destinations"]] == [("Paris", 0), ("Rome", 1)]
        assert [h["toStatus"] for h in created["statusHistory"]] == ["REQUEST"]

    async def test_list_envelope(self, client):
        await _request(client)
        await _request(client)

        body = (await client.get("/api/travel/requests")).json()

        assert body["success"] is True
        assert body["count"] == 2

    async def test_status_moves_one_step_and_is_recorded(self, client):
        created = await _request(client, createdById=7)

        response = await client.put(
            f"/api/travel/requests/{created['id']}", json={"status": "PLANNING", "statusChangeNotes": "agent assigned"}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "PLANNING"
        latest = [h for h in data["statusHistory"] if h["toStatus"] == "PLANNING"][0]
        assert latest["fromStatus"] == "REQUEST"
        assert latest["changedById"] == 7
        assert latest["notes"] == "agent assigned"

    @pytest.mark.parametrize("target", ["CONFIRMING", "COMPLETED"])
    async def test_skipping_steps_is_unprocessable(self, client, target):
        created = await _request(client)

        response = await client.put(f"/api/travel/requests/{created['id']}", json={"status": target})

        assert response.status_code == 422
        assert response.json()["code"] == "INVALID_STATUS_TRANSITION"

    async def test_cancelled_request_is_frozen(self, client):
        created = await _request(client)
        await client.put(f"/api/travel/requests/{created['id']}", json={"status": "CANCELLED"})

        response = await client.put(f"/api/travel/requests/{created['id']}", json={"status": "PLANNING"})

        assert response.status_code == 422

    async def test_request_number_is_never_changed(self, client):
        created = await _request(client)

        response = await client.put(
            f"/api/travel/requests/{created['id']}", json={"requestNumber": "TR-1", "notes": "window seat"}
        )

        assert response.json()["data"]["requestNumber"] == created["requestNumber"]
        assert response.json()["data"]["notes"] == "window seat"

    async def test_delete_takes_components_along(self, client):
        created = await _request(client)
        flight = await client.post("/api/travel/flights", json={"travelRequestId": created["id"], "airline": "AF"})

        deleted = await client.delete(f"/api/travel/requests/{created['id']}")
        orphan = await client.get(f"/api/travel/flights/{flight.json()['data']['id']}")

        assert deleted.json() == {"success": True, "message": "Travel request deleted successfully"}
        assert orphan.status_code == 404
        assert orphan.json()["error"] == "Flight not found"


class TestComponents:

    async def test_flight_with_passengers(self, client, create_employee):
        employee = await create_employee(first_name="Ada", last_name="Byron")
        created = await _request(client)

        response = await client.post("/api/travel/flights", json={
            "travelRequestId": created["id"],
            "airline": "BA",
            "class": "Business",
            "passengers": [{"personType": "EMPLOYEE", "personId": employee.id, "seatNumber": "2A"}],
        })

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["class"] == "Business"
        assert data["status"] == "PENDING"
        assert data["passengers"][0]["seatNumber"] == "2A"

    async def test_component_needs_an_existing_request(self, client):
        response = await client.post("/api/travel/trains", json={"travelRequestId": 999, "trainNumber": "ES9"})

        assert response.status_code == 404
        assert response.json()["error"] == "Travel request not found"

    async def test_list_filters_by_request(self, client):
        first, second = await _request(client), await _request(client)
        await client.post("/api/travel/events", json={"travelRequestId": first["id"], "eventName": "Expo"})
        await client.post("/api/travel/events", json={"travelRequestId": second["id"], "eventName": "Gala"})

        body = (await client.get("/api/travel/events", params={"travelRequestId": first["id"]})).json()

        assert body["count"] == 1
        assert body["data"][0]["travelRequestId"] == first["id"]

    async def test_bad_request_id_filter(self, client):
        response = await client.get("/api/travel/hotels", params={"travelRequestId": "x"})

        assert response.status_code == 400
        assert response.json()["validationErrors"][0]["field"] == "travelRequestId"

    async def test_delete_message_names_component(self, client):
        created = await _request(client)
        car = await client.post("/api/travel/cars-with-driver", json={"travelRequestId": created["id"]})

        response = await client.delete(f"/api/travel/cars-with-driver/{car.json()['data']['id']}")

        assert response.json() == {"success": True, "message": "Car with driver deleted successfully"}

    async def test_hotel_rooms(self, client, create_stakeholder):
        guest = await create_stakeholder()
        created = await _request(client)
        hotel = await client.post("/api/travel/hotels", json={"travelRequestId": created["id"], "hotelName": "Ritz"})
        hotel_id = hotel.json()["data"]["id"]

        added = await client.post(f"/api/travel/hotels/{hotel_id}/rooms", json={
            "unitCategory": "Suite",
            "roomNumber": "501",
            "assignments": [{"personType": "STAKEHOLDER", "personId": guest.id}],
        })
        rooms = await client.get(f"/api/travel/hotels/{hotel_id}/rooms")

        assert added.status_code == 201
        assert rooms.json()["count"] == 1
        assert rooms.json()["data"][0]["unitCategory"] == "Suite"

    async def test_passenger_for_unknown_person(self, client):
        created = await _request(client)

        response = await client.post("/api/travel/passengers", json={
            "travelRequestId": created["id"],
            "personType": "EMPLOYEE",
            "personId": 999,
        })

        assert response.status_code == 404
        assert response.json()["error"] == "EMPLOYEE with id 999 not found"

    async def test_request_shows_passenger_details(self, client, create_task_helper):
        helper = await create_task_helper(first_name="Luis", last_name="Gomez")
        created = await _request(client)
        await client.post("/api/travel/passengers", json={
            "travelRequestId": created["id"],
            "personType": "TASK_HELPER",
            "personId": helper.id,
            "isMainPassenger": True,
        })

        data = (await client.get(f"/api/travel/requests/{created['id']}")).json()["data"]

        details = data["passengers"][0]["personDetails"]
        assert details["name"] == "Luis Gomez"
        assert details["phone"] == "+15550100"

    async def test_communication_carries_recipient(self, client, create_employee):
        employee = await create_employee(first_name="Ada", last_name="Byron", email="ada@icms.test")
        created = await _request(client)

        response = await client.post("/api/travel/communications", json={
            "travelRequestId": created["id"],
            "recipientPersonType": "EMPLOYEE",
            "recipientPersonId": employee.id,
            "communicationType": "EMAIL",
            "message": "Your itinerary is ready",
        })

        data = response.json()["data"]
        assert data["recipientName"] == "Ada Byron"
        assert data["recipientContact"] == "ada@icms.test"
