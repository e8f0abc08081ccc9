import pytest


async def _liability(client, **overrides):
    body = {"liabilityName": "Office loan", "liabilityType": "LOAN", "originalAmount": 10000}
    body.update(overrides)
    response = await client.post("/api/finance/liabilities", json=body)
    assert response.status_code == 201
    return response.json()["data"]


async def _property(client, **overrides):
    body = {"propertyName": "Flat 4", "propertyType": "APARTMENT", "address": "4 Kings Road, London"}
    body.update(overrides)
    response = await client.post("/api/finance/properties-uk", json=body)
    assert response.status_code == 201
    return response.json()["data"]


class TestEnvelope:

    async def test_list_is_wrapped_with_count_and_summary(self, client):
        await _liability(client, originalAmount=1000)
        await _liability(client, liabilityName="Van lease", originalAmount=500, currentBalance=200)

        body = (await client.get("/api/finance/liabilities")).json()

        assert body["success"] is True
        assert body["count"] == 2
        assert body["summary"] == {
            "totalOriginalAmount": 1500,
            "totalCurrentBalance": 1200,
            "totalPaid": 300,
            "totalLiabilities": 2,
        }

    async def test_list_filters(self, client):
        await _liability(client, liabilityType="LOAN")
        await _liability(client, liabilityType="MORTGAGE")

        body = (await client.get("/api/finance/liabilities", params={"liabilityType": "MORTGAGE"})).json()

        assert [r["liabilityType"] for r in body["data"]] == ["MORTGAGE"]
        assert body["summary"]["totalLiabilities"] == 1

    async def test_delete_and_missing(self, client):
        liability = await _liability(client)

        deleted = await client.delete(f"/api/finance/liabilities/{liability['id']}")
        missing = await client.get(f"/api/finance/liabilities/{liability['id']}")

        assert deleted.json() == {"success": True, "message": "Liability deleted successfully"}
        assert missing.status_code == 404

    async def test_required_fields(self, client):
        response = await client.post("/api/finance/liabilities", json={"liabilityName": "Loan"})

        assert response.status_code == 400
        assert {e["field"] for e in response.json()["validationErrors"]} == {"liabilityType", "originalAmount"}

    async def test_bad_year_filter(self, client):
        response = await client.get("/api/finance/dividends", params={"year": "last"})

        assert response.status_code == 400
        assert response.json()["validationErrors"][0]["field"] == "year"


class TestLiabilityPayments:

    async def test_payment_lowers_balance(self, client):
        liability = await _liability(client, originalAmount=1000)

        response = await client.post(
            f"/api/finance/liabilities/{liability['id']}/payments", json={"amount": 250, "paymentMethod": "BANK"}
        )
        payments = await client.get(f"/api/finance/liabilities/{liability['id']}/payments")

        assert response.status_code == 201
        body = response.json()
        assert body["data"]["amount"] == 250
        assert body["liability"]["currentBalance"] == 750
        assert body["liability"]["payments"][0]["id"] == body["data"]["id"]
        assert payments.json()["count"] == 1

    @pytest.mark.parametrize("amount", [0, -10])
    async def test_non_positive_amount_is_rejected(self, client, amount):
        liability = await _liability(client)

        response = await client.post(f"/api/finance/liabilities/{liability['id']}/payments", json={"amount": amount})

        assert response.status_code == 400
        assert response.json()["validationErrors"][0]["field"] == "amount"

    async def test_payment_on_missing_liability(self, client):
        response = await client.post("/api/finance/liabilities/999/payments", json={"amount": 10})

        assert response.status_code == 404


class TestMonthlyPayments:

    async def test_record_defaults_to_commitment_amount(self, client):
        created = await client.post(
            "/api/finance/monthly-payments", json={"paymentName": "Office rent", "amount": 1800}
        )
        payment_id = created.json()["data"]["id"]

        record = await client.post(f"/api/finance/monthly-payments/{payment_id}/payments", json={})
        fetched = await client.get(f"/api/finance/monthly-payments/{payment_id}")

        assert record.status_code == 201
        assert record.json()["data"]["amount"] == 1800
        assert fetched.json()["data"]["lastPaymentAmount"] == 1800


class TestTenants:

    async def test_adding_a_tenant_marks_property_rented(self, client):
        prop = await _property(client)

        added = await client.post(
            f"/api/finance/properties-uk/{prop['id']}/tenants", json={"tenantName": "J. Smith", "rentAmount": 1500}
        )
        fetched = await client.get(f"/api/finance/properties-uk/{prop['id']}")
        tenants = await client.get(f"/api/finance/properties-uk/{prop['id']}/tenants")

        assert added.status_code == 201
        assert fetched.json()["data"]["isRented"] is True
        assert tenants.json()["summary"] == {"totalTenants": 1, "activeTenants": 1, "totalMonthlyRent": 1500}

    async def test_tenant_of_another_property_is_not_found(self, client):
        first, second = await _property(client), await _property(client, propertyName="Flat 5")
        added = await client.post(
            f"/api/finance/properties-uk/{first['id']}/tenants", json={"tenantName": "A", "rentAmount": 900}
        )

        response = await client.put(
            f"/api/finance/properties-uk/{second['id']}/tenants/{added.json()['data']['id']}", json={"rentAmount": 1}
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Tenant not found"

    async def test_delete_tenant(self, client):
        prop = await _property(client)
        added = await client.post(
            f"/api/finance/properties-uk/{prop['id']}/tenants", json={"tenantName": "A", "rentAmount": 900}
        )

        response = await client.delete(f"/api/finance/properties-uk/{prop['id']}/tenants/{added.json()['data']['id']}")

        assert response.json() == {"success": True, "message": "Tenant deleted successfully"}

    async def test_property_type_filter(self, client):
        await _property(client, propertyType="HOUSE")
        await _property(client, propertyType="APARTMENT")

        body = (await client.get("/api/finance/properties-uk", params={"propertyType": "HOUSE"})).json()

        assert [p["propertyType"] for p in body["data"]] == ["HOUSE"]
