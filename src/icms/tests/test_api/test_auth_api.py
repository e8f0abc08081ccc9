import pytest

from icms.core.security import ADMIN_COOKIE, FINANCE_COOKIE
from icms.tests.test_fixtures.api_fixtures import FINANCE_PASSWORD, FINANCE_USERNAME


class TestAdminLogin:

    @pytest.mark.parametrize("login", ["admin", "admin@icms.test"])
    async def test_login_by_username_or_email_sets_cookie(self, client, create_admin, login):
        await create_admin(password="correct horse")

        response = await client.post("/api/auth/login", json={"username": login, "password": "correct horse"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["admin"]["username"] == "admin"
        assert ADMIN_COOKIE in response.cookies
        assert "httponly" in response.headers["set-cookie"].lower()

    async def test_wrong_password_is_unauthorized(self, client, create_admin):
        await create_admin(password="correct horse")

        response = await client.post("/api/auth/login", json={"username": "admin", "password": "battery staple"})

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid credentials"
        assert ADMIN_COOKIE not in response.cookies

    async def test_missing_credentials_are_bad_request(self, client):
        response = await client.post("/api/auth/login", json={"username": "admin"})

        assert response.status_code == 400


class TestFinanceAccess:

    async def test_finance_login(self, client):
        response = await client.post(
            "/api/auth/finance-login", json={"username": FINANCE_USERNAME, "password": FINANCE_PASSWORD}
        )

        assert response.status_code == 200
        assert response.json()["user"] == {
            "id": 999,
            "username": FINANCE_USERNAME,
            "email": "finance@icms.test",
            "role": "FINANCE_MANAGER",
        }
        assert FINANCE_COOKIE in response.cookies

    async def test_finance_login_rejects_wrong_password(self, client):
        response = await client.post("/api/auth/finance-login", json={"username": FINANCE_USERNAME, "password": "nope"})

        assert response.status_code == 401

    async def test_check_without_cookies(self, client):
        response = await client.get("/api/auth/check-finance")

        assert response.json() == {"authenticated": False, "user": None}

    async def test_finance_cookie_grants_finance_access(self, client):
        await client.post("/api/auth/finance-login", json={"username": FINANCE_USERNAME, "password": FINANCE_PASSWORD})

        body = (await client.get("/api/auth/check-finance")).json()

        assert body["authenticated"] is True
        assert body["user"]["accessLevel"] == "finance"

    async def test_admin_cookie_wins(self, client, create_admin):
        await create_admin(password="correct horse")
        await client.post("/api/auth/finance-login", json={"username": FINANCE_USERNAME, "password": FINANCE_PASSWORD})
        await client.post("/api/auth/login", json={"username": "admin", "password": "correct horse"})

        body = (await client.get("/api/auth/check-finance")).json()

        assert body["user"]["accessLevel"] == "full"
        assert body["user"]["role"] == "ADMIN"

    async def test_tampered_cookie_is_not_authenticated(self, client):
        client.cookies.set(FINANCE_COOKIE, "not-a-token")

        body = (await client.get("/api/auth/check-finance")).json()

        assert body["authenticated"] is False

    async def test_logout_clears_both_cookies(self, client):
        await client.post("/api/auth/finance-login", json={"username": FINANCE_USERNAME, "password": FINANCE_PASSWORD})

        response = await client.post("/api/auth/logout")
        after = (await client.get("/api/auth/check-finance")).json()

        assert response.json() == {"success": True, "message": "Logged out successfully"}
        assert after["authenticated"] is False
