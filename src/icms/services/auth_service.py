"""
Administrator and finance-manager sessions.

Administrators live in the `admins` table. The finance manager is a single
account configured through `FINANCE_USERNAME` / `FINANCE_PASSWORD_HASH`; no
credentials are built into the code. Both logins return a signed token that
the route stores in its own httpOnly cookie.
"""

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..config.settings import Settings
from ..core.security import create_token, decode_token, verify_password
from ..exceptions.base import AuthenticationError, ValidationException
from ..repositories.person_repository import AdminRepository

logger = logging.getLogger(__name__)

FINANCE_ROLE = "FINANCE_MANAGER"
FINANCE_USER_ID = 999


@dataclass(frozen=True)
class Session:
    token: str
    user: dict[str, Any]


def _require_credentials(username: str | None, password: str | None) -> tuple[str, str]:
    if not username or not password:
        raise ValidationException("Username and password are required")
    return username.strip(), password


class AuthService:
    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings
        self.admins = AdminRepository(db)

    async def login(self, username: str | None, password: str | None) -> Session:
        """
        Raises:
            ValidationException: a credential is missing.
            AuthenticationError: unknown or inactive admin, or wrong password.
            ServiceUnavailableError: the database cannot be reached.
        """
        username, password = _require_credentials(username, password)
        admin = await self.admins.find_active_by_login(username)
        if admin is None or not verify_password(password, admin.password_hash):
            logger.info("auth.login.rejected", extra={"login": username})
            raise AuthenticationError("Invalid credentials")

        token = create_token(
            {"adminId": admin.id, "username": admin.username, "email": admin.email, "role": admin.role},
            self.settings,
        )
        logger.info("auth.login.success", extra={"admin_id": admin.id})
        return Session(
            token=token,
            user={"id": admin.id, "username": admin.username, "email": admin.email, "role": admin.role},
        )

    def finance_login(self, username: str | None, password: str | None) -> Session:
        username, password = _require_credentials(username, password)
        expected = self.settings.FINANCE_USERNAME
        if not expected or not self.settings.FINANCE_PASSWORD_HASH:
            logger.warning("auth.finance.not_configured")
            raise AuthenticationError("Invalid credentials")
        if username != expected or not verify_password(password, self.settings.FINANCE_PASSWORD_HASH):
            logger.info("auth.finance_login.rejected", extra={"login": username})
            raise AuthenticationError("Invalid credentials")

        user = {
            "id": FINANCE_USER_ID,
            "username": expected,
            "email": self.settings.FINANCE_EMAIL,
            "role": FINANCE_ROLE,
        }
        token = create_token({"adminId": FINANCE_USER_ID, **{k: user[k] for k in ("username", "email", "role")}}, self.settings)
        logger.info("auth.finance_login.success")
        return Session(token=token, user=user)

    def check_finance(self, admin_token: str | None, finance_token: str | None) -> dict[str, Any]:
        """The admin cookie is consulted first and grants full access."""
        claims = decode_token(admin_token, self.settings)
        if claims:
            return {
                "authenticated": True,
                "user": {
                    "username": claims.get("username"),
                    "email": claims.get("email"),
                    "role": claims.get("role") or "ADMIN",
                    "accessLevel": "full",
                },
            }

        claims = decode_token(finance_token, self.settings)
        if claims:
            return {
                "authenticated": True,
                "user": {
                    "username": claims.get("username"),
                    "email": claims.get("email"),
                    "role": FINANCE_ROLE,
                    "accessLevel": "finance",
                },
            }

        return {"authenticated": False, "user": None}
