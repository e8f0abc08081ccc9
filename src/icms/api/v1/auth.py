"""
Cookie sessions. The admin cookie grants full access; the finance cookie is
scoped to the finance screens. Both are httpOnly JWTs.
"""

from typing import Any

from fastapi import APIRouter, Cookie, Response

from ...config.settings import Settings
from ...core.dependencies import AppSettings, DbSession
from ...core.security import ADMIN_COOKIE, FINANCE_COOKIE
from ...schemas.auth import LoginRequest
from ...services.auth_service import AuthService

router = APIRouter()


def _set_session_cookie(response: Response, name: str, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=name,
        value=token,
        httponly=True,
        secure=settings.ENV == "production",
        samesite="lax",
        max_age=settings.AUTH_TOKEN_TTL_SECONDS,
        path="/",
    )


@router.post("/login")
async def login(body: LoginRequest, response: Response, db: DbSession, settings: AppSettings) -> dict[str, Any]:
    session = await AuthService(db, settings).login(body.username, body.password)
    _set_session_cookie(response, ADMIN_COOKIE, session.token, settings)
    return {"success": True, "admin": session.user}


@router.post("/finance-login")
async def finance_login(body: LoginRequest, response: Response, db: DbSession, settings: AppSettings) -> dict[str, Any]:
    session = AuthService(db, settings).finance_login(body.username, body.password)
    _set_session_cookie(response, FINANCE_COOKIE, session.token, settings)
    return {"success": True, "user": session.user}


@router.post("/logout")
async def logout(response: Response) -> dict[str, Any]:
    response.delete_cookie(ADMIN_COOKIE, path="/")
    response.delete_cookie(FINANCE_COOKIE, path="/")
    return {"success": True, "message": "Logged out successfully"}


@router.get("/check-finance")
async def check_finance(
    db: DbSession,
    settings: AppSettings,
    admin_token: str | None = Cookie(None, alias=ADMIN_COOKIE),
    finance_token: str | None = Cookie(None, alias=FINANCE_COOKIE),
) -> dict[str, Any]:
    return AuthService(db, settings).check_finance(admin_token, finance_token)
