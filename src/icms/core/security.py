"""
Password hashing (bcrypt) and session tokens (PyJWT, HS256).

Two independent cookies carry sessions: `auth-token` for administrators and
`finance-auth-token` for the finance manager.
"""

import logging
from datetime import timedelta
from typing import Any

import bcrypt
import jwt

from ..config.settings import Settings
from ..utils.dates import utc_now

logger = logging.getLogger(__name__)

ADMIN_COOKIE = "auth-token"
FINANCE_COOKIE = "finance-auth-token"

# bcrypt only looks at the first 72 bytes
_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    """False for a wrong password and for a missing or malformed hash."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("auth.hash.malformed")
        return False


def create_token(claims: dict[str, Any], settings: Settings) -> str:
    now = utc_now()
    payload = {
        **claims,
        "iat": now,
        "exp": now + timedelta(seconds=settings.AUTH_TOKEN_TTL_SECONDS),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str | None, settings: Settings) -> dict[str, Any] | None:
    """Claims of a valid, unexpired token; None otherwise."""
    if not token:
        return None
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.PyJWTError as exc:
        logger.info("auth.token.rejected", extra={"reason": type(exc).__name__})
        return None
