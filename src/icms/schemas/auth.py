from .base import CamelModel


class LoginRequest(CamelModel):
    """Both fields are checked by the route so a missing one yields a single 400."""

    username: str | None = None
    password: str | None = None
