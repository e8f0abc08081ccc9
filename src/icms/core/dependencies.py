from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..config.settings import Settings, get_settings
from ..database.session import get_async_session
from ..validators.request_validators import parse_id

# Route dependencies
DbSession = Annotated[AsyncSession, Depends(get_async_session)]
AppSettings = Annotated[Settings, Depends(get_settings)]


def path_id(id: str) -> int:  # noqa: A002 - matches the `{id}` path segment
    """`{id}` as a positive integer; anything else is a 400 before the handler runs."""
    return parse_id(id)


EntityId = Annotated[int, Depends(path_id)]
