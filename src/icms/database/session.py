from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from ..config import get_settings


@lru_cache()
def get_engine() -> AsyncEngine:
    """
    Build the AsyncEngine on first use so importing the app never opens a pool.
    """
    settings = get_settings()
    url = settings.SQLALCHEMY_DATABASE_URI
    options = {
        "echo": settings.SQLALCHEMY_ECHO,
        "pool_pre_ping": True,  # connection health checks
    }
    if url.startswith("postgresql+asyncpg"):
        # asyncpg: bound both connect and per-statement time
        options["connect_args"] = {
            "timeout": settings.DB_TIMEOUT_SECONDS,
            "command_timeout": settings.DB_TIMEOUT_SECONDS,
        }
        options["pool_timeout"] = settings.DB_TIMEOUT_SECONDS
    return create_async_engine(url, **options)


@lru_cache()
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency. Yields a session and ensures it's closed after the request.

    Usage:
        async def endpoint(db: AsyncSession = Depends(get_async_session)):
            await db.execute(...)
    """
    async with get_sessionmaker()() as session:
        yield session
