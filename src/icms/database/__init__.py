from .base import Base
from .session import get_async_session, get_engine, get_sessionmaker
from .unit_of_work import unit_of_work

__all__ = ["Base", "get_async_session", "get_engine", "get_sessionmaker", "unit_of_work"]
