"""
Unit of work for multi-statement writes.

Steps that must be observed together (unset sibling primaries, then create the
new primary; mark a property rented, then add the tenant) run inside one
transaction: everything is committed on success and rolled back on any error.

    async with unit_of_work(session, "EmployerContact"):
        await contacts.clear_primary(employer_id)
        contact = await contacts.create(...)
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions.mapper import db_error_handler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def unit_of_work(session: AsyncSession, name: str | None = None) -> AsyncIterator[AsyncSession]:
    start = time.perf_counter()
    async with db_error_handler(session, name, operation="commit"):
        yield session
        await session.commit()
    logger.debug(
        "uow.commit",
        extra={"unit": name, "duration_ms": round((time.perf_counter() - start) * 1000, 2)},
    )
