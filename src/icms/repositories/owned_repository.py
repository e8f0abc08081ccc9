"""
Repositories for rows owned by a parent (contacts, tenants, payments, travel
components). Adds parent-scoped listing and the single-primary helper.
"""

import logging
from typing import Any

from sqlalchemy import update

from ..exceptions.mapper import db_error_handler
from .base_repository import BaseRepository, ModelType

logger = logging.getLogger(__name__)


class OwnedRepository(BaseRepository[ModelType]):
    parent_field: str = ""

    @property
    def parent_column(self):
        return getattr(self.model, self.parent_field)

    async def list_for_parent(self, parent_id: int, **filters: Any) -> list[ModelType]:
        return await self.list_by(**{self.parent_field: parent_id, **filters})

    async def clear_primary(self, parent_id: int, exclude_id: int | None = None) -> None:
        """Unset `is_primary` on every sibling under `parent_id` (except `exclude_id`)."""
        stmt = (
            update(self.model)
            .where(self.parent_column == parent_id, self.model.is_primary.is_(True))
            .values(is_primary=False)
        )
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)

        async with db_error_handler(self.db, self.model.__name__, operation="update"):
            await self.db.execute(stmt)

        logger.debug(
            "repo.clear_primary",
            extra={"model": self.model.__name__, "parent_id": parent_id, "exclude_id": exclude_id},
        )
