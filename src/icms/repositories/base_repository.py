"""
Base repository class providing common database operations.

Model-specific repositories inherit from `BaseRepository` to reuse the generic
create / read / update / delete logic and add their own queries on top.

Repositories never commit. They flush so generated ids and server defaults are
visible, and leave the transaction boundary to the caller (`unit_of_work` or an
explicit `session.commit()` in the route).
"""

import logging
import time
from typing import Any, Generic, Iterable, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.base import Base
from ..exceptions.base import (
    DuplicateError,
    FieldError,
    InvalidFieldError,
    NotFoundException,
    ValidationException,
)
from ..exceptions.mapper import db_error_handler
from ..validators.model_validators import find_unique_conflicts, find_unknown_model_kwargs, get_required_columns

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.

    Class attributes subclasses may override:
        entity_name: name used in NotFound messages (defaults to the model name)
        duplicate_message: client message for unique violations
        default_order: columns used by `find_all()` when no order is given
    """

    entity_name: str | None = None
    duplicate_message: str | None = None
    default_order: tuple = ()

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Args:
            model: The SQLAlchemy model class (not an instance), e.g. Employee.
            db: The async database session, injected by the route dependency.
        """
        self.model = model
        self.db = db

    @property
    def name(self) -> str:
        return self.entity_name or self.model.__name__

    # ==================================================================
    # Create
    # ==================================================================

    async def create(self, **kwargs) -> ModelType:
        """
        Create an entity with validation + DB write. Logging:
        - DEBUG: start event with model name and provided keys (not values).
        - INFO: expected domain errors (invalid fields, missing required, duplicate).
        - INFO: success event with created id and duration_ms.
        """
        model_name = self.model.__name__
        logger.debug(
            "repo.create.start",
            extra={"model": model_name, "operation": "create", "provided_keys": sorted(kwargs.keys())},
        )

        unknown = find_unknown_model_kwargs(self.model, kwargs)
        if unknown:
            logger.info(
                "repo.create.invalid_fields",
                extra={"model": model_name, "operation": "create", "invalid_fields": sorted(unknown)},
            )
            raise InvalidFieldError(f"Unknown field(s) for {model_name}: {', '.join(unknown)}", fields=unknown)

        missing = [c for c in get_required_columns(self.model) if kwargs.get(c) is None]
        if missing:
            logger.info(
                "repo.create.missing_required",
                extra={"model": model_name, "operation": "create", "missing_fields": sorted(missing)},
            )
            raise ValidationException.from_field_errors(
                [FieldError(field=c, message=f"{c} is required") for c in missing]
            )

        await self._raise_on_conflicts(kwargs, operation="create")

        start = time.perf_counter()
        async with db_error_handler(self.db, model_name, operation="create", duplicate_message=self.duplicate_message):
            entity = self.model(**kwargs)
            self.db.add(entity)
            await self.db.flush()
            await self.db.refresh(entity)

        logger.info(
            "repo.create.success",
            extra={
                "model": model_name,
                "operation": "create",
                "id": getattr(entity, "id", None),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    # ==================================================================
    # Read
    # ==================================================================

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        async with db_error_handler(self.db, self.model.__name__, operation="retrieve"):
            result = await self.db.execute(
                select(self.model)
                .where(self.model.id == entity_id)
                .execution_options(populate_existing=True)
            )
            entity = result.scalar_one_or_none()

        logger.debug(
            "repo.get_by_id",
            extra={"model": self.model.__name__, "id": entity_id, "found": entity is not None},
        )
        return entity

    async def get_by_id_or_raise(self, entity_id: int, message: str | None = None) -> ModelType:
        """
        Raises:
            NotFoundException: no row with that id.
        """
        entity = await self.get_by_id(entity_id)
        if entity is None:
            raise NotFoundException(self.name, entity_id, message=message)
        return entity

    async def find_by_field(self, field: str, value: Any) -> ModelType | None:
        if not hasattr(self.model, field):
            raise InvalidFieldError(f"{self.model.__name__} has no field '{field}'", fields=[field])

        async with db_error_handler(self.db, self.model.__name__, operation="retrieve"):
            result = await self.db.execute(
                select(self.model).where(getattr(self.model, field) == value).limit(1)
            )
            return result.scalar_one_or_none()

    async def get_all(
        self,
        offset: int = 0,
        limit: int | None = None,
        order_by: str | None = None,
    ) -> list[ModelType]:
        """
        All entities, ordered by `order_by` when it names a column, else newest first.
        An unknown `order_by` is ignored with a warning.
        """
        query = select(self.model)

        if order_by:
            if hasattr(self.model, order_by):
                query = query.order_by(getattr(self.model, order_by))
            else:
                logger.warning(
                    "repo.get_all.invalid_order_by",
                    extra={"model": self.model.__name__, "order_by": order_by},
                )
        elif hasattr(self.model, "created_at"):
            query = query.order_by(self.model.created_at.desc())

        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        return await self._scalars(query)

    async def find_all(
        self, *conditions, order_by: Iterable | None = None, limit: int | None = None
    ) -> list[ModelType]:
        """
        Rows matching every SQLAlchemy condition in `conditions`. Ordered by
        `order_by`, else `default_order`, else newest first. `limit` caps the row count.
        """
        query = select(self.model)
        for condition in conditions:
            query = query.where(condition)

        ordering = tuple(order_by) if order_by is not None else self.default_order
        if not ordering and hasattr(self.model, "created_at"):
            ordering = (self.model.created_at.desc(),)
        if ordering:
            query = query.order_by(*ordering)
        if limit is not None:
            query = query.limit(limit)

        return await self._scalars(query)

    async def list_by(self, order_by: Iterable | None = None, **filters: Any) -> list[ModelType]:
        """Equality filters; `None` values are skipped so optional query params pass straight through."""
        conditions = [
            getattr(self.model, field) == value
            for field, value in filters.items()
            if value is not None and hasattr(self.model, field)
        ]
        return await self.find_all(*conditions, order_by=order_by)

    async def exists(self, entity_id: int) -> bool:
        async with db_error_handler(self.db, self.model.__name__, operation="check"):
            result = await self.db.execute(select(self.model.id).where(self.model.id == entity_id))
            return result.scalar() is not None

    async def count(self, **filters: Any) -> int:
        query = select(func.count(self.model.id))
        for field, value in filters.items():
            if hasattr(self.model, field) and value is not None:
                query = query.where(getattr(self.model, field) == value)

        async with db_error_handler(self.db, self.model.__name__, operation="count"):
            result = await self.db.execute(query)
            return result.scalar() or 0

    async def count_grouped(self, field: str) -> dict[str, int]:
        """Row counts keyed by the value of `field`, e.g. {"ACTIVE": 3, "TERMINATED": 1}."""
        column = getattr(self.model, field)
        async with db_error_handler(self.db, self.model.__name__, operation="count"):
            result = await self.db.execute(select(column, func.count(self.model.id)).group_by(column))
            return {str(value): count for value, count in result.all() if value is not None}

    async def distinct_values(self, field: str) -> list[str]:
        """Sorted non-empty distinct values of `field`, used for filter facets."""
        column = getattr(self.model, field)
        async with db_error_handler(self.db, self.model.__name__, operation="retrieve"):
            result = await self.db.execute(select(column).where(column.is_not(None)).distinct().order_by(column))
            return [value for value in result.scalars().all() if value]

    # ==================================================================
    # Update / delete
    # ==================================================================

    async def update(self, entity: ModelType, **kwargs) -> ModelType:
        """
        Apply `kwargs` onto a loaded entity through the ORM so mapper events
        (full-name sync, `updated_at`) fire. Keys are validated like `create`;
        unique columns are pre-checked against every other row.
        """
        model_name = self.model.__name__
        unknown = find_unknown_model_kwargs(self.model, kwargs)
        if unknown:
            raise InvalidFieldError(f"Unknown field(s) for {model_name}: {', '.join(unknown)}", fields=unknown)

        if not kwargs:
            logger.debug("repo.update.noop", extra={"model": model_name, "id": entity.id})
            return entity

        await self._raise_on_conflicts(kwargs, operation="update", exclude_id=entity.id)

        async with db_error_handler(self.db, model_name, operation="update", duplicate_message=self.duplicate_message):
            for key, value in kwargs.items():
                setattr(entity, key, value)
            await self.db.flush()
            await self.db.refresh(entity)

        logger.info(
            "repo.update.success",
            extra={"model": model_name, "operation": "update", "id": entity.id, "fields": sorted(kwargs.keys())},
        )
        return entity

    async def delete(self, entity: ModelType) -> None:
        """Delete through the session so ORM cascades remove owned children."""
        entity_id = entity.id
        async with db_error_handler(self.db, self.model.__name__, operation="delete"):
            await self.db.delete(entity)
            await self.db.flush()

        logger.info("repo.delete.success", extra={"model": self.model.__name__, "operation": "delete", "id": entity_id})

    # ==================================================================
    # Helpers
    # ==================================================================

    async def _scalars(self, query) -> list[ModelType]:
        async with db_error_handler(self.db, self.model.__name__, operation="retrieve"):
            result = await self.db.execute(query.execution_options(populate_existing=True))
            entities = list(result.scalars().all())

        logger.debug("repo.list", extra={"model": self.model.__name__, "count": len(entities)})
        return entities

    async def _raise_on_conflicts(self, kwargs: dict, *, operation: str, exclude_id: int | None = None) -> None:
        conflicts = await find_unique_conflicts(self.db, self.model, kwargs, exclude_id=exclude_id)
        if not conflicts:
            return

        logger.info(
            f"repo.{operation}.duplicate_precheck",
            extra={"model": self.model.__name__, "operation": operation, "conflict_fields": sorted(conflicts)},
        )
        message = self.duplicate_message or (
            f"{self.model.__name__} already exists for field(s): {', '.join(sorted(conflicts))}"
        )
        raise DuplicateError(message, fields=sorted(conflicts))
