import re
import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError, OperationalError, InterfaceError, DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import (
    classify_integrity_error,
    UniqueConstraint,
    NotNullConstraint,
    ForeignKeyConstraint,
    CheckConstraint,
)
from .base import (
    DomainException,
    DuplicateError,
    FieldError,
    RepositoryError,
    ServiceUnavailableError,
    ValidationException,
)

logger = logging.getLogger(__name__)

DB_UNAVAILABLE_MESSAGE = "Database not available. Please try again later."
DB_UNAVAILABLE_DETAILS = "The application needs a database connection to work properly."

# -----------------------
# Column extraction helpers
# -----------------------

def _extract_columns_postgres(msg: str) -> list[str] | None:
    """
    - 'null value in column "email" violates not-null constraint'
    - 'DETAIL:  Key (email)=(a@b.com) already exists.'
    """
    m = re.search(r'null value in column "(?P<col>[^"]+)"', msg, flags=re.IGNORECASE)
    if m:
        return [m.group("col")]

    m = re.search(r'key \((?P<cols>[^)]+)\)=', msg, flags=re.IGNORECASE)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]

    return None


def _extract_columns_sqlite(msg: str) -> list[str] | None:
    # 'UNIQUE constraint failed: employees.email' / 'NOT NULL constraint failed: employees.email'
    m = re.search(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>[^\n\[]+)', msg, flags=re.IGNORECASE)
    if m:
        return [c.split('.')[-1].strip() for c in re.split(r',\s*', m.group("cols").strip())]
    return None


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """
    Best-effort extraction of column names from the DB message (Postgres, SQLite).
    """
    msg = str(exc.orig) if exc.orig is not None else str(exc)
    if not msg:
        return None
    return _extract_columns_postgres(msg) or _extract_columns_sqlite(msg)


def is_connection_error(exc: BaseException) -> bool:
    """True when the failure means the database cannot be reached at all."""
    if isinstance(exc, (OperationalError, InterfaceError)):
        return True
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return True
    # asyncpg connect failures and pool timeouts surface unwrapped
    return isinstance(exc, (ConnectionError, TimeoutError, OSError))


# -----------------------
# Mapper
# -----------------------

def raise_mapped_integrity_error(
    exc: IntegrityError,
    model_name: str | None = None,
    duplicate_message: str | None = None,
) -> None:
    """
    Map a SQLAlchemy IntegrityError to an app-level exception and raise it.

    `duplicate_message` overrides the generic conflict text for resources whose
    clients expect a specific sentence.
    """
    kind, constraint_name = classify_integrity_error(exc)
    columns = extract_columns_from_integrity(exc)
    model_part = model_name or "Record"

    if kind is UniqueConstraint:
        logger.info(
            "mapper.duplicate_detected",
            extra={"model": model_part, "fields": columns, "constraint": constraint_name},
        )
        if duplicate_message:
            raise DuplicateError(duplicate_message, fields=columns, constraint=constraint_name) from exc
        if columns:
            raise DuplicateError(
                f"{model_part} already exists for field(s): {', '.join(columns)}",
                fields=columns, constraint=constraint_name,
            ) from exc
        raise DuplicateError(f"{model_part} already exists (unique constraint)", constraint=constraint_name) from exc

    if kind is NotNullConstraint:
        logger.info(
            "mapper.not_null_violation",
            extra={"model": model_part, "fields": columns, "constraint": constraint_name},
        )
        if columns:
            raise ValidationException.from_field_errors(
                FieldError(col, f"{col} is required") for col in columns
            ) from exc
        raise ValidationException(f"Missing required field for {model_part}") from exc

    if kind is ForeignKeyConstraint:
        logger.info(
            "mapper.foreign_key_violation",
            extra={"model": model_part, "fields": columns, "constraint": constraint_name},
        )
        raise RepositoryError(
            f"{model_part} references a record that does not exist",
            fields=columns, constraint=constraint_name,
        ) from exc

    if kind is CheckConstraint:
        logger.debug(
            "mapper.check_constraint_failure",
            extra={"model": model_part, "raw": str(exc.orig), "constraint": constraint_name},
        )
        raise RepositoryError(
            f"{model_part} business rule violated (check constraint).", constraint=constraint_name
        ) from exc

    logger.warning("mapper.unknown_integrity_error", extra={"model": model_part, "constraint": constraint_name})
    logger.debug("mapper.unknown_integrity_raw", extra={"model": model_part, "raw": str(exc.orig)})
    raise RepositoryError(f"{model_part} database integrity error.") from exc


def raise_mapped_db_error(exc: Exception, model_name: str | None, operation: str) -> None:
    """
    Re-classify a non-integrity persistence failure: connection problems become
    ServiceUnavailableError (503), everything else a generic RepositoryError.
    """
    if is_connection_error(exc):
        logger.error(
            "mapper.database_unavailable",
            extra={"model": model_name, "operation": operation, "error_type": type(exc).__name__},
        )
        raise ServiceUnavailableError(DB_UNAVAILABLE_MESSAGE, details=DB_UNAVAILABLE_DETAILS) from exc

    logger.exception("Unexpected DB error for %s", model_name, extra={"model": model_name, "operation": operation})
    raise RepositoryError(f"Failed to {operation} {model_name or 'record'}") from exc


# -----------------------
# Async context manager to DRY error handling in repositories
# -----------------------
@asynccontextmanager
async def db_error_handler(
    db: AsyncSession,
    model_name: str | None = None,
    *,
    operation: str = "operate on",
    duplicate_message: str | None = None,
):
    """
    Usage:
        async with db_error_handler(self.db, self.model.__name__, operation="create"):
            ... DB ops that may raise IntegrityError ...

    Rolls back on error and raises a mapped app-level exception. Domain
    exceptions raised inside the block pass through unchanged.
    """
    try:
        yield
    except DomainException:
        await _safe_rollback(db, model_name)
        raise
    except IntegrityError as exc:
        await _safe_rollback(db, model_name)
        raise_mapped_integrity_error(exc, model_name, duplicate_message)
    except Exception as exc:
        await _safe_rollback(db, model_name)
        raise_mapped_db_error(exc, model_name, operation)


async def _safe_rollback(db: AsyncSession, model_name: str | None) -> None:
    try:
        await db.rollback()
    except Exception:
        # the caller re-raises the original error
        logger.exception("Failed to rollback session", extra={"model": model_name})
