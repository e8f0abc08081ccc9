import logging
from enum import Enum
from typing import Type
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)

# =================================================================================================================
# Constraint kinds
# =================================================================================================================
# Internal labels only. The mapper turns them into DuplicateError / ValidationException / RepositoryError.


class ConstraintViolation:
    """Base label for integrity/constraint violations."""


class UniqueConstraint(ConstraintViolation):
    """Unique constraint / duplicate value."""


class NotNullConstraint(ConstraintViolation):
    """NOT NULL violation (missing required field)."""


class ForeignKeyConstraint(ConstraintViolation):
    """Foreign key constraint violated."""


class CheckConstraint(ConstraintViolation):
    """CHECK constraint violated."""


class UnknownIntegrity(ConstraintViolation):
    """Unrecognized integrity error."""


# =================================================================================================================
# Postgres error code mapping
# =================================================================================================================

# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"


PGCODE_KIND_MAP = {
    PostgresErrorCodes.UNIQUE_VIOLATION.value: UniqueConstraint,
    PostgresErrorCodes.NOT_NULL_VIOLATION.value: NotNullConstraint,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION.value: ForeignKeyConstraint,
    PostgresErrorCodes.CHECK_VIOLATION.value: CheckConstraint,
}

# Substrings checked in order against the lower-cased driver message.
UNIQUE_MARKERS = ["unique constraint", "unique failed", "unique violation", "duplicate"]
NOT_NULL_MARKERS = ["not null constraint", "not null", "null value in column"]
FOREIGN_KEY_MARKERS = ["foreign key constraint", "foreign key", "is not present in table"]
CHECK_MARKERS = ["check constraint", "check failed"]


# =================================================================================================================
# Classifiers
# =================================================================================================================

def _match_any(msg: str, keywords: list[str]) -> bool:
    return any(keyword in msg for keyword in keywords)


def _pgcode_of(orig) -> str | None:
    # psycopg exposes `pgcode`, asyncpg exposes `sqlstate` (wrapped by SQLAlchemy's adapter)
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def _classify_from_postgres_diag(orig) -> tuple[Type[ConstraintViolation] | None, str | None]:
    pgcode = _pgcode_of(orig)
    if not pgcode:
        return None, None

    diag = getattr(orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None) if diag else None
    constraint_name = constraint_name or getattr(orig, "constraint_name", None)

    kind = PGCODE_KIND_MAP.get(pgcode)
    if kind:
        logger.debug("Postgres integrity diagnostic",
                     extra={"pgcode": pgcode, "constraint_name": constraint_name})
        return kind, constraint_name

    logger.warning(
        "Unknown Postgres integrity error code encountered",
        extra={"pgcode": pgcode, "constraint_name": constraint_name},
    )
    return UnknownIntegrity, constraint_name


def classify_message(msg: str) -> Type[ConstraintViolation]:
    """
    Classify a driver message by substring. Used for SQLite/MySQL and as the
    fallback when no pgcode is available.
    """
    normalized = (msg or "").lower()

    if _match_any(normalized, UNIQUE_MARKERS):
        return UniqueConstraint
    if _match_any(normalized, NOT_NULL_MARKERS):
        return NotNullConstraint
    if _match_any(normalized, FOREIGN_KEY_MARKERS):
        return ForeignKeyConstraint
    if _match_any(normalized, CHECK_MARKERS):
        return CheckConstraint

    logger.warning("Unknown integrity error message encountered", extra={"message_snippet": normalized[:200]})
    return UnknownIntegrity


def classify_integrity_error(exc: IntegrityError) -> tuple[Type[ConstraintViolation], str | None]:
    """
    Heuristically classify a SQLAlchemy IntegrityError.

    Returns:
        (kind, constraint_name or None)
    """
    orig = exc.orig

    kind, constraint_name = _classify_from_postgres_diag(orig)
    if kind is not None:
        return kind, constraint_name

    return classify_message(str(orig) if orig is not None else str(exc)), None
