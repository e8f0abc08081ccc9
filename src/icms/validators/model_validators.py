from typing import Iterable

from sqlalchemy import UniqueConstraint, and_, inspect as sa_inspect, select


def find_unknown_model_kwargs(model, kwargs: dict) -> list[str]:
    """
    Return list of unknown kwarg keys that are not part of the model's mapped attributes.
    - model: the SQLAlchemy model class (not instance)
    - kwargs: dict of incoming kwargs to validate
    """
    mapper = sa_inspect(model)
    # mapper.attrs includes columns and relationships; attr.key is the name callers use
    allowed = {attr.key for attr in mapper.attrs}
    return [k for k in kwargs.keys() if k not in allowed]


def get_required_columns(model) -> list[str]:
    """
    Columns that are NOT NULL and have no server/default and are not simple auto PKs.
    """
    cols = []
    for col in model.__table__.columns:
        has_default = col.default is not None or col.server_default is not None
        is_auto_pk = col.primary_key and col.autoincrement in (True, "auto")
        if not col.nullable and not has_default and not is_auto_pk:
            cols.append(col.key)
    return cols


def get_unique_column_sets(model) -> list[Iterable[str]]:
    """
    Unique column sets: Column(unique=True), UniqueConstraint and unconditional
    unique indexes. Partial unique indexes (with a WHERE clause) are skipped because
    a plain equality query cannot reproduce them.
    """
    unique_sets = []

    for col in model.__table__.columns:
        if col.unique:
            unique_sets.append([col.key])

    for constraint in model.__table__.constraints:
        if isinstance(constraint, UniqueConstraint):
            unique_sets.append([c.key for c in constraint.columns])

    for idx in model.__table__.indexes:
        partial = idx.dialect_options["postgresql"].get("where") is not None or \
            idx.dialect_options["sqlite"].get("where") is not None
        if idx.unique and not partial:
            unique_sets.append([c.key for c in idx.columns])

    return unique_sets


async def find_unique_conflicts(db, model, kwargs: dict, exclude_id: int | None = None) -> set[str]:
    """
    Run pre-write queries to detect existing rows that would violate unique constraints.
    Returns a set of column names that conflict (best-effort). `exclude_id` skips the
    row being updated.
    """
    conflicts = set()

    for cols in get_unique_column_sets(model):
        if not all(kwargs.get(c) is not None for c in cols):
            continue

        conditions = [getattr(model, c) == kwargs[c] for c in cols]
        if exclude_id is not None:
            conditions.append(model.id != exclude_id)
        q = select(model.id).where(and_(*conditions)).limit(1)

        res = await db.execute(q)
        if res.scalar() is not None:
            conflicts.update(cols)

    return conflicts
