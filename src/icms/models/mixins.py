from sqlalchemy import String, event, inspect
from sqlalchemy.orm import Mapped, mapped_column

from ..utils.names import build_full_name

NAME_PARTS = ("first_name", "middle_name", "last_name")


class PersonNameMixin:
    """
    first/middle/last name columns plus a stored `full_name` that is recomputed
    on every insert and on every update touching a name part. A client-supplied
    full_name never survives when name parts are present; clearing every part
    of a stored row clears full_name too.
    """

    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    middle_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    full_name: Mapped[str | None] = mapped_column(String(300), nullable=True, index=True)

    def compute_full_name(self) -> str | None:
        name = build_full_name(self.first_name, self.middle_name, self.last_name)
        return name or None

    def name_parts_changed(self) -> bool:
        state = inspect(self)
        return state.persistent and any(state.attrs[part].history.has_changes() for part in NAME_PARTS)

    def sync_full_name(self) -> None:
        computed = self.compute_full_name()
        if computed is not None or self.name_parts_changed():
            self.full_name = computed


@event.listens_for(PersonNameMixin, "before_insert", propagate=True)
@event.listens_for(PersonNameMixin, "before_update", propagate=True)
def _sync_full_name(mapper, connection, target: PersonNameMixin) -> None:
    target.sync_full_name()
