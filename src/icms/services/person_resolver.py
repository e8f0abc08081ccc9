"""
Resolution and search of `(person_type, person_id)` references.

Passengers, room assignments, event participants and communication recipients
point at a person by tag and id rather than by foreign key. Every lookup goes
through `PersonResolver`, which keeps one `PersonSource` per `PersonType`: the
table, how a row is described, and which columns a free-text search scans.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable

from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions.base import NotFoundException, ValidationException
from ..models.employee import Employee
from ..models.employer import Employer
from ..models.enums import PersonType
from ..models.person import Stakeholder, TaskHelper
from ..repositories.base_repository import BaseRepository
from ..validators.request_validators import parse_enum

logger = logging.getLogger(__name__)

MIN_SEARCH_LENGTH = 2
DEFAULT_SEARCH_LIMIT = 20


@dataclass(frozen=True)
class PersonDetails:
    person_type: PersonType
    person_id: int
    name: str
    email: str | None = None
    phone: str | None = None
    nationality: str | None = None

    @property
    def contact(self) -> str | None:
        return self.email or self.phone

    def to_dict(self) -> dict[str, Any]:
        return {
            "personType": self.person_type.value,
            "personId": self.person_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
        }

    def to_search_result(self) -> dict[str, Any]:
        return {
            "id": self.person_id,
            "fullName": self.name or "Unknown",
            "email": self.email,
            "phone": self.phone,
            "nationality": self.nationality,
            "type": self.person_type.value,
        }


def parse_person_type(raw: Any, field: str = "personType") -> PersonType:
    """'employee', 'TASK_HELPER' and 'task-helper' are all accepted."""
    text = str(raw or "").strip().replace("-", "_")
    if not text:
        raise ValidationException.from_field_error(field, f"{field} is required")
    return parse_enum(text, PersonType, field)


def require_search_term(term: str | None) -> str:
    text = (term or "").strip()
    if len(text) < MIN_SEARCH_LENGTH:
        raise ValidationException.from_field_error(
            "q", f"Search term must be at least {MIN_SEARCH_LENGTH} characters", term
        )
    return text


@dataclass(frozen=True)
class PersonSource:
    model: type
    describe: Callable[[Any], PersonDetails]
    search_columns: tuple[str, ...]

    async def load(self, db: AsyncSession, person_id: int) -> PersonDetails | None:
        row = await BaseRepository(self.model, db).get_by_id(person_id)
        return None if row is None else self.describe(row)

    async def search(self, db: AsyncSession, term: str, limit: int) -> list[PersonDetails]:
        pattern = f"%{term.lower()}%"
        matches = or_(*(func.lower(getattr(self.model, column)).like(pattern) for column in self.search_columns))
        rows = await BaseRepository(self.model, db).find_all(matches, order_by=(self.model.id,), limit=limit)
        return [self.describe(row) for row in rows]


DEFAULT_SOURCES: dict[PersonType, PersonSource] = {
    PersonType.EMPLOYEE: PersonSource(
        Employee,
        lambda e: PersonDetails(
            PersonType.EMPLOYEE, e.id, e.full_name or "", e.email, e.phone_number, e.nationality
        ),
        ("full_name", "first_name", "last_name", "email", "phone_number"),
    ),
    PersonType.STAKEHOLDER: PersonSource(
        Stakeholder,
        lambda s: PersonDetails(PersonType.STAKEHOLDER, s.id, s.full_name or "", s.email, s.phone, s.nationality),
        ("full_name", "first_name", "middle_name", "last_name", "email", "phone"),
    ),
    PersonType.EMPLOYER: PersonSource(
        Employer,
        lambda e: PersonDetails(
            PersonType.EMPLOYER,
            e.id,
            e.display_name,
            e.primary_email or e.secondary_email,
            e.main_phone or e.mobile_number or e.alternate_phone,
        ),
        ("company_name", "full_name", "primary_email", "secondary_email", "main_phone", "alternate_phone"),
    ),
    PersonType.TASK_HELPER: PersonSource(
        TaskHelper,
        lambda h: PersonDetails(
            PersonType.TASK_HELPER,
            h.id,
            h.full_name or "",
            h.primary_email,
            h.whatsapp_number or h.primary_phone,
            h.nationality,
        ),
        ("full_name", "primary_email", "primary_phone"),
    ),
}


class PersonResolver:
    def __init__(self, db: AsyncSession, sources: dict[PersonType, PersonSource] | None = None):
        self.db = db
        self.sources = dict(sources or DEFAULT_SOURCES)

    async def resolve(self, person_type: PersonType | None, person_id: int | None) -> PersonDetails | None:
        if person_type is None or person_id is None:
            return None
        source = self.sources.get(PersonType(person_type))
        if source is None:
            logger.warning("persons.source.missing", extra={"person_type": str(person_type)})
            return None
        return await source.load(self.db, person_id)

    async def resolve_or_raise(self, person_type: PersonType, person_id: int) -> PersonDetails:
        person = await self.resolve(person_type, person_id)
        if person is None:
            raise NotFoundException("Person", person_id, message=f"{person_type.value} with id {person_id} not found")
        return person

    async def resolve_many(self, refs: list[tuple[PersonType, int]]) -> dict[tuple[PersonType, int], PersonDetails]:
        """Each distinct reference is looked up once; unresolved ones are left out."""
        found: dict[tuple[PersonType, int], PersonDetails] = {}
        for ref in dict.fromkeys(refs):
            person = await self.resolve(*ref)
            if person is not None:
                found[ref] = person
        return found

    async def search(
        self, term: str | None, person_type: PersonType | None = None, limit: int = DEFAULT_SEARCH_LIMIT
    ) -> list[PersonDetails]:
        """
        Case-insensitive substring search over names, emails and phones.
        `limit` applies per person type; results keep the order of `sources`.
        """
        text = require_search_term(term)
        kinds = [person_type] if person_type is not None else list(self.sources)
        results: list[PersonDetails] = []
        for kind in kinds:
            results.extend(await self.sources[kind].search(self.db, text, limit))
        logger.debug("persons.search", extra={"types": [k.value for k in kinds], "matches": len(results)})
        return results
