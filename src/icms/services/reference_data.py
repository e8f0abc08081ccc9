"""
Two-tier reads for reference lists (departments, positions).

The database answers when it can. When it is unreachable the reader serves a
static list instead and says so, so the degraded mode is an ordinary return
value rather than a side effect of an exception handler.
"""

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions.base import ServiceUnavailableError
from ..mappers.serializer import serialize_many
from ..repositories.base_repository import BaseRepository
from ..repositories.person_repository import DepartmentRepository, PositionRepository

logger = logging.getLogger(__name__)

SOURCE_DATABASE = "database"
SOURCE_FALLBACK = "fallback"


def _department(id_: int, name: str, code: str, description: str | None = None) -> dict[str, Any]:
    return {"id": id_, "name": name, "code": code, "description": description or f"{name} Department"}


FALLBACK_DEPARTMENTS: tuple[dict[str, Any], ...] = (
    _department(1, "Human Resources", "HR"),
    _department(2, "Information Technology", "IT", "IT Department"),
    _department(3, "Finance", "FIN"),
    _department(4, "Marketing", "MKT"),
    _department(5, "Sales", "SALES"),
    _department(6, "Operations", "OPS"),
    _department(7, "Senior Management Offices", "SMO"),
    _department(8, "Private House", "PH"),
)

_POSITIONS = (
    ("CEO", "Chief Executive Officer"),
    ("CTO", "Chief Technology Officer"),
    ("CFO", "Chief Financial Officer"),
    ("COO", "Chief Operations Officer"),
    ("Senior Manager", "Senior Management Position"),
    ("Manager", "Management Position"),
    ("Senior Developer", "Senior Software Developer"),
    ("Developer", "Software Developer"),
    ("Junior Developer", "Junior Software Developer"),
    ("HR Manager", "Human Resources Manager"),
    ("HR Specialist", "Human Resources Specialist"),
    ("Finance Manager", "Finance Manager"),
    ("Accountant", "Accountant"),
    ("Marketing Manager", "Marketing Manager"),
    ("Marketing Specialist", "Marketing Specialist"),
    ("Sales Manager", "Sales Manager"),
    ("Sales Representative", "Sales Representative"),
    ("Operations Manager", "Operations Manager"),
    ("Operations Coordinator", "Operations Coordinator"),
    ("Executive Assistant", "Executive Assistant for Senior Management"),
    ("Private Secretary", "Private Secretary"),
    ("House Manager", "Private House Manager"),
    ("House Staff", "Private House Staff"),
)

FALLBACK_POSITIONS: tuple[dict[str, Any], ...] = tuple(
    {"id": i, "name": name, "code": None, "description": description}
    for i, (name, description) in enumerate(_POSITIONS, start=1)
)


@dataclass(frozen=True)
class ReferenceData:
    items: list[dict[str, Any]]
    source: str

    @property
    def from_fallback(self) -> bool:
        return self.source == SOURCE_FALLBACK


class ReferenceDataReader:
    def __init__(self, repository: BaseRepository, fallback: tuple[dict[str, Any], ...], label: str):
        self.repository = repository
        self.fallback = fallback
        self.label = label

    async def read(self) -> ReferenceData:
        try:
            rows = await self.repository.find_all()
        except ServiceUnavailableError:
            logger.warning("reference.fallback", extra={"reference": self.label, "count": len(self.fallback)})
            return ReferenceData([dict(item) for item in self.fallback], SOURCE_FALLBACK)
        return ReferenceData(serialize_many(rows), SOURCE_DATABASE)


def departments_reader(db: AsyncSession) -> ReferenceDataReader:
    return ReferenceDataReader(DepartmentRepository(db), FALLBACK_DEPARTMENTS, "departments")


def positions_reader(db: AsyncSession) -> ReferenceDataReader:
    return ReferenceDataReader(PositionRepository(db), FALLBACK_POSITIONS, "positions")
