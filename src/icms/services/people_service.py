import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..database.unit_of_work import unit_of_work
from ..exceptions.base import DuplicateError, ValidationException
from ..models.person import Stakeholder, StakeholderRelationship, TaskHelper
from ..repositories.person_repository import (
    StakeholderRelationshipRepository,
    StakeholderRepository,
    TaskHelperRepository,
)
from ..validators.request_validators import normalize_email, require_fields
from .record_service import RecordService

logger = logging.getLogger(__name__)

SPOUSE_TYPES = {"spouse", "husband", "wife"}
STAKEHOLDER_NOT_FOUND = "Stakeholder not found"

# (stakeholder to update, family columns to set on it)
FamilyUpdate = tuple[Stakeholder, dict[str, int]]


def _normalized(fields: dict[str, Any], key: str) -> dict[str, Any]:
    if fields.get(key) is not None:
        fields[key] = normalize_email(fields[key], key)
    return fields


def family_links(relationship_type: str, source: Stakeholder, target: Stakeholder) -> tuple[str | None, list[FamilyUpdate]]:
    """
    The reverse relationship type implied by `source` being `relationship_type`
    of `target`, plus the spouse/father/mother columns that follow from it.

    For `child` the parent role is taken from `source.gender`: female means
    mother, anything else father. Types without a known reverse give `(None, [])`.
    """
    if relationship_type in SPOUSE_TYPES:
        return "spouse", [(source, {"spouse_id": target.id}), (target, {"spouse_id": source.id})]
    if relationship_type == "father":
        return "child", [(target, {"father_id": source.id})]
    if relationship_type == "mother":
        return "child", [(target, {"mother_id": source.id})]
    if relationship_type == "child":
        parent_role = "mother" if (source.gender or "").strip().lower() == "female" else "father"
        return parent_role, [(target, {f"{parent_role}_id": source.id})]
    if relationship_type == "sibling":
        return "sibling", []
    return None, []


class StakeholderService(RecordService[Stakeholder]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, StakeholderRepository(db), label="Stakeholder")

    async def quick_search(self, term: str, limit: int) -> list[Stakeholder]:
        return await self.repository.quick_search(term, limit)

    async def list(self, **filters: Any) -> list[Stakeholder]:
        return await self.repository.search(**filters)

    def prepare_create(self, fields: dict[str, Any]) -> dict[str, Any]:
        return _normalized(fields, "email")

    def prepare_update(self, entity: Stakeholder, fields: dict[str, Any]) -> dict[str, Any]:
        return _normalized(fields, "email")


class StakeholderRelationshipService:
    """
    Directed links between stakeholders. Creating a family link also writes
    the reverse link (when it is missing) and the spouse/parent columns, all
    in one transaction.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = StakeholderRelationshipRepository(db)
        self.stakeholders = StakeholderRepository(db)

    async def list(self) -> list[StakeholderRelationship]:
        return await self.repository.find_all()

    async def create(self, fields: dict[str, Any], create_reverse: bool = True) -> StakeholderRelationship:
        require_fields(
            {
                "fromId": fields.get("from_id"),
                "toId": fields.get("to_id"),
                "relationshipType": fields.get("relationship_type"),
            },
            ["fromId", "toId", "relationshipType"],
        )
        from_id, to_id = fields["from_id"], fields["to_id"]
        if from_id == to_id:
            raise ValidationException.from_field_error("toId", "Cannot create relationship to self", to_id)

        relationship_type = fields["relationship_type"].strip().lower()
        source = await self.stakeholders.get_by_id_or_raise(from_id, message=STAKEHOLDER_NOT_FOUND)
        target = await self.stakeholders.get_by_id_or_raise(to_id, message=STAKEHOLDER_NOT_FOUND)
        if await self.repository.find_link(from_id, to_id, relationship_type) is not None:
            raise DuplicateError(self.repository.duplicate_message, fields=["fromId", "toId", "relationshipType"])

        async with unit_of_work(self.db, self.repository.name):
            link = await self.repository.create(**{**fields, "relationship_type": relationship_type})
            if create_reverse:
                await self._link_family(link, source, target)

        logger.info(
            "stakeholders.relationship.created",
            extra={"id": link.id, "from_id": from_id, "to_id": to_id, "type": relationship_type},
        )
        return await self.repository.get_by_id_or_raise(link.id)

    async def _link_family(self, link: StakeholderRelationship, source: Stakeholder, target: Stakeholder) -> None:
        reverse_type, updates = family_links(link.relationship_type, source, target)
        for stakeholder, columns in updates:
            await self.stakeholders.update(stakeholder, **columns)
        if reverse_type is None:
            return
        if await self.repository.find_link(target.id, source.id, reverse_type) is None:
            await self.repository.create(
                from_id=target.id,
                to_id=source.id,
                relationship_type=reverse_type,
                description=f"Reverse of {link.relationship_type}",
                strength=link.strength,
                since=link.since,
                notes="Auto-created reverse relationship",
            )

    async def delete(self, relationship_id: int) -> None:
        link = await self.repository.get_by_id_or_raise(relationship_id, message="Relationship not found")
        async with unit_of_work(self.db, self.repository.name):
            await self.repository.delete(link)


class TaskHelperService(RecordService[TaskHelper]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, TaskHelperRepository(db), label="Task helper")

    async def list(self, **filters: Any) -> list[TaskHelper]:
        return await self.repository.search(**filters)

    def prepare_create(self, fields: dict[str, Any]) -> dict[str, Any]:
        return _normalized(fields, "primary_email")

    def prepare_update(self, entity: TaskHelper, fields: dict[str, Any]) -> dict[str, Any]:
        return _normalized(fields, "primary_email")
