"""Stakeholders, task helpers and the person lookup used by travel screens."""

from typing import Any

from fastapi import APIRouter, status

from ...core.dependencies import DbSession, EntityId
from ...exceptions.base import ValidationException
from ...mappers.serializer import serialize, serialize_many
from ...models.enums import PartyStatus
from ...models.person import Stakeholder, StakeholderRelationship
from ...schemas.people import (
    StakeholderCreate,
    StakeholderRelationshipCreate,
    StakeholderUpdate,
    TaskHelperCreate,
    TaskHelperUpdate,
)
from ...services.people_service import StakeholderRelationshipService, StakeholderService, TaskHelperService
from ...services.person_resolver import (
    DEFAULT_SEARCH_LIMIT,
    PersonResolver,
    parse_person_type,
    require_search_term,
)
from ...validators.request_validators import is_blank, parse_enum, parse_id, parse_limit

STAKEHOLDER_SEARCH_LIMIT = 10

# ======================================================================
# Stakeholders
# ======================================================================

stakeholders_router = APIRouter()


def display_info(stakeholder: Stakeholder) -> str:
    """"First Last - email - phone", skipping whichever contact is missing."""
    parts = [f"{stakeholder.first_name} {stakeholder.last_name}", stakeholder.email, stakeholder.phone]
    return " - ".join(p for p in parts if p)


def _brief(stakeholder: Stakeholder) -> dict[str, Any]:
    return {
        "id": stakeholder.id,
        "firstName": stakeholder.first_name,
        "middleName": stakeholder.middle_name,
        "lastName": stakeholder.last_name,
        "gender": stakeholder.gender,
    }


def _relationship(link: StakeholderRelationship) -> dict[str, Any]:
    return serialize(link, extra={"from": _brief(link.from_stakeholder), "to": _brief(link.to_stakeholder)})


@stakeholders_router.get("")
async def list_stakeholders(
    db: DbSession, search: str | None = None, relationship: str | None = None
) -> list[dict[str, Any]]:
    return serialize_many(await StakeholderService(db).list(search=search, relationship=relationship))


@stakeholders_router.post("", status_code=status.HTTP_201_CREATED)
async def create_stakeholder(body: StakeholderCreate, db: DbSession) -> dict[str, Any]:
    return serialize(await StakeholderService(db).create(body.to_fields(drop_none=True)))


@stakeholders_router.get("/search")
async def search_stakeholders(db: DbSession, q: str | None = None, limit: str | None = None) -> dict[str, Any]:
    term = require_search_term(q)
    found = await StakeholderService(db).quick_search(term, parse_limit(limit, STAKEHOLDER_SEARCH_LIMIT))
    return {
        "stakeholders": [serialize(s, extra={"displayInfo": display_info(s)}) for s in found],
        "count": len(found),
    }


@stakeholders_router.get("/relationships")
async def list_relationships(db: DbSession) -> list[dict[str, Any]]:
    return [_relationship(link) for link in await StakeholderRelationshipService(db).list()]


@stakeholders_router.post("/relationships", status_code=status.HTTP_201_CREATED)
async def create_relationship(body: StakeholderRelationshipCreate, db: DbSession) -> dict[str, Any]:
    fields = body.to_fields(exclude={"create_reverse"}, drop_none=True)
    link = await StakeholderRelationshipService(db).create(fields, create_reverse=body.create_reverse)
    return _relationship(link)


@stakeholders_router.delete("/relationships")
async def delete_relationship(db: DbSession, id: str | None = None) -> dict[str, bool]:
    if is_blank(id):
        raise ValidationException.from_field_error("id", "Relationship ID is required")
    await StakeholderRelationshipService(db).delete(parse_id(id))
    return {"success": True}


@stakeholders_router.get("/{id}")
async def get_stakeholder(id: EntityId, db: DbSession) -> dict[str, Any]:
    return serialize(await StakeholderService(db).get(id))


@stakeholders_router.put("/{id}")
async def update_stakeholder(id: EntityId, body: StakeholderUpdate, db: DbSession) -> dict[str, Any]:
    return serialize(await StakeholderService(db).update(id, body.to_fields()))


@stakeholders_router.delete("/{id}")
async def delete_stakeholder(id: EntityId, db: DbSession) -> dict[str, str]:
    await StakeholderService(db).delete(id)
    return {"message": "Stakeholder deleted successfully"}


# ======================================================================
# Task helpers
# ======================================================================

task_helpers_router = APIRouter()


@task_helpers_router.get("")
async def list_task_helpers(
    db: DbSession, search: str | None = None, status: str | None = None
) -> list[dict[str, Any]]:
    helpers = await TaskHelperService(db).list(search=search, status=parse_enum(status, PartyStatus, "status"))
    return serialize_many(helpers)


@task_helpers_router.post("", status_code=status.HTTP_201_CREATED)
async def create_task_helper(body: TaskHelperCreate, db: DbSession) -> dict[str, Any]:
    return serialize(await TaskHelperService(db).create(body.to_fields(drop_none=True)))


@task_helpers_router.get("/{id}")
async def get_task_helper(id: EntityId, db: DbSession) -> dict[str, Any]:
    return serialize(await TaskHelperService(db).get(id))


@task_helpers_router.put("/{id}")
async def update_task_helper(id: EntityId, body: TaskHelperUpdate, db: DbSession) -> dict[str, Any]:
    return serialize(await TaskHelperService(db).update(id, body.to_fields()))


@task_helpers_router.delete("/{id}")
async def delete_task_helper(id: EntityId, db: DbSession) -> dict[str, str]:
    await TaskHelperService(db).delete(id)
    return {"message": "Task helper deleted successfully"}


# ======================================================================
# Person lookup
# ======================================================================

persons_router = APIRouter()


@persons_router.get("/search")
async def search_persons(
    db: DbSession, q: str | None = None, type: str | None = None, limit: str | None = None
) -> dict[str, Any]:
    """Matches from every person table, or only `type` when given. `limit` caps each table."""
    kind = None if is_blank(type) else parse_person_type(type, "type")
    found = await PersonResolver(db).search(q, kind, parse_limit(limit, DEFAULT_SEARCH_LIMIT))
    return {"success": True, "data": [p.to_search_result() for p in found], "count": len(found)}


@persons_router.get("/{person_type}/{person_id}")
async def get_person(person_type: str, person_id: str, db: DbSession) -> dict[str, Any]:
    """`person_type` takes any spelling `parse_person_type` accepts."""
    kind = parse_person_type(person_type)
    person = await PersonResolver(db).resolve_or_raise(kind, parse_id(person_id, "personId"))
    return person.to_dict()
