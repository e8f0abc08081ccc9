from typing import Any

from fastapi import APIRouter, Query, status

from ...core.dependencies import DbSession, EntityId
from ...mappers.employer_mapper import EmployerMapper
from ...models.enums import PartyStatus
from ...schemas.people import EmployerCreate, EmployerUpdate
from ...services.party_service import EmployerService
from ...validators.request_validators import parse_bool, parse_enum
from .contacts import contact_router, parent_contact_routes

router = APIRouter()


@router.get("")
async def list_employers(
    db: DbSession,
    search: str | None = None,
    industry: str | None = None,
    relationship_type: str | None = Query(None, alias="relationshipType"),
    status: str | None = None,
    include_contacts: str | None = Query(None, alias="includeContacts"),
) -> dict[str, Any]:
    service = EmployerService(db)
    employers = await service.parents.search(
        search=search,
        industry=industry,
        relationship_type=relationship_type,
        status=parse_enum(status, PartyStatus, "status"),
    )
    facets = await service.facets()
    return EmployerMapper.to_list_response_dto(
        employers,
        stats=facets["stats"],
        industries=facets["industries"],
        relationship_types=facets["relationship_types"],
        include_contacts=parse_bool(include_contacts),
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_employer(body: EmployerCreate, db: DbSession) -> dict[str, Any]:
    """INDIVIDUAL employers get `fullName` from their name parts; contacts are created alongside."""
    employer = await EmployerService(db).create(
        body.to_fields(drop_none=True),
        contacts=body.nested_payload().get("contacts", ()),
    )
    return EmployerMapper.to_detailed_response_dto(employer)


@router.get("/{id}")
async def get_employer(id: EntityId, db: DbSession) -> dict[str, Any]:
    return EmployerMapper.to_detailed_response_dto(await EmployerService(db).get(id))


@router.put("/{id}")
async def update_employer(id: EntityId, body: EmployerUpdate, db: DbSession) -> dict[str, Any]:
    employer = await EmployerService(db).update(id, body.to_fields())
    return EmployerMapper.to_detailed_response_dto(employer)


@router.delete("/{id}")
async def delete_employer(id: EntityId, db: DbSession) -> dict[str, str]:
    await EmployerService(db).delete(id)
    return {"message": "Employer deleted successfully"}


parent_contact_routes(router, EmployerService)

contacts_router = contact_router(EmployerService)
