from typing import Any

from fastapi import APIRouter, status

from ...core.dependencies import DbSession, EntityId
from ...mappers.serializer import serialize, serialize_many
from ...models.enums import PartyStatus
from ...schemas.people import ContractorCreate, ContractorUpdate
from ...services.party_service import ContractorService
from ...validators.request_validators import parse_enum
from .contacts import contact_router, parent_contact_routes

router = APIRouter()


@router.get("")
async def list_contractors(
    db: DbSession,
    search: str | None = None,
    specialization: str | None = None,
    status: str | None = None,
) -> list[dict[str, Any]]:
    contractors = await ContractorService(db).parents.search(
        search=search,
        specialization=specialization,
        status=parse_enum(status, PartyStatus, "status"),
    )
    return serialize_many(contractors)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_contractor(body: ContractorCreate, db: DbSession) -> dict[str, Any]:
    contractor = await ContractorService(db).create(
        body.to_fields(drop_none=True),
        contacts=body.nested_payload().get("contacts", ()),
    )
    return serialize(contractor)


@router.get("/{id}")
async def get_contractor(id: EntityId, db: DbSession) -> dict[str, Any]:
    return serialize(await ContractorService(db).get(id))


@router.put("/{id}")
async def update_contractor(id: EntityId, body: ContractorUpdate, db: DbSession) -> dict[str, Any]:
    return serialize(await ContractorService(db).update(id, body.to_fields()))


@router.delete("/{id}")
async def delete_contractor(id: EntityId, db: DbSession) -> dict[str, str]:
    await ContractorService(db).delete(id)
    return {"message": "Contractor deleted successfully"}


parent_contact_routes(router, ContractorService)

contacts_router = contact_router(ContractorService)
