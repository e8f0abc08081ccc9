"""
Contact routes shared by employers and contractors.

`parent_contact_routes` adds `/{id}/contacts` to the parent's router;
`contact_router` serves `/{id}` under the standalone contact prefix
(`/employer-contacts`, `/contractor-contacts`).
"""

from typing import Any, Callable

from fastapi import APIRouter, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.dependencies import DbSession, EntityId
from ...mappers.serializer import serialize, serialize_many
from ...schemas.people import ContactCreate, ContactUpdate
from ...services.party_service import PartyService

ServiceFactory = Callable[[AsyncSession], PartyService]


def parent_contact_routes(router: APIRouter, make_service: ServiceFactory) -> None:
    @router.get("/{id}/contacts")
    async def list_contacts(id: EntityId, db: DbSession) -> list[dict[str, Any]]:
        """Primary contact first, then newest."""
        return serialize_many(await make_service(db).list_contacts(id))

    @router.post("/{id}/contacts", status_code=status.HTTP_201_CREATED)
    async def create_contact(id: EntityId, body: ContactCreate, db: DbSession) -> dict[str, Any]:
        contact = await make_service(db).add_contact(id, body.to_fields(drop_none=True))
        return serialize(contact)


def contact_router(make_service: ServiceFactory) -> APIRouter:
    router = APIRouter()

    @router.get("/{id}")
    async def get_contact(id: EntityId, db: DbSession) -> dict[str, Any]:
        return serialize(await make_service(db).get_contact(id))

    @router.put("/{id}")
    async def update_contact(id: EntityId, body: ContactUpdate, db: DbSession) -> dict[str, Any]:
        contact = await make_service(db).update_contact(id, body.to_fields())
        return serialize(contact)

    @router.delete("/{id}")
    async def delete_contact(id: EntityId, db: DbSession) -> dict[str, str]:
        await make_service(db).delete_contact(id)
        return {"message": "Contact deleted successfully"}

    return router
