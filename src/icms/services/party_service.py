"""
Employers and contractors with their contact people.

Both parties follow the same rules, so one service class carries them and the
two subclasses only bind repositories and names:

- nested contacts are created with the parent in one transaction;
- at most one contact per parent is primary. Flagging a contact primary
  clears its siblings first, inside the same unit of work, and the partial
  unique index rejects anything that slips past.
"""

import logging
from typing import Any, Generic, Iterable, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from ..database.unit_of_work import unit_of_work
from ..models.contractor import Contractor, ContractorContact
from ..models.employer import Employer, EmployerContact
from ..repositories.base_repository import BaseRepository
from ..repositories.employer_repository import (
    ContractorContactRepository,
    ContractorRepository,
    EmployerContactRepository,
    EmployerRepository,
)
from ..repositories.owned_repository import OwnedRepository

logger = logging.getLogger(__name__)

P = TypeVar("P")
C = TypeVar("C")


def single_primary(contacts: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """When several new contacts claim primary, the last one keeps the flag."""
    contacts = [dict(c) for c in contacts]
    flagged = [i for i, c in enumerate(contacts) if c.get("is_primary")]
    for i in flagged[:-1]:
        contacts[i]["is_primary"] = False
    return contacts


class PartyService(Generic[P, C]):
    label: str = "Party"
    contact_model: Type[C]

    def __init__(self, db: AsyncSession, parents: BaseRepository[P], contacts: OwnedRepository[C]):
        self.db = db
        self.parents = parents
        self.contacts = contacts

    @property
    def not_found_message(self) -> str:
        return f"{self.label} not found"

    # ==================================================================
    # Parent
    # ==================================================================

    async def get(self, party_id: int) -> P:
        return await self.parents.get_by_id_or_raise(party_id, message=self.not_found_message)

    async def facets(self) -> dict[str, Any]:
        return {"stats": await self.parents.count_grouped("status")}

    async def create(self, fields: dict[str, Any], contacts: Iterable[dict[str, Any]] = ()) -> P:
        children = [self.contact_model(**c) for c in single_primary(contacts)]
        async with unit_of_work(self.db, self.label):
            party = await self.parents.create(**fields, contacts=children)

        logger.info(
            "parties.created",
            extra={"party": self.label, "id": party.id, "contacts": len(children)},
        )
        return party

    async def update(self, party_id: int, fields: dict[str, Any]) -> P:
        party = await self.get(party_id)
        async with unit_of_work(self.db, self.label):
            party = await self.parents.update(party, **fields)
        return party

    async def delete(self, party_id: int) -> None:
        """Contacts go with the parent (ORM cascade plus ON DELETE CASCADE)."""
        party = await self.get(party_id)
        async with unit_of_work(self.db, self.label):
            await self.parents.delete(party)
        logger.info("parties.deleted", extra={"party": self.label, "id": party_id})

    # ==================================================================
    # Contacts
    # ==================================================================

    async def list_contacts(self, party_id: int) -> list[C]:
        await self.get(party_id)
        return await self.contacts.list_for_parent(party_id)

    async def get_contact(self, contact_id: int) -> C:
        return await self.contacts.get_by_id_or_raise(contact_id, message="Contact not found")

    async def add_contact(self, party_id: int, fields: dict[str, Any]) -> C:
        await self.get(party_id)
        async with unit_of_work(self.db, self.contacts.name):
            if fields.get("is_primary"):
                await self.contacts.clear_primary(party_id)
                logger.info(
                    "contacts.primary.reassigned",
                    extra={"party": self.label, "parent_id": party_id},
                )
            contact = await self.contacts.create(**fields, **{self.contacts.parent_field: party_id})
        return contact

    async def update_contact(self, contact_id: int, fields: dict[str, Any]) -> C:
        contact = await self.get_contact(contact_id)
        parent_id = getattr(contact, self.contacts.parent_field)
        async with unit_of_work(self.db, self.contacts.name):
            if fields.get("is_primary") and not contact.is_primary:
                await self.contacts.clear_primary(parent_id, exclude_id=contact.id)
                logger.info(
                    "contacts.primary.reassigned",
                    extra={"party": self.label, "parent_id": parent_id, "contact_id": contact.id},
                )
            contact = await self.contacts.update(contact, **fields)
        return contact

    async def delete_contact(self, contact_id: int) -> None:
        contact = await self.get_contact(contact_id)
        async with unit_of_work(self.db, self.contacts.name):
            await self.contacts.delete(contact)


class EmployerService(PartyService[Employer, EmployerContact]):
    label = "Employer"
    contact_model = EmployerContact

    def __init__(self, db: AsyncSession):
        super().__init__(db, EmployerRepository(db), EmployerContactRepository(db))

    async def facets(self) -> dict[str, Any]:
        return {
            "stats": await self.parents.count_grouped("status"),
            "industries": await self.parents.distinct_values("industry"),
            "relationship_types": await self.parents.distinct_values("relationship_type"),
        }


class ContractorService(PartyService[Contractor, ContractorContact]):
    label = "Contractor"
    contact_model = ContractorContact

    def __init__(self, db: AsyncSession):
        super().__init__(db, ContractorRepository(db), ContractorContactRepository(db))
