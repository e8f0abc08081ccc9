import pytest

from icms.exceptions.base import NotFoundException
from icms.models.enums import EmployerType
from icms.services.party_service import ContractorService, EmployerService, single_primary


def test_single_primary_keeps_last_flag():
    contacts = single_primary([
        {"first_name": "A", "is_primary": True},
        {"first_name": "B"},
        {"first_name": "C", "is_primary": True},
    ])

    assert [c.get("is_primary", False) for c in contacts] == [False, False, True]


class TestEmployerContacts:

    async def test_nested_contacts_created_with_employer(self, db_session):
        service = EmployerService(db_session)

        employer = await service.create(
            {"company_name": "Acme Ltd", "industry": "Logistics"},
            contacts=[
                {"first_name": "Ann", "last_name": "Lee", "is_primary": True},
                {"first_name": "Bo", "last_name": "Kim", "is_primary": True},
            ],
        )

        contacts = await service.list_contacts(employer.id)
        assert len(contacts) == 2
        assert [c.full_name for c in contacts if c.is_primary] == ["Bo Kim"]
        assert contacts[0].is_primary

    async def test_adding_primary_contact_moves_the_flag(self, db_session):
        service = EmployerService(db_session)
        employer = await service.create({"company_name": "Acme Ltd"}, contacts=[{"first_name": "Ann", "is_primary": True}])

        newcomer = await service.add_contact(employer.id, {"first_name": "Cy", "is_primary": True})

        contacts = await service.list_contacts(employer.id)
        assert [c.id for c in contacts if c.is_primary] == [newcomer.id]

    async def test_promoting_existing_contact(self, db_session):
        service = EmployerService(db_session)
        employer = await service.create(
            {"company_name": "Acme Ltd"},
            contacts=[{"first_name": "Ann", "is_primary": True}, {"first_name": "Bo"}],
        )
        bo = next(c for c in await service.list_contacts(employer.id) if c.first_name == "Bo")

        await service.update_contact(bo.id, {"is_primary": True})

        contacts = await service.list_contacts(employer.id)
        assert {c.first_name: c.is_primary for c in contacts} == {"Ann": False, "Bo": True}

    async def test_delete_removes_contacts(self, db_session):
        service = EmployerService(db_session)
        employer = await service.create({"company_name": "Acme Ltd"}, contacts=[{"first_name": "Ann"}])
        contact_id = (await service.list_contacts(employer.id))[0].id

        await service.delete(employer.id)

        with pytest.raises(NotFoundException) as info:
            await service.get_contact(contact_id)
        assert info.value.message == "Contact not found"

    async def test_individual_employer_gets_full_name(self, db_session):
        employer = await EmployerService(db_session).create(
            {"employer_type": EmployerType.INDIVIDUAL, "first_name": "Jo", "last_name": "March"}
        )
        assert employer.full_name == "Jo March"
        assert employer.display_name == "Jo March"

    async def test_clearing_every_name_part_clears_full_name(self, db_session):
        service = EmployerService(db_session)
        employer = await service.create(
            {"employer_type": EmployerType.INDIVIDUAL, "first_name": "Jo", "last_name": "March"}
        )

        updated = await service.update(employer.id, {"first_name": None, "last_name": None})

        assert updated.full_name is None

    async def test_company_keeps_stored_full_name(self, db_session):
        service = EmployerService(db_session)
        employer = await service.create({"company_name": "Acme Ltd", "full_name": "Acme Holdings", "first_name": "Ann"})

        updated = await service.update(employer.id, {"first_name": None})

        assert updated.full_name == "Acme Holdings"

    async def test_facets(self, db_session):
        service = EmployerService(db_session)
        await service.create({"company_name": "A", "industry": "Retail", "relationship_type": "Client"})
        await service.create({"company_name": "B", "industry": "Energy"})

        facets = await service.facets()

        assert facets == {
            "stats": {"ACTIVE": 2},
            "industries": ["Energy", "Retail"],
            "relationship_types": ["Client"],
        }


class TestContractors:

    async def test_missing_contractor(self, db_session):
        with pytest.raises(NotFoundException) as info:
            await ContractorService(db_session).list_contacts(777)
        assert info.value.message == "Contractor not found"
