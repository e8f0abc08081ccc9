import pytest

from icms.exceptions.base import DuplicateError, NotFoundException, ValidationException
from icms.models.enums import PersonType
from icms.repositories.person_repository import StakeholderRelationshipRepository
from icms.services.people_service import StakeholderRelationshipService, StakeholderService, family_links
from icms.services.person_resolver import PersonResolver


class TestPersonSearch:

    async def test_every_table_in_fixed_order(
        self, db_session, create_employee, create_stakeholder, create_employer, create_task_helper
    ):
        await create_task_helper(first_name="Ines", last_name="Zephyrine")
        await create_employer(company_name="Zephyrine Logistics")
        await create_stakeholder(first_name="Zephyrine", last_name="Okafor", email="z.okafor@icms.test")
        await create_employee(first_name="Zephyrine", last_name="Adeyemi", email="zadeyemi@icms.test", nationality="NG")
        await create_employee(first_name="Unrelated", last_name="Person", email="nobody@icms.test")

        found = await PersonResolver(db_session).search("ZEPHYR")

        assert [p.person_type for p in found] == [
            PersonType.EMPLOYEE,
            PersonType.STAKEHOLDER,
            PersonType.EMPLOYER,
            PersonType.TASK_HELPER,
        ]
        assert found[0].to_search_result() == {
            "id": found[0].person_id,
            "fullName": "Zephyrine Adeyemi",
            "email": "zadeyemi@icms.test",
            "phone": None,
            "nationality": "NG",
            "type": "EMPLOYEE",
        }

    async def test_type_filter_and_per_type_limit(self, db_session, create_stakeholder, create_employee):
        for n in range(3):
            await create_stakeholder(first_name="Zephyrine", last_name=f"S{n}", email=f"s{n}@icms.test")
        await create_employee(first_name="Zephyrine", last_name="Employee", email="zemp@icms.test")

        found = await PersonResolver(db_session).search("zephyrine", PersonType.STAKEHOLDER, limit=2)

        assert len(found) == 2
        assert {p.person_type for p in found} == {PersonType.STAKEHOLDER}

    async def test_matches_on_phone(self, db_session, create_task_helper):
        helper = await create_task_helper(first_name="Kofi", last_name="Mensah", primary_phone="+233555019")

        found = await PersonResolver(db_session).search("555019")

        assert [(p.person_type, p.person_id) for p in found] == [(PersonType.TASK_HELPER, helper.id)]

    @pytest.mark.parametrize("term", [None, "", " a "])
    async def test_short_term_is_rejected(self, db_session, term):
        with pytest.raises(ValidationException) as info:
            await PersonResolver(db_session).search(term)

        assert info.value.fields == ["q"]
        assert info.value.errors[0].message == "Search term must be at least 2 characters"


class TestStakeholderQuickSearch:

    async def test_ordered_by_first_then_last_name(self, db_session, create_stakeholder):
        await create_stakeholder(first_name="Zoe", last_name="Quillfeather", email="zoe@icms.test")
        await create_stakeholder(first_name="Amir", last_name="Quillfeather", email="amir@icms.test")
        await create_stakeholder(first_name="Amir", last_name="Aquill", email="aquill@icms.test")

        found = await StakeholderService(db_session).quick_search("quill", limit=10)

        assert [s.full_name for s in found] == ["Amir Aquill", "Amir Quillfeather", "Zoe Quillfeather"]

    async def test_limit_caps_results(self, db_session, create_stakeholder):
        for n in range(4):
            await create_stakeholder(first_name="Quill", last_name=f"N{n}", email=f"q{n}@icms.test")

        assert len(await StakeholderService(db_session).quick_search("quill", limit=3)) == 3


class TestFamilyLinks:

    @pytest.mark.parametrize(
        "relationship_type, gender, reverse",
        [
            ("husband", None, "spouse"),
            ("father", None, "child"),
            ("mother", "female", "child"),
            ("child", "Female", "mother"),
            ("child", None, "father"),
            ("sibling", None, "sibling"),
            ("colleague", None, None),
        ],
    )
    async def test_reverse_types(self, db_session, create_stakeholder, relationship_type, gender, reverse):
        source = await create_stakeholder(gender=gender)
        target = await create_stakeholder()

        assert family_links(relationship_type, source, target)[0] == reverse


class TestStakeholderRelationships:

    async def test_father_link_sets_parent_and_reverse(self, db_session, create_stakeholder):
        father = await create_stakeholder(first_name="Tunde", gender="male")
        son = await create_stakeholder(first_name="Dayo")

        link = await StakeholderRelationshipService(db_session).create(
            {"from_id": father.id, "to_id": son.id, "relationship_type": "Father", "strength": "strong"}
        )

        reverse = await StakeholderRelationshipRepository(db_session).find_link(son.id, father.id, "child")
        await db_session.refresh(son)
        assert link.relationship_type == "father"
        assert link.from_stakeholder.first_name == "Tunde"
        assert son.father_id == father.id
        assert reverse.description == "Reverse of father"
        assert reverse.notes == "Auto-created reverse relationship"
        assert reverse.strength == "strong"

    async def test_spouse_link_sets_both_sides(self, db_session, create_stakeholder):
        wife = await create_stakeholder()
        husband = await create_stakeholder()

        await StakeholderRelationshipService(db_session).create(
            {"from_id": wife.id, "to_id": husband.id, "relationship_type": "wife"}
        )

        await db_session.refresh(wife)
        await db_session.refresh(husband)
        assert (wife.spouse_id, husband.spouse_id) == (husband.id, wife.id)

    async def test_existing_reverse_is_not_duplicated(self, db_session, create_stakeholder):
        a, b = await create_stakeholder(), await create_stakeholder()
        service = StakeholderRelationshipService(db_session)

        await service.create({"from_id": a.id, "to_id": b.id, "relationship_type": "sibling"})
        await service.create({"from_id": b.id, "to_id": a.id, "relationship_type": "friend"})

        links = await service.list()
        assert sorted((link.from_id, link.to_id, link.relationship_type) for link in links) == sorted([
            (a.id, b.id, "sibling"),
            (b.id, a.id, "sibling"),
            (b.id, a.id, "friend"),
        ])

    async def test_without_reverse_only_one_row(self, db_session, create_stakeholder):
        a, b = await create_stakeholder(), await create_stakeholder()
        service = StakeholderRelationshipService(db_session)

        await service.create({"from_id": a.id, "to_id": b.id, "relationship_type": "mother"}, create_reverse=False)

        await db_session.refresh(b)
        assert len(await service.list()) == 1
        assert b.mother_id is None

    async def test_rejections(self, db_session, create_stakeholder):
        a, b = await create_stakeholder(), await create_stakeholder()
        service = StakeholderRelationshipService(db_session)
        await service.create({"from_id": a.id, "to_id": b.id, "relationship_type": "friend"})

        with pytest.raises(ValidationException) as info:
            await service.create({"from_id": a.id, "relationship_type": "friend"})
        assert info.value.fields == ["toId"]

        with pytest.raises(ValidationException) as info:
            await service.create({"from_id": a.id, "to_id": a.id, "relationship_type": "friend"})
        assert info.value.errors[0].message == "Cannot create relationship to self"

        with pytest.raises(DuplicateError) as info:
            await service.create({"from_id": a.id, "to_id": b.id, "relationship_type": " FRIEND "})
        assert info.value.message == "Relationship already exists"

        with pytest.raises(NotFoundException) as info:
            await service.create({"from_id": a.id, "to_id": 4040, "relationship_type": "friend"})
        assert info.value.message == "Stakeholder not found"

    async def test_delete(self, db_session, create_stakeholder):
        a, b = await create_stakeholder(), await create_stakeholder()
        service = StakeholderRelationshipService(db_session)
        link = await service.create({"from_id": a.id, "to_id": b.id, "relationship_type": "friend"})

        await service.delete(link.id)

        assert await service.list() == []
        with pytest.raises(NotFoundException) as info:
            await service.delete(link.id)
        assert info.value.message == "Relationship not found"
