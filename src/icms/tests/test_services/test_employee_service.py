import pytest

from icms.exceptions.base import DuplicateError, ValidationException
from icms.models.enums import EmployeeStatus
from icms.services.employee_service import EmployeeService


def _fields(**overrides):
    fields = {"first_name": "Ada", "last_name": "Lovelace", "email": "Ada@Example.com", "status": EmployeeStatus.ACTIVE}
    fields.update(overrides)
    return fields


class TestCreate:

    async def test_defaults_are_filled(self, db_session):
        employee = await EmployeeService(db_session).create(_fields(full_name="Someone Else"))

        assert employee.emp_id.startswith("EMP")
        assert employee.email == "ada@example.com"
        assert employee.full_name == "Ada Lovelace"
        assert employee.hire_date is not None
        assert employee.currency == "USD"

    async def test_v2_labels_missing_fields(self, db_session):
        with pytest.raises(ValidationException) as info:
            await EmployeeService(db_session).create({"first_name": "Ada"})

        assert [e.message for e in info.value.errors] == [
            "Last name is required",
            "Email is required",
            "Status is required",
        ]

    async def test_v1_names_missing_fields_by_key(self, db_session):
        with pytest.raises(ValidationException) as info:
            await EmployeeService(db_session).create_legacy({"email": "x@icms.test"})

        assert info.value.fields == ["firstName", "lastName"]

    async def test_v2_taken_email_is_a_field_error(self, db_session):
        service = EmployeeService(db_session)
        await service.create(_fields())

        with pytest.raises(ValidationException) as info:
            await service.create(_fields(email="ada@example.com"))

        assert info.value.errors[0].message == "Email already exists"

    async def test_v1_taken_email_is_a_conflict(self, db_session):
        service = EmployeeService(db_session)
        await service.create_legacy(_fields())

        with pytest.raises(DuplicateError) as info:
            await service.create_legacy(_fields())

        assert info.value.http_status() == 409

    async def test_generated_ids_do_not_collide(self, db_session):
        service = EmployeeService(db_session)
        first = await service.create(_fields(email="one@icms.test"))
        second = await service.create(_fields(email="two@icms.test"))
        assert first.emp_id != second.emp_id


class TestPatchAndDelete:

    async def test_patch_rejects_email_of_another_employee(self, db_session, create_employee):
        service = EmployeeService(db_session)
        taken = await create_employee()
        employee = await create_employee()

        with pytest.raises(ValidationException) as info:
            await service.patch(employee.id, {"email": taken.email.upper()})

        assert info.value.errors[0].message == "Email already in use by another employee"

    async def test_patch_merges_and_recomputes_name(self, db_session, create_employee):
        service = EmployeeService(db_session)
        employee = await create_employee(first_name="Grace", last_name="Hopper", department="Navy")

        patched = await service.patch(employee.id, {"last_name": "Murray", "email": employee.email})

        assert patched.full_name == "Grace Murray"
        assert patched.department == "Navy"

    async def test_patch_cannot_clear_required_names(self, db_session, create_employee):
        service = EmployeeService(db_session)
        employee = await create_employee(first_name="Grace", last_name="Hopper")

        with pytest.raises(ValidationException) as info:
            await service.patch(employee.id, {"first_name": None, "last_name": None})

        assert [(e.field, e.message) for e in info.value.errors] == [
            ("firstName", "First name is required"),
            ("lastName", "Last name is required"),
        ]
        assert (await service.get(employee.id)).full_name == "Grace Hopper"

    async def test_legacy_update_cannot_clear_email(self, db_session, create_employee):
        employee = await create_employee()

        with pytest.raises(ValidationException) as info:
            await EmployeeService(db_session).update_legacy(employee.id, {"email": None})

        assert info.value.fields == ["email"]

    async def test_soft_delete_terminates(self, db_session, create_employee):
        service = EmployeeService(db_session)
        employee = await create_employee()

        await service.delete(employee.id, soft=True)

        terminated = await service.get(employee.id)
        assert terminated.status is EmployeeStatus.TERMINATED
        assert terminated.termination_date is not None

    async def test_stats_are_optional(self, db_session, create_employee):
        service = EmployeeService(db_session)
        await create_employee(department="Finance", position="Accountant")
        await create_employee(department="Security", position="Guard", status=EmployeeStatus.TERMINATED)

        plain = await service.list_with_stats(False)
        full = await service.list_with_stats(True, status=EmployeeStatus.ACTIVE)

        assert set(plain) == {"employees"}
        assert len(full["employees"]) == 1
        assert full["stats"] == {"ACTIVE": 1, "TERMINATED": 1}
        assert full["departments"] == ["Finance", "Security"]
        assert full["positions"] == ["Accountant", "Guard"]
