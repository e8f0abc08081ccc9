"""
Employee use cases shared by the V1 (bare) and V2 (DTO) routes.

The two versions differ only at the edges: V1 reports duplicates as 409 and
names missing fields by their wire key, V2 reports a taken email as a 400
field error and uses readable labels. Everything else (id generation, email
normalisation, soft delete) is common.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..database.unit_of_work import unit_of_work
from ..exceptions.base import ValidationException
from ..models.employee import Employee
from ..models.enums import EmployeeStatus, EmploymentType
from ..repositories.employee_repository import EmployeeRepository
from ..utils.dates import epoch_millis, utc_now
from ..validators.request_validators import normalize_email, require_fields

logger = logging.getLogger(__name__)

V2_REQUIRED_LABELS = {
    "firstName": "First name",
    "lastName": "Last name",
    "email": "Email",
    "status": "Status",
}


# columns an update may change but never clear, by wire key
UNCLEARABLE = {"first_name": "firstName", "last_name": "lastName", "email": "email"}


def _reject_cleared(changes: dict[str, Any], labels: dict[str, str] | None = None) -> None:
    sent = {key: changes[attr] for attr, key in UNCLEARABLE.items() if attr in changes}
    require_fields(sent, list(sent), labels=labels)


def generate_emp_id() -> str:
    return f"EMP{epoch_millis()}"


class EmployeeService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.employees = EmployeeRepository(db)

    # ==================================================================
    # Queries
    # ==================================================================

    async def get(self, employee_id: int, message: str | None = None) -> Employee:
        return await self.employees.get_by_id_or_raise(employee_id, message=message)

    async def list_with_stats(self, include_stats: bool, **filters: Any) -> dict[str, Any]:
        """Filtered employees plus, on request, status counts and the department/position facets."""
        result: dict[str, Any] = {"employees": await self.employees.search(**filters)}
        if include_stats:
            result["stats"] = await self.employees.count_grouped("status")
            result["departments"] = await self.employees.distinct_values("department")
            result["positions"] = await self.employees.distinct_values("position")
        return result

    # ==================================================================
    # Create
    # ==================================================================

    async def create_legacy(self, fields: dict[str, Any]) -> Employee:
        """V1: missing fields are named by wire key; any unique clash is a 409."""
        require_fields(
            {"firstName": fields.get("first_name"), "lastName": fields.get("last_name"), "email": fields.get("email")},
            ["firstName", "lastName", "email"],
        )
        values = self._with_defaults(fields)
        async with unit_of_work(self.db, "Employee"):
            employee = await self.employees.create(**values)

        logger.info("employees.created", extra={"id": employee.id, "emp_id": employee.emp_id, "api": "v1"})
        return employee

    async def create(self, fields: dict[str, Any]) -> Employee:
        """V2: readable required-field messages and a 400 for a taken email."""
        require_fields(
            {
                "firstName": fields.get("first_name"),
                "lastName": fields.get("last_name"),
                "email": fields.get("email"),
                "status": fields.get("status"),
            },
            list(V2_REQUIRED_LABELS),
            labels=V2_REQUIRED_LABELS,
        )
        values = self._with_defaults(fields)
        if await self.employees.email_taken(values["email"]):
            raise ValidationException.from_field_error("email", "Email already exists")

        async with unit_of_work(self.db, "Employee"):
            employee = await self.employees.create(**values)

        logger.info("employees.created", extra={"id": employee.id, "emp_id": employee.emp_id, "api": "v2"})
        return employee

    @staticmethod
    def _with_defaults(fields: dict[str, Any]) -> dict[str, Any]:
        values = {k: v for k, v in fields.items() if v is not None}
        values["email"] = normalize_email(values.get("email"))
        values.setdefault("emp_id", generate_emp_id())
        values.setdefault("hire_date", utc_now())
        values.setdefault("employment_type", EmploymentType.FULL_TIME)
        values.setdefault("currency", "USD")
        # the stored name is always derived from the parts
        values.pop("full_name", None)
        return values

    # ==================================================================
    # Update / delete
    # ==================================================================

    async def update_legacy(self, employee_id: int, fields: dict[str, Any]) -> Employee:
        employee = await self.get(employee_id)
        changes = dict(fields)
        changes.pop("full_name", None)
        _reject_cleared(changes)
        if changes.get("email") is not None:
            changes["email"] = normalize_email(changes["email"])

        async with unit_of_work(self.db, "Employee"):
            employee = await self.employees.update(employee, **changes)
        return employee

    async def patch(self, employee_id: int, fields: dict[str, Any]) -> Employee:
        """
        Partial merge. A changed email must not belong to another employee;
        `full_name` follows the name parts on flush.
        """
        employee = await self.get(employee_id)
        changes = dict(fields)
        changes.pop("full_name", None)
        _reject_cleared(changes, V2_REQUIRED_LABELS)

        if changes.get("email") is not None:
            email = normalize_email(changes["email"])
            if await self.employees.email_taken(email, exclude_id=employee.id):
                raise ValidationException.from_field_error("email", "Email already in use by another employee")
            changes["email"] = email

        async with unit_of_work(self.db, "Employee"):
            employee = await self.employees.update(employee, **changes)

        logger.info("employees.updated", extra={"id": employee.id, "fields": sorted(changes)})
        return employee

    async def delete(self, employee_id: int, soft: bool = False) -> None:
        """Hard delete, or with `soft` mark the employee TERMINATED as of now."""
        employee = await self.get(employee_id)
        async with unit_of_work(self.db, "Employee"):
            if soft:
                await self.employees.update(
                    employee, status=EmployeeStatus.TERMINATED, termination_date=utc_now()
                )
            else:
                await self.employees.delete(employee)

        logger.info("employees.deleted", extra={"id": employee_id, "soft": soft})
