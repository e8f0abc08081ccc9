"""V1 employee routes: bare entities in, bare entities out."""

from typing import Any

from fastapi import APIRouter, status

from ...core.dependencies import DbSession, EntityId
from ...mappers.serializer import serialize, serialize_many
from ...models.enums import EmployeeStatus
from ...schemas.people import EmployeeCreate, EmployeeUpdate
from ...services.employee_service import EmployeeService
from ...validators.request_validators import parse_enum

router = APIRouter()


@router.get("")
async def list_employees(
    db: DbSession,
    search: str | None = None,
    department: str | None = None,
    status: str | None = None,
) -> list[dict[str, Any]]:
    employees = await EmployeeService(db).employees.search(
        search=search,
        department=department,
        status=parse_enum(status, EmployeeStatus, "status"),
    )
    return serialize_many(employees)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_employee(body: EmployeeCreate, db: DbSession) -> dict[str, Any]:
    employee = await EmployeeService(db).create_legacy(body.to_fields())
    return serialize(employee)


@router.get("/{id}")
async def get_employee(id: EntityId, db: DbSession) -> dict[str, Any]:
    return serialize(await EmployeeService(db).get(id))


@router.put("/{id}")
async def update_employee(id: EntityId, body: EmployeeUpdate, db: DbSession) -> dict[str, Any]:
    employee = await EmployeeService(db).update_legacy(id, body.to_fields())
    return serialize(employee)


@router.delete("/{id}")
async def delete_employee(id: EntityId, db: DbSession) -> dict[str, Any]:
    await EmployeeService(db).delete(id)
    return {"success": True}
