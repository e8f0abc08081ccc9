"""V2 employee routes: requests validated up front, responses shaped by `EmployeeMapper`."""

from typing import Any

from fastapi import APIRouter, Query, status

from ...core.dependencies import DbSession, EntityId
from ...mappers.employee_mapper import EmployeeMapper
from ...models.enums import EmployeeStatus, EmploymentType
from ...schemas.people import EmployeeCreate, EmployeeUpdate
from ...services.employee_service import EmployeeService
from ...validators.request_validators import parse_bool, parse_enum

router = APIRouter()

DELETED = {"message": "Employee deleted successfully"}


@router.get("")
async def list_employees(
    db: DbSession,
    search: str | None = None,
    department: str | None = None,
    position: str | None = None,
    employment_type: str | None = Query(None, alias="employmentType"),
    status: str | None = None,
    nationality: str | None = None,
    gender: str | None = None,
    include_stats: str | None = Query(None, alias="includeStats"),
) -> dict[str, Any]:
    result = await EmployeeService(db).list_with_stats(
        parse_bool(include_stats),
        search=search,
        department=department,
        position=position,
        employment_type=parse_enum(employment_type, EmploymentType, "employmentType"),
        status=parse_enum(status, EmployeeStatus, "status"),
        nationality=nationality,
        gender=gender,
    )
    return EmployeeMapper.to_list_response_dto(
        result["employees"],
        stats=result.get("stats"),
        departments=result.get("departments"),
        positions=result.get("positions"),
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_employee(body: EmployeeCreate, db: DbSession) -> dict[str, Any]:
    employee = await EmployeeService(db).create(body.to_fields())
    return EmployeeMapper.to_detailed_response_dto(employee)


@router.get("/{id}")
async def get_employee(id: EntityId, db: DbSession) -> dict[str, Any]:
    employee = await EmployeeService(db).get(id, message="Employee not found")
    return EmployeeMapper.to_detailed_response_dto(employee)


@router.patch("/{id}")
async def patch_employee(id: EntityId, body: EmployeeUpdate, db: DbSession) -> dict[str, Any]:
    employee = await EmployeeService(db).patch(id, body.to_fields())
    return EmployeeMapper.to_detailed_response_dto(employee)


@router.delete("/{id}")
async def delete_employee(id: EntityId, db: DbSession, soft: str | None = None) -> dict[str, str]:
    await EmployeeService(db).delete(id, soft=parse_bool(soft))
    return DELETED
