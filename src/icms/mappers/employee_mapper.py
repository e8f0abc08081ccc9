"""
Employee entity <-> V2 DTO mapping.

Pure functions: no I/O, input order preserved, and every optional field is
present in the output (as None) so clients can rely on key presence.
"""

from typing import Any, Iterable

from ..models.employee import Employee
from .serializer import serialize_value


def _address(employee: Employee) -> dict[str, Any]:
    return {
        "street": employee.street,
        "city": employee.city,
        "state": employee.state,
        "postalCode": employee.postal_code,
        "country": employee.country,
    }


class EmployeeMapper:
    @staticmethod
    def to_response_dto(employee: Employee) -> dict[str, Any]:
        """Basic view; no personal or banking fields."""
        return {
            "id": employee.id,
            "empId": employee.emp_id,
            "fullName": employee.full_name,
            "firstName": employee.first_name,
            "lastName": employee.last_name,
            "middleName": employee.middle_name,
            "email": employee.email,
            "phoneNumber": employee.phone_number,
            "department": employee.department,
            "position": employee.position,
            "employmentType": serialize_value(employee.employment_type),
            "status": serialize_value(employee.status),
            "hireDate": serialize_value(employee.hire_date),
            "salary": employee.salary,
            "currency": employee.currency,
            "nationality": employee.nationality,
            "createdAt": serialize_value(employee.created_at),
            "updatedAt": serialize_value(employee.updated_at),
        }

    @classmethod
    def to_detailed_response_dto(cls, employee: Employee) -> dict[str, Any]:
        """Superset of the basic view with sensitive fields and a nested address."""
        return {
            **cls.to_response_dto(employee),
            "dateOfBirth": serialize_value(employee.date_of_birth),
            "gender": employee.gender,
            "maritalStatus": employee.marital_status,
            "terminationDate": serialize_value(employee.termination_date),
            "bankName": employee.bank_name,
            "accountNumber": employee.account_number,
            "taxId": employee.tax_id,
            "socialSecurityNumber": employee.social_security_number,
            "emergencyContactName": employee.emergency_contact_name,
            "emergencyContactPhone": employee.emergency_contact_phone,
            "address": _address(employee),
            "notes": employee.notes,
        }

    @classmethod
    def to_list_response_dto(
        cls,
        employees: Iterable[Employee],
        stats: dict[str, int] | None = None,
        departments: list[str] | None = None,
        positions: list[str] | None = None,
    ) -> dict[str, Any]:
        items = cls.to_response_dto_array(employees)
        dto: dict[str, Any] = {"employees": items, "total": len(items)}
        if stats is not None:
            dto["stats"] = stats
        if departments is not None:
            dto["departments"] = departments
        if positions is not None:
            dto["positions"] = positions
        return dto

    @classmethod
    def to_response_dto_array(cls, employees: Iterable[Employee]) -> list[dict[str, Any]]:
        return [cls.to_response_dto(e) for e in employees]

    @classmethod
    def to_detailed_response_dto_array(cls, employees: Iterable[Employee]) -> list[dict[str, Any]]:
        return [cls.to_detailed_response_dto(e) for e in employees]
