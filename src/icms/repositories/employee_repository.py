from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.employee import Employee
from ..models.enums import EmployeeStatus, EmploymentType
from .base_repository import BaseRepository


class EmployeeRepository(BaseRepository[Employee]):
    """Employee queries used by both API versions."""

    duplicate_message = "Employee ID or email already exists"

    def __init__(self, db: AsyncSession):
        super().__init__(Employee, db)

    async def get_by_email(self, email: str) -> Employee | None:
        return await self.find_by_field("email", email)

    async def email_taken(self, email: str, exclude_id: int | None = None) -> bool:
        query = select(Employee.id).where(Employee.email == email)
        if exclude_id is not None:
            query = query.where(Employee.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        return result.scalar() is not None

    async def search(
        self,
        search: str | None = None,
        department: str | None = None,
        position: str | None = None,
        employment_type: EmploymentType | None = None,
        status: EmployeeStatus | None = None,
        nationality: str | None = None,
        gender: str | None = None,
    ) -> list[Employee]:
        """
        Case-insensitive `search` across name, email, emp id, department and
        position; all other filters are exact matches.
        """
        conditions = []
        if search:
            pattern = f"%{search.strip().lower()}%"
            conditions.append(
                or_(
                    func.lower(Employee.full_name).like(pattern),
                    func.lower(Employee.first_name).like(pattern),
                    func.lower(Employee.last_name).like(pattern),
                    func.lower(Employee.email).like(pattern),
                    func.lower(Employee.emp_id).like(pattern),
                    func.lower(Employee.department).like(pattern),
                    func.lower(Employee.position).like(pattern),
                )
            )
        exact = {
            Employee.department: department,
            Employee.position: position,
            Employee.employment_type: employment_type,
            Employee.status: status,
            Employee.nationality: nationality,
            Employee.gender: gender,
        }
        conditions.extend(column == value for column, value in exact.items() if value)
        return await self.find_all(*conditions, order_by=(Employee.created_at.desc(), Employee.id.desc()))
