from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.admin import Admin
from ..models.person import Stakeholder, StakeholderRelationship, TaskHelper
from ..models.reference import Department, Position
from .base_repository import BaseRepository


class StakeholderRepository(BaseRepository[Stakeholder]):
    duplicate_message = "Stakeholder with this email already exists"

    def __init__(self, db: AsyncSession):
        super().__init__(Stakeholder, db)

    async def search(self, search: str | None = None, relationship: str | None = None) -> list[Stakeholder]:
        conditions = []
        if search:
            pattern = f"%{search.strip().lower()}%"
            conditions.append(
                or_(
                    func.lower(Stakeholder.full_name).like(pattern),
                    func.lower(Stakeholder.email).like(pattern),
                    func.lower(Stakeholder.organization).like(pattern),
                )
            )
        if relationship:
            conditions.append(Stakeholder.relationship == relationship)
        return await self.find_all(*conditions, order_by=(Stakeholder.last_name, Stakeholder.first_name))

    async def quick_search(self, term: str, limit: int) -> list[Stakeholder]:
        """Type-ahead lookup over names, email and phone, ordered by first then last name."""
        pattern = f"%{term.lower()}%"
        columns = (
            Stakeholder.first_name,
            Stakeholder.middle_name,
            Stakeholder.last_name,
            Stakeholder.full_name,
            Stakeholder.email,
            Stakeholder.phone,
        )
        return await self.find_all(
            or_(*(func.lower(column).like(pattern) for column in columns)),
            order_by=(Stakeholder.first_name, Stakeholder.last_name),
            limit=limit,
        )


class StakeholderRelationshipRepository(BaseRepository[StakeholderRelationship]):
    entity_name = "Relationship"
    duplicate_message = "Relationship already exists"
    default_order = (StakeholderRelationship.created_at.desc(), StakeholderRelationship.id.desc())

    def __init__(self, db: AsyncSession):
        super().__init__(StakeholderRelationship, db)

    async def find_link(self, from_id: int, to_id: int, relationship_type: str) -> StakeholderRelationship | None:
        matches = await self.find_all(
            StakeholderRelationship.from_id == from_id,
            StakeholderRelationship.to_id == to_id,
            StakeholderRelationship.relationship_type == relationship_type,
            limit=1,
        )
        return matches[0] if matches else None


class TaskHelperRepository(BaseRepository[TaskHelper]):
    entity_name = "TaskHelper"
    duplicate_message = "Task helper with this email already exists"

    def __init__(self, db: AsyncSession):
        super().__init__(TaskHelper, db)

    async def search(self, search: str | None = None, status=None) -> list[TaskHelper]:
        conditions = []
        if search:
            pattern = f"%{search.strip().lower()}%"
            conditions.append(
                or_(
                    func.lower(TaskHelper.full_name).like(pattern),
                    func.lower(TaskHelper.primary_email).like(pattern),
                    func.lower(TaskHelper.skills).like(pattern),
                )
            )
        if status:
            conditions.append(TaskHelper.status == status)
        return await self.find_all(*conditions, order_by=(TaskHelper.full_name,))


class AdminRepository(BaseRepository[Admin]):
    def __init__(self, db: AsyncSession):
        super().__init__(Admin, db)

    async def find_active_by_login(self, login: str) -> Admin | None:
        """`login` matches either the username or the email."""
        matches = await self.find_all(
            or_(Admin.username == login, Admin.email == login.lower()),
            Admin.is_active.is_(True),
            order_by=(Admin.id,),
        )
        return matches[0] if matches else None


class DepartmentRepository(BaseRepository[Department]):
    default_order = (Department.name,)

    def __init__(self, db: AsyncSession):
        super().__init__(Department, db)


class PositionRepository(BaseRepository[Position]):
    default_order = (Position.name,)

    def __init__(self, db: AsyncSession):
        super().__init__(Position, db)
