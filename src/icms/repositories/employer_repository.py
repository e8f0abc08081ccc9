from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.contractor import Contractor, ContractorContact
from ..models.employer import Employer, EmployerContact
from ..models.enums import PartyStatus
from .base_repository import BaseRepository
from .owned_repository import OwnedRepository


class EmployerRepository(BaseRepository[Employer]):
    entity_name = "Employer"
    duplicate_message = "An employer with this registration number already exists"

    def __init__(self, db: AsyncSession):
        super().__init__(Employer, db)

    async def search(
        self,
        search: str | None = None,
        industry: str | None = None,
        relationship_type: str | None = None,
        status: PartyStatus | None = None,
    ) -> list[Employer]:
        conditions = []
        if search:
            pattern = f"%{search.strip().lower()}%"
            conditions.append(
                or_(
                    func.lower(Employer.company_name).like(pattern),
                    func.lower(Employer.trading_name).like(pattern),
                    func.lower(Employer.first_name).like(pattern),
                    func.lower(Employer.last_name).like(pattern),
                    func.lower(Employer.full_name).like(pattern),
                    func.lower(Employer.industry).like(pattern),
                    func.lower(Employer.profession).like(pattern),
                    func.lower(Employer.city).like(pattern),
                    func.lower(Employer.country).like(pattern),
                )
            )
        if industry:
            conditions.append(Employer.industry == industry)
        if relationship_type:
            conditions.append(Employer.relationship_type == relationship_type)
        if status:
            conditions.append(Employer.status == status)
        # companies by name within each status; individuals (no company) last
        return await self.find_all(
            *conditions,
            order_by=(Employer.status, Employer.company_name.asc().nulls_last(), Employer.full_name, Employer.id),
        )


class EmployerContactRepository(OwnedRepository[EmployerContact]):
    entity_name = "EmployerContact"
    parent_field = "employer_id"
    default_order = (EmployerContact.is_primary.desc(), EmployerContact.created_at.desc(), EmployerContact.id.desc())

    def __init__(self, db: AsyncSession):
        super().__init__(EmployerContact, db)


class ContractorRepository(BaseRepository[Contractor]):
    entity_name = "Contractor"
    duplicate_message = "A contractor with this registration number already exists"

    def __init__(self, db: AsyncSession):
        super().__init__(Contractor, db)

    async def search(
        self,
        search: str | None = None,
        specialization: str | None = None,
        status: PartyStatus | None = None,
    ) -> list[Contractor]:
        conditions = []
        if search:
            pattern = f"%{search.strip().lower()}%"
            conditions.append(
                or_(
                    func.lower(Contractor.company_name).like(pattern),
                    func.lower(Contractor.email).like(pattern),
                    func.lower(Contractor.specialization).like(pattern),
                )
            )
        if specialization:
            conditions.append(Contractor.specialization == specialization)
        if status:
            conditions.append(Contractor.status == status)
        return await self.find_all(*conditions, order_by=(Contractor.created_at.desc(), Contractor.id.desc()))


class ContractorContactRepository(OwnedRepository[ContractorContact]):
    entity_name = "ContractorContact"
    parent_field = "contractor_id"
    default_order = (
        ContractorContact.is_primary.desc(),
        ContractorContact.created_at.desc(),
        ContractorContact.id.desc(),
    )

    def __init__(self, db: AsyncSession):
        super().__init__(ContractorContact, db)
