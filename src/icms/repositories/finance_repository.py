from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions.mapper import db_error_handler
from ..models.finance import (
    Asset,
    Dividend,
    Liability,
    LiabilityPayment,
    MonthlyPayment,
    MonthlyPaymentRecord,
    PropertyTenant,
    PropertyUK,
    RealEstate,
    Salary,
)
from .base_repository import BaseRepository
from .owned_repository import OwnedRepository


class SalaryRepository(BaseRepository[Salary]):
    entity_name = "Salary record"

    def __init__(self, db: AsyncSession):
        super().__init__(Salary, db)


class AssetRepository(BaseRepository[Asset]):
    def __init__(self, db: AsyncSession):
        super().__init__(Asset, db)


class LiabilityRepository(BaseRepository[Liability]):
    def __init__(self, db: AsyncSession):
        super().__init__(Liability, db)

    async def apply_payment(self, liability_id: int, amount: float, paid_at) -> None:
        """
        Reduce the balance in SQL (`balance = balance - amount`) so two payments
        recorded at once cannot overwrite each other.
        """
        stmt = (
            update(Liability)
            .where(Liability.id == liability_id)
            .values(
                current_balance=Liability.current_balance - amount,
                last_payment_amount=amount,
                last_payment_date=paid_at,
            )
            .execution_options(synchronize_session=False)
        )
        async with db_error_handler(self.db, "Liability", operation="update"):
            await self.db.execute(stmt)


class LiabilityPaymentRepository(OwnedRepository[LiabilityPayment]):
    entity_name = "Liability payment"
    parent_field = "liability_id"
    default_order = (LiabilityPayment.payment_date.desc(),)

    def __init__(self, db: AsyncSession):
        super().__init__(LiabilityPayment, db)


class DividendRepository(BaseRepository[Dividend]):
    default_order = (Dividend.payment_date.desc(),)

    def __init__(self, db: AsyncSession):
        super().__init__(Dividend, db)


class MonthlyPaymentRepository(BaseRepository[MonthlyPayment]):
    entity_name = "Monthly payment"

    def __init__(self, db: AsyncSession):
        super().__init__(MonthlyPayment, db)


class MonthlyPaymentRecordRepository(OwnedRepository[MonthlyPaymentRecord]):
    entity_name = "Payment record"
    parent_field = "monthly_payment_id"
    default_order = (MonthlyPaymentRecord.payment_date.desc(),)

    def __init__(self, db: AsyncSession):
        super().__init__(MonthlyPaymentRecord, db)


class RealEstateRepository(BaseRepository[RealEstate]):
    entity_name = "Property"

    def __init__(self, db: AsyncSession):
        super().__init__(RealEstate, db)


class PropertyUKRepository(BaseRepository[PropertyUK]):
    entity_name = "Property"

    def __init__(self, db: AsyncSession):
        super().__init__(PropertyUK, db)


class PropertyTenantRepository(OwnedRepository[PropertyTenant]):
    entity_name = "Tenant"
    parent_field = "property_uk_id"

    def __init__(self, db: AsyncSession):
        super().__init__(PropertyTenant, db)
