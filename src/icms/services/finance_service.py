"""
Finance records: salaries, assets, liabilities, dividends, monthly payments,
real estate and UK properties with their tenants.

Every resource shares the same list/get/create/update/delete flow in
`FinanceRecordService`; subclasses bind a repository, the list filters it
accepts and the summary reduced over the listed rows.
"""

import logging
from datetime import datetime, timezone
from typing import Any, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from ..database.unit_of_work import unit_of_work
from ..exceptions.base import NotFoundException, ValidationException
from ..models.enums import PersonType, RecordStatus, TenantStatus
from ..models.finance import Dividend, Liability, MonthlyPayment, PropertyTenant, PropertyUK
from ..repositories.finance_repository import (
    AssetRepository,
    DividendRepository,
    LiabilityPaymentRepository,
    LiabilityRepository,
    MonthlyPaymentRecordRepository,
    MonthlyPaymentRepository,
    PropertyTenantRepository,
    PropertyUKRepository,
    RealEstateRepository,
    SalaryRepository,
)
from ..utils.dates import utc_now
from .record_service import RecordService
from .salary_calculator import compute_salary_totals, with_salary_totals

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _total(rows, field: str) -> float:
    return round(sum(getattr(row, field) or 0.0 for row in rows), 2)


class FinanceRecordService(RecordService[T]):
    """Record CRUD plus a filtered list with a summary reduced over the listed rows."""

    def conditions(self, **filters: Any) -> list:
        """SQL conditions for the list endpoint. Default: equality on non-None filters."""
        model = self.repository.model
        return [getattr(model, k) == v for k, v in filters.items() if v is not None]

    def summarize(self, rows: list[T]) -> dict[str, Any]:
        return {"totalRecords": len(rows)}

    async def list(self, **filters: Any) -> tuple[list[T], dict[str, Any]]:
        rows = await self.repository.find_all(*self.conditions(**filters))
        return rows, self.summarize(rows)


# ======================================================================
# Salaries
# ======================================================================

class SalaryService(FinanceRecordService):
    def __init__(self, db: AsyncSession):
        super().__init__(db, SalaryRepository(db))

    def conditions(self, status=None, person_type=None) -> list:
        if isinstance(person_type, PersonType):
            person_type = person_type.value
        return super().conditions(status=status, person_type=person_type)

    def summarize(self, rows) -> dict[str, Any]:
        return {
            "totalGrossSalary": _total(rows, "gross_salary"),
            "totalNetSalary": _total(rows, "net_salary"),
            "totalRecords": len(rows),
        }

    def prepare_create(self, fields: dict[str, Any]) -> dict[str, Any]:
        return with_salary_totals({k: v for k, v in fields.items() if v is not None})

    def prepare_update(self, entity, fields: dict[str, Any]) -> dict[str, Any]:
        """Totals follow the merged row, whichever components the client changed."""
        merged = {attr.key: getattr(entity, attr.key) for attr in entity.__mapper__.column_attrs}
        merged.update(fields)
        return {**fields, **compute_salary_totals(merged)}


# ======================================================================
# Assets and liabilities
# ======================================================================

class AssetService(FinanceRecordService):
    def __init__(self, db: AsyncSession):
        super().__init__(db, AssetRepository(db))

    def summarize(self, rows) -> dict[str, Any]:
        current = _total(rows, "current_value")
        purchase = _total(rows, "purchase_price")
        return {
            "totalCurrentValue": current,
            "totalPurchasePrice": purchase,
            "totalAssets": len(rows),
            "appreciation": round(current - purchase, 2),
        }


class LiabilityService(FinanceRecordService[Liability]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, LiabilityRepository(db))
        self.payments = LiabilityPaymentRepository(db)

    def summarize(self, rows) -> dict[str, Any]:
        original = _total(rows, "original_amount")
        balance = _total(rows, "current_balance")
        return {
            "totalOriginalAmount": original,
            "totalCurrentBalance": balance,
            "totalPaid": round(original - balance, 2),
            "totalLiabilities": len(rows),
        }

    def prepare_create(self, fields: dict[str, Any]) -> dict[str, Any]:
        if fields.get("current_balance") is None:
            fields["current_balance"] = fields.get("original_amount")
        return fields

    async def list_payments(self, liability_id: int):
        await self.get(liability_id)
        return await self.payments.list_for_parent(liability_id)

    async def record_payment(self, liability_id: int, fields: dict[str, Any]):
        """
        Store the payment and lower the balance in one transaction. The balance
        is decremented in SQL, so the refreshed liability is returned with it.
        """
        amount = fields.get("amount")
        if amount is None or amount <= 0:
            raise ValidationException.from_field_error("amount", "Payment amount must be greater than zero", amount)

        liability = await self.get(liability_id)
        values = {k: v for k, v in fields.items() if v is not None}
        values.setdefault("payment_date", utc_now())

        async with unit_of_work(self.db, self.payments.name):
            payment = await self.payments.create(**values, liability_id=liability_id)
            await self.repository.apply_payment(liability_id, amount, values["payment_date"])

        await self.db.refresh(liability)
        logger.info(
            "finance.liability.payment",
            extra={"liability_id": liability_id, "amount": amount, "balance": liability.current_balance},
        )
        return payment, liability


# ======================================================================
# Income and recurring outgoings
# ======================================================================

class DividendService(FinanceRecordService[Dividend]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, DividendRepository(db))

    def conditions(self, source_type=None, year: int | None = None) -> list:
        conditions = super().conditions(source_type=source_type)
        if year is not None:
            conditions += [
                Dividend.payment_date >= datetime(year, 1, 1, tzinfo=timezone.utc),
                Dividend.payment_date < datetime(year + 1, 1, 1, tzinfo=timezone.utc),
            ]
        return conditions

    def summarize(self, rows) -> dict[str, Any]:
        gross = _total(rows, "gross_amount")
        return {
            "totalGrossAmount": gross,
            "totalNetAmount": _total(rows, "net_amount"),
            "totalTaxWithheld": _total(rows, "tax_withheld"),
            "totalDividends": len(rows),
            "totalAmount": gross,
            "totalRecords": len(rows),
        }

    def prepare_create(self, fields: dict[str, Any]) -> dict[str, Any]:
        if fields.get("net_amount") is None and fields.get("gross_amount") is not None:
            fields["net_amount"] = round(fields["gross_amount"] - (fields.get("tax_withheld") or 0.0), 2)
        return fields


class MonthlyPaymentService(FinanceRecordService[MonthlyPayment]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, MonthlyPaymentRepository(db))
        self.records = MonthlyPaymentRecordRepository(db)

    def summarize(self, rows) -> dict[str, Any]:
        active = [row for row in rows if row.status == RecordStatus.ACTIVE]
        return {
            "totalMonthlyAmount": _total(rows, "amount"),
            "totalActiveMonthly": _total(active, "amount"),
            "totalPayments": len(rows),
            "activePayments": len(active),
        }

    async def list_records(self, monthly_payment_id: int):
        await self.get(monthly_payment_id)
        return await self.records.list_for_parent(monthly_payment_id)

    async def add_record(self, monthly_payment_id: int, fields: dict[str, Any]):
        monthly = await self.get(monthly_payment_id)
        values = {k: v for k, v in fields.items() if v is not None}
        values.setdefault("amount", monthly.amount)
        values.setdefault("payment_date", utc_now())

        async with unit_of_work(self.db, self.records.name):
            record = await self.records.create(**values, monthly_payment_id=monthly_payment_id)
            await self.repository.update(
                monthly,
                last_payment_date=values["payment_date"],
                last_payment_amount=values["amount"],
            )
        return record


# ======================================================================
# Property
# ======================================================================

class RealEstateService(FinanceRecordService):
    def __init__(self, db: AsyncSession):
        super().__init__(db, RealEstateRepository(db))

    def summarize(self, rows) -> dict[str, Any]:
        return {
            "totalValue": _total(rows, "current_value"),
            "totalMonthlyRent": _total(rows, "monthly_rent"),
            "totalProperties": len(rows),
        }


class PropertyUKService(FinanceRecordService[PropertyUK]):
    """UK properties. Tenants hang off a property; one of them may be primary."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, PropertyUKRepository(db))
        self.tenants = PropertyTenantRepository(db)

    def summarize(self, rows) -> dict[str, Any]:
        rented = [row for row in rows if row.is_rented]
        return {
            "totalProperties": len(rows),
            "activeProperties": sum(1 for row in rows if row.status == RecordStatus.ACTIVE),
            "rentedProperties": len(rented),
            "totalValue": _total(rows, "current_value"),
            "totalMonthlyRent": _total(rented, "monthly_rent"),
        }

    # ------------------------------------------------------------------
    # Tenants
    # ------------------------------------------------------------------

    @staticmethod
    def summarize_tenants(tenants: list[PropertyTenant]) -> dict[str, Any]:
        active = [t for t in tenants if t.status == TenantStatus.ACTIVE]
        return {
            "totalTenants": len(tenants),
            "activeTenants": len(active),
            "totalMonthlyRent": _total(active, "rent_amount"),
        }

    async def list_tenants(self, property_id: int) -> tuple[list[PropertyTenant], dict[str, Any]]:
        await self.get(property_id)
        tenants = await self.tenants.list_for_parent(property_id)
        return tenants, self.summarize_tenants(tenants)

    async def get_tenant(self, property_id: int, tenant_id: int) -> PropertyTenant:
        tenant = await self.tenants.get_by_id(tenant_id)
        if tenant is None or tenant.property_uk_id != property_id:
            raise NotFoundException("Tenant", tenant_id, message="Tenant not found")
        return tenant

    async def add_tenant(self, property_id: int, fields: dict[str, Any]) -> PropertyTenant:
        """The tenant row and `is_rented` on the property are committed together."""
        prop = await self.get(property_id)
        values = {k: v for k, v in fields.items() if v is not None}

        async with unit_of_work(self.db, self.tenants.name):
            if values.get("is_primary"):
                await self.tenants.clear_primary(property_id)
                logger.info("tenants.primary.reassigned", extra={"property_id": property_id})
            tenant = await self.tenants.create(**values, property_uk_id=property_id)
            if not prop.is_rented:
                await self.repository.update(prop, is_rented=True)

        logger.info("finance.tenant.created", extra={"property_id": property_id, "id": tenant.id})
        return tenant

    async def update_tenant(self, property_id: int, tenant_id: int, fields: dict[str, Any]) -> PropertyTenant:
        tenant = await self.get_tenant(property_id, tenant_id)
        async with unit_of_work(self.db, self.tenants.name):
            if fields.get("is_primary") and not tenant.is_primary:
                await self.tenants.clear_primary(property_id, exclude_id=tenant.id)
                logger.info("tenants.primary.reassigned", extra={"property_id": property_id, "tenant_id": tenant.id})
            tenant = await self.tenants.update(tenant, **fields)
        return tenant

    async def delete_tenant(self, property_id: int, tenant_id: int) -> None:
        tenant = await self.get_tenant(property_id, tenant_id)
        async with unit_of_work(self.db, self.tenants.name):
            await self.tenants.delete(tenant)
