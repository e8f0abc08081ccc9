"""Salaries, assets, liabilities, dividends and monthly payments."""

from typing import Any

from fastapi import status

from ....core.dependencies import DbSession, EntityId
from ....mappers.serializer import serialize, serialize_many
from ....models.finance import Liability
from ....schemas.finance import (
    AssetCreate,
    AssetUpdate,
    DividendCreate,
    DividendUpdate,
    LiabilityCreate,
    LiabilityUpdate,
    MonthlyPaymentCreate,
    MonthlyPaymentUpdate,
    PaymentCreate,
    PaymentRecordCreate,
    SalaryCreate,
    SalaryUpdate,
)
from ....services.finance_service import (
    AssetService,
    DividendService,
    LiabilityService,
    MonthlyPaymentService,
    SalaryService,
)
from ...helpers import envelope
from .records import FinanceResource, finance_router, record_status, text, year

RECENT_PAYMENTS = 5


def render_liability(liability: Liability) -> dict[str, Any]:
    # `payments` is ordered newest first
    recent = serialize_many(liability.payments[:RECENT_PAYMENTS])
    return serialize(liability, exclude={"payments"}, extra={"payments": recent})


salaries_router = finance_router(FinanceResource(
    label="Salary record",
    service=SalaryService,
    create_schema=SalaryCreate,
    update_schema=SalaryUpdate,
    filters={"status": ("status", record_status), "personType": ("person_type", text)},
))

assets_router = finance_router(FinanceResource(
    label="Asset",
    service=AssetService,
    create_schema=AssetCreate,
    update_schema=AssetUpdate,
    filters={"status": ("status", record_status), "assetType": ("asset_type", text)},
))

dividends_router = finance_router(FinanceResource(
    label="Dividend",
    service=DividendService,
    create_schema=DividendCreate,
    update_schema=DividendUpdate,
    filters={"sourceType": ("source_type", text), "year": ("year", year)},
))

# ======================================================================
# Liabilities
# ======================================================================

liabilities_router = finance_router(FinanceResource(
    label="Liability",
    service=LiabilityService,
    create_schema=LiabilityCreate,
    update_schema=LiabilityUpdate,
    filters={"status": ("status", record_status), "liabilityType": ("liability_type", text)},
    render=render_liability,
))


@liabilities_router.get("/{id}/payments")
async def list_liability_payments(id: EntityId, db: DbSession) -> dict[str, Any]:
    return envelope(serialize_many(await LiabilityService(db).list_payments(id)))


@liabilities_router.post("/{id}/payments", status_code=status.HTTP_201_CREATED)
async def record_liability_payment(id: EntityId, body: PaymentCreate, db: DbSession) -> dict[str, Any]:
    """Returns the payment and the liability with its lowered balance."""
    payment, liability = await LiabilityService(db).record_payment(id, body.to_fields())
    return envelope(serialize(payment), liability=render_liability(liability))


# ======================================================================
# Monthly payments
# ======================================================================

monthly_payments_router = finance_router(FinanceResource(
    label="Monthly payment",
    service=MonthlyPaymentService,
    create_schema=MonthlyPaymentCreate,
    update_schema=MonthlyPaymentUpdate,
    filters={"status": ("status", record_status), "paymentType": ("payment_type", text)},
))


@monthly_payments_router.get("/{id}/payments")
async def list_monthly_payment_records(id: EntityId, db: DbSession) -> dict[str, Any]:
    return envelope(serialize_many(await MonthlyPaymentService(db).list_records(id)))


@monthly_payments_router.post("/{id}/payments", status_code=status.HTTP_201_CREATED)
async def add_monthly_payment_record(id: EntityId, body: PaymentRecordCreate, db: DbSession) -> dict[str, Any]:
    record = await MonthlyPaymentService(db).add_record(id, body.to_fields())
    return envelope(serialize(record))
