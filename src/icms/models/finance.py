"""
Private-office finance records. Monetary amounts are floats in the record's
`currency`; aggregate summaries are reduced from the rows a query returns.
"""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..database.base import Base, IdMixin, TimestampMixin, enum_type
from .enums import InterestType, PaymentFrequency, RecordStatus, SalaryType, TenantStatus


# ======================================================================
# Salaries
# ======================================================================

ALLOWANCE_FIELDS = (
    "housing_allowance",
    "transport_allowance",
    "meal_allowance",
    "phone_allowance",
    "other_allowances",
)
DEDUCTION_FIELDS = (
    "tax_deduction",
    "social_security",
    "pension_contribution",
    "health_insurance",
    "other_deductions",
)


class Salary(IdMixin, TimestampMixin, Base):
    __tablename__ = "salaries"

    person_type: Mapped[str | None] = mapped_column(String(30), index=True)
    person_id: Mapped[int | None] = mapped_column(Integer)
    person_name: Mapped[str | None] = mapped_column(String(255))
    position: Mapped[str | None] = mapped_column(String(150))
    department: Mapped[str | None] = mapped_column(String(150))
    employer_name: Mapped[str | None] = mapped_column(String(255))

    salary_type: Mapped[SalaryType] = mapped_column(enum_type(SalaryType), default=SalaryType.MONTHLY, nullable=False)
    base_salary: Mapped[float] = mapped_column(Float, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="USD", nullable=False)

    housing_allowance: Mapped[float | None] = mapped_column(Float)
    transport_allowance: Mapped[float | None] = mapped_column(Float)
    meal_allowance: Mapped[float | None] = mapped_column(Float)
    phone_allowance: Mapped[float | None] = mapped_column(Float)
    other_allowances: Mapped[float | None] = mapped_column(Float)

    tax_deduction: Mapped[float | None] = mapped_column(Float)
    social_security: Mapped[float | None] = mapped_column(Float)
    pension_contribution: Mapped[float | None] = mapped_column(Float)
    health_insurance: Mapped[float | None] = mapped_column(Float)
    other_deductions: Mapped[float | None] = mapped_column(Float)

    # Derived, always written by the salary calculator
    total_allowances: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    total_deductions: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    gross_salary: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    net_salary: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)

    payment_frequency: Mapped[PaymentFrequency] = mapped_column(
        enum_type(PaymentFrequency), default=PaymentFrequency.MONTHLY, nullable=False
    )
    payment_method: Mapped[str | None] = mapped_column(String(50))
    bank_name: Mapped[str | None] = mapped_column(String(150))
    account_number: Mapped[str | None] = mapped_column(String(100))

    effective_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    status: Mapped[RecordStatus] = mapped_column(enum_type(RecordStatus), default=RecordStatus.ACTIVE, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)


# ======================================================================
# Assets and liabilities
# ======================================================================

class Asset(IdMixin, TimestampMixin, Base):
    __tablename__ = "assets"

    asset_name: Mapped[str] = mapped_column(String(255), nullable=False)
    asset_type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    category: Mapped[str | None] = mapped_column(String(100))
    description: Mapped[str | None] = mapped_column(Text)
    serial_number: Mapped[str | None] = mapped_column(String(100))
    manufacturer: Mapped[str | None] = mapped_column(String(150))
    owner_name: Mapped[str | None] = mapped_column(String(255))

    purchase_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    purchase_price: Mapped[float | None] = mapped_column(Float)
    current_value: Mapped[float | None] = mapped_column(Float)
    valuation_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    currency: Mapped[str] = mapped_column(String(3), default="USD", nullable=False)

    location: Mapped[str | None] = mapped_column(String(255))
    is_insured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    insurance_provider: Mapped[str | None] = mapped_column(String(150))
    insurance_value: Mapped[float | None] = mapped_column(Float)

    status: Mapped[RecordStatus] = mapped_column(enum_type(RecordStatus), default=RecordStatus.ACTIVE, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)


class Liability(IdMixin, TimestampMixin, Base):
    __tablename__ = "liabilities"

    liability_name: Mapped[str] = mapped_column(String(255), nullable=False)
    liability_type: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    creditor_name: Mapped[str | None] = mapped_column(String(255))
    creditor_contact: Mapped[str | None] = mapped_column(String(255))
    account_number: Mapped[str | None] = mapped_column(String(100))

    original_amount: Mapped[float] = mapped_column(Float, nullable=False)
    current_balance: Mapped[float] = mapped_column(Float, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="USD", nullable=False)
    interest_rate: Mapped[float | None] = mapped_column(Float)
    interest_type: Mapped[InterestType] = mapped_column(
        enum_type(InterestType), default=InterestType.FIXED, nullable=False
    )
    payment_frequency: Mapped[PaymentFrequency] = mapped_column(
        enum_type(PaymentFrequency), default=PaymentFrequency.MONTHLY, nullable=False
    )
    monthly_payment: Mapped[float | None] = mapped_column(Float)

    start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    last_payment_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    last_payment_amount: Mapped[float | None] = mapped_column(Float)

    status: Mapped[RecordStatus] = mapped_column(enum_type(RecordStatus), default=RecordStatus.ACTIVE, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    payments: Mapped[list["LiabilityPayment"]] = relationship(
        "LiabilityPayment",
        back_populates="liability",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by=lambda: LiabilityPayment.payment_date.desc(),
    )


class LiabilityPayment(IdMixin, TimestampMixin, Base):
    __tablename__ = "liability_payments"

    liability_id: Mapped[int] = mapped_column(
        ForeignKey("liabilities.id", ondelete="CASCADE"), nullable=False, index=True
    )
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    payment_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    payment_method: Mapped[str | None] = mapped_column(String(50))
    reference: Mapped[str | None] = mapped_column(String(100))
    notes: Mapped[str | None] = mapped_column(Text)

    liability: Mapped["Liability"] = relationship("Liability", back_populates="payments")


# ======================================================================
# Income and recurring outgoings
# ======================================================================

class Dividend(IdMixin, TimestampMixin, Base):
    __tablename__ = "dividends"

    source_type: Mapped[str | None] = mapped_column(String(50), index=True)
    source_name: Mapped[str] = mapped_column(String(255), nullable=False)
    ticker: Mapped[str | None] = mapped_column(String(20))
    shares_owned: Mapped[float | None] = mapped_column(Float)
    dividend_per_share: Mapped[float | None] = mapped_column(Float)
    dividend_type: Mapped[str] = mapped_column(String(30), default="CASH", nullable=False)

    gross_amount: Mapped[float] = mapped_column(Float, nullable=False)
    tax_withheld: Mapped[float | None] = mapped_column(Float)
    net_amount: Mapped[float] = mapped_column(Float, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="USD", nullable=False)

    payment_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    tax_year: Mapped[str | None] = mapped_column(String(10))
    status: Mapped[RecordStatus] = mapped_column(enum_type(RecordStatus), default=RecordStatus.PAID, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)


class MonthlyPayment(IdMixin, TimestampMixin, Base):
    __tablename__ = "monthly_payments"

    payment_name: Mapped[str] = mapped_column(String(255), nullable=False)
    payment_type: Mapped[str | None] = mapped_column(String(50))
    category: Mapped[str | None] = mapped_column(String(100), index=True)
    vendor_name: Mapped[str | None] = mapped_column(String(255))
    account_number: Mapped[str | None] = mapped_column(String(100))

    amount: Mapped[float] = mapped_column(Float, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="USD", nullable=False)
    frequency: Mapped[PaymentFrequency] = mapped_column(
        enum_type(PaymentFrequency), default=PaymentFrequency.MONTHLY, nullable=False
    )
    due_day: Mapped[int | None] = mapped_column(Integer)
    is_auto_pay: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    next_due_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    last_payment_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    last_payment_amount: Mapped[float | None] = mapped_column(Float)

    status: Mapped[RecordStatus] = mapped_column(enum_type(RecordStatus), default=RecordStatus.ACTIVE, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    payments: Mapped[list["MonthlyPaymentRecord"]] = relationship(
        "MonthlyPaymentRecord",
        back_populates="monthly_payment",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by=lambda: MonthlyPaymentRecord.payment_date.desc(),
    )


class MonthlyPaymentRecord(IdMixin, TimestampMixin, Base):
    __tablename__ = "monthly_payment_records"

    monthly_payment_id: Mapped[int] = mapped_column(
        ForeignKey("monthly_payments.id", ondelete="CASCADE"), nullable=False, index=True
    )
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    payment_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    payment_method: Mapped[str | None] = mapped_column(String(50))
    reference: Mapped[str | None] = mapped_column(String(100))
    status: Mapped[RecordStatus] = mapped_column(enum_type(RecordStatus), default=RecordStatus.PAID, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    monthly_payment: Mapped["MonthlyPayment"] = relationship("MonthlyPayment", back_populates="payments")


# ======================================================================
# Property
# ======================================================================

class RealEstate(IdMixin, TimestampMixin, Base):
    __tablename__ = "real_estate"

    property_name: Mapped[str] = mapped_column(String(255), nullable=False)
    property_type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text)
    address: Mapped[str | None] = mapped_column(String(255))
    city: Mapped[str | None] = mapped_column(String(100))
    country: Mapped[str | None] = mapped_column(String(100))
    ownership_type: Mapped[str] = mapped_column(String(30), default="OWNED", nullable=False)

    purchase_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    purchase_price: Mapped[float | None] = mapped_column(Float)
    current_value: Mapped[float | None] = mapped_column(Float)
    currency: Mapped[str] = mapped_column(String(3), default="USD", nullable=False)
    monthly_rent: Mapped[float | None] = mapped_column(Float)
    bedrooms: Mapped[int | None] = mapped_column(Integer)
    bathrooms: Mapped[int | None] = mapped_column(Integer)
    is_rented: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    status: Mapped[RecordStatus] = mapped_column(enum_type(RecordStatus), default=RecordStatus.ACTIVE, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)


class PropertyUK(IdMixin, TimestampMixin, Base):
    __tablename__ = "properties_uk"

    property_name: Mapped[str] = mapped_column(String(255), nullable=False)
    property_type: Mapped[str] = mapped_column(String(50), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), default="London", nullable=False)
    county: Mapped[str | None] = mapped_column(String(100))
    postcode: Mapped[str | None] = mapped_column(String(20))
    ownership_type: Mapped[str] = mapped_column(String(30), default="FREEHOLD", nullable=False)

    purchase_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    purchase_price: Mapped[float | None] = mapped_column(Float)
    current_value: Mapped[float | None] = mapped_column(Float)
    currency: Mapped[str] = mapped_column(String(3), default="GBP", nullable=False)
    bedrooms: Mapped[int | None] = mapped_column(Integer)
    bathrooms: Mapped[int | None] = mapped_column(Integer)
    epc_rating: Mapped[str | None] = mapped_column(String(5))
    council_tax_band: Mapped[str | None] = mapped_column(String(5))
    monthly_rent: Mapped[float | None] = mapped_column(Float)
    is_rented: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    status: Mapped[RecordStatus] = mapped_column(enum_type(RecordStatus), default=RecordStatus.ACTIVE, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    tenants: Mapped[list["PropertyTenant"]] = relationship(
        "PropertyTenant",
        back_populates="property_uk",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by=lambda: PropertyTenant.created_at.desc(),
    )


class PropertyTenant(IdMixin, TimestampMixin, Base):
    __tablename__ = "property_tenants"

    property_uk_id: Mapped[int] = mapped_column(
        ForeignKey("properties_uk.id", ondelete="CASCADE"), nullable=False, index=True
    )
    tenant_name: Mapped[str] = mapped_column(String(255), nullable=False)
    tenant_email: Mapped[str | None] = mapped_column(String(255))
    tenant_phone: Mapped[str | None] = mapped_column(String(50))
    unit_number: Mapped[str | None] = mapped_column(String(20))

    rent_amount: Mapped[float] = mapped_column(Float, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="GBP", nullable=False)
    security_deposit: Mapped[float | None] = mapped_column(Float)
    contract_start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    contract_end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    payment_day: Mapped[int | None] = mapped_column(Integer)

    status: Mapped[TenantStatus] = mapped_column(enum_type(TenantStatus), default=TenantStatus.ACTIVE, nullable=False)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    documents: Mapped[list | None] = mapped_column(JSON)
    notes: Mapped[str | None] = mapped_column(Text)

    property_uk: Mapped["PropertyUK"] = relationship("PropertyUK", back_populates="tenants")

    __table_args__ = (
        Index(
            "uq_property_tenants_one_primary",
            "property_uk_id",
            unique=True,
            postgresql_where=text("is_primary"),
            sqlite_where=text("is_primary = 1"),
        ),
    )
