from datetime import datetime

from ..models.enums import InterestType, PaymentFrequency, RecordStatus, SalaryType, TenantStatus
from .base import CamelModel, RequiredStr, make_partial


class SalaryCreate(CamelModel):
    person_type: str | None = None
    person_id: int | None = None
    person_name: str | None = None
    position: str | None = None
    department: str | None = None
    employer_name: str | None = None
    salary_type: SalaryType | None = None
    base_salary: float
    currency: str | None = None
    housing_allowance: float | None = None
    transport_allowance: float | None = None
    meal_allowance: float | None = None
    phone_allowance: float | None = None
    other_allowances: float | None = None
    tax_deduction: float | None = None
    social_security: float | None = None
    pension_contribution: float | None = None
    health_insurance: float | None = None
    other_deductions: float | None = None
    payment_frequency: PaymentFrequency | None = None
    payment_method: str | None = None
    bank_name: str | None = None
    account_number: str | None = None
    effective_date: datetime
    end_date: datetime | None = None
    status: RecordStatus | None = None
    notes: str | None = None


SalaryUpdate = make_partial(SalaryCreate, "SalaryUpdate")


class AssetCreate(CamelModel):
    asset_name: RequiredStr
    asset_type: RequiredStr
    category: str | None = None
    description: str | None = None
    serial_number: str | None = None
    manufacturer: str | None = None
    owner_name: str | None = None
    purchase_date: datetime | None = None
    purchase_price: float | None = None
    current_value: float | None = None
    valuation_date: datetime | None = None
    currency: str | None = None
    location: str | None = None
    is_insured: bool | None = None
    insurance_provider: str | None = None
    insurance_value: float | None = None
    status: RecordStatus | None = None
    notes: str | None = None


AssetUpdate = make_partial(AssetCreate, "AssetUpdate")


class LiabilityCreate(CamelModel):
    liability_name: RequiredStr
    liability_type: RequiredStr
    description: str | None = None
    creditor_name: str | None = None
    creditor_contact: str | None = None
    account_number: str | None = None
    original_amount: float
    current_balance: float | None = None
    currency: str | None = None
    interest_rate: float | None = None
    interest_type: InterestType | None = None
    payment_frequency: PaymentFrequency | None = None
    monthly_payment: float | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    status: RecordStatus | None = None
    notes: str | None = None


LiabilityUpdate = make_partial(LiabilityCreate, "LiabilityUpdate")


class PaymentCreate(CamelModel):
    """A payment against a liability or a monthly commitment."""
    amount: float
    payment_date: datetime | None = None
    payment_method: str | None = None
    reference: str | None = None
    notes: str | None = None


class PaymentRecordCreate(CamelModel):
    """A month marked paid on a recurring commitment; amount defaults to the commitment's."""
    amount: float | None = None
    payment_date: datetime | None = None
    payment_method: str | None = None
    reference: str | None = None
    status: RecordStatus | None = None
    notes: str | None = None


class DividendCreate(CamelModel):
    source_type: str | None = None
    source_name: RequiredStr
    ticker: str | None = None
    shares_owned: float | None = None
    dividend_per_share: float | None = None
    dividend_type: str | None = None
    gross_amount: float
    tax_withheld: float | None = None
    net_amount: float | None = None
    currency: str | None = None
    payment_date: datetime
    tax_year: str | None = None
    status: RecordStatus | None = None
    notes: str | None = None


DividendUpdate = make_partial(DividendCreate, "DividendUpdate")


class MonthlyPaymentCreate(CamelModel):
    payment_name: RequiredStr
    payment_type: str | None = None
    category: str | None = None
    vendor_name: str | None = None
    account_number: str | None = None
    amount: float
    currency: str | None = None
    frequency: PaymentFrequency | None = None
    due_day: int | None = None
    is_auto_pay: bool | None = None
    next_due_date: datetime | None = None
    status: RecordStatus | None = None
    notes: str | None = None


MonthlyPaymentUpdate = make_partial(MonthlyPaymentCreate, "MonthlyPaymentUpdate")


class RealEstateCreate(CamelModel):
    property_name: RequiredStr
    property_type: RequiredStr
    description: str | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None
    ownership_type: str | None = None
    purchase_date: datetime | None = None
    purchase_price: float | None = None
    current_value: float | None = None
    currency: str | None = None
    monthly_rent: float | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None
    is_rented: bool | None = None
    status: RecordStatus | None = None
    notes: str | None = None


RealEstateUpdate = make_partial(RealEstateCreate, "RealEstateUpdate")


class PropertyUKCreate(CamelModel):
    property_name: RequiredStr
    property_type: RequiredStr
    address: RequiredStr
    city: str | None = None
    county: str | None = None
    postcode: str | None = None
    ownership_type: str | None = None
    purchase_date: datetime | None = None
    purchase_price: float | None = None
    current_value: float | None = None
    currency: str | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None
    epc_rating: str | None = None
    council_tax_band: str | None = None
    monthly_rent: float | None = None
    is_rented: bool | None = None
    status: RecordStatus | None = None
    notes: str | None = None


PropertyUKUpdate = make_partial(PropertyUKCreate, "PropertyUKUpdate")


class TenantCreate(CamelModel):
    tenant_name: RequiredStr
    tenant_email: str | None = None
    tenant_phone: str | None = None
    unit_number: str | None = None
    rent_amount: float
    currency: str | None = None
    security_deposit: float | None = None
    contract_start_date: datetime | None = None
    contract_end_date: datetime | None = None
    payment_day: int | None = None
    status: TenantStatus | None = None
    is_primary: bool = False
    notes: str | None = None


TenantUpdate = make_partial(TenantCreate, "TenantUpdate")
