from datetime import datetime
from typing import ClassVar

from ..models.enums import EmployeeStatus, EmployerType, EmploymentType, PartyStatus
from .base import CamelModel, RequiredStr, make_partial


# ======================================================================
# Employees
# ======================================================================

class EmployeeFields(CamelModel):
    emp_id: str | None = None
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    full_name: str | None = None
    email: str | None = None
    phone_number: str | None = None
    department: str | None = None
    position: str | None = None
    employment_type: EmploymentType | None = None
    status: EmployeeStatus | None = None
    hire_date: datetime | None = None
    termination_date: datetime | None = None
    salary: float | None = None
    currency: str | None = None
    nationality: str | None = None
    date_of_birth: datetime | None = None
    gender: str | None = None
    marital_status: str | None = None
    bank_name: str | None = None
    account_number: str | None = None
    tax_id: str | None = None
    social_security_number: str | None = None
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    notes: str | None = None


class EmployeeCreate(EmployeeFields):
    """
    Both API versions accept the same body; each use case checks its own
    required fields so the messages match what its clients expect.
    """


EmployeeUpdate = make_partial(EmployeeFields, "EmployeeUpdate")


# ======================================================================
# Employers / contractors and their contacts
# ======================================================================

class ContactCreate(CamelModel):
    first_name: RequiredStr
    middle_name: str | None = None
    last_name: RequiredStr
    position: str | None = None
    department: str | None = None
    email: str | None = None
    phone: str | None = None
    mobile: str | None = None
    is_primary: bool = False
    notes: str | None = None


ContactUpdate = make_partial(ContactCreate, "ContactUpdate")


class EmployerCreate(CamelModel):
    nested_fields: ClassVar[frozenset[str]] = frozenset({"contacts"})

    employer_type: EmployerType = EmployerType.COMPANY
    company_name: str | None = None
    trading_name: str | None = None
    registration_number: str | None = None
    tax_id: str | None = None
    incorporation_date: datetime | None = None
    established_year: int | None = None
    business_type: str | None = None
    company_size: str | None = None
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    date_of_birth: datetime | None = None
    profession: str | None = None
    industry: str | None = None
    relationship_type: str | None = None
    status: PartyStatus | None = None
    primary_email: str | None = None
    secondary_email: str | None = None
    main_phone: str | None = None
    alternate_phone: str | None = None
    mobile_number: str | None = None
    fax_number: str | None = None
    website: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    billing_street: str | None = None
    billing_city: str | None = None
    billing_state: str | None = None
    billing_postal_code: str | None = None
    billing_country: str | None = None
    relationship_start: datetime | None = None
    account_manager: str | None = None
    contract_value: float | None = None
    credit_limit: float | None = None
    payment_terms: str | None = None
    preferred_currency: str | None = None
    bank_name: str | None = None
    account_number: str | None = None
    insurance_provider: str | None = None
    insurance_coverage: float | None = None
    license_number: str | None = None
    certification_body: str | None = None
    budget_authority: str | None = None
    decision_making_role: str | None = None
    innovation_index: float | None = None
    notes: str | None = None
    contacts: list[ContactCreate] | None = None


EmployerUpdate = make_partial(EmployerCreate, "EmployerUpdate")


class ContractorCreate(CamelModel):
    nested_fields: ClassVar[frozenset[str]] = frozenset({"contacts"})

    company_name: RequiredStr
    contact_first_name: str | None = None
    contact_last_name: str | None = None
    registration_number: str | None = None
    specialization: str | None = None
    status: PartyStatus | None = None
    email: str | None = None
    phone: str | None = None
    website: str | None = None
    street: str | None = None
    city: str | None = None
    country: str | None = None
    notes: str | None = None
    contacts: list[ContactCreate] | None = None


ContractorUpdate = make_partial(ContractorCreate, "ContractorUpdate")


# ======================================================================
# Stakeholders / task helpers
# ======================================================================

class StakeholderCreate(CamelModel):
    first_name: RequiredStr
    middle_name: str | None = None
    last_name: RequiredStr
    preferred_name: str | None = None
    email: str | None = None
    phone: str | None = None
    alternate_phone: str | None = None
    date_of_birth: datetime | None = None
    gender: str | None = None
    nationality: str | None = None
    organization: str | None = None
    occupation: str | None = None
    relationship: str | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None
    tags: list[str] | None = None
    notes: str | None = None


StakeholderUpdate = make_partial(StakeholderCreate, "StakeholderUpdate")


class StakeholderRelationshipCreate(CamelModel):
    """`from_id` is the `relationship_type` of `to_id`; ids and type are checked by the service."""
    from_id: int | None = None
    to_id: int | None = None
    relationship_type: str | None = None
    description: str | None = None
    strength: str | None = None
    since: datetime | None = None
    notes: str | None = None
    create_reverse: bool = True


class TaskHelperCreate(CamelModel):
    first_name: RequiredStr
    middle_name: str | None = None
    last_name: RequiredStr
    preferred_name: str | None = None
    primary_email: str | None = None
    primary_phone: str | None = None
    whatsapp_number: str | None = None
    preferred_contact: str | None = None
    date_of_birth: datetime | None = None
    gender: str | None = None
    nationality: str | None = None
    languages: list[str] | None = None
    skills: str | None = None
    city: str | None = None
    country: str | None = None
    status: PartyStatus | None = None
    notes: str | None = None


TaskHelperUpdate = make_partial(TaskHelperCreate, "TaskHelperUpdate")
