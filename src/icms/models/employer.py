from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..database.base import Base, IdMixin, TimestampMixin, enum_type
from .enums import EmployerType, PartyStatus
from .mixins import PersonNameMixin


class Employer(IdMixin, PersonNameMixin, TimestampMixin, Base):
    """
    Employer relationship. Polymorphic over `employer_type`:

    - COMPANY: company_name / trading_name / registration_number are meaningful.
    - INDIVIDUAL: first/last name and profession are meaningful; full_name is derived.
    """
    __tablename__ = "employers"

    employer_type: Mapped[EmployerType] = mapped_column(
        enum_type(EmployerType), default=EmployerType.COMPANY, nullable=False
    )

    # Company
    company_name: Mapped[str | None] = mapped_column(String(255), index=True)
    trading_name: Mapped[str | None] = mapped_column(String(255))
    registration_number: Mapped[str | None] = mapped_column(String(100), unique=True)
    tax_id: Mapped[str | None] = mapped_column(String(100))
    incorporation_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    established_year: Mapped[int | None] = mapped_column(Integer)
    business_type: Mapped[str | None] = mapped_column(String(100))
    company_size: Mapped[str | None] = mapped_column(String(50))

    # Individual
    date_of_birth: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    profession: Mapped[str | None] = mapped_column(String(150))

    # Classification
    industry: Mapped[str | None] = mapped_column(String(100), index=True)
    relationship_type: Mapped[str | None] = mapped_column(String(100))
    status: Mapped[PartyStatus] = mapped_column(enum_type(PartyStatus), default=PartyStatus.ACTIVE, nullable=False)

    # Contact channels
    primary_email: Mapped[str | None] = mapped_column(String(255))
    secondary_email: Mapped[str | None] = mapped_column(String(255))
    main_phone: Mapped[str | None] = mapped_column(String(50))
    alternate_phone: Mapped[str | None] = mapped_column(String(50))
    mobile_number: Mapped[str | None] = mapped_column(String(50))
    fax_number: Mapped[str | None] = mapped_column(String(50))
    website: Mapped[str | None] = mapped_column(String(255))

    # Address
    street: Mapped[str | None] = mapped_column(String(255))
    city: Mapped[str | None] = mapped_column(String(100))
    state: Mapped[str | None] = mapped_column(String(100))
    postal_code: Mapped[str | None] = mapped_column(String(20))
    country: Mapped[str | None] = mapped_column(String(100))
    billing_street: Mapped[str | None] = mapped_column(String(255))
    billing_city: Mapped[str | None] = mapped_column(String(100))
    billing_state: Mapped[str | None] = mapped_column(String(100))
    billing_postal_code: Mapped[str | None] = mapped_column(String(20))
    billing_country: Mapped[str | None] = mapped_column(String(100))

    # Commercial
    relationship_start: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    account_manager: Mapped[str | None] = mapped_column(String(150))
    contract_value: Mapped[float | None] = mapped_column(Float)
    credit_limit: Mapped[float | None] = mapped_column(Float)
    payment_terms: Mapped[str | None] = mapped_column(String(100))
    preferred_currency: Mapped[str | None] = mapped_column(String(3))
    bank_name: Mapped[str | None] = mapped_column(String(150))
    account_number: Mapped[str | None] = mapped_column(String(100))
    insurance_provider: Mapped[str | None] = mapped_column(String(150))
    insurance_coverage: Mapped[float | None] = mapped_column(Float)
    license_number: Mapped[str | None] = mapped_column(String(100))
    certification_body: Mapped[str | None] = mapped_column(String(150))
    budget_authority: Mapped[str | None] = mapped_column(String(150))
    decision_making_role: Mapped[str | None] = mapped_column(String(150))
    innovation_index: Mapped[float | None] = mapped_column(Float)

    notes: Mapped[str | None] = mapped_column(Text)

    # --- Relationships ---
    contacts: Mapped[list["EmployerContact"]] = relationship(
        "EmployerContact",
        back_populates="employer",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by=lambda: [EmployerContact.is_primary.desc(), EmployerContact.created_at.desc()],
    )

    def compute_full_name(self) -> str | None:
        # Only individuals have a person name; companies keep whatever was stored.
        if self.employer_type != EmployerType.INDIVIDUAL:
            return None
        return super().compute_full_name()

    def name_parts_changed(self) -> bool:
        return self.employer_type == EmployerType.INDIVIDUAL and super().name_parts_changed()

    @property
    def display_name(self) -> str:
        return self.company_name or self.full_name or ""

    def __repr__(self) -> str:
        return f"<Employer(id={self.id!r}, type={self.employer_type!r}, name={self.display_name!r})>"


class ContactMixin(PersonNameMixin):
    position: Mapped[str | None] = mapped_column(String(150))
    department: Mapped[str | None] = mapped_column(String(150))
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(50))
    mobile: Mapped[str | None] = mapped_column(String(50))
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)


class EmployerContact(IdMixin, ContactMixin, TimestampMixin, Base):
    """Contact person at an employer. At most one per employer is primary."""
    __tablename__ = "employer_contacts"

    employer_id: Mapped[int] = mapped_column(
        ForeignKey("employers.id", ondelete="CASCADE"), nullable=False, index=True
    )

    employer: Mapped["Employer"] = relationship("Employer", back_populates="contacts")

    __table_args__ = (
        Index(
            "uq_employer_contacts_one_primary",
            "employer_id",
            unique=True,
            postgresql_where=text("is_primary"),
            sqlite_where=text("is_primary = 1"),
        ),
    )

    def __repr__(self) -> str:
        return f"<EmployerContact(id={self.id!r}, employer_id={self.employer_id!r}, primary={self.is_primary!r})>"
