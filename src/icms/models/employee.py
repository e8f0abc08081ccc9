from datetime import datetime

from sqlalchemy import DateTime, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import Base, IdMixin, TimestampMixin, enum_type
from .enums import EmployeeStatus, EmploymentType
from .mixins import PersonNameMixin


class Employee(IdMixin, PersonNameMixin, TimestampMixin, Base):
    """
    HR record for a person employed by the organisation or the household.

    Sensitive fields (bank, tax, SSN) are stored here but only leave the service
    through the detailed DTO.
    """
    __tablename__ = "employees"

    # Business identifier, `EMP<epoch-ms>` when not supplied
    emp_id: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)

    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True, index=True)
    phone_number: Mapped[str | None] = mapped_column(String(50))

    # Employment
    department: Mapped[str | None] = mapped_column(String(100), index=True)
    position: Mapped[str | None] = mapped_column(String(100))
    employment_type: Mapped[EmploymentType] = mapped_column(
        enum_type(EmploymentType), default=EmploymentType.FULL_TIME, nullable=False
    )
    status: Mapped[EmployeeStatus] = mapped_column(
        enum_type(EmployeeStatus), default=EmployeeStatus.ACTIVE, nullable=False, index=True
    )
    hire_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    termination_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    # Compensation
    salary: Mapped[float | None] = mapped_column(Float)
    currency: Mapped[str] = mapped_column(String(3), default="USD", nullable=False)

    # Personal
    nationality: Mapped[str | None] = mapped_column(String(100))
    date_of_birth: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    gender: Mapped[str | None] = mapped_column(String(20))
    marital_status: Mapped[str | None] = mapped_column(String(20))

    # Sensitive
    bank_name: Mapped[str | None] = mapped_column(String(150))
    account_number: Mapped[str | None] = mapped_column(String(100))
    tax_id: Mapped[str | None] = mapped_column(String(100))
    social_security_number: Mapped[str | None] = mapped_column(String(100))

    emergency_contact_name: Mapped[str | None] = mapped_column(String(200))
    emergency_contact_phone: Mapped[str | None] = mapped_column(String(50))

    # Address (flat; grouped into `address` by the detailed DTO)
    street: Mapped[str | None] = mapped_column(String(255))
    city: Mapped[str | None] = mapped_column(String(100))
    state: Mapped[str | None] = mapped_column(String(100))
    postal_code: Mapped[str | None] = mapped_column(String(20))
    country: Mapped[str | None] = mapped_column(String(100))

    notes: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Employee(id={self.id!r}, emp_id={self.emp_id!r}, full_name={self.full_name!r})>"
