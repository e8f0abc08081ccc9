from sqlalchemy import ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..database.base import Base, IdMixin, TimestampMixin, enum_type
from .employer import ContactMixin
from .enums import PartyStatus


class Contractor(IdMixin, TimestampMixin, Base):
    """External company engaged for services; shares the contact/primary rules of employers."""
    __tablename__ = "contractors"

    company_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    contact_first_name: Mapped[str | None] = mapped_column(String(100))
    contact_last_name: Mapped[str | None] = mapped_column(String(100))
    registration_number: Mapped[str | None] = mapped_column(String(100), unique=True)
    specialization: Mapped[str | None] = mapped_column(String(150), index=True)
    status: Mapped[PartyStatus] = mapped_column(enum_type(PartyStatus), default=PartyStatus.ACTIVE, nullable=False)
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(50))
    website: Mapped[str | None] = mapped_column(String(255))
    street: Mapped[str | None] = mapped_column(String(255))
    city: Mapped[str | None] = mapped_column(String(100))
    country: Mapped[str | None] = mapped_column(String(100))
    notes: Mapped[str | None] = mapped_column(Text)

    contacts: Mapped[list["ContractorContact"]] = relationship(
        "ContractorContact",
        back_populates="contractor",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by=lambda: [ContractorContact.is_primary.desc(), ContractorContact.created_at.desc()],
    )

    def __repr__(self) -> str:
        return f"<Contractor(id={self.id!r}, company_name={self.company_name!r})>"


class ContractorContact(IdMixin, ContactMixin, TimestampMixin, Base):
    __tablename__ = "contractor_contacts"

    contractor_id: Mapped[int] = mapped_column(
        ForeignKey("contractors.id", ondelete="CASCADE"), nullable=False, index=True
    )

    contractor: Mapped["Contractor"] = relationship("Contractor", back_populates="contacts")

    __table_args__ = (
        Index(
            "uq_contractor_contacts_one_primary",
            "contractor_id",
            unique=True,
            postgresql_where=text("is_primary"),
            sqlite_where=text("is_primary = 1"),
        ),
    )
