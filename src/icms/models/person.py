from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..database.base import Base, IdMixin, TimestampMixin, enum_type
from .enums import PartyStatus
from .mixins import PersonNameMixin


class Stakeholder(IdMixin, PersonNameMixin, TimestampMixin, Base):
    """Family member, associate or VIP the office keeps records for."""
    __tablename__ = "stakeholders"

    preferred_name: Mapped[str | None] = mapped_column(String(100))
    email: Mapped[str | None] = mapped_column(String(255), unique=True)
    phone: Mapped[str | None] = mapped_column(String(50))
    alternate_phone: Mapped[str | None] = mapped_column(String(50))

    date_of_birth: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    gender: Mapped[str | None] = mapped_column(String(20))
    nationality: Mapped[str | None] = mapped_column(String(100))

    organization: Mapped[str | None] = mapped_column(String(255))
    occupation: Mapped[str | None] = mapped_column(String(150))
    relationship: Mapped[str | None] = mapped_column(String(100), index=True)

    # family links kept in step with spouse/parent relationship rows
    spouse_id: Mapped[int | None] = mapped_column(ForeignKey("stakeholders.id", ondelete="SET NULL"))
    father_id: Mapped[int | None] = mapped_column(ForeignKey("stakeholders.id", ondelete="SET NULL"))
    mother_id: Mapped[int | None] = mapped_column(ForeignKey("stakeholders.id", ondelete="SET NULL"))

    address: Mapped[str | None] = mapped_column(String(255))
    city: Mapped[str | None] = mapped_column(String(100))
    country: Mapped[str | None] = mapped_column(String(100))

    tags: Mapped[list | None] = mapped_column(JSON)
    notes: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Stakeholder(id={self.id!r}, full_name={self.full_name!r})>"


class TaskHelper(IdMixin, PersonNameMixin, TimestampMixin, Base):
    """Household or field helper who can be assigned daily tasks."""
    __tablename__ = "task_helpers"

    preferred_name: Mapped[str | None] = mapped_column(String(100))
    primary_email: Mapped[str | None] = mapped_column(String(255), unique=True)
    primary_phone: Mapped[str | None] = mapped_column(String(50))
    whatsapp_number: Mapped[str | None] = mapped_column(String(50))
    preferred_contact: Mapped[str] = mapped_column(String(20), default="PHONE", nullable=False)

    date_of_birth: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    gender: Mapped[str | None] = mapped_column(String(20))
    nationality: Mapped[str | None] = mapped_column(String(100))
    languages: Mapped[list | None] = mapped_column(JSON)
    skills: Mapped[str | None] = mapped_column(Text)

    city: Mapped[str | None] = mapped_column(String(100))
    country: Mapped[str | None] = mapped_column(String(100))

    status: Mapped[PartyStatus] = mapped_column(enum_type(PartyStatus), default=PartyStatus.ACTIVE, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<TaskHelper(id={self.id!r}, full_name={self.full_name!r})>"


class StakeholderRelationship(IdMixin, TimestampMixin, Base):
    """Directed link between two stakeholders, e.g. `from` is the `father` of `to`."""
    __tablename__ = "stakeholder_relationships"

    from_id: Mapped[int] = mapped_column(
        ForeignKey("stakeholders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    to_id: Mapped[int] = mapped_column(
        ForeignKey("stakeholders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    relationship_type: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(String(255))
    strength: Mapped[str | None] = mapped_column(String(50))
    since: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    notes: Mapped[str | None] = mapped_column(Text)

    from_stakeholder: Mapped[Stakeholder] = relationship(Stakeholder, foreign_keys=[from_id], lazy="selectin")
    to_stakeholder: Mapped[Stakeholder] = relationship(Stakeholder, foreign_keys=[to_id], lazy="selectin")

    __table_args__ = (
        UniqueConstraint("from_id", "to_id", "relationship_type", name="uq_stakeholder_relationships_link"),
    )

    def __repr__(self) -> str:
        return (
            f"<StakeholderRelationship(id={self.id!r}, from_id={self.from_id!r}, "
            f"to_id={self.to_id!r}, type={self.relationship_type!r})>"
        )
