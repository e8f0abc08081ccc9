from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import Base, IdMixin, TimestampMixin, enum_type
from .enums import LocationType, MeetingStatus, TaskPriority, TaskStatus


class Meeting(IdMixin, TimestampMixin, Base):
    """
    Calendar entry. `start_time` / `end_time` are "HH:MM" strings on the
    meeting's `date`; participants are kept as a JSON list of names or emails.
    """
    __tablename__ = "meetings"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    start_time: Mapped[str] = mapped_column(String(10), nullable=False)
    end_time: Mapped[str | None] = mapped_column(String(10))

    location: Mapped[str | None] = mapped_column(String(255))
    location_type: Mapped[LocationType] = mapped_column(
        enum_type(LocationType), default=LocationType.IN_PERSON, nullable=False
    )
    meeting_link: Mapped[str | None] = mapped_column(String(500))
    purpose: Mapped[str | None] = mapped_column(Text)
    category: Mapped[str] = mapped_column(String(50), default="GENERAL", nullable=False)

    organizer: Mapped[str | None] = mapped_column(String(255))
    participants: Mapped[list | None] = mapped_column(JSON)

    related_to: Mapped[str | None] = mapped_column(String(50))
    related_id: Mapped[int | None] = mapped_column(Integer)

    status: Mapped[MeetingStatus] = mapped_column(
        enum_type(MeetingStatus), default=MeetingStatus.SCHEDULED, nullable=False, index=True
    )
    notes: Mapped[str | None] = mapped_column(Text)
    # minutes
    reminder_before: Mapped[int | None] = mapped_column(Integer)

    @property
    def meeting_time(self) -> str:
        if self.end_time:
            return f"{self.start_time} - {self.end_time}"
        return self.start_time

    def __repr__(self) -> str:
        return f"<Meeting(id={self.id!r}, title={self.title!r}, date={self.date!r})>"


class DailyTask(IdMixin, TimestampMixin, Base):
    __tablename__ = "daily_tasks"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)

    priority: Mapped[TaskPriority] = mapped_column(
        enum_type(TaskPriority), default=TaskPriority.MEDIUM, nullable=False
    )
    category: Mapped[str] = mapped_column(String(50), default="GENERAL", nullable=False)
    status: Mapped[TaskStatus] = mapped_column(
        enum_type(TaskStatus), default=TaskStatus.PENDING, nullable=False, index=True
    )

    notes: Mapped[str | None] = mapped_column(Text)
    action_taken: Mapped[str | None] = mapped_column(Text)
    next_step: Mapped[str | None] = mapped_column(Text)

    related_to: Mapped[str | None] = mapped_column(String(50))
    related_id: Mapped[int | None] = mapped_column(Integer)

    assigned_to: Mapped[str | None] = mapped_column(String(255), index=True)
    created_by: Mapped[str | None] = mapped_column(String(255))
    due_time: Mapped[str | None] = mapped_column(String(10))

    def __repr__(self) -> str:
        return f"<DailyTask(id={self.id!r}, title={self.title!r}, priority={self.priority!r})>"
