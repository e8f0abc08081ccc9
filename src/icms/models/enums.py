"""
Status and category enums shared by models, schemas and services.

Values equal names so the stored string, the wire value and the Python member
all read the same.
"""

from enum import StrEnum


# --- People ---

class EmployeeStatus(StrEnum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    ON_LEAVE = "ON_LEAVE"
    TERMINATED = "TERMINATED"
    SUSPENDED = "SUSPENDED"


class EmploymentType(StrEnum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"
    INTERN = "INTERN"
    CONSULTANT = "CONSULTANT"


class EmployerType(StrEnum):
    COMPANY = "COMPANY"
    INDIVIDUAL = "INDIVIDUAL"


class PartyStatus(StrEnum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    PROSPECT = "PROSPECT"
    SUSPENDED = "SUSPENDED"


class PersonType(StrEnum):
    EMPLOYEE = "EMPLOYEE"
    STAKEHOLDER = "STAKEHOLDER"
    EMPLOYER = "EMPLOYER"
    TASK_HELPER = "TASK_HELPER"


# --- Scheduling ---

class MeetingStatus(StrEnum):
    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    POSTPONED = "POSTPONED"


class LocationType(StrEnum):
    IN_PERSON = "IN_PERSON"
    VIRTUAL = "VIRTUAL"
    ONLINE = "ONLINE"
    HYBRID = "HYBRID"


class TaskStatus(StrEnum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    CANCELLED = "CANCELLED"


class TaskPriority(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    TaskPriority.LOW: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.HIGH: 3,
    TaskPriority.URGENT: 4,
}


# --- Finance ---

class RecordStatus(StrEnum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    PAID_OFF = "PAID_OFF"
    SOLD = "SOLD"
    PENDING = "PENDING"
    PAID = "PAID"
    CANCELLED = "CANCELLED"


class SalaryType(StrEnum):
    MONTHLY = "MONTHLY"
    ANNUAL = "ANNUAL"
    HOURLY = "HOURLY"
    DAILY = "DAILY"


class PaymentFrequency(StrEnum):
    WEEKLY = "WEEKLY"
    BIWEEKLY = "BIWEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    ANNUALLY = "ANNUALLY"


class InterestType(StrEnum):
    FIXED = "FIXED"
    VARIABLE = "VARIABLE"


class TenantStatus(StrEnum):
    ACTIVE = "ACTIVE"
    NOTICE_GIVEN = "NOTICE_GIVEN"
    VACATED = "VACATED"


# --- Travel ---

class TravelStatus(StrEnum):
    REQUEST = "REQUEST"
    PLANNING = "PLANNING"
    CONFIRMING = "CONFIRMING"
    EXECUTING = "EXECUTING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in (TravelStatus.COMPLETED, TravelStatus.CANCELLED)


class BookingStatus(StrEnum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    BOOKED = "BOOKED"
    CHANGED = "CHANGED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


class CommunicationType(StrEnum):
    EMAIL = "EMAIL"
    WHATSAPP = "WHATSAPP"
    BOTH = "BOTH"


class CommunicationStatus(StrEnum):
    PENDING = "PENDING"
    SENT = "SENT"
    FAILED = "FAILED"
