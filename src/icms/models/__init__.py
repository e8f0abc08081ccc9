from .admin import Admin
from .contractor import Contractor, ContractorContact
from .employee import Employee
from .employer import Employer, EmployerContact
from .finance import (
    Asset,
    Dividend,
    Liability,
    LiabilityPayment,
    MonthlyPayment,
    MonthlyPaymentRecord,
    PropertyTenant,
    PropertyUK,
    RealEstate,
    Salary,
)
from .person import Stakeholder, StakeholderRelationship, TaskHelper
from .reference import Department, Position
from .schedule import DailyTask, Meeting
from .travel import (
    CarWithDriver,
    EmbassyService,
    EventParticipant,
    Flight,
    FlightPassenger,
    Hotel,
    HotelRoom,
    MeetAssist,
    PrivateJet,
    RentalCar,
    RoomAssignment,
    Train,
    TravelDestination,
    TravelEvent,
    TravelRequest,
    TravelStatusHistory,
    TripCommunication,
    TripPassenger,
)

__all__ = [
    "Admin",
    "Asset",
    "CarWithDriver",
    "Contractor",
    "ContractorContact",
    "DailyTask",
    "Department",
    "Dividend",
    "EmbassyService",
    "Employee",
    "Employer",
    "EmployerContact",
    "EventParticipant",
    "Flight",
    "FlightPassenger",
    "Hotel",
    "HotelRoom",
    "Liability",
    "LiabilityPayment",
    "MeetAssist",
    "Meeting",
    "MonthlyPayment",
    "MonthlyPaymentRecord",
    "Position",
    "PrivateJet",
    "PropertyTenant",
    "PropertyUK",
    "RealEstate",
    "RentalCar",
    "RoomAssignment",
    "Salary",
    "Stakeholder",
    "StakeholderRelationship",
    "TaskHelper",
    "Train",
    "TravelDestination",
    "TravelEvent",
    "TravelRequest",
    "TravelStatusHistory",
    "TripCommunication",
    "TripPassenger",
]
