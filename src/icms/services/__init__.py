from .auth_service import AuthService
from .employee_service import EmployeeService
from .finance_service import (
    AssetService,
    DividendService,
    LiabilityService,
    MonthlyPaymentService,
    PropertyUKService,
    RealEstateService,
    SalaryService,
)
from .notification_service import NotificationService
from .party_service import ContractorService, EmployerService
from .people_service import StakeholderService, TaskHelperService
from .person_resolver import PersonDetails, PersonResolver
from .record_service import RecordService
from .reference_data import ReferenceDataReader, departments_reader, positions_reader
from .schedule_service import DailyTaskService, MeetingService
from .travel_service import (
    CommunicationService,
    HotelService,
    PassengerService,
    TravelComponentService,
    TravelRequestService,
)

__all__ = [
    "AssetService",
    "AuthService",
    "CommunicationService",
    "ContractorService",
    "DailyTaskService",
    "DividendService",
    "EmployeeService",
    "EmployerService",
    "HotelService",
    "LiabilityService",
    "MeetingService",
    "MonthlyPaymentService",
    "NotificationService",
    "PassengerService",
    "PersonDetails",
    "PersonResolver",
    "PropertyUKService",
    "RealEstateService",
    "RecordService",
    "ReferenceDataReader",
    "SalaryService",
    "StakeholderService",
    "TaskHelperService",
    "TravelComponentService",
    "TravelRequestService",
    "departments_reader",
    "positions_reader",
]
