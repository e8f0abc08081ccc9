from .base_repository import BaseRepository
from .employee_repository import EmployeeRepository
from .employer_repository import (
    ContractorContactRepository,
    ContractorRepository,
    EmployerContactRepository,
    EmployerRepository,
)
from .owned_repository import OwnedRepository
from .person_repository import (
    AdminRepository,
    DepartmentRepository,
    PositionRepository,
    StakeholderRepository,
    TaskHelperRepository,
)

__all__ = [
    "AdminRepository",
    "BaseRepository",
    "ContractorContactRepository",
    "ContractorRepository",
    "DepartmentRepository",
    "EmployeeRepository",
    "EmployerContactRepository",
    "EmployerRepository",
    "OwnedRepository",
    "PositionRepository",
    "StakeholderRepository",
    "TaskHelperRepository",
]
