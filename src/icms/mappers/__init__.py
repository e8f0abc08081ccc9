from .employee_mapper import EmployeeMapper
from .employer_mapper import EmployerMapper
from .serializer import serialize, serialize_many, to_camel

__all__ = ["EmployeeMapper", "EmployerMapper", "serialize", "serialize_many", "to_camel"]
