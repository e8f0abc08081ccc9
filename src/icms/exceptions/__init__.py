from .base import (
    DomainException,
    FieldError,
    ValidationException,
    InvalidFieldError,
    NotFoundException,
    AuthenticationError,
    DuplicateError,
    RepositoryError,
    ServiceUnavailableError,
)
from .handler import ErrorHandler

__all__ = [
    "DomainException",
    "FieldError",
    "ValidationException",
    "InvalidFieldError",
    "NotFoundException",
    "AuthenticationError",
    "DuplicateError",
    "RepositoryError",
    "ServiceUnavailableError",
    "ErrorHandler",
]
