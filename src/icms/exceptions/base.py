"""
Application-level exceptions.

Every exception raised on purpose by repositories, services and route handlers
derives from `DomainException`. Each one knows its canonical `code`, its HTTP
status (`http_status()`) and its JSON body (`to_payload()`), so the error handler
only has to discriminate and log.

    DomainException            422  DOMAIN_ERROR
    ├── ValidationException    400  VALIDATION_ERROR   (+ validationErrors)
    │   └── InvalidFieldError  400  INVALID_FIELD
    ├── NotFoundException      404  NOT_FOUND          (+ entityName, entityId)
    ├── AuthenticationError    401  UNAUTHORIZED
    ├── DuplicateError         409  DUPLICATE
    ├── RepositoryError        500  PERSISTENCE_ERROR
    └── ServiceUnavailableError 503 SERVICE_UNAVAILABLE (+ details)
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class DomainException(Exception):
    """
    Business-rule violation and base for all application exceptions.

    - message: human-friendly message (safe to show to clients)
    - code: canonical short code used by clients (e.g. 'DOMAIN_ERROR')
    - timestamp: ISO-8601 UTC time the exception was created
    """

    # canonical code -> HTTP status
    ERROR_CODE_TO_STATUS = {
        "DOMAIN_ERROR": 422,
        "VALIDATION_ERROR": 400,
        "INVALID_FIELD": 400,
        "NOT_FOUND": 404,
        "UNAUTHORIZED": 401,
        "DUPLICATE": 409,
        "PERSISTENCE_ERROR": 500,
        "SERVICE_UNAVAILABLE": 503,
    }
    DEFAULT_CODE = "DOMAIN_ERROR"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.DEFAULT_CODE
        self.timestamp = _utc_now_iso()

    def __str__(self) -> str:
        return f"{self.message} (code: {self.code})"

    def to_payload(self) -> dict[str, Any]:
        """
        JSON-serializable body for HTTP responses:
            {"error": "...", "code": "DOMAIN_ERROR", "timestamp": "..."}
        """
        return {"error": self.message, "code": self.code, "timestamp": self.timestamp}

    def http_status(self) -> int:
        return self.ERROR_CODE_TO_STATUS.get(self.code, 422)


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str
    value: Any = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        data = {"field": self.field, "message": self.message}
        if self.value is not None:
            data["value"] = self.value
        return data


class ValidationException(DomainException):
    """Client-fixable input problem. Carries one entry per offending field."""

    DEFAULT_CODE = "VALIDATION_ERROR"

    def __init__(self, message: str, errors: Iterable[FieldError] | None = None, code: str | None = None):
        super().__init__(message, code)
        self.errors = list(errors) if errors else []

    @property
    def fields(self) -> list[str]:
        return [e.field for e in self.errors]

    @classmethod
    def from_field_error(cls, field_name: str, message: str, value: Any = None) -> "ValidationException":
        return cls(
            f"Validation failed for field: {field_name}",
            [FieldError(field_name, message, value)],
        )

    @classmethod
    def from_field_errors(cls, errors: Iterable[FieldError]) -> "ValidationException":
        errors = list(errors)
        names = ", ".join(e.field for e in errors)
        return cls(f"Validation failed for fields: {names}", errors)

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["validationErrors"] = [e.to_dict() for e in self.errors]
        return payload


class InvalidFieldError(ValidationException):
    """Raised when the caller passes unexpected/unknown fields to repository methods."""

    DEFAULT_CODE = "INVALID_FIELD"

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        errors = [FieldError(name, "Unknown field") for name in (fields or [])]
        super().__init__(message, errors)


class NotFoundException(DomainException):
    """Requested entity does not exist."""

    DEFAULT_CODE = "NOT_FOUND"

    def __init__(self, entity_name: str, entity_id: Any = None, message: str | None = None):
        super().__init__(message or f"{entity_name} with id {entity_id} not found")
        self.entity_name = entity_name
        self.entity_id = entity_id

    @classmethod
    def with_criteria(cls, entity_name: str, criteria: dict[str, Any]) -> "NotFoundException":
        parts = ", ".join(f"{k}={v}" for k, v in criteria.items())
        return cls(entity_name, None, f"{entity_name} not found with criteria: {parts}")

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["entityName"] = self.entity_name
        payload["entityId"] = self.entity_id
        return payload


class AuthenticationError(DomainException):
    DEFAULT_CODE = "UNAUTHORIZED"

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class DuplicateError(DomainException):
    """
    Unique-constraint conflict. `constraint` is kept for logs only and never
    leaves the process.
    """

    DEFAULT_CODE = "DUPLICATE"

    def __init__(self, message: str, *, fields: Iterable[str] | None = None, constraint: str | None = None):
        super().__init__(message)
        self.fields = list(fields) if fields else None
        self.constraint = constraint

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload


class RepositoryError(DomainException):
    """Unclassified persistence failure. Message must not carry raw DB text."""

    DEFAULT_CODE = "PERSISTENCE_ERROR"

    def __init__(self, message: str, *, fields: Iterable[str] | None = None, constraint: str | None = None):
        super().__init__(message)
        self.fields = list(fields) if fields else None
        self.constraint = constraint


class ServiceUnavailableError(DomainException):
    """A required collaborator (database, provider) is not reachable or not configured."""

    DEFAULT_CODE = "SERVICE_UNAVAILABLE"

    def __init__(self, message: str, *, details: str | None = None):
        super().__init__(message)
        self.details = details

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        if self.details:
            payload["details"] = self.details
        return payload


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
]
