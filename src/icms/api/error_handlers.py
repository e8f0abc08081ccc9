"""
FastAPI exception handlers.

All of them delegate to `ErrorHandler.handle` so the status/shape mapping lives in
one place. The request method and path are used as the context label.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..exceptions.base import DomainException, FieldError, ValidationException
from ..exceptions.handler import ErrorHandler

# pydantic error types that mean "value absent"
_MISSING_TYPES = {"missing", "string_too_short", "value_error.missing"}


def _context(request: Request) -> str:
    return f"{request.method} {request.url.path}"


def _field_name(loc: tuple) -> str:
    # ("body", "firstName") -> "firstName"; ("query", "soft") -> "soft"
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header", "cookie")]
    return ".".join(parts) or "body"


def validation_exception_from_pydantic(exc: RequestValidationError) -> ValidationException:
    """
    Convert FastAPI's request validation errors into a ValidationException with one
    FieldError per failing location. Order follows pydantic's (declaration order).
    """
    errors: list[FieldError] = []
    for err in exc.errors():
        name = _field_name(tuple(err.get("loc", ())))
        if err.get("type") in _MISSING_TYPES:
            message = f"{name} is required"
        else:
            message = err.get("msg", "Invalid value")
        value = err.get("input")
        errors.append(FieldError(name, message, value if isinstance(value, (str, int, float, bool)) else None))

    if not errors:
        return ValidationException("Invalid request")
    if len(errors) == 1:
        only = errors[0]
        return ValidationException.from_field_error(only.field, only.message, only.value)
    return ValidationException.from_field_errors(errors)


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    return ErrorHandler.handle(exc, _context(request))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return ErrorHandler.handle(validation_exception_from_pydantic(exc), _context(request))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    return ErrorHandler.handle(exc, _context(request))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
