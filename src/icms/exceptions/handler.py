"""
Single entry point that turns any raised value into an HTTP error response.

`ErrorHandler.handle(error, context)` discriminates most-specific first:

    ValidationException  -> 400 {error, code, validationErrors, timestamp}
    NotFoundException    -> 404 {error, code, entityName, entityId, timestamp}
    DomainException      -> exc.http_status() (422 for plain business-rule violations)
    anything else        -> 500 {error: "Internal server error", code: "INTERNAL_ERROR", timestamp}

Stack traces and raw error text are only exposed when ENV=development.
`ErrorHandler.wrap(operation, context)` runs a zero-argument coroutine function
and funnels any failure through `handle`. Most routes reach `handle` through the
FastAPI exception handlers in `api/error_handlers.py`; the notification routes
use `wrap` to log failures under a named context.
"""

import logging
import traceback
from typing import Any, Awaitable, Callable

from fastapi.responses import JSONResponse

from ..config import get_settings
from .base import (
    DomainException,
    NotFoundException,
    ValidationException,
    _utc_now_iso,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"
INTERNAL_ERROR_CODE = "INTERNAL_ERROR"


class ErrorHandler:
    """Maps exceptions to JSON responses. Stateless; safe to call repeatedly."""

    @staticmethod
    def _dev_mode() -> bool:
        return get_settings().is_development

    @classmethod
    def handle(cls, error: BaseException, context: str | None = None) -> JSONResponse:
        where = context or "unknown"

        if isinstance(error, ValidationException):
            logger.info(
                "error.validation",
                extra={"context": where, "fields": error.fields, "code": error.code},
            )
            return JSONResponse(status_code=error.http_status(), content=error.to_payload())

        if isinstance(error, NotFoundException):
            logger.info(
                "error.not_found",
                extra={"context": where, "entity": error.entity_name, "entity_id": error.entity_id},
            )
            return JSONResponse(status_code=error.http_status(), content=error.to_payload())

        if isinstance(error, DomainException):
            status = error.http_status()
            log = logger.warning if status >= 500 else logger.info
            log("error.domain", extra={"context": where, "code": error.code, "status": status})
            return JSONResponse(status_code=status, content=error.to_payload())

        return cls._handle_unknown(error, where)

    @classmethod
    def _handle_unknown(cls, error: BaseException, where: str) -> JSONResponse:
        payload: dict[str, Any] = {
            "error": INTERNAL_ERROR_MESSAGE,
            "code": INTERNAL_ERROR_CODE,
            "timestamp": _utc_now_iso(),
        }
        if cls._dev_mode():
            logger.error(
                "error.unhandled",
                exc_info=(type(error), error, error.__traceback__),
                extra={"context": where, "error_type": type(error).__name__},
            )
            payload["details"] = str(error)
            payload["stack"] = "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )
        else:
            logger.error(
                "error.unhandled",
                extra={"context": where, "error_type": type(error).__name__},
            )
        return JSONResponse(status_code=500, content=payload)

    @classmethod
    async def wrap(
        cls,
        operation: Callable[[], Awaitable[Any]],
        context: str | None = None,
    ) -> Any:
        """
        Await `operation()`; on any exception return the handler's response instead.
        """
        try:
            return await operation()
        except Exception as exc:
            return cls.handle(exc, context)
