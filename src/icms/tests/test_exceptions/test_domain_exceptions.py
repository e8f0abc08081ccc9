import json

import pytest
from sqlalchemy.exc import IntegrityError

from icms.exceptions.base import (
    AuthenticationError,
    DomainException,
    DuplicateError,
    FieldError,
    NotFoundException,
    ServiceUnavailableError,
    ValidationException,
)
from icms.exceptions.handler import ErrorHandler
from icms.exceptions.integrity_classifier import (
    CheckConstraint,
    ForeignKeyConstraint,
    NotNullConstraint,
    UniqueConstraint,
    UnknownIntegrity,
    classify_integrity_error,
    classify_message,
)
from icms.exceptions.mapper import raise_mapped_integrity_error


def _body(response) -> dict:
    return json.loads(response.body)


class TestDomainExceptionPayloads:

    def test_validation_single_field_message(self):
        exc = ValidationException.from_field_error("email", "Email is required")

        payload = exc.to_payload()

        assert exc.http_status() == 400
        assert payload["error"] == "Validation failed for field: email"
        assert payload["code"] == "VALIDATION_ERROR"
        assert payload["validationErrors"] == [{"field": "email", "message": "Email is required"}]
        assert payload["timestamp"].endswith("Z")

    def test_validation_many_fields_message_lists_them_in_order(self):
        exc = ValidationException.from_field_errors([
            FieldError("firstName", "First name is required"),
            FieldError("lastName", "Last name is required"),
        ])

        assert str(exc.message) == "Validation failed for fields: firstName, lastName"
        assert exc.fields == ["firstName", "lastName"]

    def test_field_error_includes_value_only_when_given(self):
        assert FieldError("id", "bad", value="abc").to_dict() == {"field": "id", "message": "bad", "value": "abc"}
        assert "value" not in FieldError("id", "bad").to_dict()

    def test_not_found_default_message_and_identity(self):
        exc = NotFoundException("Employee", 42)

        payload = exc.to_payload()

        assert exc.http_status() == 404
        assert payload["error"] == "Employee with id 42 not found"
        assert payload["entityName"] == "Employee"
        assert payload["entityId"] == 42

    def test_not_found_with_criteria(self):
        exc = NotFoundException.with_criteria("Admin", {"username": "bob"})
        assert exc.message == "Admin not found with criteria: username=bob"

    @pytest.mark.parametrize(
        "exc, status",
        [
            (AuthenticationError(), 401),
            (DuplicateError("taken"), 409),
            (ServiceUnavailableError("down", details="db"), 503),
            (DomainException("rule broken"), 422),
        ],
    )
    def test_status_per_subclass(self, exc, status):
        assert exc.http_status() == status

    def test_duplicate_payload_never_exposes_constraint(self):
        exc = DuplicateError("Employee already exists", fields=["email"], constraint="uq_employees_email")
        payload = exc.to_payload()
        assert payload["fields"] == ["email"]
        assert "constraint" not in payload


class TestErrorHandler:

    def test_validation_response(self):
        response = ErrorHandler.handle(ValidationException.from_field_error("title", "title is required"))
        assert response.status_code == 400
        assert _body(response)["validationErrors"][0]["field"] == "title"

    def test_not_found_response(self):
        response = ErrorHandler.handle(NotFoundException("Meeting", 9, message="Meeting not found"))
        assert response.status_code == 404
        assert _body(response)["error"] == "Meeting not found"

    def test_plain_domain_exception_is_422(self):
        response = ErrorHandler.handle(DomainException("Cannot change status", code="INVALID_STATUS_TRANSITION"))
        assert response.status_code == 422
        assert _body(response)["code"] == "INVALID_STATUS_TRANSITION"

    def test_unknown_error_is_generic_500(self):
        response = ErrorHandler.handle(RuntimeError("boom"), "tests")
        body = _body(response)
        assert response.status_code == 500
        assert body["error"] == "Internal server error"
        assert body["code"] == "INTERNAL_ERROR"

    def test_handle_is_idempotent(self):
        exc = NotFoundException("Employee", 1)
        first, second = ErrorHandler.handle(exc), ErrorHandler.handle(exc)
        assert first.status_code == second.status_code
        assert first.body == second.body

    async def test_wrap_returns_result_or_error_response(self):
        async def ok():
            return {"ok": True}

        async def missing():
            raise NotFoundException("Task", 3)

        assert await ErrorHandler.wrap(ok) == {"ok": True}
        response = await ErrorHandler.wrap(missing, "tasks")
        assert response.status_code == 404


class TestIntegrityClassification:

    @pytest.mark.parametrize(
        "message, kind",
        [
            ("UNIQUE constraint failed: employees.email", UniqueConstraint),
            ('duplicate key value violates unique constraint "uq_employees_email"', UniqueConstraint),
            ("NOT NULL constraint failed: employees.emp_id", NotNullConstraint),
            ("FOREIGN KEY constraint failed", ForeignKeyConstraint),
            ("CHECK constraint failed: positive_amount", CheckConstraint),
            ("something else entirely", UnknownIntegrity),
        ],
    )
    def test_classify_message(self, message, kind):
        assert classify_message(message) is kind

    def test_pgcode_wins_over_message(self):
        class Orig(Exception):
            pgcode = "23503"

        exc = IntegrityError("INSERT ...", {}, Orig("duplicate text that would look unique"))

        kind, _ = classify_integrity_error(exc)

        assert kind is ForeignKeyConstraint

    def test_unique_maps_to_duplicate_with_columns(self):
        exc = IntegrityError("INSERT ...", {}, Exception("UNIQUE constraint failed: employees.email"))

        with pytest.raises(DuplicateError) as info:
            raise_mapped_integrity_error(exc, "Employee")

        assert info.value.fields == ["email"]
        assert "email" in info.value.message

    def test_not_null_maps_to_validation(self):
        exc = IntegrityError("INSERT ...", {}, Exception("NOT NULL constraint failed: meetings.title"))

        with pytest.raises(ValidationException) as info:
            raise_mapped_integrity_error(exc, "Meeting")

        assert info.value.fields == ["title"]
