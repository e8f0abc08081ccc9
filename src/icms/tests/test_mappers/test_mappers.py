from datetime import datetime, timezone

from icms.mappers.employee_mapper import EmployeeMapper
from icms.mappers.employer_mapper import EmployerMapper
from icms.mappers.serializer import serialize, to_camel
from icms.models import Employee, Employer, EmployerContact, Flight
from icms.models.enums import EmployeeStatus, EmployerType


def _employee(**overrides) -> Employee:
    values = {
        "id": 3,
        "emp_id": "EMP1700000000000",
        "first_name": "Ada",
        "last_name": "Lovelace",
        "full_name": "Ada Lovelace",
        "email": "ada@icms.test",
        "status": EmployeeStatus.ACTIVE,
        "hire_date": datetime(2024, 1, 2, 9, 30, tzinfo=timezone.utc),
        "account_number": "GB00 0000",
        "social_security_number": "123-45-6789",
        "city": "London",
    }
    values.update(overrides)
    return Employee(**values)


class TestEmployeeMapper:

    def test_basic_view_hides_sensitive_fields(self):
        dto = EmployeeMapper.to_response_dto(_employee())

        assert dto["empId"] == "EMP1700000000000"
        assert dto["status"] == "ACTIVE"
        assert dto["hireDate"] == "2024-01-02T09:30:00.000Z"
        assert "accountNumber" not in dto
        assert "socialSecurityNumber" not in dto

    def test_detailed_view_is_a_superset_with_address(self):
        employee = _employee()
        basic = EmployeeMapper.to_response_dto(employee)
        detailed = EmployeeMapper.to_detailed_response_dto(employee)

        assert basic.items() <= detailed.items()
        assert detailed["accountNumber"] == "GB00 0000"
        assert detailed["address"] == {
            "street": None,
            "city": "London",
            "state": None,
            "postalCode": None,
            "country": None,
        }

    def test_list_dto_keeps_order_and_optional_sections(self):
        employees = [_employee(id=2, emp_id="B"), _employee(id=1, emp_id="A")]

        plain = EmployeeMapper.to_list_response_dto(employees)
        with_stats = EmployeeMapper.to_list_response_dto(employees, stats={"ACTIVE": 2}, departments=[], positions=[])

        assert [e["empId"] for e in plain["employees"]] == ["B", "A"]
        assert plain["total"] == 2
        assert "stats" not in plain
        assert with_stats["stats"] == {"ACTIVE": 2}
        assert with_stats["departments"] == []


class TestEmployerMapper:

    def test_primary_channels_are_exposed_as_email_and_phone(self):
        employer = Employer(
            id=5,
            employer_type=EmployerType.COMPANY,
            company_name="Acme Ltd",
            primary_email="hello@acme.test",
            main_phone="+4420000000",
        )

        dto = EmployerMapper.to_response_dto(employer)

        assert dto["email"] == "hello@acme.test"
        assert dto["phoneNumber"] == "+4420000000"
        assert dto["fullName"] == ""
        assert dto["employerType"] == "COMPANY"

    def test_detailed_view_nests_contacts_and_addresses(self):
        employer = Employer(id=5, company_name="Acme Ltd", billing_city="Leeds")
        employer.contacts.append(EmployerContact(id=9, first_name="Ann", is_primary=True))

        dto = EmployerMapper.to_detailed_response_dto(employer)

        assert dto["billingAddress"]["city"] == "Leeds"
        assert dto["contacts"][0]["firstName"] == "Ann"
        assert dto["contacts"][0]["isPrimary"] is True
        assert "contacts" not in EmployerMapper.to_detailed_response_dto(employer, include_contacts=False)

    def test_list_dto(self):
        dto = EmployerMapper.to_list_response_dto([Employer(id=1, company_name="A")], stats={"ACTIVE": 1})
        assert dto["total"] == 1
        assert dto["relationshipTypes"] is None
        assert "contacts" not in dto["employers"][0]


class TestSerializer:

    def test_to_camel(self):
        assert to_camel("trip_start_date") == "tripStartDate"
        assert to_camel("id") == "id"

    def test_wire_aliases_and_owned_collections(self):
        flight = Flight(id=1, travel_request_id=2, flight_class="Business")

        out = serialize(flight)

        assert out["class"] == "Business"
        assert "flightClass" not in out
        assert out["passengers"] == []
        assert out["travelRequestId"] == 2

    def test_exclude_and_extra(self):
        out = serialize(Flight(id=1, travel_request_id=2), exclude=["passengers"], extra={"note": "x"})
        assert "passengers" not in out
        assert out["note"] == "x"
