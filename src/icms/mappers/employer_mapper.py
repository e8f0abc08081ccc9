from typing import Any, Iterable

from ..models.employer import Employer
from .serializer import serialize_many, serialize_value


def _address(street, city, state, postal_code, country) -> dict[str, Any]:
    return {"street": street, "city": city, "state": state, "postalCode": postal_code, "country": country}


class EmployerMapper:
    """Employer entity -> DTOs. `email` / `phoneNumber` are the primary channels."""

    @staticmethod
    def to_response_dto(employer: Employer) -> dict[str, Any]:
        return {
            "id": employer.id,
            "employerType": serialize_value(employer.employer_type),
            "fullName": employer.full_name or "",
            "companyName": employer.company_name,
            "tradingName": employer.trading_name,
            "firstName": employer.first_name,
            "lastName": employer.last_name,
            "email": employer.primary_email,
            "phoneNumber": employer.main_phone,
            "industry": employer.industry,
            "relationshipType": employer.relationship_type,
            "status": serialize_value(employer.status),
            "createdAt": serialize_value(employer.created_at),
            "updatedAt": serialize_value(employer.updated_at),
        }

    @classmethod
    def to_detailed_response_dto(cls, employer: Employer, include_contacts: bool = True) -> dict[str, Any]:
        dto = {
            **cls.to_response_dto(employer),
            "middleName": employer.middle_name,
            "registrationNumber": employer.registration_number,
            "taxId": employer.tax_id,
            "incorporationDate": serialize_value(employer.incorporation_date),
            "establishedYear": employer.established_year,
            "dateOfBirth": serialize_value(employer.date_of_birth),
            "profession": employer.profession,
            "businessType": employer.business_type,
            "companySize": employer.company_size,
            "secondaryEmail": employer.secondary_email,
            "alternatePhone": employer.alternate_phone,
            "mobileNumber": employer.mobile_number,
            "faxNumber": employer.fax_number,
            "website": employer.website,
            "address": _address(
                employer.street, employer.city, employer.state, employer.postal_code, employer.country
            ),
            "billingAddress": _address(
                employer.billing_street,
                employer.billing_city,
                employer.billing_state,
                employer.billing_postal_code,
                employer.billing_country,
            ),
            "relationshipStart": serialize_value(employer.relationship_start),
            "accountManager": employer.account_manager,
            "contractValue": employer.contract_value,
            "creditLimit": employer.credit_limit,
            "paymentTerms": employer.payment_terms,
            "preferredCurrency": employer.preferred_currency,
            "bankName": employer.bank_name,
            "accountNumber": employer.account_number,
            "insuranceProvider": employer.insurance_provider,
            "insuranceCoverage": employer.insurance_coverage,
            "licenseNumber": employer.license_number,
            "certificationBody": employer.certification_body,
            "budgetAuthority": employer.budget_authority,
            "decisionMakingRole": employer.decision_making_role,
            "innovationIndex": employer.innovation_index,
            "notes": employer.notes,
        }
        if include_contacts:
            dto["contacts"] = serialize_many(employer.contacts)
        return dto

    @classmethod
    def to_list_response_dto(
        cls,
        employers: Iterable[Employer],
        stats: dict[str, int] | None = None,
        industries: list[str] | None = None,
        relationship_types: list[str] | None = None,
        include_contacts: bool = False,
    ) -> dict[str, Any]:
        items = []
        for employer in employers:
            dto = cls.to_response_dto(employer)
            if include_contacts:
                dto["contacts"] = serialize_many(employer.contacts)
            items.append(dto)
        return {
            "employers": items,
            "stats": stats,
            "industries": industries,
            "relationshipTypes": relationship_types,
            "total": len(items),
        }

    @classmethod
    def to_response_dto_array(cls, employers: Iterable[Employer]) -> list[dict[str, Any]]:
        return [cls.to_response_dto(e) for e in employers]
