from datetime import datetime, timezone

import pytest

from icms.exceptions.base import NotFoundException, ValidationException
from icms.models.enums import RecordStatus, TenantStatus
from icms.services.finance_service import (
    DividendService,
    LiabilityService,
    MonthlyPaymentService,
    PropertyUKService,
    SalaryService,
)
from icms.services.salary_calculator import compute_salary_totals, with_salary_totals

EFFECTIVE = datetime(2025, 1, 1, tzinfo=timezone.utc)


class TestSalaryCalculator:

    def test_totals_from_components(self):
        totals = compute_salary_totals({
            "base_salary": 5000,
            "housing_allowance": 1000,
            "transport_allowance": 250.5,
            "tax_deduction": 800,
            "pension_contribution": 200,
        })

        assert totals == {
            "total_allowances": 1250.5,
            "total_deductions": 1000.0,
            "gross_salary": 6250.5,
            "net_salary": 5250.5,
        }

    def test_client_supplied_totals_are_replaced(self):
        values = with_salary_totals({"base_salary": 100, "net_salary": 999_999, "gross_salary": 1})

        assert values["gross_salary"] == 100.0
        assert values["net_salary"] == 100.0


class TestSalaryService:

    async def test_create_and_update_recompute_totals(self, db_session):
        service = SalaryService(db_session)

        salary = await service.create({
            "person_name": "Ada Lovelace",
            "person_type": "EMPLOYEE",
            "base_salary": 4000,
            "meal_allowance": 100,
            "social_security": 300,
            "effective_date": EFFECTIVE,
            "net_salary": 1,
        })
        assert salary.gross_salary == 4100.0
        assert salary.net_salary == 3800.0

        updated = await service.update(salary.id, {"other_deductions": 50})

        assert updated.total_deductions == 350.0
        assert updated.net_salary == 3750.0
        assert updated.base_salary == 4000.0

    async def test_list_filters_and_summary(self, db_session):
        service = SalaryService(db_session)
        await service.create({"person_type": "EMPLOYEE", "base_salary": 1000, "effective_date": EFFECTIVE})
        await service.create({"person_type": "EMPLOYEE", "base_salary": 2000, "effective_date": EFFECTIVE})
        await service.create({"person_type": "CONTRACTOR", "base_salary": 9000, "effective_date": EFFECTIVE})

        rows, summary = await service.list(person_type="EMPLOYEE")

        assert len(rows) == 2
        assert summary == {"totalGrossSalary": 3000.0, "totalNetSalary": 3000.0, "totalRecords": 2}

    async def test_missing_record_uses_resource_message(self, db_session):
        with pytest.raises(NotFoundException) as info:
            await SalaryService(db_session).get(12345)
        assert info.value.message == "Salary record not found"


class TestLiabilityPayments:

    async def _liability(self, service, **overrides):
        fields = {"liability_name": "Mortgage", "liability_type": "MORTGAGE", "original_amount": 10_000}
        fields.update(overrides)
        return await service.create(fields)

    async def test_balance_defaults_to_original_amount(self, db_session):
        liability = await self._liability(LiabilityService(db_session))
        assert liability.current_balance == 10_000

    async def test_payment_lowers_balance_and_stamps_last_payment(self, db_session):
        service = LiabilityService(db_session)
        liability = await self._liability(service)

        payment, refreshed = await service.record_payment(liability.id, {"amount": 1500.0, "notes": "March"})

        assert payment.liability_id == liability.id
        assert refreshed.current_balance == 8500.0
        assert refreshed.last_payment_amount == 1500.0
        assert refreshed.last_payment_date is not None
        assert [p.amount for p in await service.list_payments(liability.id)] == [1500.0]

    @pytest.mark.parametrize("amount", [None, 0, -10])
    async def test_non_positive_payment_is_rejected(self, db_session, amount):
        service = LiabilityService(db_session)
        liability = await self._liability(service)

        with pytest.raises(ValidationException) as info:
            await service.record_payment(liability.id, {"amount": amount})

        assert info.value.fields == ["amount"]
        assert (await service.get(liability.id)).current_balance == 10_000

    async def test_summary_reports_paid_amount(self, db_session):
        service = LiabilityService(db_session)
        liability = await self._liability(service)
        await self._liability(service, liability_name="Car loan", original_amount=5000, current_balance=1000)
        await service.record_payment(liability.id, {"amount": 2000})

        _, summary = await service.list()

        assert summary["totalOriginalAmount"] == 15_000
        assert summary["totalCurrentBalance"] == 9000
        assert summary["totalPaid"] == 6000
        assert summary["totalLiabilities"] == 2


class TestDividends:

    async def test_net_amount_defaults_to_gross_minus_tax(self, db_session):
        dividend = await DividendService(db_session).create({
            "source_name": "Index fund",
            "gross_amount": 1000,
            "tax_withheld": 150,
            "payment_date": datetime(2024, 6, 30, tzinfo=timezone.utc),
        })
        assert dividend.net_amount == 850

    async def test_year_filter(self, db_session):
        service = DividendService(db_session)
        for year in (2023, 2024, 2024):
            await service.create({
                "source_name": f"Fund {year}",
                "gross_amount": 100,
                "payment_date": datetime(year, 3, 1, tzinfo=timezone.utc),
            })

        rows, summary = await service.list(year=2024)

        assert len(rows) == 2
        assert summary["totalGrossAmount"] == 200
        assert summary["totalAmount"] == summary["totalGrossAmount"]


class TestMonthlyPayments:

    async def test_record_defaults_to_plan_amount_and_updates_last_payment(self, db_session):
        service = MonthlyPaymentService(db_session)
        plan = await service.create({"payment_name": "Gym", "payment_type": "SUBSCRIPTION", "amount": 49.0})

        record = await service.add_record(plan.id, {"reference": "INV-1"})

        assert record.amount == 49.0
        refreshed = await service.get(plan.id)
        assert refreshed.last_payment_amount == 49.0
        assert len(await service.list_records(plan.id)) == 1

    async def test_summary_separates_active(self, db_session):
        service = MonthlyPaymentService(db_session)
        await service.create({"payment_name": "Gym", "payment_type": "SUBSCRIPTION", "amount": 50.0})
        await service.create({
            "payment_name": "Old phone",
            "payment_type": "UTILITY",
            "amount": 20.0,
            "status": RecordStatus.CANCELLED,
        })

        _, summary = await service.list()

        assert summary == {
            "totalMonthlyAmount": 70.0,
            "totalActiveMonthly": 50.0,
            "totalPayments": 2,
            "activePayments": 1,
        }


class TestPropertyTenants:

    async def _property(self, service):
        return await service.create({"property_name": "Flat 2", "property_type": "FLAT", "address": "1 High St"})

    async def test_first_tenant_marks_property_rented(self, db_session):
        service = PropertyUKService(db_session)
        prop = await self._property(service)
        assert prop.is_rented is False

        await service.add_tenant(prop.id, {"tenant_name": "Sam", "rent_amount": 1200.0})

        assert (await service.get(prop.id)).is_rented is True

    async def test_new_primary_tenant_replaces_old(self, db_session):
        service = PropertyUKService(db_session)
        prop = await self._property(service)
        first = await service.add_tenant(prop.id, {"tenant_name": "Sam", "rent_amount": 600.0, "is_primary": True})
        second = await service.add_tenant(prop.id, {"tenant_name": "Alex", "rent_amount": 600.0, "is_primary": True})

        tenants, summary = await service.list_tenants(prop.id)

        primaries = [t.id for t in tenants if t.is_primary]
        assert primaries == [second.id]
        assert first.id in {t.id for t in tenants}
        assert summary == {"totalTenants": 2, "activeTenants": 2, "totalMonthlyRent": 1200.0}

    async def test_summary_ignores_inactive_tenants(self, db_session):
        service = PropertyUKService(db_session)
        prop = await self._property(service)
        await service.add_tenant(prop.id, {"tenant_name": "Sam", "rent_amount": 700.0})
        await service.add_tenant(prop.id, {"tenant_name": "Old", "rent_amount": 500.0, "status": TenantStatus.VACATED})

        _, summary = await service.list_tenants(prop.id)

        assert summary["activeTenants"] == 1
        assert summary["totalMonthlyRent"] == 700.0

    async def test_tenant_of_another_property_is_not_found(self, db_session):
        service = PropertyUKService(db_session)
        prop = await self._property(service)
        other = await self._property(service)
        tenant = await service.add_tenant(prop.id, {"tenant_name": "Sam", "rent_amount": 700.0})

        with pytest.raises(NotFoundException) as info:
            await service.get_tenant(other.id, tenant.id)
        assert info.value.message == "Tenant not found"

    async def test_delete_tenant_keeps_rented_flag(self, db_session):
        service = PropertyUKService(db_session)
        prop = await self._property(service)
        tenant = await service.add_tenant(prop.id, {"tenant_name": "Sam", "rent_amount": 700.0})

        await service.delete_tenant(prop.id, tenant.id)

        tenants, _ = await service.list_tenants(prop.id)
        assert tenants == []
        assert (await service.get(prop.id)).is_rented is True
