"""
Salary totals are always derived here, never taken from the client:

    total_allowances = sum of the five allowance fields
    total_deductions = sum of the five deduction fields
    gross_salary     = base_salary + total_allowances
    net_salary       = gross_salary - total_deductions
"""

from typing import Any, Mapping

from ..models.finance import ALLOWANCE_FIELDS, DEDUCTION_FIELDS

DERIVED_FIELDS = ("total_allowances", "total_deductions", "gross_salary", "net_salary")


def _amount(values: Mapping[str, Any], field: str) -> float:
    value = values.get(field)
    return float(value) if value is not None else 0.0


def compute_salary_totals(values: Mapping[str, Any]) -> dict[str, float]:
    base = _amount(values, "base_salary")
    allowances = sum(_amount(values, f) for f in ALLOWANCE_FIELDS)
    deductions = sum(_amount(values, f) for f in DEDUCTION_FIELDS)
    gross = base + allowances
    return {
        "total_allowances": round(allowances, 2),
        "total_deductions": round(deductions, 2),
        "gross_salary": round(gross, 2),
        "net_salary": round(gross - deductions, 2),
    }


def with_salary_totals(fields: Mapping[str, Any]) -> dict[str, Any]:
    """`fields` minus any client-supplied totals, plus the computed ones."""
    values = {k: v for k, v in fields.items() if k not in DERIVED_FIELDS}
    values.update(compute_salary_totals(values))
    return values
