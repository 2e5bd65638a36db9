"""
Boundary validation for FinancialInputs before they enter the engine.

The engine assumes well-formed inputs and never checks them itself. Catches
problems early:
- Loan term / horizon that would divide by zero or leave no projection rows
- Negative prices and costs
- Percentages outside plausible bounds
- Rates that look like decimals instead of percentages
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from core.config import PMI_LTV_THRESHOLD, FinancialInputs

MAX_HORIZON_YEARS = 50

NON_NEGATIVE_FIELDS = (
    "current_rent",
    "interest_rate",
    "pmi_rate",
    "property_tax_rate",
    "home_insurance",
    "maintenance_rate",
    "hoa_fees",
    "other_deductions",
    "closing_costs_percent",
    "selling_costs_percent",
)

PERCENT_RANGE_FIELDS = (
    "down_payment_percent",
    "marginal_tax_rate",
    "closing_costs_percent",
    "selling_costs_percent",
)


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for one set of inputs."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


class InvalidInputsError(ValueError):
    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__("Invalid financial inputs:\n" + result.summary())


def validate_inputs(inputs: FinancialInputs) -> ValidationResult:
    """
    Run all checks. Returns a ValidationResult with errors (blocking) and
    warnings (informational).
    """
    result = ValidationResult()

    # --- Engine preconditions ---
    if inputs.loan_term_years <= 0:
        result.errors.append(f"Loan term must be positive (got {inputs.loan_term_years}).")
    if inputs.time_horizon_years < 1:
        result.errors.append(
            f"Time horizon must be at least 1 year (got {inputs.time_horizon_years})."
        )
    if inputs.home_price <= 0:
        result.errors.append("Home price must be positive.")

    # --- Signs ---
    for name in NON_NEGATIVE_FIELDS:
        if getattr(inputs, name) < 0:
            result.errors.append(f"{name} must be non-negative (got {getattr(inputs, name)}).")

    for name in PERCENT_RANGE_FIELDS:
        value = getattr(inputs, name)
        if not 0 <= value <= 100:
            result.errors.append(f"{name} must be between 0 and 100 (got {value}).")

    # --- Units ---
    if 0 < inputs.interest_rate < 1:
        result.warnings.append(
            f"Interest rate {inputs.interest_rate} looks like a decimal — rates are "
            f"percentages (7.0 means 7%)."
        )
    if 0 < inputs.property_tax_rate < 0.1:
        result.warnings.append(
            f"Property tax rate {inputs.property_tax_rate} is below 0.1% — check units."
        )

    # --- Plausibility ---
    if inputs.down_payment_percent < (1 - PMI_LTV_THRESHOLD) * 100:
        result.warnings.append("Down payment below 20% — PMI applies until LTV drops to 80%.")
    if inputs.loan_term_years > 0 and inputs.time_horizon_years > inputs.loan_term_years:
        result.warnings.append(
            "Horizon extends past the loan term — the mortgage payment keeps being "
            "counted as an ownership cost after payoff."
        )
    if inputs.time_horizon_years > MAX_HORIZON_YEARS:
        result.warnings.append(f"Horizon longer than {MAX_HORIZON_YEARS} years.")

    return result


def require_valid_inputs(inputs: FinancialInputs) -> ValidationResult:
    """Validate and raise InvalidInputsError on any error; returns the result otherwise."""
    result = validate_inputs(inputs)
    if not result.is_valid:
        raise InvalidInputsError(result)
    return result
