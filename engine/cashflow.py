"""
Deterministic per-year cash-flow helpers for the buy path.

Rounding rules:
  1. Monthly mortgage payment rounded to cents once, then reused every year
  2. Mortgage balance rounded to cents after each year's amortization
  3. Everything else kept at full precision
"""

from __future__ import annotations

from typing import Tuple

from core.config import PMI_LTV_THRESHOLD, SALT_CAP, STANDARD_DEDUCTION
from core.utils import pct, round_half_up


def calculate_mortgage_payment(principal: float, annual_rate: float, term_years: float) -> float:
    """
    Fixed monthly payment of a fully-amortizing loan.

    annual_rate is a percentage. term_years must be > 0 (the caller validates).
    A zero rate falls back to straight-line principal / n.
    """
    monthly_rate = annual_rate / 100 / 12
    n_payments = term_years * 12

    if monthly_rate == 0:
        return principal / n_payments

    growth = (1 + monthly_rate) ** n_payments
    payment = principal * (monthly_rate * growth) / (growth - 1)
    return round_half_up(payment, 2)


def annual_pmi(mortgage_balance: float, home_value: float, pmi_rate: float) -> float:
    """PMI on the outstanding balance while loan-to-value is above the threshold."""
    ltv = mortgage_balance / home_value
    if ltv > PMI_LTV_THRESHOLD:
        return mortgage_balance * pct(pmi_rate)
    return 0.0


def annual_mortgage_outlay(
    mortgage_balance: float,
    annual_mortgage: float,
    interest_rate: float,
    *,
    final_term_year: bool = False,
) -> float:
    """
    Mortgage cash paid this year.

    The regular annual payment, except in the loan's last scheduled year, when
    the payment also covers whatever balance the annual schedule left behind
    (interest on the start-of-year balance plus the full balance).
    """
    if not final_term_year:
        return annual_mortgage
    return max(annual_mortgage, mortgage_balance * (1 + pct(interest_rate)))


def amortize_year(
    mortgage_balance: float,
    annual_mortgage: float,
    interest_rate: float,
    *,
    final_term_year: bool = False,
) -> Tuple[float, float, float]:
    """
    One year of amortization on an annual basis.

    Interest accrues on the start-of-year balance, which runs slightly behind a
    monthly schedule; the loan's last scheduled year retires whatever is left
    (charged through annual_mortgage_outlay).

    Returns (interest_payment, principal_payment, new_balance). The new balance
    is floored at 0 and rounded to cents.
    """
    interest_payment = mortgage_balance * pct(interest_rate)
    principal_payment = min(annual_mortgage - interest_payment, mortgage_balance)
    if final_term_year:
        principal_payment = mortgage_balance
    new_balance = max(0.0, mortgage_balance - principal_payment)
    return interest_payment, principal_payment, round_half_up(new_balance, 2)


def compute_tax_savings(
    mortgage_interest: float,
    property_tax: float,
    other_deductions: float,
    marginal_tax_rate: float,
) -> float:
    """Tax benefit of itemizing over the standard deduction (property tax SALT-capped)."""
    deductible_property_tax = min(property_tax, SALT_CAP)
    itemized = mortgage_interest + deductible_property_tax + other_deductions
    return max(0.0, (itemized - STANDARD_DEDUCTION) * pct(marginal_tax_rate))
