"""
Projection runner — one deterministic rent-vs-buy simulation over the horizon.

Each simulated year runs in a fixed order because later values depend on
earlier ones within the same year:
  1. accumulate rent
  2. comparison ownership cost -> renter's annual savings
  3. grow the renter's investment account, add savings
  4. true ownership cost (PMI on pre-amortization LTV)
  5. amortize the mortgage
  6. appreciate the home, compute equity
  7. tax savings from itemizing
  8. selling costs / net proceeds
  9. net worth per path (liquidation only charged in the final year)
 10. break-even detection
 11. record the row, grow rent

In the year equal to loan_term_years the mortgage outlay used in steps 2 and 4
is the payoff (start-of-year balance plus that year's interest), so the balance
that step 5 retires is paid for, not forgiven.

Preconditions (validated by the caller, see scenarios.validators):
  loan_term_years > 0 and time_horizon_years >= 1.
"""

from __future__ import annotations

import logging
from typing import List

from core.config import MOVING_BUFFER_PERCENT, RENT_UPFRONT_MONTHS, FinancialInputs
from core.schema import CalculationResults, YearlyProjection
from core.utils import pct, round_half_up

from .breakeven import BreakEvenDetector
from .cashflow import (
    amortize_year,
    annual_mortgage_outlay,
    annual_pmi,
    calculate_mortgage_payment,
    compute_tax_savings,
)

logger = logging.getLogger(__name__)


def calculate_rent_vs_buy(inputs: FinancialInputs) -> CalculationResults:
    """
    Run the yearly projection for both paths and aggregate the totals.

    Returns
    -------
    CalculationResults with one YearlyProjection per year (index 0 = year 1).
    monte_carlo_results is left as None; see analysis.montecarlo.
    """
    i = inputs

    down_payment = i.home_price * pct(i.down_payment_percent)
    loan_amount = i.home_price - down_payment
    monthly_mortgage = calculate_mortgage_payment(loan_amount, i.interest_rate, i.loan_term_years)
    annual_mortgage = monthly_mortgage * 12

    closing_costs = i.home_price * pct(i.closing_costs_percent)
    buy_upfront_costs = down_payment + closing_costs + i.home_price * pct(MOVING_BUFFER_PERCENT)
    rent_upfront_costs = i.current_rent * RENT_UPFRONT_MONTHS

    mortgage_balance = loan_amount
    home_value = i.home_price
    investment_value = down_payment  # renter invests what would have been the down payment
    rent_payment = i.current_rent * 12

    cumulative_rent = 0.0
    cumulative_ownership = 0.0
    cumulative_tax_savings = 0.0

    detector = BreakEvenDetector()
    projections: List[YearlyProjection] = []

    for year in range(1, i.time_horizon_years + 1):
        final_term_year = year == i.loan_term_years
        mortgage_outlay = annual_mortgage_outlay(
            mortgage_balance, annual_mortgage, i.interest_rate, final_term_year=final_term_year,
        )

        # --- Rent path ---
        cumulative_rent += rent_payment

        # What an owner would spend this year; the difference is the renter's contribution
        comparison_cost = (
            mortgage_outlay
            + annual_pmi(mortgage_balance, home_value, i.pmi_rate)
            + home_value * pct(i.property_tax_rate)
            + i.home_insurance
            + home_value * pct(i.maintenance_rate)
            + i.hoa_fees
        )
        annual_savings = comparison_cost - rent_payment

        investment_value *= 1 + pct(i.investment_return)
        investment_value += annual_savings

        # --- Buy path ---
        property_tax = home_value * pct(i.property_tax_rate)
        maintenance = home_value * pct(i.maintenance_rate)
        pmi = annual_pmi(mortgage_balance, home_value, i.pmi_rate)
        total_ownership_cost = (
            mortgage_outlay + pmi + property_tax + i.home_insurance + maintenance + i.hoa_fees
        )
        cumulative_ownership += total_ownership_cost

        interest_payment, _, mortgage_balance = amortize_year(
            mortgage_balance, annual_mortgage, i.interest_rate,
            final_term_year=final_term_year,
        )

        home_value *= 1 + pct(i.home_appreciation_rate)
        home_equity = round_half_up(home_value - mortgage_balance, 2)

        tax_savings = compute_tax_savings(
            interest_payment, property_tax, i.other_deductions, i.marginal_tax_rate
        )
        cumulative_tax_savings += tax_savings

        selling_costs = home_value * pct(i.selling_costs_percent)
        net_proceeds = home_value - mortgage_balance - selling_costs

        # --- Net worth ---
        rent_net_worth = investment_value - cumulative_rent
        is_final = year == i.time_horizon_years
        buy_net_worth = net_proceeds if is_final else home_equity

        detector.observe(year, rent_net_worth, buy_net_worth)

        projections.append(
            YearlyProjection(
                year=year,
                rent_payment=rent_payment,
                total_rent_paid=cumulative_rent,
                rent_upfront_costs=rent_upfront_costs if year == 1 else 0.0,
                mortgage_payment=mortgage_outlay,
                pmi_payment=pmi,
                property_tax=property_tax,
                insurance=i.home_insurance,
                maintenance=maintenance,
                hoa=i.hoa_fees,
                total_ownership_cost=total_ownership_cost,
                cumulative_ownership_cost=cumulative_ownership,
                home_value=home_value,
                mortgage_balance=mortgage_balance,
                home_equity=home_equity,
                buy_upfront_costs=buy_upfront_costs if year == 1 else 0.0,
                mortgage_interest_paid=interest_payment,
                property_tax_paid=property_tax,
                tax_savings=tax_savings,
                investment_value=investment_value,
                rent_net_worth=rent_net_worth,
                buy_net_worth=buy_net_worth,
                rent_cash_flow=-rent_payment,
                buy_cash_flow=-(total_ownership_cost - tax_savings),
                selling_costs=selling_costs,
                net_proceeds_if_sold=net_proceeds,
            )
        )

        rent_payment *= 1 + pct(i.rent_growth_rate)

    final = projections[-1]
    results = CalculationResults(
        yearly_projections=projections,
        break_even_year=detector.break_even_year,
        total_cost_rent=final.total_rent_paid + rent_upfront_costs,
        total_cost_buy=final.cumulative_ownership_cost + buy_upfront_costs,
        net_worth_difference=final.buy_net_worth - final.rent_net_worth,
        total_tax_savings=cumulative_tax_savings,
        total_interest_paid=sum(p.mortgage_interest_paid for p in projections),
    )
    logger.debug(
        "Projection: horizon=%d loan=%.2f break_even=%s diff=%.2f",
        i.time_horizon_years, loan_amount, results.break_even_year, results.net_worth_difference,
    )
    return results
