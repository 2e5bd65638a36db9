"""
Decision support — a deterministic verdict, key numbers, and risk flags.

Translates engine output (and optional Monte Carlo bands) into answers a
household can act on:
  Q1: "Which path ends up wealthier?"     → verdict from final net-worth difference
  Q2: "How long until buying pays off?"   → break-even year
  Q3: "What costs am I signing up for?"   → PMI, tax benefit
  Q4: "How sure is this?"                 → overlap of the Monte Carlo bands
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import pandas as pd

from core.config import FinancialInputs
from core.schema import CalculationResults, MonteCarloResult

# |buy - rent| below this fraction of home price is called a toss-up
TOSS_UP_FRACTION = 0.01
LATE_BREAK_EVEN_YEARS = 7


@dataclass
class DecisionReport:
    verdict: str  # "buy" | "rent" | "toss-up"
    horizon_years: int
    break_even_year: Optional[int]

    net_worth_difference: float  # buy - rent
    final_rent_net_worth: float
    final_buy_net_worth: float
    total_cost_rent: float
    total_cost_buy: float
    total_tax_savings: float
    total_interest_paid: float

    pmi_end_year: Optional[int]  # first year without PMI; None if never charged

    # Final-year Monte Carlo medians (None without a Monte Carlo run)
    mc_rent_p50: Optional[float] = None
    mc_buy_p50: Optional[float] = None
    mc_bands_overlap: Optional[bool] = None

    flags: List[str] = field(default_factory=list)

    def headline(self) -> str:
        gap = abs(self.net_worth_difference)
        if self.verdict == "toss-up":
            return f"Renting and buying end within ${gap:,.0f} of each other after {self.horizon_years} years."
        winner = "Buying" if self.verdict == "buy" else "Renting"
        return f"{winner} comes out ${gap:,.0f} ahead after {self.horizon_years} years."

    def to_dataframe(self) -> pd.DataFrame:
        """Display-friendly table."""
        rows = [
            {"Metric": "Verdict", "Value": self.verdict.upper()},
            {"Metric": "Horizon", "Value": f"{self.horizon_years} years"},
            {"Metric": "Break-even Year",
             "Value": str(self.break_even_year) if self.break_even_year is not None else "None"},
            {"Metric": "Net Worth Difference (Buy − Rent)", "Value": f"${self.net_worth_difference:,.0f}"},
            {"Metric": "Final Rent Net Worth", "Value": f"${self.final_rent_net_worth:,.0f}"},
            {"Metric": "Final Buy Net Worth", "Value": f"${self.final_buy_net_worth:,.0f}"},
            {"Metric": "Total Cost (Rent)", "Value": f"${self.total_cost_rent:,.0f}"},
            {"Metric": "Total Cost (Buy)", "Value": f"${self.total_cost_buy:,.0f}"},
            {"Metric": "Total Tax Savings", "Value": f"${self.total_tax_savings:,.0f}"},
            {"Metric": "Total Interest Paid", "Value": f"${self.total_interest_paid:,.0f}"},
        ]
        if self.mc_rent_p50 is not None:
            rows.append({"Metric": "Median Rent Net Worth (MC)", "Value": f"${self.mc_rent_p50:,.0f}"})
            rows.append({"Metric": "Median Buy Net Worth (MC)", "Value": f"${self.mc_buy_p50:,.0f}"})
        if self.flags:
            rows.append({"Metric": "FLAGS", "Value": " | ".join(self.flags)})
        return pd.DataFrame(rows)


def _pmi_end_year(results: CalculationResults) -> Optional[int]:
    rows = results.yearly_projections
    if not rows or rows[0].pmi_payment <= 0:
        return None
    for row in rows:
        if row.pmi_payment <= 0:
            return row.year
    return rows[-1].year + 1


def generate_decision_report(
    results: CalculationResults,
    inputs: FinancialInputs,
    *,
    monte_carlo: Optional[Sequence[MonteCarloResult]] = None,
) -> DecisionReport:
    """
    Parameters
    ----------
    results : CalculationResults
        Output of engine.runner.calculate_rent_vs_buy()
    inputs : FinancialInputs
        The inputs that produced `results`
    monte_carlo : sequence of MonteCarloResult, optional
        Defaults to results.monte_carlo_results when omitted.
    """
    final = results.final_projection
    diff = results.net_worth_difference

    if abs(diff) < TOSS_UP_FRACTION * inputs.home_price:
        verdict = "toss-up"
    elif diff > 0:
        verdict = "buy"
    else:
        verdict = "rent"

    pmi_end = _pmi_end_year(results)

    flags = []
    if results.break_even_year is None:
        leader = "buying" if final.buy_net_worth >= final.rent_net_worth else "renting"
        flags.append(f"NO_BREAK_EVEN: {leader} leads for the entire horizon")
    elif results.break_even_year > LATE_BREAK_EVEN_YEARS:
        flags.append(f"LATE_BREAK_EVEN: leader changes only in year {results.break_even_year}")
    if pmi_end is not None:
        flags.append(f"PMI_REQUIRED: PMI charged until year {pmi_end - 1}")
    if results.total_tax_savings <= 0:
        flags.append("NO_TAX_BENEFIT: itemizing never beats the standard deduction")

    mc = monte_carlo if monte_carlo is not None else results.monte_carlo_results
    mc_rent_p50 = mc_buy_p50 = None
    overlap = None
    if mc:
        last = mc[-1]
        mc_rent_p50 = last.rent_net_worth.p50
        mc_buy_p50 = last.buy_net_worth.p50
        overlap = (
            last.buy_net_worth.p10 <= last.rent_net_worth.p90
            and last.rent_net_worth.p10 <= last.buy_net_worth.p90
        )
        if overlap:
            flags.append("WIDE_UNCERTAINTY: rent and buy p10–p90 bands overlap in the final year")

    return DecisionReport(
        verdict=verdict,
        horizon_years=inputs.time_horizon_years,
        break_even_year=results.break_even_year,
        net_worth_difference=diff,
        final_rent_net_worth=final.rent_net_worth,
        final_buy_net_worth=final.buy_net_worth,
        total_cost_rent=results.total_cost_rent,
        total_cost_buy=results.total_cost_buy,
        total_tax_savings=results.total_tax_savings,
        total_interest_paid=results.total_interest_paid,
        pmi_end_year=pmi_end,
        mc_rent_p50=mc_rent_p50,
        mc_buy_p50=mc_buy_p50,
        mc_bands_overlap=overlap,
        flags=flags,
    )
