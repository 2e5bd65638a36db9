"""
Output records produced by the engine and the analyses built on it.

All records are plain values, recomputed on every input change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass
class YearlyProjection:
    year: int

    # rent path
    rent_payment: float
    total_rent_paid: float
    rent_upfront_costs: float

    # buy path
    mortgage_payment: float
    pmi_payment: float
    property_tax: float
    insurance: float
    maintenance: float
    hoa: float
    total_ownership_cost: float
    cumulative_ownership_cost: float
    home_value: float
    mortgage_balance: float
    home_equity: float
    buy_upfront_costs: float

    # tax
    mortgage_interest_paid: float
    property_tax_paid: float
    tax_savings: float

    # rent path investment account
    investment_value: float

    rent_net_worth: float
    buy_net_worth: float

    # negative = outflow
    rent_cash_flow: float
    buy_cash_flow: float

    # liquidation (only the final year's values feed buy_net_worth)
    selling_costs: float
    net_proceeds_if_sold: float


@dataclass(frozen=True)
class PercentileBand:
    p10: float
    p25: float
    p50: float
    p75: float
    p90: float

    def as_tuple(self) -> Tuple[float, float, float, float, float]:
        return (self.p10, self.p25, self.p50, self.p75, self.p90)


@dataclass(frozen=True)
class MonteCarloResult:
    year: int
    rent_net_worth: PercentileBand
    buy_net_worth: PercentileBand


@dataclass
class CalculationResults:
    yearly_projections: List[YearlyProjection]
    break_even_year: Optional[int]
    total_cost_rent: float
    total_cost_buy: float
    net_worth_difference: float  # buy - rent, final year
    total_tax_savings: float
    total_interest_paid: float
    monte_carlo_results: Optional[List[MonteCarloResult]] = None

    @property
    def final_projection(self) -> YearlyProjection:
        return self.yearly_projections[-1]


@dataclass
class SensitivityAnalysis:
    parameter: str
    values: List[float] = field(default_factory=list)
    break_even_years: List[Optional[int]] = field(default_factory=list)
    final_net_worth_differences: List[float] = field(default_factory=list)


@dataclass(frozen=True)
class BreakEvenCell:
    x_index: int
    y_index: int
    x_value: float
    y_value: float
    break_even_year: Optional[int]
    net_worth_difference: float


# Display labels for projection columns (tables, exports)
PROJECTION_LABELS: Dict[str, str] = {
    "year": "Year",
    "rent_payment": "Rent Payment",
    "total_rent_paid": "Cumulative Rent",
    "rent_upfront_costs": "Rent Upfront Costs",
    "mortgage_payment": "Mortgage Payment",
    "pmi_payment": "PMI",
    "property_tax": "Property Tax",
    "insurance": "Insurance",
    "maintenance": "Maintenance",
    "hoa": "HOA",
    "total_ownership_cost": "Ownership Cost",
    "cumulative_ownership_cost": "Cumulative Ownership Cost",
    "home_value": "Home Value",
    "mortgage_balance": "Mortgage Balance",
    "home_equity": "Home Equity",
    "buy_upfront_costs": "Buy Upfront Costs",
    "mortgage_interest_paid": "Mortgage Interest",
    "property_tax_paid": "Property Tax Paid",
    "tax_savings": "Tax Savings",
    "investment_value": "Investment Value",
    "rent_net_worth": "Rent Net Worth",
    "buy_net_worth": "Buy Net Worth",
    "rent_cash_flow": "Rent Cash Flow",
    "buy_cash_flow": "Buy Cash Flow",
    "selling_costs": "Selling Costs",
    "net_proceeds_if_sold": "Net Proceeds If Sold",
}
