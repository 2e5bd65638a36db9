"""
Run configuration — financial inputs, Monte Carlo settings, app settings.

Output records live in core/schema.py. Fixed domain constants that are NOT
user-configurable also live here so every layer reads the same numbers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Tuple

# Tax constants (2024 married filing jointly)
STANDARD_DEDUCTION: float = 29200.0
SALT_CAP: float = 10000.0

# PMI is charged while loan-to-value exceeds this ratio
PMI_LTV_THRESHOLD: float = 0.8

# Buy path: moving costs / immediate repairs, as % of home price
MOVING_BUFFER_PERCENT: float = 1.0
# Rent path: security deposit + first month
RENT_UPFRONT_MONTHS: int = 2

# Sensitivity sweep deltas
HOME_PRICE_DELTAS: Tuple[float, ...] = (-20.0, -10.0, 0.0, 10.0, 20.0)  # relative %
RATE_DELTAS: Tuple[float, ...] = (-2.0, -1.0, 0.0, 1.0, 2.0)  # absolute pp


@dataclass(frozen=True)
class FinancialInputs:
    """All rates are percentages (7.0 means 7%)."""

    # property
    home_price: float = 500000.0
    down_payment_percent: float = 20.0
    current_rent: float = 2500.0  # monthly

    # loan
    interest_rate: float = 7.0
    loan_term_years: int = 30
    pmi_rate: float = 0.5  # annual, % of outstanding balance

    # ongoing ownership costs
    property_tax_rate: float = 1.2
    home_insurance: float = 1200.0  # annual
    maintenance_rate: float = 1.0
    hoa_fees: float = 0.0  # annual

    # growth
    rent_growth_rate: float = 3.5
    investment_return: float = 8.0
    inflation_rate: float = 2.5
    home_appreciation_rate: float = 3.5

    # personal
    time_horizon_years: int = 10
    marginal_tax_rate: float = 24.0
    other_deductions: float = 5000.0  # annual itemized (charitable, medical, ...)

    # transaction costs
    closing_costs_percent: float = 3.0
    selling_costs_percent: float = 6.0

    @property
    def down_payment(self) -> float:
        return self.home_price * (self.down_payment_percent / 100)

    @property
    def loan_amount(self) -> float:
        return self.home_price - self.down_payment

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))


@dataclass(frozen=True)
class MonteCarloInputs:
    """
    Volatility settings for the Monte Carlo sampler.

    Volatilities are standard deviations in percentage points applied directly
    to the rate fields (15 means N(0, 15) added to home appreciation).
    """

    home_price_volatility: float = 15.0
    rent_volatility: float = 10.0
    stock_market_volatility: float = 20.0
    simulations: int = 1000

    def __post_init__(self):
        if self.simulations < 1:
            raise ValueError(f"simulations must be >= 1, got {self.simulations}")
        for name in ("home_price_volatility", "rent_volatility", "stock_market_volatility"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")


@dataclass(frozen=True)
class AppSettings:
    log_level: str = "INFO"
    scenario_path: Path = Path("data/scenarios.json")
    monte_carlo_seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> "AppSettings":
        seed = os.environ.get("RENTBUY_MC_SEED")
        return cls(
            log_level=os.environ.get("RENTBUY_LOG_LEVEL", "INFO").upper(),
            scenario_path=Path(os.environ.get("RENTBUY_SCENARIO_PATH", "data/scenarios.json")),
            monte_carlo_seed=int(seed) if seed not in (None, "") else None,
        )
