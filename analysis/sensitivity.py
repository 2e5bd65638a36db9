"""
One-at-a-time sensitivity — sweep each parameter around the base scenario and
record how break-even year and final net-worth difference move.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Tuple

from core.config import HOME_PRICE_DELTAS, RATE_DELTAS, FinancialInputs
from core.schema import SensitivityAnalysis
from engine.runner import calculate_rent_vs_buy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SweepParameter:
    key: str  # FinancialInputs field
    label: str
    deltas: Tuple[float, ...]
    relative: bool = False  # True: delta is a % of the base value

    def shifted(self, base_value: float, delta: float) -> float:
        if self.relative:
            return base_value * (1 + delta / 100)
        return base_value + delta


SENSITIVITY_PARAMETERS: Tuple[SweepParameter, ...] = (
    SweepParameter("home_price", "Home Price", HOME_PRICE_DELTAS, relative=True),
    SweepParameter("interest_rate", "Interest Rate", RATE_DELTAS),
    SweepParameter("home_appreciation_rate", "Home Appreciation", RATE_DELTAS),
    SweepParameter("rent_growth_rate", "Rent Growth", RATE_DELTAS),
)


def sweep_parameter(base: FinancialInputs, param: SweepParameter) -> SensitivityAnalysis:
    base_value = getattr(base, param.key)
    analysis = SensitivityAnalysis(parameter=param.label)
    for delta in param.deltas:
        value = param.shifted(base_value, delta)
        result = calculate_rent_vs_buy(replace(base, **{param.key: value}))
        analysis.values.append(value)
        analysis.break_even_years.append(result.break_even_year)
        analysis.final_net_worth_differences.append(result.net_worth_difference)
    return analysis


def run_sensitivity_analysis(base: FinancialInputs) -> List[SensitivityAnalysis]:
    """One SensitivityAnalysis per parameter, values in fixed delta order (not sorted)."""
    analyses = [sweep_parameter(base, param) for param in SENSITIVITY_PARAMETERS]
    logger.debug("Sensitivity sweep: %d parameters", len(analyses))
    return analyses
