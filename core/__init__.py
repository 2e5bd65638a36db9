"""
Core package — input/config dataclasses, output records, and shared utilities.
No business logic lives here.
"""

from .config import AppSettings, FinancialInputs, MonteCarloInputs
from .schema import (
    BreakEvenCell,
    CalculationResults,
    MonteCarloResult,
    PercentileBand,
    SensitivityAnalysis,
    YearlyProjection,
)
from .utils import configure_logging, require_columns, round_half_up

__all__ = [
    "AppSettings",
    "FinancialInputs",
    "MonteCarloInputs",
    "BreakEvenCell",
    "CalculationResults",
    "MonteCarloResult",
    "PercentileBand",
    "SensitivityAnalysis",
    "YearlyProjection",
    "configure_logging",
    "require_columns",
    "round_half_up",
]
