"""
Two-parameter break-even grid — every combination of two swept parameters,
used for the break-even heatmap.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, List

from core.config import FinancialInputs
from core.schema import BreakEvenCell
from engine.runner import calculate_rent_vs_buy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridAxis:
    label: str
    step: float
    relative: bool = False  # step is a fraction of the base value

    def values(self, base_value: float, steps: int) -> List[float]:
        half = steps // 2
        increment = base_value * self.step if self.relative else self.step
        return [base_value + k * increment for k in range(-half, half + 1)]


GRID_AXES: Dict[str, GridAxis] = {
    "home_price": GridAxis("Home Price", 0.10, relative=True),
    "interest_rate": GridAxis("Interest Rate", 0.5),
    "home_appreciation_rate": GridAxis("Home Appreciation", 0.5),
    "rent_growth_rate": GridAxis("Rent Growth", 0.5),
}


def run_break_even_grid(
    base: FinancialInputs,
    x_parameter: str,
    y_parameter: str,
    *,
    steps: int = 11,
) -> List[BreakEvenCell]:
    """
    Run the engine on a steps × steps grid centered on the base values.

    Cells are ordered x-major (all y values for the first x, then the next x).
    """
    if x_parameter == y_parameter:
        raise ValueError("x_parameter and y_parameter must differ.")
    for name in (x_parameter, y_parameter):
        if name not in GRID_AXES:
            raise ValueError(f"Unsupported grid parameter {name!r}; choose from {sorted(GRID_AXES)}")
    if steps < 1 or steps % 2 == 0:
        raise ValueError(f"steps must be a positive odd number, got {steps}")

    x_values = GRID_AXES[x_parameter].values(getattr(base, x_parameter), steps)
    y_values = GRID_AXES[y_parameter].values(getattr(base, y_parameter), steps)

    cells: List[BreakEvenCell] = []
    for xi, x_val in enumerate(x_values):
        for yi, y_val in enumerate(y_values):
            result = calculate_rent_vs_buy(replace(base, **{x_parameter: x_val, y_parameter: y_val}))
            cells.append(BreakEvenCell(
                x_index=xi,
                y_index=yi,
                x_value=x_val,
                y_value=y_val,
                break_even_year=result.break_even_year,
                net_worth_difference=result.net_worth_difference,
            ))

    logger.debug("Break-even grid %s × %s: %d cells", x_parameter, y_parameter, len(cells))
    return cells
