"""
Per-year liquidity metrics for the buy path.

Answers "what if I had to sell in year N?":
  total_investment  = down payment + cumulative ownership cost
  liquidity_penalty = how much of that would not come back on a sale
  opportunity_cost  = rent-path net worth minus net sale proceeds
  mobility_score    = net proceeds as % of total investment, clipped to [0, 100]
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from core.config import FinancialInputs
from core.schema import CalculationResults


def compute_liquidity_timeline(results: CalculationResults, inputs: FinancialInputs) -> pd.DataFrame:
    """
    Returns
    -------
    DataFrame with one row per year:
        year, net_proceeds_if_sold, total_investment, liquidity_penalty,
        opportunity_cost, mobility_score, breaks_even
    """
    rows = results.yearly_projections
    year = np.array([r.year for r in rows], dtype=int)
    proceeds = np.array([r.net_proceeds_if_sold for r in rows], dtype=float)
    ownership = np.array([r.cumulative_ownership_cost for r in rows], dtype=float)
    rent_nw = np.array([r.rent_net_worth for r in rows], dtype=float)

    total_investment = inputs.down_payment + ownership
    with np.errstate(divide="ignore", invalid="ignore"):
        ratio = np.where(total_investment > 0, proceeds / total_investment * 100, 0.0)

    return pd.DataFrame({
        "year": year,
        "net_proceeds_if_sold": proceeds,
        "total_investment": total_investment,
        "liquidity_penalty": np.maximum(0.0, total_investment - proceeds),
        "opportunity_cost": rent_nw - proceeds,
        "mobility_score": np.clip(ratio, 0.0, 100.0),
        "breaks_even": proceeds >= total_investment,
    })
