"""
Reduce an ensemble of simulation runs to per-year percentile bands.

Percentiles use the nearest-rank method on the ascending-sorted sample:
index = floor(n · p / 100), clamped to the last index. No interpolation, so
every reported value is an actual simulated outcome.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from core.schema import MonteCarloResult, PercentileBand

PERCENTILES: Tuple[int, ...] = (10, 25, 50, 75, 90)


def nearest_rank_percentile(sorted_values: Sequence[float], p: int) -> float:
    n = len(sorted_values)
    if n == 0:
        raise ValueError("Cannot take a percentile of an empty sample.")
    index = (n * p) // 100
    return float(sorted_values[min(index, n - 1)])


def percentile_band(values: Sequence[float]) -> PercentileBand:
    """Five-number p10/p25/p50/p75/p90 summary of an unsorted sample."""
    ordered = np.sort(np.asarray(values, dtype=float))
    p10, p25, p50, p75, p90 = (nearest_rank_percentile(ordered, p) for p in PERCENTILES)
    return PercentileBand(p10=p10, p25=p25, p50=p50, p75=p75, p90=p90)


def aggregate_yearly_bands(
    rent_net_worth: np.ndarray,
    buy_net_worth: np.ndarray,
) -> List[MonteCarloResult]:
    """
    Parameters
    ----------
    rent_net_worth, buy_net_worth : np.ndarray
        Shape (n_runs, n_years); column t holds year t+1 across all runs.

    Returns
    -------
    One MonteCarloResult per year, in year order.
    """
    if rent_net_worth.shape != buy_net_worth.shape:
        raise ValueError(
            f"Shape mismatch: rent {rent_net_worth.shape} vs buy {buy_net_worth.shape}"
        )
    n_years = rent_net_worth.shape[1]
    return [
        MonteCarloResult(
            year=t + 1,
            rent_net_worth=percentile_band(rent_net_worth[:, t]),
            buy_net_worth=percentile_band(buy_net_worth[:, t]),
        )
        for t in range(n_years)
    ]
