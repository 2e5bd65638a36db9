"""
Monte Carlo simulation — rerun the projection engine under sampled growth
assumptions and reduce the ensemble to percentile bands.

Two layers:
  1. distributions.sampler: one perturbation set per run
  2. this module: run the engine per set, collect net worth by year, reduce
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import numpy as np

from core.config import FinancialInputs, MonteCarloInputs
from core.schema import MonteCarloResult
from distributions.sampler import MonteCarloSampler, SampledPaths
from engine.runner import calculate_rent_vs_buy

from .aggregator import aggregate_yearly_bands

logger = logging.getLogger(__name__)


def simulate_net_worth_paths(
    inputs: FinancialInputs,
    sampled_paths: SampledPaths,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Run the engine once per sampled path.

    Returns (rent_net_worth, buy_net_worth), each shaped (n_paths, horizon).
    A run with fewer rows than the horizon leaves zeros in the missing years.
    """
    horizon = inputs.time_horizon_years
    n_paths = sampled_paths.n_paths
    rent = np.zeros((n_paths, horizon), dtype=float)
    buy = np.zeros((n_paths, horizon), dtype=float)

    for p in range(n_paths):
        projections = calculate_rent_vs_buy(sampled_paths.apply(inputs, p)).yearly_projections
        for t, row in enumerate(projections[:horizon]):
            rent[p, t] = row.rent_net_worth
            buy[p, t] = row.buy_net_worth

    return rent, buy


def run_monte_carlo_simulation(
    inputs: FinancialInputs,
    mc_inputs: MonteCarloInputs,
    *,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
    sampled_paths: Optional[SampledPaths] = None,
) -> List[MonteCarloResult]:
    """
    Percentile bands of rent/buy net worth for every year of the horizon.

    Pass seed or rng for reproducible output; pass sampled_paths to reuse an
    existing draw (mc_inputs is then only used for logging).
    """
    if sampled_paths is None:
        sampled_paths = MonteCarloSampler(mc_inputs, seed=seed, rng=rng).sample()

    logger.info(
        "Monte Carlo: %d runs over %d years (vol home=%.1f rent=%.1f stock=%.1f)",
        sampled_paths.n_paths, inputs.time_horizon_years,
        mc_inputs.home_price_volatility, mc_inputs.rent_volatility,
        mc_inputs.stock_market_volatility,
    )
    rent, buy = simulate_net_worth_paths(inputs, sampled_paths)
    return aggregate_yearly_bands(rent, buy)
