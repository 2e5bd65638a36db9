"""
Monte Carlo Sampler — generates N independent perturbations of the three
growth assumptions.

Input:  MonteCarloInputs (volatility per assumption, number of simulations)
Output: (N × 3) table of additive perturbations — one row per simulation run

Each row is one plausible future:
  Run 1: appreciation +4.1pp, rent growth -2.3pp, investment return +11.0pp
  Run 2: appreciation -9.7pp, rent growth +0.8pp, investment return -25.4pp

Perturbations are in percentage points and are added directly to the rate
fields of FinancialInputs (appreciation 3.5 with volatility 15 is perturbed by
N(0, 15), not N(0, 0.15 × 3.5)).

Method: Box–Muller transform on two uniforms in (0, 1); exact zeros are
redrawn so log(u) is always finite.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Optional

import numpy as np
import pandas as pd

from core.config import FinancialInputs, MonteCarloInputs


def _nonzero_uniform(rng: np.random.Generator, size: Optional[int] = None):
    """Uniform draws in (0, 1): numpy's [0, 1) with exact zeros redrawn."""
    if size is None:
        u = 0.0
        while u == 0.0:
            u = rng.random()
        return u
    u = rng.random(size)
    zeros = u == 0.0
    while zeros.any():
        u[zeros] = rng.random(int(zeros.sum()))
        zeros = u == 0.0
    return u


def random_normal(
    mean: float = 0.0,
    std_dev: float = 1.0,
    *,
    rng: Optional[np.random.Generator] = None,
) -> float:
    """Single Gaussian draw via Box–Muller."""
    rng = rng if rng is not None else np.random.default_rng()
    u = _nonzero_uniform(rng)
    v = _nonzero_uniform(rng)
    z = math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)
    return z * std_dev + mean


def box_muller(rng: np.random.Generator, size: int) -> np.ndarray:
    """Vectorized standard normal draws, same transform as random_normal."""
    u = _nonzero_uniform(rng, size)
    v = _nonzero_uniform(rng, size)
    return np.sqrt(-2.0 * np.log(u)) * np.cos(2.0 * np.pi * v)


@dataclass
class SampledPaths:
    """
    Output of Monte Carlo sampling: N runs of additive rate perturbations.

    This is the (N × 3) table that feeds analysis.montecarlo.
    """
    home_appreciation: np.ndarray  # shape (n_paths,), percentage points
    rent_growth: np.ndarray        # shape (n_paths,)
    investment_return: np.ndarray  # shape (n_paths,)

    @property
    def n_paths(self) -> int:
        return len(self.home_appreciation)

    def get_path(self, path_idx: int) -> dict:
        """Perturbations for a single run as a dict."""
        return {
            "home_appreciation": float(self.home_appreciation[path_idx]),
            "rent_growth": float(self.rent_growth[path_idx]),
            "investment_return": float(self.investment_return[path_idx]),
        }

    def apply(self, base: FinancialInputs, path_idx: int) -> FinancialInputs:
        """Clone the base inputs with this run's perturbations added."""
        d = self.get_path(path_idx)
        return replace(
            base,
            home_appreciation_rate=base.home_appreciation_rate + d["home_appreciation"],
            rent_growth_rate=base.rent_growth_rate + d["rent_growth"],
            investment_return=base.investment_return + d["investment_return"],
        )

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame({
            "path_id": np.arange(self.n_paths),
            "home_appreciation": self.home_appreciation,
            "rent_growth": self.rent_growth,
            "investment_return": self.investment_return,
        })

    def summary(self) -> pd.DataFrame:
        """Mean / std / percentile summary of the sampled perturbations."""
        pcts = [10, 25, 50, 75, 90]
        rows = []
        for name, arr in [("Home Appreciation", self.home_appreciation),
                          ("Rent Growth", self.rent_growth),
                          ("Investment Return", self.investment_return)]:
            row = {"Variable": name, "Mean": float(np.mean(arr)), "Std": float(np.std(arr))}
            for p in pcts:
                row[f"P{p:02d}"] = float(np.percentile(arr, p))
            rows.append(row)
        return pd.DataFrame(rows)


class MonteCarloSampler:
    """
    Generates N independent perturbation sets from MonteCarloInputs.

    Usage:
        sampler = MonteCarloSampler(MonteCarloInputs(simulations=500), seed=42)
        paths = sampler.sample()
        paths.apply(base_inputs, 0)  # → perturbed FinancialInputs for run 0

    Without a seed (or an explicit rng) draws are not reproducible.
    """

    def __init__(
        self,
        mc_inputs: MonteCarloInputs,
        *,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.mc_inputs = mc_inputs
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    @property
    def n_paths(self) -> int:
        return self.mc_inputs.simulations

    def sample(self) -> SampledPaths:
        mc = self.mc_inputs
        n = self.n_paths
        return SampledPaths(
            home_appreciation=box_muller(self.rng, n) * mc.home_price_volatility,
            rent_growth=box_muller(self.rng, n) * mc.rent_volatility,
            investment_return=box_muller(self.rng, n) * mc.stock_market_volatility,
        )
