"""
Analyses built on the projection engine — Monte Carlo bands, sensitivity,
break-even grid, liquidity timeline, and decision support.
"""

from .aggregator import aggregate_yearly_bands, nearest_rank_percentile, percentile_band
from .decisions import DecisionReport, generate_decision_report
from .heatmap import GRID_AXES, run_break_even_grid
from .metrics import compute_liquidity_timeline
from .montecarlo import run_monte_carlo_simulation, simulate_net_worth_paths
from .pipeline import AnalysisBundle, run_full_analysis
from .sensitivity import SENSITIVITY_PARAMETERS, run_sensitivity_analysis

__all__ = [
    "aggregate_yearly_bands",
    "nearest_rank_percentile",
    "percentile_band",
    "DecisionReport",
    "generate_decision_report",
    "GRID_AXES",
    "run_break_even_grid",
    "compute_liquidity_timeline",
    "run_monte_carlo_simulation",
    "simulate_net_worth_paths",
    "AnalysisBundle",
    "run_full_analysis",
    "SENSITIVITY_PARAMETERS",
    "run_sensitivity_analysis",
]
