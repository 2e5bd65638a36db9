"""
Distributions package — Gaussian draws and Monte Carlo perturbation sampling.
"""

from .sampler import MonteCarloSampler, SampledPaths, box_muller, random_normal

__all__ = [
    "MonteCarloSampler",
    "SampledPaths",
    "box_muller",
    "random_normal",
]
