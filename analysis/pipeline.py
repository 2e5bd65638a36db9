"""
Full analysis — validate, project, optionally simulate, sweep, and summarize.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from core.config import FinancialInputs, MonteCarloInputs
from core.schema import CalculationResults, MonteCarloResult, SensitivityAnalysis
from engine.runner import calculate_rent_vs_buy
from scenarios.validators import ValidationResult, require_valid_inputs

from .decisions import DecisionReport, generate_decision_report
from .montecarlo import run_monte_carlo_simulation
from .sensitivity import run_sensitivity_analysis

logger = logging.getLogger(__name__)


@dataclass
class AnalysisBundle:
    inputs: FinancialInputs
    results: CalculationResults
    decision: DecisionReport
    validation: ValidationResult
    sensitivity: List[SensitivityAnalysis] = field(default_factory=list)


def run_full_analysis(
    inputs: FinancialInputs,
    mc_inputs: Optional[MonteCarloInputs] = None,
    *,
    monte_carlo: Optional[Sequence[MonteCarloResult]] = None,
    include_sensitivity: bool = True,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> AnalysisBundle:
    """
    Raises InvalidInputsError before any computation if the inputs fail validation.
    Monte Carlo runs only when mc_inputs is given; pass monte_carlo instead to
    reuse bands computed elsewhere (mc_inputs is then ignored). Either way the
    bands are attached to results.monte_carlo_results before the decision
    report is built.
    """
    validation = require_valid_inputs(inputs)
    for warning in validation.warnings:
        logger.warning("Input warning: %s", warning)

    results = calculate_rent_vs_buy(inputs)
    if monte_carlo is not None:
        results.monte_carlo_results = list(monte_carlo)
    elif mc_inputs is not None:
        results.monte_carlo_results = run_monte_carlo_simulation(
            inputs, mc_inputs, seed=seed, rng=rng
        )

    sensitivity = run_sensitivity_analysis(inputs) if include_sensitivity else []
    decision = generate_decision_report(results, inputs)

    logger.info("Analysis complete: %s", decision.headline())
    return AnalysisBundle(
        inputs=inputs,
        results=results,
        decision=decision,
        validation=validation,
        sensitivity=sensitivity,
    )
