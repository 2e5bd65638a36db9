"""
Scenario store — working inputs, latest results, saved scenarios, Monte Carlo
settings.

An explicit state object: the caller owns it (e.g. in st.session_state) and
persistence goes through an injected ScenarioRepository.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, List, Optional

from core.config import FinancialInputs, MonteCarloInputs
from core.schema import CalculationResults
from engine.runner import calculate_rent_vs_buy

from .models import ScenarioRecord, StoreSnapshot
from .storage import InMemoryScenarioRepository, ScenarioRepository
from .validators import require_valid_inputs

logger = logging.getLogger(__name__)

SCENARIO_COLORS = ("#3b82f6", "#10b981", "#f59e0b", "#ef4444", "#8b5cf6", "#06b6d4")


class ScenarioNotFoundError(KeyError):
    pass


@dataclass
class Scenario:
    id: str
    name: str
    inputs: FinancialInputs
    results: CalculationResults
    color: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ScenarioStore:
    def __init__(self, repository: Optional[ScenarioRepository] = None):
        self.repository = repository if repository is not None else InMemoryScenarioRepository()
        self.inputs = FinancialInputs()
        self.results: Optional[CalculationResults] = None
        self.scenarios: List[Scenario] = []
        self.active_scenario_id: Optional[str] = None
        self.monte_carlo_inputs = MonteCarloInputs()
        self.show_monte_carlo = False

    # --- working inputs ---------------------------------------------------
    def update_input(self, name: str, value: Any) -> FinancialInputs:
        if name not in FinancialInputs.field_names():
            raise KeyError(f"Unknown input field {name!r}")
        self.inputs = replace(self.inputs, **{name: value})
        return self.inputs

    def set_results(self, results: CalculationResults) -> None:
        self.results = results

    def calculate(self) -> CalculationResults:
        """Validate the working inputs, run the engine, keep the results."""
        require_valid_inputs(self.inputs)
        self.results = calculate_rent_vs_buy(self.inputs)
        return self.results

    def reset_inputs(self) -> None:
        self.inputs = FinancialInputs()
        self.results = None

    # --- scenarios --------------------------------------------------------
    def get_scenario(self, scenario_id: str) -> Scenario:
        for scenario in self.scenarios:
            if scenario.id == scenario_id:
                return scenario
        raise ScenarioNotFoundError(scenario_id)

    def save_scenario(self, name: str) -> Optional[Scenario]:
        """Snapshot the working inputs + results; None when nothing has been calculated."""
        if self.results is None:
            return None
        scenario = Scenario(
            id=uuid.uuid4().hex,
            name=name,
            inputs=self.inputs,
            results=self.results,
            color=SCENARIO_COLORS[len(self.scenarios) % len(SCENARIO_COLORS)],
        )
        self.scenarios.append(scenario)
        self.active_scenario_id = scenario.id
        logger.info("Saved scenario %r (%s)", name, scenario.id)
        return scenario

    def load_scenario(self, scenario_id: str) -> Scenario:
        scenario = self.get_scenario(scenario_id)
        self.inputs = scenario.inputs
        self.results = scenario.results
        self.active_scenario_id = scenario.id
        return scenario

    def delete_scenario(self, scenario_id: str) -> None:
        scenario = self.get_scenario(scenario_id)
        self.scenarios.remove(scenario)
        if self.active_scenario_id == scenario_id:
            self.active_scenario_id = None

    def rename_scenario(self, scenario_id: str, name: str) -> Scenario:
        scenario = self.get_scenario(scenario_id)
        scenario.name = name
        return scenario

    # --- Monte Carlo settings ---------------------------------------------
    def update_monte_carlo_input(self, name: str, value: Any) -> MonteCarloInputs:
        if not hasattr(self.monte_carlo_inputs, name):
            raise KeyError(f"Unknown Monte Carlo field {name!r}")
        self.monte_carlo_inputs = replace(self.monte_carlo_inputs, **{name: value})
        return self.monte_carlo_inputs

    def toggle_monte_carlo(self) -> bool:
        self.show_monte_carlo = not self.show_monte_carlo
        return self.show_monte_carlo

    # --- persistence ------------------------------------------------------
    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            inputs=self.inputs,
            monte_carlo_inputs=self.monte_carlo_inputs,
            show_monte_carlo=self.show_monte_carlo,
            active_scenario_id=self.active_scenario_id,
            scenarios=[
                ScenarioRecord(
                    id=s.id, name=s.name, color=s.color, inputs=s.inputs, created_at=s.created_at,
                )
                for s in self.scenarios
            ],
        )

    def save(self) -> None:
        self.repository.save(self.snapshot())

    def load(self) -> bool:
        """Restore from the repository; False when nothing was stored."""
        snapshot = self.repository.load()
        if snapshot is None:
            return False
        self.inputs = snapshot.inputs
        self.monte_carlo_inputs = snapshot.monte_carlo_inputs
        self.show_monte_carlo = snapshot.show_monte_carlo
        self.scenarios = [
            Scenario(
                id=r.id,
                name=r.name,
                inputs=r.inputs,
                results=calculate_rent_vs_buy(r.inputs),
                color=r.color,
                created_at=r.created_at,
            )
            for r in snapshot.scenarios
        ]
        ids = {s.id for s in self.scenarios}
        self.active_scenario_id = snapshot.active_scenario_id if snapshot.active_scenario_id in ids else None
        self.results = None
        return True
