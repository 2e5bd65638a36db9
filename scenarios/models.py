"""
Persisted form of the scenario store.

Only inputs are persisted; results are recomputed from them on load.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from core.config import FinancialInputs, MonteCarloInputs

SNAPSHOT_VERSION = 1


class ScenarioRecord(BaseModel):
    id: str
    name: str
    color: str
    inputs: FinancialInputs
    created_at: datetime


class StoreSnapshot(BaseModel):
    version: int = SNAPSHOT_VERSION
    inputs: FinancialInputs = Field(default_factory=FinancialInputs)
    monte_carlo_inputs: MonteCarloInputs = Field(default_factory=MonteCarloInputs)
    show_monte_carlo: bool = False
    active_scenario_id: Optional[str] = None
    scenarios: List[ScenarioRecord] = Field(default_factory=list)
