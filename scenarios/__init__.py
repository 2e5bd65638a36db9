"""
Scenarios — input validation, the scenario store, and its persistence ports.
"""

from .models import ScenarioRecord, StoreSnapshot
from .storage import InMemoryScenarioRepository, JsonFileScenarioRepository, ScenarioRepository
from .store import Scenario, ScenarioNotFoundError, ScenarioStore
from .validators import InvalidInputsError, ValidationResult, require_valid_inputs, validate_inputs

__all__ = [
    "ScenarioRecord",
    "StoreSnapshot",
    "InMemoryScenarioRepository",
    "JsonFileScenarioRepository",
    "ScenarioRepository",
    "Scenario",
    "ScenarioNotFoundError",
    "ScenarioStore",
    "InvalidInputsError",
    "ValidationResult",
    "require_valid_inputs",
    "validate_inputs",
]
