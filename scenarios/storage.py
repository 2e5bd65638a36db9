"""Persistence ports for the scenario store: local JSON file or in-memory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol, Union

from .models import StoreSnapshot

logger = logging.getLogger(__name__)


class ScenarioRepository(Protocol):
    def load(self) -> Optional[StoreSnapshot]:
        ...

    def save(self, snapshot: StoreSnapshot) -> None:
        ...


class InMemoryScenarioRepository:
    """Keeps the serialized JSON in memory (tests, ephemeral sessions)."""

    def __init__(self):
        self._payload: Optional[str] = None

    def load(self) -> Optional[StoreSnapshot]:
        if self._payload is None:
            return None
        return StoreSnapshot.model_validate_json(self._payload)

    def save(self, snapshot: StoreSnapshot) -> None:
        self._payload = snapshot.model_dump_json()


class JsonFileScenarioRepository:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> Optional[StoreSnapshot]:
        if not self.path.exists():
            logger.info("No scenario file at %s", self.path)
            return None
        with self.path.open("r", encoding="utf-8") as handle:
            snapshot = StoreSnapshot.model_validate_json(handle.read())
        logger.info("Loaded %d scenarios from %s", len(snapshot.scenarios), self.path)
        return snapshot

    def save(self, snapshot: StoreSnapshot) -> None:
        """Write to a sibling temp file, then swap it in; a failed save leaves the old file intact."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            with tmp_path.open("w", encoding="utf-8") as handle:
                handle.write(snapshot.model_dump_json(indent=2))
            tmp_path.replace(self.path)
        finally:
            tmp_path.unlink(missing_ok=True)
        logger.info("Saved %d scenarios to %s", len(snapshot.scenarios), self.path)
