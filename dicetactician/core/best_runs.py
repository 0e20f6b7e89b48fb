"""
Best-runs module for the engine.

Keeps the leaderboard of finished runs. Stores only know how to load and
save a list of summaries; `record_run` turns load, append, sort, truncate
and save into one locked transaction.
"""

import json
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field, TypeAdapter

from .constants import BEST_RUNS_LIMIT
from .logging import log_debug, log_error, log_warning


class RunSummary(BaseModel):
    """The summary of a finished run."""

    class_name: str = Field(
        description="Display name of the class played.",
    )
    rounds: int = Field(
        description="Rounds survived.",
        ge=0,
    )
    enemies_defeated: int = Field(
        0,
        description="Enemies defeated during the run.",
    )
    damage_dealt: int = Field(
        0,
        description="Total damage dealt to enemies.",
    )
    gold: int = Field(
        0,
        description="Gold earned during the run.",
    )
    date: str = Field(
        default_factory=lambda: datetime.now().isoformat(timespec="seconds"),
        description="When the run ended, in ISO format.",
    )


_SUMMARIES_ADAPTER: TypeAdapter = TypeAdapter(list[RunSummary])


class BestRunStore(ABC):
    """Durable storage for the best-runs list."""

    def __init__(self) -> None:
        self._lock = threading.Lock()

    @abstractmethod
    def load(self) -> list[RunSummary]:
        """Returns the stored summaries, best first."""

    @abstractmethod
    def save(self, runs: list[RunSummary]) -> None:
        """Replaces the stored summaries."""

    def record_run(
        self, summary: RunSummary, limit: int = BEST_RUNS_LIMIT
    ) -> list[RunSummary]:
        """
        Adds a run to the leaderboard.

        Args:
            summary (RunSummary):
                The finished run.
            limit (int):
                How many runs to keep.

        Returns:
            list[RunSummary]:
                The saved leaderboard, sorted by rounds survived.

        """
        with self._lock:
            runs = self.load()
            runs.append(summary)
            # Stable sort, ties keep the older run first.
            runs.sort(key=lambda run: run.rounds, reverse=True)
            runs = runs[:limit]
            self.save(runs)
        log_debug("Recorded run", {"class": summary.class_name, "rounds": summary.rounds})
        return runs


class InMemoryBestRunStore(BestRunStore):
    def __init__(self) -> None:
        super().__init__()
        self._runs: list[RunSummary] = []

    def load(self) -> list[RunSummary]:
        return [run.model_copy() for run in self._runs]

    def save(self, runs: list[RunSummary]) -> None:
        self._runs = [run.model_copy() for run in runs]


class JsonFileBestRunStore(BestRunStore):
    """Keeps the leaderboard in a JSON file, written atomically."""

    def __init__(self, path: Path | str) -> None:
        super().__init__()
        self.path = Path(path)

    def load(self) -> list[RunSummary]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
            return _SUMMARIES_ADAPTER.validate_python(data)
        except (json.JSONDecodeError, ValueError) as e:
            log_warning(
                "Discarding unreadable best-runs file",
                {"path": self.path, "error": e},
            )
            return []

    def save(self, runs: list[RunSummary]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = _SUMMARIES_ADAPTER.dump_python(runs, mode="json")
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as e:
            log_error("Could not save the best runs", {"path": self.path, "error": e})
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise
