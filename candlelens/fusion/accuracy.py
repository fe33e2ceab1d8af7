"""Pattern Accuracy Stores.

Historical hit rate per pattern name, injected into SignalFusion to scale
each pattern's contribution. Scoring works with the null store, which
reports the neutral accuracy of 0.5 for every pattern.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Union, runtime_checkable

logger = logging.getLogger(__name__)

DEFAULT_ACCURACY = 0.5


@dataclass(frozen=True)
class PatternStats:
    """Outcome counts for one pattern name."""

    occurrences: int = 0
    correct: int = 0

    @property
    def accuracy(self) -> float:
        if self.occurrences == 0:
            return DEFAULT_ACCURACY
        return self.correct / self.occurrences

    def recorded(self, correct: bool) -> "PatternStats":
        return PatternStats(
            occurrences=self.occurrences + 1,
            correct=self.correct + (1 if correct else 0),
        )

    def to_dict(self) -> dict:
        return {
            "occurrences": self.occurrences,
            "correct": self.correct,
            "accuracy": round(self.accuracy, 4),
        }


@runtime_checkable
class PatternAccuracyStore(Protocol):
    """Interface for pattern accuracy lookups and outcome recording."""

    def get(self, name: str) -> PatternStats:
        ...

    def record(self, name: str, correct: bool) -> None:
        ...


class NullAccuracyStore:
    """Reports the neutral accuracy for every pattern and records nothing."""

    def get(self, name: str) -> PatternStats:
        return PatternStats()

    def record(self, name: str, correct: bool) -> None:
        return None


class InMemoryAccuracyStore:
    """Thread-safe in-process accuracy tracking."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._stats: dict[str, PatternStats] = {}

    def get(self, name: str) -> PatternStats:
        with self._lock:
            return self._stats.get(name, PatternStats())

    def record(self, name: str, correct: bool) -> None:
        with self._lock:
            self._stats[name] = self._stats.get(name, PatternStats()).recorded(correct)
        logger.debug("Recorded outcome for %s (correct=%s)", name, correct)

    def snapshot(self) -> dict[str, PatternStats]:
        with self._lock:
            return dict(self._stats)

    def clear(self) -> None:
        with self._lock:
            self._stats.clear()


class JsonFileAccuracyStore(InMemoryAccuracyStore):
    """Accuracy tracking persisted to a JSON file after every record.

    Args:
        path: File to load from (if present) and write to.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        super().__init__()
        self.path = Path(path)
        self._load()

    def record(self, name: str, correct: bool) -> None:
        with self._lock:
            super().record(name, correct)
            self._save()

    def clear(self) -> None:
        with self._lock:
            super().clear()
            self._save()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Could not read accuracy store %s: %s", self.path, e)
            return

        patterns = data.get("patterns", {}) if isinstance(data, dict) else None
        if not isinstance(patterns, dict):
            logger.warning("Accuracy store %s has unexpected layout, starting empty", self.path)
            return

        for name, entry in patterns.items():
            if not isinstance(entry, dict):
                logger.warning("Skipping malformed accuracy entry %r in %s", name, self.path)
                continue
            try:
                stats = PatternStats(
                    occurrences=int(entry.get("occurrences", 0)),
                    correct=int(entry.get("correct", 0)),
                )
            except (TypeError, ValueError):
                logger.warning("Skipping malformed accuracy entry %r in %s", name, self.path)
                continue
            self._stats[name] = stats

    def _save(self) -> None:
        payload = {
            "patterns": {name: stats.to_dict() for name, stats in self._stats.items()},
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        tmp.replace(self.path)
