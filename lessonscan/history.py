"""
Append-only history stores for pipeline runs.

Each analysis type (categorization, quality, impact) owns one JSON store file
holding a growing list of run snapshots, a parallel secondary list, and a
``lastUpdated`` stamp. Store state is an explicit :class:`StoreData` value:

    store = history.load()
    store = history.append(store, snapshot, secondary)
    history.save(store)

Prior entries are carried over verbatim; there is no deletion path.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class StoreLayout:
    """JSON key names for one store file."""

    name: str
    history_key: str
    secondary_key: str
    filename: str


CATEGORIZATION = StoreLayout(
    name="categorization",
    history_key="categories",
    secondary_key="categorizationHistory",
    filename="lesson-categories.json",
)
QUALITY = StoreLayout(
    name="quality",
    history_key="qualityHistory",
    secondary_key="validationHistory",
    filename="lesson-quality.json",
)
IMPACT = StoreLayout(
    name="impact",
    history_key="impactHistory",
    secondary_key="impactMetrics",
    filename="lesson-impact.json",
)

LAYOUTS = (CATEGORIZATION, QUALITY, IMPACT)


@dataclass(frozen=True)
class HistorySnapshot:
    """One run's aggregate record. Immutable once built."""

    timestamp: str
    total_lessons: int
    aggregate_stats: dict[str, Any] = field(default_factory=dict)
    per_lesson_summaries: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp,
            "totalLessons": self.total_lessons,
            "aggregateStats": self.aggregate_stats,
            "perLessonSummaries": self.per_lesson_summaries,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HistorySnapshot":
        """Create from dictionary."""
        return cls(
            timestamp=data["timestamp"],
            total_lessons=int(data.get("totalLessons", 0)),
            aggregate_stats=data.get("aggregateStats", {}),
            per_lesson_summaries=data.get("perLessonSummaries", []),
        )


@dataclass
class StoreData:
    """In-memory contents of one store file."""

    history: list[dict[str, Any]] = field(default_factory=list)
    secondary: list[Any] = field(default_factory=list)
    last_updated: str | None = None

    def snapshots(self) -> list[HistorySnapshot]:
        """Entries that parse as snapshots; foreign entries are skipped."""
        result = []
        for entry in self.history:
            try:
                result.append(HistorySnapshot.from_dict(entry))
            except (KeyError, TypeError, ValueError):
                continue
        return result


class HistoryStore:
    """Load, append to and persist one append-only store file."""

    def __init__(self, path: Path, layout: StoreLayout):
        self.path = path
        self.layout = layout

    @classmethod
    def in_dir(cls, reports_dir: Path, layout: StoreLayout) -> "HistoryStore":
        return cls(reports_dir / layout.filename, layout)

    def load(self) -> StoreData:
        """Read the store, or an empty skeleton if it is missing or unreadable."""
        if not self.path.exists():
            return StoreData()

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            store = self.from_dict(data)
        except (OSError, ValueError) as e:
            logger.warning("Failed to load %s data from %s: %s", self.layout.name, self.path, e)
            return StoreData()

        logger.info("Loaded existing %s data with %d records", self.layout.name, len(store.history))
        return store

    def append(self, store: StoreData, snapshot: HistorySnapshot, secondary: Any) -> StoreData:
        """Return a new StoreData with ``snapshot`` appended; ``store`` is left as is."""
        return StoreData(
            history=[*store.history, snapshot.to_dict()],
            secondary=[*store.secondary, secondary],
            last_updated=utc_now(),
        )

    def save(self, store: StoreData) -> bool:
        """Persist the store. A write failure is logged and reported as False."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self.to_dict(store), indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            logger.warning("Failed to save %s data to %s: %s", self.layout.name, self.path, e)
            return False

        logger.info("Saved %s data with %d records", self.layout.name, len(store.history))
        return True

    def to_dict(self, store: StoreData) -> dict:
        return {
            self.layout.history_key: store.history,
            self.layout.secondary_key: store.secondary,
            "lastUpdated": store.last_updated,
        }

    def from_dict(self, data: Any) -> StoreData:
        """Parse file contents; raises ValueError when the shape is wrong."""
        if not isinstance(data, dict):
            raise ValueError("store file must contain a JSON object")

        history = data.get(self.layout.history_key)
        secondary = data.get(self.layout.secondary_key, [])
        if not isinstance(history, list):
            raise ValueError(f"'{self.layout.history_key}' must be a list")
        if not isinstance(secondary, list):
            raise ValueError(f"'{self.layout.secondary_key}' must be a list")

        last_updated = data.get("lastUpdated")
        return StoreData(
            history=list(history),
            secondary=list(secondary),
            last_updated=last_updated if isinstance(last_updated, str) else None,
        )
