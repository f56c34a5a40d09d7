import json
import logging
from pathlib import Path

import pytest

from lessonscan.history import CATEGORIZATION, QUALITY, HistorySnapshot, HistoryStore, StoreData


def _snapshot(timestamp: str, total: int = 1) -> HistorySnapshot:
    return HistorySnapshot(
        timestamp=timestamp,
        total_lessons=total,
        aggregate_stats={"averageQualityScore": 80},
        per_lesson_summaries=[{"filename": "a.md", "qualityScore": 80}],
    )


def test_missing_store_loads_empty(tmp_path: Path) -> None:
    store = HistoryStore.in_dir(tmp_path, QUALITY).load()

    assert store == StoreData()
    assert store.snapshots() == []


def test_append_save_load(tmp_path: Path) -> None:
    history = HistoryStore.in_dir(tmp_path, QUALITY)

    first = history.append(history.load(), _snapshot("2024-01-01T00:00:00+00:00"), [])
    assert history.save(first)
    second = history.append(history.load(), _snapshot("2024-01-02T00:00:00+00:00"), [{"filename": "a.md"}])
    assert history.save(second)

    # append does not mutate its input
    assert len(first.history) == 1

    loaded = history.load()
    assert [s.timestamp for s in loaded.snapshots()] == ["2024-01-01T00:00:00+00:00", "2024-01-02T00:00:00+00:00"]
    assert loaded.secondary == [[], [{"filename": "a.md"}]]
    assert loaded.last_updated is not None


def test_store_file_layout(tmp_path: Path) -> None:
    history = HistoryStore.in_dir(tmp_path, CATEGORIZATION)
    history.save(history.append(StoreData(), _snapshot("t1"), {"general": 1}))

    data = json.loads((tmp_path / "lesson-categories.json").read_text(encoding="utf-8"))
    assert set(data) == {"categories", "categorizationHistory", "lastUpdated"}
    assert data["categories"][0]["totalLessons"] == 1
    assert data["categorizationHistory"] == [{"general": 1}]


def test_prior_entries_carried_over_verbatim(tmp_path: Path) -> None:
    path = tmp_path / "lesson-quality.json"
    legacy = {"timestamp": "old", "custom": "kept"}
    path.write_text(json.dumps({"qualityHistory": [legacy], "validationHistory": []}), encoding="utf-8")

    history = HistoryStore(path, QUALITY)
    history.save(history.append(history.load(), _snapshot("new"), []))

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["qualityHistory"][0] == legacy
    assert data["qualityHistory"][1]["timestamp"] == "new"


def test_corrupt_store_loads_empty(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "lesson-quality.json"
    path.write_text("[1, 2", encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        store = HistoryStore(path, QUALITY).load()

    assert store.history == []
    assert "Failed to load quality data" in caplog.text


def test_wrong_shape_loads_empty(tmp_path: Path) -> None:
    path = tmp_path / "lesson-quality.json"
    path.write_text(json.dumps({"qualityHistory": "nope"}), encoding="utf-8")

    assert HistoryStore(path, QUALITY).load().history == []


def test_unwritable_store_reports_false(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    blocked = tmp_path / "lesson-quality.json"
    blocked.mkdir()

    history = HistoryStore(blocked, QUALITY)
    with caplog.at_level(logging.WARNING):
        assert history.save(StoreData()) is False
    assert "Failed to save quality data" in caplog.text
