import json
from pathlib import Path

import pytest

from lessonscan.models import LessonAnalysis
from lessonscan.pipeline import analyze_content
from lessonscan.report import (
    band_distribution,
    build_categorization_report,
    build_impact_report,
    build_quality_report,
    mean_score,
    quality_of,
    round_half_up,
    top_lessons,
    write_report,
)
from lessonscan.schema.schema import ValidationSchema
from lessonscan.tables import IMPACT_BANDS, QUALITY_BANDS


@pytest.fixture
def analyses(
    schema: ValidationSchema, full_lesson: str, deploy_lesson: str, testing_lesson: str
) -> list[LessonAnalysis]:
    return [
        analyze_content(full_lesson, filename="full.md", schema=schema),
        analyze_content(deploy_lesson, filename="deploy.md", schema=schema),
        analyze_content(testing_lesson, filename="testing.md", schema=schema),
        analyze_content("", filename="empty.md", schema=schema),
    ]


def test_rounding() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4) == 2
    assert mean_score([1, 2]) == 2
    assert mean_score([]) == 0


def test_band_distribution() -> None:
    assert band_distribution([95, 90, 85, 75, 65, 10], QUALITY_BANDS) == {
        "excellent": 2,
        "good": 1,
        "fair": 1,
        "poor": 1,
        "failing": 1,
    }
    assert band_distribution([80, 79, 40, 0], IMPACT_BANDS) == {"high": 1, "medium": 1, "low": 1, "minimal": 1}


def test_top_lessons_limit_and_order(analyses: list[LessonAnalysis]) -> None:
    top = top_lessons(analyses, quality_of, 2, score_key="qualityScore")

    assert len(top) == 2
    assert top[0]["filename"] == "full.md"
    assert top[0]["qualityScore"] >= top[1]["qualityScore"]


def test_critical_priority_outranks_low(schema: ValidationSchema, deploy_lesson: str, testing_lesson: str) -> None:
    analyses = [
        analyze_content(deploy_lesson, filename="deploy.md", schema=schema),
        analyze_content(testing_lesson, filename="testing.md", schema=schema),
    ]
    report = build_impact_report(analyses, total_lessons=2, generated_at="now")

    by_priority = report["trends"]["byPriority"]
    assert by_priority["critical"] > by_priority["low"]


def test_quality_report(analyses: list[LessonAnalysis]) -> None:
    report = build_quality_report(analyses, total_lessons=5, generated_at="2024-01-01T00:00:00+00:00")

    assert report["summary"]["totalLessons"] == 5
    assert report["summary"]["validatedLessons"] == 4
    assert sum(report["distribution"].values()) == 4
    assert {entry["filename"] for entry in report["validationErrors"]} == {"deploy.md", "testing.md", "empty.md"}
    assert set(report["trends"]) == {"byPhase", "byPriority", "byCategory", "bySection"}
    assert report["topLessons"][0]["filename"] == "full.md"


def test_categorization_report(analyses: list[LessonAnalysis]) -> None:
    report = build_categorization_report(analyses, total_lessons=4, generated_at="now", top_n=1)

    assert report["summary"]["categorizedLessons"] == 4
    assert len(report["summary"]["topCategories"]) == 1
    assert report["distribution"]["general"] == 1
    assert report["lessonQuality"]["totalLessons"] == 4
    assert len(report["topLessons"]) == 2


def test_impact_report_metrics(analyses: list[LessonAnalysis]) -> None:
    report = build_impact_report(analyses, total_lessons=4, generated_at="now")

    assert set(report["impactMetrics"]) == {"technical", "process", "project", "quality", "adoption"}
    assert all(0 <= value <= 25 for value in report["impactMetrics"].values())
    assert sum(report["distribution"].values()) == 4


def test_write_report(tmp_path: Path) -> None:
    path = tmp_path / "reports" / "quality-report.json"

    assert write_report({"summary": {}}, path)
    assert json.loads(path.read_text(encoding="utf-8")) == {"summary": {}}
