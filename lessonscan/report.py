"""Run-level reports built from the current batch.

Reports are pure functions of a list of analyses; persisted history is never
consulted. Each report carries ``summary``, ``distribution``, ``trends`` and
``topLessons`` sections.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from .analysis.categorize import category_stats
from .models import LessonAnalysis
from .tables import DEFAULT_TABLES, KeywordTables

logger = logging.getLogger(__name__)

Scorer = Callable[[LessonAnalysis], int]

CATEGORIZATION_REPORT = "categorization-report.json"
QUALITY_REPORT = "quality-report.json"
IMPACT_REPORT = "impact-report.json"

HIGH_QUALITY = 80
LOW_QUALITY = 60


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def mean_score(scores: Iterable[int]) -> int:
    """Rounded mean, 0 for no scores."""
    values = list(scores)
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))


def quality_of(analysis: LessonAnalysis) -> int:
    return analysis.quality_score


def impact_of(analysis: LessonAnalysis) -> int:
    return analysis.impact_score


def band_distribution(scores: Iterable[int], bands: tuple[tuple[str, int], ...]) -> dict[str, int]:
    """Count scores per named band; bands are (label, inclusive lower bound), highest first."""
    distribution = {label: 0 for label, _ in bands}
    for score in scores:
        for label, lower in bands:
            if score >= lower:
                distribution[label] += 1
                break
    return distribution


def top_lessons(
    analyses: list[LessonAnalysis],
    score: Scorer,
    limit: int,
    fields: tuple[str, ...] = ("filename", "title", "phase", "priority"),
    score_key: str = "score",
) -> list[dict[str, Any]]:
    """Highest-scoring lessons; ties keep discovery order."""
    ranked = sorted(analyses, key=score, reverse=True)
    result = []
    for analysis in ranked[:limit]:
        summary = analysis.summary()
        entry = {name: summary[name] for name in fields}
        entry[score_key] = score(analysis)
        result.append(entry)
    return result


def grouped_means(
    analyses: list[LessonAnalysis],
    score: Scorer,
    key: Callable[[LessonAnalysis], Iterable[Any]],
) -> dict[str, int]:
    """Mean score per group; a lesson may belong to several groups."""
    totals: dict[str, list[int]] = {}
    for analysis in analyses:
        for group in key(analysis):
            totals.setdefault(str(group), []).append(score(analysis))
    return {group: mean_score(values) for group, values in totals.items()}


def by_phase(analysis: LessonAnalysis) -> list[str]:
    return [analysis.record.phase]


def by_priority(analysis: LessonAnalysis) -> list[str]:
    return [analysis.record.priority]


def by_category(analysis: LessonAnalysis) -> list[str]:
    return list(analysis.record.categories)


def by_section_count(analysis: LessonAnalysis) -> list[int]:
    return [len(analysis.record.sections)]


def score_trends(analyses: list[LessonAnalysis], score: Scorer) -> dict[str, dict[str, int]]:
    return {
        "byPhase": grouped_means(analyses, score, by_phase),
        "byPriority": grouped_means(analyses, score, by_priority),
        "byCategory": grouped_means(analyses, score, by_category),
        "bySection": grouped_means(analyses, score, by_section_count),
    }


def average_impact_metrics(analyses: list[LessonAnalysis], tables: KeywordTables = DEFAULT_TABLES) -> dict[str, int]:
    """Per-dimension mean of the binary impact metrics."""
    dimensions = [dimension for dimension, _ in tables.impact_dimension_keywords]
    return {
        dimension: mean_score(a.impact_metrics.get(dimension, 0) for a in analyses)
        for dimension in dimensions
    }


def validation_errors(analyses: list[LessonAnalysis]) -> list[dict[str, Any]]:
    return [
        {"filename": a.filename, "errors": list(a.validation.errors)}
        for a in analyses
        if not a.validation.is_valid
    ]


# -----------------------------------------------------------------------------
# Reports
# -----------------------------------------------------------------------------


def build_categorization_report(
    analyses: list[LessonAnalysis],
    *,
    total_lessons: int,
    generated_at: str,
    top_n: int = 5,
) -> dict[str, Any]:
    stats = category_stats(analyses)
    top_categories = sorted(stats.items(), key=lambda item: item[1], reverse=True)[:top_n]
    scores = [quality_of(a) for a in analyses]

    return {
        "generatedAt": generated_at,
        "summary": {
            "totalLessons": total_lessons,
            "categorizedLessons": len(analyses),
            "categories": len(stats),
            "topCategories": [{"category": c, "count": n} for c, n in top_categories],
        },
        "distribution": stats,
        "lessonQuality": {
            "averageQuality": mean_score(scores),
            "highQualityLessons": sum(1 for s in scores if s >= HIGH_QUALITY),
            "lowQualityLessons": sum(1 for s in scores if s < LOW_QUALITY),
            "totalLessons": len(scores),
        },
        "trends": {
            "byCategory": grouped_means(analyses, quality_of, by_category),
            "byPhase": grouped_means(analyses, quality_of, by_phase),
            "byPriority": grouped_means(analyses, quality_of, by_priority),
        },
        "topLessons": top_lessons(
            analyses,
            quality_of,
            top_n * 2,
            fields=("filename", "title", "categories", "priority"),
            score_key="qualityScore",
        ),
    }


def build_quality_report(
    analyses: list[LessonAnalysis],
    *,
    total_lessons: int,
    generated_at: str,
    top_n: int = 5,
    tables: KeywordTables = DEFAULT_TABLES,
) -> dict[str, Any]:
    errors = validation_errors(analyses)
    return {
        "generatedAt": generated_at,
        "summary": {
            "totalLessons": total_lessons,
            "validatedLessons": len(analyses),
            "averageQualityScore": mean_score(quality_of(a) for a in analyses),
            "validationErrors": len(errors),
        },
        "distribution": band_distribution((quality_of(a) for a in analyses), tables.quality_bands),
        "validationErrors": errors,
        "trends": score_trends(analyses, quality_of),
        "topLessons": top_lessons(analyses, quality_of, top_n, score_key="qualityScore"),
    }


def build_impact_report(
    analyses: list[LessonAnalysis],
    *,
    total_lessons: int,
    generated_at: str,
    top_n: int = 5,
    tables: KeywordTables = DEFAULT_TABLES,
) -> dict[str, Any]:
    return {
        "generatedAt": generated_at,
        "summary": {
            "totalLessons": total_lessons,
            "analyzedLessons": len(analyses),
            "averageImpactScore": mean_score(impact_of(a) for a in analyses),
        },
        "distribution": band_distribution((impact_of(a) for a in analyses), tables.impact_bands),
        "impactMetrics": average_impact_metrics(analyses, tables),
        "trends": score_trends(analyses, impact_of),
        "topLessons": top_lessons(analyses, impact_of, top_n, score_key="impactScore"),
    }


def write_report(report: dict[str, Any], path: Path) -> bool:
    """Write a report as JSON. A write failure is logged and reported as False."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(report, indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        logger.warning("Failed to write report %s: %s", path, e)
        return False
    logger.info("Generated report: %s", path)
    return True
