"""
Lessons-learned analysis pipeline.

One run: discover lesson files, analyze each one (extract, parse sections,
validate, score quality, categorize, analyze impact), fold the analyses into
a batch, append one snapshot per analysis type to the history stores, and
write the three run reports.

Per-document analysis is pure and independent. With ``workers > 1`` it runs
in a bounded thread pool; folding results into the batch and writing history
always happen on the calling thread, in discovery order.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .analysis.categorize import categorize, category_stats
from .analysis.impact import impact_dimensions, impact_metrics, score_impact
from .analysis.quality import score_quality
from .config import PipelineConfig
from .documents.extractor import extract
from .documents.scanner import discover, read_document
from .history import CATEGORIZATION, IMPACT, QUALITY, HistorySnapshot, HistoryStore, StoreLayout, utc_now
from .models import BatchResult, LessonAnalysis
from .report import (
    CATEGORIZATION_REPORT,
    IMPACT_REPORT,
    QUALITY_REPORT,
    average_impact_metrics,
    build_categorization_report,
    build_impact_report,
    build_quality_report,
    mean_score,
    validation_errors,
    write_report,
)
from .schema.load import load_or_create_schema
from .schema.schema import ValidationSchema
from .schema.validator import validate
from .tables import DEFAULT_TABLES, KeywordTables

logger = logging.getLogger(__name__)


def analyze_content(
    content: str,
    *,
    filename: str,
    schema: ValidationSchema,
    fallback_date: str | None = None,
    tables: KeywordTables = DEFAULT_TABLES,
) -> LessonAnalysis:
    """Analyze one lesson's text. Pure apart from the documented date fallback."""
    record = extract(
        content,
        fallback_title=Path(filename).stem,
        filename=filename,
        fallback_date=fallback_date,
        tables=tables,
    )
    validation = validate(record, schema)

    # Independent scorers: none reads another's output.
    quality = score_quality(content, record, record.sections, validation, tables)
    categories = categorize(content, record, tables)
    dimensions = impact_dimensions(content, tables)
    impact = score_impact(content, record, dimensions, tables)

    record.categories = categories
    return LessonAnalysis(
        record=record,
        validation=validation,
        quality_score=quality,
        impact_score=impact,
        impact_metrics=impact_metrics(content, tables),
        impact_dimensions=dimensions,
    )


def _mtime_date(path: Path) -> str:
    return datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc).date().isoformat()


def analyze_document(path: Path, schema: ValidationSchema, config: PipelineConfig) -> LessonAnalysis:
    document = read_document(path)
    fallback_date = _mtime_date(path) if config.date_fallback == "mtime" else None
    return analyze_content(
        document.raw_content,
        filename=document.filename,
        schema=schema,
        fallback_date=fallback_date,
        tables=config.tables,
    )


def analyze_batch(paths: list[Path], schema: ValidationSchema, config: PipelineConfig) -> BatchResult:
    """Analyze every path; a failing document is logged and left out of the batch."""
    batch = BatchResult(total_files=len(paths), timestamp=utc_now())

    def attempt(path: Path) -> tuple[Path, LessonAnalysis | None, Exception | None]:
        try:
            return path, analyze_document(path, schema, config), None
        except Exception as e:
            return path, None, e

    if config.workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=config.workers) as pool:
            outcomes = list(pool.map(attempt, paths))
    else:
        outcomes = [attempt(path) for path in paths]

    for path, analysis, error in outcomes:
        if error is not None:
            logger.warning("Failed to analyze %s: %s", path.name, error)
            batch.failures[path.name] = str(error)
            continue
        batch.analyses.append(analysis)

    return batch


# -----------------------------------------------------------------------------
# History snapshots
# -----------------------------------------------------------------------------


def categorization_snapshot(batch: BatchResult) -> tuple[HistorySnapshot, dict[str, int]]:
    stats = category_stats(batch.analyses)
    snapshot = HistorySnapshot(
        timestamp=batch.timestamp,
        total_lessons=batch.total_files,
        aggregate_stats={"categoryStats": stats, "categorizedLessons": batch.analyzed},
        per_lesson_summaries=[
            {"filename": a.filename, "categories": list(a.record.categories)} for a in batch.analyses
        ],
    )
    return snapshot, stats


def quality_snapshot(batch: BatchResult) -> tuple[HistorySnapshot, list[dict[str, Any]]]:
    errors = validation_errors(batch.analyses)
    snapshot = HistorySnapshot(
        timestamp=batch.timestamp,
        total_lessons=batch.total_files,
        aggregate_stats={
            "averageQualityScore": mean_score(a.quality_score for a in batch.analyses),
            "validationErrors": len(errors),
            "qualityScores": [a.quality_score for a in batch.analyses],
        },
        per_lesson_summaries=[
            {"filename": a.filename, "qualityScore": a.quality_score, "isValid": a.validation.is_valid}
            for a in batch.analyses
        ],
    )
    return snapshot, errors


def impact_snapshot(batch: BatchResult, tables: KeywordTables) -> tuple[HistorySnapshot, dict[str, int]]:
    metrics = average_impact_metrics(batch.analyses, tables)
    snapshot = HistorySnapshot(
        timestamp=batch.timestamp,
        total_lessons=batch.total_files,
        aggregate_stats={
            "averageImpactScore": mean_score(a.impact_score for a in batch.analyses),
            "impactScores": [a.impact_score for a in batch.analyses],
            "impactMetrics": metrics,
        },
        per_lesson_summaries=[
            {"filename": a.filename, "impactScore": a.impact_score, "impactMetrics": dict(a.impact_metrics)}
            for a in batch.analyses
        ],
    )
    return snapshot, metrics


def record_history(batch: BatchResult, config: PipelineConfig) -> dict[str, int]:
    """Append one snapshot per analysis type. Returns history length per store."""
    entries: list[tuple[StoreLayout, tuple[HistorySnapshot, Any]]] = [
        (CATEGORIZATION, categorization_snapshot(batch)),
        (QUALITY, quality_snapshot(batch)),
        (IMPACT, impact_snapshot(batch, config.tables)),
    ]

    lengths = {}
    for layout, (snapshot, secondary) in entries:
        history = HistoryStore.in_dir(config.reports_dir, layout)
        store = history.append(history.load(), snapshot, secondary)
        history.save(store)
        lengths[layout.name] = len(store.history)
    return lengths


def write_reports(batch: BatchResult, config: PipelineConfig) -> dict[str, dict[str, Any]]:
    common = {"total_lessons": batch.total_files, "generated_at": batch.timestamp, "top_n": config.top_n}
    reports = {
        CATEGORIZATION_REPORT: build_categorization_report(batch.analyses, **common),
        QUALITY_REPORT: build_quality_report(batch.analyses, tables=config.tables, **common),
        IMPACT_REPORT: build_impact_report(batch.analyses, tables=config.tables, **common),
    }
    for filename, report in reports.items():
        write_report(report, config.reports_dir / filename)
    return reports


# -----------------------------------------------------------------------------
# Entry point
# -----------------------------------------------------------------------------


def analyze_directory(config: PipelineConfig) -> BatchResult:
    """Analyze every lesson in the lessons directory without touching history or reports."""
    lessons_dir = config.lessons_dir
    if lessons_dir.exists() and not lessons_dir.is_dir():
        raise NotADirectoryError(f"Lessons path is not a directory: {lessons_dir}")

    schema = load_or_create_schema(config.schema_path, config.tables)

    paths = discover(lessons_dir)
    logger.info("Found %d lesson files in %s", len(paths), lessons_dir)

    return analyze_batch(paths, schema, config)


def execute_pipeline(config: PipelineConfig) -> BatchResult:
    """Run the pipeline and return the batch. Raises on top-level failure."""
    batch = analyze_directory(config)
    record_history(batch, config)
    write_reports(batch, config)
    return batch


def run_pipeline(config: PipelineConfig) -> dict[str, Any]:
    """Run the pipeline and summarize it; failures become ``{"success": False, "error": ...}``."""
    try:
        batch = execute_pipeline(config)
    except Exception as e:
        logger.error("Lesson analysis failed: %s", e)
        return {"success": False, "error": str(e)}

    return {
        "success": True,
        "totalLessons": batch.total_files,
        "analyzedLessons": batch.analyzed,
        "failedLessons": len(batch.failures),
        "categories": len(category_stats(batch.analyses)),
        "averageQualityScore": mean_score(a.quality_score for a in batch.analyses),
        "averageImpactScore": mean_score(a.impact_score for a in batch.analyses),
    }
