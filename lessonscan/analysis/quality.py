"""
Quality scoring for lesson records.

The score measures schema compliance and content completeness on a 0-100
scale. It is a weighted sum from a base of 60; the clamp is applied last
because the unclamped sum routinely exceeds 100.
"""

from __future__ import annotations

from ..models import LessonAnalysis, LessonRecord, ValidationResult
from ..tables import DEFAULT_PHASE, DEFAULT_TABLES, UNKNOWN_PROJECT, KeywordTables

BASE_SCORE = 60
VALID_BONUS = 20
ERROR_PENALTY = 5
SECTION_BONUS = 8
SECTION_MIN_CHARS = 10  # strictly longer than this
METADATA_BONUS = 5
INSIGHTS_BONUS = 10
RECOMMENDATIONS_BONUS = 10
TAGS_BONUS = 5
CODE_BLOCK_BONUS = 5
EMPHASIS_BONUS = 5
LENGTH_BONUS = 5
LENGTH_THRESHOLDS = (500, 1000)


def clamp_score(score: int) -> int:
    return max(0, min(100, score))


def has_code_block(content: str) -> bool:
    return "```" in content


def has_emphasis(content: str) -> bool:
    # "**" implies "*"
    return "*" in content


def populated_metadata_count(record: LessonRecord) -> int:
    """Core metadata fields carrying a real value."""
    checks = (
        bool(record.title) and record.title != "Unknown",
        bool(record.date),
        bool(record.project) and record.project != UNKNOWN_PROJECT,
        bool(record.phase) and record.phase != DEFAULT_PHASE,
        bool(record.priority),
    )
    return sum(checks)


def score_quality(
    content: str,
    record: LessonRecord,
    sections: dict[str, str],
    validation: ValidationResult,
    tables: KeywordTables = DEFAULT_TABLES,
) -> int:
    score = BASE_SCORE

    if validation.is_valid:
        score += VALID_BONUS
    else:
        score -= ERROR_PENALTY * validation.error_count

    for name in tables.required_sections:
        body = sections.get(name)
        if body and len(body) > SECTION_MIN_CHARS:
            score += SECTION_BONUS

    score += METADATA_BONUS * populated_metadata_count(record)

    if record.key_insights:
        score += INSIGHTS_BONUS
    if record.recommendations:
        score += RECOMMENDATIONS_BONUS
    if record.tags:
        score += TAGS_BONUS

    if has_code_block(content):
        score += CODE_BLOCK_BONUS
    if has_emphasis(content):
        score += EMPHASIS_BONUS

    for threshold in LENGTH_THRESHOLDS:
        if len(content) > threshold:
            score += LENGTH_BONUS

    return clamp_score(score)


def quality_recommendations(analysis: LessonAnalysis, tables: KeywordTables = DEFAULT_TABLES) -> list[str]:
    """Improvement hints for one analyzed lesson."""
    record = analysis.record
    hints = []

    if analysis.quality_score < 70:
        hints.append("Add more detailed sections to improve lesson quality")
    if not analysis.validation.is_valid:
        hints.append("Fix validation errors to improve lesson compliance")

    missing = [name for name in tables.required_sections if name not in record.sections]
    if missing:
        headings = ", ".join(tables.section_headings.get(name, (name, ""))[0] for name in missing)
        hints.append(f"Add missing required sections ({headings})")

    if len(record.key_insights) < 2:
        hints.append("Add more key insights to make the lesson more valuable")
    if len(record.recommendations) < 2:
        hints.append("Add more actionable recommendations")

    return hints
