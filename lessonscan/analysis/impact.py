"""
Impact analysis for lesson records.

Two outputs from the same inputs:

- a scalar impact score (base 50 plus priority, phase and content-signal
  bonuses, clamped to 0-100)
- five binary dimension metrics (technical, process, project, quality,
  adoption), each 25 on a keyword hit and 0 otherwise

Averaging dimensions across lessons happens in the report, not here.
"""

from __future__ import annotations

from ..models import LessonAnalysis, LessonRecord
from ..tables import DEFAULT_TABLES, DIMENSION_HIT_SCORE, KeywordTables
from .quality import clamp_score, has_code_block, has_emphasis

BASE_SCORE = 50
INSIGHTS_BONUS = 10
RECOMMENDATIONS_BONUS = 10
DIMENSIONS_BONUS = 5
TAGS_BONUS = 5
DETAIL_BONUS = 5
LONG_CONTENT = 1000


def impact_metrics(content: str, tables: KeywordTables = DEFAULT_TABLES) -> dict[str, int]:
    lower = content.lower()
    return {
        dimension: DIMENSION_HIT_SCORE if any(keyword in lower for keyword in keywords) else 0
        for dimension, keywords in tables.impact_dimension_keywords
    }


def impact_dimensions(content: str, tables: KeywordTables = DEFAULT_TABLES) -> list[str]:
    """Dimension labels with a keyword hit, in table order; these drive the category bonus."""
    lower = content.lower()
    return [
        dimension
        for dimension, keywords in tables.impact_category_keywords
        if any(keyword in lower for keyword in keywords)
    ]


def score_impact(
    content: str,
    record: LessonRecord,
    dimensions: list[str],
    tables: KeywordTables = DEFAULT_TABLES,
) -> int:
    score = BASE_SCORE

    score += tables.priority_weights.get(record.priority, 0)
    score += tables.phase_weights.get(record.phase, 0)

    if record.key_insights:
        score += INSIGHTS_BONUS
    if record.recommendations:
        score += RECOMMENDATIONS_BONUS
    if dimensions:
        score += DIMENSIONS_BONUS
    if record.tags:
        score += TAGS_BONUS

    # Signal terms are case-sensitive: "Critical" does not count.
    for keywords, bonus in tables.impact_signals:
        if any(keyword in content for keyword in keywords):
            score += bonus

    if len(content) > LONG_CONTENT:
        score += DETAIL_BONUS
    if has_code_block(content):
        score += DETAIL_BONUS
    if has_emphasis(content):
        score += DETAIL_BONUS

    return clamp_score(score)


def impact_recommendations(analysis: LessonAnalysis) -> list[str]:
    """Hints for raising the impact of one analyzed lesson."""
    record = analysis.record
    hints = []
    if analysis.impact_score < 60:
        hints.append("Add more actionable recommendations to increase lesson impact")
    if len(record.key_insights) < 2:
        hints.append("Add more key insights to make the lesson more impactful")
    if len(record.recommendations) < 2:
        hints.append("Add more specific recommendations for future implementation")
    if len(record.categories) < 2:
        hints.append("Add more categories to increase lesson discoverability and impact")
    return hints
