"""Deterministic scorers: quality, categories and impact."""

from .categorize import categorize, category_stats, lessons_in_category, related_lessons
from .impact import impact_dimensions, impact_metrics, impact_recommendations, score_impact
from .quality import clamp_score, quality_recommendations, score_quality

__all__ = [
    "categorize",
    "category_stats",
    "lessons_in_category",
    "related_lessons",
    "impact_dimensions",
    "impact_metrics",
    "impact_recommendations",
    "score_impact",
    "clamp_score",
    "quality_recommendations",
    "score_quality",
]
