"""Multi-label lesson categorization over the category keyword table."""

from __future__ import annotations

from ..models import LessonAnalysis, LessonRecord
from ..tables import DEFAULT_CATEGORY, DEFAULT_PHASE, DEFAULT_TABLES, KeywordTables


def categorize(content: str, record: LessonRecord, tables: KeywordTables = DEFAULT_TABLES) -> list[str]:
    """Assign category labels; never returns an empty list.

    Order is keyword-table order, then the priority label, then the phase.
    """
    lower = content.lower()
    categories: list[str] = []

    def add(label: str) -> None:
        if label not in categories:
            categories.append(label)

    for category, keywords in tables.category_keywords:
        if any(keyword in lower for keyword in keywords):
            add(category)

    priority_label = tables.priority_categories.get(record.priority)
    if priority_label:
        add(priority_label)

    if record.phase and record.phase != DEFAULT_PHASE:
        add(record.phase)

    return categories or [DEFAULT_CATEGORY]


def category_stats(analyses: list[LessonAnalysis]) -> dict[str, int]:
    """Lesson count per category, in first-seen order."""
    stats: dict[str, int] = {}
    for analysis in analyses:
        for category in analysis.record.categories:
            stats[category] = stats.get(category, 0) + 1
    return stats


def lessons_in_category(category: str, analyses: list[LessonAnalysis]) -> list[LessonAnalysis]:
    return [a for a in analyses if category in a.record.categories]


def related_lessons(target: str, analyses: list[LessonAnalysis], limit: int = 5) -> list[LessonAnalysis]:
    """Other lessons sharing categories with ``target`` (a filename), most shared first."""
    by_name = {a.filename: a for a in analyses}
    anchor = by_name.get(target)
    if anchor is None:
        return []

    wanted = set(anchor.record.categories)
    scored = []
    for analysis in analyses:
        if analysis.filename == target:
            continue
        shared = len(wanted.intersection(analysis.record.categories))
        if shared:
            scored.append((shared, analysis))

    scored.sort(key=lambda item: item[0], reverse=True)
    return [analysis for _, analysis in scored[:limit]]
