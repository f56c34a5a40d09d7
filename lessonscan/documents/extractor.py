"""Heuristic metadata extraction from lesson text.

Every field is classified from the whole text by the keyword tables; YAML
front matter only supplies a title when the text has no level-1 heading.

Each ``extract_*`` helper is a pure function of the text it is given. The one
exception is :func:`extract_date`, which falls back to today's date when the
text carries no ISO date and the caller supplies no fallback.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any

import frontmatter
import yaml

from ..models import LessonRecord
from ..tables import (
    DEFAULT_PHASE,
    DEFAULT_PRIORITY,
    DEFAULT_TABLES,
    UNKNOWN_PROJECT,
    KeywordTables,
    match_keyword_table,
)
from .parser import extract_title, parse_sections

ISO_DATE_PATTERN = re.compile(r"(\d{4}-\d{2}-\d{2})")


def split_front_matter(content: str) -> tuple[dict[str, Any], str]:
    """Split optional YAML front matter from the markdown body.

    A block that is not valid YAML is not front matter: the whole text is body.
    """
    if not content.startswith("---"):
        return {}, content
    try:
        post = frontmatter.loads(content)
    except (yaml.YAMLError, ValueError):
        return {}, content
    return dict(post.metadata), post.content


def extract_date(content: str, fallback: str | None = None) -> str:
    """First YYYY-MM-DD substring, else ``fallback``, else today (UTC)."""
    match = ISO_DATE_PATTERN.search(content)
    if match:
        return match.group(1)
    if fallback:
        return fallback
    return datetime.now(timezone.utc).date().isoformat()


def extract_project(content: str, tables: KeywordTables = DEFAULT_TABLES) -> str:
    # Markers are case-sensitive ("Agent OS", ".agent-os").
    return match_keyword_table(content, tables.project_markers, UNKNOWN_PROJECT)


def extract_phase(content: str, tables: KeywordTables = DEFAULT_TABLES) -> str:
    return match_keyword_table(content.lower(), tables.phase_keywords, DEFAULT_PHASE)


def extract_priority(content: str, tables: KeywordTables = DEFAULT_TABLES) -> str:
    return match_keyword_table(content.lower(), tables.priority_keywords, DEFAULT_PRIORITY)


def extract_tags(content: str, tables: KeywordTables = DEFAULT_TABLES) -> list[str]:
    """Vocabulary terms present in the text, in vocabulary order."""
    lower = content.lower()
    return [tag for tag in tables.tag_vocabulary if tag in lower]


def extract_key_insights(content: str, tables: KeywordTables = DEFAULT_TABLES) -> list[str]:
    return _trigger_lines(content, tables.insight_triggers)


def extract_recommendations(content: str, tables: KeywordTables = DEFAULT_TABLES) -> list[str]:
    return _trigger_lines(content, tables.recommendation_triggers)


def _trigger_lines(content: str, triggers: tuple[str, ...]) -> list[str]:
    # Line granularity, case-sensitive substring match; duplicates kept.
    return [line.strip() for line in content.split("\n") if any(t in line for t in triggers)]


def extract(
    content: str,
    *,
    fallback_title: str,
    filename: str = "",
    fallback_date: str | None = None,
    tables: KeywordTables = DEFAULT_TABLES,
) -> LessonRecord:
    """Extract a LessonRecord from raw lesson text.

    Every heuristic runs over the full text, front matter included. The title
    falls back to a front matter ``title`` and then to ``fallback_title``.
    ``categories`` is left empty; the categorizer fills it.
    """
    return LessonRecord(
        filename=filename,
        title=extract_title(content) or _front_matter_title(content) or fallback_title,
        date=extract_date(content, fallback_date),
        project=extract_project(content, tables),
        phase=extract_phase(content, tables),
        priority=extract_priority(content, tables),
        tags=extract_tags(content, tables),
        sections=parse_sections(content, tables),
        key_insights=extract_key_insights(content, tables),
        recommendations=extract_recommendations(content, tables),
    )


def _front_matter_title(content: str) -> str | None:
    meta, _ = split_front_matter(content)
    title = meta.get("title")
    if isinstance(title, str) and title.strip():
        return title.strip()
    return None
