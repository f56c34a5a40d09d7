"""Markdown parsing utilities for titles and sections."""

import re

from ..tables import DEFAULT_TABLES, KeywordTables

SECTION_MARKER = "## "
TITLE_MARKER = "# "


def extract_title(content: str) -> str | None:
    """Return the text of the first level-1 heading, or None."""
    for line in content.split("\n"):
        if line.startswith(TITLE_MARKER):
            title = line[len(TITLE_MARKER):].strip()
            if title:
                return title
    return None


def normalize_section_name(heading: str, tables: KeywordTables = DEFAULT_TABLES) -> str:
    """Map a heading to its canonical section key.

    Known headings go through the synonym table ("Action Taken" -> actionTaken,
    also "ActionTaken"); anything else is lowercased with whitespace removed.
    """
    normalized = heading.lower().strip()
    if normalized in tables.section_synonyms:
        return tables.section_synonyms[normalized]

    compact = re.sub(r"\s+", "", normalized)
    for synonym, canonical in tables.section_synonyms.items():
        if re.sub(r"\s+", "", synonym) == compact:
            return canonical
    return compact


def parse_sections(content: str, tables: KeywordTables = DEFAULT_TABLES) -> dict[str, str]:
    """Split content into sections keyed by canonical ``## `` heading name.

    A section body runs until the next ``## `` heading or end of document.
    Text before the first heading is not part of any section. When a heading
    repeats, the later body wins.
    """
    sections: dict[str, str] = {}
    current: str | None = None
    body: list[str] = []

    for line in content.split("\n"):
        if line.startswith(SECTION_MARKER):
            if current is not None:
                sections[current] = "\n".join(body).strip()
            current = normalize_section_name(line[len(SECTION_MARKER):], tables)
            body = []
        elif current is not None:
            body.append(line)

    if current is not None:
        sections[current] = "\n".join(body).strip()

    return sections
