"""Blank lesson templates and a structural template check.

Required headings and header fields are read from the same tables that build
the default validation schema, so templates and validation cannot drift.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from .models import ValidationResult
from .tables import DEFAULT_TABLES, KeywordTables, TemplateDefinition

logger = logging.getLogger(__name__)

TEMPLATE_VERSION = "1.0"

PLACEHOLDERS = {
    "Project": "[Project Name]",
    "Phase": "[planning/development/testing/deployment/maintenance]",
    "Priority": "[critical/high/medium/low]",
}


def _heading(name: str, tables: KeywordTables) -> tuple[str, str]:
    return tables.section_headings.get(name, (name, f"[{name}]"))


def generate_template(
    definition: TemplateDefinition,
    *,
    today: str | None = None,
    generated_at: str | None = None,
    tables: KeywordTables = DEFAULT_TABLES,
) -> str:
    """Render a blank lesson: header block, sections, tag list, footer."""
    now = datetime.now(timezone.utc)
    today = today or now.date().isoformat()
    generated_at = generated_at or now.isoformat()

    lines = [f"# {definition.title}", ""]
    for name in tables.header_fields:
        value = today if name == "Date" else PLACEHOLDERS.get(name, f"[{name}]")
        # Two trailing spaces keep the header block on separate lines when rendered.
        lines.append(f"**{name}**: {value}  ")
    lines.append("")

    for name in definition.sections:
        heading, placeholder = _heading(name, tables)
        lines.extend([f"## {heading}", placeholder, ""])

    lines.append("## Tags")
    lines.extend(f"- {tag}" for tag in definition.tags)
    lines.extend(
        [
            "",
            "---",
            f"**Template Type**: {definition.type}  ",
            f"**Generated**: {generated_at}  ",
            f"**Version**: {TEMPLATE_VERSION}  ",
            "",
        ]
    )
    return "\n".join(lines)


def create_from_template(template: str, data: dict[str, object]) -> str:
    """Replace each ``[key]`` token with its value, verbatim."""
    content = template
    for key, value in data.items():
        content = content.replace(f"[{key}]", str(value))
    return content


def check_template(content: str, tables: KeywordTables = DEFAULT_TABLES) -> ValidationResult:
    """Structural check: required ``## `` headings and ``**Field**:`` headers present."""
    errors = []
    for name in tables.required_sections:
        heading = f"## {_heading(name, tables)[0]}"
        if heading not in content:
            errors.append(f"Missing required section: {heading}")

    for name in tables.header_fields:
        if f"**{name}**:" not in content:
            errors.append(f"Missing {name.lower()} field")

    return ValidationResult(errors=errors)


def validate_template(path: Path, tables: KeywordTables = DEFAULT_TABLES) -> ValidationResult:
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return ValidationResult(errors=[f"Failed to read template: {e}"])
    return check_template(content, tables)


def write_templates(
    out_dir: Path,
    *,
    today: str | None = None,
    tables: KeywordTables = DEFAULT_TABLES,
) -> list[Path]:
    """Write one template per definition to ``<out_dir>/<type>/<name>``."""
    written = []
    for definition in tables.template_definitions:
        path = out_dir / definition.type / definition.name
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(generate_template(definition, today=today, tables=tables), encoding="utf-8")
        except OSError as e:
            logger.warning("Failed to generate template %s: %s", definition.name, e)
            continue
        logger.info("Generated template: %s", path)
        written.append(path)
    return written


def available_templates(out_dir: Path, tables: KeywordTables = DEFAULT_TABLES) -> list[Path]:
    """Template files already present under ``out_dir``, grouped by type."""
    found = []
    for definition in tables.template_definitions:
        type_dir = out_dir / definition.type
        if type_dir.is_dir():
            found.extend(sorted(p for p in type_dir.iterdir() if p.suffix == ".md"))
    return found
