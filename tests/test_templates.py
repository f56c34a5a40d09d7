from pathlib import Path

from lessonscan.pipeline import analyze_content
from lessonscan.schema.schema import ValidationSchema
from lessonscan.tables import DEFAULT_TABLES, TEMPLATE_DEFINITIONS
from lessonscan.templates import (
    available_templates,
    check_template,
    create_from_template,
    generate_template,
    validate_template,
    write_templates,
)

TECHNICAL = TEMPLATE_DEFINITIONS[0]


def _fill_values() -> dict[str, str]:
    values = {
        "Project Name": "Agent OS",
        "planning/development/testing/deployment/maintenance": "development",
        "critical/high/medium/low": "high",
    }
    for heading, placeholder in DEFAULT_TABLES.section_headings.values():
        values[placeholder[1:-1]] = f"Filled-in notes for the {heading} section."
    return values


def test_generated_template_layout() -> None:
    content = generate_template(TECHNICAL, today="2024-03-15", generated_at="2024-03-15T00:00:00+00:00")
    lines = content.split("\n")

    assert lines[0] == "# Technical Lesson Template"
    assert "**Date**: 2024-03-15  " in lines
    assert "## Follow-up Actions" in lines
    assert "- implementation" in lines
    assert "**Template Type**: technical  " in lines


def test_generated_templates_pass_check() -> None:
    for definition in TEMPLATE_DEFINITIONS:
        assert check_template(generate_template(definition, today="2024-03-15")).is_valid


def test_check_template_reports_missing_parts() -> None:
    result = check_template("# Draft\n\n## Context\nsomething\n")

    assert "Missing required section: ## Action Taken" in result.errors
    assert "Missing date field" in result.errors
    assert "Missing required section: ## Context" not in result.errors


def test_create_from_template_is_literal() -> None:
    assert create_from_template("a [x.y] b [x.y]", {"x.y": "1"}) == "a 1 b 1"


def test_filled_template_validates(schema: ValidationSchema) -> None:
    template = generate_template(TECHNICAL, today="2024-03-15")
    lesson = create_from_template(template, _fill_values())

    analysis = analyze_content(lesson, filename="filled.md", schema=schema)

    assert analysis.validation.errors == []
    assert analysis.record.phase == "development"
    assert analysis.record.priority == "high"
    assert analysis.record.date == "2024-03-15"


def test_write_and_list_templates(tmp_path: Path) -> None:
    written = write_templates(tmp_path, today="2024-03-15")

    assert len(written) == len(TEMPLATE_DEFINITIONS)
    assert (tmp_path / "critical" / "critical-lesson-template.md").exists()
    assert sorted(available_templates(tmp_path)) == sorted(written)
    assert validate_template(written[0]).is_valid


def test_validate_template_unreadable(tmp_path: Path) -> None:
    result = validate_template(tmp_path / "missing.md")

    assert result.error_count == 1
    assert result.errors[0].startswith("Failed to read template")
