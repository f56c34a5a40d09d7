"""Template generation and template checking commands."""

from pathlib import Path

from rich.console import Console

from ..tables import DEFAULT_TABLES, KeywordTables
from ..templates import available_templates, validate_template, write_templates


def run_templates(out_dir: Path, tables: KeywordTables = DEFAULT_TABLES) -> int:
    """Write the lesson template set under ``out_dir``."""
    console = Console(stderr=True)

    written = write_templates(out_dir, tables=tables)
    for path in written:
        console.print(f"Generated template: {path}", style="dim")

    expected = len(tables.template_definitions)
    if len(written) < expected:
        console.print(f"✗ Generated {len(written)} of {expected} templates", style="bold red")
        return 1

    console.print(f"✓ Generated {len(written)} templates in {out_dir}", style="green")
    return 0


def run_list_templates(out_dir: Path, tables: KeywordTables = DEFAULT_TABLES) -> int:
    """List template files already generated under ``out_dir``."""
    console = Console(stderr=True)

    found = available_templates(out_dir, tables)
    if not found:
        console.print(f"No templates in {out_dir}", style="yellow")
        return 1

    for path in found:
        console.print(f"{path.parent.name}/{path.name}")
    console.print(f"✓ {len(found)} templates in {out_dir}", style="green")
    return 0


def run_check_template(path: Path, tables: KeywordTables = DEFAULT_TABLES) -> int:
    """Check a template (or lesson) for required headings and header fields."""
    console = Console(stderr=True)

    result = validate_template(path, tables)
    if result.is_valid:
        console.print(f"✓ {path.name} has all required sections and fields", style="green")
        return 0

    console.print(f"✗ {path.name}: {result.error_count} problem(s)", style="bold red")
    for error in result.errors:
        console.print(f"  - {error}")
    return 1
