"""Read-only views over the current lessons: category members and related lessons."""

from rich.console import Console
from rich.table import Table

from ..analysis.categorize import lessons_in_category, related_lessons
from ..config import PipelineConfig
from ..models import LessonAnalysis
from ..pipeline import analyze_directory


def _lesson_table(title: str, analyses: list[LessonAnalysis]) -> Table:
    table = Table(title=title)
    table.add_column("Lesson")
    table.add_column("Title")
    table.add_column("Categories")
    table.add_column("Quality", justify="right")
    for analysis in analyses:
        table.add_row(
            analysis.filename,
            analysis.record.title,
            ", ".join(analysis.record.categories),
            str(analysis.quality_score),
        )
    return table


def run_category(config: PipelineConfig, category: str) -> int:
    """List lessons carrying ``category``.

    Returns:
        Exit code (0 = at least one lesson, 1 = none or analysis failed)
    """
    console = Console(stderr=True)
    try:
        batch = analyze_directory(config)
    except OSError as e:
        console.print(f"✗ Lesson analysis failed: {e}", style="bold red")
        return 1

    members = lessons_in_category(category, batch.analyses)
    if not members:
        console.print(f"No lessons in category '{category}'", style="yellow")
        return 1

    console.print(_lesson_table(f"Category: {category} ({len(members)} lessons)", members))
    return 0


def run_related(config: PipelineConfig, filename: str, limit: int = 5) -> int:
    """List lessons sharing categories with ``filename``, most shared first."""
    console = Console(stderr=True)
    try:
        batch = analyze_directory(config)
    except OSError as e:
        console.print(f"✗ Lesson analysis failed: {e}", style="bold red")
        return 1

    if filename not in {a.filename for a in batch.analyses}:
        console.print(f"✗ Lesson not found: {filename}", style="bold red")
        return 1

    related = related_lessons(filename, batch.analyses, limit)
    if not related:
        console.print(f"No lessons related to {filename}", style="yellow")
        return 0

    console.print(_lesson_table(f"Related to {filename}", related))
    return 0
