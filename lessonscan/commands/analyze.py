"""Analyze command implementation."""

import json
from pathlib import Path

from rich.console import Console
from rich.table import Table

from ..analysis.impact import impact_recommendations
from ..analysis.quality import quality_recommendations
from ..config import PipelineConfig
from ..history import LAYOUTS, HistoryStore
from ..pipeline import analyze_document, run_pipeline
from ..schema.load import load_or_create_schema


def run_analyze(config: PipelineConfig, output_json: bool = False) -> int:
    """Run the full pipeline over the lessons directory.

    Args:
        config: Pipeline settings (directories, workers, tables)
        output_json: Print the run summary as JSON instead of a table

    Returns:
        Exit code (0 = success, 1 = run failed)
    """
    console = Console(stderr=True)
    console.print(f"Analyzing lessons in {config.lessons_dir}...", style="dim")

    result = run_pipeline(config)

    if output_json:
        print(json.dumps(result, indent=2))
        return 0 if result["success"] else 1

    if not result["success"]:
        console.print(f"✗ Lesson analysis failed: {result['error']}", style="bold red")
        return 1

    table = Table(title="Lesson analysis")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Lessons found", str(result["totalLessons"]))
    table.add_row("Analyzed", str(result["analyzedLessons"]))
    table.add_row("Failed", str(result["failedLessons"]))
    table.add_row("Categories", str(result["categories"]))
    table.add_row("Average quality", str(result["averageQualityScore"]))
    table.add_row("Average impact", str(result["averageImpactScore"]))
    console.print(table)

    style = "yellow" if result["failedLessons"] else "green"
    console.print(f"✓ Reports written to {config.reports_dir}", style=style)
    return 0


def run_validate_file(config: PipelineConfig, path: Path, output_json: bool = False) -> int:
    """Analyze a single lesson and show validation errors and scores.

    Returns:
        Exit code (0 = valid, 1 = validation errors or unreadable file)
    """
    console = Console(stderr=True)
    schema = load_or_create_schema(config.schema_path, config.tables)

    try:
        analysis = analyze_document(path, schema, config)
    except (OSError, UnicodeDecodeError, ValueError) as e:
        console.print(f"✗ Failed to read {path.name}: {e}", style="bold red")
        return 1

    hints = quality_recommendations(analysis, config.tables) + impact_recommendations(analysis)

    if output_json:
        print(json.dumps({**analysis.summary(), "hints": hints}, indent=2))
        return 0 if analysis.validation.is_valid else 1

    record = analysis.record
    console.print(f"[bold]{record.title}[/] ({path.name})")
    console.print(f"  phase={record.phase} priority={record.priority} date={record.date}", style="dim")
    console.print(f"  categories: {', '.join(record.categories)}", style="dim")
    console.print(f"  quality={analysis.quality_score} impact={analysis.impact_score}")

    if analysis.validation.is_valid:
        console.print("✓ Valid", style="green")
    else:
        console.print(f"✗ {analysis.validation.error_count} validation error(s):", style="bold red")
        for error in analysis.validation.errors:
            console.print(f"  - {error}")

    for hint in hints:
        console.print(f"  → {hint}", style="yellow")

    return 0 if analysis.validation.is_valid else 1


def run_history(config: PipelineConfig, last_n: int = 5) -> int:
    """Show the most recent snapshots from each history store."""
    console = Console(stderr=True)

    for layout in LAYOUTS:
        store = HistoryStore.in_dir(config.reports_dir, layout).load()
        snapshots = store.snapshots()[-last_n:]

        table = Table(title=f"{layout.name} history ({len(store.history)} runs)")
        table.add_column("Timestamp")
        table.add_column("Lessons", justify="right")
        table.add_column("Stats")
        for snapshot in snapshots:
            stats = ", ".join(
                f"{k}={v}" for k, v in snapshot.aggregate_stats.items() if isinstance(v, (int, float, str))
            )
            table.add_row(snapshot.timestamp, str(snapshot.total_lessons), stats)
        console.print(table)

    return 0
