"""CLI entrypoint for lessonscan."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .config import PipelineConfig, find_config, load_config
from .errors import ConfigError


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _config(ctx: click.Context) -> PipelineConfig:
    return ctx.obj["config"]


@click.group()
@click.version_option(__version__, prog_name="lessonscan")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to lessonscan.toml (defaults to the nearest one above the working directory)",
)
@click.option("--verbose", is_flag=True, help="Log pipeline progress")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """lessonscan - Analyze a directory of lessons-learned documents.

    Validate, score, categorize and rank lessons, keep a history of every
    run, and generate lesson templates.
    """
    _setup_logging(verbose)
    ctx.ensure_object(dict)

    if config_path is None:
        config_path = find_config(Path.cwd())

    try:
        ctx.obj["config"] = load_config(config_path) if config_path else PipelineConfig()
    except (ConfigError, OSError) as e:
        raise click.ClickException(f"Invalid configuration: {e}")


@cli.command()
@click.option(
    "--lessons",
    "lessons_dir",
    type=click.Path(file_okay=True, dir_okay=True, path_type=Path),
    default=None,
    help="Directory of lesson markdown files",
)
@click.option(
    "--reports",
    "reports_dir",
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Directory for reports and history stores",
)
@click.option(
    "--templates",
    "templates_dir",
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Directory holding lesson-schema.json",
)
@click.option("--workers", type=int, default=None, help="Analyze documents with N threads")
@click.option("--top", "top_n", type=int, default=None, help="Number of top lessons per report")
@click.option("--json", "output_json", is_flag=True, help="Output run summary as JSON")
@click.pass_context
def analyze(
    ctx: click.Context,
    lessons_dir: Path | None,
    reports_dir: Path | None,
    templates_dir: Path | None,
    workers: int | None,
    top_n: int | None,
    output_json: bool,
) -> None:
    """Run the full analysis over the lessons directory.

    Writes categorization, quality and impact reports and appends one
    snapshot to each history store.
    """
    from .commands.analyze import run_analyze

    try:
        config = _config(ctx).with_options(
            lessons_dir=lessons_dir,
            reports_dir=reports_dir,
            templates_dir=templates_dir,
            workers=workers,
            top_n=top_n,
        )
    except ConfigError as e:
        raise click.ClickException(str(e))

    exit_code = run_analyze(config, output_json)
    sys.exit(exit_code)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "output_json", is_flag=True, help="Output the analysis as JSON")
@click.pass_context
def validate(ctx: click.Context, file: Path, output_json: bool) -> None:
    """Analyze one lesson and report validation errors and scores."""
    from .commands.analyze import run_validate_file

    exit_code = run_validate_file(_config(ctx), file, output_json)
    sys.exit(exit_code)


@cli.command()
@click.option(
    "--out",
    "out_dir",
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Output directory (defaults to the configured templates directory)",
)
@click.option("--list", "list_only", is_flag=True, help="List existing templates instead of generating")
@click.pass_context
def templates(ctx: click.Context, out_dir: Path | None, list_only: bool) -> None:
    """Generate the lesson template set."""
    from .commands.templates_cmd import run_list_templates, run_templates

    config = _config(ctx)
    target = out_dir or config.templates_dir
    if list_only:
        exit_code = run_list_templates(target, config.tables)
    else:
        exit_code = run_templates(target, config.tables)
    sys.exit(exit_code)


@cli.command("check-template")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def check_template(ctx: click.Context, file: Path) -> None:
    """Check a template for required sections and header fields.

    Header fields are the bold **Date**, **Project**, **Phase** and
    **Priority** lines.
    """
    from .commands.templates_cmd import run_check_template

    exit_code = run_check_template(file, _config(ctx).tables)
    sys.exit(exit_code)


@cli.command()
@click.option("--last", "last_n", type=int, default=5, help="Number of snapshots per store")
@click.pass_context
def history(ctx: click.Context, last_n: int) -> None:
    """Show recent run snapshots from the history stores."""
    from .commands.analyze import run_history

    exit_code = run_history(_config(ctx), last_n)
    sys.exit(exit_code)


@cli.command()
@click.argument("name")
@click.pass_context
def category(ctx: click.Context, name: str) -> None:
    """List lessons in a category."""
    from .commands.browse import run_category

    exit_code = run_category(_config(ctx), name)
    sys.exit(exit_code)


@cli.command()
@click.argument("filename")
@click.option("--limit", type=int, default=5, help="Maximum number of related lessons")
@click.pass_context
def related(ctx: click.Context, filename: str, limit: int) -> None:
    """List lessons sharing categories with FILENAME."""
    from .commands.browse import run_related

    exit_code = run_related(_config(ctx), filename, limit)
    sys.exit(exit_code)


if __name__ == "__main__":
    cli()
