from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Literal

from .errors import ConfigError
from .schema.load import SCHEMA_FILENAME
from .tables import DEFAULT_TABLES, KeywordTables

CONFIG_FILENAME = "lessonscan.toml"

DateFallback = Literal["now", "mtime"]
DATE_FALLBACKS = ("now", "mtime")


@dataclass(frozen=True)
class PipelineConfig:
    lessons_dir: Path = Path("lessons-learned")
    reports_dir: Path = Path("reports")
    templates_dir: Path = Path("templates")
    top_n: int = 5
    workers: int = 1
    date_fallback: DateFallback = "now"
    tables: KeywordTables = field(default_factory=lambda: DEFAULT_TABLES)

    @property
    def schema_path(self) -> Path:
        return self.templates_dir / SCHEMA_FILENAME

    def with_options(self, **changes: Any) -> "PipelineConfig":
        """Copy with the given (non-None) settings replaced; used for CLI overrides."""
        updates = {k: v for k, v in changes.items() if v is not None}
        config = replace(self, **updates)
        _check(config)
        return config


def _coerce_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _check(config: PipelineConfig) -> None:
    if config.top_n <= 0:
        raise ConfigError("top_n must be a positive integer")
    if config.workers <= 0:
        raise ConfigError("workers must be a positive integer")
    if config.date_fallback not in DATE_FALLBACKS:
        raise ConfigError(f"date_fallback must be one of: {', '.join(DATE_FALLBACKS)}")


def parse_config(data: dict[str, Any], base_dir: Path) -> PipelineConfig:
    """
    Build a PipelineConfig from parsed TOML.

    Relative directories resolve against ``base_dir`` (the config file's
    directory). ``[tables.*]`` entries replace individual keyword tables.
    """
    pipeline = _coerce_dict(data.get("pipeline"))
    known = {"lessons_dir", "reports_dir", "templates_dir", "top_n", "workers", "date_fallback"}
    unknown = sorted(set(pipeline) - known)
    if unknown:
        raise ConfigError(f"unknown [pipeline] settings: {', '.join(unknown)}")

    def _dir(key: str, default: Path) -> Path:
        raw = pipeline.get(key)
        path = Path(str(raw)) if raw is not None else default
        return path if path.is_absolute() else base_dir / path

    tables = DEFAULT_TABLES
    overrides = _coerce_dict(data.get("tables"))
    if overrides:
        try:
            tables = DEFAULT_TABLES.with_overrides(overrides)
        except (KeyError, TypeError, ValueError, IndexError) as e:
            raise ConfigError(f"invalid [tables] entry: {e}") from e

    try:
        config = PipelineConfig(
            lessons_dir=_dir("lessons_dir", PipelineConfig.lessons_dir),
            reports_dir=_dir("reports_dir", PipelineConfig.reports_dir),
            templates_dir=_dir("templates_dir", PipelineConfig.templates_dir),
            top_n=int(pipeline.get("top_n", PipelineConfig.top_n)),
            workers=int(pipeline.get("workers", PipelineConfig.workers)),
            date_fallback=str(pipeline.get("date_fallback", PipelineConfig.date_fallback)),  # type: ignore[arg-type]
            tables=tables,
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"invalid [pipeline] value: {e}") from e

    _check(config)
    return config


def load_config(path: Path) -> PipelineConfig:
    """Load ``lessonscan.toml``. Raises ConfigError for malformed files."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: {e}") from e
    return parse_config(data, path.parent)


def find_config(start: Path) -> Path | None:
    """Find a lessonscan.toml by walking up from ``start``."""
    cur = start.resolve()
    for p in (cur, *cur.parents):
        candidate = p / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
