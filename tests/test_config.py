from pathlib import Path

import pytest

from lessonscan.config import PipelineConfig, find_config, load_config, parse_config
from lessonscan.documents.extractor import extract_phase
from lessonscan.errors import ConfigError


def test_defaults() -> None:
    config = PipelineConfig()

    assert config.workers == 1
    assert config.date_fallback == "now"
    assert config.schema_path == Path("templates") / "lesson-schema.json"


def test_relative_dirs_resolve_against_config_dir(tmp_path: Path) -> None:
    config = parse_config({"pipeline": {"lessons_dir": "notes", "workers": 2, "top_n": 3}}, tmp_path)

    assert config.lessons_dir == tmp_path / "notes"
    assert config.reports_dir == tmp_path / "reports"
    assert config.workers == 2
    assert config.top_n == 3


def test_unknown_setting_rejected(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="unknown \\[pipeline\\] settings: colour"):
        parse_config({"pipeline": {"colour": "red"}}, tmp_path)


@pytest.mark.parametrize(
    "pipeline",
    [{"workers": 0}, {"top_n": -1}, {"date_fallback": "yesterday"}, {"workers": "many"}],
)
def test_invalid_values_rejected(tmp_path: Path, pipeline: dict) -> None:
    with pytest.raises(ConfigError):
        parse_config({"pipeline": pipeline}, tmp_path)


def test_table_overrides(tmp_path: Path) -> None:
    config = parse_config({"tables": {"phase_keywords": {"planning": ["roadmap"]}}}, tmp_path)

    assert extract_phase("roadmap review", config.tables) == "planning"
    assert extract_phase("we planned it", config.tables) == "general"


def test_unknown_table_rejected(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="invalid \\[tables\\] entry"):
        parse_config({"tables": {"colours": ["red"]}}, tmp_path)


def test_load_and_find_config(tmp_path: Path) -> None:
    path = tmp_path / "lessonscan.toml"
    path.write_text(
        "\n".join(
            [
                "[pipeline]",
                'lessons_dir = "docs/lessons"',
                'date_fallback = "mtime"',
                "",
            ]
        ),
        encoding="utf-8",
    )
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert find_config(nested) == path.resolve()

    config = load_config(path)
    assert config.lessons_dir == tmp_path / "docs" / "lessons"
    assert config.date_fallback == "mtime"


def test_malformed_toml(tmp_path: Path) -> None:
    path = tmp_path / "lessonscan.toml"
    path.write_text("[pipeline\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(path)


def test_with_options_ignores_none() -> None:
    config = PipelineConfig().with_options(workers=4, lessons_dir=None)

    assert config.workers == 4
    assert config.lessons_dir == Path("lessons-learned")
    with pytest.raises(ConfigError):
        config.with_options(workers=0)
