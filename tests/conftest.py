"""Pytest configuration and fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest

from lessonscan.config import PipelineConfig
from lessonscan.schema.schema import ValidationSchema, default_schema

LESSON_FIXTURES = Path(__file__).parent / "fixtures" / "lessons"


def _read_fixture(name: str) -> str:
    return (LESSON_FIXTURES / name).read_text(encoding="utf-8")


@pytest.fixture
def full_lesson() -> str:
    """All five sections with a header block; critical deployment lesson."""
    return _read_fixture("fix-db-pool.md")


@pytest.fixture
def deploy_lesson() -> str:
    """Deployment keywords with critical priority."""
    return _read_fixture("release-rollout.md")


@pytest.fixture
def testing_lesson() -> str:
    """Testing keywords with a minor (low priority) marker."""
    return _read_fixture("unit-suite.md")


@pytest.fixture
def schema() -> ValidationSchema:
    return default_schema()


@pytest.fixture
def lessons_dir(tmp_path: Path) -> Path:
    path = tmp_path / "lessons-learned"
    path.mkdir()
    return path


@pytest.fixture
def write_lesson(lessons_dir: Path) -> Callable[[str, str], Path]:
    """Write a lesson file into the lessons directory."""

    def _write(name: str, content: str) -> Path:
        path = lessons_dir / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def pipeline_config(tmp_path: Path, lessons_dir: Path) -> PipelineConfig:
    return PipelineConfig(
        lessons_dir=lessons_dir,
        reports_dir=tmp_path / "reports",
        templates_dir=tmp_path / "templates",
    )
