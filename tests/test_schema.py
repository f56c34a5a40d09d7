import json
import logging
from pathlib import Path

import pytest

from lessonscan.schema.load import load_or_create_schema, load_schema, parse_schema, save_schema
from lessonscan.schema.schema import default_schema
from lessonscan.tables import DEFAULT_TABLES


def test_default_schema_uses_shared_tables() -> None:
    schema = default_schema()

    assert schema.required == ("title", "date", "project", "phase", "priority")
    assert schema.properties["phase"].enum == DEFAULT_TABLES.phases
    assert schema.properties["priority"].enum == DEFAULT_TABLES.priorities
    assert schema.sections.required == DEFAULT_TABLES.required_sections
    assert schema.sections.min_length == 10


def test_save_and_load_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "templates" / "lesson-schema.json"
    schema = default_schema()

    assert save_schema(schema, path)
    assert load_schema(path) == schema


def test_load_or_create_writes_defaults(tmp_path: Path) -> None:
    path = tmp_path / "lesson-schema.json"

    schema = load_or_create_schema(path)

    assert path.exists()
    assert schema == default_schema()
    assert json.loads(path.read_text(encoding="utf-8"))["required"][0] == "title"


def test_corrupt_schema_falls_back_without_overwriting(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "lesson-schema.json"
    path.write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        schema = load_or_create_schema(path)

    assert schema == default_schema()
    assert path.read_text(encoding="utf-8") == "{not json"
    assert "Failed to load lesson schema" in caplog.text


def test_parse_legacy_sections_property() -> None:
    data = {
        "required": ["title"],
        "properties": {
            "title": {"type": "string", "minLength": 1},
            "sections": {
                "type": "object",
                "required": ["context", "results"],
                "properties": {
                    "context": {"type": "string", "minLength": 20},
                    "results": {"type": "string", "minLength": 15},
                },
            },
        },
    }
    schema = parse_schema(data)

    assert "sections" not in schema.properties
    assert schema.sections.required == ("context", "results")
    assert schema.sections.min_length == 15


def test_parse_rejects_unknown_type() -> None:
    with pytest.raises(ValueError, match="unsupported type"):
        parse_schema({"properties": {"title": {"type": "number"}}})
