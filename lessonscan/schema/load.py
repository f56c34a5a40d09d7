from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ..tables import DEFAULT_TABLES, KeywordTables
from .schema import DEFAULT_SECTION_MIN_LENGTH, FieldRule, SectionRule, ValidationSchema, default_schema

logger = logging.getLogger(__name__)

SCHEMA_FILENAME = "lesson-schema.json"
FIELD_TYPES = ("string", "array", "object")


def _coerce_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _coerce_str_list(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(v) for v in value)


def parse_schema(data: dict[str, Any]) -> ValidationSchema:
    """
    Build a ValidationSchema from its JSON form.

    Sections may be declared either as a top-level ``sections`` table
    (``required`` + ``minLength``) or, as older schema files do, as an object
    property named ``sections`` whose sub-properties carry ``minLength``.
    """
    if not isinstance(data, dict):
        raise ValueError("schema must be a JSON object")

    properties: dict[str, FieldRule] = {}
    legacy_sections: dict[str, Any] = {}
    for name, raw in _coerce_dict(data.get("properties")).items():
        if not isinstance(raw, dict):
            continue
        if name == "sections" and raw.get("type") == "object":
            legacy_sections = raw
            continue

        field_type = str(raw.get("type", "string"))
        if field_type not in FIELD_TYPES:
            raise ValueError(f"property '{name}' has unsupported type '{field_type}'")

        enum = raw.get("enum")
        min_length = raw.get("minLength")
        pattern = raw.get("pattern")
        description = raw.get("description")
        properties[str(name)] = FieldRule(
            type=field_type,  # type: ignore[arg-type]
            enum=_coerce_str_list(enum) if isinstance(enum, list) else None,
            pattern=str(pattern) if isinstance(pattern, str) else None,
            min_length=int(min_length) if isinstance(min_length, int) else None,
            description=str(description) if isinstance(description, str) else None,
        )

    sections_raw = _coerce_dict(data.get("sections"))
    if sections_raw:
        sections = SectionRule(
            required=_coerce_str_list(sections_raw.get("required")),
            min_length=int(sections_raw.get("minLength", DEFAULT_SECTION_MIN_LENGTH)),
        )
    elif legacy_sections:
        sub = _coerce_dict(legacy_sections.get("properties"))
        lengths = [
            int(p["minLength"]) for p in sub.values() if isinstance(p, dict) and isinstance(p.get("minLength"), int)
        ]
        sections = SectionRule(
            required=_coerce_str_list(legacy_sections.get("required")),
            min_length=min(lengths) if lengths else DEFAULT_SECTION_MIN_LENGTH,
        )
    else:
        sections = SectionRule()

    return ValidationSchema(
        required=_coerce_str_list(data.get("required")),
        properties=properties,
        sections=sections,
    )


def load_schema(path: Path) -> ValidationSchema:
    """Load a schema document. Raises OSError or ValueError on failure."""
    return parse_schema(json.loads(path.read_text(encoding="utf-8")))


def save_schema(schema: ValidationSchema, path: Path) -> bool:
    """Persist a schema; a write failure is logged and reported as False."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(schema.to_dict(), indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        logger.warning("Failed to save lesson schema %s: %s", path, e)
        return False
    logger.debug("Saved lesson schema to %s", path)
    return True


def load_or_create_schema(path: Path, tables: KeywordTables = DEFAULT_TABLES) -> ValidationSchema:
    """Load the schema at ``path``, synthesizing and saving defaults on first run.

    An unreadable or malformed schema file is logged and the defaults are used
    for this run; the broken file is left in place.
    """
    if path.exists():
        try:
            schema = load_schema(path)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Failed to load lesson schema %s: %s; using defaults", path, e)
            return default_schema(tables)
        logger.info("Loaded lesson schema with %d properties", len(schema.properties))
        return schema

    schema = default_schema(tables)
    save_schema(schema, path)
    return schema
