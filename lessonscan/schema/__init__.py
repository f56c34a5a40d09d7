"""Declarative lesson schema and validation."""

from .load import SCHEMA_FILENAME, load_or_create_schema, load_schema, parse_schema, save_schema
from .schema import FieldRule, SectionRule, ValidationSchema, default_schema
from .validator import validate

__all__ = [
    "FieldRule",
    "SectionRule",
    "ValidationSchema",
    "default_schema",
    "parse_schema",
    "load_schema",
    "save_schema",
    "load_or_create_schema",
    "SCHEMA_FILENAME",
    "validate",
]
