"""Schema validation for extracted lesson records."""

from __future__ import annotations

import re
from typing import Any

from ..models import LessonRecord, ValidationResult
from .schema import FieldRule, ValidationSchema

_TYPE_CHECKS = {
    "string": lambda v: isinstance(v, str),
    "array": lambda v: isinstance(v, (list, tuple)),
    "object": lambda v: isinstance(v, dict),
}


def validate(record: LessonRecord | dict[str, Any], schema: ValidationSchema) -> ValidationResult:
    """Check a record against ``schema`` and collect every violation.

    Nothing short-circuits: required fields, types, lengths, patterns, enums
    and required sections are all evaluated. Malformed input produces errors,
    never exceptions.
    """
    fields = record.as_fields() if isinstance(record, LessonRecord) else dict(record)
    errors: list[str] = []

    errors.extend(check_required(fields, schema))
    for name, rule in schema.properties.items():
        errors.extend(check_field(name, fields.get(name), rule))
    errors.extend(check_sections(fields.get("sections"), schema))

    return ValidationResult(errors=errors)


def check_required(fields: dict[str, Any], schema: ValidationSchema) -> list[str]:
    return [
        f"Missing required field: {name}"
        for name in schema.required
        if fields.get(name) is None or fields.get(name) == ""
    ]


def check_field(name: str, value: Any, rule: FieldRule) -> list[str]:
    """Type, length, pattern and enum checks for one populated field."""
    if value is None:
        return []

    errors = []
    type_ok = _TYPE_CHECKS.get(rule.type, lambda v: True)(value)
    if not type_ok:
        errors.append(f"Field {name} must be of type {rule.type}")

    if rule.min_length is not None and hasattr(value, "__len__") and len(value) < rule.min_length:
        errors.append(f"Field {name} must be at least {rule.min_length} characters")

    if rule.pattern is not None:
        if not isinstance(value, str):
            errors.append(f"Field {name} does not match required pattern")
        else:
            try:
                matched = re.search(rule.pattern, value) is not None
            except re.error:
                errors.append(f"Field {name} has an invalid pattern in the schema")
            else:
                if not matched:
                    errors.append(f"Field {name} does not match required pattern")

    if rule.enum is not None:
        if value not in rule.enum:
            errors.append(f"Field {name} must be one of: {', '.join(rule.enum)}")

    return errors


def check_sections(sections: Any, schema: ValidationSchema) -> list[str]:
    """One error per required section that is absent or shorter than the minimum."""
    if not isinstance(sections, dict):
        sections = {}

    min_length = schema.sections.min_length
    errors = []
    for name in schema.sections.required:
        body = sections.get(name)
        if not isinstance(body, str) or len(body) < min_length:
            errors.append(f"Section {name} is required and must be at least {min_length} characters")
    return errors
