from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from ..tables import DEFAULT_TABLES, KeywordTables

FieldType = Literal["string", "array", "object"]

DEFAULT_SECTION_MIN_LENGTH = 10
JSON_SCHEMA_DIALECT = "http://json-schema.org/draft-07/schema#"


@dataclass(frozen=True)
class FieldRule:
    type: FieldType = "string"
    enum: tuple[str, ...] | None = None
    pattern: str | None = None
    min_length: int | None = None
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type}
        if self.enum is not None:
            data["enum"] = list(self.enum)
        if self.pattern is not None:
            data["pattern"] = self.pattern
        if self.min_length is not None:
            data["minLength"] = self.min_length
        if self.description is not None:
            data["description"] = self.description
        return data


@dataclass(frozen=True)
class SectionRule:
    required: tuple[str, ...] = ()
    min_length: int = DEFAULT_SECTION_MIN_LENGTH


@dataclass(frozen=True)
class ValidationSchema:
    required: tuple[str, ...] = ()
    properties: dict[str, FieldRule] = field(default_factory=dict)
    sections: SectionRule = field(default_factory=SectionRule)

    def to_dict(self) -> dict[str, Any]:
        return {
            "$schema": JSON_SCHEMA_DIALECT,
            "type": "object",
            "required": list(self.required),
            "properties": {name: rule.to_dict() for name, rule in self.properties.items()},
            "sections": {
                "required": list(self.sections.required),
                "minLength": self.sections.min_length,
            },
        }


def default_schema(tables: KeywordTables = DEFAULT_TABLES) -> ValidationSchema:
    """Schema synthesized on first run; enums and sections come from the shared tables."""
    return ValidationSchema(
        required=("title", "date", "project", "phase", "priority"),
        properties={
            "title": FieldRule(type="string", min_length=1, description="Lesson title"),
            "date": FieldRule(
                type="string",
                pattern=r"^\d{4}-\d{2}-\d{2}$",
                description="Lesson date in YYYY-MM-DD format",
            ),
            "project": FieldRule(type="string", min_length=1, description="Project name"),
            "phase": FieldRule(type="string", enum=tables.phases, description="Development phase"),
            "priority": FieldRule(type="string", enum=tables.priorities, description="Lesson priority"),
            "tags": FieldRule(type="array", description="Lesson tags"),
        },
        sections=SectionRule(required=tables.required_sections, min_length=DEFAULT_SECTION_MIN_LENGTH),
    )
