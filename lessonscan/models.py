"""Data models for lesson documents and their analysis."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

# Valid development phases
Phase = Literal[
    "planning",
    "development",
    "testing",
    "deployment",
    "maintenance",
    "general",
]

# Valid lesson priorities
Priority = Literal["critical", "high", "medium", "low"]


@dataclass(frozen=True)
class LessonDocument:
    """A lesson file as read from disk."""

    path: Path
    raw_content: str

    @property
    def filename(self) -> str:
        return self.path.name


@dataclass
class LessonRecord:
    """Structured metadata extracted from one lesson document."""

    filename: str
    title: str
    date: str  # YYYY-MM-DD
    project: str
    phase: str = "general"
    priority: str = "medium"
    tags: list[str] = field(default_factory=list)  # vocabulary order
    categories: list[str] = field(default_factory=list)
    sections: dict[str, str] = field(default_factory=dict)  # canonical name -> body
    key_insights: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def as_fields(self) -> dict[str, Any]:
        """Field view used by schema validation (schema property names)."""
        return {
            "title": self.title,
            "date": self.date,
            "project": self.project,
            "phase": self.phase,
            "priority": self.priority,
            "tags": self.tags,
            "categories": self.categories,
            "sections": self.sections,
            "keyInsights": self.key_insights,
            "recommendations": self.recommendations,
        }


@dataclass
class ValidationResult:
    """Outcome of validating a record; valid exactly when there are no errors."""

    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def to_dict(self) -> dict:
        return {
            "isValid": self.is_valid,
            "errors": list(self.errors),
            "errorCount": self.error_count,
        }


@dataclass
class LessonAnalysis:
    """One lesson after extraction, validation, scoring and categorization."""

    record: LessonRecord
    validation: ValidationResult
    quality_score: int
    impact_score: int
    impact_metrics: dict[str, int] = field(default_factory=dict)
    impact_dimensions: list[str] = field(default_factory=list)

    @property
    def filename(self) -> str:
        return self.record.filename

    def summary(self) -> dict:
        """Compact per-lesson view used in reports and history snapshots."""
        record = self.record
        return {
            "filename": record.filename,
            "title": record.title,
            "date": record.date,
            "project": record.project,
            "phase": record.phase,
            "priority": record.priority,
            "categories": list(record.categories),
            "tags": list(record.tags),
            "sections": list(record.sections),
            "insights": len(record.key_insights),
            "recommendations": len(record.recommendations),
            "qualityScore": self.quality_score,
            "impactScore": self.impact_score,
            "impactMetrics": dict(self.impact_metrics),
            "validation": self.validation.to_dict(),
        }


@dataclass
class BatchResult:
    """All analyses from one pipeline run, in discovery order."""

    analyses: list[LessonAnalysis] = field(default_factory=list)
    total_files: int = 0
    failures: dict[str, str] = field(default_factory=dict)  # filename -> error message
    timestamp: str = ""

    @property
    def analyzed(self) -> int:
        return len(self.analyses)
