"""Keyword tables shared by the extractor, scorers, schema and templates.

Every heuristic in the pipeline reads its vocabulary from a single
:class:`KeywordTables` value. Components accept a ``tables`` argument so tests
(and ``lessonscan.toml``) can substitute their own tables; the defaults below
are versioned by :data:`TABLES_VERSION`.

All tables are data, evaluation is code.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any

TABLES_VERSION = 1

KeywordTable = tuple[tuple[str, tuple[str, ...]], ...]


# -----------------------------------------------------------------------------
# Enumerations
# -----------------------------------------------------------------------------

PHASES = ("planning", "development", "testing", "deployment", "maintenance", "general")
PRIORITIES = ("critical", "high", "medium", "low")
IMPACT_DIMENSIONS = ("technical", "process", "project", "quality", "adoption")

DEFAULT_PHASE = "general"
DEFAULT_PRIORITY = "medium"
DEFAULT_CATEGORY = "general"
UNKNOWN_PROJECT = "Unknown"


# -----------------------------------------------------------------------------
# Extraction tables
# -----------------------------------------------------------------------------

# Ordered: the first phase/priority with a matching keyword wins.
PHASE_KEYWORDS: KeywordTable = (
    ("planning", ("plan", "planning", "strategy")),
    ("development", ("develop", "implementation", "coding")),
    ("testing", ("test", "testing", "validation")),
    ("deployment", ("deploy", "deployment", "production")),
    ("maintenance", ("maintain", "maintenance", "support")),
)

PRIORITY_KEYWORDS: KeywordTable = (
    ("critical", ("critical", "urgent", "blocker")),
    ("high", ("high", "important", "priority")),
    ("medium", ("medium", "normal")),
    ("low", ("low", "minor", "nice-to-have")),
)

TAG_VOCABULARY = (
    "technical",
    "performance",
    "security",
    "ux",
    "process",
    "team",
    "spring-boot",
    "react",
    "testing",
    "deployment",
    "monitoring",
    "cursor",
    "ai",
    "automation",
    "quality",
    "compliance",
)

INSIGHT_TRIGGERS = ("insight", "learned", "discovered")
RECOMMENDATION_TRIGGERS = ("recommend", "should", "must")

PROJECT_MARKERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Agent OS", ("Agent OS", ".agent-os")),
)


# -----------------------------------------------------------------------------
# Section tables
# -----------------------------------------------------------------------------

SECTION_SYNONYMS: dict[str, str] = {
    "context": "context",
    "action taken": "actionTaken",
    "action": "actionTaken",
    "results": "results",
    "key insights": "keyInsights",
    "insights": "keyInsights",
    "recommendations": "recommendations",
    "recommendation": "recommendations",
    "follow-up actions": "followUpActions",
    "follow up actions": "followUpActions",
    "related lessons": "relatedLessons",
    "tags": "tags",
}

REQUIRED_SECTIONS = ("context", "actionTaken", "results", "keyInsights", "recommendations")

# Canonical section key -> (heading text, template placeholder)
SECTION_HEADINGS: dict[str, tuple[str, str]] = {
    "context": ("Context", "[Describe the situation, problem, or challenge that led to this lesson]"),
    "actionTaken": ("Action Taken", "[Describe what was done to address the situation]"),
    "results": ("Results", "[Describe the outcomes, both positive and negative]"),
    "keyInsights": ("Key Insights", "[Document the key learnings and insights gained]"),
    "recommendations": (
        "Recommendations",
        "[Provide actionable recommendations for future similar situations]",
    ),
    "followUpActions": ("Follow-up Actions", "[Document specific actions that need to be taken]"),
    "relatedLessons": ("Related Lessons", "[Link to related lessons learned]"),
}

# Header fields rendered as ``**Name**: value`` at the top of a lesson.
HEADER_FIELDS = ("Date", "Project", "Phase", "Priority")


# -----------------------------------------------------------------------------
# Categorization and impact tables
# -----------------------------------------------------------------------------

CATEGORY_KEYWORDS: KeywordTable = (
    ("frontend", ("javascript", "typescript")),
    ("backend", ("java", "spring")),
    ("database", ("database", "sql")),
    ("devops", ("deployment", "ci/cd")),
    ("testing", ("testing", "test")),
    ("security", ("security", "auth")),
    ("performance", ("performance", "optimization")),
    ("architecture", ("architecture", "design")),
    ("ai-integration", ("cursor", "ai")),
    ("analytics", ("analytics", "metrics")),
    ("documentation", ("documentation", "template")),
)

PRIORITY_CATEGORIES: dict[str, str] = {
    "critical": "critical",
    "high": "high-priority",
}

IMPACT_DIMENSION_KEYWORDS: KeywordTable = (
    ("technical", ("javascript", "typescript", "java", "spring")),
    ("process", ("workflow", "process", "procedure", "methodology")),
    ("project", ("project", "management", "planning", "strategy")),
    ("quality", ("quality", "testing", "validation", "compliance")),
    ("adoption", ("adoption", "implementation", "deployment", "rollout")),
)

# Dimension labels behind the impact score's category bonus; "react" counts as technical here
# but not in the binary metrics above.
IMPACT_CATEGORY_KEYWORDS: KeywordTable = (
    ("technical", ("javascript", "typescript", "java", "spring", "react")),
) + IMPACT_DIMENSION_KEYWORDS[1:]

PRIORITY_WEIGHTS: dict[str, int] = {"critical": 30, "high": 20, "medium": 10, "low": 5}
PHASE_WEIGHTS: dict[str, int] = {
    "planning": 15,
    "development": 20,
    "testing": 15,
    "deployment": 25,
    "maintenance": 10,
}

# (keywords, bonus) pairs matched case-sensitively; each pair contributes at most once.
IMPACT_SIGNALS: tuple[tuple[tuple[str, ...], int], ...] = (
    (("production", "deploy"), 10),
    (("critical", "urgent"), 10),
    (("success", "improved", "improvement"), 5),
    (("failure", "error"), 5),
)

DIMENSION_HIT_SCORE = 25


# -----------------------------------------------------------------------------
# Report bands (lower bound inclusive, checked in order)
# -----------------------------------------------------------------------------

QUALITY_BANDS: tuple[tuple[str, int], ...] = (
    ("excellent", 90),
    ("good", 80),
    ("fair", 70),
    ("poor", 60),
    ("failing", 0),
)

IMPACT_BANDS: tuple[tuple[str, int], ...] = (
    ("high", 80),
    ("medium", 60),
    ("low", 40),
    ("minimal", 0),
)


# -----------------------------------------------------------------------------
# Template definitions
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class TemplateDefinition:
    type: str
    name: str
    title: str
    description: str
    sections: tuple[str, ...]
    tags: tuple[str, ...]


_BASE_SECTIONS = REQUIRED_SECTIONS
_EXTENDED_SECTIONS = REQUIRED_SECTIONS + ("followUpActions",)

TEMPLATE_DEFINITIONS: tuple[TemplateDefinition, ...] = (
    TemplateDefinition(
        type="technical",
        name="technical-lesson-template.md",
        title="Technical Lesson Template",
        description="Template for technical lessons learned",
        sections=_EXTENDED_SECTIONS,
        tags=("technical", "implementation", "coding"),
    ),
    TemplateDefinition(
        type="process",
        name="process-lesson-template.md",
        title="Process Lesson Template",
        description="Template for process improvement lessons",
        sections=_EXTENDED_SECTIONS,
        tags=("process", "workflow", "improvement"),
    ),
    TemplateDefinition(
        type="project",
        name="project-lesson-template.md",
        title="Project Lesson Template",
        description="Template for project management lessons",
        sections=_EXTENDED_SECTIONS,
        tags=("project", "management", "planning"),
    ),
    TemplateDefinition(
        type="general",
        name="general-lesson-template.md",
        title="General Lesson Template",
        description="Template for general lessons learned",
        sections=_BASE_SECTIONS,
        tags=("general", "learning", "improvement"),
    ),
    TemplateDefinition(
        type="critical",
        name="critical-lesson-template.md",
        title="Critical Lesson Template",
        description="Template for critical lessons that need immediate attention",
        sections=_EXTENDED_SECTIONS + ("relatedLessons",),
        tags=("critical", "urgent", "blocker"),
    ),
)


# -----------------------------------------------------------------------------
# Table bundle
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class KeywordTables:
    """All vocabularies used by the pipeline, bundled so they can be swapped together."""

    version: int = TABLES_VERSION
    phases: tuple[str, ...] = PHASES
    priorities: tuple[str, ...] = PRIORITIES
    phase_keywords: KeywordTable = PHASE_KEYWORDS
    priority_keywords: KeywordTable = PRIORITY_KEYWORDS
    tag_vocabulary: tuple[str, ...] = TAG_VOCABULARY
    insight_triggers: tuple[str, ...] = INSIGHT_TRIGGERS
    recommendation_triggers: tuple[str, ...] = RECOMMENDATION_TRIGGERS
    project_markers: KeywordTable = PROJECT_MARKERS
    section_synonyms: dict[str, str] = field(default_factory=lambda: dict(SECTION_SYNONYMS))
    required_sections: tuple[str, ...] = REQUIRED_SECTIONS
    section_headings: dict[str, tuple[str, str]] = field(default_factory=lambda: dict(SECTION_HEADINGS))
    header_fields: tuple[str, ...] = HEADER_FIELDS
    category_keywords: KeywordTable = CATEGORY_KEYWORDS
    priority_categories: dict[str, str] = field(default_factory=lambda: dict(PRIORITY_CATEGORIES))
    impact_dimension_keywords: KeywordTable = IMPACT_DIMENSION_KEYWORDS
    impact_category_keywords: KeywordTable = IMPACT_CATEGORY_KEYWORDS
    priority_weights: dict[str, int] = field(default_factory=lambda: dict(PRIORITY_WEIGHTS))
    phase_weights: dict[str, int] = field(default_factory=lambda: dict(PHASE_WEIGHTS))
    impact_signals: tuple[tuple[tuple[str, ...], int], ...] = IMPACT_SIGNALS
    quality_bands: tuple[tuple[str, int], ...] = QUALITY_BANDS
    impact_bands: tuple[tuple[str, int], ...] = IMPACT_BANDS
    template_definitions: tuple[TemplateDefinition, ...] = TEMPLATE_DEFINITIONS

    def with_overrides(self, overrides: dict[str, Any]) -> "KeywordTables":
        """Return a copy with the named tables replaced.

        Values arrive as parsed TOML: keyword tables as ``{label: [keywords]}``
        mappings (order preserved), vocabularies as lists, weights as mappings.
        """
        known = {f.name: f for f in fields(self)}
        changes: dict[str, Any] = {}
        for name, value in overrides.items():
            if name not in known or name in ("version", "template_definitions"):
                raise ValueError(f"unknown table: {name}")
            current = getattr(self, name)
            changes[name] = _coerce_like(current, value, name)
        return replace(self, **changes)


def _coerce_like(current: Any, value: Any, name: str) -> Any:
    if name in ("impact_signals", "quality_bands", "impact_bands"):
        if not isinstance(value, dict):
            raise TypeError(f"{name} must be a table")
        if name == "impact_signals":
            # {bonus-name = {keywords = [...], bonus = N}}
            return tuple(
                (tuple(str(k) for k in entry["keywords"]), int(entry["bonus"])) for entry in value.values()
            )
        return tuple((str(label), int(bound)) for label, bound in value.items())

    if isinstance(current, dict):
        if not isinstance(value, dict):
            raise TypeError(f"{name} must be a table")
        if name == "section_headings":
            return {str(k): (str(v[0]), str(v[1])) for k, v in value.items()}
        if name in ("priority_weights", "phase_weights"):
            return {str(k): int(v) for k, v in value.items()}
        return {str(k): str(v) for k, v in value.items()}

    if current and isinstance(current[0], tuple):
        if not isinstance(value, dict):
            raise TypeError(f"{name} must be a table")
        return tuple((str(label), tuple(str(k) for k in keywords)) for label, keywords in value.items())

    if not isinstance(value, list):
        raise TypeError(f"{name} must be an array")
    return tuple(str(v) for v in value)


DEFAULT_TABLES = KeywordTables()


def match_keyword_table(text: str, table: KeywordTable, default: str) -> str:
    """Return the first label whose keyword list has a substring hit in ``text``."""
    for label, keywords in table:
        if any(keyword in text for keyword in keywords):
            return label
    return default
