"""
Data models for the Product SEO Engine.

This module defines the structures passed into and returned from the
compliance engine and the content health scorer. All of them are created
per invocation; the engine keeps no state between calls.
"""

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Mapping, Optional


# Content record fields in the order the repairer processes them.
RECORD_FIELDS: tuple[str, ...] = (
    "meta_title",
    "meta_description",
    "long_description",
    "short_description",
    "permalink",
    "alt_text",
    "focus_keywords",
)


@dataclass(frozen=True)
class ProductDescriptor:
    """Immutable description of the product content is generated for."""
    name: str
    categories: tuple[str, ...] = ()
    existing_meta: Mapping[str, str] = field(default_factory=dict)
    store_url: str = ""

    @property
    def category_text(self) -> str:
        """Category names joined for keyword derivation."""
        return ", ".join(c for c in self.categories if c)


@dataclass
class ContentRecord:
    """Structured, rule-compliant SEO content for one product."""
    meta_title: str = ""
    meta_description: str = ""
    short_description: str = ""
    long_description: str = ""
    alt_text: str = ""
    permalink: str = ""
    focus_keywords: str = ""

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "ContentRecord":
        """Build a record from a mapping, coercing missing/None values to ''."""
        if not data:
            return cls()
        values = {}
        for f in fields(cls):
            value = data.get(f.name)
            values[f.name] = "" if value is None else str(value)
        return cls(**values)

    def to_dict(self) -> dict[str, str]:
        return asdict(self)

    @property
    def focus_keyword_list(self) -> list[str]:
        """Focus keywords split back into individual phrases."""
        return [k.strip() for k in self.focus_keywords.split(",") if k.strip()]

    @property
    def is_complete(self) -> bool:
        """Check that every field carries content."""
        return all(getattr(self, name).strip() for name in RECORD_FIELDS)


class RuleKind(str, Enum):
    """Constraint kinds a compliance rule can express."""
    MAX_LENGTH = "max_length"
    MIN_LENGTH = "min_length"
    MIN_WORD_COUNT = "min_word_count"
    MUST_START_WITH_KEYWORD = "must_start_with_keyword"
    DENSITY_BAND = "density_band"
    MIN_INTERNAL_LINKS = "min_internal_links"
    MIN_EXTERNAL_FOLLOW_LINKS = "min_external_follow_links"


class Severity(str, Enum):
    """How a rule violation is treated."""
    HARD = "hard"  # must be fixed by the repairer
    SOFT = "soft"  # advisory; surfaced as a warning only


@dataclass(frozen=True)
class ComplianceRule:
    """A single (field, constraint-kind, bounds) rule."""
    field: str
    kind: RuleKind
    bounds: tuple[float, ...] = ()
    severity: Severity = Severity.HARD

    def describe(self) -> str:
        """Human-readable summary of the rule."""
        if self.kind == RuleKind.DENSITY_BAND and len(self.bounds) == 2:
            return f"{self.field}: keyword density {self.bounds[0]}%-{self.bounds[1]}%"
        if self.bounds:
            bound = self.bounds[0]
            bound_text = str(int(bound)) if float(bound).is_integer() else str(bound)
            return f"{self.field}: {self.kind.value} {bound_text}"
        return f"{self.field}: {self.kind.value}"


class FieldStatus(str, Enum):
    """Outcome of compliance processing for one field."""
    PASS = "pass"
    REPAIRED = "repaired"
    WARNING = "warning"


@dataclass
class FieldOutcome:
    """Per-field compliance outcome."""
    status: FieldStatus
    detail: str = ""


@dataclass
class ComplianceReport:
    """Per-invocation report of what the repairer did and what it flagged."""
    outcomes: dict[str, FieldOutcome] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)

    def record(self, field_name: str, status: FieldStatus, detail: str = "") -> None:
        self.outcomes[field_name] = FieldOutcome(status=status, detail=detail)

    def flag(self, field_name: str, message: str) -> None:
        """Attach a soft warning to a field.

        A field that passed becomes a warning; a repaired field stays
        repaired and carries the message in its detail.
        """
        self.warnings.append(f"{field_name}: {message}")
        outcome = self.outcomes.get(field_name)
        if outcome is None:
            self.outcomes[field_name] = FieldOutcome(FieldStatus.WARNING, message)
        elif outcome.status == FieldStatus.PASS:
            outcome.status = FieldStatus.WARNING
            outcome.detail = message
        else:
            outcome.detail = f"{outcome.detail}; {message}" if outcome.detail else message

    def status_of(self, field_name: str) -> Optional[FieldStatus]:
        outcome = self.outcomes.get(field_name)
        return outcome.status if outcome else None

    @property
    def repaired_fields(self) -> list[str]:
        return [
            name for name, outcome in self.outcomes.items()
            if outcome.status == FieldStatus.REPAIRED
        ]

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def to_dict(self) -> dict:
        return {
            "fields": {
                name: {"status": outcome.status.value, "detail": outcome.detail}
                for name, outcome in self.outcomes.items()
            },
            "warnings": list(self.warnings),
        }


@dataclass
class DensityResult:
    """Keyword occurrence density inside a body of text."""
    count: int
    word_count: int
    density_percent: float


class CheckStatus(str, Enum):
    """Health status of one stored field."""
    PRESENT = "present"
    POOR = "poor"
    MISSING = "missing"


class OverallStatus(str, Enum):
    """Aggregate health status of one product."""
    COMPLETE = "complete"
    NEEDS_ATTENTION = "needs_attention"
    CRITICAL = "critical"


@dataclass
class FieldCheck:
    """Result of checking one stored field."""
    field: str
    status: CheckStatus
    reason: Optional[str] = None
    threshold: Optional[int] = None


@dataclass
class HealthCheckResult:
    """Content health of one stored product."""
    product_id: Any
    product_name: str
    overall_status: OverallStatus
    seo_score: int
    checks: list[FieldCheck] = field(default_factory=list)
    last_checked: Optional[str] = None

    @property
    def missing_fields(self) -> list[str]:
        return [c.field for c in self.checks if c.status == CheckStatus.MISSING]

    @property
    def poor_fields(self) -> list[str]:
        return [c.field for c in self.checks if c.status == CheckStatus.POOR]

    def check_for(self, field_name: str) -> Optional[FieldCheck]:
        return next((c for c in self.checks if c.field == field_name), None)

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "overall_status": self.overall_status.value,
            "seo_score": self.seo_score,
            "missing_fields": self.missing_fields,
            "checks": [
                {
                    "field": c.field,
                    "status": c.status.value,
                    "reason": c.reason,
                    "threshold": c.threshold,
                }
                for c in self.checks
            ],
            "last_checked": self.last_checked,
        }


@dataclass
class HealthSummary:
    """Aggregate health of a product set."""
    total: int
    complete: int
    needs_attention_one_plus: int
    critical: int
    common_missing_fields: list[tuple[str, int]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "complete": self.complete,
            "needs_attention_one_plus": self.needs_attention_one_plus,
            "critical": self.critical,
            "common_missing_fields": [
                {"field": name, "count": count}
                for name, count in self.common_missing_fields
            ],
        }
