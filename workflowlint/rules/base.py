"""Base contracts shared by every workflow rule."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from workflowlint.parser import Document
    from workflowlint.reference import ReferenceData


class Severity(Enum):
    """Standardized severity levels, worst first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"


class Category(Enum):
    """What kind of problem a finding describes."""

    SECURITY = "security"
    SYNTAX = "syntax"


SEVERITY_ORDER = [s.value for s in Severity]


@dataclass(frozen=True)
class ScanContext:
    """Immutable input handed to every rule: the parsed document and the reference data."""

    document: "Document"
    reference: "ReferenceData"

    @property
    def lines(self) -> tuple[str, ...]:
        return self.document.lines


@dataclass
class Finding:
    """One detected issue.

    Rules fill in the locale-agnostic part (rule id, position, message key
    and typed params). `title`, `message` and `recommendation` stay empty
    until the engine renders them through the message catalog.
    """

    rule_id: str
    severity: Severity
    category: Category
    message_key: str
    line: int

    column: int = 1
    snippet: str | None = None
    docs: str | None = None
    params: tuple[Any, ...] = ()

    title: str = ""
    message: str = ""
    recommendation: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to the public JSON shape (camelCase keys, optional keys omitted)."""
        result: dict[str, Any] = {
            "ruleId": self.rule_id,
            "severity": self.severity.value,
            "category": self.category.value,
            "title": self.title,
            "message": self.message,
            "line": self.line,
            "column": self.column,
        }
        if self.snippet is not None:
            result["snippet"] = self.snippet
        result["recommendation"] = self.recommendation
        if self.docs:
            result["docs"] = self.docs
        return result


@dataclass
class LintResult:
    """Aggregated outcome of one analysis."""

    findings: list[Finding]
    summary: dict[str, int]
    score: int
    grade: str
    duration: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "findings": [f.to_dict() for f in self.findings],
            "summary": dict(self.summary),
            "score": self.score,
            "grade": self.grade,
            "duration": self.duration,
        }


@dataclass(frozen=True)
class RuleMetadata:
    """Static description of a rule id, used by `wflint rules`."""

    rule_id: str
    severity: Severity
    category: Category
    description: str
    requires: str | None = None


RuleFunction = Callable[[ScanContext], list[Finding]]
