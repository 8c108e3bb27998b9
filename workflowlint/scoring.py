"""Finding aggregation: severity summary, score and letter grade."""

from collections.abc import Iterable

from workflowlint.rules.base import SEVERITY_ORDER, Finding, LintResult, Severity

MAX_SCORE = 100

DEDUCTIONS = {
    Severity.CRITICAL: 25,
    Severity.HIGH: 15,
    Severity.MEDIUM: 10,
    Severity.LOW: 5,
    Severity.INFO: 0,
}

# (minimum score, grade), checked top to bottom
GRADES = ((90, "A"), (80, "B"), (70, "C"), (60, "D"))


def summarize(findings: Iterable[Finding]) -> dict[str, int]:
    """Count findings per severity; every severity key is present."""
    summary = dict.fromkeys(SEVERITY_ORDER, 0)
    for finding in findings:
        summary[finding.severity.value] += 1
    return summary


def compute_score(findings: Iterable[Finding]) -> int:
    """100 minus every finding's deduction, clamped to [0, 100]."""
    score = MAX_SCORE - sum(DEDUCTIONS[f.severity] for f in findings)
    return max(0, min(MAX_SCORE, score))


def grade_for(score: int) -> str:
    for minimum, grade in GRADES:
        if score >= minimum:
            return grade
    return "F"


def aggregate(findings: list[Finding], duration: float = 0.0) -> LintResult:
    """Build the LintResult, keeping findings in insertion order."""
    score = compute_score(findings)
    return LintResult(
        findings=list(findings),
        summary=summarize(findings),
        score=score,
        grade=grade_for(score),
        duration=duration,
    )
