"""Analysis engine.

`lint()` is a pure function of (text, locale, reference data): check the
input at the boundary, parse, run every pass in order over the same
document, render messages, then score. No I/O happens here once the
reference data is loaded.
"""

import time
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Any

from workflowlint.errors import InputTooLargeError, MissingInputError, ParseError
from workflowlint.messages import localize
from workflowlint.parser import parse
from workflowlint.reference import ReferenceData, load_reference_data
from workflowlint.rules import PASSES
from workflowlint.rules.base import Category, Finding, LintResult, ScanContext, Severity
from workflowlint.scoring import aggregate, summarize
from workflowlint.utils.logging import logger

DOCS_YAML = "https://yaml.org/spec/"


@dataclass(frozen=True)
class Limits:
    """Input bounds and output shaping; 0 disables a limit."""

    max_input_bytes: int = 1024 * 1024
    max_lines: int = 20000
    max_snippet_chars: int = 200

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "Limits":
        limits = config.get("limits", {})
        output = config.get("output", {})
        return cls(
            max_input_bytes=limits.get("max_input_bytes", cls.max_input_bytes),
            max_lines=limits.get("max_lines", cls.max_lines),
            max_snippet_chars=output.get("max_snippet_chars", cls.max_snippet_chars),
        )


DEFAULT_LIMITS = Limits()


@lru_cache(maxsize=1)
def default_reference() -> ReferenceData:
    """The bundled snapshot, loaded once per process."""
    return load_reference_data()


def check_input(text: str | None, limits: Limits = DEFAULT_LIMITS) -> str:
    """Reject missing or oversized input before any analysis.

    Raises:
        MissingInputError: If no text was supplied
        InputTooLargeError: If the text exceeds a configured limit
    """
    if text is None or text == "":
        raise MissingInputError()

    size = len(text.encode("utf-8"))
    if limits.max_input_bytes and size > limits.max_input_bytes:
        raise InputTooLargeError(
            f"Workflow is {size} bytes; the limit is {limits.max_input_bytes}",
            limit="max_input_bytes",
            actual=size,
            maximum=limits.max_input_bytes,
        )

    line_count = text.count("\n") + 1
    if limits.max_lines and line_count > limits.max_lines:
        raise InputTooLargeError(
            f"Workflow has {line_count} lines; the limit is {limits.max_lines}",
            limit="max_lines",
            actual=line_count,
            maximum=limits.max_lines,
        )
    return text


def _truncate(finding: Finding, max_chars: int) -> Finding:
    snippet = finding.snippet
    if not max_chars or snippet is None or len(snippet) <= max_chars:
        return finding
    return replace(finding, snippet=snippet[: max(0, max_chars - 3)] + "...")


def _invalid_yaml(error: ParseError, locale: str, started: float) -> LintResult:
    finding = localize(
        Finding(
            rule_id="invalid-yaml",
            severity=Severity.CRITICAL,
            category=Category.SYNTAX,
            message_key="invalid_yaml",
            line=1,
            column=1,
            docs=DOCS_YAML,
            params=(str(error),),
        ),
        locale,
    )
    return LintResult(
        findings=[finding],
        summary=summarize([finding]),
        score=0,
        grade="F",
        duration=(time.perf_counter() - started) * 1000,
    )


def run_passes(context: ScanContext) -> list[Finding]:
    """Every pass in execution order, without rendering."""
    findings: list[Finding] = []
    for rule_pass in PASSES:
        findings.extend(rule_pass(context))
    return findings


def lint(
    text: str | None,
    locale: str = "en",
    reference: ReferenceData | None = None,
    limits: Limits = DEFAULT_LIMITS,
) -> LintResult:
    """Analyze one workflow document.

    Args:
        text: Raw workflow YAML
        locale: Message language ("en" or "tr"; others fall back to "en")
        reference: Reference data; defaults to the bundled snapshot
        limits: Input bounds and snippet length

    Returns:
        LintResult with findings in pass order, summary, score and grade

    Raises:
        MissingInputError: If text is None or empty
        InputTooLargeError: If text exceeds `limits`
    """
    started = time.perf_counter()
    text = check_input(text, limits)
    reference = reference if reference is not None else default_reference()

    try:
        document = parse(text)
    except ParseError as e:
        logger.debug(f"Workflow failed to parse: {e}")
        return _invalid_yaml(e, locale, started)

    context = ScanContext(document=document, reference=reference)
    findings = [
        _truncate(localize(finding, locale), limits.max_snippet_chars)
        for finding in run_passes(context)
    ]

    result = aggregate(findings, duration=(time.perf_counter() - started) * 1000)
    logger.debug(
        f"Linted {len(document.lines)} lines: {len(findings)} findings, "
        f"score {result.score} ({result.grade}) in {result.duration:.2f}ms"
    )
    return result
