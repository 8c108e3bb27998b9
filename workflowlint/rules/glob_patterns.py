"""Regex escapes inside branch, tag and path filters.

Filters are glob patterns. `\\d`, `\\w` and `\\s` (and their negations) are
regex syntax the runner treats literally, so the filter silently never
matches.
"""

import re

from workflowlint.rules.base import Category, Finding, RuleMetadata, ScanContext, Severity
from workflowlint.rules.sections import GlobSectionTracker

DOCS = (
    "https://docs.github.com/en/actions/using-workflows/"
    "workflow-syntax-for-github-actions#filter-pattern-cheat-sheet"
)

REGEX_ESCAPE = re.compile(r"\\[dDwWsS]")

METADATA = (
    RuleMetadata(
        "invalid-glob-pattern",
        Severity.HIGH,
        Category.SYNTAX,
        "Regex escape inside a branches/tags/paths filter",
    ),
)


def find_invalid_glob_patterns(context: ScanContext) -> list[Finding]:
    tracker = GlobSectionTracker()
    findings = []

    for idx, line in enumerate(context.lines):
        for item in tracker.feed(line):
            match = REGEX_ESCAPE.search(item.pattern)
            if not match:
                continue
            token = match.group(0)
            findings.append(
                Finding(
                    rule_id="invalid-glob-pattern",
                    severity=Severity.HIGH,
                    category=Category.SYNTAX,
                    message_key="invalid_glob_pattern",
                    line=idx + 1,
                    column=line.find(token) + 1,
                    snippet=line.strip(),
                    docs=DOCS,
                    params=(token,),
                )
            )

    return findings
