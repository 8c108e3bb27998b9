"""Inputs passed to an action that its action.yml does not declare.

Only actions present in the reference schema are validated; an unknown
action has no ground truth and is never flagged.
"""

from workflowlint.rules.base import Category, Finding, RuleMetadata, ScanContext, Severity
from workflowlint.rules.sections import WithBlockTracker

METADATA = (
    RuleMetadata(
        "invalid-action-input",
        Severity.HIGH,
        Category.SYNTAX,
        "with: key not declared by the action",
        "actions",
    ),
)


def find_invalid_action_inputs(context: ScanContext) -> list[Finding]:
    if not context.reference.actions:
        return []

    tracker = WithBlockTracker()
    findings = []

    for idx, line in enumerate(context.lines):
        found = tracker.feed(line, idx + 1)
        if found is None:
            continue

        valid = context.reference.action_inputs(found.action)
        if valid is None or found.name in valid:
            continue

        findings.append(
            Finding(
                rule_id="invalid-action-input",
                severity=Severity.HIGH,
                category=Category.SYNTAX,
                message_key="invalid_action_input",
                line=idx + 1,
                column=line.find(found.name) + 1,
                snippet=line.strip(),
                docs=f"https://github.com/{found.action}",
                params=(found.name, found.action, valid),
            )
        )

    return findings
