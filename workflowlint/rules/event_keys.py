"""Unknown keys under an event trigger (`branch:` instead of `branches:`)."""

from workflowlint.rules.base import Category, Finding, RuleMetadata, ScanContext, Severity
from workflowlint.rules.sections import EventKeyTracker

DOCS = "https://docs.github.com/en/actions/using-workflows/workflow-syntax-for-github-actions"

METADATA = (
    RuleMetadata(
        "unknown-event-key",
        Severity.HIGH,
        Category.SYNTAX,
        "Key not valid for its event trigger",
        "schema",
    ),
)


def find_unknown_event_keys(context: ScanContext) -> list[Finding]:
    events = context.reference.events
    if not events:
        return []

    tracker = EventKeyTracker(events)
    findings = []

    for idx, line in enumerate(context.lines):
        found = tracker.feed(line)
        if found is None:
            continue

        valid = context.reference.event_keys(found.event)
        # Empty key set means the event's keys are unknown
        if not valid or found.key in valid:
            continue

        findings.append(
            Finding(
                rule_id="unknown-event-key",
                severity=Severity.HIGH,
                category=Category.SYNTAX,
                message_key="unknown_event_key",
                line=idx + 1,
                column=line.find(found.key) + 1,
                snippet=line.strip(),
                docs=DOCS,
                params=(found.key, found.event, valid),
            )
        )

    return findings
