"""Structural validation of the parsed workflow tree.

Checks the shape of the document against the reference schema: required
sections, valid events, permission scopes and levels, cron arity, and the
required keys of each job. Every access is guarded; a field that is absent
or of an unexpected type skips its check instead of failing.
"""

from typing import Any

from workflowlint.rules.base import (
    Category,
    Finding,
    RuleMetadata,
    ScanContext,
    Severity,
)

DOCS_JOBS = "https://docs.github.com/en/actions/using-workflows/workflow-syntax-for-github-actions#jobs"
DOCS_EVENTS = "https://docs.github.com/en/actions/using-workflows/events-that-trigger-workflows"
DOCS_PERMISSIONS = (
    "https://docs.github.com/en/actions/security-guides/"
    "automatic-token-authentication#permissions-for-the-github_token"
)
DOCS_SCHEDULE = (
    "https://docs.github.com/en/actions/using-workflows/events-that-trigger-workflows#schedule"
)
DOCS_RUNS_ON = (
    "https://docs.github.com/en/actions/using-workflows/"
    "workflow-syntax-for-github-actions#jobsjob_idruns-on"
)
DOCS_STEPS = (
    "https://docs.github.com/en/actions/using-workflows/"
    "workflow-syntax-for-github-actions#jobsjob_idsteps"
)

VALID_PERMISSION_LEVELS = ("read", "write", "none")
CRON_FIELDS = 5

METADATA = (
    RuleMetadata("missing-jobs", Severity.HIGH, Category.SYNTAX, "Workflow has no jobs mapping"),
    RuleMetadata(
        "invalid-event", Severity.HIGH, Category.SYNTAX, "Unknown trigger event under on:", "schema"
    ),
    RuleMetadata(
        "invalid-permission",
        Severity.HIGH,
        Category.SYNTAX,
        "Unknown scope in top-level permissions",
        "schema",
    ),
    RuleMetadata(
        "invalid-permission-level",
        Severity.MEDIUM,
        Category.SYNTAX,
        "Permission level other than read, write or none",
    ),
    RuleMetadata(
        "invalid-cron", Severity.HIGH, Category.SYNTAX, "Schedule cron without exactly 5 fields"
    ),
    RuleMetadata("missing-runs-on", Severity.HIGH, Category.SYNTAX, "Job without runs-on"),
    RuleMetadata("missing-steps", Severity.HIGH, Category.SYNTAX, "Job without steps"),
)


def _syntax(rule_id: str, severity: Severity, key: str, line: int, docs: str, *params: Any) -> Finding:
    return Finding(
        rule_id=rule_id,
        severity=severity,
        category=Category.SYNTAX,
        message_key=key,
        line=line,
        column=1,
        docs=docs,
        params=params,
    )


def _absent(value: Any) -> bool:
    # Empty sequences and mappings count as present; null, "", false and 0 do not.
    return value is None or value is False or value == "" or value == 0


def check_jobs_section(context: ScanContext) -> list[Finding]:
    """Flag a document without a top-level `jobs` mapping."""
    if isinstance(context.document.get("jobs"), dict):
        return []

    line = context.document.find_line(lambda l: l.strip().startswith("on:"))
    return [_syntax("missing-jobs", Severity.HIGH, "missing_jobs", line, DOCS_JOBS)]


def check_events(context: ScanContext) -> list[Finding]:
    """Flag keys of a mapping-typed `on` that are not known events."""
    on = context.document.get("on")
    events = context.reference.events
    if not isinstance(on, dict) or not events:
        return []

    valid = tuple(events)
    findings = []
    for event in on:
        name = str(event)
        if name not in events:
            line = context.document.find_key_line(name)
            findings.append(
                _syntax("invalid-event", Severity.HIGH, "invalid_event", line, DOCS_EVENTS, name, valid)
            )
    return findings


def check_permissions(context: ScanContext) -> list[Finding]:
    """Validate scope names and levels of a mapping-typed top-level `permissions`."""
    permissions = context.document.get("permissions")
    if not isinstance(permissions, dict):
        return []

    scopes = context.reference.permissions
    valid_scopes = tuple(sorted(scopes))
    findings = []
    for scope, level in permissions.items():
        name = str(scope)
        if scopes and name not in scopes:
            line = context.document.find_key_line(name)
            findings.append(
                _syntax(
                    "invalid-permission",
                    Severity.HIGH,
                    "invalid_permission",
                    line,
                    DOCS_PERMISSIONS,
                    name,
                    valid_scopes,
                )
            )

        if isinstance(level, str) and level not in VALID_PERMISSION_LEVELS:
            line = context.document.find_line(lambda l, n=name, v=level: f"{n}:" in l and v in l)
            findings.append(
                _syntax(
                    "invalid-permission-level",
                    Severity.MEDIUM,
                    "invalid_permission_level",
                    line,
                    DOCS_PERMISSIONS,
                    level,
                )
            )
    return findings


def check_schedule(context: ScanContext) -> list[Finding]:
    """Every `on.schedule[].cron` must have exactly five fields."""
    on = context.document.get("on")
    schedule = on.get("schedule") if isinstance(on, dict) else None
    if not isinstance(schedule, list):
        return []

    findings = []
    for item in schedule:
        cron = item.get("cron") if isinstance(item, dict) else None
        if not isinstance(cron, str) or not cron:
            continue
        if len(cron.split()) != CRON_FIELDS:
            line = context.document.find_line(lambda l, c=cron: c in l)
            findings.append(
                _syntax("invalid-cron", Severity.HIGH, "invalid_cron", line, DOCS_SCHEDULE, cron)
            )
    return findings


def check_jobs(context: ScanContext) -> list[Finding]:
    """Each job needs `runs-on` and `steps` unless it calls a reusable workflow."""
    jobs = context.document.get("jobs")
    if not isinstance(jobs, dict):
        return []

    findings = []
    for job_key, job in jobs.items():
        name = str(job_key)
        body = job if isinstance(job, dict) else {}
        if body.get("uses"):
            continue

        line = context.document.find_key_line(name)
        if _absent(body.get("runs-on")):
            findings.append(
                _syntax("missing-runs-on", Severity.HIGH, "missing_runs_on", line, DOCS_RUNS_ON, name)
            )
        if _absent(body.get("steps")):
            findings.append(
                _syntax("missing-steps", Severity.HIGH, "missing_steps", line, DOCS_STEPS, name)
            )
    return findings


def validate_structure(context: ScanContext) -> list[Finding]:
    """Run every structural check in a fixed order."""
    findings: list[Finding] = []
    for check in (check_jobs_section, check_events, check_permissions, check_schedule, check_jobs):
        findings.extend(check(context))
    return findings
