"""Stateless per-line security checks.

Every raw line is checked independently of any section state. The only
document-level facts, whether the workflow uses `pull_request_target` and
checks out the PR head SHA, are computed once before the scan.
"""

import re
from collections.abc import Iterator

from workflowlint.rules.base import Category, Finding, RuleMetadata, ScanContext, Severity

DOCS_INJECTION = (
    "https://docs.github.com/en/actions/security-guides/"
    "security-hardening-for-github-actions#understanding-the-risk-of-script-injections"
)
DOCS_SECRETS = (
    "https://docs.github.com/en/actions/security-guides/using-secrets-in-github-actions"
)
DOCS_PWN_REQUESTS = (
    "https://securitylab.github.com/research/github-actions-preventing-pwn-requests/"
)
DOCS_PERMISSIONS = (
    "https://docs.github.com/en/actions/security-guides/"
    "automatic-token-authentication#permissions-for-the-github_token"
)
DOCS_THIRD_PARTY = (
    "https://docs.github.com/en/actions/security-guides/"
    "security-hardening-for-github-actions#using-third-party-actions"
)
DOCS_CURL_PIPE = "https://www.idontplaydarts.com/2016/04/detecting-curl-pipe-bash-server-side/"
DOCS_RUNNERS = (
    "https://docs.github.com/en/actions/using-github-hosted-runners/about-github-hosted-runners"
)

SECRETS_EXPRESSION = "${{ secrets."
REDACTED = "***REDACTED***"

MUTABLE_REFS = frozenset({"main", "master", "latest", "dev", "HEAD"})

USES_REF = re.compile(r"""uses:\s*['"]?([^@\s'"]+)@([^\s#'"]+)""")
PIPE_TO_SHELL = re.compile(r"\b(curl|wget)\s+[^|]*\|\s*(ba)?sh\b")
UNSAFE_REF = re.compile(r"ref:\s*\$\{\{\s*github\.event\.pull_request\.head\.sha\s*\}\}")
RUNS_ON = re.compile(r"runs-on:\s*(\S.*)$")

METADATA = (
    RuleMetadata(
        "expression-injection",
        Severity.CRITICAL,
        Category.SECURITY,
        "User-controlled context interpolated into a run script",
        "contexts",
    ),
    RuleMetadata(
        "hardcoded-secret",
        Severity.CRITICAL,
        Category.SECURITY,
        "Credential matching a known secret signature",
        "secrets",
    ),
    RuleMetadata(
        "dangerous-trigger",
        Severity.CRITICAL,
        Category.SECURITY,
        "pull_request_target (critical) or workflow_run (high) trigger",
    ),
    RuleMetadata(
        "excessive-permissions", Severity.HIGH, Category.SECURITY, "write-all token permissions"
    ),
    RuleMetadata(
        "unpinned-action",
        Severity.HIGH,
        Category.SECURITY,
        "Action pinned to a mutable branch ref",
    ),
    RuleMetadata(
        "dangerous-command", Severity.HIGH, Category.SECURITY, "curl/wget piped into a shell"
    ),
    RuleMetadata(
        "unsafe-checkout",
        Severity.CRITICAL,
        Category.SECURITY,
        "PR head checkout in a pull_request_target workflow",
    ),
    RuleMetadata(
        "invalid-runner",
        Severity.MEDIUM,
        Category.SYNTAX,
        "runs-on label not in the runner catalog",
        "runners",
    ),
)


def runner_labels(value: str) -> list[str]:
    """Runner labels written after `runs-on:`; empty when not checkable.

    Expressions, matrix references and mapping forms (`group:`/`labels:`)
    cannot be resolved from a single line and yield no labels.
    """
    value = value.replace('"', "").replace("'", "").split("#")[0].strip()
    if not value or value.startswith("{") or "${{" in value or "matrix." in value:
        return []
    if value.startswith("["):
        return [label.strip() for label in value.strip("[]").split(",") if label.strip()]
    return [value.split()[0]]


class LineScanner:
    """Runs every stateless check over each line, in line order."""

    def __init__(self, context: ScanContext):
        self.context = context
        self.reference = context.reference
        text = context.document.text
        self.checkout_is_unsafe = "pull_request_target" in text and bool(
            UNSAFE_REF.search(text)
        )

    def scan(self) -> list[Finding]:
        findings: list[Finding] = []
        checks = (
            self.expression_injection,
            self.hardcoded_secret,
            self.dangerous_trigger,
            self.excessive_permissions,
            self.unpinned_action,
            self.dangerous_command,
            self.unsafe_checkout,
            self.invalid_runner,
        )
        for idx, line in enumerate(self.context.lines):
            for check in checks:
                findings.extend(check(line, idx + 1))
        return findings

    @staticmethod
    def _finding(
        rule_id: str,
        severity: Severity,
        key: str,
        line: str,
        line_num: int,
        column: int,
        docs: str,
        *params,
        category: Category = Category.SECURITY,
        snippet: str | None = None,
    ) -> Finding:
        return Finding(
            rule_id=rule_id,
            severity=severity,
            category=category,
            message_key=key,
            line=line_num,
            column=column,
            snippet=line.strip() if snippet is None else snippet,
            docs=docs,
            params=params,
        )

    def expression_injection(self, line: str, line_num: int) -> Iterator[Finding]:
        if "run:" not in line and not line.strip().startswith("echo "):
            return
        for ctx in self.reference.dangerous_contexts:
            if ctx in line:
                yield self._finding(
                    "expression-injection",
                    Severity.CRITICAL,
                    "expression_injection",
                    line,
                    line_num,
                    line.find(ctx) + 1,
                    DOCS_INJECTION,
                    ctx,
                )

    def hardcoded_secret(self, line: str, line_num: int) -> Iterator[Finding]:
        if SECRETS_EXPRESSION in line:
            return
        for pattern in self.reference.secret_patterns:
            match = pattern.regex.search(line)
            if not match:
                continue
            yield self._finding(
                "hardcoded-secret",
                Severity.CRITICAL,
                "hardcoded_secret",
                line,
                line_num,
                match.start() + 1,
                DOCS_SECRETS,
                pattern.name,
                snippet=pattern.regex.sub(REDACTED, line.strip(), count=1),
            )

    def dangerous_trigger(self, line: str, line_num: int) -> Iterator[Finding]:
        if "pull_request_target" in line:
            yield self._finding(
                "dangerous-trigger",
                Severity.CRITICAL,
                "dangerous_trigger_prt",
                line,
                line_num,
                line.find("pull_request_target") + 1,
                DOCS_PWN_REQUESTS,
            )
        if "workflow_run" in line:
            yield self._finding(
                "dangerous-trigger",
                Severity.HIGH,
                "dangerous_trigger_wr",
                line,
                line_num,
                line.find("workflow_run") + 1,
                DOCS_PWN_REQUESTS,
            )

    def excessive_permissions(self, line: str, line_num: int) -> Iterator[Finding]:
        if "write-all" in line:
            yield self._finding(
                "excessive-permissions",
                Severity.HIGH,
                "excessive_permissions",
                line,
                line_num,
                1,
                DOCS_PERMISSIONS,
            )

    def unpinned_action(self, line: str, line_num: int) -> Iterator[Finding]:
        match = USES_REF.search(line)
        if match and match.group(2) in MUTABLE_REFS:
            yield self._finding(
                "unpinned-action",
                Severity.HIGH,
                "unpinned_action",
                line,
                line_num,
                line.find("uses:") + 1,
                DOCS_THIRD_PARTY,
                match.group(1),
                match.group(2),
            )

    def dangerous_command(self, line: str, line_num: int) -> Iterator[Finding]:
        if PIPE_TO_SHELL.search(line):
            yield self._finding(
                "dangerous-command",
                Severity.HIGH,
                "dangerous_command",
                line,
                line_num,
                1,
                DOCS_CURL_PIPE,
            )

    def unsafe_checkout(self, line: str, line_num: int) -> Iterator[Finding]:
        if self.checkout_is_unsafe and "actions/checkout" in line:
            yield self._finding(
                "unsafe-checkout",
                Severity.CRITICAL,
                "unsafe_checkout",
                line,
                line_num,
                1,
                DOCS_PWN_REQUESTS,
            )

    def invalid_runner(self, line: str, line_num: int) -> Iterator[Finding]:
        runners = self.reference.runners
        match = RUNS_ON.search(line)
        if not runners or not match:
            return
        for label in runner_labels(match.group(1)):
            if label in runners:
                continue
            yield self._finding(
                "invalid-runner",
                Severity.MEDIUM,
                "invalid_runner",
                line,
                line_num,
                line.find(label) + 1,
                DOCS_RUNNERS,
                label,
                category=Category.SYNTAX,
            )


def scan_lines(context: ScanContext) -> list[Finding]:
    return LineScanner(context).scan()
