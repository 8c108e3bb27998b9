"""Central UI handler for WorkflowLint.

Single source of truth for Rich console styling. Import this instead of
instantiating Console() in every command file.

Usage:
    from workflowlint.pipeline.ui import console, print_header, print_error

    console.print("[success]No findings[/success]")
    print_header("WORKFLOW LINT")
    print_error("Workflow text is required")
"""

import sys

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from workflowlint.rules.base import Finding, LintResult

WORKFLOWLINT_THEME = Theme({
    "info": "bold cyan",
    "warning": "bold yellow",
    "error": "bold red",
    "success": "bold green",
    "critical": "bold red",
    "high": "bold yellow",
    "medium": "bold blue",
    "low": "cyan",
    "path": "bold cyan",
    "dim": "dim white",
})

console = Console(theme=WORKFLOWLINT_THEME, force_terminal=sys.stdout.isatty())
err_console = Console(theme=WORKFLOWLINT_THEME, stderr=True)

GRADE_LEVELS = {"A": "success", "B": "low", "C": "medium", "D": "high", "F": "critical"}


def print_header(title: str) -> None:
    """Print a styled section header with horizontal rules."""
    console.rule(f"[bold]{title}[/bold]")


def print_error(msg: str) -> None:
    err_console.print(f"[error]ERROR:[/error] {msg}", highlight=False)


def print_warning(msg: str) -> None:
    err_console.print(f"[warning]WARNING:[/warning] {msg}", highlight=False)


def print_success(msg: str) -> None:
    console.print(f"[success]OK:[/success] {msg}", highlight=False)


def print_status_panel(status: str, message: str, detail: str, level: str = "info") -> None:
    """Print a status panel with colored border.

    Args:
        status: Status label (e.g., "GRADE A", "GRADE F")
        message: Main message line
        detail: Additional detail line
        level: One of "critical", "high", "medium", "low", "success", "info"
    """
    style_map = {
        "critical": ("bold red", "red"),
        "high": ("bold yellow", "yellow"),
        "medium": ("bold blue", "blue"),
        "low": ("cyan", "cyan"),
        "success": ("bold green", "green"),
        "info": ("bold cyan", "cyan"),
    }
    text_style, border_style = style_map.get(level, ("white", "white"))

    panel = Panel(
        Text.assemble(
            (f"STATUS: [{status}]\n", text_style),
            (f"{message}\n", border_style),
            (detail, border_style),
        ),
        border_style=border_style,
        expand=False,
    )
    console.print(panel)


def findings_table(findings: list[Finding]) -> Table:
    """One row per finding, in the order they were reported."""
    table = Table(show_header=True, header_style="bold", expand=False)
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Severity")
    table.add_column("Rule", style="path")
    table.add_column("Message", overflow="fold")

    for finding in findings:
        severity = finding.severity.value
        table.add_row(
            f"{finding.line}:{finding.column}",
            Text(severity.upper(), style=severity if severity != "info" else "dim"),
            finding.rule_id,
            Text(finding.message),
        )
    return table


def print_lint_result(result: LintResult, findings: list[Finding], source: str) -> None:
    """Render a lint result for humans.

    `findings` may be a filtered view of `result.findings`; the summary and
    score always describe the full result.
    """
    print_header(f"WORKFLOW LINT: {source}")

    if findings:
        console.print(findings_table(findings))
        for finding in findings:
            if finding.recommendation:
                console.print(
                    f"  line {finding.line} [{finding.rule_id}] Fix: {finding.recommendation}",
                    style="dim",
                    highlight=False,
                    markup=False,
                )
    else:
        console.print("[success]No findings to display[/success]")

    counts = ", ".join(f"{sev}: {count}" for sev, count in result.summary.items() if count)
    print_status_panel(
        f"GRADE {result.grade}",
        f"Score {result.score}/100",
        f"{len(result.findings)} findings ({counts or 'none'}) in {result.duration:.1f}ms",
        level=GRADE_LEVELS.get(result.grade, "info"),
    )
