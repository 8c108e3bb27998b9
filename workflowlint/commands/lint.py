"""Lint a GitHub Actions workflow file."""

import json
import sys

import click

from workflowlint import engine
from workflowlint.config_runtime import load_runtime_config
from workflowlint.errors import InputTooLargeError, MissingInputError
from workflowlint.messages import SUPPORTED_LOCALES
from workflowlint.pipeline.ui import console, print_error, print_lint_result, print_success
from workflowlint.reference import load_reference_data
from workflowlint.rules.base import SEVERITY_ORDER
from workflowlint.utils.error_handler import handle_exceptions
from workflowlint.utils.exit_codes import ExitCodes
from workflowlint.utils.helpers import save_json_file
from workflowlint.utils.logging import logger


def read_workflow(path: str) -> str:
    """Read workflow text from `path`, or stdin for `-`."""
    if path == "-":
        return click.get_text_stream("stdin").read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def exit_code_for(summary: dict[str, int], score: int, fail_under: int | None) -> int:
    """Exit code from the worst severity, raised to 1 when the score misses `fail_under`."""
    code = ExitCodes.from_summary(summary)
    if fail_under is not None and score < fail_under:
        code = max(code, ExitCodes.HIGH_SEVERITY)
    return code


@click.command("lint")
@click.argument(
    "workflow",
    required=False,
    default="-",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True),
)
@click.option(
    "--locale",
    default=None,
    help=f"Message language ({', '.join(SUPPORTED_LOCALES)}); default from config",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Report format written to stdout",
)
@click.option("--output", type=click.Path(dir_okay=False), help="Also write the JSON result here")
@click.option(
    "--data-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Reference data directory (default: bundled snapshot)",
)
@click.option(
    "--min-severity",
    type=click.Choice(SEVERITY_ORDER),
    default="info",
    help="Hide findings below this severity (score still counts all findings)",
)
@click.option(
    "--fail-under",
    type=click.IntRange(0, 100),
    default=None,
    help="Exit with code 1 or higher when the score is below this value",
)
@handle_exceptions
def lint(workflow, locale, output_format, output, data_dir, min_severity, fail_under):
    """Check a workflow for security issues and schema errors.

    Reads WORKFLOW, or stdin when WORKFLOW is omitted or "-". Prints every
    finding with its line, severity and fix, then a score out of 100 and a
    letter grade.

    \b
    Exit codes:
      0  no high or critical findings
      1  high findings, or score below --fail-under
      2  critical findings
      3  missing or oversized input

    \b
    Examples:
      wflint lint .github/workflows/ci.yml
      cat ci.yml | wflint lint --format json
      wflint lint ci.yml --locale tr --min-severity high --fail-under 80
    """
    config = load_runtime_config()
    locale = locale or config["output"]["locale"]
    data_dir = data_dir or config["paths"]["data_dir"] or None
    reference = load_reference_data(data_dir) if data_dir else engine.default_reference()
    limits = engine.Limits.from_config(config)

    source = "<stdin>" if workflow == "-" else workflow
    try:
        result = engine.lint(read_workflow(workflow), locale, reference=reference, limits=limits)
    except (MissingInputError, InputTooLargeError) as e:
        logger.debug(f"Rejected input from {source}: {e.details}")
        print_error(str(e))
        sys.exit(ExitCodes.TASK_INCOMPLETE)

    threshold = SEVERITY_ORDER.index(min_severity)
    shown = [f for f in result.findings if SEVERITY_ORDER.index(f.severity.value) <= threshold]

    payload = result.to_dict()
    payload["findings"] = [f.to_dict() for f in shown]

    if output_format == "json":
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print_lint_result(result, shown, source)

    if output:
        save_json_file(payload, output)
        if output_format == "text":
            print_success(f"Results saved to {output}")

    code = exit_code_for(result.summary, result.score, fail_under)
    if code != ExitCodes.SUCCESS and output_format == "text":
        console.print(f"[dim]Exit {code}: {ExitCodes.get_description(code)}[/dim]", highlight=False)
    sys.exit(code)
