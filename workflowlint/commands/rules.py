"""List every rule the linter can report."""

import json

import click
from rich.table import Table

from workflowlint.pipeline.ui import console
from workflowlint.rules import ALL_RULES
from workflowlint.utils.error_handler import handle_exceptions


@click.command("rules")
@click.option("--json", "as_json", is_flag=True, help="Print the rule list as JSON")
@handle_exceptions
def rules(as_json):
    """List rule ids with default severity, category and the dataset each one needs."""
    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "ruleId": rule.rule_id,
                        "severity": rule.severity.value,
                        "category": rule.category.value,
                        "description": rule.description,
                        "requires": rule.requires,
                    }
                    for rule in ALL_RULES
                ],
                indent=2,
            )
        )
        return

    table = Table(show_header=True, header_style="bold", expand=False)
    table.add_column("Rule", style="path")
    table.add_column("Severity")
    table.add_column("Category")
    table.add_column("Needs", style="dim")
    table.add_column("Description", overflow="fold")
    for rule in ALL_RULES:
        table.add_row(
            rule.rule_id,
            f"[{rule.severity.value}]{rule.severity.value}[/{rule.severity.value}]",
            rule.category.value,
            rule.requires or "-",
            rule.description,
        )
    console.print(table)
    console.print(f"\n{len(ALL_RULES)} rules", highlight=False)
