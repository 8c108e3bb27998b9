"""WorkflowLint CLI - Main entry point and command registration hub."""
# ruff: noqa: E402 - commands imported after cli group definition

import click

from workflowlint import __version__


@click.group()
@click.version_option(version=__version__, prog_name="wflint")
@click.help_option("-h", "--help")
def cli():
    """WorkflowLint - security and schema linter for GitHub Actions workflows.

    \b
    Commands:
      lint   Lint a workflow file (or stdin) and print a scored report
      data   Show the reference datasets the rules validate against
      rules  List every rule id with severity and category

    \b
    Environment:
      WORKFLOWLINT_LOG_LEVEL   DEBUG|INFO|WARNING|ERROR (default WARNING)
      WORKFLOWLINT_<SECTION>_<KEY>   override .workflowlint.json values
    """
    pass


from workflowlint.commands.data import data
from workflowlint.commands.lint import lint
from workflowlint.commands.rules import rules

cli.add_command(lint)
cli.add_command(data)
cli.add_command(rules)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
