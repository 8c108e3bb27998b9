"""WorkflowLint - security and schema linter for GitHub Actions workflows."""

__version__ = "1.0.0"
