"""Custom exceptions for WorkflowLint.

Only boundary failures are exceptions. Problems inside a workflow document,
including YAML that does not parse, are reported as findings.
"""


class WorkflowLintError(Exception):
    """Base class for caller-visible WorkflowLint failures.

    Attributes:
        message: Human-readable error description
        details: Dict of structured context for debugging
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}


class MissingInputError(WorkflowLintError):
    """Raised when no workflow text was supplied."""

    def __init__(self, message: str = "Workflow text is required"):
        super().__init__(message)


class InputTooLargeError(WorkflowLintError):
    """Raised when workflow text exceeds the configured size or line limit."""

    def __init__(self, message: str, limit: str, actual: int, maximum: int):
        super().__init__(message, {"limit": limit, "actual": actual, "maximum": maximum})
        self.limit = limit
        self.actual = actual
        self.maximum = maximum


class ParseError(WorkflowLintError):
    """Raised by the document parser when the text is not valid YAML.

    The engine converts this into a single `invalid-yaml` finding.
    """

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        super().__init__(message, {"line": line, "column": column})
        self.line = line
        self.column = column
