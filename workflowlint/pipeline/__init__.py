"""Console output infrastructure."""
from .ui import (
    console,
    err_console,
    print_error,
    print_header,
    print_lint_result,
    print_status_panel,
    print_success,
    print_warning,
)

__all__ = [
    "console", "err_console", "print_header", "print_error", "print_warning",
    "print_success", "print_status_panel", "print_lint_result",
]
