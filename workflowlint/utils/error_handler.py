"""Centralized error handler for WorkflowLint commands."""

import traceback
from collections.abc import Callable
from datetime import datetime
from functools import wraps
from pathlib import Path
from typing import Any

import click

from workflowlint.errors import WorkflowLintError
from workflowlint.utils.logging import logger

ERROR_LOG_FILE = Path(".workflowlint") / "error.log"


def handle_exceptions(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator that logs unexpected command failures and surfaces them via click.

    Click's own exceptions (usage errors, explicit exits) and
    WorkflowLintError (boundary errors that commands map to exit codes)
    pass through untouched.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (click.ClickException, click.exceptions.Exit, WorkflowLintError):
            raise
        except Exception as e:
            error_type = type(e).__name__
            error_msg = str(e)
            tb = traceback.format_exc()

            logger.opt(exception=True).error(
                "Command '{cmd}' failed: {err}",
                cmd=func.__name__,
                err=error_msg,
            )

            try:
                ERROR_LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
                with open(ERROR_LOG_FILE, "a", encoding="utf-8") as f:
                    f.write("\n" + "=" * 80 + "\n")
                    f.write(f"[{datetime.now().isoformat()}] Error in command: {func.__name__}\n")
                    f.write("=" * 80 + "\n")
                    f.write(f"{error_type}: {error_msg}\n\n")
                    f.write(tb)
                    f.write("=" * 80 + "\n\n")
                location = f"Full traceback logged to: {ERROR_LOG_FILE}"
            except OSError as log_error:
                location = f"Could not write error log: {log_error}"

            raise click.ClickException(f"{error_type}: {error_msg}\n\n{location}") from e

    return wrapper
