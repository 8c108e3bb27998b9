"""WorkflowLint utilities package."""

from .error_handler import handle_exceptions
from .exit_codes import ExitCodes
from .helpers import load_json_file, save_json_file
from .logging import logger

__all__ = [
    "handle_exceptions",
    "ExitCodes",
    "load_json_file",
    "save_json_file",
    "logger",
]
