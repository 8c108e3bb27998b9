"""WorkflowLint rule definitions."""

from .action_inputs import METADATA as _ACTION_INPUT_RULES
from .action_inputs import find_invalid_action_inputs
from .base import RuleFunction
from .event_keys import METADATA as _EVENT_KEY_RULES
from .event_keys import find_unknown_event_keys
from .glob_patterns import METADATA as _GLOB_RULES
from .glob_patterns import find_invalid_glob_patterns
from .line_checks import METADATA as _LINE_RULES
from .line_checks import scan_lines
from .structure import METADATA as _STRUCTURE_RULES
from .structure import validate_structure

# Execution order; findings are appended in this order and never re-sorted.
PASSES: tuple[RuleFunction, ...] = (
    validate_structure,
    find_invalid_glob_patterns,
    find_invalid_action_inputs,
    find_unknown_event_keys,
    scan_lines,
)

ALL_RULES = (
    _STRUCTURE_RULES + _GLOB_RULES + _ACTION_INPUT_RULES + _EVENT_KEY_RULES + _LINE_RULES
)

__all__ = [
    "PASSES",
    "ALL_RULES",
    "validate_structure",
    "find_invalid_glob_patterns",
    "find_invalid_action_inputs",
    "find_unknown_event_keys",
    "scan_lines",
]
