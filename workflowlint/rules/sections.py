"""Section-scoped line state machines.

The line scanners never build an indentation tree. Each concern instead
tracks the one section it cares about with a tiny state machine whose state
is either `Outside` or `InSection(indent)`:

    GlobSectionTracker   branches/tags/paths filter lists
    WithBlockTracker     `with:` inputs of the most recent `uses:` action
    EventKeyTracker      keys nested directly under an `on:` event

Every tracker consumes raw lines one at a time through `feed()` and
returns what its pass should check on that line, or None.
"""

import re
from collections.abc import Container
from dataclasses import dataclass


@dataclass(frozen=True)
class Outside:
    """Not inside the tracked section."""


@dataclass(frozen=True)
class InSection:
    """Inside the tracked section opened by a line at `indent`."""

    indent: int
    name: str | None = None


SectionState = Outside | InSection

OUTSIDE = Outside()

_TRAILING_COMMENT = re.compile(r"\s+#.*$")

GLOB_HEADER = re.compile(r"^(branches|branches-ignore|tags|tags-ignore|paths|paths-ignore):$")
GLOB_INLINE = re.compile(
    r"^(branches|branches-ignore|tags|tags-ignore|paths|paths-ignore):\s*\[(.*)\]$"
)
LIST_ITEM = re.compile(r"""^-\s*['"]?(.+?)['"]?\s*$""")

USES_LINE = re.compile(r"^-?\s*uses:")
USES_ACTION = re.compile(r"""^-?\s*uses:\s*['"]?([^@\s'"]+)@""")
INPUT_KEY = re.compile(r"^([a-zA-Z0-9_-]+):")

ON_HEADER = re.compile(r"""^['"]?on['"]?:(\s|$)""")
EVENT_HEADER = re.compile(r"^([a-z_]+):$")
EVENT_KEY = re.compile(r"^([A-Za-z0-9_-]+):")


def indent_of(line: str) -> int:
    """Number of leading whitespace characters."""
    return len(line) - len(line.lstrip())


def is_content(trimmed: str) -> bool:
    """Non-empty and not a comment."""
    return bool(trimmed) and not trimmed.startswith("#")


def strip_comment(trimmed: str) -> str:
    return _TRAILING_COMMENT.sub("", trimmed)


def closes(state: SectionState, indent: int) -> bool:
    """A content line at `indent` ends `state` when it is not nested deeper."""
    return isinstance(state, InSection) and indent <= state.indent


@dataclass(frozen=True)
class GlobItem:
    """A filter pattern found inside a glob section."""

    section: str
    pattern: str


class GlobSectionTracker:
    """Tracks `branches:`/`tags:`/`paths:` (and `-ignore`) filter lists."""

    def __init__(self):
        self.state: SectionState = OUTSIDE

    def feed(self, line: str) -> list[GlobItem]:
        trimmed = line.strip()
        indent = indent_of(line)
        bare = strip_comment(trimmed)

        header = GLOB_HEADER.match(bare)
        if header:
            self.state = InSection(indent, header.group(1))
            return []

        inline = GLOB_INLINE.match(bare)
        if inline:
            self.state = OUTSIDE
            items = [item.strip().strip("'\"") for item in inline.group(2).split(",")]
            return [GlobItem(inline.group(1), item) for item in items if item]

        if is_content(trimmed) and not trimmed.startswith("-") and closes(self.state, indent):
            self.state = OUTSIDE

        if isinstance(self.state, InSection) and trimmed.startswith("-"):
            match = LIST_ITEM.match(strip_comment(trimmed))
            if match:
                return [GlobItem(self.state.name or "", match.group(1))]

        return []


@dataclass(frozen=True)
class ActionInput:
    """An input key given to an action inside its `with:` block."""

    action: str
    action_line: int
    name: str


class WithBlockTracker:
    """Tracks the current `uses:` action and its `with:` block."""

    def __init__(self):
        self.action: str | None = None
        self.action_line = 0
        self.block: SectionState = OUTSIDE
        self.key_indent: int | None = None

    def feed(self, line: str, line_num: int) -> ActionInput | None:
        trimmed = line.strip()
        indent = indent_of(line)
        bare = strip_comment(trimmed)

        uses = USES_ACTION.match(trimmed)
        if uses:
            self.action = uses.group(1)
            self.action_line = line_num
            self.block = OUTSIDE
            return None
        if USES_LINE.match(trimmed):
            # Local (./path) and docker:// references carry no input schema.
            self.action = None
            self.block = OUTSIDE
            return None

        if bare == "with:" and self.action:
            self.block = InSection(indent)
            self.key_indent = None
            return None

        if is_content(trimmed) and closes(self.block, indent) and not trimmed.startswith("with:"):
            self.block = OUTSIDE
            self.action = None

        if isinstance(self.block, InSection) and self.action and is_content(trimmed):
            key = INPUT_KEY.match(trimmed)
            if self.key_indent is None:
                self.key_indent = indent
            if key and indent == self.key_indent:
                return ActionInput(self.action, self.action_line, key.group(1))

        return None


@dataclass(frozen=True)
class EventKey:
    """A key written directly under an event trigger."""

    event: str
    key: str


class EventKeyTracker:
    """Tracks the `on:` block and the event whose keys are being written."""

    def __init__(self, events: Container[str]):
        self.events = events
        self.on_block: SectionState = OUTSIDE
        self.event: SectionState = OUTSIDE
        self.child_indent: int | None = None

    def feed(self, line: str) -> EventKey | None:
        trimmed = line.strip()
        indent = indent_of(line)

        if ON_HEADER.match(trimmed):
            self.on_block = InSection(indent)
            self.event = OUTSIDE
            return None

        if not isinstance(self.on_block, InSection) or not is_content(trimmed):
            return None

        if closes(self.on_block, indent):
            self.on_block = OUTSIDE
            self.event = OUTSIDE
            return None

        if closes(self.event, indent):
            self.event = OUTSIDE

        header = EVENT_HEADER.match(strip_comment(trimmed))
        if header and header.group(1) in self.events and isinstance(self.event, Outside):
            self.event = InSection(indent, header.group(1))
            self.child_indent = None
            return None

        if isinstance(self.event, InSection):
            if self.child_indent is None:
                self.child_indent = indent
            key = EVENT_KEY.match(trimmed)
            if key and indent == self.child_indent:
                return EventKey(self.event.name or "", key.group(1))

        return None
