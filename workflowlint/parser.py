"""Workflow document parser.

Turns raw workflow text into a YAML tree plus the verbatim line array the
line scanners and position lookups work on. Uses yaml.safe_load semantics
with one stricter rule: duplicate mapping keys are a parse error, as they
are for the GitHub Actions runner.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import yaml
from yaml.constructor import ConstructorError
from yaml.nodes import MappingNode

from workflowlint.errors import ParseError

MERGE_TAG = "tag:yaml.org,2002:merge"
TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _UniqueKeySafeLoader(yaml.SafeLoader):
    """SafeLoader that rejects duplicate keys inside one mapping.

    Plain date-like scalars stay strings, as in YAML 1.2.
    """

    yaml_implicit_resolvers = {
        first: [(tag, regexp) for tag, regexp in resolvers if tag != TIMESTAMP_TAG]
        for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
    }

    def construct_mapping(self, node, deep=False):
        if isinstance(node, MappingNode):
            seen = set()
            for key_node, _value_node in node.value:
                if key_node.tag == MERGE_TAG:
                    continue
                key = self.construct_object(key_node, deep=True)
                try:
                    duplicate = key in seen
                except TypeError:
                    continue
                if duplicate:
                    raise ConstructorError(
                        "while constructing a mapping",
                        node.start_mark,
                        f"found duplicate key {key!r}",
                        key_node.start_mark,
                    )
                seen.add(key)
        return super().construct_mapping(node, deep=deep)


@dataclass(frozen=True)
class Document:
    """A parsed workflow: YAML tree, original text and its lines."""

    text: str
    lines: tuple[str, ...]
    tree: Any

    def get(self, key: str) -> Any:
        """Top-level value for `key`, or None when the tree is not a mapping."""
        if isinstance(self.tree, dict):
            return self.tree.get(key)
        return None

    def find_line(self, predicate: Callable[[str], bool], default: int = 1) -> int:
        """1-indexed number of the first raw line matching `predicate`."""
        for idx, line in enumerate(self.lines):
            if predicate(line):
                return idx + 1
        return default

    def find_key_line(self, key: str, default: int = 1) -> int:
        """First line whose trimmed text starts with `<key>:`; first match wins."""
        prefix = f"{key}:"
        return self.find_line(lambda line: line.strip().startswith(prefix), default)


def split_lines(text: str) -> tuple[str, ...]:
    """Split on newlines only, dropping the carriage return of CRLF endings."""
    return tuple(line[:-1] if line.endswith("\r") else line for line in text.split("\n"))


def _normalize_tree(tree: Any) -> Any:
    # YAML 1.1 loads a bare `on:` key as boolean True.
    if isinstance(tree, dict) and True in tree and "on" not in tree:
        return {("on" if k is True else k): v for k, v in tree.items()}
    return tree


def _describe(error: yaml.YAMLError) -> ParseError:
    problem = getattr(error, "problem", None) or str(error).strip()
    mark = getattr(error, "problem_mark", None) or getattr(error, "context_mark", None)
    if mark is not None:
        line, column = mark.line + 1, mark.column + 1
        return ParseError(f"{problem} (line {line}, column {column})", line=line, column=column)
    return ParseError(str(problem))


def parse(text: str) -> Document:
    """Parse workflow text.

    Args:
        text: Raw YAML workflow text

    Returns:
        Document with the loaded tree and the verbatim lines

    Raises:
        ParseError: If the text is not a single valid YAML document
    """
    try:
        tree = yaml.load(text, Loader=_UniqueKeySafeLoader)
    except yaml.YAMLError as e:
        raise _describe(e) from e
    except RecursionError as e:
        raise ParseError("document nesting is too deep") from e
    except (ValueError, OverflowError) as e:
        # Explicitly tagged scalars the constructor cannot build, e.g. `!!timestamp 2026-13-45`.
        raise ParseError(f"invalid scalar value: {e}") from e

    return Document(text=text, lines=split_lines(text), tree=_normalize_tree(tree))
