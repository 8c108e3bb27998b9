"""Reference Data Store - the curated knowledge base the rules validate against.

Five independently loadable JSON datasets live in a data directory:

    schema.json    permissions, events and per-event valid keys (SchemaStore)
    runners.json   GitHub-hosted and self-hosted runner labels
    contexts.json  user-controllable `${{ }}` context paths
    secrets.json   credential signature regexes
    actions.json   declared inputs of popular actions (action.yml)

Each file carries a `$source` (or `$sources`) and `$updated` stamp. A
missing or malformed file yields an empty dataset; every check depending
on it is then skipped, never failed.

The store is built once per process and shared read-only by every
analysis: all collections are frozensets, tuples or read-only mappings.
"""

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from workflowlint.utils.helpers import extract_data_array, load_json_file
from workflowlint.utils.logging import logger

BUNDLED_DATA_DIR = Path(__file__).parent / "data"

DATASET_FILES = {
    "schema": "schema.json",
    "runners": "runners.json",
    "contexts": "contexts.json",
    "secrets": "secrets.json",
    "actions": "actions.json",
}


@dataclass(frozen=True)
class DatasetInfo:
    """Provenance of one loaded dataset."""

    name: str
    source: str | None = None
    updated: str | None = None
    loaded: bool = False
    count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "source": self.source if self.loaded else "fallback",
            "updated": self.updated,
            "loaded": self.loaded,
            "count": self.count,
        }


@dataclass(frozen=True)
class SecretPattern:
    """A named credential signature."""

    name: str
    regex: re.Pattern


def _freeze_schema(mapping: Mapping[str, Any]) -> Mapping[str, tuple[str, ...]]:
    return MappingProxyType({str(k): tuple(v) for k, v in mapping.items()})


@dataclass(frozen=True)
class ReferenceData:
    """Immutable bundle of every dataset, passed by reference into each analysis."""

    events: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    permissions: frozenset[str] = frozenset()
    runners: frozenset[str] = frozenset()
    dangerous_contexts: tuple[str, ...] = ()
    secret_patterns: tuple[SecretPattern, ...] = ()
    actions: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    datasets: Mapping[str, DatasetInfo] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def build(
        cls,
        events: Mapping[str, Any] | None = None,
        permissions: Any = (),
        runners: Any = (),
        dangerous_contexts: Any = (),
        secret_patterns: Mapping[str, str] | None = None,
        actions: Mapping[str, Any] | None = None,
    ) -> "ReferenceData":
        """Build a store from plain Python collections (tests, embedding callers).

        `secret_patterns` maps a signature name to its regex source.
        """
        return cls(
            events=_freeze_schema(events or {}),
            permissions=frozenset(permissions),
            runners=frozenset(runners),
            dangerous_contexts=tuple(dangerous_contexts),
            secret_patterns=tuple(
                SecretPattern(name=name, regex=re.compile(pattern))
                for name, pattern in (secret_patterns or {}).items()
            ),
            actions=_freeze_schema(actions or {}),
        )

    def event_keys(self, event: str) -> tuple[str, ...]:
        """Valid keys for `event`; empty when unknown."""
        return self.events.get(event, ())

    def action_inputs(self, action: str) -> tuple[str, ...] | None:
        """Declared inputs of `action`, or None when the action is not in the schema."""
        return self.actions.get(action)


def _stamp(payload: Any) -> tuple[str | None, str | None]:
    if not isinstance(payload, dict):
        return None, None
    source = payload.get("$source")
    if source is None and isinstance(payload.get("$sources"), list):
        source = ", ".join(str(s) for s in payload["$sources"])
    updated = payload.get("$updated")
    return (str(source) if source is not None else None, str(updated) if updated else None)


def _read_dataset(data_dir: Path, name: str) -> Any | None:
    path = data_dir / DATASET_FILES[name]
    try:
        return load_json_file(path)
    except FileNotFoundError:
        logger.warning(f"Reference dataset '{name}' not found at {path}; dependent checks disabled")
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning(f"Reference dataset '{name}' unreadable ({e}); dependent checks disabled")
    return None


def _parse_schema(payload: Any, path: Path) -> tuple[dict[str, tuple[str, ...]], frozenset[str]]:
    if not isinstance(payload, dict):
        return {}, frozenset()

    permissions = frozenset(
        str(p) for p in extract_data_array(payload, "permissions", path) if isinstance(p, str)
    )

    events: dict[str, tuple[str, ...]] = {}
    for entry in payload.get("events") or []:
        if isinstance(entry, dict) and isinstance(entry.get("event"), str):
            events[entry["event"]] = ()
        elif isinstance(entry, str):
            events[entry] = ()

    event_keys = payload.get("eventKeys")
    if isinstance(event_keys, dict):
        for event, keys in event_keys.items():
            if isinstance(keys, list):
                events[str(event)] = tuple(str(k) for k in keys)
            else:
                events.setdefault(str(event), ())

    return events, permissions


def _parse_secrets(payload: Any, path: Path) -> tuple[SecretPattern, ...]:
    patterns = []
    for entry in extract_data_array(payload, "patterns", path):
        if not isinstance(entry, dict):
            continue
        name, source = entry.get("name"), entry.get("pattern")
        if not isinstance(name, str) or not isinstance(source, str):
            continue
        try:
            patterns.append(SecretPattern(name=name, regex=re.compile(source)))
        except re.error as e:
            logger.warning(f"Skipping secret pattern '{name}': invalid regex ({e})")
    return tuple(patterns)


def _parse_actions(payload: Any) -> dict[str, tuple[str, ...]]:
    actions = payload.get("actions") if isinstance(payload, dict) else None
    if not isinstance(actions, dict):
        return {}

    result = {}
    for action_id, metadata in actions.items():
        inputs = metadata.get("inputs") if isinstance(metadata, dict) else None
        if isinstance(inputs, dict):
            result[str(action_id)] = tuple(str(name) for name in inputs)
        elif isinstance(inputs, list):
            result[str(action_id)] = tuple(str(name) for name in inputs)
    return result


def load_reference_data(data_dir: str | Path | None = None) -> ReferenceData:
    """Load every dataset from `data_dir` (default: the bundled snapshot).

    Never raises for dataset problems; each unusable file becomes an empty
    dataset and is reported as not loaded in `ReferenceData.datasets`.
    """
    root = Path(data_dir) if data_dir else BUNDLED_DATA_DIR
    logger.debug(f"Loading reference data from {root}")

    payloads = {name: _read_dataset(root, name) for name in DATASET_FILES}
    paths = {name: root / filename for name, filename in DATASET_FILES.items()}

    events, permissions = _parse_schema(payloads["schema"], paths["schema"])

    runners = frozenset(
        str(r)
        for r in (
            extract_data_array(payloads["runners"], "runners", paths["runners"])
            if payloads["runners"] is not None
            else []
        )
        if isinstance(r, str)
    )

    contexts: list[str] = []
    if payloads["contexts"] is not None:
        for entry in extract_data_array(payloads["contexts"], "contexts", paths["contexts"]):
            if isinstance(entry, dict) and isinstance(entry.get("context"), str):
                contexts.append(entry["context"])
            elif isinstance(entry, str):
                contexts.append(entry)

    secrets = (
        _parse_secrets(payloads["secrets"], paths["secrets"])
        if payloads["secrets"] is not None
        else ()
    )
    actions = _parse_actions(payloads["actions"])

    counts = {
        "schema": len(events) + len(permissions),
        "runners": len(runners),
        "contexts": len(contexts),
        "secrets": len(secrets),
        "actions": len(actions),
    }
    datasets = {}
    for name, payload in payloads.items():
        source, updated = _stamp(payload)
        datasets[name] = DatasetInfo(
            name=name,
            source=source or f"{paths[name].name}",
            updated=updated,
            loaded=payload is not None,
            count=counts[name],
        )

    logger.debug(
        "Reference data: {events} events, {perms} permissions, {runners} runners, "
        "{contexts} contexts, {secrets} secret patterns, {actions} actions",
        events=len(events),
        perms=len(permissions),
        runners=len(runners),
        contexts=len(contexts),
        secrets=len(secrets),
        actions=len(actions),
    )

    return ReferenceData(
        events=MappingProxyType(events),
        permissions=permissions,
        runners=runners,
        dangerous_contexts=tuple(contexts),
        secret_patterns=secrets,
        actions=MappingProxyType(actions),
        datasets=MappingProxyType(datasets),
    )
