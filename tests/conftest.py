"""Pytest configuration and fixtures."""
from pathlib import Path

import pytest

from workflowlint.parser import parse
from workflowlint.reference import ReferenceData, load_reference_data
from workflowlint.rules.base import ScanContext

FIXTURES = Path(__file__).parent / "fixtures"

FILTER_KEYS = ["branches", "branches-ignore", "paths", "paths-ignore", "tags", "tags-ignore"]


@pytest.fixture
def reference():
    """Small in-memory reference data; push keys deliberately exclude `branch`."""
    return ReferenceData.build(
        events={
            "push": FILTER_KEYS,
            "pull_request": FILTER_KEYS + ["types"],
            "pull_request_target": FILTER_KEYS + ["types"],
            "workflow_dispatch": ["inputs"],
            "workflow_run": ["branches", "branches-ignore", "types", "workflows"],
            "schedule": [],
        },
        permissions=["actions", "contents", "id-token", "issues", "pull-requests"],
        runners=["ubuntu-latest", "macos-latest", "windows-latest", "self-hosted", "linux", "x64"],
        dangerous_contexts=[
            "github.event.issue.title",
            "github.event.pull_request.title",
            "github.event.comment.body",
            "github.head_ref",
        ],
        secret_patterns={
            "AWS Access Key ID": "AKIA[0-9A-Z]{16}",
            "GitHub Personal Access Token": "ghp_[a-zA-Z0-9]{36}",
        },
        actions={
            "actions/checkout": ["repository", "ref", "token", "fetch-depth", "path"],
            "actions/setup-node": [
                "node-version",
                "node-version-file",
                "cache",
                "registry-url",
                "architecture",
                "check-latest",
            ],
        },
    )


@pytest.fixture
def empty_reference():
    """Reference data with every dataset missing."""
    return ReferenceData()


@pytest.fixture(scope="session")
def bundled_reference():
    """The snapshot shipped inside the package."""
    return load_reference_data()


@pytest.fixture
def make_context(reference):
    """Build a ScanContext from workflow text (parsed) and optional reference data."""

    def _make(text, ref=None):
        return ScanContext(document=parse(text), reference=ref if ref is not None else reference)

    return _make


@pytest.fixture
def clean_workflow():
    """A workflow that triggers no rule."""
    return (FIXTURES / "clean.yml").read_text(encoding="utf-8")


@pytest.fixture
def vulnerable_workflow():
    return (FIXTURES / "vulnerable.yml").read_text(encoding="utf-8")
