"""Tests for the three section-scoped line passes."""

import pytest

from workflowlint.rules.action_inputs import find_invalid_action_inputs
from workflowlint.rules.event_keys import find_unknown_event_keys
from workflowlint.rules.glob_patterns import find_invalid_glob_patterns


class TestGlobPatterns:
    """Pass A: regex escapes in branches/tags/paths filters."""

    def test_regex_escape_in_branch_filter(self, make_context):
        text = "on:\n  push:\n    tags:\n      - 'v\\d+.\\d+'\n"
        findings = find_invalid_glob_patterns(make_context(text))
        assert len(findings) == 1
        finding = findings[0]
        assert finding.rule_id == "invalid-glob-pattern"
        assert finding.line == 4
        assert finding.params == ("\\d",)
        assert finding.column == text.splitlines()[3].index("\\d") + 1
        assert finding.snippet == "- 'v\\d+.\\d+'"

    def test_first_offending_token_reported(self, make_context):
        text = "on:\n  push:\n    paths:\n      - 'src/\\w+/\\d'\n"
        findings = find_invalid_glob_patterns(make_context(text))
        assert findings[0].params == ("\\w",)

    def test_inline_flow_list(self, make_context):
        text = "on:\n  pull_request:\n    branches: [main, 'feature-\\s*']\n"
        findings = find_invalid_glob_patterns(make_context(text))
        assert [(f.line, f.params) for f in findings] == [(3, ("\\s",))]

    def test_globs_are_valid(self, make_context, clean_workflow):
        assert find_invalid_glob_patterns(make_context(clean_workflow)) == []

    def test_escapes_outside_filters_are_ignored(self, make_context):
        text = "jobs:\n  build:\n    steps:\n      - run: grep -E '\\d+' file\n"
        assert find_invalid_glob_patterns(make_context(text)) == []


class TestActionInputs:
    """Pass B: with: keys checked against the action's declared inputs."""

    def test_undeclared_input(self, make_context):
        text = (
            "jobs:\n  build:\n    runs-on: ubuntu-latest\n    steps:\n"
            "      - uses: actions/checkout@v4\n"
            "        with:\n"
            "          fetch_depth: 0\n"
        )
        findings = find_invalid_action_inputs(make_context(text))
        assert len(findings) == 1
        finding = findings[0]
        assert finding.rule_id == "invalid-action-input"
        assert finding.line == 7
        assert finding.column == 11
        assert finding.params[:2] == ("fetch_depth", "actions/checkout")
        assert "fetch-depth" in finding.params[2]
        assert finding.docs == "https://github.com/actions/checkout"

    def test_declared_inputs_pass(self, make_context, clean_workflow):
        assert find_invalid_action_inputs(make_context(clean_workflow)) == []

    def test_unknown_action_never_flagged(self, make_context):
        text = "steps:\n  - uses: someone/custom-action@v1\n    with:\n      anything: 1\n"
        assert find_invalid_action_inputs(make_context(text)) == []

    def test_block_ends_at_next_step(self, make_context):
        text = (
            "steps:\n"
            "  - uses: actions/setup-node@v4\n"
            "    with:\n"
            "      node-version: 20\n"
            "  - name: build\n"
            "    with:\n"
            "      bogus: 1\n"
        )
        assert find_invalid_action_inputs(make_context(text)) == []

    @pytest.mark.parametrize("uses", ["./.github/actions/build", "docker://alpine:3.20"])
    def test_reference_without_ref_resets_action(self, make_context, uses):
        text = (
            "steps:\n"
            "  - uses: actions/checkout@v4\n"
            f"  - uses: {uses}\n"
            "    with:\n"
            "      target: release\n"
        )
        assert find_invalid_action_inputs(make_context(text)) == []

    def test_skipped_without_action_schema(self, make_context, empty_reference):
        text = "steps:\n  - uses: actions/checkout@v4\n    with:\n      bogus: 1\n"
        assert find_invalid_action_inputs(make_context(text, empty_reference)) == []


class TestEventKeys:
    """Pass C: keys directly under an event trigger."""

    def test_branch_under_push(self, make_context):
        text = "on:\n  push:\n    branch: main\n"
        findings = find_unknown_event_keys(make_context(text))
        assert len(findings) == 1
        finding = findings[0]
        assert finding.rule_id == "unknown-event-key"
        assert finding.line == 3
        assert finding.column == 5
        assert finding.params[:2] == ("branch", "push")
        assert "branches" in finding.params[2]

    def test_valid_keys(self, make_context, clean_workflow):
        assert find_unknown_event_keys(make_context(clean_workflow)) == []

    def test_event_without_known_keys_is_skipped(self, make_context):
        text = "on:\n  schedule:\n    - cron: '0 0 * * 0'\n"
        assert find_unknown_event_keys(make_context(text)) == []

    def test_keys_outside_on_block(self, make_context):
        text = "on: push\njobs:\n  push:\n    branch: main\n"
        assert find_unknown_event_keys(make_context(text)) == []

    def test_workflow_dispatch_inputs(self, make_context):
        text = (
            "on:\n"
            "  workflow_dispatch:\n"
            "    inputs:\n"
            "      level:\n"
            "        type: choice\n"
            "    input:\n"
        )
        findings = find_unknown_event_keys(make_context(text))
        assert [f.params[0] for f in findings] == ["input"]
