"""Tests for the message catalog."""

import pytest

from workflowlint.messages import CATALOG, localize, normalize_locale, render
from workflowlint.rules.base import Category, Finding, Severity


class TestLocale:
    @pytest.mark.parametrize(
        "value,expected",
        [("en", "en"), ("tr", "tr"), ("tr-TR", "tr"), ("TR", "tr"), ("tr_TR", "tr"),
         ("de", "en"), ("", "en"), (None, "en")],
    )
    def test_normalize(self, value, expected):
        assert normalize_locale(value) == expected

    def test_catalogs_cover_the_same_keys(self):
        assert set(CATALOG["tr"]) == set(CATALOG["en"])


class TestRender:
    def test_parameters_are_formatted(self):
        rendered = render("missing_runs_on", "en", ("build",))
        assert rendered.title == "Missing Runs-on"
        assert rendered.message == 'Job "build" requires a "runs-on" definition.'

    def test_turkish(self):
        rendered = render("invalid_cron", "tr", ("* * *",))
        assert rendered.title == "Geçersiz Cron"
        assert '"* * *"' in rendered.message

    def test_action_input_lists_five_names(self):
        valid = ("a", "b", "c", "d", "e", "f")
        rendered = render("invalid_action_input", "en", ("x", "org/act", valid))
        assert rendered.message.endswith("Available inputs: a, b, c, d, e...")

    def test_event_key_without_valid_keys(self):
        rendered = render("unknown_event_key", "en", ("branch", "push", ()))
        assert rendered.message.endswith("Valid keys: none")

    def test_unknown_key_falls_back_to_key(self):
        rendered = render("no_such_key", "en")
        assert rendered.title == "no_such_key"
        assert rendered.recommendation == ""

    @pytest.mark.parametrize("locale", ["en", "tr"])
    def test_every_template_renders(self, locale):
        params = {
            "invalid_yaml": ("bad",),
            "invalid_event": ("e", ("push",)),
            "invalid_permission": ("p", ("contents",)),
            "invalid_permission_level": ("admin",),
            "invalid_cron": ("* *",),
            "missing_runs_on": ("j",),
            "missing_steps": ("j",),
            "invalid_glob_pattern": ("\\d",),
            "invalid_action_input": ("i", "a/b", ("x",)),
            "unknown_event_key": ("k", "push", ("branches",)),
            "expression_injection": ("github.head_ref",),
            "hardcoded_secret": ("AWS Access Key ID",),
            "unpinned_action": ("a/b", "main"),
            "invalid_runner": ("r",),
        }
        for key in CATALOG[locale]:
            rendered = render(key, locale, params.get(key, ()))
            assert rendered.title and rendered.message and rendered.recommendation


class TestLocalize:
    def test_fills_text_and_keeps_structure(self):
        finding = Finding(
            rule_id="excessive-permissions",
            severity=Severity.HIGH,
            category=Category.SECURITY,
            message_key="excessive_permissions",
            line=3,
        )
        localized = localize(finding, "en")
        assert localized.title == "Excessive Permissions"
        assert localized.line == 3
        assert finding.title == ""
