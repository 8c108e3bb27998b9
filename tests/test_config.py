"""Tests for runtime configuration loading."""

import json

from workflowlint.config_runtime import CONFIG_FILE_NAME, DEFAULTS, load_runtime_config


def write_config(root, payload):
    (root / CONFIG_FILE_NAME).write_text(json.dumps(payload), encoding="utf-8")


class TestRuntimeConfig:
    def test_defaults(self, tmp_path):
        config = load_runtime_config(tmp_path)
        assert config == DEFAULTS
        assert config is not DEFAULTS

    def test_file_overrides(self, tmp_path):
        write_config(tmp_path, {"output": {"locale": "tr"}, "limits": {"max_lines": 50}})
        config = load_runtime_config(tmp_path)
        assert config["output"]["locale"] == "tr"
        assert config["limits"]["max_lines"] == 50
        assert config["limits"]["max_input_bytes"] == DEFAULTS["limits"]["max_input_bytes"]

    def test_mistyped_and_unknown_values_ignored(self, tmp_path):
        write_config(
            tmp_path,
            {"limits": {"max_lines": "many", "max_input_bytes": True, "bogus": 1}},
        )
        config = load_runtime_config(tmp_path)
        assert config["limits"] == DEFAULTS["limits"]

    def test_malformed_file_ignored(self, tmp_path):
        (tmp_path / CONFIG_FILE_NAME).write_text("{", encoding="utf-8")
        assert load_runtime_config(tmp_path) == DEFAULTS

    def test_environment_wins(self, tmp_path, monkeypatch):
        write_config(tmp_path, {"limits": {"max_lines": 50}})
        monkeypatch.setenv("WORKFLOWLINT_LIMITS_MAX_LINES", "10")
        monkeypatch.setenv("WORKFLOWLINT_OUTPUT_LOCALE", "tr")
        config = load_runtime_config(tmp_path)
        assert config["limits"]["max_lines"] == 10
        assert config["output"]["locale"] == "tr"

    def test_invalid_environment_integer(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WORKFLOWLINT_LIMITS_MAX_LINES", "lots")
        assert load_runtime_config(tmp_path)["limits"]["max_lines"] == 20000
