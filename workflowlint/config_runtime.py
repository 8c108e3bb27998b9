"""Runtime configuration for WorkflowLint - centralized configuration management."""

import copy
import json
import os
from pathlib import Path
from typing import Any

from workflowlint.utils.logging import logger

CONFIG_FILE_NAME = ".workflowlint.json"

DEFAULTS = {
    "paths": {
        # Empty means the snapshot bundled inside the package.
        "data_dir": "",
    },
    "limits": {
        "max_input_bytes": 1024 * 1024,
        "max_lines": 20000,
    },
    "output": {
        "locale": "en",
        "max_snippet_chars": 200,
    },
}


def load_runtime_config(root: str | Path = ".") -> dict[str, Any]:
    """
    Load runtime configuration from .workflowlint.json and environment variables.

    Config priority (highest to lowest):
    1. Environment variables (WORKFLOWLINT_<SECTION>_<KEY>)
    2. <root>/.workflowlint.json
    3. Built-in defaults

    Values whose type does not match the default are ignored with a warning.

    Args:
        root: Directory to look for the config file in

    Returns:
        Configuration dictionary with merged values
    """
    cfg = copy.deepcopy(DEFAULTS)

    path = Path(root) / CONFIG_FILE_NAME
    try:
        if path.exists():
            with open(path, encoding="utf-8") as f:
                user = json.load(f)

            if isinstance(user, dict):
                for section in cfg:
                    if section in user and isinstance(user[section], dict):
                        for key, value in user[section].items():
                            if key not in cfg[section]:
                                logger.warning(f"Unknown config key {section}.{key} in {path}")
                            elif isinstance(value, bool) or not isinstance(
                                value, type(cfg[section][key])
                            ):
                                logger.warning(
                                    f"Ignoring {section}.{key}={value!r} in {path}: "
                                    f"expected {type(cfg[section][key]).__name__}"
                                )
                            else:
                                cfg[section][key] = value
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load config file from {path}: {e}")

    for section in cfg:
        for key in cfg[section]:
            env_var = f"WORKFLOWLINT_{section.upper()}_{key.upper()}"
            if env_var in os.environ:
                value = os.environ[env_var]
                try:
                    default_value = cfg[section][key]
                    if isinstance(default_value, int):
                        cfg[section][key] = int(value)
                    else:
                        cfg[section][key] = value
                except ValueError as e:
                    logger.warning(
                        f"Invalid value for environment variable {env_var}: '{value}' - {e}"
                    )

    return cfg
