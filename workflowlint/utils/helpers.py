"""Helper utility functions for WorkflowLint."""

import json
from pathlib import Path
from typing import Any

from .logging import logger


def load_json_file(file_path: str | Path) -> dict[str, Any]:
    """
    Load and parse a JSON file.

    Args:
        file_path: Path to JSON file

    Returns:
        Parsed JSON as dictionary

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If file contains invalid JSON
        PermissionError: If file cannot be read
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        logger.debug(f"JSON file not found: {file_path}")
        raise
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {file_path}: {e}")
        raise
    except PermissionError:
        logger.error(f"Permission denied reading file: {file_path}")
        raise


def save_json_file(data: dict[str, Any], file_path: str | Path) -> None:
    """
    Save data as JSON to file, creating parent directories.

    Args:
        data: Data to save
        file_path: Path to output file
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def extract_data_array(data: Any, key: str, path: str | Path) -> list:
    """
    Extract an array from a dataset file payload.

    Dataset files wrap their records with `$source`/`$updated` metadata;
    a bare list is accepted as well.

    Examples:
        >>> extract_data_array({"runners": ["ubuntu-latest"]}, "runners", "runners.json")
        ['ubuntu-latest']
        >>> extract_data_array(["ubuntu-latest"], "runners", "runners.json")
        ['ubuntu-latest']
        >>> extract_data_array("invalid", "runners", "runners.json")
        []
    """
    if isinstance(data, dict) and isinstance(data.get(key), list):
        return data[key]
    elif isinstance(data, list):
        return data
    else:
        logger.warning(f"Invalid format in {path} - expected dict with '{key}' list or flat list")
        return []
