"""Centralized logging configuration using Loguru.

Usage:
    from workflowlint.utils.logging import logger
    logger.debug("Loaded {count} runner labels", count=42)

Environment Variables:
    WORKFLOWLINT_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: WARNING)
    WORKFLOWLINT_LOG_JSON: 0|1 (default: 0, human-readable)
    WORKFLOWLINT_LOG_FILE: path to an NDJSON log file (optional)

The console handler writes to stderr so that `wflint lint --format json`
keeps stdout clean for machine consumers.
"""

import json
import os
import sys

from loguru import logger

logger.remove()

NUMERIC_LEVELS = {
    "TRACE": 10,
    "DEBUG": 20,
    "INFO": 30,
    "SUCCESS": 35,
    "WARNING": 40,
    "ERROR": 50,
    "CRITICAL": 60,
}

_log_level = os.environ.get("WORKFLOWLINT_LOG_LEVEL", "WARNING").upper()
_json_mode = os.environ.get("WORKFLOWLINT_LOG_JSON", "0") == "1"
_log_file = os.environ.get("WORKFLOWLINT_LOG_FILE")


def _to_ndjson(record) -> str:
    """Serialize a loguru record to a single NDJSON line."""
    entry = {
        "level": NUMERIC_LEVELS.get(record["level"].name, 30),
        "time": int(record["time"].timestamp() * 1000),
        "msg": record["message"],
        "module": record["name"],
        "pid": record["process"].id,
    }

    for key, value in record["extra"].items():
        entry[key] = value if isinstance(value, (str, int, float, bool)) else str(value)

    if record["exception"]:
        entry["err"] = {
            "type": record["exception"].type.__name__ if record["exception"].type else "Error",
            "message": str(record["exception"].value) if record["exception"].value else "",
        }

    return json.dumps(entry)


def ndjson_sink(message):
    """Write records as NDJSON to stderr.

    Never call logger.* inside a sink - it recurses.
    """
    sys.stderr.write(_to_ndjson(message.record) + "\n")
    sys.stderr.flush()


_human_format = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> - "
    "<level>{message}</level>"
)

logger.level("DEBUG", color="<blue>")
logger.level("INFO", color="<white>")
logger.level("WARNING", color="<yellow>")
logger.level("ERROR", color="<red>")
logger.level("CRITICAL", color="<red><bold>")

if _json_mode:
    logger.add(ndjson_sink, level=_log_level, colorize=False)
else:
    logger.add(
        sys.stderr,
        level=_log_level,
        format=_human_format,
        colorize=None,
    )

if _log_file:

    def _file_sink(message):
        """Append NDJSON records to the configured log file."""
        with open(_log_file, "a", encoding="utf-8") as f:
            f.write(_to_ndjson(message.record) + "\n")

    logger.add(_file_sink, level="DEBUG")


__all__ = [
    "logger",
]
