"""Centralized logging configuration using Loguru.

Every module logs through the single configured loguru logger exported here.
Console output goes to stderr in both modes, human-readable or NDJSON for
tooling that consumes the scan diagnostics. stdout belongs to commands.

Usage:
    from debugmap.utils.logging import logger
    logger.info("Message")
    logger.debug("Debug message")  # Only shows if DEBUGMAP_LOG_LEVEL=DEBUG

Environment Variables:
    DEBUGMAP_LOG_LEVEL: TRACE|DEBUG|INFO|WARNING|ERROR (default: INFO)
    DEBUGMAP_LOG_JSON: 0|1 (default: 0, human-readable)
    DEBUGMAP_LOG_FILE: path to log file (optional)
"""

import json
import os
import sys

from loguru import logger

from .constants import ENV_LOG_FILE, ENV_LOG_JSON, ENV_LOG_LEVEL

# Remove default handler
logger.remove()

_log_level = os.environ.get(ENV_LOG_LEVEL, "INFO").upper()
_json_mode = os.environ.get(ENV_LOG_JSON, "0") == "1"
_log_file = os.environ.get(ENV_LOG_FILE)


def _to_ndjson(record) -> str:
    """Render one loguru record as a single JSON line."""
    entry = {
        "level": record["level"].name,
        "time": int(record["time"].timestamp() * 1000),
        "msg": record["message"],
        "pid": record["process"].id,
        "module": record["name"],
    }
    for key, value in record["extra"].items():
        entry[key] = value if isinstance(value, (str, int, float, bool)) else str(value)

    if record["exception"]:
        exc = record["exception"]
        entry["err"] = {
            "type": exc.type.__name__ if exc.type else "Error",
            "message": str(exc.value) if exc.value else "",
        }
    return json.dumps(entry)


def ndjson_sink(message):
    """Write records as NDJSON to stderr.

    stdout is reserved for command output (e.g. --json results).

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

# Track the console handler so the CLI can change its level
_console_handler_id: int | None = None

if _json_mode:
    _console_handler_id = logger.add(ndjson_sink, level=_log_level, colorize=False)
else:
    _console_handler_id = logger.add(
        sys.stderr,
        level=_log_level,
        format=_human_format,
        colorize=None,  # Auto-detect: colors if TTY, plain if piped
    )

if _log_file:
    def _file_sink(message):
        """Append NDJSON records to the configured log file."""
        with open(_log_file, "a", encoding="utf-8") as f:
            f.write(_to_ndjson(message.record) + "\n")

    logger.add(_file_sink, level="DEBUG")


def set_log_level(level: str) -> int:
    """Replace the console handler with one at ``level``.

    Used by the CLI ``--verbose``/``--quiet`` switches. Returns the new
    handler id.
    """
    global _console_handler_id

    level = level.upper()
    if _console_handler_id is not None:
        logger.remove(_console_handler_id)
    if _json_mode:
        _console_handler_id = logger.add(ndjson_sink, level=level, colorize=False)
    else:
        _console_handler_id = logger.add(
            sys.stderr, level=level, format=_human_format, colorize=None
        )
    return _console_handler_id


__all__ = ["logger", "set_log_level"]
