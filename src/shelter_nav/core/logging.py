"""Loguru sink configuration for the CLI and embedding applications.

Records go to stderr as text.  Records bound with ``json_output=True``
(see :func:`json_logger`) are additionally serialized as JSON lines, and a
rotating file sink is added when a log directory is configured.
"""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

LOG_FILE_NAME = "shelter-nav.log"
JSON_OUTPUT_KEY = "json_output"

_TEXT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"


def _wants_json(record: Any) -> bool:
    return bool(record["extra"].get(JSON_OUTPUT_KEY, False))


def setup_logging(log_level: str = "INFO", log_dir: str | None = None) -> None:
    """Replace all Loguru handlers with the application's sinks.

    Args:
        log_level: Minimum level for every sink, case-insensitive.
        log_dir: Optional directory for ``shelter-nav.log``; rotated every
            24 hours and kept for 7 days.
    """
    level = log_level.upper()
    handlers: list[dict[str, Any]] = [
        {"sink": sys.stderr, "level": level, "format": _TEXT_FORMAT},
        {"sink": sys.stderr, "level": level, "serialize": True, "filter": _wants_json},
    ]

    if log_dir:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        handlers.append(
            {
                "sink": directory / LOG_FILE_NAME,
                "level": level,
                "format": _TEXT_FORMAT,
                "rotation": "24h",
                "retention": "7 days",
            }
        )

    logger.configure(handlers=handlers)


def json_logger() -> Any:
    """Logger whose records are also emitted on the JSON sink."""
    return logger.bind(**{JSON_OUTPUT_KEY: True})
