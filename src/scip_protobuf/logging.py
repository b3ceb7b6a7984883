"""Logging configuration for scip-protobuf.

Everything logs under the ``scip_protobuf`` logger to stderr. In plugin
mode stdout is reserved for the CodeGeneratorResponse, so no handler may
ever point at it.
"""

import json
import logging
import sys
from typing import Any, TextIO

ROOT_LOGGER = "scip_protobuf"

# LogRecord attributes copied into JSON output when passed via ``extra=``
CONTEXT_FIELDS = ("document", "symbols", "occurrences", "skipped")


def setup_logging(
    level: int = logging.INFO,
    json_format: bool = False,
    stream: TextIO | None = None,
) -> logging.Logger:
    """
    Install the single handler of the package logger.

    Args:
        level: Logging level (default: INFO)
        json_format: If True, emit one JSON object per line
        stream: Where to write (default: sys.stderr at call time)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    if json_format:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s", "%H:%M:%S")
        )
    logger.addHandler(handler)

    return logger


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with indexing context fields when present."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            if hasattr(record, name):
                payload[name] = getattr(record, name)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def level_from_name(name: str) -> int:
    """Map a level name such as ``"debug"`` to its numeric value.

    Raises ValueError for names the logging module does not know.
    """
    value = logging.getLevelName(name.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {name}")
    return value


def get_logger(name: str | None = None) -> logging.Logger:
    """Package logger, or the ``scip_protobuf.<name>`` child."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)
