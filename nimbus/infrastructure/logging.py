"""
Centralized Logging

Architectural Intent:
- One place to configure log output for every nimbus component
- Library modules only call logging.getLogger(__name__); handlers are
  attached here, by the CLI or by an embedding application
- HTTP calls and page fetches pass their context (service, method, path,
  status, scope, token) as `extra`, so JSON output carries it as fields

Design Decisions:
- Level comes from --debug/--verbose first, then config.log_level
- JSON output is selected with --log-json or config.log_json
"""

import json
import logging
import sys
from datetime import datetime, UTC
from typing import IO, Optional

LOGGER_NAME = "nimbus"

HUMAN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# attributes adapters attach through logging's `extra`
CONTEXT_FIELDS = (
    "service",
    "method",
    "path",
    "status",
    "duration_ms",
    "scope",
    "token",
    "next_token",
    "item_count",
)


def log_context(record: logging.LogRecord) -> dict:
    """Context fields present on a record, None values dropped."""
    context = {}
    for name in CONTEXT_FIELDS:
        value = getattr(record, name, None)
        if value is not None:
            context[name] = value if isinstance(value, (int, float, bool)) else str(value)
    return context


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with request and page context merged in."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(log_context(record))
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def parse_level(name: str) -> int:
    """Map a level name such as "debug" or "WARNING" to its logging constant."""
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name!r}")
    return level


def configure_logging(
    level: int = logging.WARNING,
    json_format: bool = False,
    stream: Optional[IO[str]] = None,
) -> logging.Handler:
    """Attach a single handler to the nimbus logger and return it.

    Calling it again replaces the previous handler.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if json_format else logging.Formatter(HUMAN_FORMAT))
    logger.addHandler(handler)
    return handler
