"""
Channel Logging

Architectural Intent:
- Every module logs through logging.getLogger(__name__), below "notichannel"
- Channel log calls attach structured fields through ``extra=``:
  channel (producer class), subscribers (snapshot size), event_kind
  (data/failure), error_type, inner_errors (collected subscriber errors)
- Formatters render those fields; records without them format as usual
- Applications opt in; the library installs no handlers by itself
"""

import json
import logging
import sys
from datetime import datetime, UTC
from typing import Any

from notichannel.infrastructure.config import LoggingConfig

CHANNEL_FIELDS = ("channel", "subscribers", "event_kind", "error_type", "inner_errors")


def _render(value: Any) -> Any:
    if isinstance(value, BaseException):
        return f"{type(value).__name__}: {value}"
    if isinstance(value, (list, tuple)):
        return [_render(v) for v in value]
    return value


def channel_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Channel fields set on ``record``, rendered as JSON-safe values."""
    return {
        name: _render(record.__dict__[name])
        for name in CHANNEL_FIELDS
        if record.__dict__.get(name) is not None
    }


class ChannelFormatter(logging.Formatter):
    """Human-readable formatter appending channel fields as key=value pairs."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = channel_fields(record)
        if not fields:
            return line
        # Tracebacks stay last
        head, sep, tail = line.partition("\n")
        pairs = " ".join(f"{k}={v}" for k, v in fields.items())
        return f"{head} [{pairs}]{sep}{tail}"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, channel fields included."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_entry.update(channel_fields(record))
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=repr)


def configure_logging(
    level: int = logging.INFO,
    json_format: bool = False,
) -> None:
    """Install a single stderr handler on the "notichannel" logger.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, etc.)
        json_format: If True, use JSONFormatter. Otherwise ChannelFormatter.
    """
    root = logging.getLogger("notichannel")
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if json_format else ChannelFormatter())
    root.addHandler(handler)


def configure_logging_from(config: LoggingConfig) -> None:
    """Apply a LoggingConfig section; unknown level names fall back to WARNING."""
    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    configure_logging(level=level, json_format=config.json_format)
