"""Structured Logging — JSON and key=value formatters, installed once on the root logger.

Invariants:
    - Every record carries timestamp, level, logger name and message
    - Known extra fields (sample, format, operation, error_code, ...) are emitted when set;
      unknown extras are dropped so log lines keep a stable schema
    - JSON for the API process, key=value text for the CLI and local development
    - Core modules never log; only services, api and cli do

Design Decisions:
    - setup_logging is idempotent: the handler is named and replaced on repeat calls
      (FastAPI lifespan and the CLI callback may both run in one process under tests)
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_KEYS = (
    "sample", "format", "operation", "context", "error_code", "path",
    "method", "status_code", "duration_ms", "cell_count",
)

_HANDLER_NAME = "docmatrix"


def _extras(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in EXTRA_KEYS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_extras(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class KeyValueFormatter(logging.Formatter):
    """Human-readable line with the known extras appended as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)-7s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = _extras(record)
        if extras:
            line += " " + " ".join(f"{key}={value}" for key, value in extras.items())
        return line


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install (or replace) the docmatrix handler on the root logger."""
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else KeyValueFormatter())

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
