"""Structured Logging — JSON and text output for incident API events.

Invariants:
    - Every record carries timestamp (from record.created), level, logger, message
    - Incident fields (case_number, error_code, path, operation, row_count) appear only when set
    - setup_logging owns exactly one root handler: calling it again replaces it

Design Decisions:
    - Formatters on the stdlib logging module: no extra dependency
    - Handler tagged by name so repeated lifespan runs (tests, reloads) never stack handlers
"""

import json
import logging
from datetime import datetime, timezone

HANDLER_NAME = "crime_api"
INCIDENT_FIELDS = ("case_number", "error_code", "path", "operation", "row_count")
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s%(incident)s"


def incident_fields(record: logging.LogRecord) -> dict:
    """The incident extras attached to a record, skipping unset ones."""
    return {
        key: record.__dict__[key]
        for key in INCIDENT_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **incident_fields(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Human-readable line with incident extras appended as key=value."""

    def __init__(self):
        super().__init__(TEXT_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        fields = incident_fields(record)
        record.incident = "".join(f" {k}={v}" for k, v in fields.items())
        return super().format(record)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or replace) the application's root handler; returns it."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == HANDLER_NAME:
            logging.root.removeHandler(existing)
    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
