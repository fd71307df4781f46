"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (organization_id, user_id, project_id, error_code, ...) surfaced when present
    - JSON format in production, human-readable in development

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging owns exactly one root handler, so a restarted lifespan (tests,
      reload) does not duplicate every line
"""

import logging
import json
from datetime import datetime, timezone

EXTRA_KEYS = (
    "organization_id", "user_id", "project_id", "task_id", "member_id",
    "api_key_id", "error_code", "path", "event",
)

_OWNED_MARK = "_teamhub_handler"


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install one stream handler on the root logger; repeated calls replace it."""
    for handler in list(logging.root.handlers):
        if getattr(handler, _OWNED_MARK, False):
            logging.root.removeHandler(handler)
    handler = logging.StreamHandler()
    setattr(handler, _OWNED_MARK, True)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
