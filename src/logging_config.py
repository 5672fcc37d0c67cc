
"""Centralized logging configuration for the task interpreter.

What the interpreter logs, by level:

- DEBUG: each stage of the pipeline (noise corrections applied, the assignee
  and color picked, date phrases resolved).
- INFO: utterances that could not be interpreted, with a `failure_kind`
  extra field (empty_input, unintelligible_input, ambiguous_date).
- ERROR: a draft that failed its final validation, which is a bug.

With LOG_FORMAT=json the `failure_kind` field shows up as its own key, so
failed utterances can be counted without parsing the message text.
"""

import json
import logging
import os
from datetime import datetime, timezone

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """JSON log formatter for log aggregator compatibility.

    Produces one JSON object per line (NDJSON) with fields:
    timestamp, level, logger, message, any `extra=` fields, and optionally
    exception.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS and key not in log_entry:
                log_entry[key] = value
        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def configure_logging(level_override: str | None = None) -> None:
    """Configure logging based on environment variables.

    Args:
        level_override: If set, takes precedence over LOG_LEVEL env var.

    Environment variables:
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR).
            Defaults to INFO. DEBUG shows every interpreter stage.
        LOG_FORMAT: Output format. "json" for JSON lines,
            anything else for human-readable. Defaults to "text".
    """
    level_name = (level_override or os.getenv("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    log_format = os.getenv("LOG_FORMAT", "text").lower()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setLevel(level)

    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )

    root_logger.addHandler(handler)
