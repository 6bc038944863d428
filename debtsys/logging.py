"""Logging configuration for debtsys."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

# Request attributes the HTTP client attaches through ``extra=``
REQUEST_FIELDS = ("method", "url", "status_code")

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(level: str = "INFO", format_type: str = "standard") -> None:
    """Configure root logging.

    Parameters
    ----------
    level : str
        Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL); unknown names mean INFO.
    format_type : str
        "standard" for one readable line per record, "json" for one JSON object.
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    console = logging.StreamHandler(sys.stdout)
    if format_type == "json":
        console.setFormatter(JsonFormatter())
    else:
        console.setFormatter(logging.Formatter(STANDARD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    logging.basicConfig(level=log_level, handlers=[console], force=True)
    logging.getLogger("debtsys").setLevel(log_level)

    # httpx logs every request at INFO; the client logs its own outcomes
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with the request fields when present."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in REQUEST_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)
