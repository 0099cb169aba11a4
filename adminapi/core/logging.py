"""Log output setup for processes embedding the admin client.

The transport logs through module loggers only; this module decides where
those records go and whether they are rendered as JSON lines.
"""

import json
import logging
import sys
from datetime import datetime, timezone

from adminapi.core.config import Settings

# Structured fields the transport attaches via ``extra=``
_EXTRA_FIELDS = ("method", "path", "status", "error_code", "attempt", "max_retries")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, including the transport's ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            log_data["exception"] = self.formatException(record.exc_info)
        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)
        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logging(settings: Settings | None = None) -> None:
    """Configure logging for applications embedding the client."""
    settings = settings or Settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    # Replace any handler installed earlier so records are not written twice
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    if settings.log_json:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    root.addHandler(handler)

    # httpx logs every request at INFO; the transport already does
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
