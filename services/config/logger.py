from __future__ import annotations
import json
import logging
from datetime import datetime, timezone

from services.config.env import get_log_config


class JsonFormatter(logging.Formatter):
    """Format log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            data["exc"] = self.formatException(record.exc_info)
        return json.dumps(data)


def setup_logging(level: int | str | None = None) -> None:
    """Configure the root logger with JsonFormatter (level from ROI_LOG_LEVEL by default)."""
    if level is None:
        level = get_log_config().level
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=level, handlers=[handler], force=True)
