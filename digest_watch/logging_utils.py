"""
Logging setup and structured watch events.

Console output goes through rich. The optional log file records one JSON
object per watch event so a session can be inspected afterwards:

    {"timestamp": "...", "level": "INFO", "logger": "digest_watch.poller",
     "event": "new_digest", "digest_id": 42}

Components report through watch_event() rather than free-form messages;
the event name and its fields (digest_id, count, ...) are kept as
separate keys in the file output.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.logging import RichHandler

from .config import LoggingConfig


LOGGER_NAME = "digest_watch"


def setup_logging(cfg: LoggingConfig, log_dir: Path | None = None) -> logging.Logger:
    """Configure the package logger; file output needs both cfg.file and log_dir."""
    level = getattr(logging, cfg.level.upper(), logging.INFO)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers = []
    logger.propagate = False

    if cfg.console:
        console_handler = RichHandler(rich_tracebacks=True, show_time=False, show_level=True)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(console_handler)

    if cfg.file and log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / cfg.filename, encoding="utf-8")
        file_handler.setFormatter(WatchEventFormatter())
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def watch_event(
    logger: logging.Logger,
    event: str,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Log a named event such as "new_digest" or "unread_count_changed".

    Fields whose value is None are left out.
    """
    fields = {key: value for key, value in fields.items() if value is not None}
    details = " ".join(f"{key}={value}" for key, value in fields.items())
    message = f"{event} {details}" if details else event
    logger.log(level, message, extra={"watch_event": event, "watch_fields": fields})


class WatchEventFormatter(logging.Formatter):
    """One JSON object per record; watch events keep their fields as keys."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
        }
        event = getattr(record, "watch_event", None)
        if event is None:
            payload["message"] = record.getMessage()
        else:
            payload["event"] = event
            payload.update(getattr(record, "watch_fields", {}))
        if record.exc_info:
            payload["error"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)
