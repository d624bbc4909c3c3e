# src/propeval/adapters/logging_utils.py
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

from .config import config

# handlers created by get_logger, so redirect_logs can retarget them
_handlers: list[logging.StreamHandler] = []
_stream_override: TextIO | None = None


class JsonLogFormatter(logging.Formatter):
    """One JSON object per line: ts, level, logger, message + context keys."""

    def format(self, record):
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # attach contextual info if provided
        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict):
            payload.update(ctx)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _configured_stream() -> TextIO:
    return sys.stderr if config.LOG_STREAM == "stderr" else sys.stdout


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(_stream_override or _configured_stream())
        handler.setFormatter(JsonLogFormatter())
        logger.addHandler(handler)
        logger.setLevel(config.LOG_LEVEL)
        logger.propagate = False
        _handlers.append(handler)
    return logger


def redirect_logs(stream: TextIO | None) -> TextIO | None:
    """
    Send every propeval log line to `stream` from now on.
    None goes back to the configured LOG_STREAM. Returns the previous override.
    """
    global _stream_override
    previous = _stream_override
    _stream_override = stream
    target = stream or _configured_stream()
    for handler in _handlers:
        handler.setStream(target)
    return previous


def log_event(
    logger: logging.Logger,
    event: str,
    level: int = logging.INFO,
    exc_info: bool = False,
    **context: Any,
) -> None:
    """Emit `event` with keyword context merged into the JSON line."""
    logger.log(level, event, exc_info=exc_info, extra={"context": context})
