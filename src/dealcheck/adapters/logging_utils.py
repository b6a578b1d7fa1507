# src/dealcheck/adapters/logging_utils.py
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from .config import config

SERVICE_NAME = "dealcheck"

# envelope keys a context dict may not overwrite
_ENVELOPE = ("ts", "level", "service", "env", "logger", "event", "exc")


class JsonLogFormatter(logging.Formatter):
    """
    One JSON object per line:

      {"ts": "...Z", "level": "INFO", "service": "dealcheck", "env": "dev",
       "logger": "dealcheck.services.deal_analyzer", "event": "deal_analyzed",
       "tier": "strong", ...}

    The log message is the event name. Fields from extra={"context": {...}}
    are merged at the top level; a context key that clashes with the envelope
    is kept under "ctx_<key>".
    """

    def __init__(self, env: str | None = None):
        super().__init__()
        self.env = env if env is not None else config.ENV

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "service": SERVICE_NAME,
            "env": self.env,
            "logger": record.name,
            "event": record.getMessage(),
        }
        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict):
            for key, value in ctx.items():
                payload[f"ctx_{key}" if key in _ENVELOPE else key] = value
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        # Decimal, numpy scalars and the like fall back to str()
        return json.dumps(payload, default=str)


def resolve_level(name: str) -> int:
    """Level name from config ("info", "DEBUG"); unknown names give INFO."""
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonLogFormatter())
        logger.addHandler(handler)
        logger.setLevel(resolve_level(config.LOG_LEVEL))
        logger.propagate = False
    return logger
