"""JSON log lines tagged with the request trace id.

The HTTP middleware in ``app.main`` generates one trace id per request, returns
it in the ``X-Trace-Id`` header and stores it here. Records logged on the
event loop while that request is handled carry it as ``correlation_id``.
"""
import logging
import json
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone

from app.config import settings

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(trace_id: str | None = None) -> str:
    """Bind ``trace_id`` (or a fresh uuid4) to the request being handled."""
    cid = trace_id or str(uuid.uuid4())
    correlation_id_var.set(cid)
    return cid


def get_correlation_id() -> str:
    """Trace id of the current request, or "" outside one."""
    return correlation_id_var.get("")


class JSONFormatter(logging.Formatter):
    """One JSON object per record; request extras (property_id, user_id, path,
    status, duration) are copied when the caller passes them."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        cid = correlation_id_var.get("")
        if cid:
            log_entry["correlation_id"] = cid

        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key in ("property_id", "user_id", "path", "status", "duration"):
            if hasattr(record, key):
                log_entry[key] = str(getattr(record, key))

        return json.dumps(log_entry, ensure_ascii=False)


def setup_logging() -> None:
    """Install the JSON handler on the root logger; called from the app lifespan."""
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    root_logger.addHandler(handler)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("google_genai").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger."""
    return logging.getLogger(name)
