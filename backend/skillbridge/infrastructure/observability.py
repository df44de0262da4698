"""Structured Logging — JSON log lines and per-request access logging.

Invariants:
    - Every line carries timestamp, level, logger and message
    - Known extra fields (error_code, path, attempt, source, ...) are copied when set
    - setup_logging is idempotent: calling it twice never duplicates handlers
    - One access line per request with method, path, status and duration

Design Decisions:
    - Hand-written JSONFormatter on stdlib logging: no logging dependency to pin
    - httpx and sqlalchemy.engine capped at WARNING: price polling and SQL echo
      would otherwise drown request lines
"""

import json
import logging
import time
from datetime import datetime, timezone

from fastapi import FastAPI, Request

_EXTRA_FIELDS = (
    "error_code", "path", "method", "status_code", "duration_ms",
    "attempt", "source", "provider",
    "proposal_id", "student_proposal_id", "role", "user_id",
)
_NOISY_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine")
_HANDLER_NAME = "skillbridge"

access_logger = logging.getLogger("skillbridge.access")


class JSONFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update({
            key: record.__dict__[key]
            for key in _EXTRA_FIELDS
            if record.__dict__.get(key) is not None
        })
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the root handler once; later calls only adjust level and format."""
    root = logging.getLogger()
    handler = next((h for h in root.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        root.addHandler(handler)
    handler.setFormatter(
        JSONFormatter() if fmt == "json"
        else logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"),
    )
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def register_access_log(app: FastAPI) -> None:
    """Log method, path, status and duration for every request."""

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        access_logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 1),
            },
        )
        return response
