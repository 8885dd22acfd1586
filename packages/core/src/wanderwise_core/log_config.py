"""Logging setup with request-id correlation."""

from __future__ import annotations

import logging
import sys
from typing import Any

LOG_FORMAT = "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"


class RequestIdFilter(logging.Filter):
    """Give records without a ``request_id`` a placeholder so the format works."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = "-"
        return True


class RequestLoggerAdapter(logging.LoggerAdapter):
    """Logger bound to one request id."""

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        extra = kwargs.setdefault("extra", {})
        extra.setdefault("request_id", self.extra["request_id"])
        return msg, kwargs


def bind_request(logger: logging.Logger, request_id: str) -> RequestLoggerAdapter:
    """Return *logger* bound to *request_id*."""
    return RequestLoggerAdapter(logger, {"request_id": request_id})


def configure_logging(level: str | int = "INFO") -> None:
    """Install one stream handler on the root logger (idempotent)."""
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers:
        if getattr(handler, "_wanderwise", False):
            return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIdFilter())
    handler._wanderwise = True  # type: ignore[attr-defined]
    root.addHandler(handler)
