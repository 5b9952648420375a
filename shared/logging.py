"""
Logging setup and request correlation ids.

Uses the standard library logging module. Every record carries the
correlation id of the request that produced it, so the three token
signing workers and the orchestrator that spawned them share one id.
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Optional

CORRELATION_ID_HEADER = "X-Correlation-ID"

correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s"


def get_correlation_id() -> Optional[str]:
    """Get the correlation id of the current request, if any."""
    return correlation_id_var.get()


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """Set (or generate) the correlation id for the current context."""
    cid = correlation_id or str(uuid.uuid4())
    correlation_id_var.set(cid)
    return cid


class CorrelationIdFilter(logging.Filter):
    """Attach the current correlation id to every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once.

    Safe to call repeatedly (e.g. from the app factory in tests); the
    handler is only installed the first time.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    for handler in root.handlers:
        if getattr(handler, "_mygram", False):
            return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(CorrelationIdFilter())
    handler._mygram = True  # type: ignore[attr-defined]
    root.addHandler(handler)
