"""Session ID logging context for tracing one game across modules.

Provides a session-aware logger that attaches a correlation ID to every
log record, so every turn, state change and replacement of one game can
be followed in the log.

Usage:
    from customer_sim.logging_context import get_session_logger, set_session_id

    set_session_id("GAME-abc123")
    logger = get_session_logger(__name__)
    logger.info("Turn processed")  # record.session_id == "GAME-abc123"
"""

import logging
from contextvars import ContextVar
from typing import Optional, TextIO

_session_id: ContextVar[str] = ContextVar("session_id", default="NO_SESSION")


def set_session_id(session_id: str) -> None:
    """Set the correlation ID for the current async context."""
    _session_id.set(session_id)


def get_session_id() -> str:
    """Retrieve the current correlation ID."""
    return _session_id.get()


class SessionIdFilter(logging.Filter):
    """Injects session_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = _session_id.get()  # type: ignore[attr-defined]
        return True


def get_session_logger(name: str) -> logging.Logger:
    """Return a logger with the SessionIdFilter attached.

    The filter adds ``session_id`` to each record so formatters can
    include ``%(session_id)s`` in their format string.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, SessionIdFilter) for f in logger.filters):
        logger.addFilter(SessionIdFilter())
    return logger


LOG_FORMAT = "%(asctime)s [%(name)s] [%(session_id)s] %(levelname)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def session_log_handler(stream: Optional[TextIO] = None) -> logging.Handler:
    """Stream handler that stamps and renders the session id on every record.

    The filter sits on the handler, so records from any logger that reach
    it carry ``session_id``, not only those from session loggers.
    """
    handler = logging.StreamHandler(stream)
    handler.addFilter(SessionIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    return handler
