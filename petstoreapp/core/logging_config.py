"""
Logging setup
Adds the browser session id to every log line
"""
import logging
import sys
from contextvars import ContextVar
from typing import Optional

# Set by the pre-request hook for the duration of one request
session_id_var: ContextVar[Optional[str]] = ContextVar("session_id", default=None)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s session_id=%(session_id)s %(message)s"


class SessionIdFilter(logging.Filter):
    """Injects the current session id into log records"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = session_id_var.get() or "N/A"
        return True


def bind_session_id(session_id: Optional[str]) -> None:
    session_id_var.set(session_id)


def configure_logging(level: str = "INFO") -> None:
    """
    Configure the root logger for the app.

    Safe to call more than once: the handler is installed only the first time.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    for handler in root.handlers:
        if getattr(handler, "_petstoreapp", False):
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(SessionIdFilter())
    handler._petstoreapp = True
    root.addHandler(handler)
