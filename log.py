"""
Logging configuration for the IBM i data explorer API.

Call configure_logging() once at startup (done in the app lifespan and in
the ``__main__`` entry point).  All other modules obtain their logger via
get_logger(__name__).

Log level is controlled by the LOG_LEVEL environment variable (default: INFO).
ODBC errors can echo the connection string, so every handler masks
``PWD=...`` before a record is written.
"""

import logging
import os
import re

_CONFIGURED = False

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

_PASSWORD_RE = re.compile(r"(PWD=)[^;]*", re.IGNORECASE)


class RedactPasswords(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _PASSWORD_RE.sub(r"\1***", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def configure_logging() -> None:
    """Configure the root logger. Safe to call multiple times."""
    global _CONFIGURED
    if _CONFIGURED:
        return

    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )
    for handler in logging.getLogger().handlers:
        handler.addFilter(RedactPasswords())

    # uvicorn logs every request at INFO; keep that for debug sessions only.
    if level > logging.DEBUG:
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a module-level logger. Call as get_logger(__name__)."""
    return logging.getLogger(name)
