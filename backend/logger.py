"""
Logging setup shared by every module.

Use ``get_logger(__name__)`` instead of ``logging.getLogger`` so the root
handler is installed exactly once.
"""

import logging
import sys

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_initialized = False


def _init_logging() -> None:
    global _initialized
    if _initialized:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    root = logging.getLogger()
    root.setLevel(logging.INFO)
    root.addHandler(handler)
    _initialized = True


def set_level(level: str) -> None:
    """Change the root level, e.g. from the LOG_LEVEL setting."""
    _init_logging()
    logging.getLogger().setLevel(level.upper())


def get_logger(name: str) -> logging.Logger:
    _init_logging()
    return logging.getLogger(name)
