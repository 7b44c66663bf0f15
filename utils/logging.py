"""Project-wide logging configuration helpers."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that flood INFO with connection details.
_NOISY_LOGGERS = ("asyncio", "urllib3", "playwright")


def configure_logging(level_name: Optional[str] = None, log_file: Optional[Path | str] = None) -> None:
    """Configure the root logger if it has not been configured yet.

    Parameters
    ----------
    level_name:
        Optional logging level name. If omitted, ``LOG_LEVEL`` from the
        environment (default ``INFO``) is used.
    log_file:
        Optional path that also receives every record, ``GHT_LOG_FILE``
        from the environment when omitted. Useful to keep a trace of a
        bulk delete.
    """
    resolved_level = (level_name or os.getenv("LOG_LEVEL", "INFO")).upper()
    numeric_level = getattr(logging, resolved_level, logging.INFO)

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=numeric_level,
            format=_DEFAULT_FORMAT,
            datefmt=_DEFAULT_DATE_FORMAT,
        )
    else:
        root_logger.setLevel(numeric_level)

    resolved_file = log_file or os.getenv("GHT_LOG_FILE")
    if resolved_file:
        path = Path(resolved_file).expanduser().resolve()
        already_attached = any(
            isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == path
            for handler in root_logger.handlers
        )
        if not already_attached:
            handler = logging.FileHandler(path, encoding="utf-8")
            handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT, _DEFAULT_DATE_FORMAT))
            root_logger.addHandler(handler)

    if numeric_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a module-level logger configured with project defaults."""
    configure_logging()
    return logging.getLogger(name)
