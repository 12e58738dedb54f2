"""Structured logging configuration."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_FORMAT = "%(asctime)s [%(levelname)-5s] %(name)-28s | %(message)s"

# Per-request access lines drown out transfer events at INFO.
_QUIET_LOGGERS = ("uvicorn.access",)


def setup_logging(level: str = "INFO", log_file: str | Path | None = None) -> None:
    """Configure the root logger for game output.

    Logs go to stdout and, when *log_file* is given, are appended to that
    file as well. Calling this again replaces the previous handlers.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(fmt=_FORMAT, datefmt="%H:%M:%S")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    quiet_level = max(numeric_level, logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)
