"""Centralised logging configuration utilities."""
from __future__ import annotations

import logging
import os
import sys
import threading
from typing import Optional

_lock = threading.Lock()
_is_configured = False


class LevelColorFormatter(logging.Formatter):
    """Coloured, one-line formatter for terminal output."""

    CYAN = "\x1b[36m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    RED = "\x1b[31m"
    BOLD_RED = "\x1b[31;1m"
    RESET = "\x1b[0m"

    BASE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    DATE_FORMAT = "%H:%M:%S"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._formatters = {
            level: logging.Formatter(f"{color}{self.BASE_FORMAT}{self.RESET}", datefmt=self.DATE_FORMAT)
            for level, color in {
                logging.DEBUG: self.CYAN,
                logging.INFO: self.GREEN,
                logging.WARNING: self.YELLOW,
                logging.ERROR: self.RED,
                logging.CRITICAL: self.BOLD_RED,
            }.items()
        }
        self._default_formatter = logging.Formatter(self.BASE_FORMAT, datefmt=self.DATE_FORMAT)

    def format(self, record):
        formatter = self._formatters.get(record.levelno, self._default_formatter)
        return formatter.format(record)


def resolve_level(default: int = logging.INFO) -> int:
    """Map ``LOG_LEVEL`` to a logging level, falling back to ``default``."""

    name = os.getenv("LOG_LEVEL", "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def configure_logging(level: Optional[int] = None) -> None:
    """Install a single stdout handler on the root logger, once."""

    global _is_configured

    with _lock:
        if _is_configured:
            return

        root = logging.getLogger()
        root.setLevel(level if level is not None else resolve_level())

        for handler in root.handlers[:]:
            root.removeHandler(handler)

        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(LevelColorFormatter())
        root.addHandler(console)

        _is_configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module specific logger with shared configuration."""

    if not _is_configured:
        configure_logging()
    return logging.getLogger(name)
