# === FILE: text_scout/logger.py ===
"""Logging for TextScout.

Every module logs through the ``TextScout`` logger or one of its children
(``TextScout.crawler``, ``TextScout.events``, ...), obtained with
:func:`get_logger`. Records go to stderr, which keeps stdout free for the
JSON summary printed by ``text_scout crawl``; ``--log-file`` adds a rotating
file next to it.

The CLI calls :func:`configure` once per invocation. Importing this module
installs the console handler so library use logs sensibly without it.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "TextScout"

LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]


def _console_handler(fmt: str) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _file_handler(file: Path | str, fmt: str) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=str(file),
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Set up the ``TextScout`` logger and return it.

    Parameters
    ----------
    level
        Threshold for crawl logs; ``"DEBUG"`` also shows skipped links and
        per-page extraction events.
    log_file
        Extra rotating log file, or ``None`` for stderr only.
    log_format
        :class:`logging.Formatter` format string shared by both handlers.
    replace_handlers
        Close and drop handlers from a previous call first.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)

    if replace_handlers:
        for handler in list(lg.handlers):
            lg.removeHandler(handler)
            handler.close()

    lg.addHandler(_console_handler(log_format))
    if log_file is not None:
        lg.addHandler(_file_handler(log_file, log_format))

    lg.propagate = False
    return lg


def get_logger(suffix: str | None = None) -> logging.Logger:
    """``TextScout`` logger, or its ``TextScout.<suffix>`` child."""
    return logging.getLogger(LOGGER_NAME if not suffix else f"{LOGGER_NAME}.{suffix}")


logger: logging.Logger = configure()

__all__ = ["logger", "configure", "get_logger", "DEFAULT_FORMAT", "LOGGER_NAME"]
