"""Logging setup for wcag_scout.

Modules log through ``logging.getLogger(__name__)``; records reach the
``wcag_scout`` logger configured here. The CLI calls :func:`init_logging`
with its ``--log-*`` options, a file is only written when one is given.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOGGER_NAME: Final[str] = "wcag_scout"
_MAX_LOG_BYTES: Final[int] = 5 * 1024 * 1024

_LevelT = Union[int, str]


def _with_format(handler: logging.Handler, fmt: str) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Point the package logger at stdout and, when *log_file* is set, a rotating file.

    With *replace_handlers* false the new handlers are added next to the
    existing ones.
    """
    audit_logger = logging.getLogger(_LOGGER_NAME)
    audit_logger.setLevel(level)

    if replace_handlers:
        for handler in list(audit_logger.handlers):
            audit_logger.removeHandler(handler)
            handler.close()

    audit_logger.addHandler(_with_format(logging.StreamHandler(sys.stdout), log_format))
    if log_file is not None:
        rotating = RotatingFileHandler(
            str(log_file), maxBytes=_MAX_LOG_BYTES, backupCount=3, encoding="utf-8"
        )
        audit_logger.addHandler(_with_format(rotating, log_format))

    audit_logger.propagate = False
    return audit_logger


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
) -> logging.Logger:
    return configure(level=level, log_file=log_file, log_format=log_format)


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging"]
