"""Logging configuration for take using loguru.

All log output goes to ``stderr``: ``stdout`` is reserved for the final path that the shell wrapper
reads. Records emitted through the standard library (GitPython, httpx) are intercepted and routed
through loguru so that every message shares one format.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Any

from loguru import logger

from take.config import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV_VAR

if TYPE_CHECKING:
    from loguru import Logger, Record

_LOG_FORMAT = "<level>{level: <8}</level> | <cyan>{extra[name]}</cyan> - <level>{message}</level>{extra[fields]}\n"


def _format_extra_fields(record: Record) -> str:
    """Render the ``extra={...}`` mapping passed to a log call as ``key=value`` pairs.

    Parameters
    ----------
    record : Record
        The loguru record being formatted.

    Returns
    -------
    str
        The rendered fields, prefixed with `` | `` or an empty string when there are none.

    """
    fields: dict[str, Any] = record["extra"].get("extra") or {}
    if not fields:
        return ""
    return " | " + " ".join(f"{key}={value}" for key, value in fields.items())


def _formatter(record: Record) -> str:
    record["extra"].setdefault("name", record["name"])
    record["extra"]["fields"] = _format_extra_fields(record)
    return _LOG_FORMAT


class InterceptHandler(logging.Handler):
    """Forward standard-library ``logging`` records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        """Emit ``record`` through loguru at the matching level.

        Parameters
        ----------
        record : logging.LogRecord
            The record produced by a standard-library logger.

        """
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find the caller outside the logging module so loguru reports the right origin
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(level: str | None = None) -> None:
    """Install the stderr sink and intercept standard-library logging.

    Parameters
    ----------
    level : str | None
        Minimum level to emit. Falls back to the ``TAKE_LOG_LEVEL`` environment variable,
        then to ``WARNING``.

    """
    level = (level or os.getenv(LOG_LEVEL_ENV_VAR) or DEFAULT_LOG_LEVEL).upper()

    logger.remove()
    logger.add(sys.stderr, level=level, format=_formatter, colorize=None)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


def get_logger(name: str) -> Logger:
    """Return a loguru logger bound to ``name``.

    Parameters
    ----------
    name : str
        Usually ``__name__`` of the calling module.

    Returns
    -------
    Logger
        The bound logger.

    """
    return logger.bind(name=name)


configure_logging()
