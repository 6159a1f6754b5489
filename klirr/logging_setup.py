"""Console logging with coloured level names."""

from __future__ import annotations

import datetime as _dt
import logging
import os
import sys
import threading

from termcolor import colored

LOG_LEVEL_ENV = "KLIRR_LOG"
LOGGER_NAME = "klirr"
TRACE = 5
OFF = logging.CRITICAL + 10

logging.addLevelName(TRACE, "TRACE")

_LEVEL_NAMES = {
    "off": OFF,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE,
}

_init_lock = threading.Lock()
_initialized = False
_handler: logging.Handler | None = None


def color_from_level(level: int) -> str:
    """The coloured name for a logging level."""
    if level >= logging.ERROR:
        return colored("ERROR", "red")
    if level >= logging.WARNING:
        return colored("WARN", "yellow")
    if level >= logging.INFO:
        return colored("INFO", "green")
    if level >= logging.DEBUG:
        return colored("DEBUG", "blue")
    return colored("TRACE", "white")


def parse_log_level(value: str) -> int:
    """Parse a level name such as ``info`` or ``TRACE``.

    Raises ValueError for an unknown name.
    """
    try:
        return _LEVEL_NAMES[value.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Invalid log level set with `{LOG_LEVEL_ENV}`, got: {value}"
        ) from None


class _ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        moment = _dt.datetime.fromtimestamp(record.created)
        time = moment.strftime("%H:%M:%S.") + f"{moment.microsecond // 1000:03d}"
        line = f"{time} {color_from_level(record.levelno)} > {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def init_logging_with_level(level: int) -> None:
    """Send package log records at ``level`` and above to stdout."""
    global _handler
    logger = logging.getLogger(LOGGER_NAME)
    if _handler is not None:
        logger.removeHandler(_handler)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_ColorFormatter())
    logger.addHandler(handler)
    logger.setLevel(level)
    _handler = handler
    if level < OFF:
        logger.debug(
            "Logging initialized with level: %s "
            "(if you see this message once, logging is not properly setup)",
            logging.getLevelName(level),
        )


def init_logging() -> None:
    """Set up logging once, using the level named by ``KLIRR_LOG`` or INFO.

    Raises ValueError if the variable names an unknown level.
    """
    global _initialized
    with _init_lock:
        if _initialized:
            return
        value = os.environ.get(LOG_LEVEL_ENV)
        level = logging.INFO if value is None else parse_log_level(value)
        init_logging_with_level(level)
        _initialized = True