"""
Logging utilities used by negotiators and sessions.

Loggers created here can write to the screen (colored when possible) and to a
log file at the same time with independent levels.
"""
from __future__ import annotations

import datetime
import logging
import os
import sys
from pathlib import Path

import colorlog

__all__ = [
    "create_loggers",
    "log_level",
]

LOGS_BASE_DIR = Path.home() / "boagent" / "logs"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LOG_COLORS = {
    "DEBUG": "magenta",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


def log_level(level: int | str | None) -> int | None:
    """Converts a level name (e.g. ``"debug"``) or number to a `logging` level number"""
    if level is None or isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level {level}")
    return value


def create_loggers(
    file_name: str | Path | None = None,
    module_name: str | None = None,
    screen_level: int | str | None = logging.WARNING,
    file_level: int | str | None = logging.DEBUG,
    format_str: str = DEFAULT_FORMAT,
    colored: bool = True,
) -> logging.Logger:
    """
    Create a logger that reports to the screen and optionally to a file.

    Args:
        file_name: The file to log to. If None only the screen is used for
                   logging. If empty, a time-stamped file under `LOGS_BASE_DIR` is used
        module_name: The logger name. If not given, ``"boagent"`` is used
        screen_level: level of the screen handler (None to disable screen logging)
        file_level: level of the file handler
        format_str: the format of logged items
        colored: whether or not to try using colored logs on the screen

    Returns:
        logging.Logger: The logger

    Remarks:
        - Calling this function twice with the same `module_name` returns the
          same logger without adding handlers again.
    """
    if module_name is None:
        module_name = "boagent"
    logger = logging.getLogger(module_name)
    if len(logger.handlers) > 0:
        return logger
    logger.setLevel(logging.DEBUG)
    screen_level, file_level = log_level(screen_level), log_level(file_level)
    if screen_level is not None:
        if colored and os.isatty(2):
            screen_formatter: logging.Formatter = colorlog.ColoredFormatter(
                "%(log_color)s" + format_str,
                "%Y-%m-%d %H:%M:%S",
                log_colors=_LOG_COLORS,
            )
        else:
            screen_formatter = logging.Formatter(format_str)
        screen_handler = logging.StreamHandler(sys.stderr)
        screen_handler.setLevel(screen_level)
        screen_handler.setFormatter(screen_formatter)
        logger.addHandler(screen_handler)
    if file_name is not None and file_level is not None:
        file_name = str(file_name)
        if len(file_name) == 0:
            file_name = str(
                LOGS_BASE_DIR
                / "{}_{}.txt".format(
                    module_name, datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
                )
            )
        os.makedirs(os.path.dirname(os.path.abspath(file_name)), exist_ok=True)
        file_handler = logging.FileHandler(file_name)
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(format_str))
        logger.addHandler(file_handler)
    return logger
