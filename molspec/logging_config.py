"""
Logging configuration.

The library itself only creates loggers; applications (and the command
line entry point) call :func:`setup_logging` to attach handlers. Console
output is kept short so that document errors read as plain messages; the
optional log file gets full timestamps.
"""

from __future__ import annotations

import logging
import sys

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: int | str = logging.INFO,
    log_file: str | None = None,
) -> logging.Logger:
    """Configure the ``molspec`` logger.

    Calling this again replaces the handlers from the previous call.

    Args:
        level: Logging level, as a number (``logging.DEBUG``) or a name
            (``"debug"``).
        log_file: Optional path to also write logs to. The file is
            overwritten.

    Returns:
        The configured package logger.

    Raises:
        ValueError: If ``level`` is an unknown level name.
    """
    if isinstance(level, str):
        number = logging.getLevelName(level.upper())
        if not isinstance(number, int):
            raise ValueError(f"Unknown logging level: {level!r}")
        level = number

    logger = logging.getLogger("molspec")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )
        logger.addHandler(file_handler)

    return logger
