"""Logging setup for **SiteMigrate**.

Every module logs through the shared instance::

    from site_migrate.logger import logger
    logger.info("Saved fragment %s", name)

The CLI calls :func:`init_logging` once to apply the chosen level, format and
optional log file.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "SiteMigrate"


def _file_handler(file: Path | str) -> RotatingFileHandler:
    return RotatingFileHandler(
        filename=str(file),
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )


def init_logging(
    level: Union[int, str] = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Replace the handlers of the ``SiteMigrate`` logger.

    Output always goes to stdout; *log_file* adds a rotating file (5 MiB x 3).
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    lg.handlers.clear()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(_file_handler(log_file))
    formatter = logging.Formatter(log_format)
    for handler in handlers:
        handler.setFormatter(formatter)
        lg.addHandler(handler)

    lg.propagate = False
    return lg


logger: logging.Logger = init_logging()

__all__ = ["logger", "init_logging", "DEFAULT_FORMAT", "LOGGER_NAME"]
