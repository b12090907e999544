"""
Logging configuration for the service.

Handlers are attached to the ``medref_api`` package logger rather than
the root logger, so uvicorn and test runners keep control of their own
output while records still propagate upwards.  Calling
``setup_logging`` again only adjusts the level and adds a file handler
that was not there before.
"""

import logging
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "medref_api"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_HANDLER_NAME = "medref-console"
FILE_HANDLER_NAME = "medref-file"


def _has_handler(logger: logging.Logger, name: str) -> bool:
    return any(handler.get_name() == name for handler in logger.handlers)


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    logger_name: str = PACKAGE_LOGGER,
) -> logging.Logger:
    """Configure the service logger and return it.

    Parameters
    ----------
    level : str
        Level name, case insensitive.  Unknown names mean ``INFO``.
    logfile : Optional[str]
        Also write records to this file.  Missing parent directories
        are created.
    logger_name : str
        Logger to configure; every module logger of the service sits
        below the default.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if not _has_handler(logger, CONSOLE_HANDLER_NAME):
        console_handler = logging.StreamHandler()
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if logfile and not _has_handler(logger, FILE_HANDLER_NAME):
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.set_name(FILE_HANDLER_NAME)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
