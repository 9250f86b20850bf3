"""Centralized logging configuration."""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "legaldocs"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _ensure_root_handler() -> logging.Logger:
    """Attach the stdout handler to the package root logger exactly once."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.INFO)
    return root


def configure_logging(level: str) -> None:
    """Set the log level for every logger under the package root.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    root = _ensure_root_handler()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Get a configured logger instance.

    Loggers inside the package propagate to the package root logger, which
    owns the single console handler. Loggers outside the package (tests,
    scripts) get their own handler.

    Args:
        name: Logger name (typically __name__ of the calling module)
        level: Optional log level override (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        logging.Logger: Configured logger instance
    """
    _ensure_root_handler()
    logger = logging.getLogger(name)

    if level:
        logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    in_package = name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}.")
    if not in_package and not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger
