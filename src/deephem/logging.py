"""
Logging configuration for the deephem package.

Every module asks for its logger through get_logger so that formatting and
level control stay consistent across the package.
"""

import logging
import os
import sys

# Default logging level - Debug messages are suppressed by default
DEFAULT_LOG_LEVEL = logging.WARNING

LOG_LEVEL_ENV = "DEEPHEM_LOG_LEVEL"

FORMATTER = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
)

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger for the given name.

    Args:
        name: Name for the logger, typically __name__ of the calling module

    Returns:
        A configured logger instance
    """
    logger = logging.getLogger(name)

    # Only configure the logger if it hasn't been already
    if not logger.handlers:
        root_logger = logging.getLogger("deephem")
        if root_logger.level != logging.NOTSET:
            log_level = root_logger.level
        else:
            log_level = _get_log_level()
        logger.setLevel(log_level)

        # stderr keeps evaluated samples on stdout parseable
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(FORMATTER)
        logger.addHandler(handler)
        logger.propagate = False

    return logger


def _get_log_level() -> int:
    """
    Get the logging level based on the environment.

    Returns:
        The appropriate logging level as an int
    """
    log_level_str = os.environ.get(LOG_LEVEL_ENV, "").upper()
    return _LEVELS.get(log_level_str, DEFAULT_LOG_LEVEL)


def set_log_level(level: int) -> None:
    """
    Set the logging level for all deephem loggers.

    Args:
        level: The logging level to set (e.g., logging.DEBUG)
    """
    logger = logging.getLogger("deephem")
    logger.setLevel(level)

    for handler in logger.handlers:
        handler.setLevel(level)

    # Loggers created through get_logger carry their own level
    for name, child in logging.Logger.manager.loggerDict.items():
        if name.startswith("deephem.") and isinstance(child, logging.Logger):
            child.setLevel(level)
            for handler in child.handlers:
                handler.setLevel(level)
