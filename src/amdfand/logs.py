"""Apply the configured log level to the process-wide logging setup."""

import logging

from .config import LogLevel

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Off sits above CRITICAL so nothing gets through
OFF = logging.CRITICAL + 10

LEVELS = {
    LogLevel.OFF: OFF,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.TRACE: logging.DEBUG,
}


def to_logging_level(level: LogLevel) -> int:
    """Return the stdlib logging level for a configured LogLevel."""
    return LEVELS[level]


def configure_logging(level: LogLevel) -> None:
    """Set up root logging at the configured level.

    Meant to be called once by the daemon right after load_config().
    """
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(to_logging_level(level))
