"""Logging configuration helpers."""

import logging

LOGGER_NAME = "nutrition_compare"
LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"

# Request lines from these carry vendor API keys in the query string.
_QUIET_LOGGERS = ("httpx", "httpcore")


def resolve_level(level: int | str) -> int:
    """Turn a level name such as ``"debug"`` into its numeric value."""
    if isinstance(level, int):
        return level
    levels = logging.getLevelNamesMapping()
    try:
        return levels[level.strip().upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {level!r}") from None


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Set up the package logger once and keep HTTP transport logs quiet.

    Repeated calls only adjust the level, so the app factory can be invoked
    many times (as the tests do) without stacking handlers.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_level(level))
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    return logger
