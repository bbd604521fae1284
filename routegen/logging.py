"""Centralized logging configuration for routegen.

Every module logs through a child of one package logger. Its name, level,
format and output stream come from :class:`routegen.config.LoggingConfig`; the
CLI can replace them with the ``logging`` section of a YAML config file.
"""

import logging
from typing import Optional

from routegen.config import LOGGING_CONFIG, LoggingConfig

# Set once the package logger has its handler
_ROOT_LOGGER_CONFIGURED = False

# Settings the handler was last built from
_active_config: LoggingConfig = LOGGING_CONFIG

ROOT_LOGGER_NAME = LOGGING_CONFIG.logger_name


def setup_root_logger(
    level: Optional[int] = None,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach a single handler to the package logger.

    Repeated calls are no-ops until :func:`reset_logging` or
    :func:`configure_logging` is called. Arguments left as ``None`` fall back
    to the active :class:`LoggingConfig`.

    Args:
        level: Logging level.
        format_string: Custom format string.
        handler: Custom handler; defaults to a StreamHandler on the configured
            stream.
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    config = _active_config
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(config.level_value if level is None else level)
    root_logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler(config.target_stream())
    handler.setFormatter(logging.Formatter(format_string or config.format))
    root_logger.addHandler(handler)

    # Propagate so pytest's caplog sees search logs
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def configure_logging(config: LoggingConfig) -> None:
    """Rebuild the package handler from ``config``.

    The logger name is fixed at import time; a config naming a different
    logger is rejected.

    Raises:
        ValueError: If ``config.logger_name`` is not the package logger.
    """
    global _active_config

    if config.logger_name != ROOT_LOGGER_NAME:
        raise ValueError(
            f"Logger name '{config.logger_name}' does not match the package "
            f"logger '{ROOT_LOGGER_NAME}'"
        )
    reset_logging()
    _active_config = config
    setup_root_logger()


def get_logger(name: str) -> logging.Logger:
    """Return a child logger of the package logger.

    Args:
        name: Logger name, normally ``__name__`` of the calling module.

    Returns:
        Logger that inherits level and handlers from the package logger.
    """
    setup_root_logger()

    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the log level for every routegen logger and its handlers."""
    setup_root_logger()

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def enable_debug_logging() -> None:
    """Enable debug logging for the whole package."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Go back to INFO level."""
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Drop the package handler and defaults so the next call reconfigures it."""
    global _ROOT_LOGGER_CONFIGURED, _active_config
    _ROOT_LOGGER_CONFIGURED = False
    _active_config = LOGGING_CONFIG

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
