"""
Logger configuration.

Single stdout handler on the root logger; the level comes from application
settings unless given explicitly.

Dependencies: logging (stdlib), configs
System role: Centralized logging configuration
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str | None = None) -> None:
    """
    Install the stdout handler on the root logger.

    Calling it again replaces the previous handler instead of adding another.

    Args:
        level: Log level name; defaults to the configured effective level
    """
    if level is None:
        # Deferred: configs imports the pipeline, which imports observability
        from diagram_assist.configs import get_settings

        level = get_settings().effective_log_level

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return the named logger (usually ``__name__``)."""
    return logging.getLogger(name)
