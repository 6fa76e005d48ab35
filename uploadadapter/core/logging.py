"""Logging helpers for uploadadapter modules."""

import logging

PACKAGE_LOGGER = 'uploadadapter'


def get_logger(name: str) -> logging.Logger:
    """Get a package logger that defers to whatever the host configured.

    The logger propagates to the root logger, so a host calling
    ``logging.basicConfig()`` sees adapter diagnostics without extra setup.
    When the root logger has no handlers yet, the level falls back to
    WARNING so installer diagnostics still surface through the last-resort
    handler.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True

    root_logger = logging.getLogger()
    if not root_logger.handlers and logger.level == logging.NOTSET:
        logger.setLevel(logging.WARNING)

    return logger
