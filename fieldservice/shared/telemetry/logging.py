"""Logging configuration for the engine."""

import logging
import sys

from fieldservice.core.config import get_settings


def setup_logging() -> None:
    """Configure process-wide logging.

    Level comes from settings.log_level (DEBUG when settings.debug is True).
    Output goes to stdout.
    """
    settings = get_settings()
    logging.basicConfig(
        level=settings.effective_log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
