"""Core logging implementation for compareui."""

import logging
import sys
from typing import Optional

__all__ = ["get_logger", "setup_logging", "LOGGER_NAME"]

LOGGER_NAME = "compareui"

# Client libraries that log every HTTP request at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "anthropic")


def setup_logging(level: int = logging.INFO, stream=sys.stderr) -> None:
    """Configure basic logging.

    Args:
        level: Logging level.
        stream: Output stream.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=stream,
    )
    if level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Name of the logger.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name or LOGGER_NAME)
