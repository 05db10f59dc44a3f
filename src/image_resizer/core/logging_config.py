"""Centralized logging configuration for the image resizer."""

import os
import sys
import logging
from typing import Optional


def setup_logger(
    name: str = "image-resizer",
    level: Optional[str] = None,
    format_type: str = "structured",
) -> logging.Logger:
    """
    Setup centralized logging with environment variable configuration.

    Args:
        name: Logger name (defaults to "image-resizer")
        level: Log level override (defaults to env var or INFO)
        format_type: Logging format ("structured" or "simple")

    Returns:
        Configured logger instance

    Environment Variables:
        LOG_LEVEL: Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        LOG_FORMAT: Set format type ("structured" or "simple")
    """
    logger = logging.getLogger(name)

    if level:
        log_level = getattr(logging, level.upper(), logging.INFO)
    else:
        env_level = os.getenv("LOG_LEVEL", "INFO").upper()
        log_level = getattr(logging, env_level, logging.INFO)

    # An explicit --debug wins over later get_logger() calls
    if not (level is None and logger.level == logging.DEBUG):
        logger.setLevel(log_level)

    # Avoid duplicate handlers
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)

        env_format = os.getenv("LOG_FORMAT", format_type).lower()

        if env_format == "structured":
            formatter = logging.Formatter(
                "%(asctime)s | %(name)s | %(levelname)-8s | "
                "%(filename)s:%(lineno)d | %(funcName)s() | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        else:
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )

        handler.setFormatter(formatter)
        logger.addHandler(handler)

    # Prevent duplicate log messages
    logger.propagate = False
    return logger


def get_logger(name: str = "image-resizer") -> logging.Logger:
    """
    Get a logger instance with consistent configuration.

    Args:
        name: Logger name

    Returns:
        Configured logger instance
    """
    return setup_logger(name)


def configure_multiprocessing_logging(level: Optional[str] = None) -> None:
    """
    Configure logging inside a worker process.

    Call this at the top of multiprocessing worker functions so that each
    process logs through its own handler.
    """
    import multiprocessing

    process_name = multiprocessing.current_process().name
    setup_logger(f"image-resizer.{process_name}", level=level)
    # Module-level loggers used by the pipeline
    setup_logger("resizer", level=level)


# Create default logger instance
logger = setup_logger()
