"""Logging configuration for the dialer.

This module provides centralized logging configuration using Loguru.
The library modules only emit records; sinks are installed here by the
command-line driver.
"""

import sys
from pathlib import Path

from loguru import logger

LOG_DIR = Path.home() / ".socks5-dialer" / "logs"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def configure_logging(debug: bool = False, log_dir: Path | None = None) -> None:
    """Install the console sink, plus a rotating file sink in debug mode.

    Args:
        debug: Log at DEBUG level and also write to ``log_dir``
        log_dir: Directory for the log file, defaults to ``LOG_DIR``
    """
    logger.remove()

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level="DEBUG" if debug else "INFO",
        backtrace=debug,
        diagnose=debug,
    )

    if debug:
        log_dir = log_dir or LOG_DIR
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_dir / "dialer.log",
            rotation="10 MB",
            retention="1 week",
            compression="zip",
            format=FILE_FORMAT,
            level="DEBUG",
            backtrace=True,
            diagnose=True,
        )


__all__ = ["configure_logging", "logger", "LOG_DIR"]
