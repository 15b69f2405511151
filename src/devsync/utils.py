"""Utility functions for devsync."""

import os
import sys
from pathlib import Path

from loguru import logger

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def log_directory() -> Path:
    """Directory for log files, next to the config file."""
    if config_dir := os.getenv("DEVSYNC_CONFIG_DIR"):
        return Path(config_dir)
    return Path(os.getenv("HOME", Path.home())) / ".devsync"


def setup_logging(
    log_level: str = "INFO",
    log_to_file: bool = False,
    log_to_stdout: bool = False,
    log_file_name: str = "devsync.log",
) -> None:
    """Configure loguru sinks.

    Args:
        log_level: Minimum level for every configured sink
        log_to_file: Write to a rotating file in the config directory
        log_to_stdout: Write to stderr (stdout is reserved for command output)
        log_file_name: File name used when logging to a file
    """
    logger.remove()

    # Under pytest, resolve sys.stderr per message so capture swaps are honored
    if os.getenv("PYTEST_CURRENT_TEST") is not None:
        logger.add(lambda msg: sys.stderr.write(msg), level=log_level, format=DEFAULT_LOG_FORMAT)
        return

    if log_to_file:
        log_path = log_directory() / log_file_name
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_path),
            level=log_level,
            rotation="10 MB",
            retention="10 days",
            backtrace=True,
            diagnose=False,
            enqueue=True,
        )

    if log_to_stdout:
        logger.add(sys.stderr, level=log_level, format=DEFAULT_LOG_FORMAT, backtrace=True)

    logger.debug(f"Logging configured at level {log_level}")
