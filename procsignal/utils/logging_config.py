"""Logging configuration for procsignal."""

import logging
import sys
import time
from functools import wraps
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = 'procsignal'

# Slow-operation threshold in milliseconds
SLOW_THRESHOLD_MS = 100

DETAILED_FORMAT = logging.Formatter(
    '%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)-30s | %(funcName)-20s | %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

SIMPLE_FORMAT = logging.Formatter(
    '%(asctime)s | %(levelname)-8s | %(message)s',
    datefmt='%H:%M:%S'
)


def setup_logging(level: int = logging.INFO, log_file: Optional[Path] = None) -> logging.Logger:
    """
    Setup application-wide logging.

    Args:
        level: Console logging level.
        log_file: Optional path for a detailed DEBUG log.

    Returns:
        Root logger for the application
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(SIMPLE_FORMAT)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(DETAILED_FORMAT)
        logger.addHandler(file_handler)
        logger.debug(f"Logging initialized. Log file: {log_file}")

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific module."""
    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')


class PerfTimer:
    """
    Context manager that logs how long a block took.

    Blocks slower than SLOW_THRESHOLD_MS are reported at WARNING. A block
    that raises is logged at DEBUG only; reporting the error is left to
    whoever handles it.
    """

    def __init__(self, name: str, logger: Optional[logging.Logger] = None):
        self.name = name
        self.logger = logger or get_logger('perf')
        self.start: float = 0
        self.elapsed: float = 0

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed = (time.perf_counter() - self.start) * 1000
        if exc_type is not None:
            self.logger.debug(f"{self.name} raised {exc_type.__name__} after {self.elapsed:.2f}ms")
        elif self.elapsed > SLOW_THRESHOLD_MS:
            self.logger.warning(f"SLOW: {self.name} took {self.elapsed:.2f}ms")
        else:
            self.logger.debug(f"{self.name} took {self.elapsed:.2f}ms")
        return False


def timed(func):
    """Decorator form of PerfTimer, named after the wrapped function."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        with PerfTimer(func.__qualname__):
            return func(*args, **kwargs)
    return wrapper
