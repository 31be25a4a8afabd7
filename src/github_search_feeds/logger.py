"""
Logger Configuration Module

Handles logging setup for feed generation runs.
"""

import logging
import sys
from pathlib import Path

LOGGER_NAME = "github_search_feeds"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def create_logger(log_dir: Path, level: str = "INFO") -> logging.Logger:
    # Create logs directory if it doesn't exist
    log_dir.mkdir(parents=True, exist_ok=True)

    feeds_logger = logging.getLogger(LOGGER_NAME)
    feeds_logger.setLevel(level.upper())

    # File handler keeps the full history of runs
    file_handler = logging.FileHandler(
        log_dir / "github_search_feeds.log", encoding="utf-8"
    )
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    feeds_logger.addHandler(file_handler)

    # Console handler so scheduled runs show progress in their job output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter("%(levelname)s | %(message)s"))
    feeds_logger.addHandler(console_handler)

    return feeds_logger


feeds_logger: logging.Logger | None = None


def setup_logging(log_dir: Path = Path("logs"), level: str = "INFO") -> logging.Logger:
    global feeds_logger
    if feeds_logger is None:
        feeds_logger = create_logger(log_dir, level)
    return feeds_logger
