"""Logging setup: console plus a timestamped run log in the output directory."""
from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path

LOGGER_NAME = "card_align"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def log_path(output_dir: Path, now: datetime) -> Path:
    return Path(output_dir) / f"diamond_card_run_{now:%Y%m%d_%H%M%S}.log"


def setup_logging(output_dir: Path, now: datetime | None = None, level: str = "INFO") -> Path:
    """Attach console and file handlers to the package logger.

    Returns the path of the run log. Calling again replaces the handlers.
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = log_path(output_dir, now or datetime.now())

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    logger.addHandler(console)

    file_handler = logging.FileHandler(path)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    return path
