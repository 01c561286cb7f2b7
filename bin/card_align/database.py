"""Pre-run check for the DIAMOND database index."""
from __future__ import annotations

import logging
from pathlib import Path

from card_align.config import RunConfig
from card_align.exceptions import DatabaseNotFoundError

logger = logging.getLogger(__name__)


def validate_database(config: RunConfig) -> Path:
    """Return the database index path, or raise if it does not exist."""
    db_file = config.database_file
    if not db_file.is_file():
        raise DatabaseNotFoundError(f"DIAMOND database not found: {db_file}")
    logger.info("Using database %s", db_file)
    return db_file
