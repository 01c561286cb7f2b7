"""Exception hierarchy for card-align."""
from __future__ import annotations


class CardAlignError(Exception):
    """Base exception for all card-align errors."""


class ConfigError(CardAlignError):
    """Raised when a config file cannot be read or fails validation."""


class DatabaseNotFoundError(CardAlignError):
    """Raised when the DIAMOND database index is missing. Fatal for the run."""


class MissingPairError(CardAlignError):
    """Raised when a sample lacks one of its two mate files."""


class AlignmentError(CardAlignError):
    """Raised when the aligner exits with a non-zero status."""

    def __init__(self, message: str, exit_status: int) -> None:
        super().__init__(message)
        self.exit_status = exit_status


class MissingResultError(CardAlignError):
    """Raised when a per-sample output file is absent or unreadable."""
