"""Validate a per-sample output file and compute its summary metrics."""
from __future__ import annotations

import csv
import logging
from pathlib import Path

import pandas as pd

from card_align.config import RunConfig
from card_align.exceptions import MissingResultError
from card_align.models import HitStats, Sample, SampleResult

logger = logging.getLogger(__name__)

# BLAST tabular (outfmt 6) columns, 0-based
IDENTITY_COL = 2
LENGTH_COL = 3
OUTFMT6_COLUMNS = [
    "qseqid", "sseqid", "pident", "length", "mismatch", "gapopen",
    "qstart", "qend", "sstart", "send", "evalue", "bitscore",
]


def read_hits(path: Path) -> pd.DataFrame:
    """Load a headerless tabular hit file. An empty file gives an empty frame."""
    path = Path(path)
    if not path.is_file():
        raise MissingResultError(f"Output file not found: {path}")
    try:
        df = pd.read_csv(path, sep="\t", header=None, quoting=csv.QUOTE_NONE)
    except pd.errors.EmptyDataError:
        return pd.DataFrame(columns=range(len(OUTFMT6_COLUMNS)))
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
        raise MissingResultError(f"Could not read output file {path}: {e}") from e

    if df.shape[1] <= LENGTH_COL:
        raise MissingResultError(
            f"Output file {path} has {df.shape[1]} column(s); expected tabular hits"
        )
    return df


def _mean(values: pd.Series) -> float:
    if values.notna().any():
        return float(values.mean())
    return 0.0


def summarize_hits(path: Path, min_identity: float) -> HitStats:
    """Compute hit counts and mean length/identity for one output file.

    High-confidence hits are re-counted against ``min_identity`` here even
    though the aligner was given the same threshold.
    """
    df = read_hits(path)
    identity = pd.to_numeric(df[IDENTITY_COL], errors="coerce")
    length = pd.to_numeric(df[LENGTH_COL], errors="coerce")
    return HitStats(
        total_hits=len(df),
        high_confidence_hits=int((identity >= min_identity).sum()),
        avg_length=_mean(length),
        avg_identity=_mean(identity),
    )


def validate_result(sample: Sample, config: RunConfig, elapsed: float) -> SampleResult:
    """Confirm a sample's output exists and fold its metrics into a result."""
    stats = summarize_hits(sample.output, config.min_identity)
    logger.info(
        "%s: %d hits (%d >= %.1f%% identity), avg length %.2f, avg identity %.2f",
        sample.name, stats.total_hits, stats.high_confidence_hits,
        config.min_identity, stats.avg_length, stats.avg_identity,
    )
    return SampleResult(
        sample=sample.name,
        output=sample.output,
        stats=stats,
        elapsed=elapsed,
    )
