"""DIAMOND blastx wrapper: align one mate file against the database."""
from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from card_align.config import RunConfig
from card_align.exceptions import AlignmentError

logger = logging.getLogger(__name__)

OUTFMT_TABULAR = "6"
MAX_TARGET_SEQS = 1
COMMAND_NOT_EXECUTABLE = 126
COMMAND_NOT_FOUND = 127


@dataclass(frozen=True)
class AlignmentParams:
    """Thresholds and resources for one aligner invocation."""

    database: Path
    min_identity: float
    min_length: int
    evalue: float
    threads: int

    @classmethod
    def from_config(cls, config: RunConfig) -> AlignmentParams:
        return cls(
            database=config.database,
            min_identity=config.min_identity,
            min_length=config.min_length,
            evalue=config.evalue,
            threads=config.threads,
        )


class Aligner(Protocol):
    """Anything that can align a query file and report an exit status."""

    def run_alignment(self, query: Path, output: Path, params: AlignmentParams) -> int:
        ...


def build_diamond_command(
    query: Path,
    output: Path,
    params: AlignmentParams,
    diamond_bin: str = "diamond",
) -> list[str]:
    """Build the DIAMOND blastx command line."""
    return [
        diamond_bin, "blastx",
        "--db", str(params.database),
        "--query", str(query),
        "--out", str(output),
        "--outfmt", OUTFMT_TABULAR,
        "--evalue", str(params.evalue),
        "--id", str(params.min_identity),
        "--query-cover", str(params.min_length),
        "--max-target-seqs", str(MAX_TARGET_SEQS),
        "--threads", str(params.threads),
    ]


class DiamondAligner:
    """Runs the real ``diamond`` executable."""

    def __init__(self, diamond_bin: str = "diamond") -> None:
        self.diamond_bin = diamond_bin

    def run_alignment(self, query: Path, output: Path, params: AlignmentParams) -> int:
        cmd = build_diamond_command(query, output, params, self.diamond_bin)
        logger.debug("Running: %s", " ".join(cmd))
        try:
            proc = subprocess.run(cmd)
        except FileNotFoundError:
            logger.error("Aligner executable not found: %s", self.diamond_bin)
            return COMMAND_NOT_FOUND
        except OSError as e:
            logger.error("Could not run aligner %s: %s", self.diamond_bin, e)
            return COMMAND_NOT_EXECUTABLE
        return proc.returncode


def align_mate(aligner: Aligner, query: Path, output: Path, config: RunConfig) -> Path:
    """Align one mate file, raising AlignmentError on a non-zero exit status."""
    logger.info("Aligning %s", query.name)
    status = aligner.run_alignment(query, output, AlignmentParams.from_config(config))
    if status != 0:
        raise AlignmentError(
            f"Alignment of {query.name} failed with exit status {status}", status,
        )
    return output
