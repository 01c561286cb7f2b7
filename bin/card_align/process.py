"""Process one paired-end sample: align both mates and combine the hits."""
from __future__ import annotations

import logging
import shutil
import tempfile
import time
from pathlib import Path

from card_align.config import RunConfig
from card_align.diamond import Aligner, align_mate
from card_align.exceptions import MissingPairError, MissingResultError
from card_align.models import Sample, SampleResult
from card_align.validate import validate_result

logger = logging.getLogger(__name__)


def concatenate_hits(inputs: list[Path], output: Path) -> int:
    """Copy each input, byte for byte and in order, to output.

    Every input must exist. Returns the number of lines written.
    """
    for path in inputs:
        if not path.is_file():
            raise MissingResultError(f"Aligner produced no output file: {path.name}")

    output.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with open(output, "wb") as out_fh:
        for path in inputs:
            with open(path, "rb") as in_fh:
                for line in in_fh:
                    out_fh.write(line)
                    count += 1
    return count


def process_sample(sample: Sample, config: RunConfig, aligner: Aligner) -> SampleResult:
    """Align both mates of a sample and validate the combined output.

    Both mate files must exist before any working directory is created. The
    working directory is always removed, whether or not alignment succeeds.
    """
    start = time.monotonic()
    for mate in (sample.mate1, sample.mate2):
        if not mate.is_file():
            raise MissingPairError(f"Missing paired file for {sample.name}: {mate}")

    sample.output.parent.mkdir(parents=True, exist_ok=True)
    work_dir = Path(tempfile.mkdtemp(prefix=f".{sample.name}_", dir=sample.output.parent))
    try:
        mate1_hits = align_mate(aligner, sample.mate1, work_dir / "mate1.tsv", config)
        mate2_hits = align_mate(aligner, sample.mate2, work_dir / "mate2.tsv", config)
        rows = concatenate_hits([mate1_hits, mate2_hits], sample.output)
    finally:
        shutil.rmtree(work_dir, ignore_errors=True)

    elapsed = time.monotonic() - start
    logger.info("%s: wrote %d rows to %s in %.1fs", sample.name, rows, sample.output.name, elapsed)
    return validate_result(sample, config, elapsed)
