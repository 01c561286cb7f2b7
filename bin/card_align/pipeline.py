"""Run the full alignment pipeline over every sample in the input directory."""
from __future__ import annotations

import logging
from datetime import datetime

from card_align.config import RunConfig
from card_align.database import validate_database
from card_align.deps import check_dependencies
from card_align.diamond import Aligner, DiamondAligner
from card_align.discover import discover_samples
from card_align.exceptions import CardAlignError, DatabaseNotFoundError
from card_align.models import RunSummary
from card_align.process import process_sample
from card_align.summary import (
    collect_summary_rows,
    success_rate,
    summary_csv_path,
    write_summary_csv,
)

logger = logging.getLogger(__name__)


def run_pipeline(
    config: RunConfig,
    aligner: Aligner | None = None,
    now: datetime | None = None,
    check_deps: bool = True,
) -> RunSummary:
    """Process all samples sequentially and write the dated summary CSV.

    A missing database raises before any sample is touched. Per-sample errors
    are logged and recorded as failures.
    """
    now = now or datetime.now()
    if check_deps:
        check_dependencies([config.aligner])
    try:
        validate_database(config)
    except DatabaseNotFoundError as e:
        logger.error("Aborting run: %s", e)
        raise

    aligner = aligner or DiamondAligner(config.aligner)
    config.output_dir.mkdir(parents=True, exist_ok=True)

    samples = discover_samples(config.input_dir, config.output_dir)
    logger.info("Found %d sample(s) in %s", len(samples), config.input_dir)

    summary = RunSummary()
    for i, sample in enumerate(samples, 1):
        logger.info("[%d/%d] Processing %s", i, len(samples), sample.name)
        try:
            result = process_sample(sample, config, aligner)
        except CardAlignError as e:
            logger.error("%s failed: %s", sample.name, e)
            summary.failures.append((sample.name, str(e)))
            continue
        summary.results.append(result)

    logger.info(
        "Processed %d/%d sample(s) successfully (%d%%)",
        summary.successful, summary.total,
        success_rate(summary.total, summary.successful),
    )

    rows = collect_summary_rows(config, summary)
    write_summary_csv(rows, summary_csv_path(config.output_dir, now.date()))
    return summary
