"""Aggregate per-sample results into a run report and a dated CSV."""
from __future__ import annotations

import csv
import logging
from datetime import date
from pathlib import Path

from card_align.config import RunConfig
from card_align.discover import discover_outputs, sample_name_from_output
from card_align.exceptions import MissingResultError
from card_align.models import HitStats, RunSummary
from card_align.validate import summarize_hits

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = [
    "Sample",
    "Total_Hits",
    "High_Confidence_Hits",
    "Avg_Length",
    "Avg_Identity",
]


def success_rate(total: int, successful: int) -> int:
    """Integer percentage of successful samples, rounded down."""
    if total <= 0:
        return 0
    return successful * 100 // total


def summary_csv_path(output_dir: Path, day: date) -> Path:
    return Path(output_dir) / f"diamond_card_summary_{day:%Y%m%d}.csv"


def collect_summary_rows(config: RunConfig, summary: RunSummary | None = None) -> list[tuple[str, HitStats]]:
    """Gather (sample, stats) rows for the summary CSV.

    With ``rescan_output_dir`` every result file in the output directory is
    re-read, including files left by earlier runs. Otherwise only this run's
    successful samples are used.
    """
    if not config.rescan_output_dir and summary is not None:
        return sorted((r.sample, r.stats) for r in summary.results)

    rows: list[tuple[str, HitStats]] = []
    for path in discover_outputs(config.output_dir):
        try:
            stats = summarize_hits(path, config.min_identity)
        except MissingResultError as e:
            logger.warning("Skipping %s in summary: %s", path.name, e)
            continue
        rows.append((sample_name_from_output(path), stats))
    return rows


def write_summary_csv(rows: list[tuple[str, HitStats]], path: Path) -> Path:
    """Write one CSV row per sample, averages to two decimals."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as fh:
        writer = csv.writer(fh)
        writer.writerow(SUMMARY_COLUMNS)
        for name, stats in sorted(rows, key=lambda row: row[0]):
            writer.writerow([
                name,
                stats.total_hits,
                stats.high_confidence_hits,
                f"{stats.avg_length:.2f}",
                f"{stats.avg_identity:.2f}",
            ])
    logger.info("Wrote summary for %d sample(s) to %s", len(rows), path)
    return path


def format_summary(summary: RunSummary) -> str:
    """Format the run outcome for display."""
    lines = [
        f"Samples attempted: {summary.total}",
        f"Samples succeeded: {summary.successful}",
        f"Success rate:      {success_rate(summary.total, summary.successful)}%",
    ]
    if summary.results:
        lines.append("")
        lines.append(f"{'Sample':<30} {'Hits':>8} {'HighConf':>9} {'AvgLen':>8} {'AvgId':>7} {'Time(s)':>8}")
        lines.append("-" * 75)
        for r in summary.results:
            s = r.stats
            lines.append(
                f"{r.sample:<30} {s.total_hits:>8} {s.high_confidence_hits:>9} "
                f"{s.avg_length:>8.2f} {s.avg_identity:>7.2f} {r.elapsed:>8.1f}"
            )
    if summary.failures:
        lines.append("")
        lines.append("Failed samples:")
        for name, reason in summary.failures:
            lines.append(f"  {name}: {reason}")
    return "\n".join(lines)
