"""CLI entry point for card-align."""
from __future__ import annotations

import argparse
import sys
from datetime import datetime
from pathlib import Path

from card_align.config import RunConfig, load_config, write_default_config
from card_align.exceptions import CardAlignError
from card_align.log import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="card-align",
        description="Align paired-end unmapped reads against CARD with DIAMOND and summarize hits.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # run
    run = sub.add_parser("run", help="Align every sample and write the summary")
    run.add_argument("-c", "--config", type=Path, default=None, help="TOML config file")
    run.add_argument("-i", "--input-dir", type=Path, default=None, help="Directory of mate files")
    run.add_argument("-d", "--database", type=Path, default=None, help="DIAMOND database (without .dmnd)")
    run.add_argument("-o", "--output-dir", type=Path, default=None, help="Output directory")
    run.add_argument("-t", "--threads", type=int, default=None, help="Aligner threads")
    run.add_argument("--min-identity", type=float, default=None, help="Minimum percent identity")
    run.add_argument("--min-length", type=int, default=None, help="Minimum query coverage")
    run.add_argument("--evalue", type=float, default=None, help="Maximum e-value")
    run.add_argument("--aligner", default=None, help="Aligner executable (default: diamond)")
    run.add_argument("--current-run-only", action="store_true",
                     help="Summarize only samples processed in this run")
    run.add_argument("--skip-dependency-check", action="store_true",
                     help="Do not look for (or install) the aligner")

    # summarize
    summ = sub.add_parser("summarize", help="Rebuild the summary CSV from existing results")
    summ.add_argument("-c", "--config", type=Path, default=None, help="TOML config file")
    summ.add_argument("-o", "--output-dir", type=Path, default=None, help="Output directory")
    summ.add_argument("--min-identity", type=float, default=None, help="Minimum percent identity")

    # init-config
    init = sub.add_parser("init-config", help="Write a default TOML config")
    init.add_argument("path", type=Path, help="Where to write the config")

    return parser


def resolve_config(args: argparse.Namespace) -> RunConfig:
    """Merge defaults, an optional TOML file, and command-line flags."""
    config = load_config(args.config) if args.config else RunConfig()
    overrides = {
        "input_dir": getattr(args, "input_dir", None),
        "database": getattr(args, "database", None),
        "output_dir": getattr(args, "output_dir", None),
        "threads": getattr(args, "threads", None),
        "min_identity": getattr(args, "min_identity", None),
        "min_length": getattr(args, "min_length", None),
        "evalue": getattr(args, "evalue", None),
        "aligner": getattr(args, "aligner", None),
    }
    if getattr(args, "current_run_only", False):
        overrides["rescan_output_dir"] = False
    return config.with_overrides(**overrides)


def cmd_run(args: argparse.Namespace) -> None:
    """Run the full pipeline."""
    from card_align.pipeline import run_pipeline
    from card_align.summary import format_summary

    config = resolve_config(args)
    now = datetime.now()
    log_file = setup_logging(config.output_dir, now)
    print(f"Logging to {log_file}")

    summary = run_pipeline(config, now=now, check_deps=not args.skip_dependency_check)
    print()
    print(format_summary(summary))


def cmd_summarize(args: argparse.Namespace) -> None:
    """Regenerate the dated summary CSV from result files on disk."""
    from card_align.summary import collect_summary_rows, summary_csv_path, write_summary_csv

    config = resolve_config(args)
    rows = collect_summary_rows(config)
    if not rows:
        print(f"No results found in {config.output_dir}; writing header only")
    path = write_summary_csv(rows, summary_csv_path(config.output_dir, datetime.now().date()))
    print(f"Wrote {len(rows)} row(s) to {path}")


def cmd_init_config(path: Path) -> None:
    written = write_default_config(path)
    print(f"Wrote default config to {written}")


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "run":
            cmd_run(args)
        elif args.command == "summarize":
            cmd_summarize(args)
        elif args.command == "init-config":
            cmd_init_config(args.path)
    except CardAlignError as e:
        print(f"[card-align] Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
