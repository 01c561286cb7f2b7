"""Discover paired-end samples in an input directory."""
from __future__ import annotations

from pathlib import Path

from card_align.models import MATE1_SUFFIX, OUTPUT_SUFFIX, Sample


def discover_samples(input_dir: Path, output_dir: Path) -> list[Sample]:
    """Return one Sample per mate-1 file, sorted by file name.

    The mate-2 file is not required to exist here; processing checks it.
    """
    mate1_files = sorted(p for p in Path(input_dir).glob(f"*{MATE1_SUFFIX}") if p.is_file())
    return [Sample.from_mate1(p, output_dir) for p in mate1_files]


def discover_outputs(output_dir: Path) -> list[Path]:
    """Return every per-sample result file in the output directory."""
    return sorted(p for p in Path(output_dir).glob(f"*{OUTPUT_SUFFIX}") if p.is_file())


def sample_name_from_output(path: Path) -> str:
    return Path(path).name[: -len(OUTPUT_SUFFIX)]
