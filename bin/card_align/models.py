"""Data models for card-align."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

MATE1_SUFFIX = "_genome_Unmapped.out.mate1"
MATE2_SUFFIX = "_genome_Unmapped.out.mate2"
OUTPUT_SUFFIX = "_diamond_card.tsv"


@dataclass(frozen=True)
class Sample:
    """A paired-end sample identified by the base name of its mate-1 file."""

    name: str
    mate1: Path
    mate2: Path
    output: Path

    @classmethod
    def from_mate1(cls, mate1: Path, output_dir: Path) -> Sample:
        """Derive the sample from a mate-1 path by suffix substitution."""
        mate1 = Path(mate1)
        if not mate1.name.endswith(MATE1_SUFFIX):
            raise ValueError(f"{mate1.name} does not end with {MATE1_SUFFIX}")
        name = mate1.name[: -len(MATE1_SUFFIX)]
        return cls(
            name=name,
            mate1=mate1,
            mate2=mate1.with_name(name + MATE2_SUFFIX),
            output=Path(output_dir) / f"{name}{OUTPUT_SUFFIX}",
        )


@dataclass(frozen=True)
class HitStats:
    """Summary metrics over one tabular hit file."""

    total_hits: int
    high_confidence_hits: int
    avg_length: float
    avg_identity: float


@dataclass(frozen=True)
class SampleResult:
    """Outcome of a successfully processed sample."""

    sample: str
    output: Path
    stats: HitStats
    elapsed: float


@dataclass
class RunSummary:
    """Results and failures accumulated over one run."""

    results: list[SampleResult] = field(default_factory=list)
    failures: list[tuple[str, str]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results) + len(self.failures)

    @property
    def successful(self) -> int:
        return len(self.results)
