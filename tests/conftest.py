"""Shared fixtures for card-align tests."""
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from card_align.config import RunConfig


def hit_row(query: str, identity: float, length: int, subject: str = "ARO:3000001") -> str:
    """A 12-column tabular hit line."""
    return "\t".join([
        query, subject, f"{identity}", str(length), "0", "0",
        "1", str(length * 3), "1", str(length), "1e-30", "200",
    ]) + "\n"


class StubAligner:
    """Writes canned rows per query file name and returns a fixed status."""

    def __init__(self, rows: dict[str, list[str]] | None = None, status: dict[str, int] | None = None):
        self.rows = rows or {}
        self.status = status or {}
        self.calls: list[tuple[Path, Path]] = []

    def run_alignment(self, query, output, params):
        self.calls.append((query, output))
        status = self.status.get(query.name, 0)
        if status == 0:
            output.write_text("".join(self.rows.get(query.name, [])))
        return status


@pytest.fixture
def run_config(tmp_path):
    input_dir = tmp_path / "input"
    input_dir.mkdir()
    db = tmp_path / "db" / "card"
    db.parent.mkdir()
    (db.parent / "card.dmnd").touch()
    return RunConfig(
        input_dir=input_dir,
        database=db,
        output_dir=tmp_path / "out",
        threads=2,
        min_identity=80.0,
        min_length=50,
    )


@pytest.fixture
def make_pair(run_config):
    """Create mate files for a sample name in the input dir."""

    def _make(name: str, mate2: bool = True) -> Path:
        mate1 = run_config.input_dir / f"{name}_genome_Unmapped.out.mate1"
        mate1.write_text(">r1\nACGT\n")
        if mate2:
            (run_config.input_dir / f"{name}_genome_Unmapped.out.mate2").write_text(">r1\nTGCA\n")
        return mate1

    return _make


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger = logging.getLogger("card_align")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
