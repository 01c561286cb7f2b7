"""Run configuration for card-align.

A config is an immutable pydantic model. Values come from the built-in
defaults, optionally a TOML file with keys under ``[run]``, and finally
command-line overrides.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from card_align.exceptions import ConfigError

DATABASE_EXTENSION = ".dmnd"


class RunConfig(BaseModel):
    """Parameters shared by every component of one run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    input_dir: Path = Path(".")
    database: Path = Path("card_db/card")
    output_dir: Path = Path("card_results")
    threads: int = Field(8, ge=1)
    min_identity: float = Field(80.0, ge=0, le=100)
    min_length: int = Field(50, ge=0, le=100)
    evalue: float = Field(1e-5, gt=0)
    aligner: str = "diamond"
    rescan_output_dir: bool = True

    @property
    def database_file(self) -> Path:
        """The on-disk index DIAMOND reads (``<database>.dmnd``)."""
        return self.database.with_name(self.database.name + DATABASE_EXTENSION)

    def with_overrides(self, **overrides) -> RunConfig:
        """Return a copy with every non-None override applied."""
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return RunConfig(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration override:\n{e}") from e


def load_config(path: Path) -> RunConfig:
    """Load and validate a TOML config file."""
    path = Path(path)
    try:
        data = tomllib.loads(path.read_text())
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Error parsing config file {path}: {e}") from e

    try:
        return RunConfig(**data.get("run", {}))
    except ValidationError as e:
        raise ConfigError(f"Error validating config file {path}:\n{e}") from e


def write_default_config(path: Path) -> Path:
    """Write the default config as TOML. Refuses to overwrite."""
    path = Path(path)
    if path.exists():
        raise ConfigError(f"Config file already exists: {path}")
    data = {"run": RunConfig().model_dump(mode="json")}
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(tomli_w.dumps(data).encode())
    return path
