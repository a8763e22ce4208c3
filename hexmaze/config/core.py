"""
Maze configuration.

A single `MazeConfig` value carries everything a run depends on: the grid
dimensions, the random seed, the wall ordering strategy and the drawing area
used to derive the canvas scale. Every component receives it explicitly.
"""

from __future__ import annotations

import os
import time
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from hexmaze.utils.exceptions import MAX_DIMENSION, MIN_DIMENSION

# Seeds are kept to 31 bits so any seed echoed in the output can be fed back in.
SEED_MASK = 0x7FFFFFFF

# Width and height of one hex cell relative to the unit used by the drawing code
CELL_WIDTH_FACTOR = 1.36602540378444
CELL_HEIGHT_FACTOR = 1.73205080756888


def derive_seed() -> int:
    """Derive a seed from the wall clock and process id."""
    return (time.time_ns() ^ (os.getpid() << 16)) & SEED_MASK


class MazeConfig(BaseModel):
    """
    Configuration for one maze generation run.

    Attributes
    ----------
    columns : int
        Number of hex columns, 2..1000
    rows : int
        Number of cells per column, 2..1000
    seed : int | None
        Random seed; None means derive one from the clock (see `resolved`)
    shuffle : Literal["bucket", "uniform"]
        Wall ordering strategy (default: bucket redistribution)
    bucket_count : int
        Buckets per redistribution pass, a power of two (default: 1024)
    bucket_passes : int
        Number of redistribution passes (default: 3)
    page_width, page_height : float
        Drawing area in PostScript points used to derive the canvas scale
    """

    model_config = ConfigDict(frozen=True)

    columns: int = Field(ge=MIN_DIMENSION, le=MAX_DIMENSION)
    rows: int = Field(ge=MIN_DIMENSION, le=MAX_DIMENSION)
    seed: int | None = None
    shuffle: Literal["bucket", "uniform"] = "bucket"
    bucket_count: int = Field(default=1024, ge=2)
    bucket_passes: int = Field(default=3, ge=1)
    page_width: float = Field(default=500.0, gt=0)
    page_height: float = Field(default=700.0, gt=0)

    @field_validator("seed")
    @classmethod
    def normalize_seed(cls, value: int | None) -> int | None:
        """Reduce supplied seeds to 31 bits."""
        if value is None:
            return None
        return value & SEED_MASK

    @model_validator(mode="after")
    def validate_bucket_count(self) -> MazeConfig:
        """Bucket keys are drawn with a bit mask, so the count must be a power of two."""
        if self.bucket_count & (self.bucket_count - 1):
            raise ValueError(f"bucket_count must be a power of two, got {self.bucket_count}")
        return self

    @property
    def num_cells(self) -> int:
        return self.columns * self.rows

    @property
    def canvas_scale(self) -> float:
        """Scale that fits the whole grid into the drawing area."""
        xs = self.page_width / ((self.columns + 1) * CELL_WIDTH_FACTOR)
        ys = self.page_height / ((self.rows + 1) * CELL_HEIGHT_FACTOR)
        return min(xs, ys)

    def resolved(self) -> MazeConfig:
        """Return a copy with a concrete seed, deriving one from the clock if needed."""
        if self.seed is not None:
            return self
        return self.model_copy(update={"seed": derive_seed()})


def create_default_config(columns: int, rows: int, seed: int | None = None, **kwargs) -> MazeConfig:
    """Create a configuration with default strategy and page settings."""
    return MazeConfig(columns=columns, rows=rows, seed=seed, **kwargs)
