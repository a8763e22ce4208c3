"""
Wall catalogue and randomized wall ordering.

Every pair of adjacent cells is separated by one wall. The catalogue lists
each wall once as ``(lower, higher, direction)`` where ``lower < higher`` and
``direction`` is the step from the lower cell to the higher one.

Two orderings are available:

- bucket redistribution: several passes, each dropping every wall into one of
  a fixed number of random buckets and reading the buckets back in index
  order. Walls in a bucket come back out last-in first-out.
- uniform: a plain random permutation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from hexmaze.geometry.hex_grid import Direction
from hexmaze.utils.exceptions import ResourceExhaustedError
from hexmaze.utils.maze_logging import get_logger

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from hexmaze.config import MazeConfig
    from hexmaze.geometry.hex_grid import HexGrid

logger = get_logger(__name__)

# Range of the raw random draws that bucket keys are masked from
_RAW_KEY_RANGE = 1 << 31


@dataclass(frozen=True)
class WallCatalogue:
    """
    All removable walls of a grid in canonical (lower, higher) order.

    Attributes:
        lower: Lower cell index of each wall
        higher: Higher cell index of each wall
        direction: Direction bit from `lower` to `higher`
    """

    lower: NDArray[np.int64]
    higher: NDArray[np.int64]
    direction: NDArray[np.uint8]

    def __len__(self) -> int:
        return len(self.lower)

    def pairs(self) -> NDArray[np.int64]:
        """Walls as an array of shape (num_walls, 2)."""
        return np.column_stack([self.lower, self.higher])

    def wall(self, position: int) -> tuple[int, int, Direction]:
        return int(self.lower[position]), int(self.higher[position]), Direction(int(self.direction[position]))


def build_wall_catalogue(grid: HexGrid) -> WallCatalogue:
    """
    Enumerate every wall of the grid exactly once.

    Each cell contributes its forward walls: up its own column, across to the
    same row of the next column, and the one diagonal into the next column
    that its parity allows.

    Args:
        grid: Grid to enumerate

    Returns:
        Catalogue with ``grid.num_walls`` entries sorted by (lower, higher)
    """
    m, n = grid.columns, grid.rows
    try:
        cells = np.arange(grid.num_cells, dtype=np.int64).reshape(m, n)

        up = cells[:, :-1].ravel()
        level = cells[:-1, :].ravel()
        down_diagonal = cells[0 : m - 1 : 2, 1:].ravel()
        up_diagonal = cells[1 : m - 1 : 2, :-1].ravel()

        lower = np.concatenate([up, level, down_diagonal, up_diagonal])
        higher = np.concatenate([up + 1, level + n, down_diagonal + n - 1, up_diagonal + n + 1])
        direction = np.concatenate(
            [
                np.full(len(up), int(Direction.UP), dtype=np.uint8),
                np.full(len(level), int(Direction.RIGHT_LEVEL), dtype=np.uint8),
                np.full(len(down_diagonal), int(Direction.RIGHT_DOWN), dtype=np.uint8),
                np.full(len(up_diagonal), int(Direction.RIGHT_UP), dtype=np.uint8),
            ]
        )
    except MemoryError as e:
        raise ResourceExhaustedError("wall catalogue", grid.num_walls, component="WallCatalogue") from e

    order = np.lexsort((higher, lower))
    catalogue = WallCatalogue(lower=lower[order], higher=higher[order], direction=direction[order])
    logger.debug(f"Catalogued {len(catalogue)} walls for {grid}")
    return catalogue


def bucket_shuffle_order(
    count: int,
    rng: np.random.Generator,
    buckets: int = 1024,
    passes: int = 3,
) -> NDArray[np.int64]:
    """
    Scramble positions 0..count-1 by repeated random bucket redistribution.

    Equivalent to giving every item a random key of ``passes * log2(buckets)``
    bits and sorting on it, without storing the keys.

    Args:
        count: Number of items
        rng: Random generator
        buckets: Buckets per pass, a power of two
        passes: Number of passes

    Returns:
        Permutation of range(count)
    """
    order = np.arange(count, dtype=np.int64)
    for _ in range(passes):
        keys = rng.integers(0, _RAW_KEY_RANGE, size=count) & (buckets - 1)
        # items pushed onto a bucket come back out in reverse order
        reversed_order = order[::-1]
        reversed_keys = keys[::-1]
        order = reversed_order[np.argsort(reversed_keys, kind="stable")]
    return order


def uniform_shuffle_order(count: int, rng: np.random.Generator) -> NDArray[np.int64]:
    """Uniformly random permutation of range(count)."""
    return rng.permutation(count).astype(np.int64)


def shuffled_order(catalogue: WallCatalogue, config: MazeConfig, rng: np.random.Generator) -> NDArray[np.int64]:
    """
    Processing order of the catalogue for a run.

    Args:
        catalogue: Walls to order
        config: Supplies the shuffle strategy and bucket settings
        rng: Random generator seeded from the config

    Returns:
        Positions into the catalogue, each exactly once
    """
    if config.shuffle == "bucket":
        return bucket_shuffle_order(len(catalogue), rng, config.bucket_count, config.bucket_passes)
    elif config.shuffle == "uniform":
        return uniform_shuffle_order(len(catalogue), rng)
    else:
        raise ValueError(f"Unknown shuffle strategy: {config.shuffle}")
