"""
Hex-offset grid used by the maze generator.

The grid has `columns` columns of `rows` cells each. Cell (column, row) has
linear index ``column * rows + row``, so indices run up each column first.
Odd columns sit half a cell higher than even columns, which gives every cell
up to six neighbours:

- the cells directly above and below in the same column,
- the cells at the same row in the adjacent columns,
- one diagonal cell in each adjacent column: one row lower for even columns,
  one row higher for odd columns.

Passages are recorded per cell in an exits bitmask built from `Direction`
flags. Eight flags exist because the diagonal neighbours differ by column
parity; only six of them ever apply to a given cell.
"""

from __future__ import annotations

import math
from enum import IntFlag
from typing import TYPE_CHECKING

import numpy as np

from hexmaze.utils.exceptions import validate_dimensions

if TYPE_CHECKING:
    from collections.abc import Iterator

    from numpy.typing import NDArray


class Direction(IntFlag):
    """Neighbour directions, one bit each in a cell's exits bitmask."""

    UP = 1  # (k, l) -> (k, l+1)
    DOWN = 2  # (k, l) -> (k, l-1)
    LEFT_DOWN = 4  # (k, l) -> (k-1, l-1), even k
    RIGHT_DOWN = 8  # (k, l) -> (k+1, l-1), even k
    LEFT_LEVEL = 16  # (k, l) -> (k-1, l)
    RIGHT_LEVEL = 32  # (k, l) -> (k+1, l)
    LEFT_UP = 64  # (k, l) -> (k-1, l+1), odd k
    RIGHT_UP = 128  # (k, l) -> (k+1, l+1), odd k

    @property
    def opposite(self) -> Direction:
        return _OPPOSITE[self]


_OPPOSITE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT_DOWN: Direction.RIGHT_UP,
    Direction.RIGHT_UP: Direction.LEFT_DOWN,
    Direction.RIGHT_DOWN: Direction.LEFT_UP,
    Direction.LEFT_UP: Direction.RIGHT_DOWN,
    Direction.LEFT_LEVEL: Direction.RIGHT_LEVEL,
    Direction.RIGHT_LEVEL: Direction.LEFT_LEVEL,
}

# Order in which direction bits are tested everywhere (tree children included).
DIRECTION_ORDER: tuple[Direction, ...] = (
    Direction.LEFT_DOWN,
    Direction.LEFT_LEVEL,
    Direction.LEFT_UP,
    Direction.DOWN,
    Direction.UP,
    Direction.RIGHT_DOWN,
    Direction.RIGHT_LEVEL,
    Direction.RIGHT_UP,
)

# (column delta, row delta) of each direction
_STEPS = {
    Direction.UP: (0, 1),
    Direction.DOWN: (0, -1),
    Direction.LEFT_DOWN: (-1, -1),
    Direction.RIGHT_DOWN: (1, -1),
    Direction.LEFT_LEVEL: (-1, 0),
    Direction.RIGHT_LEVEL: (1, 0),
    Direction.LEFT_UP: (-1, 1),
    Direction.RIGHT_UP: (1, 1),
}

_EVEN_ONLY = Direction.LEFT_DOWN | Direction.RIGHT_DOWN
_ODD_ONLY = Direction.LEFT_UP | Direction.RIGHT_UP

# Hex edges of a cell and the direction crossing each one, by column parity.
# Edge names follow a flat-topped hexagon: N, NE, SE, S, SW, NW.
EDGE_DIRECTIONS: dict[int, dict[str, Direction]] = {
    0: {
        "N": Direction.UP,
        "NE": Direction.RIGHT_LEVEL,
        "SE": Direction.RIGHT_DOWN,
        "S": Direction.DOWN,
        "SW": Direction.LEFT_DOWN,
        "NW": Direction.LEFT_LEVEL,
    },
    1: {
        "N": Direction.UP,
        "NE": Direction.RIGHT_UP,
        "SE": Direction.RIGHT_LEVEL,
        "S": Direction.DOWN,
        "SW": Direction.LEFT_LEVEL,
        "NW": Direction.LEFT_UP,
    },
}

SQRT3 = math.sqrt(3.0)


class HexGrid:
    """
    Cell indexing and adjacency over an M x N hex-offset grid.

    Args:
        columns: Number of columns (2..1000)
        rows: Number of cells per column (2..1000)
    """

    def __init__(self, columns: int, rows: int):
        validate_dimensions(columns, rows, component="HexGrid")
        self.columns = columns
        self.rows = rows

    def __repr__(self) -> str:
        return f"HexGrid(columns={self.columns}, rows={self.rows})"

    def __eq__(self, other):
        return isinstance(other, HexGrid) and (self.columns, self.rows) == (other.columns, other.rows)

    def __hash__(self):
        return hash((self.columns, self.rows))

    @property
    def num_cells(self) -> int:
        return self.columns * self.rows

    @property
    def num_walls(self) -> int:
        """Number of adjacent cell pairs: (M-1)(2N-1) across columns plus M(N-1) within them."""
        m, n = self.columns, self.rows
        return 3 * m * n - 2 * m - 2 * n + 1

    def index(self, column: int, row: int) -> int:
        return column * self.rows + row

    def coordinates(self, index: int) -> tuple[int, int]:
        """Return (column, row) of a cell index."""
        return divmod(index, self.rows)

    def contains(self, column: int, row: int) -> bool:
        return 0 <= column < self.columns and 0 <= row < self.rows

    def offset(self, direction: Direction) -> int:
        """Index delta for a step in `direction`."""
        dc, dr = _STEPS[direction]
        return dc * self.rows + dr

    def applies(self, column: int, direction: Direction) -> bool:
        """Whether `direction` is a neighbour relation for cells in `column`."""
        if column & 1:
            return not direction & _EVEN_ONLY
        return not direction & _ODD_ONLY

    def neighbor(self, index: int, direction: Direction) -> int | None:
        """
        Neighbour of a cell in the given direction.

        Returns:
            Neighbour index, or None at the grid boundary or when the diagonal
            does not apply to the cell's column parity
        """
        column, row = self.coordinates(index)
        if not self.applies(column, direction):
            return None
        dc, dr = _STEPS[direction]
        if not self.contains(column + dc, row + dr):
            return None
        return index + self.offset(direction)

    def neighbors(self, index: int) -> Iterator[tuple[Direction, int]]:
        """Yield (direction, neighbour) pairs in DIRECTION_ORDER."""
        for direction in DIRECTION_ORDER:
            other = self.neighbor(index, direction)
            if other is not None:
                yield direction, other

    def forward_directions(self, index: int) -> list[Direction]:
        """
        Directions towards neighbours with a higher index.

        Each wall is owned by the lower of its two cells, so enumerating
        forward directions for every cell visits each wall exactly once.
        """
        column, row = self.coordinates(index)
        forward = []
        if row < self.rows - 1:
            forward.append(Direction.UP)
        if column < self.columns - 1:
            forward.append(Direction.RIGHT_LEVEL)
            if column & 1:
                if row < self.rows - 1:
                    forward.append(Direction.RIGHT_UP)
            elif row > 0:
                forward.append(Direction.RIGHT_DOWN)
        return forward

    def edge_directions(self, column: int) -> dict[str, Direction]:
        """Map of hex edge name to the direction crossing it for cells in `column`."""
        return EDGE_DIRECTIONS[column & 1]

    def cell_center(self, index: int) -> tuple[float, float]:
        """Drawing coordinates of a cell centre (hexagons of unit circumradius)."""
        column, row = self.coordinates(index)
        return 1.5 * column, SQRT3 * (row + 0.5 * (column & 1))

    def cell_centers(self) -> NDArray[np.float64]:
        """
        Drawing coordinates of all cell centres.

        Returns:
            Array of shape (num_cells, 2) in index order
        """
        columns, rows = np.divmod(np.arange(self.num_cells), self.rows)
        x = 1.5 * columns
        y = SQRT3 * (rows + 0.5 * (columns & 1))
        return np.column_stack([x, y]).astype(np.float64)
