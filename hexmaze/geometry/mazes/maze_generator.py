"""
Perfect Hex Maze Generation

Carves a random perfect maze (fully connected, no loops) out of a hex-offset
grid and picks its entrance and exit.

Algorithm (randomized Kruskal):
1. Catalogue every wall between adjacent cells
2. Put the walls in random order
3. For each wall, knock it down unless the cells on both sides are already
   connected; a disjoint-set forest answers that question
4. Root the resulting spanning tree at cell 0 and take the two ends of its
   branch-weighted diameter as start and end

Mathematical Foundation:
With every edge of equal weight a random processing order is a random
priority, so the opened walls form a random spanning tree of the grid graph:
|V| cells joined by |V|-1 passages with exactly one path between any two cells.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np

from hexmaze.config import MazeConfig
from hexmaze.geometry.hex_grid import DIRECTION_ORDER, Direction, HexGrid
from hexmaze.geometry.mazes.disjoint_set import DisjointSet
from hexmaze.geometry.mazes.tree_analysis import MazeTree, analyze_tree, build_maze_tree
from hexmaze.geometry.mazes.wall_catalogue import WallCatalogue, build_wall_catalogue, shuffled_order
from hexmaze.utils.exceptions import MazeStructureError, ResourceExhaustedError
from hexmaze.utils.maze_logging import LoggedOperation, get_logger

if TYPE_CHECKING:
    from numpy.typing import NDArray

logger = get_logger(__name__)


@dataclass
class HexMaze:
    """
    A finished maze.

    Attributes:
        config: Configuration the maze was generated from, with its effective seed
        grid: Cell indexing and adjacency
        catalogue: Every wall of the grid
        exits: Exits bitmask per cell
        opened: Per catalogue entry, whether the wall was knocked down
        tree: Spanning tree rooted at cell 0
        start: Start cell index
        end: End cell index
        path_length: Weighted length of the path between start and end
    """

    config: MazeConfig
    grid: HexGrid
    catalogue: WallCatalogue
    exits: NDArray[np.uint8]
    opened: NDArray[np.bool_]
    tree: MazeTree
    start: int
    end: int
    path_length: int
    timings: dict[str, float] = field(default_factory=dict)

    @property
    def seed(self) -> int:
        return self.config.seed

    def is_open(self, index: int, direction: Direction) -> bool:
        """Whether the passage from `index` in `direction` is open."""
        return bool(int(self.exits[index]) & int(direction))

    def passages(self) -> NDArray[np.int64]:
        """Opened walls as an array of shape (num_passages, 2)."""
        return self.catalogue.pairs()[self.opened]

    def closed_walls(self) -> NDArray[np.int64]:
        """Walls left standing as an array of shape (num_walls, 2)."""
        return self.catalogue.pairs()[~self.opened]

    def open_neighbors(self, index: int) -> list[int]:
        """Cells reachable from `index` in one step, in DIRECTION_ORDER."""
        return [other for direction, other in self.grid.neighbors(index) if int(self.exits[index]) & int(direction)]

    def start_coordinates(self) -> tuple[int, int]:
        return self.grid.coordinates(self.start)

    def end_coordinates(self) -> tuple[int, int]:
        return self.grid.coordinates(self.end)


class HexMazeGenerator:
    """
    Perfect maze generator for hex-offset grids.

    All state for a run (grid, forest, exits, wall catalogue and random
    generator) is owned by the generator and derived from one `MazeConfig`.
    The same configuration and seed always produce the same maze.

    Args:
        config: Run configuration; a missing seed is derived from the clock
    """

    def __init__(self, config: MazeConfig):
        self.config = config.resolved()
        self.grid = HexGrid(self.config.columns, self.config.rows)
        self.rng = np.random.default_rng(self.config.seed)

        n = self.grid.num_cells
        self.components = DisjointSet(n)
        try:
            self.exits = np.zeros(n, dtype=np.uint8)
        except MemoryError as e:
            raise ResourceExhaustedError("cell exits", n, component="HexMazeGenerator") from e
        self.catalogue = build_wall_catalogue(self.grid)
        self.opened = np.zeros(len(self.catalogue), dtype=bool)
        self._generated = False

    def generate(self) -> HexMaze:
        """
        Shuffle, carve and analyze.

        Returns:
            The finished maze

        Raises:
            RuntimeError: If called twice on the same generator
        """
        if self._generated:
            raise RuntimeError("HexMazeGenerator.generate() may only be called once; create a new generator")
        self._generated = True

        timings = {}
        with LoggedOperation(logger, "shuffling walls") as op:
            order = shuffled_order(self.catalogue, self.config, self.rng)
        timings["shuffle"] = op.duration

        with LoggedOperation(logger, "carving maze") as op:
            opened_count = self._carve(order)
        timings["carve"] = op.duration

        with LoggedOperation(logger, "building tree") as op:
            tree = build_maze_tree(self.grid, self.exits)
        timings["tree"] = op.duration

        with LoggedOperation(logger, "analysing tree") as op:
            analysis = analyze_tree(tree)
        timings["analyse"] = op.duration

        start, end = analysis.endpoints
        logger.info(f"Opened {opened_count} of {len(self.catalogue)} walls")

        return HexMaze(
            config=self.config,
            grid=self.grid,
            catalogue=self.catalogue,
            exits=self.exits,
            opened=self.opened,
            tree=tree,
            start=start,
            end=end,
            path_length=analysis.path_length,
            timings=timings,
        )

    def _carve(self, order: NDArray[np.int64]) -> int:
        """
        Knock down every wall in `order` that does not close a cycle.

        Returns:
            Number of walls opened
        """
        find = self.components.find
        union = self.components.union
        lower = self.catalogue.lower.tolist()
        higher = self.catalogue.higher.tolist()
        direction = self.catalogue.direction.tolist()
        opposite = {int(d): int(d.opposite) for d in DIRECTION_ORDER}
        exits = self.exits
        opened = self.opened

        opened_count = 0
        for position in order.tolist():
            a, b = lower[position], higher[position]
            root_a, root_b = find(a), find(b)
            if root_a == root_b:
                continue  # already connected: keep the wall
            union(root_a, root_b)
            bit = direction[position]
            exits[a] |= bit
            exits[b] |= opposite[bit]
            opened[position] = True
            opened_count += 1
        return opened_count


def verify_perfect_maze(maze: HexMaze) -> dict[str, Any]:
    """
    Verify that a maze is perfect (fully connected, no loops).

    A perfect maze must satisfy:
    1. Connectivity: All cells reachable from cell 0 through open passages
    2. Acyclicity: Exactly (n-1) passages for n connected cells
    3. Symmetry: Every open exit is matched by the opposite exit next door

    Args:
        maze: Maze to verify

    Returns:
        Dictionary with verification results including:
        - is_perfect: Overall validity
        - is_connected: Connectivity check
        - is_no_loops: Acyclicity check
        - is_symmetric: Exit symmetry check
        - visited_cells: Number of reachable cells
        - total_cells: Total number of cells
        - passage_count: Number of passages
        - expected_passages: Expected passages for perfect maze
    """
    grid = maze.grid
    exits = maze.exits
    total_cells = grid.num_cells

    is_symmetric = True
    passage_bits = 0
    for index in range(total_cells):
        for direction in DIRECTION_ORDER:
            if not int(exits[index]) & int(direction):
                continue
            passage_bits += 1
            other = grid.neighbor(index, direction)
            if other is None or not int(exits[other]) & int(direction.opposite):
                is_symmetric = False

    visited = np.zeros(total_cells, dtype=bool)
    visited[0] = True
    visited_count = 1
    queue = deque([0])
    while queue:
        current = queue.popleft()
        for neighbor in maze.open_neighbors(current):
            if not visited[neighbor]:
                visited[neighbor] = True
                visited_count += 1
                queue.append(neighbor)

    is_connected = visited_count == total_cells
    passage_count = passage_bits // 2
    expected_passages = total_cells - 1
    is_no_loops = passage_count == expected_passages and int(maze.opened.sum()) == passage_count

    return {
        "is_perfect": is_connected and is_no_loops and is_symmetric,
        "is_connected": is_connected,
        "is_no_loops": is_no_loops,
        "is_symmetric": is_symmetric,
        "visited_cells": visited_count,
        "total_cells": total_cells,
        "passage_count": passage_count,
        "expected_passages": expected_passages,
    }


def generate_maze(
    columns: int,
    rows: int,
    seed: int | None = None,
    shuffle: str = "bucket",
) -> HexMaze:
    """
    High-level function to generate a verified perfect hex maze.

    Args:
        columns: Number of columns
        rows: Number of cells per column
        seed: Random seed for reproducibility (derived from the clock if None)
        shuffle: Wall ordering strategy ('bucket' or 'uniform')

    Returns:
        The finished maze

    Example:
        >>> maze = generate_maze(20, 30, seed=42)
        >>> maze.grid.num_cells, len(maze.passages())
        (600, 599)
    """
    config = MazeConfig(columns=columns, rows=rows, seed=seed, shuffle=shuffle)
    maze = HexMazeGenerator(config).generate()

    verification = verify_perfect_maze(maze)
    if not verification["is_perfect"]:
        raise MazeStructureError(verification, component="generate_maze")

    return maze
