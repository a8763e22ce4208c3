"""
Matplotlib preview of hex mazes.

Draws every standing wall as a line segment and marks the start and end
cells. Intended for quick visual checks; the PostScript document remains the
primary output.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
from matplotlib.collections import LineCollection
from matplotlib.figure import Figure

from hexmaze.geometry.hex_grid import SQRT3

if TYPE_CHECKING:
    from matplotlib.axes import Axes

    from hexmaze.geometry.mazes.maze_generator import HexMaze

VIS_WALL_COLOR = "black"
VIS_WALL_LW = 1.5
VIS_ENTRY_MARKER = "go"
VIS_EXIT_MARKER = "ro"
VIS_MARKER_SIZE = 6

_H = SQRT3 / 2
# Hex edges as vertex pairs relative to the cell centre (unit circumradius, flat top)
_EDGE_VERTICES = {
    "N": ((-0.5, _H), (0.5, _H)),
    "NE": ((0.5, _H), (1.0, 0.0)),
    "SE": ((1.0, 0.0), (0.5, -_H)),
    "S": ((0.5, -_H), (-0.5, -_H)),
    "SW": ((-0.5, -_H), (-1.0, 0.0)),
    "NW": ((-1.0, 0.0), (-0.5, _H)),
}


def wall_segments(maze: HexMaze) -> np.ndarray:
    """
    Line segments of all standing walls, interior and boundary.

    Interior walls are taken from the north, north-east and north-west edges
    only, so each one appears once.

    Returns:
        Array of shape (num_segments, 2, 2)
    """
    grid = maze.grid
    segments = []
    for index in range(grid.num_cells):
        column, _ = grid.coordinates(index)
        cx, cy = grid.cell_center(index)
        for edge, direction in grid.edge_directions(column).items():
            other = grid.neighbor(index, direction)
            if other is not None and (maze.is_open(index, direction) or edge in ("S", "SE", "SW")):
                continue
            (x0, y0), (x1, y1) = _EDGE_VERTICES[edge]
            segments.append(((cx + x0, cy + y0), (cx + x1, cy + y1)))
    return np.asarray(segments, dtype=np.float64).reshape(-1, 2, 2)


def plot_hex_maze(maze: HexMaze, ax: Axes | None = None, show_endpoints: bool = True) -> Axes:
    """
    Plot a maze.

    Args:
        maze: Maze to draw
        ax: Axes to draw into (a new figure is created if None)
        show_endpoints: Mark start (green) and end (red) cells

    Returns:
        The axes drawn into
    """
    if ax is None:
        import matplotlib.pyplot as plt

        _, ax = plt.subplots(figsize=(8, 8))

    ax.add_collection(LineCollection(wall_segments(maze), colors=VIS_WALL_COLOR, linewidths=VIS_WALL_LW))

    if show_endpoints:
        sx, sy = maze.grid.cell_center(maze.start)
        ex, ey = maze.grid.cell_center(maze.end)
        ax.plot(sx, sy, VIS_ENTRY_MARKER, markersize=VIS_MARKER_SIZE, label="Start")
        ax.plot(ex, ey, VIS_EXIT_MARKER, markersize=VIS_MARKER_SIZE, label="End")

    ax.set_aspect("equal")
    ax.autoscale_view()
    ax.axis("off")
    ax.set_title(f"Hex maze {maze.grid.columns}x{maze.grid.rows} (seed={maze.seed})")
    return ax


def save_maze_preview(maze: HexMaze, path: str | Path, dpi: int = 150) -> Path:
    """Render a maze preview image to `path` without touching the pyplot state."""
    path = Path(path)
    fig = Figure(figsize=(8, 8))
    ax = fig.subplots()
    plot_hex_maze(maze, ax=ax)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    return path
