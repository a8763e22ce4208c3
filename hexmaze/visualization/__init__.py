"""
Output documents and previews for hex mazes.

- postscript: one-page PostScript document (the primary output)
- maze_plot: matplotlib preview images
"""

from .maze_plot import plot_hex_maze, save_maze_preview, wall_segments
from .postscript import cell_wall_codes, render_postscript, write_postscript

__all__ = [
    "cell_wall_codes",
    "plot_hex_maze",
    "render_postscript",
    "save_maze_preview",
    "wall_segments",
    "write_postscript",
]
