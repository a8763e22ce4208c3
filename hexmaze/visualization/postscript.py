"""
PostScript rendering of hex mazes.

The page defines a handful of procedures and then draws the maze with very
little text per cell:

- ``row column M`` moves to the centre of a cell,
- ``N``, ``NW`` and ``NE`` draw the north, north-west and north-east walls of
  the current cell,
- ``A`` moves one cell up the column,
- ``B`` .. ``H`` combine wall drawing with ``A``.

Each cell is encoded by one letter ``chr(65 + code)`` where the code has bit 1
for a closed north wall, bit 2 for a closed north-west wall and bit 4 for a
closed north-east wall. Every interior wall is the north, north-west or
north-east wall of exactly one cell, so the letters alone determine the maze.
Outer walls on the south and east sides are drawn separately.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import numpy as np

from hexmaze.geometry.hex_grid import Direction

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from hexmaze.geometry.mazes.maze_generator import HexMaze

LINE_WIDTH = 70

NORTH_CLOSED = 1
NORTHWEST_CLOSED = 2
NORTHEAST_CLOSED = 4

PROLOGUE = """\
/M { dup 1 and 0 ne { exch .5 add exch } if
     1.5 mul exch
     1.73205080756888 mul
     newpath moveto } bind def
/N { gsave -.6 0.866025403784439 rmoveto
     .15 .0866025403784439 rlineto
     .9 0 rlineto
     .15 -.0866025403784439 rlineto
     -.15 -.0866025403784439 rlineto
     -.9 0 rlineto
     closepath fill grestore } bind def
/NW{ gsave -.45 .952627944162883 rmoveto
     0 -.173205080756888 rlineto
     -.45 -.779422863405995 rlineto
     -.15 -.0866025403784439 rlineto
     0 .173205080756888 rlineto
     .45 .779422863405995 rlineto
     closepath fill grestore } bind def
/NE{ gsave .45 .952627944162883 rmoveto
     0 -.173205080756888 rlineto
     .45 -.779422863405995 rlineto
     .15 -.0866025403784439 rlineto
     0 .173205080756888 rlineto
     -.45 .779422863405995 rlineto
     closepath fill grestore } bind def
/A { 0 1.73205080756888 rmoveto
     currentpoint newpath moveto } bind def
/B { N A } bind def
/C { NW A } bind def
/D { NW N A } bind def
/E { NE A } bind def
/F { N NE A } bind def
/G { NW NE A } bind def
/H { NW N NE A } bind def
"""


class _TokenWriter:
    """Collects drawing tokens into lines no longer than LINE_WIDTH."""

    def __init__(self, width: int = LINE_WIDTH):
        self.width = width
        self.lines: list[str] = []
        self._current: list[str] = []
        self._used = 0

    def add(self, token: str):
        extra = len(token) + (1 if self._current else 0)
        if self._current and self._used + extra > self.width:
            self.flush()
            extra = len(token)
        self._current.append(token)
        self._used += extra

    def flush(self):
        if self._current:
            self.lines.append(" ".join(self._current))
        self._current = []
        self._used = 0


def cell_wall_codes(maze: HexMaze) -> NDArray[np.uint8]:
    """
    Per-cell code of closed north, north-west and north-east walls.

    Returns:
        Array of codes 0..7 in cell index order
    """
    grid = maze.grid
    exits = maze.exits.astype(np.int64)
    odd = (np.arange(grid.num_cells) // grid.rows) & 1

    northwest = np.where(odd, int(Direction.LEFT_UP), int(Direction.LEFT_LEVEL))
    northeast = np.where(odd, int(Direction.RIGHT_UP), int(Direction.RIGHT_LEVEL))

    codes = (
        (exits & int(Direction.UP) == 0) * NORTH_CLOSED
        + (exits & northwest == 0) * NORTHWEST_CLOSED
        + (exits & northeast == 0) * NORTHEAST_CLOSED
    )
    return codes.astype(np.uint8)


def _outer_walls(columns: int, rows: int) -> _TokenWriter:
    out = _TokenWriter()
    out.add("-1 -1 M NE")
    for _ in range(1, rows):
        out.add("A NE")
    out.add("0 0 M NW")
    for _ in range(1, rows):
        out.add("A NW")
    out.add(f"0 {columns - 1} M NE")
    for _ in range(1, rows):
        out.add("A NE")
    out.add(f"{-(columns & 1)} {columns} M NW")
    for _ in range(1, rows):
        out.add("A NW")
    for column in range(columns):
        out.add(f"-1 {column} M N")
        out.add(f"{rows - 1} {column} M N")
        if column & 1:
            out.add(f"-1 {column} M NW")
            if column < columns - 1:
                out.add(f"-1 {column} M NE")
            out.add(f"{rows - 1} {column} M NW")
            out.add(f"{rows - 1} {column} M NE")
    out.flush()
    return out


def _inner_walls(maze: HexMaze) -> _TokenWriter:
    grid = maze.grid
    letters = (cell_wall_codes(maze) + ord("A")).tobytes().decode("ascii")
    out = _TokenWriter()
    for column in range(grid.columns):
        out.add(f"0 {column} M")
        for letter in letters[column * grid.rows : (column + 1) * grid.rows]:
            out.add(letter)
    out.flush()
    return out


def render_postscript(maze: HexMaze, creator: str = "make-maze") -> str:
    """
    Render a maze as a one-page PostScript document.

    The document names its grid dimensions and seed both as comments and as
    visible text on the page, so any printed maze can be regenerated.

    Args:
        maze: Maze to draw
        creator: Program name shown on the page

    Returns:
        The complete document
    """
    config = maze.config
    grid = maze.grid
    scale = config.canvas_scale
    start_column, start_row = maze.start_coordinates()
    end_column, end_row = maze.end_coordinates()

    lines = [
        "%!PS-Adobe-3.0",
        f"%%Title: Hex maze {grid.columns}x{grid.rows} seed={config.seed}",
        f"%%Creator: {creator}",
        "%%Pages: 1",
        "%%EndComments",
        f"% Columns: {grid.columns}",
        f"% Rows: {grid.rows}",
        f"% Seed: {config.seed}",
        f"% Shuffle: {config.shuffle}",
        f"% Scale: {scale:g}",
        f"% Start: {start_column} {start_row}",
        f"% End: {end_column} {end_row}",
        "/Times-Roman findfont 10 scalefont setfont",
        "30 770 moveto (Maze produced by ) show",
        "/Times-Italic findfont 10 scalefont setfont",
        f"({creator} ) show",
        "/Times-Roman findfont 10 scalefont setfont",
        f"30 755 moveto (Parameters: {grid.columns}x{grid.rows}, seed={config.seed}) show",
        "",
        "30 40 translate",
        f"{scale:g} {scale:g} scale",
        "1 1 translate",
        "",
        PROLOGUE.rstrip("\n"),
        "",
        "% Outer walls:",
        *_outer_walls(grid.columns, grid.rows).lines,
        "",
        "% Inner walls:",
        *_inner_walls(maze).lines,
        "",
        "% Start and end of path:",
        f"{start_row} {start_column} M currentpoint 0.3 0 360 arc fill",
        f"{end_row} {end_column} M currentpoint 0.3 0 360 arc fill",
        "",
        "showpage",
        "%%EOF",
    ]
    return "\n".join(lines) + "\n"


def write_postscript(maze: HexMaze, stream: TextIO, creator: str = "make-maze"):
    """Render a maze and write the document to an open text stream."""
    stream.write(render_postscript(maze, creator=creator))
