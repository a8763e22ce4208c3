"""
Command-line interface for hexmaze.

    make-maze <columns> <rows> [<seed>]

Writes a PostScript maze to stdout (or --output). Both dimensions must be in
the range 2..1000. Without a seed one is derived from the clock; the seed used
is printed on the page so the same maze can be made again.
"""

import sys
from pathlib import Path

import click

from hexmaze import __version__
from hexmaze.config import MazeConfig
from hexmaze.geometry.mazes import HexMazeGenerator
from hexmaze.utils.exceptions import MAX_DIMENSION, MIN_DIMENSION, MazeError
from hexmaze.utils.maze_logging import configure_logging, get_logger, log_maze_configuration, log_maze_summary
from hexmaze.visualization import render_postscript, save_maze_preview

DIMENSION = click.IntRange(MIN_DIMENSION, MAX_DIMENSION)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("columns", type=DIMENSION)
@click.argument("rows", type=DIMENSION)
@click.argument("seed", type=int, required=False)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the PostScript document to a file instead of stdout",
)
@click.option(
    "--preview",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also save a PNG preview of the maze",
)
@click.option(
    "--shuffle",
    type=click.Choice(["bucket", "uniform"]),
    default="bucket",
    show_default=True,
    help="Wall ordering strategy",
)
@click.option("--verbose", "-v", is_flag=True, help="Report progress and timings on stderr")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (overrides --verbose)",
)
@click.version_option(version=__version__, prog_name="make-maze")
def main(columns, rows, seed, output, preview, shuffle, verbose, log_level):
    """
    Make a random hexagonal maze.

    COLUMNS and ROWS give the grid size (2..1000 each). SEED makes the maze
    reproducible; the seed actually used is always printed on the page.

    Examples:
        make-maze 30 40 > maze.ps
        make-maze 30 40 12345 -o maze.ps --preview maze.png
    """
    configure_logging(level=log_level or ("INFO" if verbose else "WARNING"))
    logger = get_logger("hexmaze.cli")

    config = MazeConfig(columns=columns, rows=rows, seed=seed, shuffle=shuffle).resolved()
    log_maze_configuration(logger, config, {"seed_source": "argument" if seed is not None else "clock"})

    try:
        maze = HexMazeGenerator(config).generate()
        document = render_postscript(maze)
    except MazeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except MemoryError:
        click.echo(f"Error: ran out of memory making a {columns}x{rows} maze", err=True)
        sys.exit(1)

    log_maze_summary(logger, maze)

    # files first: stdout gets the document only once nothing else can fail
    try:
        if preview:
            save_maze_preview(maze, preview)
            logger.info(f"Saved preview to: {preview}")
        if output:
            output.write_text(document)
            logger.info(f"Saved maze to: {output}")
    except OSError as e:
        click.echo(f"Error: could not write {e.filename or 'output'}: {e.strerror or e}", err=True)
        sys.exit(1)

    if not output:
        click.echo(document, nl=False)


if __name__ == "__main__":
    main()
