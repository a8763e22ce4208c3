from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("hexmaze")  # Matches the name in pyproject.toml
except PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0-dev"

from .config import MazeConfig, create_default_config  # noqa: E402
from .geometry import DIRECTION_ORDER, Direction, HexGrid  # noqa: E402
from .geometry.mazes import (  # noqa: E402
    DisjointSet,
    HexMaze,
    HexMazeGenerator,
    generate_maze,
    verify_perfect_maze,
)
from .utils.exceptions import (  # noqa: E402
    ConfigurationError,
    MazeError,
    MazeStructureError,
    ResourceExhaustedError,
)
from .visualization import render_postscript  # noqa: E402

__all__ = [
    "__version__",
    "ConfigurationError",
    "DIRECTION_ORDER",
    "Direction",
    "DisjointSet",
    "HexGrid",
    "HexMaze",
    "HexMazeGenerator",
    "MazeConfig",
    "MazeError",
    "MazeStructureError",
    "ResourceExhaustedError",
    "create_default_config",
    "generate_maze",
    "render_postscript",
    "verify_perfect_maze",
]
