"""
Perfect maze generation on hex-offset grids.

Examples
--------
>>> from hexmaze.geometry.mazes import HexMazeGenerator, verify_perfect_maze
>>> from hexmaze.config import MazeConfig
>>> maze = HexMazeGenerator(MazeConfig(columns=20, rows=20, seed=42)).generate()
>>> verify_perfect_maze(maze)["is_perfect"]
True
"""

from .disjoint_set import DisjointSet
from .maze_generator import HexMaze, HexMazeGenerator, generate_maze, verify_perfect_maze
from .tree_analysis import DiameterAnalysis, MazeTree, analyze_tree, build_maze_tree, weighted_path_length
from .wall_catalogue import (
    WallCatalogue,
    bucket_shuffle_order,
    build_wall_catalogue,
    shuffled_order,
    uniform_shuffle_order,
)

__all__ = [
    # Core generation
    "HexMaze",
    "HexMazeGenerator",
    "generate_maze",
    "verify_perfect_maze",
    # Building blocks
    "DisjointSet",
    "WallCatalogue",
    "build_wall_catalogue",
    "bucket_shuffle_order",
    "uniform_shuffle_order",
    "shuffled_order",
    # Tree analysis
    "DiameterAnalysis",
    "MazeTree",
    "analyze_tree",
    "build_maze_tree",
    "weighted_path_length",
]
