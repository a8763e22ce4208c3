"""
Geometry for hexmaze: the hex-offset grid and the mazes carved from it.
"""

from .hex_grid import DIRECTION_ORDER, Direction, HexGrid

__all__ = ["DIRECTION_ORDER", "Direction", "HexGrid"]
