"""
Disjoint-set forest tracking which cells are already connected.

Each entry is either negative, meaning "this cell is a root and its component
has ``-value`` cells", or a non-negative parent index. `find` compresses every
path it walks so that later lookups reach the root in one step (Tarjan).
"""

from __future__ import annotations

import numpy as np

from hexmaze.utils.exceptions import ResourceExhaustedError


class DisjointSet:
    """
    Union-find over cells 0..size-1 with path compression and union by size.

    Args:
        size: Number of elements; every element starts as its own component
    """

    def __init__(self, size: int):
        try:
            self.forest = np.full(size, -1, dtype=np.int64)
        except MemoryError as e:
            raise ResourceExhaustedError("disjoint-set forest", size, component="DisjointSet") from e
        self._components = size

    def __len__(self) -> int:
        return len(self.forest)

    @property
    def num_components(self) -> int:
        return self._components

    def is_root(self, x: int) -> bool:
        return self.forest[x] < 0

    def find(self, x: int) -> int:
        """Return the root of x's component, re-linking the walked path to it."""
        forest = self.forest
        root = x
        while forest[root] >= 0:
            root = int(forest[root])

        while forest[x] >= 0:
            parent = int(forest[x])
            forest[x] = root
            x = parent
        return root

    def union(self, root_x: int, root_y: int) -> int:
        """
        Merge two components given their roots.

        The smaller component goes under the larger one; on a tie `root_y`
        survives.

        Returns:
            The root of the merged component

        Raises:
            ValueError: If either argument is not a root or both are the same root
        """
        forest = self.forest
        size_x, size_y = int(forest[root_x]), int(forest[root_y])
        if size_x >= 0 or size_y >= 0:
            raise ValueError(f"union() needs two roots, got {root_x} and {root_y}")
        if root_x == root_y:
            raise ValueError(f"Cannot merge component {root_x} with itself")

        self._components -= 1
        # sizes are stored negated: the more negative entry is the larger component
        if size_x < size_y:
            forest[root_y] = root_x
            forest[root_x] = size_x + size_y
            return root_x
        forest[root_x] = root_y
        forest[root_y] = size_x + size_y
        return root_y

    def connected(self, x: int, y: int) -> bool:
        return self.find(x) == self.find(y)

    def component_size(self, x: int) -> int:
        return -int(self.forest[self.find(x)])
