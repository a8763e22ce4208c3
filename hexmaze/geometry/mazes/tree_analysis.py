"""
Tree view of a finished maze and its weighted diameter.

The open passages of a perfect maze form a spanning tree. Rooting it at cell 0
gives every cell a parent and an ordered list of children (neighbours through
open passages other than the parent, listed in DIRECTION_ORDER). These
relations live in side tables indexed by cell id.

The start and end of the maze are the two cells furthest apart under a metric
that favours branching: the edge from a node to any of its children costs
``1 + number of children of that node``. Paths through junctions therefore
count for more than paths along plain corridors, which makes the route between
the two endpoints harder to follow.

The diameter is computed bottom-up. For each node we keep

- ``distance``: weighted depth of the deepest leaf below it,
- ``furthest``: that leaf,
- ``length``: the longest weighted path inside its subtree,
- ``first`` / ``second``: the ends of that path.

Both passes walk an explicit pre-order list, so grids of a million cells need
no deep recursion.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from hexmaze.geometry.hex_grid import DIRECTION_ORDER
from hexmaze.utils.exceptions import MazeStructureError, ResourceExhaustedError
from hexmaze.utils.maze_logging import get_logger

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from hexmaze.geometry.hex_grid import HexGrid

logger = get_logger(__name__)


@dataclass(frozen=True)
class MazeTree:
    """
    Spanning tree of a maze rooted at `root`, stored as index side tables.

    Attributes:
        root: Root cell
        parent: Parent of each cell, -1 for the root and for unreached cells
        depth: Number of edges from the root, -1 for unreached cells
        num_children: Number of children of each cell
        child_offsets: Children of cell v are ``children[child_offsets[v]:child_offsets[v + 1]]``
        children: Concatenated child lists in DIRECTION_ORDER
        order: Reached cells in pre-order (every parent precedes its descendants)
    """

    root: int
    parent: NDArray[np.int64]
    depth: NDArray[np.int64]
    num_children: NDArray[np.int64]
    child_offsets: NDArray[np.int64]
    children: NDArray[np.int64]
    order: NDArray[np.int64]

    @property
    def size(self) -> int:
        """Number of cells reached from the root."""
        return len(self.order)

    def children_of(self, node: int) -> NDArray[np.int64]:
        return self.children[self.child_offsets[node] : self.child_offsets[node + 1]]

    def edge_weight(self, node: int) -> int:
        """Cost of the edge from `node` down to any of its children."""
        return 1 + int(self.num_children[node])

    def weighted_depths(self) -> NDArray[np.int64]:
        """Weighted distance from the root to every reached cell."""
        weighted = np.zeros(len(self.parent), dtype=np.int64)
        for node in self.order[1:]:
            up = self.parent[node]
            weighted[node] = weighted[up] + 1 + self.num_children[up]
        return weighted


@dataclass(frozen=True)
class DiameterAnalysis:
    """Per-node results of the weighted diameter computation."""

    root: int
    distance: NDArray[np.int64]
    furthest: NDArray[np.int64]
    length: NDArray[np.int64]
    first: NDArray[np.int64]
    second: NDArray[np.int64]

    @property
    def endpoints(self) -> tuple[int, int]:
        """Start and end cells of the maze."""
        return int(self.first[self.root]), int(self.second[self.root])

    @property
    def path_length(self) -> int:
        return int(self.length[self.root])


def build_maze_tree(grid: HexGrid, exits: NDArray[np.uint8], root: int = 0) -> MazeTree:
    """
    Root the open-passage graph at `root`.

    Args:
        grid: Grid the exits belong to
        exits: Exits bitmask per cell
        root: Cell to root the tree at

    Returns:
        Tree side tables covering every cell reachable from `root`

    Raises:
        MazeStructureError: If the open passages contain a cycle
    """
    n = grid.num_cells
    steps = [(int(direction), grid.offset(direction)) for direction in DIRECTION_ORDER]

    try:
        parent = np.full(n, -1, dtype=np.int64)
        depth = np.full(n, -1, dtype=np.int64)
        num_children = np.zeros(n, dtype=np.int64)
    except MemoryError as e:
        raise ResourceExhaustedError("maze tree", n, component="MazeTree") from e

    cell_exits = exits.tolist()
    child_lists: list[list[int]] = [[] for _ in range(n)]
    order: list[int] = []

    depth[root] = 0
    stack = [root]
    while stack:
        node = stack.pop()
        order.append(node)
        up = int(parent[node])
        kids = child_lists[node]
        for bit, offset in steps:
            if not cell_exits[node] & bit:
                continue
            other = node + offset
            if other == up:
                continue
            if depth[other] >= 0:
                raise MazeStructureError(
                    {"is_no_loops": False, "cycle_at": grid.coordinates(other)}, component="MazeTree"
                )
            parent[other] = node
            depth[other] = depth[node] + 1
            kids.append(other)
        num_children[node] = len(kids)
        # reversed so children are visited in DIRECTION_ORDER
        stack.extend(reversed(kids))

    child_offsets = np.zeros(n + 1, dtype=np.int64)
    np.cumsum(num_children, out=child_offsets[1:])
    children = np.fromiter((kid for kids in child_lists for kid in kids), dtype=np.int64, count=int(child_offsets[-1]))

    logger.debug(f"Built tree over {len(order)}/{n} cells rooted at {root}")
    return MazeTree(
        root=root,
        parent=parent,
        depth=depth,
        num_children=num_children,
        child_offsets=child_offsets,
        children=children,
        order=np.asarray(order, dtype=np.int64),
    )


def analyze_tree(tree: MazeTree) -> DiameterAnalysis:
    """
    Find the two cells furthest apart under the branch-weighted metric.

    Nodes are processed in reverse pre-order, so every child is finished before
    its parent. Children are examined in DIRECTION_ORDER and a later child
    replaces the current best on ties.

    Args:
        tree: Rooted maze tree

    Returns:
        Per-node distances, path lengths and endpoints
    """
    n = len(tree.parent)
    distance = [0] * n
    furthest = list(range(n))
    length = [0] * n
    first = list(range(n))
    second = list(range(n))

    offsets = tree.child_offsets.tolist()
    children = tree.children.tolist()

    for node in reversed(tree.order.tolist()):
        kids = children[offsets[node] : offsets[node + 1]]
        if not kids:
            continue  # leaf: zeros and itself everywhere

        d1 = d2 = l1 = -1
        dn1 = dn2 = ln1 = -1
        for kid in kids:
            if length[kid] >= l1:
                l1, ln1 = length[kid], kid
            if distance[kid] >= d1:
                d2, dn2 = d1, dn1
                d1, dn1 = distance[kid], kid
            elif distance[kid] >= d2:
                d2, dn2 = distance[kid], kid

        weight = 1 + len(kids)
        d1 += weight
        # with a single child the second end of a path through here is the node itself;
        # d2 stays 0 instead of taking the edge weight, so length is always a real path weight
        d2 = d2 + weight if dn2 >= 0 else 0

        distance[node] = d1
        furthest[node] = furthest[dn1]
        if d1 + d2 > l1:
            length[node] = d1 + d2
            first[node] = furthest[dn1]
            second[node] = furthest[dn2] if dn2 >= 0 else node
        else:
            length[node] = l1
            first[node] = first[ln1]
            second[node] = second[ln1]

    analysis = DiameterAnalysis(
        root=tree.root,
        distance=np.asarray(distance, dtype=np.int64),
        furthest=np.asarray(furthest, dtype=np.int64),
        length=np.asarray(length, dtype=np.int64),
        first=np.asarray(first, dtype=np.int64),
        second=np.asarray(second, dtype=np.int64),
    )
    logger.debug(f"Weighted diameter {analysis.path_length} between cells {analysis.endpoints}")
    return analysis


def weighted_path_length(tree: MazeTree, a: int, b: int, weighted: NDArray[np.int64] | None = None) -> int:
    """
    Weighted length of the tree path between two cells.

    Args:
        tree: Rooted maze tree
        a, b: Cells reached by the tree
        weighted: Precomputed ``tree.weighted_depths()``, for repeated queries

    Returns:
        Sum of edge weights along the unique path from `a` to `b`
    """
    if weighted is None:
        weighted = tree.weighted_depths()

    x, y = a, b
    while tree.depth[x] > tree.depth[y]:
        x = int(tree.parent[x])
    while tree.depth[y] > tree.depth[x]:
        y = int(tree.parent[y])
    while x != y:
        x, y = int(tree.parent[x]), int(tree.parent[y])

    return int(weighted[a] + weighted[b] - 2 * weighted[x])
