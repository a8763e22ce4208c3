"""
Unit tests for the maze tree and its branch-weighted diameter.

Hand-built trees on a 2x2 grid pin down exact endpoints; generated mazes are
checked against a brute-force search over all cell pairs.
"""

import itertools

import pytest

import numpy as np

from hexmaze.config import MazeConfig
from hexmaze.geometry import Direction, HexGrid
from hexmaze.geometry.mazes import (
    HexMazeGenerator,
    analyze_tree,
    build_maze_tree,
    weighted_path_length,
)
from hexmaze.utils.exceptions import MazeStructureError


def exits_from_passages(grid, passages):
    """Exits bitmask for a list of (cell, direction) passages."""
    exits = np.zeros(grid.num_cells, dtype=np.uint8)
    for cell, direction in passages:
        other = grid.neighbor(cell, direction)
        exits[cell] |= int(direction)
        exits[other] |= int(direction.opposite)
    return exits


@pytest.fixture
def grid():
    # cells: 0=(0,0) 1=(0,1) 2=(1,0) 3=(1,1)
    return HexGrid(2, 2)


class TestBuildTree:
    def test_chain(self, grid):
        exits = exits_from_passages(grid, [(0, Direction.UP), (1, Direction.RIGHT_LEVEL), (3, Direction.DOWN)])
        tree = build_maze_tree(grid, exits)

        assert tree.size == 4
        assert tree.parent.tolist() == [-1, 0, 3, 1]
        assert tree.depth.tolist() == [0, 1, 3, 2]
        assert tree.order.tolist() == [0, 1, 3, 2]
        assert tree.children_of(1).tolist() == [3]
        assert tree.children_of(2).tolist() == []

    def test_children_in_direction_order(self, grid):
        # cell 1 joined to 0 (down), 2 (right-down) and 3 (right-level)
        exits = exits_from_passages(grid, [(1, Direction.DOWN), (1, Direction.RIGHT_DOWN), (1, Direction.RIGHT_LEVEL)])
        tree = build_maze_tree(grid, exits)

        assert tree.children_of(0).tolist() == [1]
        assert tree.children_of(1).tolist() == [2, 3]
        assert tree.num_children.tolist() == [1, 2, 0, 0]
        assert tree.edge_weight(1) == 3

    def test_other_root(self, grid):
        exits = exits_from_passages(grid, [(0, Direction.UP), (1, Direction.RIGHT_LEVEL), (3, Direction.DOWN)])
        tree = build_maze_tree(grid, exits, root=2)
        assert tree.parent.tolist() == [1, 3, -1, 2]

    def test_cycle_raises(self, grid):
        exits = exits_from_passages(
            grid,
            [
                (0, Direction.UP),
                (0, Direction.RIGHT_LEVEL),
                (1, Direction.RIGHT_DOWN),
                (1, Direction.RIGHT_LEVEL),
                (2, Direction.UP),
            ],
        )
        with pytest.raises(MazeStructureError):
            build_maze_tree(grid, exits)

    def test_unreached_cells_left_out(self, grid):
        exits = exits_from_passages(grid, [(0, Direction.UP)])
        tree = build_maze_tree(grid, exits)
        assert tree.size == 2
        assert tree.depth.tolist() == [0, 1, -1, -1]

    def test_parents_precede_children(self, small_maze):
        tree = small_maze.tree
        position = {int(node): i for i, node in enumerate(tree.order)}
        for node in tree.order[1:]:
            assert position[int(tree.parent[node])] < position[int(node)]
        assert int(tree.num_children.sum()) == tree.size - 1


class TestDiameter:
    def test_chain_endpoints(self, grid):
        exits = exits_from_passages(grid, [(0, Direction.UP), (1, Direction.RIGHT_LEVEL), (3, Direction.DOWN)])
        analysis = analyze_tree(build_maze_tree(grid, exits))

        # every node has one child, so every edge weighs 2
        assert analysis.endpoints == (2, 0)
        assert analysis.path_length == 6
        assert analysis.distance.tolist() == [6, 4, 0, 2]

    def test_junction_weighs_more(self, grid):
        exits = exits_from_passages(grid, [(1, Direction.DOWN), (1, Direction.RIGHT_DOWN), (1, Direction.RIGHT_LEVEL)])
        tree = build_maze_tree(grid, exits)
        analysis = analyze_tree(tree)

        # 2 -> 1 -> 3 crosses two edges of weight 3; 0 -> 1 -> 3 only 2 + 3
        assert analysis.endpoints == (3, 2)
        assert analysis.path_length == 6
        assert weighted_path_length(tree, 0, 3) == 5

    def test_leaf_values(self, grid):
        exits = exits_from_passages(grid, [(0, Direction.UP), (1, Direction.RIGHT_LEVEL), (3, Direction.DOWN)])
        analysis = analyze_tree(build_maze_tree(grid, exits))
        assert analysis.distance[2] == 0
        assert analysis.length[2] == 0
        assert analysis.furthest[2] == 2
        assert (analysis.first[2], analysis.second[2]) == (2, 2)

    @pytest.mark.parametrize(("columns", "rows", "seed"), [(2, 2, 1), (3, 3, 5), (5, 4, 42), (6, 6, 7), (8, 3, 99)])
    def test_diameter_is_maximal(self, columns, rows, seed):
        maze = HexMazeGenerator(MazeConfig(columns=columns, rows=rows, seed=seed)).generate()
        tree = maze.tree
        weighted = tree.weighted_depths()

        best = max(
            weighted_path_length(tree, a, b, weighted) for a, b in itertools.combinations(range(tree.size), 2)
        )
        assert maze.path_length == best
        assert weighted_path_length(tree, maze.start, maze.end, weighted) == best

    def test_endpoints_are_distinct(self, small_maze):
        assert small_maze.start != small_maze.end

    def test_subtree_lengths_bound_children(self, small_maze):
        analysis = analyze_tree(small_maze.tree)
        tree = small_maze.tree
        for node in tree.order:
            for kid in tree.children_of(int(node)):
                assert analysis.length[node] >= analysis.length[kid]
                assert analysis.distance[node] >= analysis.distance[kid] + tree.edge_weight(int(node))


class TestWeightedPathLength:
    def test_zero_for_same_cell(self, small_maze):
        assert weighted_path_length(small_maze.tree, 3, 3) == 0

    def test_symmetric(self, small_maze):
        tree = small_maze.tree
        assert weighted_path_length(tree, 2, 17) == weighted_path_length(tree, 17, 2)

    def test_root_distance_matches_weighted_depth(self, small_maze):
        tree = small_maze.tree
        weighted = tree.weighted_depths()
        for node in range(tree.size):
            assert weighted_path_length(tree, 0, node, weighted) == weighted[node]
