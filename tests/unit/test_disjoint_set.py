"""
Unit tests for the disjoint-set forest.
"""

import pytest

import numpy as np

from hexmaze.geometry.mazes import DisjointSet


def test_starts_as_singletons():
    ds = DisjointSet(5)
    assert len(ds) == 5
    assert ds.num_components == 5
    for x in range(5):
        assert ds.is_root(x)
        assert ds.find(x) == x
        assert ds.component_size(x) == 1


def test_union_on_tie_keeps_second_root():
    ds = DisjointSet(4)
    assert ds.union(0, 1) == 1
    assert ds.find(0) == 1
    assert ds.forest[1] == -2


def test_union_larger_component_wins():
    ds = DisjointSet(5)
    big = ds.union(0, 1)  # size 2
    survivor = ds.union(big, 2)
    assert survivor == big
    assert ds.component_size(2) == 3

    # argument order does not matter when sizes differ
    survivor = ds.union(3, ds.find(0))
    assert survivor == big
    assert ds.component_size(3) == 4


def test_union_rejects_non_roots():
    ds = DisjointSet(3)
    ds.union(0, 1)
    with pytest.raises(ValueError, match="two roots"):
        ds.union(0, 2)


def test_union_rejects_same_root():
    ds = DisjointSet(3)
    with pytest.raises(ValueError, match="itself"):
        ds.union(2, 2)


def test_find_compresses_path():
    ds = DisjointSet(4)
    # hand-built chain 0 -> 1 -> 2 -> 3
    ds.forest[:] = [1, 2, 3, -4]
    assert ds.find(0) == 3
    np.testing.assert_array_equal(ds.forest[:3], [3, 3, 3])


def test_connected_and_component_count():
    ds = DisjointSet(6)
    ds.union(ds.find(0), ds.find(1))
    ds.union(ds.find(2), ds.find(3))
    assert ds.connected(0, 1)
    assert not ds.connected(1, 2)
    ds.union(ds.find(1), ds.find(3))
    assert ds.connected(0, 2)
    assert ds.num_components == 3


def test_spanning_merges_reach_single_component():
    ds = DisjointSet(100)
    rng = np.random.default_rng(7)
    merges = 0
    while ds.num_components > 1:
        a, b = rng.integers(0, 100, size=2)
        root_a, root_b = ds.find(int(a)), ds.find(int(b))
        if root_a != root_b:
            ds.union(root_a, root_b)
            merges += 1
    assert merges == 99
    assert ds.component_size(0) == 100
