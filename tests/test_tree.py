"""tests/test_tree.py - Tree arena"""
import math
import numpy as np
import pytest

from grid_rrt.core.exceptions import InvalidNodeIndexError
from grid_rrt.core.node import ROOT_PARENT
from grid_rrt.core.tree import Tree


@pytest.fixture
def chain_tree():
    """root(0,0) -> a(10,0) -> b(10,10) -> c(10,20)"""
    tree = Tree()
    tree.insert_root((0.0, 0.0))
    a = tree.append((10.0, 0.0), 0, 10.0)
    b = tree.append((10.0, 10.0), a, 20.0)
    tree.append((10.0, 20.0), b, 30.0)
    return tree


class TestTreeGrowth:

    def test_root(self):
        tree = Tree()
        assert tree.insert_root((5.0, 6.0)) == 0
        root = tree[0]
        assert root.parent == ROOT_PARENT
        assert root.cost == 0.0
        assert root.is_root

    def test_second_root_raises(self):
        tree = Tree()
        tree.insert_root((0.0, 0.0))
        with pytest.raises(ValueError):
            tree.insert_root((1.0, 1.0))

    def test_append_returns_previous_size(self, chain_tree):
        size = len(chain_tree)
        assert chain_tree.append((0.0, 5.0), 0, 5.0) == size
        assert len(chain_tree) == size + 1

    def test_append_bad_parent_raises(self, chain_tree):
        with pytest.raises(InvalidNodeIndexError):
            chain_tree.append((0.0, 5.0), 99, 5.0)

    def test_buffer_growth_keeps_positions(self):
        tree = Tree(initial_capacity=2)
        tree.insert_root((0.0, 0.0))
        for i in range(1, 20):
            tree.append((float(i), 0.0), i - 1, float(i))
        np.testing.assert_array_equal(tree.positions[:, 0], np.arange(20.0))

    def test_positions_read_only(self, chain_tree):
        with pytest.raises(ValueError):
            chain_tree.positions[0, 0] = 1.0


class TestTreeQueries:

    def test_nearest(self, chain_tree):
        assert chain_tree.nearest((11.0, 19.0)) == 3

    def test_nearest_tie_lowest_index(self):
        tree = Tree()
        tree.insert_root((0.0, 0.0))
        tree.append((10.0, 0.0), 0, 10.0)
        assert tree.nearest((5.0, 0.0)) == 0

    def test_nearest_empty_raises(self):
        with pytest.raises(InvalidNodeIndexError):
            Tree().nearest((0.0, 0.0))

    def test_neighbors_inclusive_and_ordered(self, chain_tree):
        assert chain_tree.neighbors_within_radius((10.0, 10.0), 10.0) == [1, 2, 3]
        assert chain_tree.neighbors_within_radius((10.0, 10.0), 9.99) == [2]
        assert chain_tree.neighbors_within_radius((100.0, 100.0), 1.0) == []

    def test_path_to_root(self, chain_tree):
        assert chain_tree.path_to_root(3) == [(10.0, 20.0), (10.0, 10.0), (10.0, 0.0), (0.0, 0.0)]

    def test_invalid_index_raises(self, chain_tree):
        with pytest.raises(InvalidNodeIndexError):
            chain_tree.path_to_root(4)
        with pytest.raises(InvalidNodeIndexError):
            chain_tree[-1]

    def test_ancestry(self, chain_tree):
        assert chain_tree.is_ancestor(0, 3)
        assert chain_tree.is_ancestor(2, 2)
        assert not chain_tree.is_ancestor(3, 1)
        assert sorted(chain_tree.descendants(1)) == [2, 3]

    def test_edges(self, chain_tree):
        edges = chain_tree.edges()
        assert len(edges) == 3
        assert edges[0] == ((0.0, 0.0), (10.0, 0.0))


class TestRewire:

    def test_rewire_propagates_cost(self, chain_tree):
        new_cost = math.hypot(10.0, 10.0)
        chain_tree.rewire_parent(2, 0, new_cost)
        assert chain_tree[2].parent == 0
        assert chain_tree[2].cost == pytest.approx(new_cost)
        assert chain_tree[3].cost == pytest.approx(new_cost + 10.0)

    def test_rewire_root_raises(self, chain_tree):
        with pytest.raises(InvalidNodeIndexError):
            chain_tree.rewire_parent(0, 1, -1.0)

    def test_rewire_to_self_raises(self, chain_tree):
        with pytest.raises(ValueError):
            chain_tree.rewire_parent(2, 2, 1.0)

    def test_rewire_to_descendant_raises(self, chain_tree):
        with pytest.raises(ValueError):
            chain_tree.rewire_parent(1, 3, 1.0)

    def test_rewire_without_improvement_raises(self, chain_tree):
        with pytest.raises(ValueError):
            chain_tree.rewire_parent(3, 1, 30.0)
