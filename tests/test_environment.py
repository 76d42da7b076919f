"""tests/test_environment.py - Workspace queries"""
import numpy as np
import pytest

from grid_rrt.core.environment import Workspace


class TestWorkspaceConstruction:

    def test_from_grid_cell_size(self, open_workspace):
        assert open_workspace.cell_size == pytest.approx(100.0)
        assert open_workspace.bounds == (0.0, 0.0, 500.0, 500.0)
        assert open_workspace.extent == pytest.approx(500.0)

    def test_from_grid_remainder_strip(self):
        """7 cells on a 500 canvas -> 71-unit cells covering 497 units"""
        ws = Workspace.from_grid(grid_size=7, canvas_size=500)
        assert ws.cell_size == pytest.approx(71.0)
        assert ws.width == pytest.approx(497.0)
        assert not ws.is_in_domain((498.0, 10.0))

    def test_duplicate_obstacles_collapse(self):
        ws = Workspace(2, 2, 1.0, obstacles=[(0, 0), (0, 0), (1, 1)])
        assert ws.obstacles == frozenset({(0, 0), (1, 1)})

    @pytest.mark.parametrize("kwargs", [
        dict(rows=0, cols=3, cell_size=1.0),
        dict(rows=3, cols=3, cell_size=0.0),
        dict(rows=3, cols=3, cell_size=1.0, obstacles=[(3, 0)]),
        dict(rows=3, cols=3, cell_size=1.0, segment_samples=5),
    ])
    def test_invalid_construction_raises(self, kwargs):
        with pytest.raises(ValueError):
            Workspace(**kwargs)

    def test_equality(self):
        a = Workspace(3, 3, 10.0, [(1, 1)])
        b = Workspace(3, 3, 10.0, [(1, 1)])
        assert a == b
        assert hash(a) == hash(b)
        assert a != Workspace(3, 3, 10.0)


class TestPointQueries:

    def test_cell_of_and_center(self, open_workspace):
        assert open_workspace.cell_of((250.0, 150.0)) == (1, 2)
        assert open_workspace.cell_center((1, 2)) == (250.0, 150.0)

    def test_in_domain_edges(self, open_workspace):
        assert open_workspace.is_in_domain((0.0, 0.0))
        assert open_workspace.is_in_domain((499.9, 499.9))
        assert not open_workspace.is_in_domain((500.0, 10.0))
        assert not open_workspace.is_in_domain((10.0, 500.0))
        assert not open_workspace.is_in_domain((-0.5, 10.0))
        assert not open_workspace.is_in_domain((float('nan'), 10.0))

    def test_is_free(self, block_workspace):
        assert block_workspace.is_free((50.0, 50.0))
        assert not block_workspace.is_free((150.0, 150.0))
        assert block_workspace.is_obstacle_cell((1, 1))

    def test_out_of_domain_is_blocked(self, block_workspace):
        assert not block_workspace.is_free((350.0, 50.0))

    def test_clamp_stays_in_domain(self, open_workspace):
        for p in [(-10.0, -10.0), (600.0, 250.0), (500.0, 500.0)]:
            clamped = open_workspace.clamp(p)
            assert open_workspace.is_in_domain(clamped)
        assert open_workspace.clamp((120.0, 30.0)) == (120.0, 30.0)


class TestSegmentFree:

    def test_free_row(self, block_workspace):
        assert block_workspace.segment_free((50.0, 50.0), (250.0, 50.0))

    def test_blocked_through_center(self, block_workspace):
        assert not block_workspace.segment_free((50.0, 150.0), (250.0, 150.0))
        assert not block_workspace.segment_free((50.0, 50.0), (250.0, 250.0))

    def test_blocked_endpoint(self, block_workspace):
        assert not block_workspace.segment_free((50.0, 50.0), (150.0, 150.0))

    def test_leaving_domain_is_blocked(self, open_workspace):
        assert not open_workspace.segment_free((450.0, 50.0), (550.0, 50.0))

    def test_thin_corner_can_be_missed(self):
        """Sampled checking skips obstacles narrower than the sample spacing"""
        ws = Workspace(rows=1, cols=100, cell_size=1.0, obstacles=[(0, 55)])
        assert ws.segment_free((0.5, 0.5), (99.5, 0.5))

    def test_symmetric(self, maze_workspace):
        rng = np.random.default_rng(3)
        points = rng.uniform(0.0, 500.0, size=(200, 2))
        for a, b in zip(points[::2], points[1::2]):
            a, b = tuple(a), tuple(b)
            assert maze_workspace.segment_free(a, b) == maze_workspace.segment_free(b, a)
