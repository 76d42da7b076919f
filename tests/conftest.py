"""tests/conftest.py - shared fixtures"""
import pytest

from grid_rrt.core.environment import Workspace
from grid_rrt.algorithms.rrt_star import RRTStarPlanner


# ==================== Workspaces ====================

@pytest.fixture
def open_workspace():
    """5x5 grid of 100-unit cells, no obstacles (500x500 canvas)"""
    return Workspace.from_grid(grid_size=5, canvas_size=500)


@pytest.fixture
def block_workspace():
    """3x3 grid of 100-unit cells with the center cell blocked"""
    return Workspace(rows=3, cols=3, cell_size=100.0, obstacles=[(1, 1)])


@pytest.fixture
def wall_workspace():
    """5x5 grid with column 2 fully blocked, splitting left from right"""
    return Workspace.from_grid(grid_size=5, canvas_size=500,
                               obstacles=[(r, 2) for r in range(5)])


@pytest.fixture
def maze_workspace():
    """10x10 grid of 50-unit cells with two staggered walls"""
    obstacles = [(3, c) for c in range(0, 7)] + [(6, c) for c in range(3, 10)]
    return Workspace.from_grid(grid_size=10, canvas_size=500, obstacles=obstacles)


# ==================== Planner factory ====================

@pytest.fixture
def make_planner():
    """Build an RRTStarPlanner with parameter overrides"""
    def _make(workspace, **params):
        params.setdefault('random_seed', 7)
        return RRTStarPlanner(workspace, {'parameters': params})
    return _make
