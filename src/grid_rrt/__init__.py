"""
Grid RRT* - sampling-based path planning on an obstacle grid

An RRT* planner for a 2D workspace of square cells with static obstacle
cells, with greedy path shortcutting.

Modules:
    core.environment: Workspace bounds, obstacle cells and collision queries
    core.tree: Append-only RRT* tree arena
    core.editor: Headless obstacle editing with undo/redo
    algorithms.rrt_star: RRT* planner and planning result types
    algorithms.path_smoother: Path extraction and shortcutting
    utils.config_loader: YAML configuration management
    utils.visualization: Matplotlib drawing
"""

from .core.environment import Workspace
from .core.exceptions import PlannerError, InvalidQueryError, InvalidNodeIndexError
from .core.node import Node, ROOT_PARENT
from .core.tree import Tree
from .core.editor import GridEditor, EditRecord
from .algorithms.rrt_star import RRTStarPlanner, RRTStarParams, PlanningResult, PlanningStatus
from .algorithms.path_smoother import PathSmoother, compute_path_length

__version__ = "1.0.0"
