"""
Path extraction and post-processing for tree planners.

1. Extraction: walk parent links from a goal node back to the root
2. Shortcutting: greedily replace runs of waypoints by straight segments
   that the workspace reports as collision-free
"""

import logging
import math
from typing import List, Sequence, Tuple

from ..core.environment import Workspace
from ..core.tree import Tree

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


def compute_path_length(path: Sequence[Point]) -> float:
    """
    Total Euclidean length of a polyline.

    Returns:
        Sum of segment lengths, 0.0 for paths with fewer than two points
    """
    return sum(math.hypot(b[0] - a[0], b[1] - a[1]) for a, b in zip(path, path[1:]))


class PathSmoother:
    """
    Extracts paths from a tree and shortens them by shortcutting.

    Args:
        workspace: Workspace providing the segment collision query

    Example:
        >>> smoother = PathSmoother(workspace)
        >>> raw = smoother.extract(tree, goal_index)
        >>> smooth = smoother.shortcut(raw)
    """

    def __init__(self, workspace: Workspace) -> None:
        self.workspace = workspace

    @staticmethod
    def extract(tree: Tree, goal_index: int) -> List[Point]:
        """
        Build the root-to-goal path by following parent links.

        Args:
            tree: Tree the goal node belongs to
            goal_index: Index of the goal-reaching node

        Returns:
            Positions ordered from the root to the goal node

        Raises:
            InvalidNodeIndexError: If goal_index is not a node of the tree
        """
        path = tree.path_to_root(goal_index)
        path.reverse()
        return path

    def shortcut(self, path: Sequence[Point]) -> List[Point]:
        """
        Greedy farthest-visible shortcutting.

        From the current anchor, jump to the farthest later waypoint that can
        be reached by a collision-free straight segment, then repeat from
        there. The first and last points are always kept.

        Args:
            path: Waypoints whose consecutive pairs are collision-free

        Returns:
            Shortened path, never longer (in points) than the input
        """
        path = list(path)
        if len(path) <= 2:
            return path

        smoothed = [path[0]]
        last = len(path) - 1
        i = 0
        while i < last:
            j = last
            while j > i + 1 and not self.workspace.segment_free(path[i], path[j]):
                j -= 1
            smoothed.append(path[j])
            i = j

        logger.debug("Shortcut reduced path from %d to %d points", len(path), len(smoothed))
        return smoothed
