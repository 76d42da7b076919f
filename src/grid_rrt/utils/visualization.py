"""
Visualization utilities for the grid RRT* planner.

This module provides matplotlib drawing functions for the workspace grid,
obstacle cells, the exploration tree and planned paths. Image coordinates
are used: row 0 is drawn at the top.
"""

import matplotlib.patches as patches
from matplotlib.collections import LineCollection
from typing import List, Tuple, Optional

from ..core.environment import Workspace
from ..core.tree import Tree


def draw_workspace(ax,
                   workspace: Workspace,
                   start: Optional[Tuple[float, float]] = None,
                   goal: Optional[Tuple[float, float]] = None,
                   show_grid: bool = True):
    """
    Draw the workspace grid with obstacle cells, start and goal.

    Args:
        ax: Matplotlib axis to draw on
        workspace: Workspace to draw
        start: Optional start point (x, y)
        goal: Optional goal point (x, y)
        show_grid: Whether to draw cell outlines

    Example:
        >>> fig, ax = plt.subplots()
        >>> draw_workspace(ax, Workspace.from_grid(5, 500, [(2, 2)]),
        ...                start=(50, 50), goal=(450, 450))
        >>> plt.show()
    """
    ax.clear()
    size = workspace.cell_size

    if show_grid:
        for r in range(workspace.rows):
            for c in range(workspace.cols):
                ax.add_patch(patches.Rectangle(
                    (c * size, r * size), size, size,
                    facecolor='none', edgecolor=(0.8, 0.8, 0.8),
                    linewidth=0.5, zorder=0
                ))

    # Obstacles as filled black cells
    for r, c in sorted(workspace.obstacles):
        ax.add_patch(patches.Rectangle(
            (c * size, r * size), size, size,
            facecolor='black', edgecolor='black', zorder=1
        ))

    if start:
        ax.scatter(*start, color='green', s=100, marker='o',
                   label="Start", zorder=10, edgecolors='black', linewidths=1.5)

    if goal:
        ax.scatter(*goal, color='red', s=100, marker='*',
                   label="Goal", zorder=10, edgecolors='black', linewidths=1.5)

    x_min, y_min, x_max, y_max = workspace.bounds
    ax.set_xlim(x_min, x_max)
    ax.set_ylim(y_max, y_min)
    ax.set_xlabel("X Position")
    ax.set_ylabel("Y Position")
    ax.set_aspect('equal', adjustable='box')


def draw_tree(ax, tree: Tree, color: str = 'orange', alpha: float = 0.6, linewidth: float = 0.8):
    """
    Draw every parent-child edge of a tree.

    Args:
        ax: Matplotlib axis
        tree: Tree to draw
        color: Edge color
        alpha: Edge transparency
        linewidth: Edge width
    """
    edges = tree.edges()
    if not edges:
        return
    ax.add_collection(LineCollection(edges, colors=color, alpha=alpha,
                                     linewidths=linewidth, zorder=2))


def draw_path(ax,
              path: List[Tuple[float, float]],
              color: str = 'blue',
              label: str = "Path",
              linewidth: float = 2,
              linestyle: str = '-'):
    """
    Draw a polyline path with waypoint markers.

    Args:
        ax: Matplotlib axis
        path: Waypoints [(x1, y1), ...]
        color: Line color
        label: Legend label
        linewidth: Line width
        linestyle: Matplotlib line style
    """
    if not path:
        return
    path_x, path_y = zip(*path)
    ax.plot(path_x, path_y, color=color, linewidth=linewidth, linestyle=linestyle,
            label=label, zorder=3, marker='o', markersize=4)


def save_figure(fig, filename: str, dpi: int = 150):
    """
    Save a figure to file.

    Args:
        fig: Matplotlib figure
        filename: Output filename (e.g., 'outputs/rrt_star/path_plot.png')
        dpi: Output resolution
    """
    fig.savefig(filename, dpi=dpi, bbox_inches='tight')
