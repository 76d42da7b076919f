"""
Node class for tree-based path planning algorithms.

Simple node structure stored in the RRT* tree arena. Parents are referenced
by index into the same tree rather than by object.
"""

from typing import Tuple

# Parent index carried by the root node only
ROOT_PARENT = -1


class Node:
    """
    Represents a vertex of the search tree.

    Attributes:
        x (float): X-coordinate
        y (float): Y-coordinate
        parent (int): Index of the parent node in the tree (ROOT_PARENT for root)
        cost (float): Accumulated path length from the root to this node
    """

    __slots__ = ('x', 'y', 'parent', 'cost')

    def __init__(self, x: float, y: float, parent: int = ROOT_PARENT, cost: float = 0.0):
        """
        Initialize a node at given coordinates.

        Args:
            x: X-coordinate
            y: Y-coordinate
            parent: Parent index (ROOT_PARENT for the root)
            cost: Cost-to-come from the root
        """
        self.x = float(x)
        self.y = float(y)
        self.parent = int(parent)
        self.cost = float(cost)

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def is_root(self) -> bool:
        return self.parent == ROOT_PARENT

    def __repr__(self) -> str:
        """String representation of the node."""
        return f"Node({self.x:.2f}, {self.y:.2f}, parent={self.parent}, cost={self.cost:.2f})"
