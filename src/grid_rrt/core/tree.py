"""
Append-only tree arena for RRT*.

Nodes are stored in insertion order and reference their parent by index.
Positions are mirrored into a numpy buffer so nearest-node and radius
queries are vectorized over the whole tree.
"""

import logging
from typing import Iterator, List, Tuple

import numpy as np

from .exceptions import InvalidNodeIndexError
from .node import Node, ROOT_PARENT

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class Tree:
    """
    Indexable collection of RRT* nodes rooted at index 0.

    Indices are stable: nodes are never removed, and only parent and cost of
    an existing node can change (through rewire_parent).

    Attributes:
        nodes (List[Node]): Nodes in insertion order
    """

    def __init__(self, initial_capacity: int = 256):
        self.nodes: List[Node] = []
        self._points = np.empty((max(int(initial_capacity), 1), 2), dtype=np.float64)

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> Node:
        self._check_index(index)
        return self.nodes[index]

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    @property
    def positions(self) -> np.ndarray:
        """(n, 2) array of node positions, read-only view."""
        view = self._points[:len(self.nodes)]
        view.flags.writeable = False
        return view

    def _check_index(self, index: int) -> None:
        if not isinstance(index, (int, np.integer)) or not 0 <= index < len(self.nodes):
            raise InvalidNodeIndexError(f"Node index {index!r} out of range for tree of size {len(self.nodes)}")

    def _push(self, node: Node) -> int:
        index = len(self.nodes)
        if index == self._points.shape[0]:
            grown = np.empty((self._points.shape[0] * 2, 2), dtype=np.float64)
            grown[:index] = self._points[:index]
            self._points = grown
        self._points[index] = (node.x, node.y)
        self.nodes.append(node)
        return index

    def insert_root(self, point: Point) -> int:
        """
        Insert the root node (the start configuration).

        Args:
            point: Root position (x, y)

        Returns:
            Index of the root, always 0

        Raises:
            ValueError: If the tree already has a root
        """
        if self.nodes:
            raise ValueError("Tree already has a root")
        return self._push(Node(point[0], point[1], ROOT_PARENT, 0.0))

    def append(self, point: Point, parent: int, cost: float) -> int:
        """
        Append a new node.

        Args:
            point: Node position (x, y)
            parent: Index of an existing node
            cost: Cost-to-come of the new node

        Returns:
            Index of the new node (the tree size before the call)
        """
        self._check_index(parent)
        return self._push(Node(point[0], point[1], parent, cost))

    def distances_to(self, point: Point) -> np.ndarray:
        """Euclidean distance from every node to a point, in index order."""
        pts = self._points[:len(self.nodes)]
        return np.hypot(pts[:, 0] - point[0], pts[:, 1] - point[1])

    def nearest(self, point: Point) -> int:
        """
        Find the node closest to a point.

        Ties go to the lowest index.

        Args:
            point: Query point (x, y)

        Returns:
            Index of the nearest node

        Raises:
            InvalidNodeIndexError: If the tree is empty
        """
        if not self.nodes:
            raise InvalidNodeIndexError("nearest() called on an empty tree")
        # argmin returns the first occurrence of the minimum
        return int(np.argmin(self.distances_to(point)))

    def neighbors_within_radius(self, point: Point, radius: float) -> List[int]:
        """
        Find all nodes within a radius of a point (inclusive).

        Args:
            point: Query point (x, y)
            radius: Search radius

        Returns:
            Node indices in ascending order
        """
        if not self.nodes:
            return []
        return np.flatnonzero(self.distances_to(point) <= radius).tolist()

    def is_ancestor(self, ancestor: int, index: int) -> bool:
        """
        Check whether ancestor lies on the parent chain of index.

        A node counts as its own ancestor.
        """
        self._check_index(ancestor)
        self._check_index(index)
        current = index
        for _ in range(len(self.nodes) + 1):
            if current == ancestor:
                return True
            if current == ROOT_PARENT:
                return False
            current = self.nodes[current].parent
        raise RuntimeError(f"Parent chain from node {index} contains a cycle")

    def rewire_parent(self, index: int, new_parent: int, new_cost: float) -> None:
        """
        Reassign the parent and cost of an existing node.

        The cost reduction is pushed down to every descendant so that each
        node's cost stays equal to its parent's cost plus the edge length.

        Args:
            index: Node to rewire, must not be the root
            new_parent: New parent index, must not be index or a descendant of it
            new_cost: New cost-to-come, must be strictly lower than the current one

        Raises:
            InvalidNodeIndexError: If an index is out of range or index is the root
            ValueError: If the rewire would create a cycle or not lower the cost
        """
        self._check_index(index)
        self._check_index(new_parent)
        node = self.nodes[index]
        if node.is_root:
            raise InvalidNodeIndexError("The root node cannot be rewired")
        if self.is_ancestor(index, new_parent):
            raise ValueError(f"Rewiring node {index} under {new_parent} would create a cycle")
        if not new_cost < node.cost:
            raise ValueError(f"Rewire of node {index} does not lower its cost "
                             f"({new_cost:.4f} >= {node.cost:.4f})")
        delta = node.cost - float(new_cost)
        node.parent = int(new_parent)
        node.cost = float(new_cost)
        for descendant in self.descendants(index):
            self.nodes[descendant].cost -= delta

    def descendants(self, index: int) -> List[int]:
        """
        Find every node below index in the tree.

        Children are not stored, so this scans the parent links once.

        Args:
            index: Subtree root

        Returns:
            Descendant indices, excluding index itself
        """
        self._check_index(index)
        children = {}
        for i, n in enumerate(self.nodes):
            children.setdefault(n.parent, []).append(i)

        found = []
        stack = list(children.get(index, ()))
        while stack:
            current = stack.pop()
            found.append(current)
            stack.extend(children.get(current, ()))
        return found

    def path_to_root(self, index: int) -> List[Point]:
        """
        Collect positions from a node up to the root.

        Args:
            index: Starting node index

        Returns:
            Positions ordered from the given node to the root
        """
        self._check_index(index)
        path = []
        current = index
        while current != ROOT_PARENT:
            if len(path) > len(self.nodes):
                raise RuntimeError(f"Parent chain from node {index} contains a cycle")
            node = self.nodes[current]
            path.append(node.position)
            current = node.parent
        return path

    def edges(self) -> List[Tuple[Point, Point]]:
        """All (parent position, child position) pairs, for drawing the tree."""
        return [(self.nodes[n.parent].position, n.position)
                for n in self.nodes if not n.is_root]

    def __repr__(self) -> str:
        return f"Tree(size={len(self.nodes)})"
