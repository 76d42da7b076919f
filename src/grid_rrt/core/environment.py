"""
Workspace representation for grid-based path planning.

This module defines the Workspace class which encapsulates the planning
domain: a rectangular grid of square cells, the set of occupied cells, and
the point and segment collision queries the planner relies on.
"""

import math
from typing import Iterable, Tuple, FrozenSet

Point = Tuple[float, float]
Cell = Tuple[int, int]


class Workspace:
    """
    Immutable planning domain made of square cells with obstacle occupancy.

    Points live in continuous workspace units with the origin at the top-left
    corner of cell (0, 0). A point (x, y) belongs to cell
    (floor(y / cell_size), floor(x / cell_size)), i.e. (row, col).

    Attributes:
        rows (int): Number of cell rows
        cols (int): Number of cell columns
        cell_size (float): Side length of one cell in workspace units
        obstacles (FrozenSet[Tuple[int, int]]): Occupied (row, col) cells
        segment_samples (int): Interpolation steps used by segment_free
        bounds (Tuple[float, float, float, float]): (x_min, y_min, x_max, y_max)
    """

    def __init__(self,
                 rows: int,
                 cols: int,
                 cell_size: float,
                 obstacles: Iterable[Cell] = (),
                 segment_samples: int = 10):
        """
        Initialize the workspace.

        Args:
            rows: Number of cell rows
            cols: Number of cell columns
            cell_size: Side length of one cell
            obstacles: Occupied cells as (row, col) pairs, duplicates ignored
            segment_samples: Interpolation steps per segment check (minimum 10)

        Raises:
            ValueError: If a dimension is not positive, segment_samples is
                below 10, or an obstacle cell lies outside the grid

        Example:
            >>> ws = Workspace(rows=5, cols=5, cell_size=100.0,
            ...                obstacles=[(2, 2), (2, 3)])
        """
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        if segment_samples < 10:
            raise ValueError(f"segment_samples must be at least 10, got {segment_samples}")

        cells = frozenset((int(r), int(c)) for r, c in obstacles)
        for r, c in cells:
            if not (0 <= r < rows and 0 <= c < cols):
                raise ValueError(f"Obstacle cell {(r, c)} lies outside the {rows}x{cols} grid")

        self._rows = int(rows)
        self._cols = int(cols)
        self._cell_size = float(cell_size)
        self._obstacles: FrozenSet[Cell] = cells
        self._segment_samples = int(segment_samples)

        # Calculate workspace bounds
        self._bounds = (0.0, 0.0, self._cols * self._cell_size, self._rows * self._cell_size)

    @classmethod
    def from_grid(cls,
                  grid_size: int,
                  canvas_size: int,
                  obstacles: Iterable[Cell] = (),
                  segment_samples: int = 10) -> "Workspace":
        """
        Build a square workspace from a grid size and a canvas size.

        The cell size is the integer quotient canvas_size // grid_size, so a
        canvas that is not a multiple of the grid size leaves a thin strip on
        the right and bottom edges outside the domain.

        Args:
            grid_size: Number of cells along each side
            canvas_size: Side length of the canvas in workspace units
            obstacles: Occupied (row, col) cells
            segment_samples: Interpolation steps per segment check

        Returns:
            Workspace instance

        Example:
            >>> ws = Workspace.from_grid(grid_size=5, canvas_size=500)
            >>> ws.cell_size
            100.0
        """
        if grid_size <= 0 or canvas_size < grid_size:
            raise ValueError(f"Invalid grid_size={grid_size} for canvas_size={canvas_size}")
        return cls(grid_size, grid_size, canvas_size // grid_size, obstacles, segment_samples)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def cell_size(self) -> float:
        return self._cell_size

    @property
    def obstacles(self) -> FrozenSet[Cell]:
        return self._obstacles

    @property
    def segment_samples(self) -> int:
        return self._segment_samples

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return self._bounds

    @property
    def width(self) -> float:
        return self._bounds[2] - self._bounds[0]

    @property
    def height(self) -> float:
        return self._bounds[3] - self._bounds[1]

    @property
    def extent(self) -> float:
        """Largest side of the workspace, used to scale step and radius constants."""
        return max(self.width, self.height)

    def cell_of(self, point: Point) -> Cell:
        """
        Map a continuous point to its (row, col) cell.

        The result may lie outside the grid; use is_in_domain to check.

        Args:
            point: (x, y) coordinates

        Returns:
            (row, col) pair
        """
        x, y = point
        return (math.floor(y / self._cell_size), math.floor(x / self._cell_size))

    def cell_center(self, cell: Cell) -> Point:
        """
        Get the center point of a cell.

        Args:
            cell: (row, col) pair

        Returns:
            (x, y) coordinates of the cell center
        """
        row, col = cell
        half = self._cell_size / 2.0
        return (col * self._cell_size + half, row * self._cell_size + half)

    def is_cell_in_grid(self, cell: Cell) -> bool:
        row, col = cell
        return 0 <= row < self._rows and 0 <= col < self._cols

    def is_obstacle_cell(self, cell: Cell) -> bool:
        return tuple(cell) in self._obstacles

    def is_in_domain(self, point: Point) -> bool:
        """
        Check if a point maps to a cell inside the grid.

        Args:
            point: (x, y) coordinates

        Returns:
            True if the point's cell is within the row/column range
        """
        x, y = point
        if not (math.isfinite(x) and math.isfinite(y)):
            return False
        return self.is_cell_in_grid(self.cell_of(point))

    def is_free(self, point: Point) -> bool:
        """
        Check if a point lies in free space.

        Out-of-domain points are treated as blocked.

        Args:
            point: (x, y) coordinates

        Returns:
            True if the point is in-domain and its cell is not an obstacle
        """
        if not self.is_in_domain(point):
            return False
        return self.cell_of(point) not in self._obstacles

    def segment_free(self, point1: Point, point2: Point) -> bool:
        """
        Check if the straight segment between two points is collision-free.

        The segment is divided into segment_samples equal steps and every
        interpolation point, both endpoints included, must be free. The
        endpoints are put in a canonical order first so the same points are
        sampled whichever way round the segment is queried.

        Collisions narrower than the sampling interval can be missed; this is
        a known resolution limit of sampled checking.

        Args:
            point1: Start point (x1, y1)
            point2: End point (x2, y2)

        Returns:
            True if every sample is in-domain and free, False otherwise
        """
        a, b = (point1, point2) if tuple(point1) <= tuple(point2) else (point2, point1)
        ax, ay = a
        dx = b[0] - ax
        dy = b[1] - ay
        n = self._segment_samples

        for i in range(n + 1):
            t = i / n
            if not self.is_free((ax + dx * t, ay + dy * t)):
                return False

        return True

    def clamp(self, point: Point) -> Point:
        """
        Clamp a point into the workspace bounds.

        The upper bounds are exclusive in cell terms, so coordinates are
        clamped to the largest float below x_max / y_max and the result is
        always in-domain.

        Args:
            point: (x, y) coordinates

        Returns:
            Clamped (x, y) coordinates
        """
        x_min, y_min, x_max, y_max = self._bounds
        x = min(max(point[0], x_min), math.nextafter(x_max, x_min))
        y = min(max(point[1], y_min), math.nextafter(y_max, y_min))
        return (x, y)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Workspace):
            return NotImplemented
        return (self._rows, self._cols, self._cell_size, self._obstacles) == \
            (other._rows, other._cols, other._cell_size, other._obstacles)

    def __hash__(self) -> int:
        return hash((self._rows, self._cols, self._cell_size, self._obstacles))

    def __repr__(self) -> str:
        """String representation of the workspace."""
        return (f"Workspace(grid={self._rows}x{self._cols}, "
                f"cell_size={self._cell_size}, obstacles={len(self._obstacles)})")
