"""
Headless grid editor.

Models the interactive setup step that precedes planning: toggling obstacle
cells with undo/redo, and choosing the start and goal cells. The result is
frozen into a Workspace plus start/goal points for the planner.
"""

from typing import List, NamedTuple, Optional, Set, Tuple

from .environment import Workspace

Cell = Tuple[int, int]


class EditRecord(NamedTuple):
    """One obstacle toggle: the cell and whether it was occupied afterwards."""
    cell: Cell
    occupied: bool


class GridEditor:
    """
    Editable obstacle grid with start/goal selection.

    Attributes:
        rows (int): Number of cell rows
        cols (int): Number of cell columns
        cell_size (float): Side length of one cell
        obstacles (Set[Tuple[int, int]]): Currently occupied cells
        start (Optional[Tuple[int, int]]): Start cell
        goal (Optional[Tuple[int, int]]): Goal cell
    """

    def __init__(self, rows: int, cols: int, cell_size: float):
        if rows <= 0 or cols <= 0 or cell_size <= 0:
            raise ValueError(f"Invalid grid {rows}x{cols} with cell_size={cell_size}")
        self.rows = rows
        self.cols = cols
        self.cell_size = float(cell_size)
        self.obstacles: Set[Cell] = set()
        self.start: Optional[Cell] = None
        self.goal: Optional[Cell] = None
        self._undo_stack: List[EditRecord] = []
        self._redo_stack: List[EditRecord] = []

    @classmethod
    def from_canvas(cls, grid_size: int, canvas_size: int) -> "GridEditor":
        """Square editor whose cell size is canvas_size // grid_size."""
        if grid_size <= 0 or canvas_size < grid_size:
            raise ValueError(f"Invalid grid_size={grid_size} for canvas_size={canvas_size}")
        return cls(grid_size, grid_size, canvas_size // grid_size)

    def _in_grid(self, cell: Cell) -> bool:
        return 0 <= cell[0] < self.rows and 0 <= cell[1] < self.cols

    def _flip(self, cell: Cell) -> bool:
        if cell in self.obstacles:
            self.obstacles.remove(cell)
            return False
        self.obstacles.add(cell)
        return True

    def toggle_obstacle(self, cell: Cell) -> Optional[EditRecord]:
        """
        Flip the occupancy of a cell.

        Cells outside the grid and the start/goal cells are left untouched.
        A successful toggle clears the redo history.

        Args:
            cell: (row, col) to toggle

        Returns:
            The recorded edit, or None if the toggle was refused
        """
        cell = (int(cell[0]), int(cell[1]))
        if not self._in_grid(cell) or cell == self.start or cell == self.goal:
            return None

        record = EditRecord(cell, self._flip(cell))
        self._undo_stack.append(record)
        self._redo_stack.clear()
        return record

    def undo(self) -> Optional[EditRecord]:
        """Revert the most recent toggle, or return None if there is none."""
        if not self._undo_stack:
            return None
        record = self._undo_stack.pop()
        self._flip(record.cell)
        self._redo_stack.append(record)
        return record

    def redo(self) -> Optional[EditRecord]:
        """Re-apply the most recently undone toggle, or return None if there is none."""
        if not self._redo_stack:
            return None
        record = self._redo_stack.pop()
        self._flip(record.cell)
        self._undo_stack.append(record)
        return record

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def _check_endpoint(self, cell: Cell, name: str) -> Cell:
        cell = (int(cell[0]), int(cell[1]))
        if not self._in_grid(cell):
            raise ValueError(f"{name} cell {cell} lies outside the {self.rows}x{self.cols} grid")
        if cell in self.obstacles:
            raise ValueError(f"{name} cell {cell} is an obstacle")
        return cell

    def set_start(self, cell: Cell) -> None:
        self.start = self._check_endpoint(cell, 'start')

    def set_goal(self, cell: Cell) -> None:
        self.goal = self._check_endpoint(cell, 'goal')

    def select_cell(self, cell: Cell) -> str:
        """
        Pick the start on the first call and the goal on every later call.

        Returns:
            'start' or 'goal', whichever was set
        """
        if self.start is None:
            self.set_start(cell)
            return 'start'
        self.set_goal(cell)
        return 'goal'

    @property
    def is_configured(self) -> bool:
        return self.start is not None and self.goal is not None

    def build_workspace(self, segment_samples: int = 10) -> Workspace:
        """Freeze the current obstacle layout into a Workspace."""
        return Workspace(self.rows, self.cols, self.cell_size, self.obstacles, segment_samples)

    def _center(self, cell: Optional[Cell], name: str) -> Tuple[float, float]:
        if cell is None:
            raise ValueError(f"No {name} cell selected")
        half = self.cell_size / 2.0
        return (cell[1] * self.cell_size + half, cell[0] * self.cell_size + half)

    def start_point(self) -> Tuple[float, float]:
        """Center of the start cell in workspace units."""
        return self._center(self.start, 'start')

    def goal_point(self) -> Tuple[float, float]:
        """Center of the goal cell in workspace units."""
        return self._center(self.goal, 'goal')

    def __repr__(self) -> str:
        return (f"GridEditor(grid={self.rows}x{self.cols}, obstacles={len(self.obstacles)}, "
                f"start={self.start}, goal={self.goal})")
