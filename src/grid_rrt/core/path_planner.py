"""
Abstract base class for path planning algorithms.

This module defines the common interface that planners operating on a
grid Workspace must implement.
"""

from abc import ABC, abstractmethod
from typing import List, Tuple, Optional, Dict, Any
import json
import numpy as np

from .environment import Workspace


class PathPlanner(ABC):
    """
    Abstract base class for path planning algorithms.

    All path planning algorithms inherit from this class and implement
    the required abstract methods for planning, visualization, and metrics.

    Attributes:
        workspace (Workspace): The planning domain with obstacle cells and bounds
        config (Dict[str, Any]): Algorithm-specific configuration parameters
        path (Optional[List[Tuple[float, float]]]): Computed path from start to goal
        planning_time (float): Time taken to compute the path (seconds)
        metrics (Dict[str, Any]): Performance metrics from last planning run
    """

    def __init__(self, workspace: Workspace, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the path planner.

        Args:
            workspace: Workspace containing obstacle cells and bounds
            config: Dictionary of algorithm-specific parameters loaded from YAML
        """
        self.workspace = workspace
        self.config = config if config is not None else {}
        self.path: Optional[List[Tuple[float, float]]] = None
        self.planning_time: float = 0.0
        self.metrics: Dict[str, Any] = {}
        self._initialize_algorithm()

    @abstractmethod
    def _initialize_algorithm(self) -> None:
        """
        Initialize algorithm-specific data structures.

        This method is called during __init__ and should resolve parameters
        from self.config and set up any algorithm-specific state.
        """
        pass

    @abstractmethod
    def plan(self, start: Tuple[float, float], goal: Tuple[float, float]) -> Optional[List[Tuple[float, float]]]:
        """
        Compute a collision-free path from start to goal.

        Implementations store the result in self.path and the elapsed time in
        self.planning_time.

        Args:
            start: Starting position (x, y) in workspace coordinates
            goal: Goal position (x, y) in workspace coordinates

        Returns:
            List of waypoints [(x1, y1), (x2, y2), ...] if path found
            None if no path was found
        """
        pass

    @abstractmethod
    def get_metrics(self) -> Dict[str, Any]:
        """
        Get algorithm performance metrics from the last planning run.

        Returns:
            Dictionary containing at least path_length, planning_time and
            nodes_explored
        """
        pass

    @abstractmethod
    def visualize(self, ax, **kwargs) -> None:
        """
        Visualize the planning result on a matplotlib axis.

        Args:
            ax: Matplotlib axis object to draw on
            **kwargs: Additional visualization parameters
        """
        pass

    def validate_path(self) -> bool:
        """
        Validate that the computed path is collision-free.

        Returns:
            True if path exists and every edge passes Workspace.segment_free
        """
        if self.path is None or len(self.path) < 2:
            return False

        for i in range(len(self.path) - 1):
            if not self.workspace.segment_free(self.path[i], self.path[i+1]):
                return False

        return True

    def get_path_length(self) -> float:
        """
        Calculate the total Euclidean length of the computed path.

        Returns:
            Path length in workspace units, 0.0 if no path exists
        """
        from ..algorithms.path_smoother import compute_path_length

        if self.path is None:
            return 0.0
        return compute_path_length(self.path)

    def save_path(self, filename: str) -> None:
        """
        Save the computed path to a file.

        Supports multiple formats based on file extension:
        - .npy: NumPy binary format
        - .json: JSON format with path and metrics
        - .csv: Comma-separated values

        Args:
            filename: Output file path with extension

        Raises:
            ValueError: If no path exists or file format is unsupported

        Example:
            >>> planner.save_path('outputs/path.json')
        """
        if self.path is None:
            raise ValueError("No path to save. Run plan() first.")

        if filename.endswith('.npy'):
            np.save(filename, np.array(self.path))
        elif filename.endswith('.json'):
            with open(filename, 'w') as f:
                json.dump({
                    'path': [list(p) for p in self.path],
                    'metrics': self.get_metrics()
                }, f, indent=2)
        elif filename.endswith('.csv'):
            np.savetxt(filename, np.array(self.path),
                       delimiter=',', header='x,y', comments='')
        else:
            raise ValueError(f"Unsupported file format: {filename}. "
                             f"Use .npy, .json, or .csv")

    def load_path(self, filename: str) -> List[Tuple[float, float]]:
        """
        Load a path from a file.

        Args:
            filename: Input file path

        Returns:
            List of waypoints loaded from file

        Raises:
            ValueError: If file format is unsupported
        """
        if filename.endswith('.npy'):
            path_array = np.load(filename)
            self.path = [(float(x), float(y)) for x, y in path_array]
        elif filename.endswith('.json'):
            with open(filename, 'r') as f:
                data = json.load(f)
                self.path = [tuple(p) for p in data['path']]
        elif filename.endswith('.csv'):
            path_array = np.loadtxt(filename, delimiter=',', skiprows=1, ndmin=2)
            self.path = [(float(x), float(y)) for x, y in path_array]
        else:
            raise ValueError(f"Unsupported file format: {filename}")

        return self.path

    def __repr__(self) -> str:
        """String representation of the planner."""
        return f"{self.__class__.__name__}(config={self.config})"

    def __str__(self) -> str:
        """Human-readable string representation."""
        status = "with path" if self.path else "no path"
        return f"{self.__class__.__name__} ({status})"
