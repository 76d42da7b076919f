"""
RRT* (Rapidly-exploring Random Tree Star) algorithm implementation.

RRT* is a sampling-based path planning algorithm that builds a tree by
randomly sampling the space and includes parent re-selection and rewiring
for asymptotic optimality. This variant samples the goal on a fixed
interval, stops as soon as a node lands within tolerance of the goal, and
shortcuts the resulting path.
"""

import enum
import logging
import math
import time
from dataclasses import dataclass, field
from typing import Callable, List, Tuple, Optional, Dict, Any

import numpy as np

from ..core.environment import Workspace
from ..core.exceptions import InvalidQueryError
from ..core.path_planner import PathPlanner
from ..core.tree import Tree
from .path_smoother import PathSmoother, compute_path_length

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class PlanningStatus(str, enum.Enum):
    """Terminal outcome of a planning run."""

    FOUND = 'found'
    NOT_FOUND = 'not_found'
    CANCELLED = 'cancelled'


@dataclass
class PlanningResult:
    """
    Outcome of one RRT* run.

    Attributes:
        status: FOUND, NOT_FOUND (budget exhausted) or CANCELLED
        tree: The tree built during the run, valid whatever the status
        goal_index: Index of the goal-reaching node, None unless found
        raw_path: Root-to-goal waypoints extracted from the tree, ending on the
            exact goal when the last segment allows it; None unless found
        path: Shortcut version of raw_path, None unless found
        iterations: Number of loop iterations executed
        planning_time: Wall-clock duration of the run (s)
        counters: Per-run counts of rejected samples, degenerate steps,
            blocked steps and rewires
    """
    status: PlanningStatus
    tree: Tree
    goal_index: Optional[int] = None
    raw_path: Optional[List[Point]] = None
    path: Optional[List[Point]] = None
    iterations: int = 0
    planning_time: float = 0.0
    counters: Dict[str, int] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.status is PlanningStatus.FOUND


@dataclass(frozen=True)
class RRTStarParams:
    """
    Resolved RRT* parameters in absolute workspace units.

    Attributes:
        max_iterations: Iteration budget
        goal_bias_interval: Every n-th iteration (i % n == 0) samples the goal
        max_step: Longest edge added when steering
        radius_scale: Scale of the shrinking neighborhood radius
        small_tree_size: Up to this tree size the radius is at least max_step
        goal_tolerance: A new node closer than this to the goal ends the run
        random_seed: Seed for the sampler, None for a fresh one per run
    """
    max_iterations: int = 10000
    goal_bias_interval: int = 5
    max_step: float = 50.0
    radius_scale: float = 50.0
    small_tree_size: int = 1
    goal_tolerance: float = 60.0
    random_seed: Optional[int] = None

    def __post_init__(self):
        if self.max_iterations < 0:
            raise ValueError(f"max_iterations must be non-negative, got {self.max_iterations}")
        if self.goal_bias_interval < 1:
            raise ValueError(f"goal_bias_interval must be at least 1, got {self.goal_bias_interval}")
        if self.max_step <= 0 or self.radius_scale <= 0:
            raise ValueError("max_step and radius_scale must be positive")
        if self.goal_tolerance <= 0:
            raise ValueError(f"goal_tolerance must be positive, got {self.goal_tolerance}")

    @classmethod
    def from_config(cls, config: Dict[str, Any], workspace: Workspace) -> "RRTStarParams":
        """
        Resolve parameters from an algorithm config against a workspace.

        Step and tolerance default to fractions of the workspace so the same
        config works at any scale: max_step = step_fraction * extent and
        goal_tolerance = goal_tolerance_cells * cell_size. Absolute values
        (step_size, rewire_radius_scale, goal_tolerance) take precedence.

        Args:
            config: Algorithm config with an optional 'parameters' section
            workspace: Workspace the planner will run on

        Returns:
            RRTStarParams instance
        """
        params = config.get('parameters', {}) or {}

        if params.get('step_size') is not None:
            max_step = float(params['step_size'])
        else:
            max_step = float(params.get('step_fraction', 0.1)) * workspace.extent

        if params.get('rewire_radius_scale') is not None:
            radius_scale = float(params['rewire_radius_scale'])
        else:
            radius_scale = max_step

        if params.get('goal_tolerance') is not None:
            goal_tolerance = float(params['goal_tolerance'])
        else:
            goal_tolerance = float(params.get('goal_tolerance_cells', 0.6)) * workspace.cell_size

        seed = params.get('random_seed')
        return cls(
            max_iterations=int(params.get('max_iterations', 10000)),
            goal_bias_interval=int(params.get('goal_bias_interval', 5)),
            max_step=max_step,
            radius_scale=radius_scale,
            small_tree_size=int(params.get('small_tree_size', 1)),
            goal_tolerance=goal_tolerance,
            random_seed=None if seed is None else int(seed),
        )


class RRTStarPlanner(PathPlanner):
    """
    RRT* path planning algorithm on a grid workspace.

    Builds a tree by random sampling, steering toward samples, choosing the
    cheapest collision-free parent in a shrinking neighborhood and rewiring
    neighbors through the new node when that lowers their cost.

    Attributes:
        params (RRTStarParams): Resolved parameters
        tree (Tree): Tree from the last run
        result (Optional[PlanningResult]): Outcome of the last run
        smoother (PathSmoother): Path extraction and shortcutting
    """

    def _initialize_algorithm(self) -> None:
        """Resolve RRT* parameters and reset run state."""
        self.params = RRTStarParams.from_config(self.config, self.workspace)
        self.smoother = PathSmoother(self.workspace)
        self.tree = Tree()
        self.result: Optional[PlanningResult] = None
        self.goal: Optional[Point] = None
        self._rng: Optional[np.random.Generator] = None

    def _get_random_point(self, iteration: int) -> Point:
        """
        Sample a point for this iteration.

        Goal-biased iterations return the goal exactly; the others draw a
        uniform point in the bounds and clamp it into the domain.
        """
        if iteration % self.params.goal_bias_interval == 0:
            return self.goal

        x_min, y_min, x_max, y_max = self.workspace.bounds
        x = float(self._rng.uniform(x_min, x_max))
        y = float(self._rng.uniform(y_min, y_max))
        return self.workspace.clamp((x, y))

    def _steer(self, from_point: Point, to_point: Point) -> Optional[Point]:
        """
        Move from from_point toward to_point by at most max_step.

        Returns:
            The steered point clamped into bounds, or None when the two
            points coincide. Targets within one step are returned as-is.
        """
        dx = to_point[0] - from_point[0]
        dy = to_point[1] - from_point[1]
        dist = math.hypot(dx, dy)
        if dist == 0:
            return None
        if dist <= self.params.max_step:
            return self.workspace.clamp(to_point)

        scale = self.params.max_step / dist
        return self.workspace.clamp((from_point[0] + dx * scale, from_point[1] + dy * scale))

    def neighbor_radius(self, tree_size: int) -> float:
        """
        Neighborhood radius for parent selection and rewiring.

        radius_scale * sqrt(log(n + 1) / (n + 1)), shrinking as the tree grows.
        Trees of at most small_tree_size nodes use at least max_step.
        """
        n = tree_size
        radius = self.params.radius_scale * math.sqrt(math.log(n + 1) / (n + 1))
        if n <= self.params.small_tree_size:
            radius = max(radius, self.params.max_step)
        return radius

    def _choose_parent(self, new_point: Point, nearest_idx: int, near_idxs: List[int]) -> Tuple[int, float]:
        """
        Choose the parent that minimizes the cost of reaching new_point.

        Starts from the nearest node and only switches to a neighbor when it
        is strictly cheaper and its connecting segment is collision-free.

        Returns:
            (parent index, cost of new_point through that parent)
        """
        nearest = self.tree[nearest_idx]
        best_parent = nearest_idx
        best_cost = nearest.cost + math.hypot(new_point[0] - nearest.x, new_point[1] - nearest.y)

        for idx in near_idxs:
            node = self.tree[idx]
            cost = node.cost + math.hypot(new_point[0] - node.x, new_point[1] - node.y)
            if cost < best_cost and self.workspace.segment_free(node.position, new_point):
                best_parent = idx
                best_cost = cost

        return best_parent, best_cost

    def _rewire(self, new_idx: int, near_idxs: List[int]) -> int:
        """
        Re-parent neighbors through the new node when that lowers their cost.

        Returns:
            Number of nodes rewired
        """
        new_node = self.tree[new_idx]
        rewired = 0

        for idx in near_idxs:
            node = self.tree[idx]
            if idx == new_idx or node.is_root:
                continue

            new_cost = new_node.cost + math.hypot(node.x - new_node.x, node.y - new_node.y)
            if (new_cost < node.cost
                    and not self.tree.is_ancestor(idx, new_idx)
                    and self.workspace.segment_free(new_node.position, node.position)):
                self.tree.rewire_parent(idx, new_idx, new_cost)
                rewired += 1

        return rewired

    def _reached_goal(self, point: Point) -> bool:
        return math.hypot(point[0] - self.goal[0], point[1] - self.goal[1]) < self.params.goal_tolerance

    def _goal_path(self, goal_idx: int) -> List[Point]:
        """
        Extract the root-to-goal waypoints for the goal-reaching node.

        When that node lies within tolerance but off the goal, the exact goal
        is appended to the waypoints if the final segment is free. The tree
        itself is left unchanged.
        """
        raw_path = self.smoother.extract(self.tree, goal_idx)
        end = raw_path[-1]
        if end != self.goal and self.workspace.segment_free(end, self.goal):
            raw_path.append(self.goal)
        return raw_path

    def _check_query(self, start: Point, goal: Point) -> None:
        for name, point in (('start', start), ('goal', goal)):
            if not self.workspace.is_in_domain(point):
                raise InvalidQueryError(f"{name} {tuple(point)} lies outside the workspace {self.workspace.bounds}")
            if not self.workspace.is_free(point):
                logger.warning("%s %s lies inside an obstacle cell; no path can be found", name, tuple(point))

    def solve(self,
              start: Point,
              goal: Point,
              should_cancel: Optional[Callable[[], bool]] = None) -> PlanningResult:
        """
        Run RRT* from start to goal.

        Args:
            start: Starting position (x, y)
            goal: Goal position (x, y)
            should_cancel: Optional callable checked once per iteration;
                returning True ends the run as CANCELLED

        Returns:
            PlanningResult; result.path is None unless the goal was reached

        Raises:
            InvalidQueryError: If start or goal is outside the workspace
        """
        start = (float(start[0]), float(start[1]))
        goal = (float(goal[0]), float(goal[1]))
        self._check_query(start, goal)

        start_time = time.time()

        # Each run replans from scratch with a fresh sampler
        self._rng = np.random.default_rng(self.params.random_seed)
        self.goal = goal
        self.tree = Tree()
        self.tree.insert_root(start)
        self.path = None

        counters = {'rejected_samples': 0, 'degenerate_steps': 0,
                    'blocked_steps': 0, 'rewires': 0}
        status = PlanningStatus.NOT_FOUND
        goal_idx = None
        iterations = 0

        # Main RRT* loop
        for i in range(self.params.max_iterations):
            if should_cancel is not None and should_cancel():
                status = PlanningStatus.CANCELLED
                break
            iterations = i + 1

            # Sample
            rand_point = self._get_random_point(i)
            if not self.workspace.is_free(rand_point):
                counters['rejected_samples'] += 1
                continue

            # Nearest node and steer toward sample
            nearest_idx = self.tree.nearest(rand_point)
            nearest_point = self.tree[nearest_idx].position
            new_point = self._steer(nearest_point, rand_point)
            if new_point is None:
                counters['degenerate_steps'] += 1
                logger.debug("Iteration %d: sample coincides with node %d, skipping", i, nearest_idx)
                continue

            if (not self.workspace.is_in_domain(new_point)
                    or not self.workspace.segment_free(nearest_point, new_point)):
                counters['blocked_steps'] += 1
                continue

            # Choose best parent within the neighborhood
            radius = self.neighbor_radius(len(self.tree))
            near_idxs = self.tree.neighbors_within_radius(new_point, radius)
            parent_idx, cost = self._choose_parent(new_point, nearest_idx, near_idxs)

            # Add to tree and rewire
            new_idx = self.tree.append(new_point, parent_idx, cost)
            counters['rewires'] += self._rewire(new_idx, near_idxs)

            if self._reached_goal(new_point):
                goal_idx = new_idx
                status = PlanningStatus.FOUND
                break

        raw_path = None
        if goal_idx is not None:
            raw_path = self._goal_path(goal_idx)
            self.path = self.smoother.shortcut(raw_path)

        self.planning_time = time.time() - start_time
        self.result = PlanningResult(
            status=status,
            tree=self.tree,
            goal_index=goal_idx,
            raw_path=raw_path,
            path=self.path,
            iterations=iterations,
            planning_time=self.planning_time,
            counters=counters,
        )

        if status is PlanningStatus.FOUND:
            logger.info("RRT*: goal reached after %d iterations, tree size %d, %d -> %d waypoints",
                        iterations, len(self.tree), len(raw_path), len(self.path))
        else:
            logger.info("RRT*: no path found (%s) after %d iterations, tree size %d",
                        status.value, iterations, len(self.tree))
        return self.result

    def plan(self, start: Point, goal: Point) -> Optional[List[Point]]:
        """
        Build the RRT* tree and return the smoothed path.

        Args:
            start: Starting position (x, y)
            goal: Goal position (x, y)

        Returns:
            List of waypoints if path found, None otherwise
        """
        return self.solve(start, goal).path

    def get_metrics(self) -> Dict[str, Any]:
        """Get RRT* performance metrics."""
        result = self.result
        metrics = {
            'algorithm': 'RRT*',
            'status': result.status.value if result else None,
            'path_length': self.get_path_length(),
            'raw_path_length': compute_path_length(result.raw_path) if result and result.raw_path else 0.0,
            'planning_time': self.planning_time,
            'nodes_explored': result.iterations if result else 0,
            'tree_size': len(self.tree),
            'goal_reached': bool(result and result.success),
            'path_exists': self.path is not None,
            'waypoints': len(self.path) if self.path else 0,
        }
        if result:
            metrics.update(result.counters)
        self.metrics = metrics
        return metrics

    def visualize(self, ax, show_tree: bool = True, show_raw_path: bool = True, **kwargs) -> None:
        """
        Visualize the workspace, RRT* tree and path.

        Args:
            ax: Matplotlib axis
            show_tree: Whether to draw the full tree
            show_raw_path: Whether to draw the unsmoothed tree path
            **kwargs: Additional options
        """
        from ..utils.visualization import draw_workspace, draw_tree, draw_path

        vis = self.config.get('visualization', {}) or {}
        result = self.result

        draw_workspace(
            ax,
            self.workspace,
            start=self.tree[0].position if len(self.tree) else None,
            goal=self.goal,
        )

        if show_tree:
            draw_tree(ax, self.tree,
                      color=vis.get('tree_color', 'orange'),
                      alpha=vis.get('tree_alpha', 0.6))

        if show_raw_path and result and result.raw_path:
            draw_path(ax, result.raw_path,
                      color=vis.get('raw_path_color', 'grey'),
                      label="Tree path", linewidth=1, linestyle='--')

        if self.path:
            draw_path(ax, self.path,
                      color=vis.get('path_color', 'blue'),
                      label="RRT* Path")

        ax.legend(loc='best')
        ax.set_title(f"RRT* Algorithm\n"
                     f"Length: {self.get_path_length():.2f}, "
                     f"Time: {self.planning_time:.3f}s, "
                     f"Nodes: {len(self.tree)}")
