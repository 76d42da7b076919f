"""
Main entry point for the grid RRT* planner.

This CLI loads a workspace and planner parameters from YAML configuration
files, runs RRT*, reports metrics and optionally plots or saves the result.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Tuple

import yaml

from .core.environment import Workspace
from .core.exceptions import PlannerError
from .algorithms.rrt_star import RRTStarPlanner
from .utils.config_loader import (load_environment_config, load_algorithm_config,
                                  parse_cell, parse_grid_config)


ALGORITHM_MAP = {
    'rrt_star': RRTStarPlanner,
}


def create_workspace_from_config(env_config: dict) -> Tuple[Workspace, Tuple[float, float], Tuple[float, float]]:
    """
    Create the Workspace and start/goal points from an environment section.

    Start and goal are given as cells and placed at the cell centers.

    Args:
        env_config: Environment configuration from YAML

    Returns:
        (workspace, start point, goal point)

    Raises:
        ValueError: If a required key is missing or malformed
    """
    rows, cols, cell_size, obstacles = parse_grid_config(env_config)
    workspace = Workspace(rows, cols, cell_size, obstacles,
                          segment_samples=int(env_config.get('segment_samples', 10)))

    for key in ('start_cell', 'goal_cell'):
        if key not in env_config:
            raise ValueError(f"Missing required environment key: {key}")

    start = workspace.cell_center(parse_cell(env_config['start_cell'], 'start_cell'))
    goal = workspace.cell_center(parse_cell(env_config['goal_cell'], 'goal_cell'))
    return workspace, start, goal


def run_planner(algorithm_name: str = 'rrt_star',
                config_dir: str = 'configs',
                visualize: bool = True,
                save: bool = False,
                seed=None) -> int:
    """
    Run a path planning algorithm.

    Args:
        algorithm_name: Name of algorithm ('rrt_star')
        config_dir: Directory containing configuration files
        visualize: Whether to show visualization
        save: Whether to save output files
        seed: Optional random seed overriding the config

    Returns:
        Process exit code: 0 when a path was found, 1 otherwise
    """
    print(f"\n{'='*60}")
    print(f"Running {algorithm_name.upper()} Path Planning Algorithm")
    print(f"{'='*60}\n")

    print("Loading configurations...")
    env_config = load_environment_config(config_dir)
    alg_config = load_algorithm_config(algorithm_name, config_dir)
    if seed is not None:
        alg_config.setdefault('parameters', {})['random_seed'] = seed

    workspace, start, goal = create_workspace_from_config(env_config)
    print(f"Workspace: {workspace.rows}x{workspace.cols} cells of {workspace.cell_size:g} "
          f"with {len(workspace.obstacles)} obstacles")
    print(f"Start: {start}")
    print(f"Goal: {goal}")

    PlannerClass = ALGORITHM_MAP[algorithm_name]
    planner = PlannerClass(workspace, alg_config)
    print(f"Planner: {planner}")

    print("\nPlanning path...")
    path = planner.plan(start, goal)

    print("\n" + "="*60)
    print("Results:")
    print("="*60)
    for key, value in planner.get_metrics().items():
        print(f"  {key}: {value}")
    print("="*60 + "\n")

    if path is None:
        print("No path found.")
    else:
        print(f"Path found with {len(path)} waypoints")

    output_config = alg_config.get('output', {}) or {}
    save_path = Path(output_config.get('save_path', f'outputs/{algorithm_name}/'))

    if save and path is not None:
        save_path.mkdir(parents=True, exist_ok=True)
        path_file = save_path / output_config.get('path_filename', 'path.json')
        planner.save_path(str(path_file))
        print(f"Path data saved to: {path_file}")

    if visualize or save:
        import matplotlib
        if not visualize:
            matplotlib.use('Agg')
        import matplotlib.pyplot as plt
        from .utils.visualization import save_figure

        fig, ax = plt.subplots(figsize=(8, 8))
        planner.visualize(ax)
        plt.tight_layout()

        if save:
            save_path.mkdir(parents=True, exist_ok=True)
            plot_file = save_path / output_config.get('plot_filename', 'path_plot.png')
            save_figure(fig, str(plot_file))
            print(f"Plot saved to: {plot_file}")

        if visualize:
            plt.show()
        plt.close(fig)

    return 0 if path is not None else 1


def main(argv=None):
    """Main entry point with command-line argument parsing."""
    parser = argparse.ArgumentParser(
        description='Grid RRT* Path Planner',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run RRT* with the default configs
  grid-rrt

  # Run headless with a fixed seed and save the results
  grid-rrt --no-viz --save --seed 42

  # Use custom config directory
  grid-rrt --config-dir ../my_configs
        """
    )

    parser.add_argument(
        '--algorithm', '-a',
        type=str,
        choices=list(ALGORITHM_MAP.keys()),
        default='rrt_star',
        help='Path planning algorithm to use (default: rrt_star)'
    )

    parser.add_argument(
        '--config-dir', '-c',
        type=str,
        default='configs',
        help='Directory containing YAML configuration files (default: configs)'
    )

    parser.add_argument(
        '--save', '-s',
        action='store_true',
        help='Save output files (plot, path)'
    )

    parser.add_argument(
        '--no-viz',
        action='store_true',
        help='Disable visualization'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed overriding the config'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    try:
        return run_planner(
            algorithm_name=args.algorithm,
            config_dir=args.config_dir,
            visualize=not args.no_viz,
            save=args.save,
            seed=args.seed,
        )
    except (FileNotFoundError, ValueError, PlannerError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == '__main__':
    sys.exit(main())
