"""
YAML configuration file loader for the grid RRT* planner.

This module provides utilities to load and validate YAML configuration files
for workspace setup and planner parameters.
"""

import yaml
from typing import Dict, Any, List, Tuple
from pathlib import Path


def load_yaml_config(filepath: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filepath: Path to YAML file

    Returns:
        Dictionary containing configuration parameters

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If file is not valid YAML

    Example:
        >>> config = load_yaml_config('configs/environment.yaml')
        >>> print(config['environment']['grid_size'])
        {'rows': 5, 'cols': 5}
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Config file not found: {filepath}")

    with open(filepath, 'r') as f:
        try:
            config = yaml.safe_load(f)
            return config if config is not None else {}
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error parsing YAML file {filepath}: {e}")


def load_environment_config(config_dir: str = 'configs') -> Dict[str, Any]:
    """
    Load workspace configuration from YAML file.

    Args:
        config_dir: Directory containing config files (default: 'configs')

    Returns:
        Dictionary with workspace parameters:
        - grid_size: {rows, cols}
        - cell_size or canvas_size
        - obstacles: List of [row, col]
        - start_cell: [row, col]
        - goal_cell: [row, col]

    Example:
        >>> env_config = load_environment_config()
        >>> rows = env_config['grid_size']['rows']
    """
    config_path = Path(config_dir) / 'environment.yaml'
    config = load_yaml_config(str(config_path))
    return config.get('environment', {})


def load_algorithm_config(algorithm_name: str, config_dir: str = 'configs') -> Dict[str, Any]:
    """
    Load algorithm-specific configuration from YAML file.

    Args:
        algorithm_name: Name of algorithm ('rrt_star')
        config_dir: Directory containing config files (default: 'configs')

    Returns:
        Dictionary with 'parameters', 'visualization' and 'output' sections

    Raises:
        FileNotFoundError: If algorithm config file doesn't exist

    Example:
        >>> rrt_config = load_algorithm_config('rrt_star')
        >>> max_iter = rrt_config['parameters']['max_iterations']
    """
    config_path = Path(config_dir) / f'{algorithm_name}.yaml'
    config = load_yaml_config(str(config_path))
    return config.get('algorithm', {})


def parse_cell(value: Any, name: str) -> Tuple[int, int]:
    """
    Parse a [row, col] entry from a config file.

    Raises:
        ValueError: If value is not a pair of integers
    """
    try:
        row, col = value
        return (int(row), int(col))
    except (TypeError, ValueError):
        raise ValueError(f"'{name}' must be a [row, col] pair, got {value!r}")


def parse_grid_config(env_config: Dict[str, Any]) -> Tuple[int, int, float, List[Tuple[int, int]]]:
    """
    Extract grid geometry and obstacles from an environment section.

    Either cell_size is given directly, or canvas_size is given and the cell
    size is canvas_size // cols of a square grid.

    Args:
        env_config: Environment configuration from YAML

    Returns:
        (rows, cols, cell_size, obstacles)

    Raises:
        ValueError: If a required key is missing or malformed
    """
    if 'grid_size' not in env_config:
        raise ValueError("Missing required environment key: grid_size")

    grid = env_config['grid_size']
    if isinstance(grid, dict):
        rows, cols = int(grid['rows']), int(grid['cols'])
    else:
        rows = cols = int(grid)

    if 'cell_size' in env_config:
        cell_size = float(env_config['cell_size'])
    elif 'canvas_size' in env_config:
        cell_size = float(int(env_config['canvas_size']) // max(rows, cols))
    else:
        raise ValueError("Environment config needs either cell_size or canvas_size")

    obstacles = [parse_cell(cell, 'obstacles') for cell in env_config.get('obstacles') or []]
    return rows, cols, cell_size, obstacles


def merge_configs(*configs: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge multiple configuration dictionaries.

    Later dictionaries override earlier ones for conflicting keys. Nested
    dictionaries are merged recursively.

    Args:
        *configs: Variable number of configuration dictionaries

    Returns:
        Merged configuration dictionary

    Example:
        >>> base_config = {'parameters': {'a': 1, 'b': 2}}
        >>> override_config = {'parameters': {'b': 3}}
        >>> merge_configs(base_config, override_config)
        {'parameters': {'a': 1, 'b': 3}}
    """
    merged: Dict[str, Any] = {}
    for config in configs:
        for key, value in config.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = merge_configs(merged[key], value)
            else:
                merged[key] = value
    return merged
