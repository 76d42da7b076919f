"""tests/test_config_and_cli.py - YAML configuration, CLI and plotting"""
from pathlib import Path

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import pytest
import yaml

from grid_rrt.main import create_workspace_from_config, main
from grid_rrt.utils.config_loader import (load_yaml_config, load_environment_config,
                                          load_algorithm_config, merge_configs,
                                          parse_grid_config)

CONFIG_DIR = Path(__file__).resolve().parent.parent / 'configs'


@pytest.fixture
def small_config_dir(tmp_path):
    env = {'environment': {
        'grid_size': {'rows': 5, 'cols': 5},
        'cell_size': 100,
        'start_cell': [0, 0],
        'goal_cell': [4, 4],
        'obstacles': [[2, 1], [2, 2], [2, 3]],
    }}
    alg = {'algorithm': {'parameters': {'random_seed': 4, 'max_iterations': 5000}}}
    (tmp_path / 'environment.yaml').write_text(yaml.safe_dump(env))
    (tmp_path / 'rrt_star.yaml').write_text(yaml.safe_dump(alg))
    return tmp_path


class TestConfigLoader:

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_yaml_config(str(tmp_path / 'nope.yaml'))

    def test_empty_file_is_empty_dict(self, tmp_path):
        f = tmp_path / 'empty.yaml'
        f.write_text('')
        assert load_yaml_config(str(f)) == {}

    def test_shipped_configs_load(self):
        env = load_environment_config(str(CONFIG_DIR))
        alg = load_algorithm_config('rrt_star', str(CONFIG_DIR))
        workspace, start, goal = create_workspace_from_config(env)
        assert workspace.is_free(start)
        assert workspace.is_free(goal)
        assert alg['parameters']['max_iterations'] == 10000

    def test_parse_grid_canvas_size(self):
        rows, cols, cell_size, obstacles = parse_grid_config(
            {'grid_size': 7, 'canvas_size': 500, 'obstacles': [[1, 2]]})
        assert (rows, cols, cell_size) == (7, 7, 71.0)
        assert obstacles == [(1, 2)]

    @pytest.mark.parametrize("env", [
        {},
        {'grid_size': 5},
        {'grid_size': 5, 'cell_size': 10, 'obstacles': [[1]]},
    ])
    def test_parse_grid_invalid(self, env):
        with pytest.raises(ValueError):
            parse_grid_config(env)

    def test_missing_start_raises(self):
        with pytest.raises(ValueError):
            create_workspace_from_config({'grid_size': 5, 'cell_size': 10, 'goal_cell': [1, 1]})

    def test_merge_configs_nested(self):
        merged = merge_configs({'parameters': {'a': 1, 'b': 2}, 'x': 1},
                               {'parameters': {'b': 3}})
        assert merged == {'parameters': {'a': 1, 'b': 3}, 'x': 1}


class TestCli:

    def test_headless_run_succeeds(self, small_config_dir, capsys):
        code = main(['--no-viz', '--config-dir', str(small_config_dir)])
        assert code == 0
        assert 'Path found' in capsys.readouterr().out

    def test_save_writes_outputs(self, small_config_dir, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        code = main(['--no-viz', '--save', '--seed', '3', '--config-dir', str(small_config_dir)])
        assert code == 0
        assert (tmp_path / 'outputs' / 'rrt_star' / 'path.json').exists()
        assert (tmp_path / 'outputs' / 'rrt_star' / 'path_plot.png').exists()

    def test_missing_config_reports_error(self, tmp_path, capsys):
        assert main(['--no-viz', '--config-dir', str(tmp_path)]) == 2
        assert 'Error' in capsys.readouterr().err

    def test_malformed_yaml_reports_error(self, small_config_dir, capsys):
        (small_config_dir / 'environment.yaml').write_text('environment: [unclosed\n')
        assert main(['--no-viz', '--config-dir', str(small_config_dir)]) == 2
        assert 'Error' in capsys.readouterr().err


class TestVisualization:

    def test_visualize_found_path(self, maze_workspace, make_planner):
        planner = make_planner(maze_workspace, max_iterations=3000)
        planner.plan(maze_workspace.cell_center((0, 0)), maze_workspace.cell_center((9, 9)))
        fig, ax = plt.subplots()
        planner.visualize(ax)
        assert ax.get_title().startswith("RRT*")
        assert len(ax.collections) >= 1
        plt.close(fig)
