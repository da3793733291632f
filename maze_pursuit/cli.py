"""
Command-line interface for maze_pursuit.

Provides tools for generating mazes, querying shortest paths, running
pursuit simulations and validating configuration files.
"""

import sys

import click
import yaml

import numpy as np

from maze_pursuit import __version__


def _apply_verbosity(verbose: bool) -> None:
    from maze_pursuit.utils.maze_logging import configure_logging

    configure_logging(level="DEBUG" if verbose else "WARNING", use_colors=True)


@click.group()
@click.version_option(version=__version__, prog_name="maze-pursuit")
def main():
    """
    maze-pursuit: perfect maze generation and A* pursuit.

    Carves spanning-tree mazes by randomized depth-first search and chases a
    moving target through them with A* shortest paths.
    """


@main.command()
@click.option("--width", "-x", type=click.IntRange(min=1), default=10, help="Number of cells along x")
@click.option("--height", "-y", type=click.IntRange(min=1), default=10, help="Number of cells along y")
@click.option("--seed", "-s", type=int, default=None, help="Random seed for reproducibility")
@click.option("--ascii/--no-ascii", "show_ascii", default=True, help="Print the maze as text")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Save the wall array (.npy)")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def generate(width, height, seed, show_ascii, output, verbose):
    """
    Generate a perfect maze.

    Examples:
        maze-pursuit generate --width 20 --height 10 --seed 42
        maze-pursuit generate -x 30 -y 30 --no-ascii -o maze.npy
    """
    from maze_pursuit.maze import generate_maze, render_ascii, to_numpy_array, verify_perfect_maze

    _apply_verbosity(verbose)

    graph = generate_maze(width, height, seed=seed)
    verification = verify_perfect_maze(graph)

    if show_ascii:
        click.echo(render_ascii(graph))

    click.echo(
        f"Maze {width}x{height}: {verification['passage_count']} passages, "
        f"perfect={verification['is_perfect']}"
    )

    if output:
        np.save(output, to_numpy_array(graph))
        click.echo(f"Wall array saved to: {output}")


@main.command()
@click.option("--width", "-x", type=click.IntRange(min=1), default=10, help="Number of cells along x")
@click.option("--height", "-y", type=click.IntRange(min=1), default=10, help="Number of cells along y")
@click.option("--seed", "-s", type=int, default=None, help="Random seed for reproducibility")
@click.option("--start", nargs=2, type=int, default=(0, 0), help="Start cell X Y")
@click.option("--goal", nargs=2, type=int, default=None, help="Goal cell X Y (default: opposite corner)")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def path(width, height, seed, start, goal, verbose):
    """
    Generate a maze and print the shortest path between two cells.

    Examples:
        maze-pursuit path -x 12 -y 12 --seed 1 --start 0 0 --goal 11 11
    """
    from maze_pursuit.maze import generate_maze, render_ascii
    from maze_pursuit.pathfinding import PathFinder
    from maze_pursuit.utils.exceptions import MazeError

    _apply_verbosity(verbose)

    graph = generate_maze(width, height, seed=seed)
    if goal is None:
        goal = (width - 1, height - 1)

    try:
        route = PathFinder(graph).find_path(tuple(start), tuple(goal))
    except MazeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if route is None:
        click.echo(f"No path from {tuple(start)} to {tuple(goal)}")
        sys.exit(2)

    click.echo(render_ascii(graph, path=route))
    click.echo(f"Path length: {len(route) - 1} steps")
    click.echo(" -> ".join(str(cell) for cell in route))


@main.command()
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), default=None)
@click.option("--ticks", "-t", type=click.IntRange(min=1), default=2000, help="Maximum number of ticks")
@click.option("--dt", type=click.FloatRange(min=0, min_open=True), default=0.05, help="Seconds per tick")
@click.option("--seed", "-s", type=int, default=None, help="Override the configured seed")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def simulate(config_path, ticks, dt, seed, verbose):
    """
    Run a pursuit session with a randomly wandering target.

    Examples:
        maze-pursuit simulate --seed 3
        maze-pursuit simulate --config chase.yaml --ticks 5000
    """
    from maze_pursuit.config import SimulationConfig, load_simulation_config
    from maze_pursuit.simulation import PursuitSession, random_walk_policy
    from maze_pursuit.utils.exceptions import MazeError

    try:
        config = load_simulation_config(config_path) if config_path else SimulationConfig()
        if seed is not None:
            config = config.model_copy(update={"generation": config.generation.model_copy(update={"seed": seed})})

        if verbose:
            _apply_verbosity(True)
        else:
            config.logging.apply()

        session = PursuitSession(config)
        summary = session.run(ticks, dt=dt, target_policy=random_walk_policy)
    except (MazeError, ValueError, yaml.YAMLError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"\n{'=' * 50}")
    click.echo("Pursuit Summary")
    click.echo(f"{'=' * 50}")
    click.echo(f"Maze: {config.maze.num_x}x{config.maze.num_y}")
    click.echo(f"Ticks: {summary.ticks}")
    click.echo(f"Generation steps: {summary.generation_steps}")
    click.echo(f"Path refreshes: {summary.path_refreshes} ({summary.failed_refreshes} without a route)")
    click.echo(f"Pursuer: {summary.pursuer_cell}  Target: {summary.target_cell}")
    click.echo(f"Caught: {'yes' if summary.caught else 'no'}")


@main.command("validate-config")
@click.argument("config_path", type=click.Path(dir_okay=False))
def validate_config(config_path):
    """Check a YAML simulation configuration."""
    from maze_pursuit.config import validate_yaml_config

    is_valid, message = validate_yaml_config(config_path)
    click.echo(message)
    if not is_valid:
        sys.exit(1)


if __name__ == "__main__":
    main()
