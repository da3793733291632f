"""
Maze construction: cell/wall graph, randomized depth-first generation,
world placement and array export.

Examples
--------
>>> from maze_pursuit.maze import MazeGraph, MazeGenerator
>>> graph = MazeGraph(10, 10)
>>> _ = MazeGenerator(graph, seed=7).generate()
>>> graph.count_open_edges()
99
"""

from .export import render_ascii, to_numpy_array
from .maze_generator import (
    GenerationState,
    GenerationStatus,
    MazeGenerator,
    RandomSource,
    generate_maze,
    verify_perfect_maze,
)
from .maze_graph import (
    CARDINAL_DIRECTIONS,
    Cell,
    Direction,
    MazeGraph,
    Portal,
    WallListener,
    opposite_direction,
)
from .placement import GridPlacement, place_actors

__all__ = [
    # Graph
    "CARDINAL_DIRECTIONS",
    "Cell",
    "Direction",
    "MazeGraph",
    "Portal",
    "WallListener",
    "opposite_direction",
    # Generation
    "GenerationState",
    "GenerationStatus",
    "MazeGenerator",
    "RandomSource",
    "generate_maze",
    "verify_perfect_maze",
    # Placement and export
    "GridPlacement",
    "place_actors",
    "render_ascii",
    "to_numpy_array",
]
