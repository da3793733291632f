"""
Array and text views of a maze.

The array layout is the classic ``(2 * num_y + 1, 2 * num_x + 1)`` raster:
cell (x, y) sits at pixel ``(2 * (num_y - 1 - y) + 1, 2 * x + 1)`` so that the
highest y is drawn on the first row, and each wall between two cells is the
pixel between their pixels.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from maze_pursuit.maze.maze_graph import CARDINAL_DIRECTIONS

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.typing import NDArray

    from maze_pursuit.maze.maze_graph import Cell, MazeGraph

WALL = 1
PASSAGE = 0


def cell_to_pixel(graph: MazeGraph, cell: Cell) -> tuple[int, int]:
    """Array (row, col) of the pixel representing ``cell``."""
    return 2 * (graph.num_y - 1 - cell.y) + 1, 2 * cell.x + 1


def to_numpy_array(graph: MazeGraph) -> NDArray[np.int32]:
    """
    Convert maze to numpy array representation.

    Args:
        graph: Maze graph

    Returns:
        Numpy array where 1 = wall, 0 = passage; opened entrance and exit
        walls show up as gaps in the outer border
    """
    maze = np.ones((2 * graph.num_y + 1, 2 * graph.num_x + 1), dtype=np.int32)

    for cell in graph:
        row, col = cell_to_pixel(graph, cell)
        maze[row, col] = PASSAGE

        for direction in CARDINAL_DIRECTIONS:
            if cell.walls[direction]:
                continue
            dx, dy = direction.offset
            # Rows grow downwards while y grows upwards
            maze[row - dy, col + dx] = PASSAGE

    return maze


def render_ascii(
    graph: MazeGraph,
    path: Sequence[Cell] | None = None,
    wall: str = "#",
    passage: str = " ",
    marker: str = "*",
) -> str:
    """
    Render the maze as text, optionally marking a path.

    The first and last cells of ``path`` are drawn as ``S`` and ``G``.
    """
    maze = to_numpy_array(graph)
    chars = np.where(maze == WALL, wall, passage).astype(object)

    if path:
        for cell in path:
            row, col = cell_to_pixel(graph, cell)
            chars[row, col] = marker
        for previous, current in zip(path, path[1:]):
            (r0, c0), (r1, c1) = cell_to_pixel(graph, previous), cell_to_pixel(graph, current)
            chars[(r0 + r1) // 2, (c0 + c1) // 2] = marker

        start_row, start_col = cell_to_pixel(graph, path[0])
        goal_row, goal_col = cell_to_pixel(graph, path[-1])
        chars[start_row, start_col] = "S"
        chars[goal_row, goal_col] = "G"

    return "\n".join("".join(row) for row in chars)
