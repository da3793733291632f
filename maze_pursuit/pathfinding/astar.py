"""
A* shortest paths over the open walls of a maze.

Every passage costs 1 and the heuristic is the Manhattan distance between
grid coordinates, which never overestimates on a 4-connected unit-cost grid,
so the first time the goal leaves the open set its path is optimal.

The pathfinder keeps no state between calls: all search bookkeeping lives in
a PathQuery created for one ``find_path`` invocation, so one instance can be
shared by any number of callers once the maze has stopped changing.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from maze_pursuit.utils.exceptions import validate_cell_argument
from maze_pursuit.utils.maze_logging import get_logger, log_path_result

if TYPE_CHECKING:
    from collections.abc import Sequence

    from maze_pursuit.maze.maze_graph import Cell, MazeGraph

logger = get_logger(__name__)


def manhattan_distance(a: Cell, b: Cell) -> int:
    """Heuristic for A*: |dx| + |dy|."""
    return abs(a.x - b.x) + abs(a.y - b.y)


def reconstruct_path(came_from: dict[Cell, Cell], current: Cell) -> list[Cell]:
    """Walk predecessors back from ``current`` and return the route in forward order."""
    total_path = [current]
    while current in came_from:
        current = came_from[current]
        total_path.append(current)
    total_path.reverse()
    return total_path


def path_length(path: Sequence[Cell] | None) -> int | None:
    """Number of passages traversed by ``path`` (None for a missing path)."""
    if path is None:
        return None
    return max(len(path) - 1, 0)


@dataclass
class PathQuery:
    """
    Bookkeeping for a single A* search.

    Attributes:
        open_heap: Frontier entries (f_score, insertion order, cell)
        closed: Cells whose shortest distance is final
        came_from: Predecessor of each reached cell
        g_score: Best known cost from the start
        f_score: g_score plus heuristic
        expansions: Number of cells taken off the frontier
    """

    open_heap: list[tuple[int, int, Cell]] = field(default_factory=list)
    closed: set[Cell] = field(default_factory=set)
    came_from: dict[Cell, Cell] = field(default_factory=dict)
    g_score: dict[Cell, int] = field(default_factory=dict)
    f_score: dict[Cell, int] = field(default_factory=dict)
    expansions: int = 0
    _counter: itertools.count = field(default_factory=itertools.count, repr=False)

    def push(self, cell: Cell, g: int, f: int) -> None:
        self.g_score[cell] = g
        self.f_score[cell] = f
        # Equal f-scores leave the heap in insertion order
        heapq.heappush(self.open_heap, (f, next(self._counter), cell))

    def pop(self) -> Cell | None:
        """Lowest-f open cell, skipping entries superseded by a later improvement."""
        while self.open_heap:
            f, _, cell = heapq.heappop(self.open_heap)
            if cell in self.closed or f != self.f_score[cell]:
                continue
            return cell
        return None


class PathFinder:
    """
    A* search over a MazeGraph's open-edge adjacency.

    Example:
        >>> graph = generate_maze(8, 8, seed=3)
        >>> path = PathFinder(graph).find_path((0, 0), (7, 7))
        >>> path[0].index, path[-1].index
        ((0, 0), (7, 7))
    """

    def __init__(self, graph: MazeGraph):
        self.graph = graph

    def find_path(
        self,
        start: Cell | tuple[int, int] | None,
        goal: Cell | tuple[int, int] | None,
    ) -> list[Cell] | None:
        """
        Find the shortest route from ``start`` to ``goal``.

        Args:
            start: Start cell or (x, y)
            goal: Goal cell or (x, y)

        Returns:
            Cells from start to goal inclusive, or None when no route exists

        Raises:
            InvalidArgumentError: If either endpoint is None or not in the maze
        """
        validate_cell_argument(start, "start", component="PathFinder")
        validate_cell_argument(goal, "goal", component="PathFinder")
        start = self.graph.resolve(start, "start")
        goal = self.graph.resolve(goal, "goal")

        query = PathQuery()
        query.push(start, 0, manhattan_distance(start, goal))

        while True:
            current = query.pop()
            if current is None:
                break

            query.expansions += 1
            logger.debug("Evaluating room %s", current)

            if current is goal:
                path = reconstruct_path(query.came_from, current)
                log_path_result(logger, start, goal, path, query.expansions)
                return path

            query.closed.add(current)

            for neighbor in self.graph.neighbors_open(current):
                if neighbor in query.closed:
                    continue

                tentative_g = query.g_score[current] + 1
                if neighbor in query.g_score and tentative_g >= query.g_score[neighbor]:
                    continue

                query.came_from[neighbor] = current
                query.push(neighbor, tentative_g, tentative_g + manhattan_distance(neighbor, goal))

        log_path_result(logger, start, goal, None, query.expansions)
        return None

    def distance(self, start: Cell | tuple[int, int], goal: Cell | tuple[int, int]) -> int | None:
        """Number of passages on the shortest route, or None if unreachable."""
        return path_length(self.find_path(start, goal))
