"""
Perfect Maze Generation by Randomized Depth-First Carving

Carves a maze into a MazeGraph so that the open walls form a spanning tree:

1. Fully Connected: a path exists between any two cells
2. No Loops: exactly one path exists between any pair of cells

Mathematical Foundation:
A spanning tree over |V| grid cells has exactly |V| - 1 edges. The iterative
depth-first search below adds one edge each time it reaches an unvisited cell,
and every cell is reached exactly once, which gives both properties.

Generation can run in one call (``generate``) or one step per external tick
(``create_maze`` followed by repeated ``step``); both produce the same maze
for the same random source.

Reference: Jamis Buck, "Mazes for Programmers" (2015)
"""

from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from maze_pursuit.maze.maze_graph import Cell, MazeGraph, Portal
from maze_pursuit.utils.exceptions import InvalidArgumentError
from maze_pursuit.utils.maze_logging import get_logger, log_generation_complete, log_generation_start

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = get_logger(__name__)


class RandomSource(Protocol):
    """Uniform integer generator over [0, stop)."""

    def randrange(self, stop: int) -> int: ...


class GenerationStatus(Enum):
    """Lifecycle of a generation run."""

    IDLE = "idle"
    GENERATING = "generating"
    COMPLETE = "complete"


@dataclass
class GenerationState:
    """
    Backtracking frontier of a single run.

    Attributes:
        frontier: LIFO stack of cells; the top is the cell being extended
        generating: Re-entrancy guard, True while a run is in progress
        steps: Number of steps performed (carves plus backtracks)
        carved: Number of passages opened
    """

    frontier: list[Cell] = field(default_factory=list)
    generating: bool = False
    steps: int = 0
    carved: int = 0

    def clear(self) -> None:
        self.frontier.clear()
        self.generating = False


class MazeGenerator:
    """
    Randomized depth-first maze generator.

    State machine: IDLE -> GENERATING -> COMPLETE, and COMPLETE -> GENERATING
    again on the next ``create_maze``. Calls that would start a run while one
    is active are ignored.

    Example:
        >>> graph = MazeGraph(10, 10)
        >>> _ = MazeGenerator(graph, seed=42).generate()
        >>> graph.count_open_edges()
        99
    """

    def __init__(
        self,
        graph: MazeGraph,
        rng: RandomSource | None = None,
        seed: int | None = None,
        start: tuple[int, int] = (0, 0),
        open_portals: bool = True,
    ):
        """
        Initialize maze generator.

        Args:
            graph: Graph to carve; it is reset at the start of every run
            rng: Random source; defaults to ``random.Random(seed)``
            seed: Seed for the default random source
            start: Cell the depth-first search starts from
            open_portals: Open the graph's entrance and exit after each reset

        Raises:
            InvalidArgumentError: If ``start`` is outside the grid
        """
        self.graph = graph
        self.rng: RandomSource = rng if rng is not None else random.Random(seed)
        self.start = graph.resolve(start, "start")
        self.open_portals = open_portals
        self.state = GenerationState()
        self.status = GenerationStatus.IDLE

    def is_generating(self) -> bool:
        return self.state.generating

    def create_maze(self) -> bool:
        """
        Begin a new generation run.

        Returns:
            True if a run was started, False if one was already in progress
        """
        if self.state.generating:
            logger.debug("Maze generation already in progress, ignoring request")
            return False

        self.graph.reset()
        self.state = GenerationState()

        if self.open_portals:
            self.graph.open_portals()

        self.start.visited = True
        self.state.frontier.append(self.start)
        self.state.generating = True
        self.status = GenerationStatus.GENERATING

        log_generation_start(logger, self.graph.num_x, self.graph.num_y, self.start.index)
        return True

    def step(self) -> bool:
        """
        Perform exactly one carve-and-push or backtrack-pop.

        Returns:
            True once the run is complete. Outside a run nothing happens and
            the return value tells whether a run has completed before.
        """
        if not self.state.generating:
            return self.status is GenerationStatus.COMPLETE

        state = self.state
        current = state.frontier[-1]
        candidates = self.graph.neighbors_unvisited(current)

        if candidates:
            direction, neighbor = candidates[self.rng.randrange(len(candidates))]
            self.graph.remove_wall(current, direction)
            neighbor.visited = True
            state.frontier.append(neighbor)
            state.carved += 1
            logger.debug("Connecting room %s to room %s via %s", current, neighbor, direction.name)
        else:
            state.frontier.pop()
            logger.debug("Backtracking from room %s", current)

        state.steps += 1

        if not state.frontier:
            self._finish()
            return True
        return False

    def _finish(self) -> None:
        log_generation_complete(logger, self.state.steps, self.state.carved, len(self.graph))
        self.state.clear()
        self.status = GenerationStatus.COMPLETE

    def generate(self) -> MazeGraph:
        """
        Run a whole generation in one call.

        Ignored (the graph is returned untouched) while a step-wise run is active.
        """
        if not self.create_maze():
            return self.graph

        while not self.step():
            pass

        return self.graph


def verify_perfect_maze(graph: MazeGraph) -> dict:
    """
    Verify that a maze is perfect (fully connected, no loops).

    A perfect maze must satisfy:
    1. Connectivity: All cells reachable from any cell
    2. Acyclicity: Exactly (n-1) passages for n cells

    Args:
        graph: Maze graph to verify

    Returns:
        Dictionary with verification results including:
        - is_perfect: Overall validity
        - is_connected: Connectivity check
        - is_no_loops: Acyclicity check
        - is_symmetric: Every open wall is open on both sides
        - visited_cells: Number of reachable cells
        - total_cells: Total number of cells
        - passage_count: Number of passages
        - expected_passages: Expected passages for perfect maze
    """
    start = graph.cells[0][0]
    reached = {start}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        for neighbor in graph.neighbors_open(current):
            if neighbor not in reached:
                reached.add(neighbor)
                queue.append(neighbor)

    total_cells = len(graph)
    is_connected = len(reached) == total_cells

    passage_count = graph.count_open_edges()
    expected_passages = total_cells - 1
    # A connected graph with n - 1 edges is a tree
    is_no_loops = passage_count == expected_passages
    is_symmetric = graph.is_symmetric()

    return {
        "is_perfect": is_connected and is_no_loops and is_symmetric,
        "is_connected": is_connected,
        "is_no_loops": is_no_loops,
        "is_symmetric": is_symmetric,
        "visited_cells": len(reached),
        "total_cells": total_cells,
        "passage_count": passage_count,
        "expected_passages": expected_passages,
    }


def generate_maze(
    num_x: int,
    num_y: int,
    seed: int | None = None,
    start: Sequence[int] = (0, 0),
    entrance: Portal | None = None,
    exit: Portal | None = None,  # noqa: A002
) -> MazeGraph:
    """
    High-level function to generate a verified perfect maze.

    Args:
        num_x: Number of cells along x
        num_y: Number of cells along y
        seed: Random seed for reproducibility
        start: Cell the carving starts from
        entrance: Optional boundary wall opened as entrance
        exit: Optional boundary wall opened as exit

    Returns:
        Generated maze graph

    Example:
        >>> graph = generate_maze(20, 20, seed=42)
        >>> graph.count_open_edges()
        399
    """
    graph = MazeGraph(num_x, num_y, entrance=entrance, exit=exit)
    start_xy = tuple(start)
    if len(start_xy) != 2:
        raise InvalidArgumentError("start", start, component="generate_maze", reason="expected an (x, y) pair")

    MazeGenerator(graph, seed=seed, start=start_xy).generate()

    verification = verify_perfect_maze(graph)
    if not verification["is_perfect"]:
        raise RuntimeError(f"Generated maze is not perfect: {verification}")

    return graph
