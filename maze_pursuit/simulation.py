"""
Tick-driven pursuit session.

A session owns one maze and everything that reads it. Each ``tick(dt)``
either advances generation by a few steps or, once the maze is complete,
refreshes the pursuer's route and moves it along. The host (a game loop, a
test, the CLI) decides how often to tick; nothing here sleeps or spawns threads.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from maze_pursuit.config import SimulationConfig
from maze_pursuit.maze.maze_generator import GenerationStatus, MazeGenerator
from maze_pursuit.maze.maze_graph import CARDINAL_DIRECTIONS, Cell, Direction, MazeGraph
from maze_pursuit.maze.placement import GridPlacement, place_actors
from maze_pursuit.pathfinding.astar import PathFinder
from maze_pursuit.pathfinding.pursuer import PursuerController
from maze_pursuit.utils.exceptions import InvalidDimensionError
from maze_pursuit.utils.maze_logging import get_logger

if TYPE_CHECKING:
    from maze_pursuit.maze.maze_generator import RandomSource

logger = get_logger(__name__)

TargetPolicy = Callable[["PursuitSession"], "Direction | None"]


@dataclass
class SessionSummary:
    """Outcome of ``PursuitSession.run``."""

    ticks: int
    caught: bool
    generation_steps: int
    pursuer_cell: tuple[int, int] | None
    target_cell: tuple[int, int] | None
    path_refreshes: int
    failed_refreshes: int


def random_walk_policy(session: PursuitSession) -> Direction | None:
    """Target policy that steps through a random open wall each tick."""
    target = session.target_cell
    if target is None:
        return None
    options = [d for d in CARDINAL_DIRECTIONS if not target.walls[d] and session.graph.neighbor(target, d) is not None]
    if not options:
        return None
    return options[session.rng.randrange(len(options))]


class PursuitSession:
    """
    Generation-then-pursuit loop over a single maze.

    All collaborators are built here from the configuration and handed to each
    other directly.
    """

    def __init__(self, config: SimulationConfig | None = None, rng: RandomSource | None = None):
        self.config = config or SimulationConfig()
        maze_cfg = self.config.maze

        self.rng: RandomSource = rng if rng is not None else random.Random(self.config.generation.seed)

        self.graph = MazeGraph(
            maze_cfg.num_x,
            maze_cfg.num_y,
            entrance=maze_cfg.entrance.to_portal() if maze_cfg.entrance else None,
            exit=maze_cfg.exit.to_portal() if maze_cfg.exit else None,
        )
        if len(self.graph) - 1 < 2:
            raise InvalidDimensionError(
                maze_cfg.num_x,
                maze_cfg.num_y,
                component="PursuitSession",
                reason="not enough cells to place both the pursuer and the target",
            )
        self.generator = MazeGenerator(
            self.graph,
            rng=self.rng,
            start=maze_cfg.start,
            open_portals=self.config.generation.open_portals,
        )
        self.placement = GridPlacement(maze_cfg.cell_width, maze_cfg.cell_height)
        self.pathfinder = PathFinder(self.graph)
        self.pursuer = PursuerController(
            self.pathfinder,
            placement=self.placement,
            refresh_interval=self.config.pursuit.refresh_interval,
        )

        self.pursuer_cell: Cell | None = None
        self.target_cell: Cell | None = None
        self.caught = False
        self.ticks = 0
        self._move_elapsed = 0.0

    @property
    def status(self) -> GenerationStatus:
        return self.generator.status

    def is_generating(self) -> bool:
        return self.generator.is_generating()

    def start(self) -> bool:
        """
        Start (or restart) maze generation.

        Returns:
            False if a generation run is already in progress
        """
        if not self.generator.create_maze():
            return False

        self.pursuer.clear()
        self.pursuer_cell = None
        self.target_cell = None
        self.caught = False
        self._move_elapsed = 0.0
        return True

    def tick(self, dt: float) -> None:
        """Advance the session by ``dt`` seconds of simulated time."""
        self.ticks += 1

        if self.generator.is_generating():
            for _ in range(self.config.generation.steps_per_tick):
                if self.generator.step():
                    break
            return

        if self.generator.status is not GenerationStatus.COMPLETE or self.caught:
            return

        if self.pursuer_cell is None or self.target_cell is None:
            self.pursuer_cell, self.target_cell = place_actors(self.graph, self.rng, exclude=(self.config.maze.start,))

        self.pursuer.update(dt, self.pursuer_cell, self.target_cell)
        self._move_pursuer(dt)
        self._check_caught()

    def _move_pursuer(self, dt: float) -> None:
        self._move_elapsed += dt
        while self._move_elapsed >= self.config.pursuit.move_interval:
            self._move_elapsed -= self.config.pursuit.move_interval
            waypoint = self.pursuer.current_waypoint()
            if waypoint is None:
                self._move_elapsed = 0.0
                return
            self.pursuer_cell = waypoint
            self.pursuer.advance_waypoint()
            if self._check_caught():
                return

    def _check_caught(self) -> bool:
        if not self.caught and self.pursuer_cell is not None and self.pursuer_cell is self.target_cell:
            self.caught = True
            logger.info(f"Target caught by the pursuer at room {self.pursuer_cell}")
        return self.caught

    def move_target(self, direction: Direction) -> bool:
        """
        Move the target one cell through an open wall.

        Returns:
            False if the wall is closed, leads outside the grid, or the target
            has not been placed yet
        """
        if self.target_cell is None or self.caught:
            return False

        direction = Direction.coerce(direction, "PursuitSession")
        if direction is Direction.NONE or self.target_cell.walls[direction]:
            return False

        neighbor = self.graph.neighbor(self.target_cell, direction)
        if neighbor is None:
            return False

        self.target_cell = neighbor
        self._check_caught()
        return True

    def run(
        self,
        ticks: int,
        dt: float = 0.05,
        target_policy: TargetPolicy | None = None,
    ) -> SessionSummary:
        """
        Start the session and tick it ``ticks`` times or until the target is caught.

        Args:
            ticks: Maximum number of ticks
            dt: Simulated seconds per tick
            target_policy: Chooses the target's move after each pursuit tick
        """
        self.start()

        for _ in range(ticks):
            was_generating = self.generator.is_generating()
            self.tick(dt)

            if self.caught:
                break
            if not was_generating and target_policy is not None:
                direction = target_policy(self)
                if direction is not None:
                    self.move_target(direction)
                if self.caught:
                    break

        return SessionSummary(
            ticks=self.ticks,
            caught=self.caught,
            generation_steps=self.generator.state.steps,
            pursuer_cell=self.pursuer_cell.index if self.pursuer_cell else None,
            target_cell=self.target_cell.index if self.target_cell else None,
            path_refreshes=self.pursuer.refresh_count,
            failed_refreshes=self.pursuer.failed_refreshes,
        )
