"""
Pursuer controller: keeps a route from the pursuer to a moving target.

The route is recomputed every ``refresh_interval`` seconds of simulated time.
A successful query replaces the current route (the most recent result wins);
a query that finds nothing leaves the previous route in place, so the pursuer
keeps moving or stands still until the next refresh.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from maze_pursuit.utils.maze_logging import get_logger

if TYPE_CHECKING:
    from maze_pursuit.maze.maze_graph import Cell
    from maze_pursuit.maze.placement import GridPlacement
    from maze_pursuit.pathfinding.astar import PathFinder

logger = get_logger(__name__)

PathListener = Callable[[list["Cell"]], None]


class PursuerController:
    """
    Turns periodic path queries into a waypoint sequence for the pursuer.

    Waypoint 0 is the pursuer's own cell, so following a fresh route starts
    at waypoint 1.
    """

    def __init__(
        self,
        pathfinder: PathFinder,
        placement: GridPlacement | None = None,
        refresh_interval: float = 0.5,
    ):
        if refresh_interval <= 0:
            raise ValueError(f"refresh_interval must be positive, got {refresh_interval}")

        self.pathfinder = pathfinder
        self.placement = placement
        self.refresh_interval = refresh_interval

        self.current_path: list[Cell] = []
        self.target_waypoint = 0
        self.refresh_count = 0
        self.failed_refreshes = 0
        self._elapsed = 0.0
        self._refreshed_once = False
        self._path_listeners: list[PathListener] = []

    def add_path_listener(self, listener: PathListener) -> None:
        """Register a callback receiving every newly computed route."""
        self._path_listeners.append(listener)

    def update(self, dt: float, pursuer_cell: Cell | None, target_cell: Cell | None) -> bool:
        """
        Advance the refresh timer and recompute the route when it elapses.

        The first call always refreshes.

        Returns:
            True if a new route was installed during this call
        """
        self._elapsed += dt
        if self._refreshed_once and self._elapsed < self.refresh_interval:
            return False

        self._elapsed = 0.0
        self._refreshed_once = True
        return self.refresh(pursuer_cell, target_cell)

    def refresh(self, pursuer_cell: Cell | None, target_cell: Cell | None) -> bool:
        """
        Recompute the route immediately.

        Returns:
            True if a route was found and installed
        """
        if pursuer_cell is None or target_cell is None:
            logger.warning("Pursuer room or target room is unknown, keeping current path")
            return False

        path = self.pathfinder.find_path(pursuer_cell, target_cell)
        if path is None:
            self.failed_refreshes += 1
            logger.warning(f"No path found for the pursuer from {pursuer_cell} to {target_cell}")
            return False

        self.current_path = path
        self.target_waypoint = 1
        self.refresh_count += 1
        logger.debug(f"Path updated for the pursuer: {len(path) - 1} steps")

        for listener in self._path_listeners:
            listener(path)
        return True

    def current_waypoint(self) -> Cell | None:
        """Cell the pursuer is heading to, or None when the route is exhausted."""
        if self.target_waypoint >= len(self.current_path):
            return None
        return self.current_path[self.target_waypoint]

    def advance_waypoint(self) -> Cell | None:
        """
        Mark the current waypoint as reached.

        Returns:
            The waypoint that was reached, or None if there was none left
        """
        waypoint = self.current_waypoint()
        if waypoint is not None:
            self.target_waypoint += 1
            logger.debug("Pursuer reached waypoint %s", waypoint)
        return waypoint

    def has_reached_end(self) -> bool:
        return bool(self.current_path) and self.target_waypoint >= len(self.current_path)

    def remaining_path(self) -> list[Cell]:
        return self.current_path[self.target_waypoint :]

    def waypoint_positions(self) -> list[tuple[float, float]]:
        """World positions of the whole current route."""
        if self.placement is None:
            return [(float(cell.x), float(cell.y)) for cell in self.current_path]
        return self.placement.positions(self.current_path)

    def clear(self) -> None:
        self.current_path = []
        self.target_waypoint = 0
        self._elapsed = 0.0
        self._refreshed_once = False
