"""
World-space placement of maze cells and actors.

Cell (x, y) is centred at ``(x * cell_width, y * cell_height)``; everything
else about units is left to the host engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from maze_pursuit.utils.exceptions import InvalidDimensionError
from maze_pursuit.utils.maze_logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from maze_pursuit.maze.maze_generator import RandomSource
    from maze_pursuit.maze.maze_graph import Cell, MazeGraph

logger = get_logger(__name__)


@dataclass(frozen=True)
class GridPlacement:
    """Maps grid cells to world positions and back."""

    cell_width: float = 1.0
    cell_height: float = 1.0

    def position(self, cell: Cell) -> tuple[float, float]:
        """World-space centre of ``cell``."""
        return (cell.x * self.cell_width, cell.y * self.cell_height)

    def positions(self, cells: Iterable[Cell]) -> list[tuple[float, float]]:
        return [self.position(cell) for cell in cells]

    def contains(self, cell: Cell, px: float, py: float) -> bool:
        """True if the point lies within half a cell of the cell centre on both axes."""
        cx, cy = self.position(cell)
        return abs(px - cx) <= self.cell_width / 2 and abs(py - cy) <= self.cell_height / 2

    def cell_at(self, graph: MazeGraph, px: float, py: float) -> Cell | None:
        """
        Cell containing the world point, or None outside the maze.

        Points on a shared border resolve to the cell with the lower index.
        """
        x = round(px / self.cell_width)
        y = round(py / self.cell_height)
        for cx in (x - 1, x, x + 1):
            for cy in (y - 1, y, y + 1):
                cell = graph.get_cell(cx, cy)
                if cell is not None and self.contains(cell, px, py):
                    return cell
        return None


def place_actors(
    graph: MazeGraph,
    rng: RandomSource,
    exclude: Sequence[tuple[int, int]] = ((0, 0),),
) -> tuple[Cell, Cell]:
    """
    Pick two distinct random cells for the pursuer and its target.

    Args:
        graph: Generated maze
        rng: Uniform integer source used for a Fisher-Yates shuffle
        exclude: Cells never chosen (by default the generation start cell)

    Returns:
        (pursuer_cell, target_cell)

    Raises:
        InvalidDimensionError: If fewer than two cells remain after exclusion
    """
    excluded = {tuple(xy) for xy in exclude}
    candidates = [cell for cell in graph if cell.index not in excluded]

    if len(candidates) < 2:
        raise InvalidDimensionError(
            graph.num_x,
            graph.num_y,
            component="place_actors",
            reason="not enough cells to place both the pursuer and the target",
        )

    for i in range(len(candidates)):
        j = i + rng.randrange(len(candidates) - i)
        candidates[i], candidates[j] = candidates[j], candidates[i]

    pursuer_cell, target_cell = candidates[0], candidates[1]
    logger.info(f"Pursuer placed at room {pursuer_cell}, target placed at room {target_cell}")
    return pursuer_cell, target_cell
