"""
Maze graph: a fixed grid of cells connected through removable walls.

The graph is the single source of truth for adjacency. Two cells are
connected exactly when the wall they share has been removed on both sides;
every mutation clears or restores both flags of an edge together, so the
wall-symmetry invariant holds after any sequence of calls.

Coordinates follow the room layout of the game this library serves:
x grows to the RIGHT (east), y grows to the TOP (north), and the origin
(0, 0) is the bottom-left cell.

Outer walls are immutable. The only exceptions are an optional entrance and
an optional exit, each naming one boundary cell and the outward direction to
open.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Protocol

from maze_pursuit.utils.exceptions import (
    BoundaryViolationError,
    InvalidArgumentError,
    OutOfBoundsError,
    validate_dimensions,
)
from maze_pursuit.utils.maze_logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

logger = get_logger(__name__)


class Direction(IntEnum):
    """Cardinal wall directions; NONE is a sentinel that never names a wall."""

    TOP = 0
    RIGHT = 1
    BOTTOM = 2
    LEFT = 3
    NONE = 4

    @property
    def offset(self) -> tuple[int, int]:
        """Grid step (dx, dy) taken when moving through this wall."""
        return _OFFSETS[self]

    @property
    def opposite(self) -> Direction:
        return opposite_direction(self)

    @classmethod
    def from_name(cls, name: str) -> Direction:
        """Parse a direction name such as ``"top"`` or ``"LEFT"``."""
        try:
            return cls[name.upper()]
        except (KeyError, AttributeError):
            raise InvalidArgumentError("direction", name, component="Direction", reason="unknown direction") from None

    @classmethod
    def coerce(cls, value: Direction | int, component: str = "Direction") -> Direction:
        """Convert an integer wall index to a Direction, rejecting values outside 0-4."""
        try:
            return cls(value)
        except (ValueError, TypeError):
            raise InvalidArgumentError(
                "direction", value, component=component, reason="expected a Direction or an integer 0-4"
            ) from None


_OFFSETS = {
    Direction.TOP: (0, 1),
    Direction.RIGHT: (1, 0),
    Direction.BOTTOM: (0, -1),
    Direction.LEFT: (-1, 0),
    Direction.NONE: (0, 0),
}

_OPPOSITES = {
    Direction.TOP: Direction.BOTTOM,
    Direction.RIGHT: Direction.LEFT,
    Direction.BOTTOM: Direction.TOP,
    Direction.LEFT: Direction.RIGHT,
    Direction.NONE: Direction.NONE,
}

CARDINAL_DIRECTIONS: tuple[Direction, ...] = (
    Direction.TOP,
    Direction.RIGHT,
    Direction.BOTTOM,
    Direction.LEFT,
)


def opposite_direction(direction: Direction) -> Direction:
    """
    Map a direction to its reverse.

    NONE maps to itself; it is still never a valid argument for wall operations.
    """
    return _OPPOSITES[Direction.coerce(direction, "opposite_direction")]


def _require_cardinal(direction: Direction, component: str) -> Direction:
    if direction is None or Direction.coerce(direction, component) is Direction.NONE:
        raise InvalidArgumentError(
            "direction", direction, component=component, reason="wall operations need a cardinal direction"
        )
    return Direction(direction)


@dataclass(eq=False)
class Cell:
    """
    One room of the maze.

    Attributes:
        x: Column index, 0 <= x < num_x
        y: Row index, 0 <= y < num_y
        walls: Wall flags indexed by Direction value (True = wall present)
        visited: Temporary flag for the generation algorithm
        neighbors: Cells reachable through a removed wall, in carving order
    """

    x: int
    y: int
    walls: list[bool] = field(default_factory=lambda: [True, True, True, True])
    visited: bool = False
    neighbors: list[Cell] = field(default_factory=list, repr=False)

    def __hash__(self):
        """Make cell hashable based on position only."""
        return hash((self.x, self.y))

    def __eq__(self, other):
        """Equality based on position only."""
        if not isinstance(other, Cell):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __lt__(self, other: Cell) -> bool:
        return (self.x, self.y) < (other.x, other.y)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    @property
    def index(self) -> tuple[int, int]:
        return (self.x, self.y)

    def has_wall(self, direction: Direction) -> bool:
        return self.walls[_require_cardinal(direction, "Cell")]

    def is_open(self, direction: Direction) -> bool:
        return not self.has_wall(direction)

    def open_directions(self) -> list[Direction]:
        return [d for d in CARDINAL_DIRECTIONS if not self.walls[d]]


@dataclass(frozen=True)
class Portal:
    """A boundary wall that may be opened despite the outer-wall rule."""

    x: int
    y: int
    direction: Direction

    def matches(self, cell: Cell, direction: Direction) -> bool:
        return self.x == cell.x and self.y == cell.y and self.direction == direction


class WallListener(Protocol):
    """Receives every wall flag change, e.g. to toggle a sprite and its collider."""

    def __call__(self, cell: Cell, direction: Direction, is_open: bool) -> None: ...


class MazeGraph:
    """
    Fixed-size grid of cells whose open walls form the maze adjacency.

    Cells are allocated once at construction and only their wall and visited
    state changes afterwards.
    """

    def __init__(
        self,
        num_x: int,
        num_y: int,
        entrance: Portal | None = None,
        exit: Portal | None = None,  # noqa: A002
        wall_listeners: Iterable[WallListener] | None = None,
    ):
        """
        Initialize grid.

        Args:
            num_x: Number of cells along x
            num_y: Number of cells along y
            entrance: Boundary wall allowed to open as the maze entrance
            exit: Boundary wall allowed to open as the maze exit
            wall_listeners: Callbacks notified of every wall flag change

        Raises:
            InvalidDimensionError: If either dimension is not a positive integer
        """
        validate_dimensions(num_x, num_y, component="MazeGraph")

        self.num_x = num_x
        self.num_y = num_y
        self._wall_listeners: list[WallListener] = list(wall_listeners or [])
        self.cells: list[list[Cell]] = [[Cell(x, y) for y in range(num_y)] for x in range(num_x)]

        self.entrance = self._validate_portal(entrance, "entrance")
        self.exit = self._validate_portal(exit, "exit")

    def _validate_portal(self, portal: Portal | None, name: str) -> Portal | None:
        if portal is None:
            return None
        cell = self.get_cell(portal.x, portal.y)
        direction = _require_cardinal(portal.direction, "MazeGraph")
        if cell is None or not self.is_boundary_wall(cell, direction):
            raise InvalidArgumentError(
                name, portal, component="MazeGraph", reason="portal must name an outward-facing boundary wall"
            )
        return Portal(portal.x, portal.y, direction)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return self.num_x * self.num_y

    def __iter__(self) -> Iterator[Cell]:
        for column in self.cells:
            yield from column

    def __getitem__(self, index: tuple[int, int]) -> Cell:
        x, y = index
        cell = self.get_cell(x, y)
        if cell is None:
            raise OutOfBoundsError(x, y, self.num_x, self.num_y)
        return cell

    def __repr__(self) -> str:
        return f"MazeGraph(num_x={self.num_x}, num_y={self.num_y}, open_edges={self.count_open_edges()})"

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.num_x and 0 <= y < self.num_y

    def get_cell(self, x: int, y: int) -> Cell | None:
        """
        Get cell at position.

        Returns:
            Cell if valid position, None otherwise
        """
        if self.in_bounds(x, y):
            return self.cells[x][y]
        return None

    def all_cells(self) -> list[Cell]:
        return list(self)

    def contains(self, cell: Cell) -> bool:
        """True if ``cell`` is one of this graph's own cell objects."""
        return isinstance(cell, Cell) and self.get_cell(cell.x, cell.y) is cell

    def resolve(self, cell: Cell | tuple[int, int] | None, argument_name: str = "cell") -> Cell:
        """
        Turn a cell or an (x, y) pair into this graph's cell.

        Raises:
            InvalidArgumentError: If the value is None, outside the grid, or a
                cell that belongs to a different graph
        """
        if cell is None:
            raise InvalidArgumentError(argument_name, cell, component="MazeGraph", reason="value is None")

        if isinstance(cell, Cell):
            if not self.contains(cell):
                raise InvalidArgumentError(
                    argument_name, cell, component="MazeGraph", reason="cell does not belong to this maze"
                )
            return cell

        try:
            x, y = cell
        except (TypeError, ValueError):
            raise InvalidArgumentError(
                argument_name, cell, component="MazeGraph", reason="expected a Cell or an (x, y) pair"
            ) from None

        resolved = self.get_cell(x, y)
        if resolved is None:
            raise InvalidArgumentError(argument_name, cell, component="MazeGraph", reason="position outside the grid")
        return resolved

    def neighbor(self, cell: Cell, direction: Direction) -> Cell | None:
        """Adjacent in-bounds cell in ``direction``, or None at the edge of the grid."""
        dx, dy = _require_cardinal(direction, "MazeGraph").offset
        return self.get_cell(cell.x + dx, cell.y + dy)

    def neighbors_open(self, cell: Cell) -> list[Cell]:
        """
        Cells directly reachable from ``cell`` through an open wall.

        Derived from wall flags, never from the cached neighbor list; portal
        openings lead outside the grid and contribute nothing.
        """
        result = []
        for direction in CARDINAL_DIRECTIONS:
            if cell.walls[direction]:
                continue
            neighbor = self.neighbor(cell, direction)
            if neighbor is not None:
                result.append(neighbor)
        return result

    def neighbors_unvisited(self, cell: Cell) -> list[tuple[Direction, Cell]]:
        """
        In-bounds adjacent cells not yet visited, regardless of wall state.

        Only meaningful during generation.
        """
        result = []
        for direction in CARDINAL_DIRECTIONS:
            neighbor = self.neighbor(cell, direction)
            if neighbor is not None and not neighbor.visited:
                result.append((direction, neighbor))
        return result

    # ------------------------------------------------------------------
    # Boundary policy
    # ------------------------------------------------------------------

    def is_boundary_wall(self, cell: Cell, direction: Direction) -> bool:
        """True if the wall faces outside the grid (edge and corner cells)."""
        direction = _require_cardinal(direction, "MazeGraph")
        return (
            (direction is Direction.LEFT and cell.x == 0)
            or (direction is Direction.RIGHT and cell.x == self.num_x - 1)
            or (direction is Direction.BOTTOM and cell.y == 0)
            or (direction is Direction.TOP and cell.y == self.num_y - 1)
        )

    def is_portal(self, cell: Cell, direction: Direction) -> bool:
        return any(portal is not None and portal.matches(cell, direction) for portal in (self.entrance, self.exit))

    def open_portals(self) -> int:
        """
        Open the designated entrance and exit walls.

        Returns:
            Number of portal walls open afterwards
        """
        opened = 0
        for portal in (self.entrance, self.exit):
            if portal is None:
                continue
            cell = self.cells[portal.x][portal.y]
            if self.remove_wall(cell, portal.direction, is_boundary=True):
                opened += 1
        return opened

    def _refuse(self, cell: Cell, direction: Direction, reason: str, strict: bool) -> bool:
        if strict:
            raise BoundaryViolationError(cell.x, cell.y, direction, reason)
        logger.warning(f"Attempted to remove {reason} at ({cell.x},{cell.y}) {direction.name}")
        return False

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_wall_listener(self, listener: WallListener) -> None:
        self._wall_listeners.append(listener)

    def remove_wall_listener(self, listener: WallListener) -> None:
        self._wall_listeners.remove(listener)

    def _set_wall(self, cell: Cell, direction: Direction, present: bool) -> None:
        if cell.walls[direction] == present:
            return
        cell.walls[direction] = present
        for listener in self._wall_listeners:
            listener(cell, direction, not present)

    def remove_wall(
        self,
        cell: Cell,
        direction: Direction,
        is_boundary: bool = False,
        strict: bool = False,
    ) -> bool:
        """
        Open the wall of ``cell`` in ``direction`` and the matching wall of its neighbor.

        Args:
            cell: Cell whose wall is removed
            direction: Cardinal direction of the wall
            is_boundary: Request targets the outer boundary (entrance/exit)
            strict: Raise BoundaryViolationError instead of refusing quietly

        Returns:
            True if the wall is open afterwards, False if the request was refused

        Raises:
            InvalidArgumentError: If direction is NONE or the cell is foreign
            BoundaryViolationError: In strict mode, for a refused boundary wall
        """
        direction = _require_cardinal(direction, "MazeGraph")
        cell = self.resolve(cell)

        if is_boundary:
            if not self.is_portal(cell, direction):
                return self._refuse(cell, direction, "a boundary wall not designated as entrance or exit", strict)
        elif self.is_boundary_wall(cell, direction):
            corner = cell.x in (0, self.num_x - 1) and cell.y in (0, self.num_y - 1)
            return self._refuse(cell, direction, "a corner boundary wall" if corner else "an outer boundary wall", strict)

        neighbor = self.neighbor(cell, direction)
        self._set_wall(cell, direction, False)

        if neighbor is not None:
            self._set_wall(neighbor, direction.opposite, False)
            if neighbor not in cell.neighbors:
                cell.neighbors.append(neighbor)
            if cell not in neighbor.neighbors:
                neighbor.neighbors.append(cell)
            logger.debug("Removed wall %s between %s and %s", direction.name, cell, neighbor)
        else:
            logger.debug("Opened boundary wall %s at %s", direction.name, cell)

        return True

    def activate_wall(self, cell: Cell, direction: Direction) -> bool:
        """
        Close the wall of ``cell`` in ``direction`` on both sides.

        Returns:
            True if the wall was open before the call
        """
        direction = _require_cardinal(direction, "MazeGraph")
        cell = self.resolve(cell)
        was_open = not cell.walls[direction]

        neighbor = self.neighbor(cell, direction)
        self._set_wall(cell, direction, True)
        if neighbor is not None:
            self._set_wall(neighbor, direction.opposite, True)
            if neighbor in cell.neighbors:
                cell.neighbors.remove(neighbor)
            if cell in neighbor.neighbors:
                neighbor.neighbors.remove(cell)

        return was_open

    def reset(self) -> None:
        """Close every wall, clear visited flags and drop all open-neighbor lists."""
        for cell in self:
            cell.visited = False
            for direction in CARDINAL_DIRECTIONS:
                self._set_wall(cell, direction, True)
            cell.neighbors.clear()
        logger.debug("Maze has been reset")

    def reset_visited(self) -> None:
        """Reset visited flags for all cells."""
        for cell in self:
            cell.visited = False

    # ------------------------------------------------------------------
    # Edge inspection
    # ------------------------------------------------------------------

    def open_edges(self) -> set[frozenset[Cell]]:
        """Unordered pairs of cells joined by an open wall."""
        edges = set()
        for cell in self:
            for direction in (Direction.TOP, Direction.RIGHT):
                if cell.walls[direction]:
                    continue
                neighbor = self.neighbor(cell, direction)
                if neighbor is not None:
                    edges.add(frozenset((cell, neighbor)))
        return edges

    def count_open_edges(self) -> int:
        return len(self.open_edges())

    def is_symmetric(self) -> bool:
        """True if every interior wall flag agrees with its neighbor's opposite flag."""
        for cell in self:
            for direction in CARDINAL_DIRECTIONS:
                neighbor = self.neighbor(cell, direction)
                if neighbor is not None and cell.walls[direction] != neighbor.walls[direction.opposite]:
                    return False
        return True
