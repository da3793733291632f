from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("maze-pursuit")  # Matches the name in pyproject.toml
except PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0-dev"

from .config import (  # noqa: E402
    GenerationConfig,
    LoggingConfig,
    MazeConfig,
    PortalConfig,
    PursuitConfig,
    SimulationConfig,
)
from .maze import (  # noqa: E402
    CARDINAL_DIRECTIONS,
    Cell,
    Direction,
    GenerationState,
    GenerationStatus,
    GridPlacement,
    MazeGenerator,
    MazeGraph,
    Portal,
    generate_maze,
    opposite_direction,
    place_actors,
    render_ascii,
    to_numpy_array,
    verify_perfect_maze,
)
from .pathfinding import PathFinder, PathQuery, PursuerController, manhattan_distance  # noqa: E402
from .simulation import PursuitSession, SessionSummary, random_walk_policy  # noqa: E402
from .utils.exceptions import (  # noqa: E402
    BoundaryViolationError,
    InvalidArgumentError,
    InvalidDimensionError,
    MazeError,
    OutOfBoundsError,
)
from .utils.maze_logging import configure_logging, get_logger  # noqa: E402

__all__ = [
    "__version__",
    # Configuration
    "GenerationConfig",
    "LoggingConfig",
    "MazeConfig",
    "PortalConfig",
    "PursuitConfig",
    "SimulationConfig",
    # Maze
    "CARDINAL_DIRECTIONS",
    "Cell",
    "Direction",
    "GenerationState",
    "GenerationStatus",
    "GridPlacement",
    "MazeGenerator",
    "MazeGraph",
    "Portal",
    "generate_maze",
    "opposite_direction",
    "place_actors",
    "render_ascii",
    "to_numpy_array",
    "verify_perfect_maze",
    # Pathfinding
    "PathFinder",
    "PathQuery",
    "PursuerController",
    "manhattan_distance",
    # Session
    "PursuitSession",
    "SessionSummary",
    "random_walk_policy",
    # Errors
    "BoundaryViolationError",
    "InvalidArgumentError",
    "InvalidDimensionError",
    "MazeError",
    "OutOfBoundsError",
    # Logging
    "configure_logging",
    "get_logger",
]
