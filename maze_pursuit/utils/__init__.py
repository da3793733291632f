"""Shared utilities: structured exceptions and logging."""

from .exceptions import (
    BoundaryViolationError,
    InvalidArgumentError,
    InvalidDimensionError,
    MazeError,
    OutOfBoundsError,
    validate_cell_argument,
    validate_dimensions,
)
from .maze_logging import configure_logging, get_logger

__all__ = [
    "BoundaryViolationError",
    "InvalidArgumentError",
    "InvalidDimensionError",
    "MazeError",
    "OutOfBoundsError",
    "configure_logging",
    "get_logger",
    "validate_cell_argument",
    "validate_dimensions",
]
