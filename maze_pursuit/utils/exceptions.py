"""
Exception classes for maze_pursuit with helpful error messages and user guidance.

Every error carries the component that raised it, an optional suggested
action, a stable error code and a dictionary of diagnostic values, so callers
can log a complete report from a single ``str(error)``.

Error taxonomy:
- InvalidDimensionError: bad grid size at construction (fatal)
- InvalidArgumentError: missing or foreign cells handed to an operation (fatal)
- OutOfBoundsError: strict cell lookup outside the grid
- BoundaryViolationError: refused removal of an immutable outer wall
"""

from __future__ import annotations

from typing import Any


class MazeError(Exception):
    """
    Base exception for maze errors with helpful context and suggestions.

    This exception class provides structured error information including:
    - Clear error description
    - Component context information
    - Suggested actions for resolution
    - Optional diagnostic data
    """

    def __init__(
        self,
        message: str,
        component: str | None = None,
        suggested_action: str | None = None,
        error_code: str | None = None,
        diagnostic_data: dict[str, Any] | None = None,
    ):
        self.component = component or "maze_pursuit"
        self.suggested_action = suggested_action
        self.error_code = error_code
        self.diagnostic_data = diagnostic_data or {}

        full_message = f"[{self.component}] {message}"

        if self.suggested_action:
            full_message += f"\nSuggestion: {self.suggested_action}"

        if self.error_code:
            full_message += f"\nError Code: {self.error_code}"

        if self.diagnostic_data:
            full_message += "\nDiagnostic Information:"
            for key, value in self.diagnostic_data.items():
                full_message += f"\n   - {key}: {value}"

        super().__init__(full_message)


class InvalidDimensionError(MazeError, ValueError):
    """Exception raised when a grid is requested with an unusable size."""

    def __init__(
        self,
        num_x: Any,
        num_y: Any,
        component: str | None = None,
        reason: str | None = None,
    ):
        diagnostic_data = {
            "num_x": num_x,
            "num_y": num_y,
        }
        if reason:
            diagnostic_data["reason"] = reason

        self.num_x = num_x
        self.num_y = num_y

        super().__init__(
            message=f"Invalid maze dimensions {num_x} x {num_y}",
            component=component or "MazeGraph",
            suggested_action=_generate_dimension_suggestions(num_x, num_y),
            error_code="INVALID_DIMENSION",
            diagnostic_data=diagnostic_data,
        )


class InvalidArgumentError(MazeError, ValueError):
    """Exception raised when an operation receives a missing or foreign argument."""

    def __init__(
        self,
        argument_name: str,
        provided_value: Any,
        component: str | None = None,
        reason: str | None = None,
    ):
        diagnostic_data = {
            "argument": argument_name,
            "provided_value": repr(provided_value),
            "provided_type": type(provided_value).__name__,
        }

        if provided_value is None:
            suggested_action = f"Pass a cell (or an (x, y) tuple) for '{argument_name}'"
        else:
            suggested_action = f"Check that '{argument_name}' belongs to this maze"

        message = f"Invalid argument '{argument_name}'"
        if reason:
            message += f": {reason}"

        self.argument_name = argument_name
        self.provided_value = provided_value

        super().__init__(
            message=message,
            component=component,
            suggested_action=suggested_action,
            error_code="INVALID_ARGUMENT",
            diagnostic_data=diagnostic_data,
        )


class OutOfBoundsError(MazeError, IndexError):
    """Exception raised by strict lookups of coordinates outside the grid."""

    def __init__(
        self,
        x: int,
        y: int,
        num_x: int,
        num_y: int,
        component: str | None = None,
    ):
        self.x = x
        self.y = y

        super().__init__(
            message=f"Cell ({x}, {y}) is outside the grid",
            component=component or "MazeGraph",
            suggested_action=f"Use 0 <= x < {num_x} and 0 <= y < {num_y}, or get_cell() for a lenient lookup",
            error_code="OUT_OF_BOUNDS",
            diagnostic_data={"grid_size": f"{num_x} x {num_y}"},
        )


class BoundaryViolationError(MazeError):
    """Exception raised when an immutable outer wall is asked to open in strict mode."""

    def __init__(
        self,
        x: int,
        y: int,
        direction: Any,
        reason: str,
        component: str | None = None,
    ):
        self.x = x
        self.y = y
        self.direction = direction

        super().__init__(
            message=f"Refused to remove wall {getattr(direction, 'name', direction)} at ({x}, {y}): {reason}",
            component=component or "MazeGraph",
            suggested_action="Only the designated entrance and exit may open the outer boundary",
            error_code="BOUNDARY_VIOLATION",
            diagnostic_data={"cell": (x, y), "direction": getattr(direction, "name", direction)},
        )


def _generate_dimension_suggestions(num_x: Any, num_y: Any) -> str:
    """Generate specific suggestions for grid size errors."""

    suggestions = []
    for name, value in (("num_x", num_x), ("num_y", num_y)):
        if isinstance(value, bool) or not isinstance(value, int):
            suggestions.append(f"Convert {name} to int")
        elif value <= 0:
            suggestions.append(f"Increase {name} to at least 1")

    return " | ".join(suggestions) if suggestions else "Check grid dimensions and try again"


# Convenience functions for common error scenarios


def validate_dimensions(num_x: Any, num_y: Any, component: str | None = None) -> None:
    """Validate that both grid dimensions are positive integers."""
    for value in (num_x, num_y):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidDimensionError(num_x, num_y, component=component, reason="dimensions must be integers")
        if value <= 0:
            raise InvalidDimensionError(num_x, num_y, component=component, reason="dimensions must be positive")


def validate_cell_argument(value: Any, argument_name: str, component: str | None = None) -> None:
    """Validate that a cell argument was actually supplied."""
    if value is None:
        raise InvalidArgumentError(argument_name, value, component=component, reason="value is None")
