"""
Core configuration classes.

Configurations describe WHAT maze to build and HOW the pursuit is driven
(grid size, seed, tick rates, logging). They are validated Pydantic models
that can be written to and read from YAML.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, Field, model_validator

from maze_pursuit.maze.maze_graph import Direction, Portal

if TYPE_CHECKING:
    from pathlib import Path

DirectionName = Literal["top", "right", "bottom", "left"]


class PortalConfig(BaseModel):
    """
    A boundary wall that opens as entrance or exit.

    Attributes
    ----------
    x, y : int
        Boundary cell holding the wall
    direction : Literal["top", "right", "bottom", "left"]
        Outward-facing side of that cell
    """

    x: int = Field(ge=0)
    y: int = Field(ge=0)
    direction: DirectionName

    def to_portal(self) -> Portal:
        return Portal(self.x, self.y, Direction.from_name(self.direction))


class MazeConfig(BaseModel):
    """
    Configuration of the maze grid.

    Attributes
    ----------
    num_x, num_y : int
        Number of cells along each axis (default: 10 x 10)
    cell_width, cell_height : float
        World-space size of a cell, used for placement (default: 1.0)
    start : tuple[int, int]
        Cell where carving starts; also excluded from actor placement
    entrance, exit : PortalConfig | None
        Optional boundary openings
    """

    num_x: int = Field(default=10, ge=1)
    num_y: int = Field(default=10, ge=1)
    cell_width: float = Field(default=1.0, gt=0)
    cell_height: float = Field(default=1.0, gt=0)
    start: tuple[int, int] = (0, 0)
    entrance: PortalConfig | None = None
    exit: PortalConfig | None = None

    @model_validator(mode="after")
    def validate_positions(self) -> MazeConfig:
        """Validate that the start cell and portals lie on the grid and both actors fit."""
        sx, sy = self.start
        if not (0 <= sx < self.num_x and 0 <= sy < self.num_y):
            raise ValueError(f"start {self.start} is outside the {self.num_x}x{self.num_y} grid")
        if self.num_x * self.num_y - 1 < 2:
            raise ValueError(
                f"a {self.num_x}x{self.num_y} grid leaves fewer than two cells besides the start "
                "for the pursuer and the target"
            )

        for name, portal in (("entrance", self.entrance), ("exit", self.exit)):
            if portal is None:
                continue
            if not (portal.x < self.num_x and portal.y < self.num_y):
                raise ValueError(f"{name} ({portal.x}, {portal.y}) is outside the {self.num_x}x{self.num_y} grid")
            outward = (
                (portal.direction == "left" and portal.x == 0)
                or (portal.direction == "right" and portal.x == self.num_x - 1)
                or (portal.direction == "bottom" and portal.y == 0)
                or (portal.direction == "top" and portal.y == self.num_y - 1)
            )
            if not outward:
                raise ValueError(f"{name} must open an outward-facing boundary wall, got {portal.direction}")
        return self


class GenerationConfig(BaseModel):
    """
    Configuration of maze generation.

    Attributes
    ----------
    seed : int | None
        Random seed (None = nondeterministic)
    steps_per_tick : int
        Generation steps performed per session tick (default: 1)
    open_portals : bool
        Open entrance/exit walls at the start of each run (default: True)
    """

    seed: int | None = None
    steps_per_tick: int = Field(default=1, ge=1)
    open_portals: bool = True


class PursuitConfig(BaseModel):
    """
    Configuration of the pursuer.

    Attributes
    ----------
    refresh_interval : float
        Seconds between route recomputations (default: 0.5)
    move_interval : float
        Seconds the pursuer needs to cross one cell (default: 0.25)
    """

    refresh_interval: float = Field(default=0.5, gt=0)
    move_interval: float = Field(default=0.25, gt=0)


class LoggingConfig(BaseModel):
    """
    Configuration for logging.

    Attributes
    ----------
    level : Literal["DEBUG", "INFO", "WARNING", "ERROR"]
        Logging level (default: INFO)
    log_to_file : bool
        Also write log records to a file (default: False)
    log_file_path : str | None
        Log file location (default: logs/ in the working directory)
    use_colors : bool
        Colored console output (default: True)
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_to_file: bool = False
    log_file_path: str | None = None
    use_colors: bool = True

    @model_validator(mode="after")
    def validate_log_file(self) -> LoggingConfig:
        """Validate that log_file_path is only given together with log_to_file."""
        if self.log_file_path is not None and not self.log_to_file:
            raise ValueError("log_file_path requires log_to_file to be True")
        return self

    def apply(self) -> None:
        """Install these settings as the global logging configuration."""
        from maze_pursuit.utils.maze_logging import configure_logging

        configure_logging(
            level=self.level,
            log_to_file=self.log_to_file,
            log_file_path=self.log_file_path,
            use_colors=self.use_colors,
        )


class SimulationConfig(BaseModel):
    """
    Complete configuration of a pursuit session.

    Examples
    --------
    >>> config = SimulationConfig(maze=MazeConfig(num_x=20, num_y=15))
    >>> config.to_yaml("experiments/large.yaml")
    >>> config = SimulationConfig.from_yaml("experiments/large.yaml")
    """

    maze: MazeConfig = Field(default_factory=MazeConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    pursuit: PursuitConfig = Field(default_factory=PursuitConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to YAML file."""
        from .io import save_simulation_config

        save_simulation_config(self, path)

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from YAML file."""
        from .io import load_simulation_config

        return load_simulation_config(path)

    def model_dump_yaml(self) -> dict:
        """Configuration as a nested dictionary suitable for YAML serialization."""
        return self.model_dump(exclude_none=True, mode="json")
