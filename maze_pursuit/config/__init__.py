"""
Configuration management for maze_pursuit.

Quick Start
-----------
>>> from maze_pursuit.config import SimulationConfig, MazeConfig
>>> config = SimulationConfig(maze=MazeConfig(num_x=15, num_y=15))

>>> # Or load from YAML
>>> from maze_pursuit.config import load_simulation_config
>>> config = load_simulation_config("experiments/chase.yaml")
"""

from .core import (
    GenerationConfig,
    LoggingConfig,
    MazeConfig,
    PortalConfig,
    PursuitConfig,
    SimulationConfig,
)
from .io import load_simulation_config, save_simulation_config, validate_yaml_config

__all__ = [
    "GenerationConfig",
    "LoggingConfig",
    "MazeConfig",
    "PortalConfig",
    "PursuitConfig",
    "SimulationConfig",
    "load_simulation_config",
    "save_simulation_config",
    "validate_yaml_config",
]
