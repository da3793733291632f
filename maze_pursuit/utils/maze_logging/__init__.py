"""
Logging utilities for maze_pursuit.

Usage:
    >>> from maze_pursuit.utils.maze_logging import get_logger, configure_logging
    >>> configure_logging(level="DEBUG")
    >>> logger = get_logger(__name__)
    >>> logger.info("Generating maze...")
"""

from __future__ import annotations

from .logger import (
    MazeFormatter,
    MazeLogger,
    configure_development_logging,
    configure_logging,
    get_logger,
    log_generation_complete,
    log_generation_start,
    log_path_result,
)

__all__ = [
    # Core logging
    "configure_logging",
    "configure_development_logging",
    "get_logger",
    # Structured logging helpers
    "log_generation_complete",
    "log_generation_start",
    "log_path_result",
    # Classes
    "MazeFormatter",
    "MazeLogger",
]
