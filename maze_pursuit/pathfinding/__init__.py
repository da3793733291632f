"""Shortest-path search over maze graphs and the pursuer that follows it."""

from .astar import PathFinder, PathQuery, manhattan_distance, path_length, reconstruct_path
from .pursuer import PathListener, PursuerController

__all__ = [
    "PathFinder",
    "PathListener",
    "PathQuery",
    "PursuerController",
    "manhattan_distance",
    "path_length",
    "reconstruct_path",
]
