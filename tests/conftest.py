"""
Pytest configuration and shared fixtures for the maze_pursuit test suite.

This module provides hand-carved maze layouts with known shortest paths,
seeded generated mazes, and logging isolation between tests.
"""

from collections import deque

import pytest

from maze_pursuit.maze import Direction, MazeGraph, generate_maze
from maze_pursuit.utils.maze_logging import configure_logging

# =============================================================================
# Test Configuration
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (slower, cross-component)")
    config.addinivalue_line("markers", "slow: Slow tests (may take >10 seconds)")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test paths."""
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)

        if "large" in item.name or "slow" in item.name:
            item.add_marker(pytest.mark.slow)


@pytest.fixture(autouse=True)
def reset_logging():
    """Rebind log handlers to the current stdout and restore INFO level around every test."""
    configure_logging(level="INFO", use_colors=False)
    yield
    configure_logging(level="INFO", use_colors=False)


# =============================================================================
# Maze Fixtures
# =============================================================================


def carve_serpentine(graph: MazeGraph) -> MazeGraph:
    """
    Carve a single winding corridor through every cell.

    Rows are opened left to right and joined alternately at the right and
    left edge, so on a 4x4 grid the route from (0, 0) to (0, 3) is 15 steps.
    """
    for y in range(graph.num_y):
        for x in range(graph.num_x - 1):
            graph.remove_wall(graph[x, y], Direction.RIGHT)
    for y in range(graph.num_y - 1):
        x = graph.num_x - 1 if y % 2 == 0 else 0
        graph.remove_wall(graph[x, y], Direction.TOP)
    return graph


def bfs_distance(graph: MazeGraph, start, goal):
    """Reference shortest distance over open walls, None when unreachable."""
    start = graph.resolve(start)
    goal = graph.resolve(goal)
    distances = {start: 0}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        if current is goal:
            return distances[current]
        for neighbor in graph.neighbors_open(current):
            if neighbor not in distances:
                distances[neighbor] = distances[current] + 1
                queue.append(neighbor)
    return None


@pytest.fixture
def shortest_distance():
    """Breadth-first reference for path lengths."""
    return bfs_distance


@pytest.fixture
def serpentine_graph():
    """4x4 maze consisting of one winding corridor."""
    return carve_serpentine(MazeGraph(4, 4))


@pytest.fixture
def open_grid():
    """4x4 grid with every interior wall removed."""
    graph = MazeGraph(4, 4)
    for cell in graph:
        for direction in (Direction.TOP, Direction.RIGHT):
            if graph.neighbor(cell, direction) is not None:
                graph.remove_wall(cell, direction)
    return graph


@pytest.fixture
def small_maze():
    """Seeded 5x5 perfect maze."""
    return generate_maze(5, 5, seed=42)


@pytest.fixture
def medium_maze():
    """Seeded 12x9 perfect maze."""
    return generate_maze(12, 9, seed=7)
