"""
Unit tests for perfect maze generation.

Tests the randomized depth-first generator for correctness, reproducibility,
step-wise operation and perfect maze properties (connectivity, acyclicity).
"""

import random

import pytest

import numpy as np

from maze_pursuit.maze import (
    CARDINAL_DIRECTIONS,
    Direction,
    GenerationStatus,
    MazeGenerator,
    MazeGraph,
    Portal,
    generate_maze,
    to_numpy_array,
    verify_perfect_maze,
)
from maze_pursuit.utils.exceptions import InvalidArgumentError


class FirstChoice:
    """Random source that always picks the first candidate."""

    def __init__(self):
        self.calls = []

    def randrange(self, stop):
        self.calls.append(stop)
        return 0


class TestMazeGenerator:
    """Test randomized depth-first carving."""

    def test_maze_is_perfect(self):
        """Test that generated mazes are perfect (connected, no loops)."""
        graph = MazeGraph(10, 10)
        MazeGenerator(graph, seed=42).generate()

        verification = verify_perfect_maze(graph)

        assert verification["is_perfect"], f"Maze is not perfect: {verification}"
        assert verification["is_connected"], "Maze is not fully connected"
        assert verification["is_no_loops"], "Maze has loops"
        assert verification["is_symmetric"]

    def test_passage_count(self):
        """Test that perfect maze has exactly (n-1) passages for n cells."""
        graph = MazeGraph(10, 10)
        MazeGenerator(graph, seed=42).generate()

        verification = verify_perfect_maze(graph)

        assert verification["passage_count"] == verification["expected_passages"]
        assert verification["passage_count"] == 99  # 100 cells - 1

    @pytest.mark.parametrize(("num_x", "num_y"), [(1, 1), (1, 7), (7, 1), (2, 2), (5, 5), (10, 15), (3, 50)])
    def test_various_sizes(self, num_x, num_y):
        """Test maze generation for various grid sizes."""
        graph = MazeGraph(num_x, num_y)
        MazeGenerator(graph, seed=42).generate()

        verification = verify_perfect_maze(graph)

        assert verification["is_perfect"]
        assert verification["total_cells"] == num_x * num_y

    def test_reproducibility(self):
        """Test that same seed produces same maze."""
        first = MazeGenerator(MazeGraph(10, 10), seed=42).generate()
        second = MazeGenerator(MazeGraph(10, 10), seed=42).generate()

        np.testing.assert_array_equal(to_numpy_array(first), to_numpy_array(second))
        assert first.open_edges() == second.open_edges()

    def test_different_seeds_differ(self):
        first = MazeGenerator(MazeGraph(12, 12), seed=1).generate()
        second = MazeGenerator(MazeGraph(12, 12), seed=2).generate()

        assert first.open_edges() != second.open_edges()

    def test_injected_random_source(self):
        """Test that the generator draws only from the supplied source."""
        rng = FirstChoice()
        graph = MazeGraph(3, 3)

        MazeGenerator(graph, rng=rng).generate()

        assert verify_perfect_maze(graph)["is_perfect"]
        # TOP is always the first unvisited candidate from (0, 0)
        assert not graph[0, 0].walls[Direction.TOP]
        assert all(stop >= 1 for stop in rng.calls)
        assert len(rng.calls) == 8

    def test_outer_walls_stay_closed(self, medium_maze):
        for cell in medium_maze:
            for direction in CARDINAL_DIRECTIONS:
                if medium_maze.is_boundary_wall(cell, direction):
                    assert cell.walls[direction]

    def test_visited_flags_set_after_generation(self, small_maze):
        assert all(cell.visited for cell in small_maze)

    def test_neighbor_lists_match_open_walls(self, small_maze):
        for cell in small_maze:
            assert set(cell.neighbors) == set(small_maze.neighbors_open(cell))

    def test_custom_start(self):
        graph = MazeGraph(6, 4)
        generator = MazeGenerator(graph, seed=3, start=(5, 3))

        generator.generate()

        assert generator.start is graph[5, 3]
        assert verify_perfect_maze(graph)["is_perfect"]

    def test_start_outside_grid(self):
        with pytest.raises(InvalidArgumentError):
            MazeGenerator(MazeGraph(3, 3), start=(3, 0))


class TestGenerationLifecycle:
    """Test the IDLE -> GENERATING -> COMPLETE state machine."""

    def test_initial_state(self):
        generator = MazeGenerator(MazeGraph(3, 3), seed=0)
        assert generator.status is GenerationStatus.IDLE
        assert not generator.is_generating()

    def test_step_while_idle_does_nothing(self):
        graph = MazeGraph(3, 3)
        generator = MazeGenerator(graph, seed=0)

        assert generator.step() is False
        assert graph.count_open_edges() == 0

    def test_create_maze_starts_run(self):
        graph = MazeGraph(3, 3)
        generator = MazeGenerator(graph, seed=0)

        assert generator.create_maze()

        assert generator.is_generating()
        assert generator.status is GenerationStatus.GENERATING
        assert generator.state.frontier == [graph[0, 0]]
        assert graph[0, 0].visited

    def test_reentrant_create_maze_is_ignored(self):
        graph = MazeGraph(4, 4)
        generator = MazeGenerator(graph, seed=0)
        generator.create_maze()
        for _ in range(5):
            generator.step()
        carved = graph.count_open_edges()

        assert not generator.create_maze()
        assert generator.generate() is graph

        assert graph.count_open_edges() == carved
        assert generator.is_generating()

    def test_step_count(self):
        """Every cell is pushed once and popped once: 2n - 1 steps after the initial push."""
        graph = MazeGraph(5, 4)
        generator = MazeGenerator(graph, seed=9)

        generator.create_maze()
        steps = 1
        while not generator.step():
            steps += 1

        assert steps == 2 * len(graph) - 1
        assert generator.state.steps == steps
        assert generator.state.carved == len(graph) - 1

    def test_completion(self):
        graph = MazeGraph(4, 4)
        generator = MazeGenerator(graph, seed=5)
        generator.create_maze()
        while not generator.step():
            pass

        assert generator.status is GenerationStatus.COMPLETE
        assert not generator.is_generating()
        assert generator.state.frontier == []
        assert generator.step() is True

    def test_stepwise_matches_atomic(self):
        """Test that ticking the generator produces the same maze as one call."""
        atomic = MazeGenerator(MazeGraph(8, 6), seed=11).generate()

        graph = MazeGraph(8, 6)
        generator = MazeGenerator(graph, seed=11)
        generator.create_maze()
        while not generator.step():
            pass

        assert graph.open_edges() == atomic.open_edges()

    def test_every_step_keeps_walls_symmetric(self):
        graph = MazeGraph(5, 5)
        generator = MazeGenerator(graph, seed=2)
        generator.create_maze()

        done = False
        while not done:
            done = generator.step()
            assert graph.is_symmetric()

    def test_regeneration_resets_previous_maze(self):
        graph = MazeGraph(6, 6)
        generator = MazeGenerator(graph, rng=random.Random(4))
        generator.generate()
        first = graph.open_edges()

        assert generator.create_maze()
        assert graph.count_open_edges() == 0
        while not generator.step():
            pass

        assert verify_perfect_maze(graph)["is_perfect"]
        assert generator.status is GenerationStatus.COMPLETE
        assert len(first) == len(graph.open_edges())


class TestPortals:
    """Test entrance and exit handling during generation."""

    def test_portals_opened(self):
        graph = MazeGraph(4, 4, entrance=Portal(0, 0, Direction.LEFT), exit=Portal(3, 3, Direction.RIGHT))
        MazeGenerator(graph, seed=1).generate()

        assert not graph[0, 0].walls[Direction.LEFT]
        assert not graph[3, 3].walls[Direction.RIGHT]
        assert verify_perfect_maze(graph)["is_perfect"]

        open_boundary = [
            (cell.index, d)
            for cell in graph
            for d in CARDINAL_DIRECTIONS
            if graph.is_boundary_wall(cell, d) and not cell.walls[d]
        ]
        assert sorted(open_boundary) == [((0, 0), Direction.LEFT), ((3, 3), Direction.RIGHT)]

    def test_portals_can_stay_closed(self):
        graph = MazeGraph(4, 4, entrance=Portal(0, 0, Direction.LEFT))
        MazeGenerator(graph, seed=1, open_portals=False).generate()

        assert graph[0, 0].walls[Direction.LEFT]


class TestGenerateMazeFunction:
    """Test high-level generate_maze() function."""

    def test_returns_verified_graph(self):
        graph = generate_maze(10, 10, seed=42)

        assert isinstance(graph, MazeGraph)
        assert graph.count_open_edges() == 99

    def test_reproducibility(self):
        first = generate_maze(10, 10, seed=42)
        second = generate_maze(10, 10, seed=42)

        np.testing.assert_array_equal(to_numpy_array(first), to_numpy_array(second))

    def test_with_portals(self):
        graph = generate_maze(5, 5, seed=0, entrance=Portal(2, 0, Direction.BOTTOM), exit=Portal(2, 4, Direction.TOP))

        assert not graph[2, 0].walls[Direction.BOTTOM]
        assert not graph[2, 4].walls[Direction.TOP]

    def test_invalid_dimensions(self):
        with pytest.raises(ValueError):
            generate_maze(0, 10)

    def test_invalid_start(self):
        with pytest.raises(InvalidArgumentError):
            generate_maze(4, 4, start=(1, 2, 3))


class TestVerifyPerfectMaze:
    """Test maze verification on hand-made layouts."""

    def test_closed_grid_is_disconnected(self):
        verification = verify_perfect_maze(MazeGraph(3, 3))

        assert not verification["is_perfect"]
        assert not verification["is_connected"]
        assert verification["visited_cells"] == 1

    def test_open_grid_has_loops(self, open_grid):
        verification = verify_perfect_maze(open_grid)

        assert verification["is_connected"]
        assert not verification["is_no_loops"]
        assert verification["passage_count"] == 24

    def test_serpentine_is_perfect(self, serpentine_graph):
        assert verify_perfect_maze(serpentine_graph)["is_perfect"]
