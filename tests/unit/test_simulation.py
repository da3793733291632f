"""
Unit tests for the tick-driven pursuit session.
"""

import pytest
from pydantic import ValidationError

from maze_pursuit.config import GenerationConfig, MazeConfig, PursuitConfig, SimulationConfig
from maze_pursuit.maze import CARDINAL_DIRECTIONS, Direction, GenerationStatus, verify_perfect_maze
from maze_pursuit.simulation import PursuitSession, random_walk_policy
from maze_pursuit.utils.exceptions import InvalidDimensionError


def make_config(num_x=4, num_y=4, seed=7, **generation):
    return SimulationConfig(
        maze=MazeConfig(num_x=num_x, num_y=num_y),
        generation=GenerationConfig(seed=seed, **generation),
        pursuit=PursuitConfig(refresh_interval=0.5, move_interval=0.25),
    )


def tick_until_generated(session, dt=0.05):
    while session.is_generating():
        session.tick(dt)


class TestGenerationPhase:
    """Test maze generation driven by ticks."""

    def test_idle_before_start(self):
        session = PursuitSession(make_config())
        session.tick(0.05)

        assert session.status is GenerationStatus.IDLE
        assert session.pursuer_cell is None
        assert session.graph.count_open_edges() == 0

    def test_one_step_per_tick(self):
        session = PursuitSession(make_config())
        assert session.start()

        ticks = 0
        while session.is_generating():
            session.tick(0.05)
            ticks += 1

        assert ticks == 2 * len(session.graph) - 1
        assert session.status is GenerationStatus.COMPLETE
        assert verify_perfect_maze(session.graph)["is_perfect"]

    def test_steps_per_tick(self):
        session = PursuitSession(make_config(steps_per_tick=1000))
        session.start()
        session.tick(0.05)

        assert session.status is GenerationStatus.COMPLETE

    def test_start_ignored_while_generating(self):
        session = PursuitSession(make_config())
        session.start()
        session.tick(0.05)

        assert not session.start()
        assert session.is_generating()

    def test_no_pursuit_during_generation(self):
        session = PursuitSession(make_config())
        session.start()
        for _ in range(5):
            session.tick(0.05)

        assert session.pursuer_cell is None
        assert session.target_cell is None
        assert session.pursuer.refresh_count == 0


class TestPursuitPhase:
    """Test placement, route refreshes and the catch."""

    def test_actors_placed_after_generation(self):
        session = PursuitSession(make_config())
        session.start()
        tick_until_generated(session)

        session.tick(0.05)

        assert session.pursuer_cell is not None
        assert session.target_cell is not None
        assert session.pursuer_cell is not session.target_cell
        assert session.pursuer_cell.index != (0, 0)
        assert session.target_cell.index != (0, 0)
        assert session.pursuer.refresh_count == 1

    def test_pursuer_catches_stationary_target(self):
        session = PursuitSession(make_config(seed=3))
        summary = session.run(500, dt=0.05)

        assert summary.caught
        assert summary.pursuer_cell == summary.target_cell
        assert summary.generation_steps == 31
        assert summary.ticks < 500

    def test_pursuer_moves_along_open_walls(self):
        session = PursuitSession(make_config(seed=5))
        session.start()
        tick_until_generated(session)
        session.tick(0.05)

        previous = session.pursuer_cell
        for _ in range(40):
            session.tick(0.05)
            if session.pursuer_cell is not previous:
                assert session.pursuer_cell in session.graph.neighbors_open(previous)
                previous = session.pursuer_cell
            if session.caught:
                break

    def test_same_seed_same_outcome(self):
        first = PursuitSession(make_config(num_x=6, num_y=6, seed=11)).run(400, target_policy=random_walk_policy)
        second = PursuitSession(make_config(num_x=6, num_y=6, seed=11)).run(400, target_policy=random_walk_policy)

        assert first == second

    def test_too_small_for_two_actors(self):
        with pytest.raises(ValidationError, match="fewer than two cells"):
            make_config(num_x=1, num_y=2)

    def test_unvalidated_small_grid_rejected_at_construction(self):
        config = SimulationConfig.model_construct(maze=MazeConfig.model_construct(num_x=2, num_y=1))

        with pytest.raises(InvalidDimensionError, match="2 x 1"):
            PursuitSession(config)

    def test_smallest_grid_runs(self):
        session = PursuitSession(make_config(num_x=1, num_y=3))
        session.start()
        tick_until_generated(session)
        session.tick(0.05)

        assert {session.pursuer_cell.index, session.target_cell.index} == {(0, 1), (0, 2)}

    def test_restart_after_completion(self):
        session = PursuitSession(make_config(seed=3))
        session.run(500)

        assert session.start()
        assert session.is_generating()
        assert session.pursuer_cell is None
        assert not session.caught


class TestTargetMovement:
    """Test moving the target through the maze."""

    def _ready_session(self):
        session = PursuitSession(make_config(seed=9))
        session.start()
        tick_until_generated(session)
        session.tick(0.05)
        return session

    def test_move_before_placement(self):
        session = PursuitSession(make_config())
        assert not session.move_target(Direction.TOP)

    def test_move_through_open_wall(self):
        session = self._ready_session()
        # Park the pursuer away from the target's neighborhood
        session.pursuer_cell = session.graph[0, 0]
        session.target_cell = session.graph[3, 3]
        direction = session.graph[3, 3].open_directions()[0]

        assert session.move_target(direction)
        assert session.target_cell is session.graph.neighbor(session.graph[3, 3], direction)

    def test_move_through_closed_wall(self):
        session = self._ready_session()
        session.target_cell = session.graph[3, 3]

        assert not session.move_target(Direction.RIGHT)
        assert not session.move_target(Direction.NONE)
        assert session.target_cell is session.graph[3, 3]

    def test_random_walk_policy_picks_open_wall(self):
        session = self._ready_session()
        for _ in range(20):
            direction = random_walk_policy(session)
            assert direction in CARDINAL_DIRECTIONS
            assert not session.target_cell.walls[direction]

    def test_random_walk_policy_without_target(self):
        assert random_walk_policy(PursuitSession(make_config())) is None
