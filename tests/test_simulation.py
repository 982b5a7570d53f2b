"""Tests for the simulator tick and command surface."""

import dataclasses

import pytest
import numpy as np

from laneracer.car.opponent import Opponent
from laneracer.input.intents import Intent
from laneracer.scoring.leaderboard import InMemoryLeaderboard
from laneracer.simulation.lifecycle import LifecycleState
from laneracer.simulation.rng import (
    NumpyRandomSource,
    RandomSourceError,
    ScriptedRandomSource,
)
from laneracer.simulation.simulator import Simulator, SimulatorConfig


def _simulator(draws=(), **kwargs):
    """Running simulator with a scripted random source."""
    sim = Simulator(rng=ScriptedRandomSource(draws), clock=lambda: 0.0, **kwargs)
    sim.start()
    return sim


class TestCommands:
    """Test lifecycle commands on the simulator."""

    def test_simulator_creation(self):
        sim = Simulator(rng=ScriptedRandomSource([]))

        assert sim.state is LifecycleState.IDLE
        assert sim.snapshot is not None
        assert sim.snapshot.lifecycle_state is LifecycleState.IDLE

    def test_tick_ignored_when_idle(self):
        sim = Simulator(rng=ScriptedRandomSource([]))

        assert sim.tick(16.0) is None
        assert sim.world.frame == 0

    def test_pause_twice(self):
        sim = _simulator()

        assert sim.pause()
        assert not sim.pause()
        assert sim.state is LifecycleState.PAUSED
        assert sim.tick(16.0) is None

    def test_resume_while_idle_is_noop(self):
        sim = Simulator(rng=ScriptedRandomSource([]))

        assert not sim.resume()
        assert sim.state is LifecycleState.IDLE

    def test_pause_intent(self):
        """A pause intent pauses before anything else happens."""
        sim = _simulator()
        sim.intents.press(Intent.PAUSE)
        sim.intents.press(Intent.MOVE_LEFT)

        snapshot = sim.tick(16.0)

        assert sim.state is LifecycleState.PAUSED
        assert snapshot.lifecycle_state is LifecycleState.PAUSED
        assert sim.world.frame == 0
        assert sim.world.player.lane == 1

    def test_resume_drops_stale_intents(self):
        sim = _simulator()
        sim.pause()
        sim.intents.press(Intent.MOVE_LEFT)

        assert sim.resume()
        sim.tick(16.0)
        assert sim.world.player.lane == 1

    def test_start_only_from_idle(self):
        sim = _simulator()
        sim.world.award(25)

        assert not sim.start()
        assert sim.score == 25

    def test_snapshots_on_transitions(self):
        sim = Simulator(rng=ScriptedRandomSource([]), clock=lambda: 0.0)
        states = []
        sim.add_snapshot_listener(lambda s: states.append(s.lifecycle_state))

        sim.start()
        sim.tick(16.0)
        sim.pause()
        sim.resume()
        sim.reset()

        assert states == [
            LifecycleState.RUNNING,
            LifecycleState.RUNNING,
            LifecycleState.PAUSED,
            LifecycleState.RUNNING,
            LifecycleState.IDLE,
        ]


class TestSpeed:
    """Test speed multiplier, brake and nitro dynamics."""

    def test_accelerate_capped(self):
        sim = _simulator()
        for _ in range(40):
            sim.intents.press(Intent.ACCELERATE)
            sim.tick(0.0)

        assert sim.world.speed_multiplier == pytest.approx(3.0)

    def test_brake_floor(self):
        sim = _simulator()
        for _ in range(10):
            sim.intents.press(Intent.BRAKE)
            sim.tick(0.0)

        assert sim.world.speed_multiplier == pytest.approx(0.6)

    def test_speed_relaxes_toward_baseline(self):
        sim = _simulator()
        sim.world.speed_multiplier = 2.0
        sim.tick(40.0)

        assert sim.world.speed_multiplier == pytest.approx(2.0 - 0.032)

    def test_relax_stops_at_baseline(self):
        sim = _simulator()
        sim.world.speed_multiplier = 1.01
        sim.tick(40.0)

        assert sim.world.speed_multiplier == 1.0

    def test_speed_bounds_hold_under_random_input(self):
        sim = Simulator(rng=NumpyRandomSource(seed=1), clock=lambda: 0.0)
        sim.start()
        choices = np.random.default_rng(2)
        intents = [Intent.ACCELERATE, Intent.BRAKE, Intent.NITRO,
                   Intent.MOVE_LEFT, Intent.MOVE_RIGHT]

        for _ in range(2000):
            if not sim.is_running:
                break
            sim.intents.press(intents[int(choices.integers(0, len(intents)))])
            sim.tick(float(choices.uniform(0.0, 60.0)))
            assert 0.5 <= sim.world.speed_multiplier <= 3.0

    def test_nitro_boost(self):
        sim = _simulator()
        sim.intents.press(Intent.NITRO)
        snapshot = sim.tick(16.0)

        assert sim.world.nitro_remaining == pytest.approx(884.0)
        assert snapshot.effective_speed == pytest.approx(1.6)

    def test_nitro_expires(self):
        sim = _simulator()
        sim.intents.press(Intent.NITRO)
        for _ in range(23):
            sim.tick(40.0)

        assert sim.world.nitro_remaining == 0.0
        snapshot = sim.tick(40.0)
        assert snapshot.effective_speed == pytest.approx(1.0)

    def test_nitro_speeds_up_approach(self):
        plain = _simulator([0.5])
        boosted = _simulator([0.5])
        for sim in (plain, boosted):
            sim.world.add_opponent(Opponent(lane=0, distance=2000.0, approach_speed=1.0))
        boosted.intents.press(Intent.NITRO)

        plain.tick(16.0)
        boosted.tick(16.0)

        assert plain.world.opponents[0].distance == pytest.approx(2000.0 - 1.6 - 2.7)
        assert boosted.world.opponents[0].distance == pytest.approx(2000.0 - 1.6 - 2.7 * 1.6)


class TestTick:
    """Test tick scenarios."""

    def test_tick_clamped(self):
        sim = _simulator()
        sim.tick(5000.0)
        sim.tick(-10.0)

        assert sim.world.time_ms == 40.0
        assert sim.world.frame == 2

    def test_frame_uses_clock(self):
        times = iter([1000.0, 1016.0])
        sim = Simulator(rng=ScriptedRandomSource([]), clock=lambda: next(times))
        sim.start()

        sim.frame()
        sim.frame()
        sim.frame(3000.0)

        assert sim.world.time_ms == pytest.approx(56.0)
        assert sim.world.frame == 3

    def test_frame_baseline_from_first_timestamp(self):
        """Caller timestamps need not share the simulator clock."""
        sim = Simulator(rng=ScriptedRandomSource([]), clock=lambda: 0.0)
        sim.start()

        sim.frame(123456.0)
        assert sim.world.time_ms == 0.0

        sim.frame(123472.0)
        assert sim.world.time_ms == pytest.approx(16.0)

    def test_frame_baseline_after_resume(self):
        """Time spent paused is not simulated."""
        sim = Simulator(rng=ScriptedRandomSource([]), clock=lambda: 0.0)
        sim.start()
        sim.frame(1000.0)
        sim.frame(1016.0)
        sim.pause()

        sim.resume()
        sim.frame(9000.0)
        sim.frame(9020.0)

        assert sim.world.time_ms == pytest.approx(36.0)

    def test_lane_intents(self):
        sim = _simulator()
        sim.intents.press(Intent.MOVE_LEFT)
        sim.tick(16.0)
        sim.intents.press(Intent.MOVE_LEFT)
        sim.tick(16.0)

        assert sim.world.player.lane == 0
        assert sim.snapshot.player.lane == 0

    def test_collision_ends_run(self):
        """A fast same-lane car inside the danger zone ends the run."""
        sim = _simulator([0.5])
        sim.world.add_opponent(Opponent(lane=1, distance=400.0, approach_speed=5.0))

        snapshot = sim.tick(16.0)

        assert sim.state is LifecycleState.GAME_OVER
        assert not sim.world.player.alive
        assert snapshot.lifecycle_state is LifecycleState.GAME_OVER
        assert not snapshot.player.alive
        assert sim.crashed_into is not None

    def test_no_mutation_after_game_over(self):
        sim = _simulator([0.5])
        sim.world.add_opponent(Opponent(lane=1, distance=400.0, approach_speed=5.0))
        sim.tick(16.0)
        distance = sim.world.opponents[0].distance

        assert sim.tick(16.0) is None
        assert sim.world.opponents[0].distance == distance

    def test_overtake_scores(self):
        sim = _simulator([0.5])
        opponent = Opponent(lane=0, distance=100.0, approach_speed=25.0)
        sim.world.add_opponent(opponent)

        snapshot = sim.tick(16.0)

        assert opponent.distance == pytest.approx(52.3)
        assert opponent.overtaken
        assert sim.score == 25
        assert snapshot.score == 25
        assert snapshot.opponents[0].overtaken
        assert sim.state is LifecycleState.RUNNING

    def test_same_lane_pass_is_not_scored(self):
        sim = _simulator([0.5])
        opponent = Opponent(lane=1, distance=100.0, approach_speed=25.0)
        sim.world.add_opponent(opponent)

        sim.tick(16.0)

        assert not opponent.overtaken
        assert sim.score == 0
        assert sim.state is LifecycleState.GAME_OVER

    def test_overtaken_stays_set_until_removed(self):
        sim = _simulator([0.5] * 50)
        opponent = Opponent(lane=0, distance=100.0, approach_speed=25.0)
        sim.world.add_opponent(opponent)

        while sim.world.opponent_count:
            sim.tick(16.0)
            assert opponent.overtaken

        assert sim.score == 25
        assert opponent.distance < -360.0

    def test_passed_cars_stop_minimum_approach(self):
        sim = _simulator([0.5])
        opponent = Opponent(lane=0, distance=-150.0, approach_speed=1.0, overtaken=True)
        sim.world.add_opponent(opponent)

        sim.tick(16.0)

        assert opponent.distance == pytest.approx(-150.0 - 1.8)

    def test_removal(self):
        sim = _simulator([0.5])
        sim.world.add_opponent(
            Opponent(lane=0, distance=-350.0, approach_speed=10.0, overtaken=True)
        )

        sim.tick(16.0)

        assert sim.world.opponent_count == 0

    def test_random_source_failure_is_fatal(self):
        sim = _simulator([])
        sim.world.add_opponent(Opponent(lane=0, distance=2000.0))

        with pytest.raises(RandomSourceError):
            sim.tick(16.0)

    def test_seeded_runs_repeat(self):
        """Same seed and inputs give the same run."""
        def play(seed):
            sim = Simulator(SimulatorConfig(seed=seed), clock=lambda: 0.0)
            sim.start()
            for _ in range(3000):
                if sim.tick(16.0) is None:
                    break
            return sim.score, sim.world.frame

        assert play(9) == play(9)


class TestResetAndSave:
    """Test reset and leaderboard hand-off."""

    def _crash(self, sim):
        lane = sim.world.player.lane
        sim.world.add_opponent(Opponent(lane=lane, distance=400.0, approach_speed=5.0))
        sim.tick(16.0)
        assert sim.state is LifecycleState.GAME_OVER

    def test_reset_then_start(self):
        sim = _simulator([0.5])
        sim.world.award(75)
        sim.world.speed_multiplier = 2.5
        sim.world.nitro_remaining = 500.0
        sim.intents.press(Intent.MOVE_LEFT)
        sim.tick(0.0)
        self._crash(sim)

        sim.reset()
        assert sim.state is LifecycleState.IDLE
        sim.start()

        assert sim.score == 0
        assert sim.world.opponent_count == 0
        assert sim.world.player.lane == 1
        assert sim.world.player.alive
        assert sim.world.speed_multiplier == 1.0
        assert sim.world.nitro_remaining == 0.0

    def test_save_score_after_game_over(self):
        leaderboard = InMemoryLeaderboard(clock=lambda: 1.0)
        sim = _simulator([0.5], leaderboard=leaderboard)
        sim.world.award(50)
        self._crash(sim)

        ranking = sim.save_score("  racer  ")

        assert ranking[0].name == "racer"
        assert ranking[0].score == 50

    def test_save_score_only_when_over(self):
        leaderboard = InMemoryLeaderboard()
        sim = _simulator(leaderboard=leaderboard)

        assert sim.save_score("early") is None
        assert leaderboard.top() == []

    def test_snapshot_is_read_only(self):
        sim = _simulator()
        snapshot = sim.tick(16.0)

        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.score = 1000
        assert snapshot.to_dict()["lifecycle_state"] == "running"
