"""
Simulator - Main tick loop and command surface.

Provides:
- Clamped variable-timestep tick
- Intent application (lanes, accelerate, brake, nitro, pause)
- Spawning, opponent policy, overtake scoring and collision
- Lifecycle commands and snapshot publishing
"""

from dataclasses import dataclass, field
from typing import Callable, FrozenSet, List, Optional
import logging
import time

import numpy as np

from laneracer.car.opponent import Opponent
from laneracer.car.policy import OpponentPolicy, PolicyConfig
from laneracer.input.intents import Intent, IntentBuffer
from laneracer.scoring.leaderboard import Leaderboard, LeaderboardEntry
from laneracer.scoring.overtake import OvertakeConfig, OvertakeScorer
from laneracer.simulation.collision import CollisionConfig, find_collision
from laneracer.simulation.lifecycle import GameLifecycle, LifecycleState
from laneracer.simulation.projection import (
    Box,
    ProjectionConfig,
    opponent_box,
    player_box,
)
from laneracer.simulation.rng import NumpyRandomSource, RandomSource
from laneracer.simulation.snapshot import Snapshot, SnapshotBuffer, SnapshotListener
from laneracer.simulation.spawner import SpawnConfig, SpawnScheduler
from laneracer.simulation.world import BASE_SPEED, World

logger = logging.getLogger(__name__)


def _monotonic_ms() -> float:
    return time.perf_counter() * 1000.0


@dataclass
class SimulatorConfig:
    """Simulator configuration."""
    # Time stepping
    max_step_ms: float = 40.0        # Longer frames are clamped

    # Speed
    base_speed: float = BASE_SPEED
    min_speed_multiplier: float = 0.5
    max_speed_multiplier: float = 3.0
    accelerate_step: float = 0.08
    brake_step: float = 0.25
    brake_floor: float = 0.6
    speed_relax_per_ms: float = 0.0008

    # Nitro
    nitro_duration_ms: float = 900.0
    nitro_boost: float = 1.6

    # Minimum forward approach applied after the policy
    min_approach_factor: float = 0.9
    min_approach_multiplier_factor: float = 1.6
    min_approach_cutoff: float = -100.0
    frame_ms: float = 16.0

    # Components
    projection: ProjectionConfig = field(default_factory=ProjectionConfig)
    policy: PolicyConfig = field(default_factory=PolicyConfig)
    spawn: SpawnConfig = field(default_factory=SpawnConfig)
    overtake: OvertakeConfig = field(default_factory=OvertakeConfig)
    collision: CollisionConfig = field(default_factory=CollisionConfig)

    # Random seed for the default random source (None for random)
    seed: int | None = None

    def __post_init__(self):
        """Validate configuration."""
        if self.max_step_ms <= 0:
            raise ValueError("max_step_ms must be positive")
        if not 0 < self.min_speed_multiplier <= 1.0 <= self.max_speed_multiplier:
            raise ValueError("speed multiplier bounds must bracket 1.0")


class Simulator:
    """Lane racer simulator.

    Owns the world, the lifecycle and the intent buffer. The tick only
    mutates the world while the lifecycle is running.

    Usage:
        sim = Simulator()
        sim.start()

        while sim.state is LifecycleState.RUNNING:
            sim.intents.press(Intent.MOVE_LEFT)
            snapshot = sim.tick(16.0)
    """

    def __init__(
        self,
        config: SimulatorConfig | None = None,
        rng: RandomSource | None = None,
        leaderboard: Leaderboard | None = None,
        clock: Callable[[], float] | None = None,
    ):
        """Initialize simulator.

        Args:
            config: Simulator configuration. Uses defaults if None.
            rng: Random source for spawning and opponent decisions
            leaderboard: Collaborator receiving saved scores
            clock: Millisecond clock used by ``frame`` when no timestamp is given
        """
        self.config = config or SimulatorConfig()
        self.rng = rng or NumpyRandomSource(self.config.seed)
        self.leaderboard = leaderboard
        self._clock = clock or _monotonic_ms

        # Core components
        self.world = World(base_speed=self.config.base_speed)
        self.lifecycle = GameLifecycle()
        self.intents = IntentBuffer()
        self.snapshots = SnapshotBuffer()
        self.policy = OpponentPolicy(self.rng, self.config.policy)
        self.spawner = SpawnScheduler(self.rng, self.config.spawn)
        self.scorer = OvertakeScorer(self.config.overtake)

        # Per-tick state
        self._boost: float = 1.0
        self._last_frame_ms: Optional[float] = None
        self._crashed_into: Optional[Opponent] = None

        self.lifecycle.add_listener(self._on_transition)
        self._publish()

    @property
    def state(self) -> LifecycleState:
        """Current lifecycle state."""
        return self.lifecycle.state

    @property
    def is_running(self) -> bool:
        return self.lifecycle.is_running

    @property
    def score(self) -> int:
        return self.world.score

    @property
    def effective_speed(self) -> float:
        """Speed multiplier including this tick's nitro boost."""
        return self.world.speed_multiplier * self._boost

    @property
    def crashed_into(self) -> Optional[Opponent]:
        """Opponent that ended the run, if any."""
        return self._crashed_into

    @property
    def snapshot(self) -> Optional[Snapshot]:
        """Latest published snapshot."""
        return self.snapshots.latest()

    def add_snapshot_listener(self, listener: SnapshotListener) -> None:
        """Add callback called with every published snapshot."""
        self.snapshots.add_listener(listener)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """Start a run from Idle with fresh state."""
        if self.state is not LifecycleState.IDLE:
            logger.debug("Ignoring start while %s", self.state.value)
            return False

        self._reset_run()
        self._last_frame_ms = None
        return self.lifecycle.start()

    def pause(self) -> bool:
        """Pause a running game."""
        return self.lifecycle.pause()

    def resume(self) -> bool:
        """Resume a paused game."""
        if not self.lifecycle.is_paused:
            logger.debug("Ignoring resume while %s", self.state.value)
            return False

        self.intents.clear_latched()
        self._last_frame_ms = None
        return self.lifecycle.resume()

    def reset(self) -> bool:
        """Return to Idle with all state rebuilt from defaults."""
        self._reset_run()
        return self.lifecycle.reset()

    def save_score(self, name: str) -> List[LeaderboardEntry] | None:
        """Submit the final score of a finished run.

        Args:
            name: Player name

        Returns:
            Updated ranking, or None if there is nothing to save
        """
        if not self.lifecycle.is_over:
            logger.debug("Ignoring save while %s", self.state.value)
            return None
        if self.leaderboard is None:
            logger.warning("No leaderboard configured, score not saved")
            return None
        return self.leaderboard.submit(name, self.world.score)

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def frame(self, timestamp_ms: float | None = None) -> Optional[Snapshot]:
        """Run one tick for a display frame.

        The first frame after start or resume only sets the time baseline
        and runs a zero-length tick, so any monotonic clock works as long
        as it is used consistently.

        Args:
            timestamp_ms: Frame timestamp (reads the clock if None)

        Returns:
            Snapshot after the tick, or None if not running
        """
        now = self._clock() if timestamp_ms is None else timestamp_ms
        elapsed = 0.0 if self._last_frame_ms is None else now - self._last_frame_ms
        self._last_frame_ms = now
        return self.tick(elapsed)

    def tick(self, dt_ms: float) -> Optional[Snapshot]:
        """Advance the simulation by one step.

        Args:
            dt_ms: Elapsed time in milliseconds (clamped)

        Returns:
            Snapshot after the tick, or None if not running
        """
        if not self.lifecycle.is_running:
            return None

        dt = float(np.clip(dt_ms, 0.0, self.config.max_step_ms))
        world = self.world

        intents = self.intents.drain()
        if Intent.PAUSE in intents:
            self.pause()
            return self.snapshot

        self._apply_intents(intents)
        self._update_nitro(dt)
        self._relax_speed(dt)
        self.spawner.update(world, dt)
        self._advance_opponents(dt)

        world.advance_time(dt)

        if self._check_collision():
            return self.snapshot

        return self._publish()

    def _apply_intents(self, intents: FrozenSet[Intent]) -> None:
        world = self.world
        cfg = self.config

        if Intent.MOVE_LEFT in intents:
            world.move_player_left()
        if Intent.MOVE_RIGHT in intents:
            world.move_player_right()
        if Intent.ACCELERATE in intents:
            world.speed_multiplier = min(
                cfg.max_speed_multiplier,
                world.speed_multiplier + cfg.accelerate_step,
            )
        if Intent.BRAKE in intents:
            world.speed_multiplier = max(
                cfg.brake_floor,
                world.speed_multiplier - cfg.brake_step,
            )
        if Intent.NITRO in intents:
            world.nitro_remaining = cfg.nitro_duration_ms

        world.speed_multiplier = float(np.clip(
            world.speed_multiplier,
            cfg.min_speed_multiplier,
            cfg.max_speed_multiplier,
        ))

    def _update_nitro(self, dt: float) -> None:
        world = self.world
        if world.nitro_remaining > 0:
            world.nitro_remaining = max(0.0, world.nitro_remaining - dt)
            self._boost = self.config.nitro_boost
        else:
            world.nitro_remaining = 0.0
            self._boost = 1.0

    def _relax_speed(self, dt: float) -> None:
        world = self.world
        if world.speed_multiplier > 1.0:
            world.speed_multiplier = max(
                1.0, world.speed_multiplier - self.config.speed_relax_per_ms * dt
            )

    def _minimum_approach(self, dt: float) -> float:
        cfg = self.config
        rate = (
            self.world.base_speed * cfg.min_approach_factor
            + (self.world.speed_multiplier - 1.0) * cfg.min_approach_multiplier_factor
        )
        return rate * (dt / cfg.frame_ms) * self._boost

    def _advance_opponents(self, dt: float) -> None:
        world = self.world
        min_approach = self._minimum_approach(dt)

        for opponent in world.opponents:
            self.policy.apply(
                opponent, world.player.lane, world.speed_multiplier, dt
            )
            if opponent.distance > self.config.min_approach_cutoff:
                opponent.distance -= min_approach

            if self.scorer.score(world, opponent):
                logger.debug(
                    "Overtook %s in lane %d, score %d",
                    opponent.kind.value, opponent.lane, world.score,
                )

            if self.scorer.is_expired(opponent):
                world.remove_opponent(opponent.opponent_id)

    def _check_collision(self) -> bool:
        world = self.world
        hit = find_collision(
            world.player.lane,
            world.opponents,
            self.config.collision,
            self.config.projection,
        )
        if hit is None:
            return False

        self._crashed_into = hit
        world.player.alive = False
        logger.info(
            "Collision with %s in lane %d at %.1f, final score %d",
            hit.kind.value, hit.lane, hit.distance, world.score,
        )
        self.lifecycle.end()
        return True

    # ------------------------------------------------------------------
    # Geometry for renderers
    # ------------------------------------------------------------------

    def player_box(self) -> Box:
        """Player bounding box in screen coordinates."""
        return player_box(self.world.player.lane, self.config.projection)

    def opponent_box(self, opponent: Opponent) -> Box:
        """Opponent bounding box in screen coordinates."""
        return opponent_box(opponent.lane, opponent.distance, self.config.projection)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _reset_run(self) -> None:
        self.world.reset()
        self.scorer.reset()
        self.intents.clear()
        self._boost = 1.0
        self._crashed_into = None

    def _on_transition(self, previous: LifecycleState, current: LifecycleState) -> None:
        self._publish()

    def _publish(self) -> Snapshot:
        snapshot = Snapshot.capture(self.world, self.state, self.effective_speed)
        self.snapshots.publish(snapshot)
        return snapshot

    def get_state(self) -> dict:
        """Get complete simulation state.

        Returns:
            Dictionary containing simulation state
        """
        return {
            "config": {
                "max_step_ms": self.config.max_step_ms,
                "seed": self.config.seed,
            },
            "lifecycle": self.state.value,
            "overtakes": self.scorer.total_overtakes,
            "world": self.world.get_state(),
        }
