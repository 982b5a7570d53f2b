"""
Spawn scheduler - Difficulty scaling through opponent spawn rate.

Time accumulates faster as the score grows, so traffic gets denser
the longer the player survives.
"""

from dataclasses import dataclass
from typing import List
import logging
import math

from laneracer.car.opponent import Opponent, OpponentKind
from laneracer.car.player import MAX_LANE, NUM_LANES
from laneracer.simulation.rng import RandomSource, draw
from laneracer.simulation.world import World

logger = logging.getLogger(__name__)

OPPONENT_KINDS = list(OpponentKind)


@dataclass
class SpawnConfig:
    """Spawn scheduler configuration."""
    # Accumulation
    base_rate: float = 0.8
    score_rate_factor: float = 0.002
    threshold: float = 850.0

    # Chance of a second car in the same wave
    double_spawn_chance: float = 0.36

    # Spawned attribute ranges (min, span)
    min_distance: float = 2000.0
    distance_span: float = 1400.0
    min_approach_speed: float = 0.9
    approach_speed_span: float = 0.9
    max_aggressiveness: float = 1.2

    def __post_init__(self):
        """Validate configuration."""
        if self.threshold <= 0:
            raise ValueError("threshold must be positive")
        if self.min_approach_speed <= 0:
            raise ValueError("min_approach_speed must be positive")


class SpawnScheduler:
    """Time-integrated opponent spawner."""

    def __init__(self, rng: RandomSource, config: SpawnConfig | None = None):
        """Initialize scheduler.

        Args:
            rng: Random source for spawn attributes
            config: Spawn configuration
        """
        self.rng = rng
        self.config = config or SpawnConfig()

    def rate(self, score: int) -> float:
        """Accumulation rate for the given score."""
        return self.config.base_rate + score * self.config.score_rate_factor

    def create_opponent(self) -> Opponent:
        """Create one opponent with randomized attributes."""
        cfg = self.config
        kind = OPPONENT_KINDS[
            min(len(OPPONENT_KINDS) - 1, math.floor(draw(self.rng) * len(OPPONENT_KINDS)))
        ]
        lane = min(MAX_LANE, math.floor(draw(self.rng) * NUM_LANES))
        distance = cfg.min_distance + draw(self.rng) * cfg.distance_span
        speed = cfg.min_approach_speed + draw(self.rng) * cfg.approach_speed_span
        aggressiveness = draw(self.rng) * cfg.max_aggressiveness

        return Opponent(
            kind=kind,
            lane=lane,
            distance=distance,
            approach_speed=speed,
            aggressiveness=aggressiveness,
        )

    def update(self, world: World, dt_ms: float) -> List[Opponent]:
        """Accumulate time and spawn when the threshold is reached.

        Args:
            world: World to add opponents to
            dt_ms: Tick duration in milliseconds

        Returns:
            Opponents spawned this tick
        """
        world.spawn_accumulator += dt_ms * self.rate(world.score)
        if world.spawn_accumulator < self.config.threshold:
            return []

        world.spawn_accumulator = 0.0
        spawned = [self.create_opponent()]
        if draw(self.rng) < self.config.double_spawn_chance:
            spawned.append(self.create_opponent())

        for opponent in spawned:
            world.add_opponent(opponent)
            logger.debug(
                "Spawned %s in lane %d at %.0f (speed %.2f, aggr %.2f)",
                opponent.kind.value,
                opponent.lane,
                opponent.distance,
                opponent.approach_speed,
                opponent.aggressiveness,
            )

        return spawned
