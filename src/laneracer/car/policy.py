"""
Opponent policy - Per-tick lane and approach decisions for traffic.

Aggressive opponents that are reasonably close occasionally steer
toward the player's lane to block; everyone else drifts between
lanes at random. Approach speed depends on range and on whether the
opponent shares the player's lane.
"""

from dataclasses import dataclass
from typing import NamedTuple
import math

import numpy as np

from laneracer.car.opponent import Opponent
from laneracer.car.player import MIN_LANE, MAX_LANE, NUM_LANES
from laneracer.simulation.rng import RandomSource, draw


@dataclass
class PolicyConfig:
    """Opponent policy configuration."""
    # Blocking behaviour
    aggressive_threshold: float = 0.9
    blocking_range: float = 1400.0
    blocking_chance: float = 0.015     # Per tick
    same_lane_chance: float = 0.6      # Of a blocking move, aim at the player's lane
    left_chance: float = 0.5           # Otherwise, left vs right neighbour

    # Idle drifting
    jitter_chance: float = 0.008       # Per tick

    # Approach regimes
    far_range: float = 900.0
    pressure_range: float = 600.0
    far_speed_factor: float = 1.6
    far_multiplier_factor: float = 1.2
    pressure_speed_factor: float = 2.2
    pressure_bonus: float = 0.6
    cruise_speed_factor: float = 1.8
    cruise_multiplier_factor: float = 1.0

    # Distances are tuned per 16 ms frame
    frame_ms: float = 16.0


class PolicyDecision(NamedTuple):
    """Outcome of one policy evaluation."""
    lane: int
    distance_delta: float  # Positive values bring the opponent closer


class OpponentPolicy:
    """Stateless opponent decision policy.

    All randomness comes from the injected source, so a scripted
    source reproduces a decision exactly.

    Usage:
        policy = OpponentPolicy(rng=NumpyRandomSource(7))
        decision = policy.decide(opponent, player_lane=1,
                                 speed_multiplier=1.0, dt_ms=16)
    """

    def __init__(self, rng: RandomSource, config: PolicyConfig | None = None):
        """Initialize policy.

        Args:
            rng: Random source for lane decisions
            config: Policy configuration
        """
        self.rng = rng
        self.config = config or PolicyConfig()

    def choose_lane(self, opponent: Opponent, player_lane: int) -> int:
        """Pick the opponent's lane for this tick."""
        cfg = self.config

        if (
            opponent.aggressiveness > cfg.aggressive_threshold
            and opponent.distance < cfg.blocking_range
            and draw(self.rng) < cfg.blocking_chance
        ):
            if draw(self.rng) < cfg.same_lane_chance:
                offset = 0
            elif draw(self.rng) < cfg.left_chance:
                offset = -1
            else:
                offset = 1
            return int(np.clip(player_lane + offset, MIN_LANE, MAX_LANE))

        if draw(self.rng) < cfg.jitter_chance:
            return min(MAX_LANE, math.floor(draw(self.rng) * NUM_LANES))

        return opponent.lane

    def approach_delta(
        self,
        opponent: Opponent,
        lane: int,
        player_lane: int,
        speed_multiplier: float,
        dt_ms: float,
    ) -> float:
        """Distance the opponent closes this tick."""
        cfg = self.config
        frames = dt_ms / cfg.frame_ms

        if opponent.distance > cfg.far_range:
            rate = (
                opponent.approach_speed * cfg.far_speed_factor
                + (speed_multiplier - 1.0) * cfg.far_multiplier_factor
            )
        elif lane == player_lane and opponent.distance < cfg.pressure_range:
            # Same-lane pressure forces the player to commit to a lane
            rate = (
                opponent.approach_speed * cfg.pressure_speed_factor
                + cfg.pressure_bonus
                + opponent.aggressiveness
            )
        else:
            rate = (
                opponent.approach_speed * cfg.cruise_speed_factor
                + (speed_multiplier - 1.0) * cfg.cruise_multiplier_factor
            )

        return rate * frames

    def decide(
        self,
        opponent: Opponent,
        player_lane: int,
        speed_multiplier: float,
        dt_ms: float,
    ) -> PolicyDecision:
        """Evaluate the policy for one opponent.

        Args:
            opponent: Opponent to decide for
            player_lane: Player's current lane
            speed_multiplier: Global speed multiplier
            dt_ms: Tick duration in milliseconds

        Returns:
            New lane and distance delta
        """
        lane = self.choose_lane(opponent, player_lane)
        delta = self.approach_delta(
            opponent, lane, player_lane, speed_multiplier, dt_ms
        )
        return PolicyDecision(lane=lane, distance_delta=delta)

    def apply(
        self,
        opponent: Opponent,
        player_lane: int,
        speed_multiplier: float,
        dt_ms: float,
    ) -> PolicyDecision:
        """Evaluate the policy and write the result to the opponent."""
        decision = self.decide(opponent, player_lane, speed_multiplier, dt_ms)
        opponent.lane = decision.lane
        opponent.distance -= decision.distance_delta
        return decision
