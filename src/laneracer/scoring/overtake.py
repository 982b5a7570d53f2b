"""
Overtake scoring - Points for opponents dodged by the player.
"""

from dataclasses import dataclass

from laneracer.car.opponent import Opponent
from laneracer.simulation.world import World


@dataclass
class OvertakeConfig:
    """Overtake scoring configuration."""
    near_distance: float = 60.0
    points: int = 25
    removal_distance: float = -360.0


class OvertakeScorer:
    """Awards points and retires opponents that have passed the player."""

    def __init__(self, config: OvertakeConfig | None = None):
        self.config = config or OvertakeConfig()
        self._total_overtakes: int = 0

    @property
    def total_overtakes(self) -> int:
        """Overtakes scored since the last reset."""
        return self._total_overtakes

    def score(self, world: World, opponent: Opponent) -> bool:
        """Score an opponent crossing the near threshold.

        An opponent in the player's lane is not marked and stays
        eligible for the collision check.

        Returns:
            True if points were awarded
        """
        if opponent.overtaken or opponent.distance >= self.config.near_distance:
            return False
        if opponent.lane == world.player.lane:
            return False

        opponent.mark_overtaken()
        world.award(self.config.points)
        self._total_overtakes += 1
        return True

    def is_expired(self, opponent: Opponent) -> bool:
        """Check whether an opponent has fully left the simulation."""
        return opponent.distance < self.config.removal_distance

    def reset(self) -> None:
        """Reset counters for a new run."""
        self._total_overtakes = 0
