"""
Opponent car - Computer-controlled traffic approaching the player.
"""

from dataclasses import dataclass
from enum import Enum

from laneracer.car.player import validate_lane


class OpponentKind(Enum):
    """Cosmetic opponent liveries."""
    COUPE = "coupe"
    SEDAN = "sedan"
    TRUCK = "truck"


@dataclass
class Opponent:
    """Opponent car.

    ``distance`` is the approach distance: large when far away,
    shrinking through zero as the car reaches the player's depth and
    negative once it has passed.
    """
    kind: OpponentKind = OpponentKind.COUPE
    lane: int = 1
    distance: float = 2000.0
    approach_speed: float = 1.0
    aggressiveness: float = 0.0

    # Set once when the player dodges this car
    overtaken: bool = False

    # Assigned by the world
    opponent_id: int = -1

    def __post_init__(self):
        validate_lane(self.lane)
        if self.approach_speed <= 0:
            raise ValueError("approach_speed must be positive")

    def mark_overtaken(self) -> bool:
        """Flag the car as overtaken.

        Returns:
            True if the flag changed on this call
        """
        if self.overtaken:
            return False
        self.overtaken = True
        return True

    def get_state(self) -> dict:
        """Get opponent state for serialization."""
        return {
            "id": self.opponent_id,
            "kind": self.kind.value,
            "lane": self.lane,
            "distance": self.distance,
            "approach_speed": self.approach_speed,
            "aggressiveness": self.aggressiveness,
            "overtaken": self.overtaken,
        }
