"""
Player car - The lane-bound vehicle controlled by intents.
"""

from dataclasses import dataclass

NUM_LANES = 3
MIN_LANE = 0
MAX_LANE = NUM_LANES - 1
START_LANE = 1


def validate_lane(lane: int) -> int:
    """Check that a lane index is on the track.

    Raises:
        ValueError: If lane is outside 0..2
    """
    if not MIN_LANE <= lane <= MAX_LANE:
        raise ValueError(f"lane must be in {MIN_LANE}..{MAX_LANE}, got {lane}")
    return lane


@dataclass
class Player:
    """Player car state.

    Screen position and size are not stored; they are derived from
    the lane by the projection model.
    """
    lane: int = START_LANE
    alive: bool = True

    def __post_init__(self):
        validate_lane(self.lane)

    def move_left(self) -> bool:
        """Shift one lane left. No-op at the left edge.

        Returns:
            True if the lane changed
        """
        if self.lane <= MIN_LANE:
            return False
        self.lane -= 1
        return True

    def move_right(self) -> bool:
        """Shift one lane right. No-op at the right edge.

        Returns:
            True if the lane changed
        """
        if self.lane >= MAX_LANE:
            return False
        self.lane += 1
        return True

    def reset(self) -> None:
        """Put the player back on the start lane."""
        self.lane = START_LANE
        self.alive = True
