"""
Collision detection between the player and nearby opponents.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from laneracer.car.opponent import Opponent
from laneracer.simulation.projection import (
    ProjectionConfig,
    opponent_box,
    player_box,
)


@dataclass
class CollisionConfig:
    """Collision check configuration."""
    # Only opponents closer than this are tested
    danger_distance: float = 420.0


def find_collision(
    player_lane: int,
    opponents: Iterable[Opponent],
    config: CollisionConfig | None = None,
    projection: ProjectionConfig | None = None,
) -> Optional[Opponent]:
    """Find the first opponent whose box overlaps the player's.

    Args:
        player_lane: Player's lane
        opponents: Opponents to test
        config: Collision configuration
        projection: Projection used for both boxes

    Returns:
        Colliding opponent, or None
    """
    config = config or CollisionConfig()
    own_box = player_box(player_lane, projection)

    for opponent in opponents:
        if opponent.distance >= config.danger_distance:
            continue
        if opponent.lane != player_lane:
            continue
        if own_box.overlaps(opponent_box(opponent.lane, opponent.distance, projection)):
            return opponent

    return None
