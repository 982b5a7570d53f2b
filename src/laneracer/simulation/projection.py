"""
Projection model - Maps approach distance to screen geometry.

Provides:
- Depth projection (screen Y and scale) for a given approach distance
- Lane centre positions
- Axis-aligned bounding boxes for the player and opponents

Collision detection and any external renderer both derive their
geometry from this module.
"""

from dataclasses import dataclass
from typing import List, NamedTuple
import math

import numpy as np


@dataclass
class ProjectionConfig:
    """Projection and view geometry configuration."""
    # View
    view_width: float = 720.0
    view_height: float = 1280.0

    # Depth
    far_plane: float = 3600.0
    near_offset: float = 220.0       # Near baseline distance from bottom edge
    far_offset: float = 380.0        # Near-to-far span is view_height - far_offset

    # Scale
    min_scale: float = 0.6           # Scale at the far plane
    scale_range: float = 1.6         # Added scale at the near baseline

    # Lanes (fractions of view width)
    lane_fractions: tuple = (0.18, 0.5, 0.82)

    # Vehicle sprites
    base_width: float = 160.0
    base_height: float = 260.0
    player_scale: float = 0.9
    opponent_scale: float = 0.6

    def __post_init__(self):
        """Validate configuration."""
        if self.far_plane <= 0:
            raise ValueError("far_plane must be positive")
        if len(self.lane_fractions) != 3:
            raise ValueError("exactly three lane positions are required")

    @property
    def near_y(self) -> float:
        """Screen Y of the near baseline (player depth)."""
        return self.view_height - self.near_offset

    @property
    def far_y(self) -> float:
        """Screen Y of the far baseline."""
        return self.near_y - (self.view_height - self.far_offset)


class Projection(NamedTuple):
    """Result of projecting an approach distance."""
    screen_y: float
    scale: float
    depth: float  # Normalized depth t in [0, 1]


@dataclass(frozen=True)
class Box:
    """Axis-aligned bounding box in screen coordinates."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def overlaps(self, other: "Box") -> bool:
        """Check overlap with another box.

        Two boxes overlap iff their projections overlap on both axes.
        Touching edges count as overlapping.
        """
        overlap_x = self.x <= other.right and other.x <= self.right
        overlap_y = self.y <= other.bottom and other.y <= self.bottom
        return overlap_x and overlap_y


def round_half_up(value: float) -> int:
    """Round to nearest integer with halves rounded up."""
    return int(math.floor(value + 0.5))


def project(distance: float, config: ProjectionConfig | None = None) -> Projection:
    """Project an approach distance onto the screen.

    Args:
        distance: Approach distance (any real value)
        config: Projection configuration

    Returns:
        Projection with screen Y, scale and normalized depth
    """
    config = config or _DEFAULT_CONFIG
    t = float(np.clip(distance / config.far_plane, 0.0, 1.0))
    screen_y = config.near_y - t * (config.near_y - config.far_y)
    scale = config.min_scale + (1.0 - t) * config.scale_range
    return Projection(screen_y=screen_y, scale=scale, depth=t)


def lane_centers(config: ProjectionConfig | None = None) -> List[float]:
    """Get screen X of each lane centre."""
    config = config or _DEFAULT_CONFIG
    return [config.view_width * f for f in config.lane_fractions]


def lane_center(lane: int, config: ProjectionConfig | None = None) -> float:
    """Get screen X of a lane centre."""
    return lane_centers(config)[lane]


def player_box(lane: int, config: ProjectionConfig | None = None) -> Box:
    """Bounding box of the player car in a lane.

    The player always sits on the near baseline at fixed size.
    """
    config = config or _DEFAULT_CONFIG
    width = round_half_up(config.base_width * config.player_scale)
    height = round_half_up(config.base_height * config.player_scale)
    cx = lane_center(lane, config)
    return Box(cx - width / 2, config.near_y - height / 2, width, height)


def opponent_box(
    lane: int,
    distance: float,
    config: ProjectionConfig | None = None,
) -> Box:
    """Bounding box of an opponent car at a lane and distance."""
    config = config or _DEFAULT_CONFIG
    proj = project(distance, config)
    width = round_half_up(config.base_width * proj.scale * config.opponent_scale)
    height = round_half_up(config.base_height * proj.scale * config.opponent_scale)
    cx = lane_center(lane, config)
    return Box(cx - width / 2, proj.screen_y - height / 2, width, height)


_DEFAULT_CONFIG = ProjectionConfig()
