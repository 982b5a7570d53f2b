"""
Heuristic driver - Rule-based baseline agent for the environment.
"""

from dataclasses import dataclass
import numpy as np

from laneracer.car.player import NUM_LANES
from laneracer.ml.environment import Action


@dataclass
class DriverConfig:
    """Heuristic driver configuration."""
    # Normalized distance below which a car in the own lane is a threat
    danger: float = 0.35
    # Accelerate while every lane is clearer than this
    cruise_clearance: float = 0.6


class HeuristicDriver:
    """Dodges toward the lane whose nearest oncoming car is farthest.

    Reads the observation layout of ``LaneRaceEnv``.
    """

    def __init__(self, config: DriverConfig | None = None):
        self.config = config or DriverConfig()

    def act(self, observation: np.ndarray) -> int:
        """Choose an action.

        Args:
            observation: Environment observation

        Returns:
            Action index
        """
        lane = int(np.argmax(observation[:NUM_LANES]))
        threats = observation[NUM_LANES + 2: NUM_LANES + 2 + NUM_LANES]

        if threats[lane] < self.config.danger:
            # Ties keep the lane closest to the current one
            order = sorted(range(NUM_LANES), key=lambda l: (-threats[l], abs(l - lane)))
            target = order[0]
            if target < lane:
                return int(Action.LEFT)
            if target > lane:
                return int(Action.RIGHT)
            return int(Action.BRAKE)

        if np.all(threats > self.config.cruise_clearance):
            return int(Action.ACCELERATE)
        return int(Action.NOOP)
