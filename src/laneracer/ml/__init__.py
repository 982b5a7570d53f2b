"""
ML module - Headless driving environment.

This module contains:
- LaneRaceEnv: reset/step environment over the simulator
- HeuristicDriver: Rule-based baseline agent
"""

from laneracer.ml.environment import LaneRaceEnv, LaneRaceEnvConfig, Action
from laneracer.ml.driver import HeuristicDriver

__all__ = [
    "LaneRaceEnv",
    "LaneRaceEnvConfig",
    "Action",
    "HeuristicDriver",
]
