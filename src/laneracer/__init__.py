"""
laneracer - Three-lane arcade racing simulation core.

This package provides:
- A clamped variable-timestep simulation of player and opponent cars
- Perspective projection shared by collision and rendering
- Opponent AI with blocking and lane jitter
- Lifecycle state machine, intent input and read-only snapshots
- Run telemetry, a leaderboard and a headless driving environment
"""

__version__ = "0.1.0"

from laneracer.simulation.simulator import Simulator, SimulatorConfig
from laneracer.simulation.lifecycle import LifecycleState
from laneracer.input.intents import Intent

__all__ = ["Simulator", "SimulatorConfig", "LifecycleState", "Intent", "__version__"]
