"""
Simulation module - Tick loop, world state and geometry.

This module contains:
- Simulator: Tick loop and command surface
- World: Entity store and game state
- GameLifecycle: Idle/Running/Paused/GameOver state machine
- SpawnScheduler: Score-scaled opponent spawning
- Projection: Distance to screen geometry
- Snapshot: Read-only world views
"""

from laneracer.simulation.simulator import Simulator, SimulatorConfig
from laneracer.simulation.world import World
from laneracer.simulation.lifecycle import GameLifecycle, LifecycleState
from laneracer.simulation.spawner import SpawnScheduler, SpawnConfig
from laneracer.simulation.projection import Box, Projection, ProjectionConfig, project
from laneracer.simulation.rng import (
    NumpyRandomSource,
    RandomSourceError,
    ScriptedRandomSource,
)
from laneracer.simulation.snapshot import Snapshot, SnapshotBuffer

__all__ = [
    "Simulator",
    "SimulatorConfig",
    "World",
    "GameLifecycle",
    "LifecycleState",
    "SpawnScheduler",
    "SpawnConfig",
    "Box",
    "Projection",
    "ProjectionConfig",
    "project",
    "NumpyRandomSource",
    "RandomSourceError",
    "ScriptedRandomSource",
    "Snapshot",
    "SnapshotBuffer",
]
