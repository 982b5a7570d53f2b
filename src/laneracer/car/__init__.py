"""
Car module - Player and opponent cars.

This module contains:
- Player: Lane-bound player car
- Opponent: Oncoming traffic car
- OpponentPolicy: Per-tick opponent lane and approach decisions
"""

from laneracer.car.player import Player
from laneracer.car.opponent import Opponent, OpponentKind
from laneracer.car.policy import OpponentPolicy, PolicyConfig, PolicyDecision

__all__ = [
    "Player",
    "Opponent",
    "OpponentKind",
    "OpponentPolicy",
    "PolicyConfig",
    "PolicyDecision",
]
