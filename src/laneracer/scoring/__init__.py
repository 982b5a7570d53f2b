"""
Scoring module - Overtake points and the leaderboard.

This module contains:
- OvertakeScorer: Points for dodged opponents
- Leaderboard: Ranked list of finished runs
"""

from laneracer.scoring.overtake import OvertakeScorer, OvertakeConfig
from laneracer.scoring.leaderboard import (
    InMemoryLeaderboard,
    JsonFileLeaderboard,
    Leaderboard,
    LeaderboardEntry,
)

__all__ = [
    "OvertakeScorer",
    "OvertakeConfig",
    "InMemoryLeaderboard",
    "JsonFileLeaderboard",
    "Leaderboard",
    "LeaderboardEntry",
]
