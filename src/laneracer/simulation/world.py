"""
World - Entity store and game state for a run.

Manages:
- The player car
- Live opponents (keyed by internal id)
- Score, speed multiplier, nitro and spawn accumulator
- Simulation time
"""

from typing import Dict, List, Optional

from laneracer.car.player import Player
from laneracer.car.opponent import Opponent


BASE_SPEED = 3.0
DEFAULT_SPEED_MULTIPLIER = 1.0


class World:
    """World state container for a run.

    The simulator owns one world and is its only mutator. Several
    worlds can coexist, e.g. one per test or per training env.
    """

    def __init__(self, base_speed: float = BASE_SPEED):
        """Initialize world.

        Args:
            base_speed: Constant forward speed of the player
        """
        self.base_speed = base_speed
        self.player = Player()

        self._opponents: Dict[int, Opponent] = {}
        self._next_opponent_id: int = 0

        # Game state
        self.score: int = 0
        self.speed_multiplier: float = DEFAULT_SPEED_MULTIPLIER
        self.spawn_accumulator: float = 0.0
        self.nitro_remaining: float = 0.0

        # Timing
        self._time_ms: float = 0.0
        self._frame: int = 0

    @property
    def time_ms(self) -> float:
        """Simulated time in milliseconds."""
        return self._time_ms

    @property
    def frame(self) -> int:
        """Number of completed ticks."""
        return self._frame

    @property
    def opponents(self) -> List[Opponent]:
        """Live opponents."""
        return list(self._opponents.values())

    @property
    def opponent_count(self) -> int:
        """Number of live opponents."""
        return len(self._opponents)

    def move_player_left(self) -> bool:
        """Move the player one lane left (ignored at the edge)."""
        return self.player.move_left()

    def move_player_right(self) -> bool:
        """Move the player one lane right (ignored at the edge)."""
        return self.player.move_right()

    def add_opponent(self, opponent: Opponent) -> int:
        """Add an opponent to the world.

        Args:
            opponent: Opponent to add

        Returns:
            Opponent ID
        """
        opponent_id = self._next_opponent_id
        self._next_opponent_id += 1

        opponent.opponent_id = opponent_id
        self._opponents[opponent_id] = opponent
        return opponent_id

    def remove_opponent(self, opponent_id: int) -> bool:
        """Remove an opponent.

        Args:
            opponent_id: ID of opponent to remove

        Returns:
            True if the opponent was removed
        """
        return self._opponents.pop(opponent_id, None) is not None

    def get_opponent(self, opponent_id: int) -> Optional[Opponent]:
        """Get opponent by ID."""
        return self._opponents.get(opponent_id)

    def award(self, points: int) -> None:
        """Add points to the score."""
        if points < 0:
            raise ValueError("score can only increase")
        self.score += points

    def advance_time(self, dt_ms: float) -> None:
        """Advance simulation time by one tick.

        Args:
            dt_ms: Tick duration in milliseconds
        """
        self._time_ms += dt_ms
        self._frame += 1

    def reset(self) -> None:
        """Rebuild all state from defaults."""
        self.player.reset()
        self._opponents.clear()
        self._next_opponent_id = 0
        self.score = 0
        self.speed_multiplier = DEFAULT_SPEED_MULTIPLIER
        self.spawn_accumulator = 0.0
        self.nitro_remaining = 0.0
        self._time_ms = 0.0
        self._frame = 0

    def get_state(self) -> dict:
        """Get world state for serialization.

        Returns:
            Dictionary containing world state
        """
        return {
            "time_ms": self._time_ms,
            "frame": self._frame,
            "score": self.score,
            "speed_multiplier": self.speed_multiplier,
            "nitro_remaining": self.nitro_remaining,
            "spawn_accumulator": self.spawn_accumulator,
            "player": {"lane": self.player.lane, "alive": self.player.alive},
            "opponents": [op.get_state() for op in self._opponents.values()],
        }
