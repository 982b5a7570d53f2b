"""
Input intents - Abstract player commands consumed once per tick.

Device callbacks write into an ``IntentBuffer``; the simulation tick
drains it at the start of each run. Intents are flags, not a queue:
repeating one before the next drain has the effect of a single press.
"""

from enum import Enum
from typing import FrozenSet, Set
import threading


class Intent(Enum):
    """Player intents."""
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    ACCELERATE = "accelerate"
    BRAKE = "brake"
    NITRO = "nitro"
    PAUSE = "pause"


# Reported on every drain while held
LEVEL_INTENTS: FrozenSet[Intent] = frozenset({Intent.ACCELERATE})


class IntentBuffer:
    """Single-producer, single-consumer intent flags.

    Edge intents are latched by ``press`` until the next ``drain``.
    Level intents stay active between ``hold`` and ``release``.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._pending: Set[Intent] = set()
        self._held: Set[Intent] = set()

    def press(self, intent: Intent) -> None:
        """Latch an intent for the next tick."""
        with self._lock:
            self._pending.add(intent)

    def hold(self, intent: Intent) -> None:
        """Start holding an intent.

        Edge intents are simply latched once.
        """
        with self._lock:
            if intent in LEVEL_INTENTS:
                self._held.add(intent)
            else:
                self._pending.add(intent)

    def release(self, intent: Intent) -> None:
        """Stop holding a level intent."""
        with self._lock:
            self._held.discard(intent)

    def is_held(self, intent: Intent) -> bool:
        with self._lock:
            return intent in self._held

    def peek(self) -> FrozenSet[Intent]:
        """Intents the next drain would return, without clearing."""
        with self._lock:
            return frozenset(self._pending | self._held)

    def drain(self) -> FrozenSet[Intent]:
        """Take all active intents and clear the latched ones."""
        with self._lock:
            active = frozenset(self._pending | self._held)
            self._pending.clear()
        return active

    def clear_latched(self) -> None:
        """Drop latched intents, keeping held ones."""
        with self._lock:
            self._pending.clear()

    def clear(self) -> None:
        """Drop latched and held intents."""
        with self._lock:
            self._pending.clear()
            self._held.clear()
