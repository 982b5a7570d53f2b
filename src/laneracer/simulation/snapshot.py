"""
Snapshots - Read-only views of the world after a completed tick.

Snapshots are immutable, so presentation, audio or persistence code
can hold on to one without seeing a tick in progress.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple
import threading

from laneracer.simulation.lifecycle import LifecycleState
from laneracer.simulation.world import World


@dataclass(frozen=True)
class PlayerView:
    lane: int
    alive: bool


@dataclass(frozen=True)
class OpponentView:
    kind: str
    lane: int
    distance: float
    overtaken: bool


@dataclass(frozen=True)
class Snapshot:
    """Complete read-only state after a tick or lifecycle transition."""
    score: int
    speed_multiplier: float
    effective_speed: float
    nitro_remaining: float
    lifecycle_state: LifecycleState
    player: PlayerView
    opponents: Tuple[OpponentView, ...]
    time_ms: float = 0.0
    frame: int = 0

    @classmethod
    def capture(
        cls,
        world: World,
        state: LifecycleState,
        effective_speed: float | None = None,
    ) -> "Snapshot":
        """Copy the current world into a snapshot.

        Args:
            world: World to copy
            state: Current lifecycle state
            effective_speed: Speed including nitro (defaults to multiplier)
        """
        if effective_speed is None:
            effective_speed = world.speed_multiplier

        opponents = tuple(
            OpponentView(
                kind=op.kind.value,
                lane=op.lane,
                distance=float(op.distance),
                overtaken=op.overtaken,
            )
            for op in world.opponents
        )
        return cls(
            score=world.score,
            speed_multiplier=float(world.speed_multiplier),
            effective_speed=float(effective_speed),
            nitro_remaining=float(world.nitro_remaining),
            lifecycle_state=state,
            player=PlayerView(lane=world.player.lane, alive=world.player.alive),
            opponents=opponents,
            time_ms=world.time_ms,
            frame=world.frame,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to plain types for JSON."""
        return {
            "score": self.score,
            "speed_multiplier": self.speed_multiplier,
            "effective_speed": self.effective_speed,
            "nitro_remaining": self.nitro_remaining,
            "lifecycle_state": self.lifecycle_state.value,
            "player": {"lane": self.player.lane, "alive": self.player.alive},
            "opponents": [
                {
                    "kind": op.kind,
                    "lane": op.lane,
                    "distance": op.distance,
                    "overtaken": op.overtaken,
                }
                for op in self.opponents
            ],
            "time_ms": self.time_ms,
            "frame": self.frame,
        }


SnapshotListener = Callable[[Snapshot], None]


class SnapshotBuffer:
    """Latest-snapshot holder shared between the tick and readers.

    The tick publishes finished snapshots; readers on other threads
    call ``latest()`` and always get a complete one.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._latest: Optional[Snapshot] = None
        self._published: int = 0
        self._listeners: List[SnapshotListener] = []

    @property
    def published_count(self) -> int:
        """Number of snapshots published."""
        with self._lock:
            return self._published

    def add_listener(self, listener: SnapshotListener) -> None:
        """Add callback invoked with every published snapshot."""
        self._listeners.append(listener)

    def remove_listener(self, listener: SnapshotListener) -> None:
        self._listeners.remove(listener)

    def publish(self, snapshot: Snapshot) -> None:
        """Make a snapshot visible to readers and listeners."""
        with self._lock:
            self._latest = snapshot
            self._published += 1

        for listener in list(self._listeners):
            listener(snapshot)

    def latest(self) -> Optional[Snapshot]:
        """Most recently published snapshot."""
        with self._lock:
            return self._latest
