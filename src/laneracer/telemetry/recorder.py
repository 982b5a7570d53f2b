"""
Run recorder - Records snapshots of a run over time.

Attach ``RunRecorder.record`` as a snapshot listener to capture every
tick and lifecycle transition.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Any

from laneracer.simulation.lifecycle import LifecycleState
from laneracer.simulation.snapshot import Snapshot
from laneracer.telemetry.channel import ChannelConfig, RunChannel


STANDARD_CHANNELS: Dict[str, tuple] = {
    # name: (unit, precision, extractor)
    "score": ("pts", 0, lambda s: s.score),
    "speed_multiplier": ("x", 3, lambda s: s.speed_multiplier),
    "effective_speed": ("x", 3, lambda s: s.effective_speed),
    "nitro_remaining": ("ms", 1, lambda s: s.nitro_remaining),
    "opponent_count": ("", 0, lambda s: len(s.opponents)),
    "player_lane": ("", 0, lambda s: s.player.lane),
}


@dataclass
class RecorderConfig:
    """Recorder configuration."""
    channels: List[str] | None = None  # Channels to record (None = all)
    capacity: int = 100000             # Per-channel sample capacity
    record_paused: bool = False        # Record snapshots taken while paused


class RunRecorder:
    """Records run telemetry from snapshots.

    Usage:
        recorder = RunRecorder()
        sim.add_snapshot_listener(recorder.record)
    """

    def __init__(self, config: RecorderConfig | None = None):
        """Initialize recorder.

        Args:
            config: Recorder configuration
        """
        self.config = config or RecorderConfig()

        self._channels: Dict[str, RunChannel] = {}
        self._extractors: Dict[str, Callable[[Snapshot], float]] = {}
        self._setup_channels()

        self._runs: int = 0
        self._final_scores: List[int] = []
        self._last_state: Optional[LifecycleState] = None

    def _setup_channels(self) -> None:
        names = self.config.channels or list(STANDARD_CHANNELS.keys())
        for name in names:
            if name not in STANDARD_CHANNELS:
                raise ValueError(f"unknown channel: {name}")
            unit, precision, extractor = STANDARD_CHANNELS[name]
            self._channels[name] = RunChannel(
                ChannelConfig(name, unit, precision, self.config.capacity)
            )
            self._extractors[name] = extractor

    @property
    def channels(self) -> Dict[str, RunChannel]:
        """Recorded channels by name."""
        return self._channels

    @property
    def runs_started(self) -> int:
        return self._runs

    @property
    def final_scores(self) -> List[int]:
        """Score of every run that ended in a collision."""
        return list(self._final_scores)

    def get_channel(self, name: str) -> Optional[RunChannel]:
        return self._channels.get(name)

    def record(self, snapshot: Snapshot) -> None:
        """Record one snapshot.

        Args:
            snapshot: Snapshot published by the simulator
        """
        state = snapshot.lifecycle_state
        previous = self._last_state
        self._last_state = state

        if state is LifecycleState.RUNNING and previous in (None, LifecycleState.IDLE):
            self._runs += 1
        if state is LifecycleState.GAME_OVER and previous is not LifecycleState.GAME_OVER:
            self._final_scores.append(snapshot.score)

        if state is LifecycleState.IDLE:
            return
        if state is LifecycleState.PAUSED and not self.config.record_paused:
            return

        for name, channel in self._channels.items():
            channel.record(snapshot.time_ms, float(self._extractors[name](snapshot)))

    def clear(self) -> None:
        """Drop recorded data."""
        for channel in self._channels.values():
            channel.clear()
        self._runs = 0
        self._final_scores = []
        self._last_state = None

    def get_state(self) -> Dict[str, Any]:
        """Get recorder summary."""
        return {
            "runs_started": self._runs,
            "final_scores": list(self._final_scores),
            "channels": {
                name: ch.get_state() for name, ch in self._channels.items()
            },
        }
