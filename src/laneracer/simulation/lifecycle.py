"""
Game lifecycle - State machine gating the simulation tick.

    IDLE --start--> RUNNING --pause--> PAUSED --resume--> RUNNING
    RUNNING --end (collision)--> GAME_OVER --reset--> IDLE

Reset is accepted from any state. Commands that do not apply to the
current state are ignored.
"""

from enum import Enum
from typing import Callable, Dict, List, Tuple
import logging

logger = logging.getLogger(__name__)


class LifecycleState(Enum):
    """Game lifecycle states."""
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


TransitionListener = Callable[[LifecycleState, LifecycleState], None]

_TRANSITIONS: Dict[Tuple[str, LifecycleState], LifecycleState] = {
    ("start", LifecycleState.IDLE): LifecycleState.RUNNING,
    ("pause", LifecycleState.RUNNING): LifecycleState.PAUSED,
    ("resume", LifecycleState.PAUSED): LifecycleState.RUNNING,
    ("end", LifecycleState.RUNNING): LifecycleState.GAME_OVER,
    ("reset", LifecycleState.IDLE): LifecycleState.IDLE,
    ("reset", LifecycleState.RUNNING): LifecycleState.IDLE,
    ("reset", LifecycleState.PAUSED): LifecycleState.IDLE,
    ("reset", LifecycleState.GAME_OVER): LifecycleState.IDLE,
}


class GameLifecycle:
    """Finite state machine for a single run."""

    def __init__(self):
        self._state = LifecycleState.IDLE
        self._listeners: List[TransitionListener] = []

    @property
    def state(self) -> LifecycleState:
        """Current state."""
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is LifecycleState.RUNNING

    @property
    def is_paused(self) -> bool:
        return self._state is LifecycleState.PAUSED

    @property
    def is_over(self) -> bool:
        return self._state is LifecycleState.GAME_OVER

    def add_listener(self, listener: TransitionListener) -> None:
        """Add callback taking (old_state, new_state) arguments."""
        self._listeners.append(listener)

    def start(self) -> bool:
        """Idle -> Running."""
        return self._fire("start")

    def pause(self) -> bool:
        """Running -> Paused."""
        return self._fire("pause")

    def resume(self) -> bool:
        """Paused -> Running."""
        return self._fire("resume")

    def end(self) -> bool:
        """Running -> GameOver."""
        return self._fire("end")

    def reset(self) -> bool:
        """Any state -> Idle."""
        return self._fire("reset")

    def _fire(self, command: str) -> bool:
        target = _TRANSITIONS.get((command, self._state))
        if target is None:
            logger.debug("Ignoring %s while %s", command, self._state.value)
            return False

        previous = self._state
        self._state = target
        logger.info("Lifecycle %s: %s -> %s", command, previous.value, target.value)

        for listener in self._listeners:
            listener(previous, target)
        return True
