"""
Device adapters - Translate key and touch events into intents.

No device library is bound here; a front end forwards its events
(key names, touch coordinates) to these adapters.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Set

from laneracer.input.intents import Intent, IntentBuffer, LEVEL_INTENTS


DEFAULT_KEYMAP: Dict[str, Intent] = {
    "ArrowLeft": Intent.MOVE_LEFT,
    "a": Intent.MOVE_LEFT,
    "ArrowRight": Intent.MOVE_RIGHT,
    "d": Intent.MOVE_RIGHT,
    "ArrowUp": Intent.ACCELERATE,
    "ArrowDown": Intent.BRAKE,
    "Space": Intent.BRAKE,           # Secondary brake
    "n": Intent.NITRO,
    "Escape": Intent.PAUSE,
}


class KeyboardAdapter:
    """Maps key down/up events to intents.

    Discrete intents fire once per physical press: auto-repeat
    keydowns are ignored until the key is released.
    """

    def __init__(self, buffer: IntentBuffer, keymap: Dict[str, Intent] | None = None):
        """Initialize adapter.

        Args:
            buffer: Intent buffer to write to
            keymap: Key name to intent mapping
        """
        self.buffer = buffer
        self.keymap = dict(keymap or DEFAULT_KEYMAP)
        self._down: Set[str] = set()

    def key_down(self, key: str) -> Optional[Intent]:
        """Handle a key press.

        Returns:
            Intent triggered, or None if unmapped or repeated
        """
        intent = self.keymap.get(key)
        if intent is None or key in self._down:
            return None

        self._down.add(key)
        self.buffer.hold(intent)
        return intent

    def key_up(self, key: str) -> None:
        """Handle a key release."""
        self._down.discard(key)
        intent = self.keymap.get(key)
        if intent in LEVEL_INTENTS:
            # Another key may still hold the same intent
            still_held = any(self.keymap.get(k) is intent for k in self._down)
            if not still_held:
                self.buffer.release(intent)


@dataclass
class TouchState:
    """In-progress touch gesture."""
    start_x: float = 0.0
    start_y: float = 0.0
    active: bool = False


@dataclass
class TouchAdapter:
    """Maps taps and swipes to intents.

    A tap on the left/right half of the surface moves a lane. A mostly
    vertical swipe longer than ``min_swipe`` pixels fires nitro (up) or
    brake (down).
    """
    buffer: IntentBuffer
    surface_width: float = 720.0
    min_swipe: float = 40.0
    _touch: TouchState = field(default_factory=TouchState)

    def tap(self, x: float) -> Intent:
        """Handle a tap or click at horizontal position x."""
        intent = Intent.MOVE_LEFT if x < self.surface_width / 2 else Intent.MOVE_RIGHT
        self.buffer.press(intent)
        return intent

    def touch_start(self, x: float, y: float, touches: int = 1) -> None:
        """Begin a gesture. Multi-touch is ignored."""
        if touches > 1:
            return
        self._touch = TouchState(start_x=x, start_y=y, active=True)

    def touch_end(self, x: float | None = None, y: float | None = None) -> Optional[Intent]:
        """Finish a gesture.

        Args:
            x: End X (defaults to the start point)
            y: End Y (defaults to the start point)

        Returns:
            Intent triggered, or None if no gesture was active
        """
        if not self._touch.active:
            return None

        touch = self._touch
        self._touch = TouchState()

        end_x = touch.start_x if x is None else x
        end_y = touch.start_y if y is None else y
        dx = end_x - touch.start_x
        dy = end_y - touch.start_y

        if abs(dy) > self.min_swipe and abs(dy) > abs(dx):
            intent = Intent.NITRO if dy < 0 else Intent.BRAKE
            self.buffer.press(intent)
            return intent

        return self.tap(touch.start_x)
