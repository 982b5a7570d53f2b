"""
Input module - Player intents and device adapters.
"""

from laneracer.input.intents import Intent, IntentBuffer
from laneracer.input.adapters import KeyboardAdapter, TouchAdapter, DEFAULT_KEYMAP

__all__ = [
    "Intent",
    "IntentBuffer",
    "KeyboardAdapter",
    "TouchAdapter",
    "DEFAULT_KEYMAP",
]
