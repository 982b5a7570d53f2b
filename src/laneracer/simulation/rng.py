"""
Random sources for spawning and opponent decisions.

Provides:
- RandomSource protocol (single next_float method)
- NumpyRandomSource backed by numpy's Generator
- ScriptedRandomSource replaying a fixed sequence of draws
"""

from typing import Iterable, List, Protocol
import numpy as np


class RandomSourceError(RuntimeError):
    """Raised when the random source cannot produce a valid draw."""


class RandomSource(Protocol):
    """Source of uniform floats in [0, 1)."""

    def next_float(self) -> float:
        ...


class NumpyRandomSource:
    """Random source backed by ``np.random.default_rng``."""

    def __init__(self, seed: int | None = None):
        """Initialize source.

        Args:
            seed: Random seed (None for OS entropy)
        """
        self._rng = np.random.default_rng(seed)

    def next_float(self) -> float:
        return float(self._rng.random())

    def reseed(self, seed: int | None) -> None:
        """Restart the stream from a new seed."""
        self._rng = np.random.default_rng(seed)


class ScriptedRandomSource:
    """Replays a fixed sequence of draws.

    Used to drive the simulation through exact scenarios. Running
    past the end of the script is an error.
    """

    def __init__(self, values: Iterable[float]):
        self._values: List[float] = list(values)
        self._index: int = 0

    @property
    def remaining(self) -> int:
        """Number of unused draws."""
        return len(self._values) - self._index

    def extend(self, values: Iterable[float]) -> None:
        """Append more draws to the script."""
        self._values.extend(values)

    def next_float(self) -> float:
        if self._index >= len(self._values):
            raise RandomSourceError(
                f"scripted random source exhausted after {self._index} draws"
            )
        value = self._values[self._index]
        self._index += 1
        return value


def draw(source: RandomSource) -> float:
    """Take one validated draw from a random source.

    Args:
        source: Random source

    Returns:
        Float in [0, 1)

    Raises:
        RandomSourceError: If the source fails or returns an invalid value
    """
    try:
        value = source.next_float()
    except RandomSourceError:
        raise
    except Exception as exc:
        raise RandomSourceError(f"random source failed: {exc}") from exc

    if not 0.0 <= value < 1.0:
        raise RandomSourceError(f"random draw out of range: {value!r}")
    return value
