"""
Run channel - Fixed-capacity time series for one recorded value.

Provides:
- Ring-buffered numpy storage
- Running statistics over the whole run
"""

from dataclasses import dataclass
import numpy as np


@dataclass
class ChannelConfig:
    """Configuration for a run channel."""
    name: str = "unnamed"
    unit: str = ""
    precision: int = 3
    capacity: int = 10000


class RunChannel:
    """Single recorded value over time.

    Keeps the most recent ``capacity`` samples. Statistics cover every
    sample recorded since the last clear, including evicted ones.
    """

    def __init__(self, config: ChannelConfig | None = None, name: str = "channel"):
        """Initialize channel.

        Args:
            config: Channel configuration
            name: Channel name (used if config not provided)
        """
        self.config = config or ChannelConfig(name=name)
        if self.config.capacity <= 0:
            raise ValueError("capacity must be positive")

        self._times = np.zeros(self.config.capacity, dtype=np.float64)
        self._values = np.zeros(self.config.capacity, dtype=np.float64)
        self._head: int = 0
        self._size: int = 0

        self._min: float = float("inf")
        self._max: float = float("-inf")
        self._sum: float = 0.0
        self._count: int = 0

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def count(self) -> int:
        """Samples recorded since the last clear."""
        return self._count

    @property
    def size(self) -> int:
        """Samples currently held."""
        return self._size

    @property
    def min_value(self) -> float:
        return self._min if self._count > 0 else 0.0

    @property
    def max_value(self) -> float:
        return self._max if self._count > 0 else 0.0

    @property
    def mean(self) -> float:
        return self._sum / self._count if self._count > 0 else 0.0

    @property
    def last_value(self) -> float:
        if self._size == 0:
            return 0.0
        return float(self._values[(self._head - 1) % self.config.capacity])

    def record(self, time: float, value: float) -> None:
        """Record a sample.

        Args:
            time: Timestamp in milliseconds
            value: Sample value
        """
        self._times[self._head] = time
        self._values[self._head] = value
        self._head = (self._head + 1) % self.config.capacity
        self._size = min(self._size + 1, self.config.capacity)

        self._min = min(self._min, value)
        self._max = max(self._max, value)
        self._sum += value
        self._count += 1

    def _ordered(self, buffer: np.ndarray) -> np.ndarray:
        if self._size < self.config.capacity:
            return buffer[: self._size].copy()
        return np.roll(buffer, -self._head)

    def get_values(self) -> np.ndarray:
        """Held values, oldest first."""
        return self._ordered(self._values)

    def get_times(self) -> np.ndarray:
        """Held timestamps, oldest first."""
        return self._ordered(self._times)

    def get_last_n(self, n: int) -> np.ndarray:
        """Last n held values."""
        if n <= 0:
            return np.array([], dtype=np.float64)
        return self.get_values()[-n:]

    def clear(self) -> None:
        """Drop all samples and statistics."""
        self._head = 0
        self._size = 0
        self._min = float("inf")
        self._max = float("-inf")
        self._sum = 0.0
        self._count = 0

    def get_state(self) -> dict:
        """Get channel summary."""
        precision = self.config.precision
        has_data = self._count > 0
        return {
            "name": self.config.name,
            "unit": self.config.unit,
            "count": self._count,
            "min": round(self._min, precision) if has_data else None,
            "max": round(self._max, precision) if has_data else None,
            "mean": round(self.mean, precision) if has_data else None,
            "last": round(self.last_value, precision) if has_data else None,
        }
