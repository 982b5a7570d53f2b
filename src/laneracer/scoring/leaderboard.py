"""
Leaderboard - Ranked list of finished runs.

Provides:
- Leaderboard protocol used by the simulator
- In-memory leaderboard
- JSON file leaderboard
"""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Callable, List, Protocol
import json
import logging
import time

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 12
DEFAULT_NAME = "anon"
MAX_ENTRIES = 10


@dataclass(frozen=True)
class LeaderboardEntry:
    """One saved run."""
    name: str
    score: int
    timestamp: float


def normalize_name(name: str | None) -> str:
    """Trim and cut a player name, falling back to 'anon'."""
    cleaned = (name or "").strip()[:MAX_NAME_LENGTH]
    return cleaned or DEFAULT_NAME


def rank(entries: List[LeaderboardEntry]) -> List[LeaderboardEntry]:
    """Sort by score descending, earlier timestamp first on ties."""
    return sorted(entries, key=lambda e: (-e.score, e.timestamp))


class Leaderboard(Protocol):
    """Persistence collaborator for finished runs."""

    def submit(self, name: str, score: int) -> List[LeaderboardEntry]:
        ...

    def top(self, n: int = 5) -> List[LeaderboardEntry]:
        ...


class InMemoryLeaderboard:
    """Leaderboard kept in process memory."""

    def __init__(
        self,
        max_entries: int = MAX_ENTRIES,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize leaderboard.

        Args:
            max_entries: Number of entries kept
            clock: Timestamp source in seconds
        """
        self.max_entries = max_entries
        self._clock = clock
        self._entries: List[LeaderboardEntry] = []

    def _load(self) -> List[LeaderboardEntry]:
        return list(self._entries)

    def _store(self, entries: List[LeaderboardEntry]) -> None:
        self._entries = entries

    def submit(self, name: str, score: int) -> List[LeaderboardEntry]:
        """Add a run and return the updated ranking.

        Args:
            name: Player name
            score: Final score

        Returns:
            Ranked entries after insertion
        """
        if score < 0:
            raise ValueError("score must be non-negative")

        entry = LeaderboardEntry(
            name=normalize_name(name),
            score=int(score),
            timestamp=self._clock(),
        )
        entries = rank(self._load() + [entry])[: self.max_entries]
        self._store(entries)
        logger.info("Saved score %d for %s", entry.score, entry.name)
        return entries

    def top(self, n: int = 5) -> List[LeaderboardEntry]:
        """Get the n best entries."""
        return rank(self._load())[:n]

    def clear(self) -> None:
        self._store([])


class JsonFileLeaderboard(InMemoryLeaderboard):
    """Leaderboard stored as a JSON list in a file.

    An unreadable or corrupt file reads as an empty leaderboard.
    Write errors propagate to the caller.
    """

    def __init__(
        self,
        path: str | Path,
        max_entries: int = MAX_ENTRIES,
        clock: Callable[[], float] = time.time,
    ):
        super().__init__(max_entries=max_entries, clock=clock)
        self.path = Path(path)

    def _load(self) -> List[LeaderboardEntry]:
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            return [
                LeaderboardEntry(
                    name=str(item["name"]),
                    score=int(item["score"]),
                    timestamp=float(item["timestamp"]),
                )
                for item in raw
            ]
        except (OSError, ValueError, TypeError, KeyError) as e:
            logger.warning("Ignoring unreadable leaderboard %s: %s", self.path, e)
            return []

    def _store(self, entries: List[LeaderboardEntry]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps([asdict(e) for e in entries], indent=2),
            encoding="utf-8",
        )
