"""Tests for the leaderboard."""

import json
from itertools import count

import pytest

from laneracer.scoring.leaderboard import (
    InMemoryLeaderboard,
    JsonFileLeaderboard,
    LeaderboardEntry,
    normalize_name,
    rank,
)


def _ticking_clock():
    ticks = count(1)
    return lambda: float(next(ticks))


class TestNames:
    """Test name normalization."""

    def test_trimmed(self):
        assert normalize_name("  ace  ") == "ace"

    def test_cut_to_twelve(self):
        assert normalize_name("abcdefghijklmnop") == "abcdefghijkl"

    def test_empty_falls_back(self):
        assert normalize_name("") == "anon"
        assert normalize_name("   ") == "anon"
        assert normalize_name(None) == "anon"


class TestInMemoryLeaderboard:
    """Test ranking and retention."""

    def test_sorted_by_score(self):
        board = InMemoryLeaderboard(clock=_ticking_clock())
        board.submit("low", 50)
        board.submit("high", 200)
        board.submit("mid", 100)

        assert [e.name for e in board.top()] == ["high", "mid", "low"]

    def test_ties_favour_earlier_run(self):
        board = InMemoryLeaderboard(clock=_ticking_clock())
        board.submit("first", 100)
        board.submit("second", 100)

        assert [e.name for e in board.top()] == ["first", "second"]

    def test_keeps_ten(self):
        board = InMemoryLeaderboard(clock=_ticking_clock())
        for i in range(15):
            ranking = board.submit(f"p{i}", i * 10)

        assert len(ranking) == 10
        assert ranking[0].score == 140
        assert ranking[-1].score == 50
        assert len(board.top()) == 5
        assert len(board.top(20)) == 10

    def test_negative_score_rejected(self):
        board = InMemoryLeaderboard()

        with pytest.raises(ValueError):
            board.submit("cheat", -5)
        assert board.top() == []

    def test_rank(self):
        entries = [
            LeaderboardEntry("b", 10, 2.0),
            LeaderboardEntry("a", 10, 1.0),
            LeaderboardEntry("c", 30, 3.0),
        ]

        assert [e.name for e in rank(entries)] == ["c", "a", "b"]


class TestJsonFileLeaderboard:
    """Test file persistence."""

    def test_persists_between_instances(self, tmp_path):
        path = tmp_path / "scores.json"
        JsonFileLeaderboard(path, clock=_ticking_clock()).submit("ace", 300)

        reloaded = JsonFileLeaderboard(path)

        assert reloaded.top() == [LeaderboardEntry("ace", 300, 1.0)]
        assert json.loads(path.read_text())[0]["name"] == "ace"

    def test_missing_file_is_empty(self, tmp_path):
        assert JsonFileLeaderboard(tmp_path / "none.json").top() == []

    def test_corrupt_file_is_empty(self, tmp_path):
        """A corrupt file reads as empty and is replaced on the next save."""
        path = tmp_path / "scores.json"
        path.write_text("{not json")
        board = JsonFileLeaderboard(path)

        assert board.top() == []
        board.submit("ace", 10)
        assert [e.name for e in JsonFileLeaderboard(path).top()] == ["ace"]

    def test_wrong_shape_is_empty(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text(json.dumps([{"name": "x"}]))

        assert JsonFileLeaderboard(path).top() == []
