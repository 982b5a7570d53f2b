"""Tests for run telemetry recording and export."""

import csv
import json

import pytest
import numpy as np

from laneracer.car.opponent import Opponent
from laneracer.simulation.rng import ScriptedRandomSource
from laneracer.simulation.simulator import Simulator
from laneracer.telemetry.channel import ChannelConfig, RunChannel
from laneracer.telemetry.exporter import ExporterConfig, RunExporter
from laneracer.telemetry.recorder import RecorderConfig, RunRecorder


def _recorded_simulator(recorder, draws=()):
    sim = Simulator(rng=ScriptedRandomSource(draws), clock=lambda: 0.0)
    sim.add_snapshot_listener(recorder.record)
    return sim


class TestRunChannel:
    """Test ring-buffered channel."""

    def test_channel_creation(self):
        channel = RunChannel(name="score")

        assert channel.name == "score"
        assert channel.count == 0
        assert channel.mean == 0.0

    def test_record_and_stats(self):
        channel = RunChannel(name="speed")
        for i, value in enumerate([1.0, 3.0, 2.0]):
            channel.record(i * 16.0, value)

        assert channel.min_value == 1.0
        assert channel.max_value == 3.0
        assert channel.mean == pytest.approx(2.0)
        assert channel.last_value == 2.0

    def test_ring_buffer_keeps_latest(self):
        """Old samples are evicted but still count toward stats."""
        channel = RunChannel(ChannelConfig(name="lane", capacity=3))
        for i in range(5):
            channel.record(float(i), float(i))

        np.testing.assert_array_equal(channel.get_values(), [2.0, 3.0, 4.0])
        np.testing.assert_array_equal(channel.get_times(), [2.0, 3.0, 4.0])
        assert channel.size == 3
        assert channel.count == 5
        assert channel.min_value == 0.0

    def test_get_last_n(self):
        channel = RunChannel(name="score")
        for i in range(10):
            channel.record(float(i), float(i))

        np.testing.assert_array_equal(channel.get_last_n(2), [8.0, 9.0])
        assert channel.get_last_n(0).size == 0

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            RunChannel(ChannelConfig(capacity=0))

    def test_clear(self):
        channel = RunChannel(name="score")
        channel.record(0.0, 5.0)
        channel.clear()

        assert channel.size == 0
        assert channel.get_state()["min"] is None


class TestRunRecorder:
    """Test recording simulator snapshots."""

    def test_records_running_ticks(self):
        recorder = RunRecorder()
        sim = _recorded_simulator(recorder)
        sim.start()
        for _ in range(10):
            sim.tick(16.0)

        assert recorder.runs_started == 1
        # start transition plus ten ticks
        assert recorder.get_channel("score").count == 11
        assert recorder.get_channel("player_lane").last_value == 1.0

    def test_paused_not_recorded_by_default(self):
        recorder = RunRecorder()
        sim = _recorded_simulator(recorder)
        sim.start()
        sim.pause()

        assert recorder.get_channel("score").count == 1

    def test_record_paused(self):
        recorder = RunRecorder(RecorderConfig(record_paused=True))
        sim = _recorded_simulator(recorder)
        sim.start()
        sim.pause()

        assert recorder.get_channel("score").count == 2

    def test_final_scores(self):
        recorder = RunRecorder()
        sim = _recorded_simulator(recorder, draws=[0.5])
        sim.start()
        sim.world.award(25)
        sim.world.add_opponent(Opponent(lane=1, distance=400.0, approach_speed=5.0))
        sim.tick(16.0)
        sim.reset()
        sim.start()

        assert recorder.final_scores == [25]
        assert recorder.runs_started == 2

    def test_channel_subset(self):
        recorder = RunRecorder(RecorderConfig(channels=["score", "opponent_count"]))

        assert set(recorder.channels) == {"score", "opponent_count"}

    def test_unknown_channel(self):
        with pytest.raises(ValueError):
            RunRecorder(RecorderConfig(channels=["fuel"]))


class TestRunExporter:
    """Test file export."""

    def _recorder(self):
        recorder = RunRecorder()
        sim = _recorded_simulator(recorder)
        sim.start()
        for _ in range(4):
            sim.tick(16.0)
        return recorder

    def test_export_csv(self, tmp_path):
        exporter = RunExporter(ExporterConfig(output_dir=str(tmp_path)))
        path = exporter.export_csv(self._recorder(), channels=["score", "effective_speed"])

        with open(path, newline="") as f:
            rows = list(csv.reader(f))

        assert rows[0] == ["time_ms", "score", "effective_speed"]
        assert len(rows) == 6
        assert rows[-1] == ["64.0", "0", "1.000"]

    def test_export_csv_unknown_channel(self, tmp_path):
        exporter = RunExporter(ExporterConfig(output_dir=str(tmp_path)))

        with pytest.raises(ValueError):
            exporter.export_csv(self._recorder(), channels=["fuel"])

    def test_export_json(self, tmp_path):
        exporter = RunExporter(ExporterConfig(output_dir=str(tmp_path)))
        path = exporter.export_json(self._recorder())

        data = json.loads(path.read_text())

        assert data["metadata"]["runs_started"] == 1
        assert data["channels"]["score"]["values"] == [0.0] * 5
        assert data["channels"]["nitro_remaining"]["unit"] == "ms"
