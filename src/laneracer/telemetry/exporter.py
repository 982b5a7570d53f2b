"""
Run exporter - Write recorded runs to CSV or JSON.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List
import csv
import json

import numpy as np

from laneracer.telemetry.recorder import RunRecorder


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy types."""

    def default(self, obj):
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj)
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        return super().default(obj)


@dataclass
class ExporterConfig:
    """Exporter configuration."""
    output_dir: str = "./run_data"
    include_metadata: bool = True


class RunExporter:
    """Export recorded runs to files."""

    def __init__(self, config: ExporterConfig | None = None):
        """Initialize exporter.

        Args:
            config: Exporter configuration
        """
        self.config = config or ExporterConfig()
        self._output_path = Path(self.config.output_dir)
        self._output_path.mkdir(parents=True, exist_ok=True)

    @property
    def output_path(self) -> Path:
        return self._output_path

    def export_csv(
        self,
        recorder: RunRecorder,
        filename: str = "run.csv",
        channels: List[str] | None = None,
    ) -> Path:
        """Export channels as CSV rows, one per sample.

        All channels of a recorder are sampled together, so rows share
        the time column of the first channel.

        Args:
            recorder: Recorder with data
            filename: Output filename
            channels: Channels to export (None = all)

        Returns:
            Path to exported file
        """
        output_file = self._output_path / filename
        names = channels or list(recorder.channels.keys())
        selected = [recorder.get_channel(name) for name in names]
        if any(ch is None for ch in selected):
            raise ValueError(f"unknown channel in {names}")

        times = selected[0].get_times() if selected else np.array([])
        columns = [ch.get_values() for ch in selected]

        with open(output_file, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(["time_ms"] + names)
            for i, t in enumerate(times):
                row = [f"{t:.1f}"]
                for ch, values in zip(selected, columns):
                    row.append(f"{values[i]:.{ch.config.precision}f}")
                writer.writerow(row)

        return output_file

    def export_json(
        self,
        recorder: RunRecorder,
        filename: str = "run.json",
    ) -> Path:
        """Export all channels to a JSON file.

        Args:
            recorder: Recorder with data
            filename: Output filename

        Returns:
            Path to exported file
        """
        output_file = self._output_path / filename

        data = {
            "metadata": recorder.get_state() if self.config.include_metadata else {},
            "channels": {
                name: {
                    "unit": ch.config.unit,
                    "times": ch.get_times(),
                    "values": ch.get_values(),
                }
                for name, ch in recorder.channels.items()
            },
        }

        with open(output_file, "w") as f:
            json.dump(data, f, cls=NumpyEncoder, indent=2)

        return output_file
