"""
Telemetry module - Run recording and export.

This module contains:
- RunChannel: Ring-buffered time series
- RunRecorder: Snapshot listener recording run channels
- RunExporter: CSV/JSON export
"""

from laneracer.telemetry.channel import RunChannel
from laneracer.telemetry.recorder import RunRecorder
from laneracer.telemetry.exporter import RunExporter

__all__ = [
    "RunChannel",
    "RunRecorder",
    "RunExporter",
]
