#!/usr/bin/env python3
"""
Telemetry Recording Example

This example demonstrates how to:
1. Attach a RunRecorder to the simulator's snapshots
2. Drive several runs with the heuristic driver
3. Inspect channel statistics
4. Export telemetry to CSV and JSON

Run with: python record_telemetry.py
"""

import numpy as np

from laneracer.ml import HeuristicDriver, LaneRaceEnv
from laneracer.telemetry import RunExporter, RunRecorder
from laneracer.telemetry.exporter import ExporterConfig


def main():
    print("=" * 60)
    print("laneracer Telemetry Recording Example")
    print("=" * 60)

    # Step 1: Setup
    print("\n1. Setting up recorder...")
    env = LaneRaceEnv()
    recorder = RunRecorder()
    env.sim.add_snapshot_listener(recorder.record)
    driver = HeuristicDriver()
    print(f"   Channels: {list(recorder.channels.keys())}")

    # Step 2: Record runs
    print("\n2. Recording 3 runs...")
    for seed in range(3):
        obs, info = env.reset(seed=seed)
        done = False
        while not done:
            obs, reward, terminated, truncated, info = env.step(driver.act(obs))
            done = terminated or truncated
        print(f"   Run {seed + 1}: score = {info['score']}, ticks = {info['steps']}")

    # Step 3: Statistics
    print("\n3. Channel statistics:")
    for name, channel in recorder.channels.items():
        state = channel.get_state()
        print(f"   {name:<18} min = {state['min']}, max = {state['max']}, "
              f"mean = {state['mean']}")

    scores = np.array(recorder.final_scores or [0])
    print(f"\n   Mean final score: {np.mean(scores):.1f}")

    # Step 4: Export
    print("\n4. Exporting...")
    exporter = RunExporter(ExporterConfig(output_dir="./run_data"))
    print(f"   CSV:  {exporter.export_csv(recorder)}")
    print(f"   JSON: {exporter.export_json(recorder)}")

    print("\n" + "=" * 60)
    print("Telemetry example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
