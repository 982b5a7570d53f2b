#!/usr/bin/env python3
"""
laneracer headless runner

Plays lane racer runs with the heuristic driver and:
- Logs lifecycle transitions and the final score
- Records run telemetry and optionally exports it
- Saves finished runs to a JSON leaderboard

Usage:
    python run_race.py                         # One run, random seed
    python run_race.py --seed 7 --runs 5       # Five seeded runs
    python run_race.py --leaderboard lb.json   # Save scores
    python run_race.py --export ./run_data     # Export telemetry
    python run_race.py --help                  # Show all options
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from laneracer.ml import HeuristicDriver, LaneRaceEnv, LaneRaceEnvConfig
from laneracer.scoring import JsonFileLeaderboard
from laneracer.simulation import SimulatorConfig
from laneracer.telemetry import RunExporter, RunRecorder
from laneracer.telemetry.exporter import ExporterConfig

logger = logging.getLogger("laneracer.run")


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Headless lane racer runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Reproducible run
    python run_race.py --seed 42

    # Several runs saved under a name
    python run_race.py --runs 10 --name ACE --leaderboard scores.json

    # Verbose logging with spawns and overtakes
    python run_race.py --log-level DEBUG
        """
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for the first run (incremented per run)"
    )
    parser.add_argument(
        "--runs",
        type=int,
        default=1,
        help="Number of runs (default: 1)"
    )
    parser.add_argument(
        "--max-ticks",
        type=int,
        default=20000,
        help="Tick limit per run (default: 20000)"
    )
    parser.add_argument(
        "--dt",
        type=float,
        default=16.0,
        help="Tick length in milliseconds (default: 16)"
    )

    # Results
    parser.add_argument(
        "--name",
        default="bot",
        help="Leaderboard name, up to 12 characters (default: bot)"
    )
    parser.add_argument(
        "--leaderboard",
        type=Path,
        help="JSON leaderboard file to save finished runs to"
    )
    parser.add_argument(
        "--export",
        type=Path,
        help="Directory to export run telemetry (CSV and JSON)"
    )

    # Logging
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Log level (default: INFO)"
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Log file path (in addition to stdout)"
    )

    return parser.parse_args(argv)


def setup_logging(level: str, log_file: Path | None = None) -> None:
    """Configure logging."""
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    handlers = [logging.StreamHandler(sys.stdout)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level),
        format=log_format,
        handlers=handlers
    )


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    config = LaneRaceEnvConfig(
        dt_ms=args.dt,
        max_episode_ticks=args.max_ticks,
        simulator=SimulatorConfig(seed=args.seed),
    )
    env = LaneRaceEnv(config)
    driver = HeuristicDriver()
    recorder = RunRecorder()
    env.sim.add_snapshot_listener(recorder.record)

    leaderboard = JsonFileLeaderboard(args.leaderboard) if args.leaderboard else None
    env.sim.leaderboard = leaderboard

    for run in range(args.runs):
        seed = None if args.seed is None else args.seed + run
        obs, info = env.reset(seed=seed)

        done = False
        while not done:
            obs, reward, terminated, truncated, info = env.step(driver.act(obs))
            done = terminated or truncated

        logger.info(
            "Run %d: score %d, %d overtakes, %d ticks (%s)",
            run + 1, info["score"], info["overtakes"], info["steps"],
            "crashed" if terminated else "time limit",
        )

        if terminated and leaderboard is not None:
            ranking = env.sim.save_score(args.name)
            for place, entry in enumerate(ranking[:5], start=1):
                logger.info("  %d. %-12s %d", place, entry.name, entry.score)

    env.close()

    if args.export:
        exporter = RunExporter(ExporterConfig(output_dir=str(args.export)))
        csv_path = exporter.export_csv(recorder)
        json_path = exporter.export_json(recorder)
        logger.info("Telemetry written to %s and %s", csv_path, json_path)

    return 0


if __name__ == "__main__":
    sys.exit(main())
