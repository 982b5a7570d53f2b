#!/usr/bin/env python3
"""
Basic Simulation Example

This example demonstrates how to:
1. Create a seeded simulator and start a run
2. Feed intents the way a keyboard front end would
3. Step the simulation at 60 Hz
4. Read snapshots and save the final score

Run with: python run_simulation.py
"""

from laneracer import Simulator, SimulatorConfig, LifecycleState
from laneracer.input import KeyboardAdapter
from laneracer.scoring import InMemoryLeaderboard


def main():
    print("=" * 60)
    print("laneracer Basic Simulation Example")
    print("=" * 60)

    # Step 1: Create simulator
    print("\n1. Setting up simulation...")
    leaderboard = InMemoryLeaderboard()
    sim = Simulator(SimulatorConfig(seed=42), leaderboard=leaderboard)
    keyboard = KeyboardAdapter(sim.intents)
    sim.start()
    print(f"   State: {sim.state.value}, lane: {sim.world.player.lane}")

    # Step 2: Run with a scripted key pattern until the player crashes
    print("\n2. Running (weaving between lanes every 90 ticks)...")
    keys = ["ArrowLeft", "ArrowRight", "ArrowRight", "ArrowLeft"]
    tick = 0
    while sim.state is LifecycleState.RUNNING and tick < 20000:
        if tick % 90 == 0:
            key = keys[(tick // 90) % len(keys)]
            keyboard.key_down(key)
            keyboard.key_up(key)

        snapshot = sim.tick(16.0)
        tick += 1

        if tick % 300 == 0 and snapshot is not None:
            print(f"   Tick {tick}: score = {snapshot.score}, "
                  f"speed = {snapshot.speed_multiplier:.2f}x, "
                  f"opponents = {len(snapshot.opponents)}")

    # Step 3: Final snapshot
    print("\n3. Final snapshot:")
    snapshot = sim.snapshot
    print(f"   State: {snapshot.lifecycle_state.value}")
    print(f"   Score: {snapshot.score}")
    print(f"   Player: lane {snapshot.player.lane}, alive = {snapshot.player.alive}")
    print(f"   Time: {snapshot.time_ms / 1000:.1f} s over {snapshot.frame} ticks")

    # Step 4: Save score
    if sim.state is LifecycleState.GAME_OVER:
        print("\n4. Leaderboard:")
        for place, entry in enumerate(sim.save_score("DEMO"), start=1):
            print(f"   {place}. {entry.name:<12} {entry.score}")

    print("\n" + "=" * 60)
    print("Simulation complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
