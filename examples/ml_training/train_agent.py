#!/usr/bin/env python3
"""
ML Training Example

This example demonstrates how to:
1. Use the headless lane racing environment
2. Compare a random policy with the heuristic driver
3. Track episode rewards and scores

Note: Neither policy is trained. Plug an RL algorithm in place of
``random_policy`` to learn from the same interface.

Run with: python train_agent.py
"""

import numpy as np
from laneracer.ml import HeuristicDriver, LaneRaceEnv, LaneRaceEnvConfig


def random_policy(rng: np.random.Generator, action_count: int) -> int:
    """Uniformly random action."""
    return int(rng.integers(0, action_count))


def run_episodes(env, choose_action, num_episodes):
    rewards, scores = [], []
    for episode in range(num_episodes):
        obs, info = env.reset(seed=episode)
        total_reward = 0.0
        done = False
        while not done:
            obs, reward, terminated, truncated, info = env.step(choose_action(obs))
            total_reward += reward
            done = terminated or truncated
        rewards.append(total_reward)
        scores.append(info["score"])
    return np.array(rewards), np.array(scores)


def main():
    print("=" * 60)
    print("laneracer ML Training Example")
    print("=" * 60)

    # Step 1: Create environment
    print("\n1. Creating environment...")
    env = LaneRaceEnv(LaneRaceEnvConfig(max_episode_ticks=5000))
    print(f"   Observation shape: {env.observation_shape}")
    print(f"   Actions: {env.action_count}")

    # Step 2: Random baseline
    print("\n2. Random policy...")
    rng = np.random.default_rng(0)
    rewards, scores = run_episodes(
        env, lambda obs: random_policy(rng, env.action_count), 5
    )
    print(f"   Mean reward = {np.mean(rewards):.2f}, mean score = {np.mean(scores):.1f}")

    # Step 3: Heuristic driver
    print("\n3. Heuristic driver...")
    driver = HeuristicDriver()
    rewards, scores = run_episodes(env, driver.act, 5)
    print(f"   Mean reward = {np.mean(rewards):.2f}, mean score = {np.mean(scores):.1f}")

    env.close()
    print("\n" + "=" * 60)
    print("Training example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
