"""
Lane racing environment - Gym-style headless interface.

Provides:
- reset/step interface for agents
- Discrete action set mapped onto intents
- Fixed-size numpy observations
- Reward from overtakes, survival and crashes
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Tuple
import numpy as np
from gymnasium import spaces

from laneracer.car.player import NUM_LANES
from laneracer.input.intents import Intent
from laneracer.simulation.lifecycle import LifecycleState
from laneracer.simulation.rng import NumpyRandomSource
from laneracer.simulation.simulator import Simulator, SimulatorConfig


class Action(IntEnum):
    """Discrete agent actions."""
    NOOP = 0
    LEFT = 1
    RIGHT = 2
    ACCELERATE = 3
    BRAKE = 4
    NITRO = 5


ACTION_INTENTS = {
    Action.LEFT: Intent.MOVE_LEFT,
    Action.RIGHT: Intent.MOVE_RIGHT,
    Action.ACCELERATE: Intent.ACCELERATE,
    Action.BRAKE: Intent.BRAKE,
    Action.NITRO: Intent.NITRO,
}

# lane one-hot, speed, nitro, nearest threat per lane
OBSERVATION_SIZE = NUM_LANES + 2 + NUM_LANES


@dataclass
class LaneRaceEnvConfig:
    """Environment configuration."""
    # Time
    dt_ms: float = 16.0
    max_episode_ticks: int = 20000

    # Reward
    overtake_reward: float = 1.0
    survival_reward: float = 0.001   # Per tick
    crash_penalty: float = 10.0

    # Simulation
    simulator: SimulatorConfig = field(default_factory=SimulatorConfig)


class LaneRaceEnv:
    """Single-agent lane racing environment.

    Usage:
        env = LaneRaceEnv()
        obs, info = env.reset(seed=0)

        while True:
            obs, reward, terminated, truncated, info = env.step(action)
            if terminated or truncated:
                break
    """

    def __init__(self, config: LaneRaceEnvConfig | None = None):
        """Initialize environment.

        Args:
            config: Environment configuration
        """
        self.config = config or LaneRaceEnvConfig()
        self._rng = NumpyRandomSource(self.config.simulator.seed)
        self.sim = Simulator(self.config.simulator, rng=self._rng)

        self._steps: int = 0
        self._initialized = False

    @property
    def observation_space(self) -> spaces.Box:
        """Observation space; every feature is normalized to [0, 1]."""
        return spaces.Box(
            low=0.0,
            high=1.0,
            shape=(OBSERVATION_SIZE,),
            dtype=np.float32,
        )

    @property
    def action_space(self) -> spaces.Discrete:
        """Discrete action space indexed by ``Action``."""
        return spaces.Discrete(len(Action))

    @property
    def observation_shape(self) -> Tuple[int]:
        return (OBSERVATION_SIZE,)

    @property
    def action_count(self) -> int:
        return len(Action)

    def reset(
        self,
        seed: int | None = None,
        options: Dict[str, Any] | None = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """Reset environment for a new episode.

        Args:
            seed: Random seed for spawning and opponent decisions
            options: Unused, accepted for gym compatibility

        Returns:
            Tuple of (initial_observation, info)
        """
        if seed is not None:
            self._rng.reseed(seed)

        self.sim.reset()
        self.sim.start()
        self._steps = 0
        self._initialized = True

        return self._get_observation(), self._get_info()

    def step(
        self,
        action: int,
    ) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        """Take one environment step.

        Args:
            action: Action index

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        if not self._initialized:
            raise RuntimeError("Environment not initialized. Call reset() first.")

        action = Action(int(action))
        intent = ACTION_INTENTS.get(action)
        if intent is not None:
            self.sim.intents.press(intent)

        overtakes_before = self.sim.scorer.total_overtakes
        self.sim.tick(self.config.dt_ms)
        self._steps += 1

        terminated = self.sim.state is LifecycleState.GAME_OVER
        truncated = not terminated and self._steps >= self.config.max_episode_ticks

        overtakes = self.sim.scorer.total_overtakes - overtakes_before
        reward = overtakes * self.config.overtake_reward
        if terminated:
            reward -= self.config.crash_penalty
        else:
            reward += self.config.survival_reward

        return self._get_observation(), float(reward), terminated, truncated, self._get_info()

    def _nearest_threats(self) -> np.ndarray:
        """Normalized distance of the closest oncoming car in each lane."""
        far_plane = self.config.simulator.projection.far_plane
        threats = np.ones(NUM_LANES, dtype=np.float32)
        for opponent in self.sim.world.opponents:
            if opponent.overtaken or opponent.distance < 0:
                continue
            d = np.clip(opponent.distance / far_plane, 0.0, 1.0)
            threats[opponent.lane] = min(threats[opponent.lane], d)
        return threats

    def _get_observation(self) -> np.ndarray:
        world = self.sim.world
        cfg = self.config.simulator

        lanes = np.zeros(NUM_LANES, dtype=np.float32)
        lanes[world.player.lane] = 1.0
        speed = world.speed_multiplier / cfg.max_speed_multiplier
        nitro = world.nitro_remaining / cfg.nitro_duration_ms

        return np.concatenate([
            lanes,
            np.array([speed, nitro], dtype=np.float32),
            self._nearest_threats(),
        ]).astype(np.float32)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.sim.score,
            "steps": self._steps,
            "overtakes": self.sim.scorer.total_overtakes,
            "lifecycle": self.sim.state.value,
            "speed_multiplier": self.sim.world.speed_multiplier,
        }

    def close(self) -> None:
        """Release resources (nothing to release)."""
        self._initialized = False
