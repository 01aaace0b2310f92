from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Command, FallingBlockGame, GameConfig, ScoringRules
from falling_blocks.game.grid import board_features
from falling_blocks.game.pieces import CATALOG
from falling_blocks.game.scheduler import SimulatedClock


# Discrete action index -> engine command. Pause and reset stay with the host.
ENV_ACTIONS: Tuple[Command, ...] = (
    Command.MOVE_LEFT,
    Command.MOVE_RIGHT,
    Command.ROTATE_CW,
    Command.ROTATE_CCW,
    Command.SOFT_DROP,
    Command.HARD_DROP,
    Command.HOLD,
    Command.NONE,
)


class FallingBlockEnv(gym.Env):
    """
    Real-time falling-block game as a Gymnasium environment.

    Each step applies one command, then advances a simulated clock by
    `ms_per_step` and delivers a tick, so gravity keeps pulling the piece down
    even when the agent idles. Actions that would not change the game are
    masked out (see `get_action_mask`) and penalized if taken.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        render_mode: Optional[str] = None,
        reward_weights: Optional[Dict[str, float]] = None,
        ms_per_step: float = 50.0,
        max_steps: int = 10000,
        invalid_action_penalty: float = -0.1,
        step_penalty: float = 0.0,
        terminal_penalty: float = 0.0,
    ) -> None:
        super().__init__()
        self.game = FallingBlockGame(config, rules)
        self.clock = SimulatedClock(step_ms=ms_per_step)
        self.render_mode = render_mode
        self.max_steps = int(max_steps)

        # Reward shaping parameters
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.reward_weights: Dict[str, float] = {
            # Positive components
            "score": 0.01,           # per engine score point
            "lines": 1.0,            # per line cleared
            # Negative components (penalize increases)
            "holes": 0.1,
            "bumpiness": 0.01,
            "height": 0.02,
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        height = self.game.config.height
        width = self.game.config.width
        kinds = len(CATALOG)

        self.observation_space = spaces.Dict(
            {
                # locked cells 1..7, falling piece -1..-7, empty 0
                "board": spaces.Box(low=-kinds, high=kinds, shape=(height, width), dtype=np.int8),
                "next": spaces.Discrete(kinds + 1),
                # 0 when the hold slot is empty
                "hold": spaces.Discrete(kinds + 1),
                "can_hold": spaces.Discrete(2),
            }
        )
        self.action_space = spaces.Discrete(len(ENV_ACTIONS))

        self._last_obs: Optional[Dict[str, Any]] = None
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        state = self.game.state
        return {
            "board": self.game.get_state().astype(np.int8),
            "next": int(state.next_kind),
            "hold": int(state.hold_kind) if state.hold_kind is not None else 0,
            "can_hold": int(state.can_hold),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": self.get_action_mask(),
            "score": self.game.score,
            "lines": self.game.lines,
            "level": self.game.level,
            "steps": self._steps,
        }

    def get_action_mask(self) -> np.ndarray:
        return self.game.action_mask(ENV_ACTIONS)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        # First tick only arms the drop timer
        self.game.tick(self.clock.reset())
        obs = self._get_obs()
        info = self._get_info()
        self._last_obs = obs
        return obs, info

    def step(self, action: int):
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action {action!r} for {self.action_space}")
        command = ENV_ACTIONS[int(action)]

        valid = bool(self.get_action_mask()[int(action)])
        features_before = board_features(self.game.state.board)
        score_before = self.game.score
        lines_before = self.game.lines

        self.game.step(command)
        self.game.tick(self.clock.advance())
        self._steps += 1

        features_after = board_features(self.game.state.board)
        lines = self.game.lines - lines_before

        reward_components: Dict[str, float] = {
            "score": self.reward_weights["score"] * float(self.game.score - score_before),
            "lines": self.reward_weights["lines"] * float(lines),
            "holes": -self.reward_weights["holes"] * float(
                max(0, features_after["holes"] - features_before["holes"])),
            "bumpiness": -self.reward_weights["bumpiness"] * float(
                max(0, features_after["bumpiness"] - features_before["bumpiness"])),
            "height": -self.reward_weights["height"] * float(
                max(0, features_after["max_height"] - features_before["max_height"])),
            "step": self.step_penalty,
        }
        if not valid:
            reward_components["invalid"] = self.invalid_action_penalty

        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        reward = float(sum(reward_components.values()))

        obs = self._get_obs()
        info = self._get_info()
        info["reward_components"] = reward_components
        self._last_obs = obs
        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            # human rendering is the pygame host's job
            return None
        board = self._last_obs["board"] if self._last_obs is not None else self.game.get_state()
        cell = 12
        h, w = board.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        img[:] = (30, 30, 36)
        for y in range(h):
            for x in range(w):
                v = int(board[y, x])
                if v == 0:
                    continue
                color = CATALOG[abs(v)].rgb
                img[y * cell : (y + 1) * cell - 1, x * cell : (x + 1) * cell - 1, :] = color
        return img

    def close(self) -> None:
        pass
