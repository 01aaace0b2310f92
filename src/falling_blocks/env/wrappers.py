from __future__ import annotations

import numpy as np
import gymnasium as gym
from gymnasium import spaces


class ResampleInvalidActionWrapper(gym.Wrapper):
    """If a sampled action would not change the game, resample among ones that would.

    Useful when training with vanilla PPO (no action masking).
    """

    def step(self, action):  # type: ignore[override]
        if isinstance(self.action_space, spaces.Discrete):
            mask = self.get_action_mask()
            if 0 <= int(action) < mask.shape[0] and not bool(mask[int(action)]):
                valid_idxs = np.flatnonzero(mask)
                if valid_idxs.size > 0:
                    action = int(self.np_random.choice(valid_idxs))
        return self.env.step(action)

    # Delegate mask access to the base env through any wrappers gym.make added
    def get_action_mask(self) -> np.ndarray:
        base = self.env.unwrapped
        if hasattr(base, "get_action_mask"):
            return base.get_action_mask()
        raise AttributeError("Underlying env does not provide get_action_mask")
