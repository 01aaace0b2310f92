from __future__ import annotations

import argparse
import random
import sys

import gymnasium as gym
import numpy as np

import falling_blocks.env  # noqa: F401


def _print_progress(ep_idx: int, total: int, last_return: float, last_score: int) -> None:
    width = 30
    filled = int(width * (ep_idx + 1) / max(1, total))
    bar = "=" * filled + "." * (width - filled)
    msg = f"\r[{bar}] {ep_idx + 1}/{total}  return={last_return:.1f}  score={last_score}"
    print(msg, end="", file=sys.stdout, flush=True)


def run_random(episodes: int = 5, max_steps: int = 2000, seed: int = 0, progress: bool = True) -> float:
    rng = random.Random(seed)
    env = gym.make("FallingBlocks-10x20-v0", max_steps=max_steps)
    total_reward = 0.0
    for ep in range(episodes):
        obs, info = env.reset(seed=seed + ep)
        ep_return = 0.0
        done = False
        while not done:
            # Prefer actions that change the game
            valid = np.flatnonzero(info["action_mask"])
            action = int(rng.choice(valid)) if valid.size else env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            ep_return += float(reward)
            done = terminated or truncated
        total_reward += ep_return
        if progress:
            _print_progress(ep, episodes, ep_return, info["score"])
        else:
            print(f"Episode {ep + 1}/{episodes} return={ep_return:.1f} score={info['score']} lines={info['lines']}")
    if progress:
        print()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f}")
    return total_reward


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--episodes", type=int, default=5)
    p.add_argument("--max-steps", type=int, default=2000)
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--no-progress", action="store_true")
    args = p.parse_args()
    run_random(args.episodes, args.max_steps, args.seed, progress=not args.no_progress)


if __name__ == "__main__":  # pragma: no cover
    main()
