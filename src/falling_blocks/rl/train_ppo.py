from __future__ import annotations

import argparse
import os

import gymnasium as gym

# Ensure envs are registered
import falling_blocks.env  # noqa: F401
from falling_blocks.env.wrappers import ResampleInvalidActionWrapper


ENV_ID = "FallingBlocks-10x20-v0"


def make_env(seed: int | None = None, ms_per_step: float = 50.0, max_steps: int = 10000) -> gym.Env:
    env = gym.make(ENV_ID, ms_per_step=ms_per_step, max_steps=max_steps)
    # Resample no-op actions for vanilla PPO; also forwards get_action_mask
    env = ResampleInvalidActionWrapper(env)
    if seed is not None:
        env.reset(seed=seed)
    return env


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--algo", choices=["ppo", "maskable"], default="ppo")
    p.add_argument("--timesteps", type=int, default=200_000)
    p.add_argument("--ms_per_step", type=float, default=50.0,
                   help="Simulated milliseconds of gravity clock per env step")
    p.add_argument("--logdir", type=str, default="./logs/ppo")
    p.add_argument("--save_path", type=str, default="./models/ppo_falling_blocks.zip")
    p.add_argument("--n_envs", type=int, default=4)
    return p


def main() -> None:
    args = build_parser().parse_args()

    from stable_baselines3.common.vec_env import SubprocVecEnv, VecMonitor

    if args.algo == "maskable":
        # sb3-contrib MaskablePPO
        from sb3_contrib import MaskablePPO as Algo
        from sb3_contrib.common.wrappers import ActionMasker

        def mask_fn(env):
            return env.get_action_mask()

        def make_env_idx(i: int):
            def thunk():
                return ActionMasker(make_env(ms_per_step=args.ms_per_step), mask_fn)
            return thunk
    else:
        # Vanilla PPO with resampling wrapper
        from stable_baselines3 import PPO as Algo

        def make_env_idx(i: int):
            def thunk():
                return make_env(ms_per_step=args.ms_per_step)
            return thunk

    vec_env = SubprocVecEnv([make_env_idx(i) for i in range(args.n_envs)])
    vec_env = VecMonitor(vec_env)
    model = Algo(
        policy="MultiInputPolicy",
        env=vec_env,
        verbose=1,
        tensorboard_log=args.logdir,
    )

    os.makedirs(os.path.dirname(args.save_path), exist_ok=True)
    model.learn(total_timesteps=args.timesteps)
    model.save(args.save_path)
    print(f"Saved model to {args.save_path}")


if __name__ == "__main__":  # pragma: no cover
    main()
