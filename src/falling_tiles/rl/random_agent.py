from __future__ import annotations

import argparse
import random

import gymnasium as gym

import falling_tiles.env  # noqa: F401


def run_random(steps: int = 500, seed: int | None = None) -> float:
    rng = random.Random(seed)
    env = gym.make("FallingTiles-10x20-v0")
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 1
    for _ in range(steps):
        action = rng.randrange(env.action_space.n)
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            obs, info = env.reset()
            episodes += 1
    env.close()
    print(f"Random agent: {total_reward:.0f} rows cleared over {episodes} episode(s)")
    return total_reward


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=500)
    p.add_argument("--seed", type=int, default=None)
    return p


if __name__ == "__main__":  # pragma: no cover
    args = build_parser().parse_args()
    run_random(args.steps, args.seed)
