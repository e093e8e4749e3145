from __future__ import annotations

import argparse

import gymnasium as gym
import pygame

import falling_tiles.env  # noqa: F401
from falling_tiles.visualization.renderer import Renderer


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--model", type=str, required=True)
    p.add_argument("--steps", type=int, default=500)
    p.add_argument("--fps", type=int, default=10)
    return p


def main() -> None:
    args = build_parser().parse_args()
    from stable_baselines3 import PPO

    env = gym.make("FallingTiles-10x20-v0")
    model = PPO.load(args.model, device="auto")

    game = env.unwrapped.game
    renderer = Renderer(cell_size=24)

    total_reward = 0.0
    steps = 0
    pygame.init()
    try:
        screen = pygame.display.set_mode(renderer.window_size(game.config.width, game.config.height))
        pygame.display.set_caption("Falling Tiles - Agent Eval")
        clock = pygame.time.Clock()

        obs, info = env.reset()
        while steps < args.steps:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    return

            action, _ = model.predict(obs, deterministic=True)
            obs, reward, terminated, truncated, info = env.step(int(action))
            total_reward += float(reward)
            steps += 1
            if terminated or truncated:
                obs, info = env.reset()

            renderer.draw(screen, game.snapshot())
            clock.tick(args.fps)
    finally:
        pygame.quit()
        print(f"{steps} steps, {total_reward:.0f} rows cleared")


if __name__ == "__main__":  # pragma: no cover
    main()
