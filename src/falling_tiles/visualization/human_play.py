from __future__ import annotations

import argparse
import logging
from typing import Dict, List, Optional

import pygame

from falling_tiles.game import Action, FallingTilesGame, GameConfig, GameLoop, Snapshot, Timer
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_DOWN: Action.DROP,
    pygame.K_UP: Action.ROTATE,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play falling tiles with the arrow keys")
    p.add_argument("--width", type=int, default=10)
    p.add_argument("--height", type=int, default=None, help="defaults to twice the width")
    p.add_argument("--step-ms", type=int, default=300)
    p.add_argument("--clear-ms", type=int, default=None, help="defaults to half the step interval")
    p.add_argument("--group-size", type=int, default=4)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=20)
    p.add_argument("--verbose", action="store_true")
    return p


def config_from_args(args: argparse.Namespace) -> GameConfig:
    return GameConfig(
        width=args.width,
        height=args.height if args.height is not None else args.width * 2,
        step_interval_ms=args.step_ms,
        clear_interval_ms=args.clear_ms if args.clear_ms is not None else args.step_ms // 2,
        group_size=args.group_size,
        random_seed=args.seed,
    )


def run(config: Optional[GameConfig] = None, cell_size: int = 20) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        frames: List[Snapshot] = []
        game = FallingTilesGame(config, render=frames.append)
        loop = GameLoop(game, Timer(clock=pygame.time.get_ticks))
        renderer = Renderer(cell_size=cell_size)

        screen = pygame.display.set_mode(renderer.window_size(game.config.width, game.config.height))
        pygame.display.set_caption("Falling Tiles")

        loop.start()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r and game.game_over:
                        game.reset()
                        loop.start()
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            loop.on_action(action)

            loop.update()

            # Draw every frame the engine emitted; otherwise redraw the latest state
            if frames:
                for snapshot in frames:
                    renderer.draw(screen, snapshot)
                frames.clear()
            else:
                renderer.draw(screen, game.snapshot())

            clock.tick(60)
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run(config_from_args(args), cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
