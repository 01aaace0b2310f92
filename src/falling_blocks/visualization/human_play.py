from __future__ import annotations

import argparse
from typing import Dict

import pygame

from falling_blocks.game import Command, FallingBlockGame, GameConfig
from .renderer import Renderer


KEY_TO_COMMAND: Dict[int, Command] = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_UP: Command.ROTATE_CW,
    pygame.K_x: Command.ROTATE_CW,
    pygame.K_z: Command.ROTATE_CCW,
    pygame.K_SPACE: Command.HARD_DROP,
    pygame.K_c: Command.HOLD,
    pygame.K_p: Command.TOGGLE_PAUSE,
    pygame.K_r: Command.RESET,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--fps", type=int, default=60)
    return p


def run(seed: int | None = None, cell_size: int = 28, fps: int = 60) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = FallingBlockGame(GameConfig(random_seed=seed))
        renderer = Renderer(cell_size=cell_size)

        screen = pygame.display.set_mode(renderer.window_size(game.state))
        pygame.display.set_caption("Falling Blocks")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        command = KEY_TO_COMMAND.get(event.key)
                        if command is not None:
                            game.step(command)

            # Gravity: pygame's millisecond counter drives the drop scheduler
            game.tick(pygame.time.get_ticks())

            renderer.draw(screen, game.state)
            clock.tick(fps)
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    run(seed=args.seed, cell_size=args.cell_size, fps=args.fps)


if __name__ == "__main__":  # pragma: no cover
    main()
