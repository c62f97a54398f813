"""Play the game in a window: ``python -m treasure_run [--platformer]``."""

import argparse
import logging

import numpy as np
import pygame

from treasure_run.config import GameConfig, Variant
from treasure_run.controls import Controls, NO_INPUT
from treasure_run.events import GameOver, LevelUp
from treasure_run.game import TreasureRunGame
from treasure_run.render import Renderer

BANNER_FRAMES = 120


def main(argv=None):
    parser = argparse.ArgumentParser(description="Treasure Run")
    parser.add_argument("--platformer", action="store_true", help="play the platformer variant")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    variant = Variant.PLATFORMER if args.platformer else Variant.CLASSIC
    config = GameConfig(variant=variant)
    game = TreasureRunGame(config, seed=args.seed)
    renderer = Renderer(config.width, config.height)

    # --- Manual Play ---
    display_screen = pygame.display.set_mode((config.width, config.height))
    pygame.display.set_caption("Treasure Run")
    clock = pygame.time.Clock()

    print("\n" + "=" * 30)
    print("        TREASURE RUN")
    print("=" * 30)
    print("Enter: start   P: pause   R: reset   Esc: quit\n")

    banner, banner_frames = None, 0
    focused = True
    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.WINDOWFOCUSLOST:
                focused = False
            elif event.type == pygame.WINDOWFOCUSGAINED:
                focused = True
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_RETURN:
                    game.start()
                elif event.key == pygame.K_p:
                    game.pause()
                elif event.key == pygame.K_r:
                    game.reset()
                    banner, banner_frames = None, 0

        # Keys held while the window lost focus must not stay pressed.
        controls = Controls.from_keys(pygame.key.get_pressed()) if focused else NO_INPUT
        game.tick(controls)

        for event in game.drain_events():
            if isinstance(event, LevelUp):
                print(event.message)
                banner, banner_frames = f"LEVEL {event.level}!", BANNER_FRAMES
            elif isinstance(event, GameOver):
                print(event.message)

        if banner_frames > 0:
            banner_frames -= 1
        else:
            banner = None

        obs = renderer.observation(game.world, game.state, banner if game.state == "running" else None)
        surf = pygame.surfarray.make_surface(np.transpose(obs, (1, 0, 2)))
        display_screen.blit(surf, (0, 0))
        pygame.display.flip()

        clock.tick(config.fps)

    renderer.close()


if __name__ == "__main__":
    main()
