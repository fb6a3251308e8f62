# src/runner/play.py
import sys, argparse, logging, random
import pygame
from pygame import K_SPACE, K_UP, K_DOWN, K_ESCAPE, K_r, K_n
from .config import WIDTH, HEIGHT, FPS, SEED_DEFAULT
from .game import RunnerGame
from .render import draw_frame

JUMP_KEYS = (K_SPACE, K_UP)
DUCK_KEYS = (K_DOWN,)


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None,
                   help="Generator seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--debug", action="store_true", help="Log spawns and other DEBUG messages")
    return p.parse_args()


def setup_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def run():
    args = parse_args()
    setup_logging(args.debug)

    # Resolve seed: None -> use SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None
    else:
        launch_seed = args.seed

    pygame.init()
    pygame.display.set_caption("Jump & Duck Runner")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("arial", 20)

    game = RunnerGame(launch_seed)

    while True:
        clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key in JUMP_KEYS:
                    game.on_jump_pressed()
                if event.key in DUCK_KEYS:
                    game.on_duck_pressed()
                if event.key == K_r and game.game_over:
                    # Restart, generator keeps its stream
                    game.reset()
                if event.key == K_n and game.game_over:
                    game.reset(seed=random.randrange(0, 2**32 - 1))
            if event.type == pygame.KEYUP:
                if event.key in JUMP_KEYS:
                    game.on_jump_released()
                if event.key in DUCK_KEYS:
                    game.on_duck_released()

        game.tick()

        draw_frame(screen, game.view(), font)
        pygame.display.flip()


if __name__ == "__main__":
    run()
