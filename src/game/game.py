# src/game/game.py
import sys, argparse, logging
import pygame
from .config import WIDTH, HEIGHT, FPS, SEED_DEFAULT, DIFFICULTIES
from .audio import ToneAudio
from .controls import InputState
from .modes import tick, MENU
from .render import Renderer
from .world import new_world, Settings


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--difficulty", choices=DIFFICULTIES, default="normal")
    p.add_argument("--seed", type=int, default=None,
                   help="Particle seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--mute", action="store_true", help="Start with sound off")
    p.add_argument("--verbose", action="store_true", help="Log mode changes and hits")
    return p.parse_args()


def run():
    args = parse_args()
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.seed is None:
        seed = SEED_DEFAULT
    elif args.seed == -1:
        seed = None
    else:
        seed = args.seed

    pygame.init()
    pygame.display.set_caption("Flag Catcher")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    renderer = Renderer(screen)
    audio = ToneAudio()

    state = new_world(Settings(difficulty=args.difficulty, sound_enabled=not args.mute), seed=seed)

    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE and state.mode == MENU:
                pygame.quit(); sys.exit()

        inputs = InputState.from_pygame(pygame.key.get_pressed())
        state = tick(state, inputs, audio)

        renderer.draw(state)
        pygame.display.flip()
        clock.tick(FPS)


if __name__ == "__main__":
    run()
