"""The game window and the command that starts it."""

from __future__ import annotations

import os
import sys
from typing import Optional, Sequence

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from .framebuffer import FrameBuffer  # noqa: E402
from .raycast import WIN_SIZE_X, WIN_SIZE_Y  # noqa: E402
from .render import (  # noqa: E402
    KEY_A,
    KEY_D,
    KEY_DOWN,
    KEY_ESC,
    KEY_LEFT,
    KEY_RETURN,
    KEY_RIGHT,
    KEY_S,
    KEY_SPACE,
    KEY_UP,
    KEY_W,
    Game,
    load_game,
)

FAREWELL = "*** Thank you for playing! ***"
USAGE = (
    "Wrong argument! put argument as such :"
    "raycub [--bonus] maps/good/(mapname).cub\n"
)

_KEYS = {
    pygame.K_ESCAPE: KEY_ESC,
    pygame.K_a: KEY_A,
    pygame.K_s: KEY_S,
    pygame.K_d: KEY_D,
    pygame.K_w: KEY_W,
    pygame.K_RETURN: KEY_RETURN,
    pygame.K_SPACE: KEY_SPACE,
    pygame.K_LEFT: KEY_LEFT,
    pygame.K_RIGHT: KEY_RIGHT,
    pygame.K_UP: KEY_UP,
    pygame.K_DOWN: KEY_DOWN,
}


def key_action(key: int) -> Optional[int]:
    """Translate a pygame key into the game's key code, or None if unused."""
    return _KEYS.get(key)


def _show(screen: "pygame.Surface", game: Game, frame: FrameBuffer) -> None:
    game.render(frame)
    image = pygame.image.frombuffer(
        frame.to_bytes(), (frame.width, frame.height), "RGB"
    )
    screen.blit(image, (0, 0))
    pygame.display.flip()


def run(game: Game) -> int:
    """Open the window and play until it is closed or escape is pressed."""
    pygame.init()
    try:
        screen = pygame.display.set_mode((WIN_SIZE_X, WIN_SIZE_Y))
        pygame.display.set_caption("cub")
        frame = FrameBuffer(WIN_SIZE_X, WIN_SIZE_Y)
        _show(screen, game, frame)
        while True:
            event = pygame.event.wait()
            if event.type == pygame.QUIT:
                break
            if event.type == pygame.KEYDOWN:
                action = key_action(event.key)
                if action is None:
                    continue
                if not game.handle_key(action):
                    break
                _show(screen, game, frame)
            elif game.bonus and event.type == pygame.MOUSEBUTTONDOWN:
                game.mouse_press(event.button, *event.pos)
            elif game.bonus and event.type == pygame.MOUSEBUTTONUP:
                game.mouse_release(event.button, *event.pos)
            elif game.bonus and event.type == pygame.MOUSEMOTION:
                game.mouse_move(*event.pos)
                _show(screen, game, frame)
    finally:
        pygame.quit()
    print(FAREWELL, file=sys.stderr)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Load the scene named on the command line and play it."""
    args = list(sys.argv[1:] if argv is None else argv)
    bonus = "--bonus" in args
    args = [arg for arg in args if arg != "--bonus"]
    if len(args) != 1:
        sys.stderr.write(USAGE)
        return 0
    try:
        game = load_game(args[0], bonus)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    return run(game)