"""Desktop front end: builds a game, optionally with its remote-control server, and plays it."""

from __future__ import annotations

import argparse
import logging
import time
from typing import Sequence

import pygame

from starfly.board import Sprite
from starfly.game import Galaga
from starfly.pages import SettingsPage
from starfly.player import Key, KeyboardEvent
from starfly.server import GameServer, ServerEventHandler

log = logging.getLogger(__name__)

FRAME_RATE = 60
HEADER_HEIGHT = 40
BACKGROUND = (10, 10, 30)
TEXT_COLOUR = (235, 235, 235)
DIM_TEXT_COLOUR = (160, 160, 180)

_SPRITE_COLOURS = {
    "spaceship": (80, 200, 255),
    "b2": (200, 60, 60),
    "tiki_fly": (230, 170, 40),
    "northrop": (170, 90, 220),
    "bullet_downward": (255, 90, 90),
    "bullet_blue": (90, 160, 255),
    "explosion": (255, 200, 60),
}
_DEFAULT_COLOUR = (200, 200, 200)

_GAME_KEYS = {
    pygame.K_LEFT: Key.ARROW_LEFT,
    pygame.K_RIGHT: Key.ARROW_RIGHT,
    pygame.K_UP: Key.ARROW_UP,
    pygame.K_DOWN: Key.ARROW_DOWN,
}


def create_game(start_server: bool = True) -> tuple[Galaga, GameServer | None]:
    """Build a game; with ``start_server`` it also listens for remote input.

    A server that fails to start is reported and the game still reads its queue.
    """
    if not start_server:
        return Galaga(), None
    server = GameServer()
    try:
        server.start()
    except OSError as exc:
        log.error("Failed to start game server: %s", exc)
    else:
        log.info("Game server started successfully")
    handler = ServerEventHandler(server.events)
    return Galaga(event_handler=handler), server


def _keyboard_event(event: pygame.event.Event) -> KeyboardEvent | None:
    if event.type not in (pygame.KEYDOWN, pygame.KEYUP):
        return None
    key = _GAME_KEYS.get(event.key)
    if key is None:
        return None
    return KeyboardEvent(key, pressed=event.type == pygame.KEYDOWN)


def _handle_settings_key(page: SettingsPage, key: int) -> None:
    if key == pygame.K_MINUS:
        page.adjust_pressure(-50.0)
    elif key in (pygame.K_EQUALS, pygame.K_PLUS):
        page.adjust_pressure(50.0)
    elif key == pygame.K_1:
        page.toggle_flies_shoot()
    elif key == pygame.K_2:
        page.toggle_auto_move()
    elif key == pygame.K_3:
        page.toggle_auto_shoot()
    elif key == pygame.K_4:
        page.toggle_invincibility()


def _draw_sprite(surface: pygame.Surface, sprite: Sprite, board_size: tuple[float, float]) -> None:
    x, y = sprite.position(board_size)
    width, height = sprite.size
    colour = _SPRITE_COLOURS.get(sprite.image, _DEFAULT_COLOUR)
    rect = pygame.Rect(int(x), int(y) + HEADER_HEIGHT, int(width), int(height))
    if sprite.image == "explosion":
        pygame.draw.ellipse(surface, colour, rect)
    else:
        pygame.draw.rect(surface, colour, rect)


def _draw_game(surface: pygame.Surface, font: pygame.font.Font, game: Galaga) -> None:
    surface.fill(BACKGROUND)
    title = font.render(f"Galaga    {game.score_text()}", True, TEXT_COLOUR)
    surface.blit(title, (10, 10))
    for sprite in list(game.board.sprites.values()):
        _draw_sprite(surface, sprite, game.board.size)


def _draw_settings(surface: pygame.Surface, font: pygame.font.Font, page: SettingsPage) -> None:
    surface.fill(BACKGROUND)
    surface.blit(font.render(page.title, True, TEXT_COLOUR), (10, 10))
    y = HEADER_HEIGHT + 10
    hints = ["-/+", "1", "2", "3", "4"]
    for hint, row in zip(hints, page.rows):
        surface.blit(font.render(row.label, True, TEXT_COLOUR), (10, y))
        detail = f"[{hint}] {' / '.join(row.buttons)}  {row.description}"
        surface.blit(font.render(detail, True, DIM_TEXT_COLOUR), (10, y + 24))
        y += 64
    surface.blit(font.render("[Tab] back", True, DIM_TEXT_COLOUR), (10, y))


def run(game: Galaga) -> int:
    """Play the game in a window until it is closed; return the final score."""
    pygame.init()
    try:
        width, height = game.board.size
        surface = pygame.display.set_mode((int(width), int(height) + HEADER_HEIGHT))
        pygame.display.set_caption("Galaga")
        font = pygame.font.Font(None, 24)
        clock = pygame.time.Clock()
        settings_page: SettingsPage | None = None
        running = True
        while running:
            now = time.monotonic()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                    break
                if event.type == pygame.KEYDOWN and event.key == pygame.K_TAB:
                    settings_page = SettingsPage(game.settings) if settings_page is None else None
                    continue
                if settings_page is not None:
                    if event.type == pygame.KEYDOWN:
                        _handle_settings_key(settings_page, event.key)
                    continue
                key_event = _keyboard_event(event)
                if key_event is not None:
                    game.handle_keyboard(key_event, now)
            if not running:
                break
            if settings_page is None:
                game.tick(now)
                _draw_game(surface, font, game)
            else:
                _draw_settings(surface, font, settings_page)
            pygame.display.flip()
            clock.tick(FRAME_RATE)
    finally:
        pygame.quit()
    return game.score


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry point."""
    parser = argparse.ArgumentParser(prog="starfly", description="Play Galaga.")
    parser.add_argument(
        "--no-server",
        action="store_true",
        help="do not listen for remote touchpad input",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log game events")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    game, server = create_game(start_server=not args.no_server)
    try:
        run(game)
    finally:
        if server is not None:
            server.stop()
    return 0