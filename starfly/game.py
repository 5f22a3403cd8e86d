"""One game: the per-tick loop that ties the ship, the enemies and the score together."""

from __future__ import annotations

import logging
import random
from typing import Callable

from starfly.board import Anchor, Gameboard, Sprite, Vec2, is_life_sprite
from starfly.collision import EXPLOSION_DURATION, CollisionManager
from starfly.enemies import EnemyManager
from starfly.enemy_bullets import update_enemy_bullets
from starfly.lives import PlayerLives
from starfly.player import (
    PLAYER_ID,
    KeyboardEvent,
    MovementDirection,
    PlayerManager,
    create_player,
    update_bullets,
)
from starfly.server import GameAction, ServerEventHandler
from starfly.settings import GameSettings

log = logging.getLogger(__name__)

RESPAWN_DELAY = 0.5
GAME_OVER_RESET_DELAY = 3.0
STARTING_LIVES = 4
POINTS_PER_ENEMY = 100

LIFE_SPRITE_SIZE: Vec2 = (20.0, 20.0)
LIFE_SPRITE_SPACING = 35.0
LIFE_SPRITE_START_X = 20.0
LIFE_SPRITE_Y = 20.0
LIFE_PREFIX = "life_"

# A board with a five-by-seven aspect ratio.
BOARD_WIDTH = 500.0
BOARD_HEIGHT = 700.0

_SERVER_DIRECTIONS = {
    GameAction.MOVE_RIGHT: MovementDirection.RIGHT,
    GameAction.MOVE_LEFT: MovementDirection.LEFT,
}


class Galaga:
    """The game state and the rules applied on every tick."""

    def __init__(
        self,
        board: Gameboard | None = None,
        settings: GameSettings | None = None,
        event_handler: ServerEventHandler | None = None,
    ) -> None:
        self.board = board if board is not None else Gameboard(BOARD_WIDTH, BOARD_HEIGHT)
        self.settings = settings if settings is not None else GameSettings()
        self.event_handler = event_handler
        self.rng = random.Random()

        self.player = PlayerManager()
        self.lives = PlayerLives(self.player, STARTING_LIVES)
        self.enemies = EnemyManager()
        self.collisions = CollisionManager(self.enemies)

        self.score = 0
        self.enemies_created = False
        self.player_dead = False
        self.respawn_time: float | None = None
        self.game_over = False
        self.game_over_time: float | None = None

        self.board.insert_sprite(create_player())
        self._create_life_sprites(self.lives.lives)

    def score_text(self) -> str:
        return f"Score: {self.score}"

    def update_game_settings(self, updater: Callable[[GameSettings], object]) -> None:
        """Apply a change to the live settings."""
        updater(self.settings)

    def reset(self) -> None:
        """Clear the board and start over with a fresh ship and full lives."""
        log.info("Resetting game state")
        for sprite_id in list(self.board.sprites):
            self.collisions.remove_sprite(self.board, sprite_id)
        self.collisions.explosions.clear()

        self.score = 0
        self.enemies_created = False
        self.player_dead = False
        self.respawn_time = None
        self.game_over = False
        self.game_over_time = None

        self.lives.reset(STARTING_LIVES)
        self.enemies.reset()
        self.player.reset()

        self.board.insert_sprite(create_player())
        self.update_life_sprites()

    def add_score(self, points: int) -> None:
        """Add points unless the game is over."""
        if not self.game_over:
            self.score += points
            log.info("Score: %d", self.score)
        self.update_life_sprites()

    def lose_life(self, now: float) -> None:
        """Take a life; end the game when none are left."""
        self.lives.handle_player_death(now)
        log.info("Player died! Lives remaining: %d", self.lives.lives)
        if self.lives.is_game_over():
            self.game_over = True
            self.game_over_time = now
            log.info("Game over! Final score: %d", self.score)
            self._remove_life_sprites()
        else:
            self.update_life_sprites()

    def respawn_player(self) -> None:
        """Put the ship back on the board unless the game is over."""
        if not self.lives.is_game_over() and not self.game_over:
            self.board.insert_sprite(create_player())
            log.info("Player respawned")
        self.player_dead = False
        self.respawn_time = None

    def handle_server_input(self, now: float) -> GameAction | None:
        """Apply the next remote action, if any; return it."""
        if self.game_over or self.event_handler is None:
            return None
        action = self.event_handler.process_events_for_game(self.settings)
        if action is None:
            return None
        if action is GameAction.SHOOT:
            self.player.handle_server_shoot(self.board, now)
        else:
            self.player.server_move(_SERVER_DIRECTIONS[action], now)
        return action

    def handle_keyboard(self, event: KeyboardEvent, now: float) -> bool:
        """Pass a key event to the ship while it is alive; report whether it was used."""
        if self.player_dead or self.game_over:
            return False
        return self.player.handle_keyboard_input(self.board, event, now)

    def update_life_sprites(self) -> None:
        """Redraw the life markers when their count differs from the lives left."""
        current = sum(1 for sprite_id in self.board.sprites if is_life_sprite(sprite_id))
        if current != self.lives.lives:
            self._create_life_sprites(self.lives.lives)

    def _create_life_sprites(self, lives: int) -> None:
        self._remove_life_sprites()
        for index in range(lives):
            x = LIFE_SPRITE_START_X + index * LIFE_SPRITE_SPACING
            self.board.insert_sprite(
                Sprite(
                    f"{LIFE_PREFIX}{index}",
                    "spaceship",
                    LIFE_SPRITE_SIZE,
                    (Anchor.static(x), Anchor.static(LIFE_SPRITE_Y)),
                )
            )

    def _remove_life_sprites(self) -> None:
        for sprite_id in self.board.ids_with_prefix(LIFE_PREFIX):
            self.collisions.remove_sprite(self.board, sprite_id)

    def _ship_active(self) -> bool:
        return not self.player_dead and not self.game_over

    def tick(self, now: float) -> None:
        """Advance the game by one frame at time ``now`` (seconds)."""
        board = self.board
        if self.game_over:
            if (
                self.game_over_time is not None
                and now - self.game_over_time >= GAME_OVER_RESET_DELAY
            ):
                self.reset()
            return

        self.handle_server_input(now)

        if not self.enemies_created:
            self.enemies.create_enemies(board, now)
            self.enemies_created = True

        self.lives.update(board, now)

        if self.respawn_time is not None and now - self.respawn_time >= RESPAWN_DELAY:
            self.respawn_player()

        if self._ship_active():
            self.player.update_player_movement(board, now)

        self.enemies.update_enemy_pulse(board)
        self.enemies.update_enemy_shooting(board, now, self.rng)

        for bullet_id in update_enemy_bullets(board):
            self.collisions.remove_sprite(board, bullet_id)

        if self._ship_active() and not self.settings.player_invincible:
            hit, hit_pos = self.collisions.handle_player_enemy_bullet_collisions(board)
            if hit:
                self.collisions.remove_sprite(board, PLAYER_ID)
                self.collisions.spawn_explosion(board, hit_pos, now)
                self.lose_life(now)
                self.player_dead = True
                self.respawn_time = now + EXPLOSION_DURATION
                log.info("Player hit")

        for bullet_id in update_bullets(board):
            self.collisions.remove_sprite(board, bullet_id)

        self.collisions.handle_bullet_bullet_collisions(board, now)
        hits = self.collisions.handle_player_bullet_enemy_collisions(board, now)
        if hits > 0:
            self.add_score(hits * POINTS_PER_ENEMY)
        self.collisions.update_explosions(board, now)

        self.enemies.check_and_manage_enemy_state(board, now)