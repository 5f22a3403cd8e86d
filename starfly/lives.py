"""The player's lives, respawning and temporary invulnerability."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from starfly.board import Gameboard
from starfly.player import PLAYER_ID, PlayerManager, create_player

log = logging.getLogger(__name__)

RESPAWN_DELAY = 2.0
INVULNERABILITY_DURATION = 3.0
DEFAULT_LIVES = 3


@dataclass(frozen=True)
class LivesDisplayInfo:
    lives: int
    is_invulnerable: bool = False
    is_waiting_to_respawn: bool = False
    respawn_time_remaining: float | None = None
    invulnerability_time_remaining: float | None = None
    is_game_over: bool = False

    @classmethod
    def for_lives(cls, lives: int) -> LivesDisplayInfo:
        return cls(lives=lives, is_game_over=lives == 0)


class PlayerLives:
    """Counts lives and brings the ship back after a death."""

    def __init__(self, player_manager: PlayerManager, lives: int = DEFAULT_LIVES) -> None:
        self.player_manager = player_manager
        self.lives = lives
        self.death_time: float | None = None
        self.invulnerable_until: float | None = None

    def reset(self, lives: int = DEFAULT_LIVES) -> None:
        self.lives = lives
        self.death_time = None
        self.invulnerable_until = None

    def add_lives(self, amount: int) -> None:
        self.lives += amount

    def is_invulnerable(self, now: float) -> bool:
        return self.invulnerable_until is not None and now < self.invulnerable_until

    def is_waiting_to_respawn(self) -> bool:
        return self.death_time is not None and self.player_manager.is_destroyed()

    def is_game_over(self) -> bool:
        return self.lives == 0 and self.player_manager.is_destroyed()

    def handle_player_death(self, now: float) -> None:
        """Take a life and destroy the ship; nothing happens with no lives left."""
        if self.lives <= 0:
            return
        self.lives -= 1
        self.death_time = now
        self.player_manager.destroy()
        log.info("Player died! Lives remaining: %d", self.lives)

    def update(self, board: Gameboard, now: float) -> bool:
        """Respawn once the delay has passed; report whether a respawn happened."""
        should_respawn = False
        if self.death_time is not None and now - self.death_time >= RESPAWN_DELAY:
            should_respawn = self.lives > 0
            self.death_time = None
        if self.invulnerable_until is not None and now >= self.invulnerable_until:
            self.invulnerable_until = None
        if should_respawn:
            self.respawn_player(board, now)
        return should_respawn

    def respawn_player(self, board: Gameboard, now: float) -> None:
        board.remove_sprite(PLAYER_ID)
        board.insert_sprite(create_player())
        self.player_manager.reset()
        self.invulnerable_until = now + INVULNERABILITY_DURATION
        log.info("Player respawned with %d lives remaining", self.lives)

    def force_respawn(self, board: Gameboard, now: float) -> None:
        """Respawn at once, granting a life if none are left."""
        self.death_time = None
        if self.lives == 0:
            self.lives = 1
        self.respawn_player(board, now)

    def respawn_time_remaining(self, now: float) -> float | None:
        if self.death_time is None:
            return None
        elapsed = now - self.death_time
        return RESPAWN_DELAY - elapsed if elapsed < RESPAWN_DELAY else None

    def invulnerability_time_remaining(self, now: float) -> float | None:
        if self.invulnerable_until is None or now >= self.invulnerable_until:
            return None
        return self.invulnerable_until - now

    def can_take_damage(self, now: float) -> bool:
        return not self.is_invulnerable(now) and not self.player_manager.is_destroyed()

    def handle_enemy_collision(self, now: float) -> bool:
        """Lose a life if the ship can be hurt; report whether it was."""
        if not self.can_take_damage(now):
            return False
        self.handle_player_death(now)
        return True

    def display_info(self, now: float) -> LivesDisplayInfo:
        return LivesDisplayInfo(
            lives=self.lives,
            is_invulnerable=self.is_invulnerable(now),
            is_waiting_to_respawn=self.is_waiting_to_respawn(),
            respawn_time_remaining=self.respawn_time_remaining(now),
            invulnerability_time_remaining=self.invulnerability_time_remaining(now),
            is_game_over=self.is_game_over(),
        )