"""Hit detection between ships and bullets, and the explosions it leaves."""

from __future__ import annotations

import logging
import uuid

from starfly.board import Anchor, Gameboard, Sprite, Vec2, is_enemy
from starfly.enemies import EnemyManager
from starfly.enemy_bullets import active_enemy_bullets
from starfly.player import PLAYER_ID, active_bullets

log = logging.getLogger(__name__)

EXPLOSION_DURATION = 2.0
EXPLOSION_SIZE: Vec2 = (50.0, 50.0)
EXPLOSION_PREFIX = "explosion_"


def check_collision(pos1: Vec2, size1: Vec2, pos2: Vec2, size2: Vec2) -> bool:
    """Whether two axis-aligned rectangles overlap; touching edges do not count."""
    x1, y1 = pos1
    w1, h1 = size1
    x2, y2 = pos2
    w2, h2 = size2
    return x1 < x2 + w2 and x1 + w1 > x2 and y1 < y2 + h2 and y1 + h1 > y2


class CollisionManager:
    """Resolves hits on the board and keeps track of live explosions."""

    def __init__(self, enemies: EnemyManager | None = None) -> None:
        self.enemies = enemies
        self.explosions: dict[str, float] = {}

    def remove_sprite(self, board: Gameboard, sprite_id: str) -> bool:
        """Take a sprite off the board; report whether it was there."""
        if board.remove_sprite(sprite_id) is None:
            return False
        if is_enemy(sprite_id) and self.enemies is not None:
            self.enemies.forget_enemy(sprite_id)
        return True

    def handle_player_enemy_bullet_collisions(self, board: Gameboard) -> tuple[bool, Vec2]:
        """Remove the first enemy bullet touching the ship.

        Returns whether the ship was hit and, if so, where it stood.
        """
        bullets = active_enemy_bullets(board)
        player = board.sprites.get(PLAYER_ID)
        if player is None:
            return False, (0.0, 0.0)
        player_pos = player.position(board.size)
        for bullet_id, bullet_pos, bullet_size in bullets:
            if check_collision(bullet_pos, bullet_size, player_pos, player.size):
                self.remove_sprite(board, bullet_id)
                return True, player_pos
        return False, (0.0, 0.0)

    def handle_bullet_bullet_collisions(
        self, board: Gameboard, now: float
    ) -> list[tuple[str, str, Vec2]]:
        """Destroy player and enemy bullets that meet, leaving an explosion between them."""
        player_bullets = active_bullets(board)
        enemy_bullets = active_enemy_bullets(board)
        hits: list[tuple[str, str, Vec2]] = []
        for player_id, player_pos, player_size in player_bullets:
            for enemy_id, enemy_pos, enemy_size in enemy_bullets:
                if check_collision(player_pos, player_size, enemy_pos, enemy_size):
                    midpoint = (
                        (player_pos[0] + enemy_pos[0]) / 2.0,
                        (player_pos[1] + enemy_pos[1]) / 2.0,
                    )
                    hits.append((player_id, enemy_id, midpoint))

        for player_id, enemy_id, midpoint in hits:
            self.remove_sprite(board, player_id)
            self.remove_sprite(board, enemy_id)
            self.spawn_explosion(board, midpoint, now)
            log.debug("Bullet-bullet collision: %s vs %s at %s", player_id, enemy_id, midpoint)
        return hits

    def handle_player_bullet_enemy_collisions(self, board: Gameboard, now: float) -> int:
        """Destroy enemies hit by player bullets; return the number of hits."""
        bullets = active_bullets(board)
        to_remove: list[str] = []
        explosion_spots: list[Vec2] = []
        hits = 0
        for bullet_id, bullet_pos, bullet_size in bullets:
            for sprite_id, sprite in board.sprites.items():
                if not is_enemy(sprite_id):
                    continue
                enemy_pos = sprite.position(board.size)
                if check_collision(bullet_pos, bullet_size, enemy_pos, sprite.size):
                    explosion_spots.append(enemy_pos)
                    to_remove.extend((bullet_id, sprite_id))
                    hits += 1
                    break

        for pos in explosion_spots:
            self.spawn_explosion(board, pos, now)
        for sprite_id in to_remove:
            self.remove_sprite(board, sprite_id)
        return hits

    def spawn_explosion(self, board: Gameboard, pos: Vec2, now: float) -> str:
        """Place an explosion at a position and return its id."""
        explosion_id = f"{EXPLOSION_PREFIX}{uuid.uuid4()}"
        board.insert_sprite(
            Sprite(
                explosion_id,
                "explosion",
                EXPLOSION_SIZE,
                (Anchor.static(pos[0]), Anchor.static(pos[1])),
            )
        )
        self.explosions[explosion_id] = now
        log.debug("Spawned explosion at %s", pos)
        return explosion_id

    def update_explosions(self, board: Gameboard, now: float) -> list[str]:
        """Remove explosions that have lasted their time; return their ids."""
        expired = [
            explosion_id
            for explosion_id, started in self.explosions.items()
            if now - started >= EXPLOSION_DURATION
        ]
        for explosion_id in expired:
            self.remove_sprite(board, explosion_id)
            del self.explosions[explosion_id]
        return expired