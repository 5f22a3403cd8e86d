"""Enemy shooting and the bullets it produces."""

from __future__ import annotations

import random
import uuid
from typing import MutableMapping, Protocol

from starfly.board import (
    ENEMY_BULLET_SPEED,
    Anchor,
    Gameboard,
    Sprite,
    Vec2,
    is_enemy,
    is_enemy_bullet,
)

ENEMY_SHOOT_COOLDOWN = 2.5
ENEMY_SHOOT_CHANCE = 0.1
ENEMY_BULLET_SIZE: Vec2 = (12.0, 12.0)
ENEMY_BULLET_PREFIX = "enemy_bullet_"


class _Random(Protocol):
    def random(self) -> float: ...


def update_enemy_shooting(
    board: Gameboard,
    last_shot_times: MutableMapping[str, float],
    now: float,
    rng: _Random | None = None,
) -> list[str]:
    """Let enemies whose cooldown has passed shoot with a fixed chance.

    Keeps ``last_shot_times`` in step with the enemies on the board and
    returns the ids of the bullets fired.
    """
    roll = rng if rng is not None else random
    active = {sprite_id for sprite_id in board.sprites if is_enemy(sprite_id)}

    for enemy_id in active:
        last_shot_times.setdefault(enemy_id, now)
    for enemy_id in [tracked for tracked in last_shot_times if tracked not in active]:
        del last_shot_times[enemy_id]

    shooters: list[tuple[Vec2, Vec2]] = []
    for enemy_id, last_shot in last_shot_times.items():
        if now - last_shot < ENEMY_SHOOT_COOLDOWN:
            continue
        if roll.random() < ENEMY_SHOOT_CHANCE:
            sprite = board.sprites.get(enemy_id)
            if sprite is not None:
                shooters.append((sprite.position(board.size), sprite.size))
                last_shot_times[enemy_id] = now
        else:
            last_shot_times[enemy_id] = now

    return [enemy_shoot(board, pos, size) for pos, size in shooters]


def enemy_shoot(board: Gameboard, enemy_pos: Vec2, enemy_size: Vec2) -> str:
    """Place a bullet centred under the enemy and return its id."""
    x, y = enemy_pos
    bullet_id = f"{ENEMY_BULLET_PREFIX}{uuid.uuid4()}"
    bullet_x = x + (enemy_size[0] - ENEMY_BULLET_SIZE[0]) / 2.0
    bullet_y = y + enemy_size[1]
    board.insert_sprite(
        Sprite(
            bullet_id,
            "bullet_downward",
            ENEMY_BULLET_SIZE,
            (Anchor.static(bullet_x), Anchor.static(bullet_y)),
        )
    )
    return bullet_id


def update_enemy_bullets(board: Gameboard) -> list[str]:
    """Move enemy bullets down; return those that have left the board."""
    gone: list[str] = []
    _, board_height = board.size
    for sprite_id, sprite in board.sprites.items():
        if not is_enemy_bullet(sprite_id):
            continue
        sprite.dy += ENEMY_BULLET_SPEED
        if sprite.position(board.size)[1] > board_height + 50.0:
            gone.append(sprite_id)
    return gone


def active_enemy_bullets(board: Gameboard) -> list[tuple[str, Vec2, Vec2]]:
    """Id, position and size of every enemy bullet on the board."""
    return [
        (sprite_id, sprite.position(board.size), sprite.size)
        for sprite_id, sprite in board.sprites.items()
        if is_enemy_bullet(sprite_id)
    ]


def clear_all_enemy_bullets(board: Gameboard) -> None:
    for bullet_id in board.ids_with_prefix(ENEMY_BULLET_PREFIX):
        board.remove_sprite(bullet_id)