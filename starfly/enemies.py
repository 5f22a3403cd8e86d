"""Enemy waves: creation, formation motion and shooting."""

from __future__ import annotations

import enum
import logging
from typing import Callable

from starfly.board import Anchor, Gameboard, Sprite, Vec2, count_active_enemies, is_enemy
from starfly.enemy_bullets import clear_all_enemy_bullets
from starfly.enemy_bullets import update_enemy_shooting as _update_shooting
from starfly.enemy_movement import update_enemy_pulse as _update_pulse
from starfly.enemy_patterns import (
    EnemySpawn,
    initial_pattern,
    pattern_1,
    pattern_2,
    pattern_3,
)

log = logging.getLogger(__name__)

ENEMY_SIZE: Vec2 = (50.0, 50.0)

_Pattern = Callable[[float, float], list[EnemySpawn]]


class EnemyState(enum.Enum):
    INITIAL = enum.auto()
    PATTERN_1 = enum.auto()
    PATTERN_2 = enum.auto()
    PATTERN_3 = enum.auto()
    ALL_DESTROYED = enum.auto()


# state -> (next state, formation to spawn, whether the wave counter advances)
_SEQUENCE: dict[EnemyState, tuple[EnemyState, _Pattern, bool]] = {
    EnemyState.INITIAL: (EnemyState.PATTERN_1, initial_pattern, False),
    EnemyState.PATTERN_1: (EnemyState.PATTERN_2, pattern_1, True),
    EnemyState.PATTERN_2: (EnemyState.PATTERN_3, pattern_2, True),
    EnemyState.PATTERN_3: (EnemyState.PATTERN_1, pattern_3, True),
}

_AFTER_CLEARED: dict[int, tuple[EnemyState, _Pattern]] = {
    1: (EnemyState.PATTERN_1, pattern_1),
    2: (EnemyState.PATTERN_2, pattern_2),
    0: (EnemyState.PATTERN_3, pattern_3),
}


class EnemyManager:
    """Tracks the current wave and the enemies belonging to it."""

    def __init__(self) -> None:
        self.base_positions: dict[str, Vec2] = {}
        self.pulse_time = 0.0
        self.last_shot_times: dict[str, float] = {}
        self.state = EnemyState.INITIAL
        self.wave_count = 0

    def reset(self) -> None:
        self.base_positions = {}
        self.pulse_time = 0.0
        self.last_shot_times = {}
        self.state = EnemyState.INITIAL
        self.wave_count = 0

    def create_enemies(self, board: Gameboard, now: float) -> list[EnemySpawn]:
        """Spawn the next formation on the board and return what was spawned."""
        width, height = board.size
        self.base_positions.clear()
        self.last_shot_times.clear()

        if self.state is EnemyState.ALL_DESTROYED:
            self.wave_count += 1
            self.state, pattern = _AFTER_CLEARED[self.wave_count % 3]
        else:
            self.state, pattern, advances = _SEQUENCE[self.state]
            if advances:
                self.wave_count += 1

        spawns = pattern(width, height)
        for spawn in spawns:
            board.insert_sprite(
                Sprite(
                    spawn.id,
                    spawn.image,
                    ENEMY_SIZE,
                    (Anchor.static(spawn.x), Anchor.static(spawn.y)),
                )
            )
            self.base_positions[spawn.id] = (spawn.x, spawn.y)
            if is_enemy(spawn.id):
                self.last_shot_times[spawn.id] = now

        log.info("Created %d enemies for wave %d", len(self.base_positions), self.wave_count)
        return spawns

    def check_and_manage_enemy_state(self, board: Gameboard, now: float) -> bool:
        """Start a new wave once every enemy is gone; report whether one started."""
        if count_active_enemies(board) != 0 or self.state is EnemyState.ALL_DESTROYED:
            return False
        self.state = EnemyState.ALL_DESTROYED
        clear_all_enemy_bullets(board)
        self.create_enemies(board, now)
        return True

    def update_enemy_pulse(self, board: Gameboard) -> None:
        self.pulse_time = _update_pulse(board, self.pulse_time, dict(self.base_positions))

    def update_enemy_shooting(self, board: Gameboard, now: float, rng=None) -> list[str]:
        """Fire from enemies whose cooldown has passed; return the new bullet ids."""
        return _update_shooting(board, self.last_shot_times, now, rng)

    def forget_enemy(self, enemy_id: str) -> None:
        self.base_positions.pop(enemy_id, None)
        self.last_shot_times.pop(enemy_id, None)