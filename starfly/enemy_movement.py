"""Breathing motion of an enemy formation."""

from __future__ import annotations

import math
from typing import Mapping

from starfly.board import PULSE_AMPLITUDE, PULSE_SPEED, Gameboard, Vec2


def update_enemy_pulse(
    board: Gameboard, pulse_time: float, base_positions: Mapping[str, Vec2]
) -> float:
    """Push each enemy away from the formation centre by a pulsing amount.

    Returns the advanced pulse time.
    """
    pulse_time += PULSE_SPEED
    pulse_offset = (math.sin(pulse_time) + 1.0) * 0.5 * PULSE_AMPLITUDE

    if not base_positions:
        return pulse_time

    count = len(base_positions)
    center_x = sum(x for x, _ in base_positions.values()) / count
    center_y = sum(y for _, y in base_positions.values()) / count

    for enemy_id, (base_x, base_y) in base_positions.items():
        sprite = board.sprites.get(enemy_id)
        if sprite is None:
            continue
        dx = base_x - center_x
        dy = base_y - center_y
        distance = math.hypot(dx, dy)
        if distance > 0.0:
            norm_x, norm_y = dx / distance, dy / distance
        else:
            norm_x, norm_y = 0.0, 0.0
        sprite.dx = norm_x * pulse_offset
        sprite.dy = norm_y * pulse_offset

    return pulse_time