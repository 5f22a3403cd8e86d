"""Enemy formations for each wave."""

from __future__ import annotations

import random
from typing import NamedTuple, Protocol


class EnemySpawn(NamedTuple):
    """One enemy to place: sprite id, image name and top-left corner."""

    id: str
    image: str
    x: float
    y: float


class _RandRange(Protocol):
    def randrange(self, stop: int) -> int: ...


def initial_pattern(board_width: float, board_height: float) -> list[EnemySpawn]:
    w, h = board_width, board_height
    return [
        EnemySpawn("b2_1", "b2", w * 0.2, h * 0.1),
        EnemySpawn("b2_2", "b2", w * 0.4, h * 0.1),
        EnemySpawn("b2_3", "b2", w * 0.6, h * 0.1),
        EnemySpawn("b2_4", "b2", w * 0.8, h * 0.1),
        EnemySpawn("tiki_1", "tiki_fly", w * 0.15, h * 0.2),
        EnemySpawn("tiki_2", "tiki_fly", w * 0.3, h * 0.2),
        EnemySpawn("tiki_3", "tiki_fly", w * 0.5, h * 0.2),
        EnemySpawn("tiki_4", "tiki_fly", w * 0.7, h * 0.2),
        EnemySpawn("tiki_5", "tiki_fly", w * 0.85, h * 0.2),
        EnemySpawn("northrop_1", "northrop", w * 0.25, h * 0.3),
        EnemySpawn("northrop_2", "northrop", w * 0.4, h * 0.3),
        EnemySpawn("northrop_3", "northrop", w * 0.6, h * 0.3),
        EnemySpawn("northrop_4", "northrop", w * 0.75, h * 0.3),
    ]


def pattern_1(board_width: float, board_height: float) -> list[EnemySpawn]:
    w, h = board_width, board_height
    return [
        EnemySpawn("b2_1", "b2", w * 0.5, h * 0.05),
        EnemySpawn("b2_2", "b2", w * 0.3, h * 0.15),
        EnemySpawn("b2_3", "b2", w * 0.7, h * 0.15),
        EnemySpawn("tiki_1", "tiki_fly", w * 0.1, h * 0.25),
        EnemySpawn("tiki_2", "tiki_fly", w * 0.5, h * 0.25),
        EnemySpawn("tiki_3", "tiki_fly", w * 0.9, h * 0.25),
        EnemySpawn("northrop_1", "northrop", w * 0.2, h * 0.35),
        EnemySpawn("northrop_2", "northrop", w * 0.4, h * 0.35),
        EnemySpawn("northrop_3", "northrop", w * 0.6, h * 0.35),
        EnemySpawn("northrop_4", "northrop", w * 0.8, h * 0.35),
    ]


def pattern_2(board_width: float, board_height: float) -> list[EnemySpawn]:
    w, h = board_width, board_height
    return [
        EnemySpawn("b2_1", "b2", w * 0.1, h * 0.1),
        EnemySpawn("b2_2", "b2", w * 0.3, h * 0.15),
        EnemySpawn("b2_3", "b2", w * 0.5, h * 0.2),
        EnemySpawn("b2_4", "b2", w * 0.7, h * 0.15),
        EnemySpawn("b2_5", "b2", w * 0.9, h * 0.1),
        EnemySpawn("tiki_1", "tiki_fly", w * 0.2, h * 0.3),
        EnemySpawn("tiki_2", "tiki_fly", w * 0.4, h * 0.25),
        EnemySpawn("tiki_3", "tiki_fly", w * 0.6, h * 0.25),
        EnemySpawn("tiki_4", "tiki_fly", w * 0.8, h * 0.3),
        EnemySpawn("northrop_1", "northrop", w * 0.35, h * 0.4),
        EnemySpawn("northrop_2", "northrop", w * 0.65, h * 0.4),
    ]


def pattern_3(board_width: float, board_height: float) -> list[EnemySpawn]:
    """A ring of bombers around a short row of tikis."""
    cx = board_width * 0.5
    cy = board_height * 0.25
    r = board_width * 0.2
    return [
        EnemySpawn("b2_1", "b2", cx + r * 0.0, cy - r),
        EnemySpawn("b2_2", "b2", cx + r * 0.707, cy - r * 0.707),
        EnemySpawn("b2_3", "b2", cx + r, cy),
        EnemySpawn("b2_4", "b2", cx + r * 0.707, cy + r * 0.707),
        EnemySpawn("b2_5", "b2", cx, cy + r),
        EnemySpawn("b2_6", "b2", cx - r * 0.707, cy + r * 0.707),
        EnemySpawn("b2_7", "b2", cx - r, cy),
        EnemySpawn("b2_8", "b2", cx - r * 0.707, cy - r * 0.707),
        EnemySpawn("tiki_1", "tiki_fly", cx, cy),
        EnemySpawn("tiki_2", "tiki_fly", cx + r * 0.5, cy),
        EnemySpawn("tiki_3", "tiki_fly", cx - r * 0.5, cy),
        EnemySpawn("northrop_1", "northrop", board_width * 0.1, board_height * 0.4),
        EnemySpawn("northrop_2", "northrop", board_width * 0.9, board_height * 0.4),
    ]


_PATTERNS = (initial_pattern, pattern_1, pattern_2, pattern_3)


def random_pattern(
    board_width: float, board_height: float, rng: _RandRange | None = None
) -> list[EnemySpawn]:
    """One of the four formations, chosen uniformly."""
    chooser = rng if rng is not None else random
    return _PATTERNS[chooser.randrange(len(_PATTERNS))](board_width, board_height)