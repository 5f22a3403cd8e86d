"""Sprites placed on a rectangular game board, and sprite id classification."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

log = logging.getLogger(__name__)

ENEMY_BULLET_SPEED = 6.0
PULSE_AMPLITUDE = 5.0
PULSE_SPEED = 0.1

Vec2 = tuple[float, float]

_ENEMY_PREFIXES = ("b2_", "tiki_", "northrop_")
_NON_ENEMY_PREFIXES = ("player", "bullet_", "enemy_bullet_", "explosion_")


class _Mode(enum.Enum):
    START = "start"
    CENTER = "center"
    END = "end"
    STATIC = "static"


@dataclass(frozen=True)
class Anchor:
    """Where a sprite sits along one axis of the board before adjustments."""

    mode: _Mode = _Mode.STATIC
    value: float = 0.0

    @classmethod
    def start(cls) -> Anchor:
        return cls(_Mode.START)

    @classmethod
    def center(cls) -> Anchor:
        return cls(_Mode.CENTER)

    @classmethod
    def end(cls) -> Anchor:
        return cls(_Mode.END)

    @classmethod
    def static(cls, value: float) -> Anchor:
        return cls(_Mode.STATIC, float(value))

    def resolve(self, available: float, extent: float) -> float:
        """Offset of an item of the given extent within the available length."""
        if self.mode is _Mode.START:
            return 0.0
        if self.mode is _Mode.CENTER:
            return (available - extent) / 2.0
        if self.mode is _Mode.END:
            return available - extent
        return self.value


def _origin() -> tuple[Anchor, Anchor]:
    return (Anchor.static(0.0), Anchor.static(0.0))


@dataclass
class Sprite:
    """An image on the board, anchored and then shifted by (dx, dy)."""

    id: str
    image: str
    size: Vec2
    anchor: tuple[Anchor, Anchor] = field(default_factory=_origin)
    dx: float = 0.0
    dy: float = 0.0

    def position(self, board_size: Vec2) -> Vec2:
        """Top-left corner of the sprite on a board of the given size."""
        board_w, board_h = board_size
        width, height = self.size
        x = self.anchor[0].resolve(board_w, width) + self.dx
        y = self.anchor[1].resolve(board_h, height) + self.dy
        return (x, y)


@dataclass
class Gameboard:
    """A board of fixed size holding sprites keyed by id."""

    width: float
    height: float
    sprites: dict[str, Sprite] = field(default_factory=dict)

    @property
    def size(self) -> Vec2:
        return (self.width, self.height)

    def __contains__(self, sprite_id: object) -> bool:
        return sprite_id in self.sprites

    def insert_sprite(self, sprite: Sprite) -> None:
        """Add a sprite, replacing any sprite with the same id."""
        self.sprites[sprite.id] = sprite

    def remove_sprite(self, sprite_id: str) -> Sprite | None:
        """Remove a sprite and return it, or None if it was not there."""
        return self.sprites.pop(sprite_id, None)

    def position_of(self, sprite_id: str) -> Vec2:
        """Current position of a sprite; KeyError if it is not on the board."""
        return self.sprites[sprite_id].position(self.size)

    def ids_with_prefix(self, prefix: str) -> list[str]:
        return [sprite_id for sprite_id in self.sprites if sprite_id.startswith(prefix)]


def is_enemy(sprite_id: str) -> bool:
    return sprite_id.startswith(_ENEMY_PREFIXES) and not sprite_id.startswith(
        _NON_ENEMY_PREFIXES
    )


def is_enemy_bullet(sprite_id: str) -> bool:
    return sprite_id.startswith("enemy_bullet_")


def is_tiki(sprite_id: str) -> bool:
    return sprite_id.startswith("tiki_")


def is_bullet(sprite_id: str) -> bool:
    return sprite_id.startswith("bullet_")


def is_player(sprite_id: str) -> bool:
    return sprite_id == "player"


def is_life_sprite(sprite_id: str) -> bool:
    return sprite_id.startswith("life_")


def count_active_enemies(board: Gameboard) -> int:
    count = sum(1 for sprite_id in board.sprites if is_enemy(sprite_id))
    log.debug("Active enemies: %d", count)
    return count