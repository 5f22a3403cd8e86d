"""The player's ship: input, movement state, shooting and bullets."""

from __future__ import annotations

import enum
import logging
import uuid
from dataclasses import dataclass

from starfly.board import Anchor, Gameboard, Sprite, Vec2, is_bullet

log = logging.getLogger(__name__)

STEP = 1.5
BULLET_SPEED = 8.0
MOVEMENT_SPEED = 300.0
SHOOT_COOLDOWN = 0.2
SERVER_MOVEMENT_DURATION = 0.1

PLAYER_ID = "player"
PLAYER_SIZE: Vec2 = (50.0, 50.0)
BULLET_SIZE: Vec2 = (15.0, 15.0)
BULLET_PREFIX = "bullet_"
EDGE_MARGIN = 5.0


class MovementDirection(enum.Enum):
    NONE = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    BOTH = enum.auto()


class PlayerMode(enum.Enum):
    IDLE = enum.auto()
    MOVING_LEFT = enum.auto()
    MOVING_RIGHT = enum.auto()
    MOVING_BOTH = enum.auto()
    SHOOTING = enum.auto()
    DESTROYED = enum.auto()


_MODE_FOR_DIRECTION = {
    MovementDirection.NONE: PlayerMode.IDLE,
    MovementDirection.LEFT: PlayerMode.MOVING_LEFT,
    MovementDirection.RIGHT: PlayerMode.MOVING_RIGHT,
    MovementDirection.BOTH: PlayerMode.MOVING_BOTH,
}


@dataclass(frozen=True)
class PlayerState:
    """What the ship is doing, and when it last fired.

    For the shooting mode ``last_shot`` is the time of that shot and
    ``direction`` the way the ship was moving when it fired.
    """

    mode: PlayerMode = PlayerMode.IDLE
    last_shot: float | None = None
    direction: MovementDirection = MovementDirection.NONE
    speed: float = 0.0

    @classmethod
    def idle(cls, last_shot: float | None = None) -> PlayerState:
        return cls(PlayerMode.IDLE, last_shot)

    @classmethod
    def destroyed(cls) -> PlayerState:
        return cls(PlayerMode.DESTROYED)

    @classmethod
    def shooting(cls, direction: MovementDirection, shot_time: float) -> PlayerState:
        return cls(PlayerMode.SHOOTING, shot_time, direction)

    @classmethod
    def from_direction(
        cls, direction: MovementDirection, last_shot: float | None
    ) -> PlayerState:
        mode = _MODE_FOR_DIRECTION[direction]
        speed = 0.0 if mode is PlayerMode.IDLE else MOVEMENT_SPEED
        return cls(mode, last_shot, direction, speed)


@dataclass
class KeysHeld:
    left: bool = False
    right: bool = False

    def to_direction(self) -> MovementDirection:
        if self.left and self.right:
            return MovementDirection.BOTH
        if self.left:
            return MovementDirection.LEFT
        if self.right:
            return MovementDirection.RIGHT
        return MovementDirection.NONE


@dataclass(frozen=True)
class ServerMovement:
    direction: MovementDirection
    start_time: float


class Key(enum.Enum):
    ARROW_LEFT = enum.auto()
    ARROW_RIGHT = enum.auto()
    ARROW_UP = enum.auto()
    ARROW_DOWN = enum.auto()
    OTHER = enum.auto()


@dataclass(frozen=True)
class KeyboardEvent:
    key: Key
    pressed: bool = True


def create_player() -> Sprite:
    """The ship, centred at the bottom of the board."""
    return Sprite(PLAYER_ID, "spaceship", PLAYER_SIZE, (Anchor.center(), Anchor.end()))


def shoot(board: Gameboard, player_pos: Vec2, player_size: Vec2) -> str:
    """Place a bullet just above the ship and return its id."""
    x, y = player_pos
    bullet_id = f"{BULLET_PREFIX}{uuid.uuid4()}"
    bullet_x = x + (player_size[0] - BULLET_SIZE[0]) / 2.0
    board.insert_sprite(
        Sprite(
            bullet_id,
            "bullet_blue",
            BULLET_SIZE,
            (Anchor.static(bullet_x), Anchor.static(y - 20.0)),
        )
    )
    return bullet_id


def handle_movement_by_state(board: Gameboard, state: PlayerState) -> None:
    """Step the ship sideways according to its state, staying off the edges."""
    sprite = board.sprites.get(PLAYER_ID)
    if sprite is None:
        return
    x = sprite.position(board.size)[0]
    if state.mode is PlayerMode.MOVING_LEFT:
        if x > EDGE_MARGIN:
            sprite.dx -= STEP
    elif state.mode is PlayerMode.MOVING_RIGHT:
        if x < board.width - sprite.size[0] - EDGE_MARGIN:
            sprite.dx += STEP


def update_bullets(board: Gameboard) -> list[str]:
    """Move player bullets up; return those that have left the board."""
    gone: list[str] = []
    for sprite_id, sprite in board.sprites.items():
        if not is_bullet(sprite_id):
            continue
        sprite.dy -= BULLET_SPEED
        if sprite.position(board.size)[1] < -50.0:
            gone.append(sprite_id)
    return gone


def active_bullets(board: Gameboard) -> list[tuple[str, Vec2, Vec2]]:
    """Id, position and size of every player bullet on the board."""
    return [
        (sprite_id, sprite.position(board.size), sprite.size)
        for sprite_id, sprite in board.sprites.items()
        if is_bullet(sprite_id)
    ]


class PlayerManager:
    """Keeps the ship's state from keyboard and remote input."""

    def __init__(self) -> None:
        self.state = PlayerState.idle()
        self.keys = KeysHeld()
        self.server_movement: ServerMovement | None = None

    def reset(self) -> None:
        self.state = PlayerState.idle()
        self.keys = KeysHeld()
        self.server_movement = None

    def handle_keyboard_input(
        self, board: Gameboard, event: KeyboardEvent, now: float
    ) -> bool:
        """Apply a key event; report whether the key is one the ship uses."""
        if event.key is Key.ARROW_LEFT:
            self.keys.left = event.pressed
            self.update_player_state(now)
            return True
        if event.key is Key.ARROW_RIGHT:
            self.keys.right = event.pressed
            self.update_player_state(now)
            return True
        if event.key is Key.ARROW_UP and event.pressed:
            self.handle_shooting(board, now)
            return True
        return False

    def server_move(self, direction: MovementDirection, now: float) -> None:
        """Move in a direction for a short while, overriding the keys."""
        self.server_movement = ServerMovement(direction, now)
        log.debug("Server: move %s activated", direction.name.lower())

    def handle_server_shoot(self, board: Gameboard, now: float) -> str | None:
        return self.handle_shooting(board, now)

    def can_shoot(self, now: float) -> bool:
        if self.state.mode is PlayerMode.DESTROYED:
            return False
        last_shot = self.state.last_shot
        return last_shot is None or now - last_shot >= SHOOT_COOLDOWN

    def handle_shooting(self, board: Gameboard, now: float) -> str | None:
        """Fire if the cooldown allows and the ship is on the board; return the bullet id."""
        if not self.can_shoot(now):
            return None
        sprite = board.sprites.get(PLAYER_ID)
        if sprite is None:
            return None
        bullet_id = shoot(board, sprite.position(board.size), sprite.size)
        self.state = PlayerState.shooting(self.current_direction(now), now)
        return bullet_id

    def _server_direction(self, now: float) -> MovementDirection:
        movement = self.server_movement
        if movement is not None:
            if now - movement.start_time < SERVER_MOVEMENT_DURATION:
                return movement.direction
            self.server_movement = None
        return MovementDirection.NONE

    def current_direction(self, now: float) -> MovementDirection:
        direction = self._server_direction(now)
        if direction is MovementDirection.NONE:
            return self.keys.to_direction()
        return direction

    def update_player_state(self, now: float) -> PlayerState:
        direction = self.current_direction(now)
        if self.state.mode is not PlayerMode.DESTROYED:
            self.state = PlayerState.from_direction(direction, self.state.last_shot)
        return self.state

    def destroy(self) -> None:
        self.state = PlayerState.destroyed()

    def is_destroyed(self) -> bool:
        return self.state.mode is PlayerMode.DESTROYED

    def update_player_movement(self, board: Gameboard, now: float) -> None:
        if PLAYER_ID in board:
            self.update_player_state(now)
            handle_movement_by_state(board, self.state)