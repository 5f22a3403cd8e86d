"""Tunable game settings."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping


@dataclass
class GameSettings:
    """Switches and thresholds that change how a game plays."""

    can_fly: bool = False
    can_shoot: bool = True
    player_auto_shoot: bool = False
    player_auto_move: bool = False
    player_invincible: bool = False
    bullet_speed_fly: float = 800.0
    bullet_speed_player: float = 600.0
    peak_min: float = 500.0

    def toggle_can_fly(self) -> None:
        self.can_fly = not self.can_fly

    def toggle_can_shoot(self) -> None:
        self.can_shoot = not self.can_shoot

    def toggle_auto_shoot(self) -> None:
        self.player_auto_shoot = not self.player_auto_shoot

    def toggle_auto_move(self) -> None:
        self.player_auto_move = not self.player_auto_move

    def toggle_invincible(self) -> None:
        self.player_invincible = not self.player_invincible

    def to_dict(self) -> dict[str, Any]:
        """Return the settings as a plain dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GameSettings:
        """Build settings from a mapping holding every field; unknown keys are ignored."""
        values: dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in data:
                raise ValueError(f"missing field: {f.name}")
            value = data[f.name]
            if isinstance(f.default, bool):
                if not isinstance(value, bool):
                    raise ValueError(f"field {f.name} must be a boolean")
            else:
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ValueError(f"field {f.name} must be a number")
                value = float(value)
            values[f.name] = value
        return cls(**values)