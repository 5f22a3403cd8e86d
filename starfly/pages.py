"""The settings page: rows of labelled switches over the game settings."""

from __future__ import annotations

from dataclasses import dataclass, field

from starfly.settings import GameSettings

PRESSURE_STEP = 50.0
PRESSURE_LIMIT = 1000.0

PRESSURE_ROW = 0
FLIES_SHOOT_ROW = 1
AUTO_MOVE_ROW = 2
AUTO_SHOOT_ROW = 3
INVINCIBLE_ROW = 4

_PRESSURE_PREFIX = "Touchpad Pressure"
_FLIES_SHOOT_PREFIX = "Enemy Flies Can Shoot"
_AUTO_MOVE_PREFIX = "Player Auto Moves"
_AUTO_SHOOT_PREFIX = "Player Auto Shoots"
_INVINCIBLE_PREFIX = "Player Is Invincible"


@dataclass
class SettingsRow:
    """A label, what it means, and the captions of its buttons."""

    label: str
    description: str
    buttons: list[str] = field(default_factory=list)


def _switch_texts(prefix: str, flag: bool) -> tuple[str, str]:
    """The label of a switch row and the caption of its button."""
    if flag:
        return f"{prefix}: Yes", "Turn Off"
    return f"{prefix}: No", "Turn On"


def _pressure_label(peak: float) -> str:
    return f"{_PRESSURE_PREFIX}: {peak:.0f}"


def _switch_row(prefix: str, flag: bool, description: str) -> SettingsRow:
    label, caption = _switch_texts(prefix, flag)
    return SettingsRow(label, description, [caption])


class SettingsPage:
    """Shows the settings and changes them in place."""

    title = "Settings"

    def __init__(self, settings: GameSettings) -> None:
        self.settings = settings
        self.rows = [
            SettingsRow(
                _pressure_label(settings.peak_min),
                "Increase or decrease pressure required to perform an action.",
                ["Decrease", "Increase"],
            ),
            _switch_row(
                _FLIES_SHOOT_PREFIX, settings.can_shoot, "Allows enemy flies to shoot back."
            ),
            _switch_row(
                _AUTO_MOVE_PREFIX,
                settings.player_auto_move,
                "Allows player to move back and forth automatically.",
            ),
            _switch_row(
                _AUTO_SHOOT_PREFIX,
                settings.player_auto_shoot,
                "Allows player to automatically shoot every 200 millis.",
            ),
            _switch_row(
                _INVINCIBLE_PREFIX,
                settings.player_invincible,
                "Allows player to be invincible to enemy fire.",
            ),
        ]

    def adjust_pressure(self, delta: float) -> float:
        """Shift the pressure threshold while it is below the limit; return it."""
        if self.settings.peak_min < PRESSURE_LIMIT:
            self.settings.peak_min += delta
            self.rows[PRESSURE_ROW].label = _pressure_label(self.settings.peak_min)
        return self.settings.peak_min

    def _refresh_switch(self, index: int, prefix: str, flag: bool) -> bool:
        row = self.rows[index]
        row.label, row.buttons[0] = _switch_texts(prefix, flag)
        return flag

    def toggle_flies_shoot(self) -> bool:
        self.settings.toggle_can_shoot()
        return self._refresh_switch(FLIES_SHOOT_ROW, _FLIES_SHOOT_PREFIX, self.settings.can_shoot)

    def toggle_auto_move(self) -> bool:
        self.settings.toggle_auto_move()
        return self._refresh_switch(
            AUTO_MOVE_ROW, _AUTO_MOVE_PREFIX, self.settings.player_auto_move
        )

    def toggle_auto_shoot(self) -> bool:
        self.settings.toggle_auto_shoot()
        return self._refresh_switch(
            AUTO_SHOOT_ROW, _AUTO_SHOOT_PREFIX, self.settings.player_auto_shoot
        )

    def toggle_invincibility(self) -> bool:
        self.settings.toggle_invincible()
        return self._refresh_switch(
            INVINCIBLE_ROW, _INVINCIBLE_PREFIX, self.settings.player_invincible
        )