import pytest

from starfly.settings import GameSettings


def test_defaults():
    settings = GameSettings()
    assert settings.can_fly is False
    assert settings.can_shoot is True
    assert settings.player_auto_shoot is False
    assert settings.player_auto_move is False
    assert settings.player_invincible is False
    assert settings.bullet_speed_fly == 800.0
    assert settings.bullet_speed_player == 600.0
    assert settings.peak_min == 500.0


@pytest.mark.parametrize(
    "method, attribute",
    [
        ("toggle_can_fly", "can_fly"),
        ("toggle_can_shoot", "can_shoot"),
        ("toggle_auto_shoot", "player_auto_shoot"),
        ("toggle_auto_move", "player_auto_move"),
        ("toggle_invincible", "player_invincible"),
    ],
)
def test_toggles_flip_and_flip_back(method, attribute):
    settings = GameSettings()
    before = getattr(settings, attribute)
    getattr(settings, method)()
    assert getattr(settings, attribute) is (not before)
    getattr(settings, method)()
    assert getattr(settings, attribute) is before


def test_round_trip():
    settings = GameSettings()
    settings.toggle_invincible()
    settings.peak_min = 650.0
    restored = GameSettings.from_dict(settings.to_dict())
    assert restored == settings


def test_to_dict_keys():
    assert set(GameSettings().to_dict()) == {
        "can_fly",
        "can_shoot",
        "player_auto_shoot",
        "player_auto_move",
        "player_invincible",
        "bullet_speed_fly",
        "bullet_speed_player",
        "peak_min",
    }


def test_from_dict_missing_field():
    data = GameSettings().to_dict()
    del data["peak_min"]
    with pytest.raises(ValueError):
        GameSettings.from_dict(data)


def test_from_dict_wrong_type():
    data = GameSettings().to_dict()
    data["can_shoot"] = "yes"
    with pytest.raises(ValueError):
        GameSettings.from_dict(data)


def test_from_dict_rejects_bool_for_number():
    data = GameSettings().to_dict()
    data["bullet_speed_fly"] = True
    with pytest.raises(ValueError):
        GameSettings.from_dict(data)


def test_from_dict_accepts_int_and_ignores_unknown():
    data = GameSettings().to_dict()
    data["peak_min"] = 700
    data["extra"] = 1
    settings = GameSettings.from_dict(data)
    assert settings.peak_min == 700.0
    assert isinstance(settings.peak_min, float)