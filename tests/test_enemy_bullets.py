import pytest

from starfly.board import ENEMY_BULLET_SPEED, Anchor, Gameboard, Sprite
from starfly.enemy_bullets import (
    ENEMY_BULLET_SIZE,
    ENEMY_SHOOT_COOLDOWN,
    active_enemy_bullets,
    clear_all_enemy_bullets,
    enemy_shoot,
    update_enemy_bullets,
    update_enemy_shooting,
)


class _Roll:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


def _board_with_enemy(sprite_id="b2_1", x=100.0, y=100.0):
    board = Gameboard(500.0, 700.0)
    board.insert_sprite(
        Sprite(sprite_id, "b2", (50.0, 50.0), (Anchor.static(x), Anchor.static(y)))
    )
    return board


def test_new_enemy_is_tracked_without_shooting():
    board = _board_with_enemy()
    times = {}
    fired = update_enemy_shooting(board, times, 10.0, _Roll(0.0))
    assert fired == []
    assert times == {"b2_1": 10.0}


def test_enemy_shoots_after_cooldown_on_lucky_roll():
    board = _board_with_enemy()
    times = {"b2_1": 0.0}
    now = ENEMY_SHOOT_COOLDOWN + 1.0
    fired = update_enemy_shooting(board, times, now, _Roll(0.0))
    assert len(fired) == 1
    assert fired[0].startswith("enemy_bullet_")
    assert times["b2_1"] == now


def test_unlucky_roll_resets_timer_without_bullet():
    board = _board_with_enemy()
    times = {"b2_1": 0.0}
    now = ENEMY_SHOOT_COOLDOWN + 1.0
    fired = update_enemy_shooting(board, times, now, _Roll(0.99))
    assert fired == []
    assert times["b2_1"] == now
    assert active_enemy_bullets(board) == []


def test_no_shot_before_cooldown():
    board = _board_with_enemy()
    times = {"b2_1": 0.0}
    fired = update_enemy_shooting(board, times, ENEMY_SHOOT_COOLDOWN / 2, _Roll(0.0))
    assert fired == []
    assert times["b2_1"] == 0.0


def test_stale_entries_are_dropped():
    board = _board_with_enemy()
    times = {"b2_1": 0.0, "tiki_9": 0.0}
    update_enemy_shooting(board, times, 0.5, _Roll(0.99))
    assert set(times) == {"b2_1"}


def test_enemy_shoot_centres_bullet_under_enemy():
    board = Gameboard(500.0, 700.0)
    enemy_pos, enemy_size = (100.0, 80.0), (50.0, 40.0)
    bullet_id = enemy_shoot(board, enemy_pos, enemy_size)
    bx, by = board.position_of(bullet_id)
    assert bx + ENEMY_BULLET_SIZE[0] / 2 == pytest.approx(enemy_pos[0] + enemy_size[0] / 2)
    assert by == pytest.approx(enemy_pos[1] + enemy_size[1])
    assert board.sprites[bullet_id].image == "bullet_downward"


def test_update_enemy_bullets_moves_and_reports_offscreen():
    board = Gameboard(500.0, 700.0)
    near = enemy_shoot(board, (0.0, 0.0), (50.0, 50.0))
    far = enemy_shoot(board, (0.0, 900.0), (50.0, 50.0))
    before = board.position_of(near)[1]
    gone = update_enemy_bullets(board)
    assert board.position_of(near)[1] == pytest.approx(before + ENEMY_BULLET_SPEED)
    assert gone == [far]
    assert far in board


def test_update_enemy_bullets_ignores_other_sprites():
    board = _board_with_enemy()
    update_enemy_bullets(board)
    assert board.sprites["b2_1"].dy == 0.0


def test_active_bullets_and_clear():
    board = _board_with_enemy()
    bullet_id = enemy_shoot(board, (10.0, 10.0), (50.0, 50.0))
    bullets = active_enemy_bullets(board)
    assert [b[0] for b in bullets] == [bullet_id]
    assert bullets[0][2] == ENEMY_BULLET_SIZE
    clear_all_enemy_bullets(board)
    assert active_enemy_bullets(board) == []
    assert "b2_1" in board