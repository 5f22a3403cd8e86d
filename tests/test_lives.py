import pytest

from starfly.board import Gameboard
from starfly.lives import (
    DEFAULT_LIVES,
    INVULNERABILITY_DURATION,
    RESPAWN_DELAY,
    LivesDisplayInfo,
    PlayerLives,
)
from starfly.player import PlayerManager, create_player


@pytest.fixture
def lives():
    return PlayerLives(PlayerManager())


@pytest.fixture
def board():
    return Gameboard(500.0, 700.0)


def test_default_lives(lives):
    assert lives.lives == DEFAULT_LIVES
    assert not lives.is_game_over()


def test_death_takes_a_life_and_destroys_ship(lives):
    lives.handle_player_death(5.0)
    assert lives.lives == DEFAULT_LIVES - 1
    assert lives.player_manager.is_destroyed()
    assert lives.is_waiting_to_respawn()
    assert lives.respawn_time_remaining(5.5) == pytest.approx(RESPAWN_DELAY - 0.5)
    assert lives.respawn_time_remaining(5.0 + RESPAWN_DELAY) is None


def test_no_death_with_no_lives():
    pl = PlayerLives(PlayerManager(), lives=0)
    pl.handle_player_death(1.0)
    assert pl.lives == 0
    assert pl.death_time is None
    assert not pl.is_game_over()


def test_game_over_after_last_life(board):
    pl = PlayerLives(PlayerManager(), lives=1)
    pl.handle_player_death(0.0)
    assert pl.is_game_over()
    assert not pl.update(board, RESPAWN_DELAY)
    assert "player" not in board
    assert pl.death_time is None


def test_respawn_after_delay(lives, board):
    lives.handle_player_death(0.0)
    assert not lives.update(board, RESPAWN_DELAY / 2)
    assert "player" not in board
    assert lives.update(board, RESPAWN_DELAY)
    assert "player" in board
    assert not lives.player_manager.is_destroyed()
    assert lives.is_invulnerable(RESPAWN_DELAY)
    assert lives.invulnerability_time_remaining(RESPAWN_DELAY) == pytest.approx(
        INVULNERABILITY_DURATION
    )


def test_invulnerability_expires(lives, board):
    lives.respawn_player(board, 0.0)
    assert not lives.can_take_damage(1.0)
    assert not lives.handle_enemy_collision(1.0)
    assert lives.lives == DEFAULT_LIVES
    lives.update(board, INVULNERABILITY_DURATION)
    assert lives.invulnerable_until is None
    assert lives.handle_enemy_collision(INVULNERABILITY_DURATION)
    assert lives.lives == DEFAULT_LIVES - 1


def test_respawn_replaces_existing_player(lives, board):
    old = create_player()
    old.dx = 40.0
    board.insert_sprite(old)
    lives.respawn_player(board, 0.0)
    assert board.sprites["player"].dx == 0.0
    assert len(board.sprites) == 1


def test_force_respawn_grants_a_life(board):
    pl = PlayerLives(PlayerManager(), lives=1)
    pl.handle_player_death(0.0)
    pl.force_respawn(board, 0.1)
    assert pl.lives == 1
    assert pl.death_time is None
    assert "player" in board
    assert not pl.is_game_over()


def test_add_lives_and_reset(lives):
    lives.add_lives(2)
    assert lives.lives == DEFAULT_LIVES + 2
    lives.handle_player_death(0.0)
    lives.reset(4)
    assert lives.lives == 4
    assert lives.death_time is None


def test_display_info(lives):
    lives.handle_player_death(0.0)
    info = lives.display_info(0.5)
    assert info.lives == DEFAULT_LIVES - 1
    assert info.is_waiting_to_respawn
    assert not info.is_invulnerable
    assert info.respawn_time_remaining == pytest.approx(RESPAWN_DELAY - 0.5)
    assert info.invulnerability_time_remaining is None
    assert not info.is_game_over


def test_display_info_for_lives():
    assert LivesDisplayInfo.for_lives(0).is_game_over
    fresh = LivesDisplayInfo.for_lives(3)
    assert not fresh.is_game_over
    assert fresh.respawn_time_remaining is None