"""Tests for the setup form."""

import pytest

from dropfour.game.rules import GameController, WIN_CHECK_LAST_MOVE
from dropfour.interfaces.setup import SetupError, create_players, start_game


def test_create_players():
    a, b = create_players("Ada", "red", "Bob", "yellow")
    assert (a.name, a.color) == ("Ada", "red")
    assert (b.name, b.color) == ("Bob", "yellow")


def test_blank_names_fall_back():
    a, b = create_players("  ", "red", None, "blue")
    assert a.name == "Player 1"
    assert b.name == "Player 2"


@pytest.mark.parametrize("p1_color, p2_color", [("", "red"), ("red", "   "), (None, "red")])
def test_colors_are_required(p1_color, p2_color):
    with pytest.raises(SetupError):
        create_players("Ada", p1_color, "Bob", p2_color)


def test_same_color_is_allowed():
    a, b = create_players("Ada", "red", "Bob", "red")
    assert a is not b


def test_start_game():
    game = start_game("Ada", "red", "Bob", "yellow", height=5, width=8, win_check=WIN_CHECK_LAST_MOVE)
    assert isinstance(game, GameController)
    assert (game.board.height, game.board.width) == (5, 8)
    assert game.current_player.name == "Ada"
    assert game.win_check == WIN_CHECK_LAST_MOVE
    assert game.board.pieces_placed == 0
