"""Shared fixtures for dropfour tests."""

import pytest

from dropfour.debug import debug, DebugLevel
from dropfour.game.player import Player
from dropfour.game.rules import GameController


@pytest.fixture
def players():
    return Player("Ada", "red"), Player("Bob", "yellow")


@pytest.fixture
def game(players):
    return GameController(*players)


@pytest.fixture(autouse=True)
def quiet_debug():
    """Keep the logging singleton from leaking settings between tests."""
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[])
    yield
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[], log_file="")


def _apply_all(game, columns):
    return [game.apply_move(col) for col in columns]


@pytest.fixture
def play():
    """Apply a sequence of moves to a game and return the list of results."""
    return _apply_all


@pytest.fixture
def tie_moves():
    """
    Moves that fill a 6x7 board with strictly alternating turns and no four in a row.

    Columns 0, 1, 4, 5 end up A,B,A,B,A,B from the bottom and columns 2, 3, 6
    end up B,A,B,A,B,A.
    """
    moves = []
    for x, y in ((0, 2), (1, 3), (4, 6)):
        moves.extend([x, y, y, x] * 3)
    moves.extend([5] * 6)
    return moves
