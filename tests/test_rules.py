"""Tests for the game controller state machine."""

import random

import numpy as np
import pytest

from dropfour.debug import debug
from dropfour.game.board import InvalidColumnError
from dropfour.game.player import Player
from dropfour.game.rules import GameController, WIN_CHECK_FULL, WIN_CHECK_LAST_MOVE
from dropfour.utils import GameStatus, MoveOutcome


class RecordingObserver:
    def __init__(self):
        self.results = []

    def on_move(self, result):
        self.results.append(result)


def test_initial_state(game, players):
    assert game.status == GameStatus.IN_PROGRESS
    assert game.current_player_index == 0
    assert game.current_player is players[0]
    assert game.winner is None
    assert not game.is_over()
    assert (game.board.height, game.board.width) == (6, 7)
    assert game.valid_moves() == list(range(7))


def test_custom_dimensions(players):
    game = GameController(*players, height=8, width=9)
    assert (game.board.height, game.board.width) == (8, 9)


def test_requires_two_distinct_players():
    p = Player("Solo", "red")
    with pytest.raises(ValueError):
        GameController(p, p)


def test_players_with_same_name_and_color_are_distinct():
    a, b = Player("Sam", "blue"), Player("Sam", "blue")
    game = GameController(a, b)
    result = game.apply_move(0)
    assert result.player is a
    assert result.next_player is b


def test_unknown_win_check(players):
    with pytest.raises(ValueError):
        GameController(*players, win_check="sideways")


def test_placed_result(game, players):
    a, b = players
    result = game.apply_move(3)
    assert result.outcome == MoveOutcome.PLACED
    assert (result.row, result.column) == (5, 3)
    assert result.player is a
    assert result.next_player is b
    assert result.status == GameStatus.IN_PROGRESS
    assert result.placed
    assert not result.is_terminal
    assert game.board.cell(5, 3) is a


def test_turns_alternate(game, players, play):
    results = play(game, [0, 1, 2, 0, 1, 2, 4, 5])
    assert [r.player for r in results] == [players[i % 2] for i in range(8)]
    assert all(r.outcome == MoveOutcome.PLACED for r in results)
    assert game.current_player_index == 0


def test_horizontal_win(game, players, play):
    a, b = players
    results = play(game, [0, 0, 1, 1, 2, 2, 3])
    last = results[-1]
    assert [r.outcome for r in results[:-1]] == [MoveOutcome.PLACED] * 6
    assert last.outcome == MoveOutcome.WON
    assert last.player is a
    assert (last.row, last.column) == (5, 3)
    assert last.winning_line == ((5, 0), (5, 1), (5, 2), (5, 3))
    assert last.next_player is None
    assert last.is_terminal
    assert game.status == GameStatus.WON
    assert game.winner is a
    assert game.is_over()


def test_vertical_win_for_second_player(game, players, play):
    _, b = players
    results = play(game, [0, 1, 2, 1, 3, 1, 5, 1])
    last = results[-1]
    assert last.outcome == MoveOutcome.WON
    assert last.player is b
    assert last.winning_line == ((2, 1), (3, 1), (4, 1), (5, 1))
    assert game.winner is b


def test_diagonal_win(game, players, play):
    a, _ = players
    # A builds (5,0) (4,1) (3,2) (2,3); B fills underneath
    moves = [0, 1, 1, 2, 2, 3, 2, 3, 3, 6, 3]
    results = play(game, moves)
    assert [r.outcome for r in results[:-1]] == [MoveOutcome.PLACED] * 10
    assert results[-1].outcome == MoveOutcome.WON
    assert results[-1].player is a
    assert sorted(results[-1].winning_line) == [(2, 3), (3, 2), (4, 1), (5, 0)]


def test_column_full_does_not_toggle(game, play):
    play(game, [0] * 6)
    index_before = game.current_player_index
    player_before = game.current_player
    state_before = game.board.get_state(game.players).copy()

    result = game.apply_move(0)

    assert result.outcome == MoveOutcome.COLUMN_FULL
    assert result.row is None
    assert not result.placed
    assert result.player is player_before
    assert game.current_player_index == index_before
    assert game.status == GameStatus.IN_PROGRESS
    assert np.array_equal(state_before, game.board.get_state(game.players))

    # The same player can still move elsewhere
    assert game.apply_move(1).player is player_before


@pytest.mark.parametrize("column", [-1, 7])
def test_invalid_column_leaves_game_unchanged(game, column):
    game.apply_move(3)
    with pytest.raises(InvalidColumnError):
        game.apply_move(column)
    assert game.current_player_index == 1
    assert game.board.pieces_placed == 1


def test_full_board_tie(game, play, tie_moves):
    moves = tie_moves
    assert len(moves) == 42
    results = play(game, moves)
    assert all(r.outcome == MoveOutcome.PLACED for r in results[:-1])
    assert results[-1].outcome == MoveOutcome.TIED
    assert results[-1].next_player is None
    assert game.status == GameStatus.TIED
    assert game.winner is None
    assert game.board.is_full()
    for p in game.players:
        assert not game.board.has_win_at(p)


def test_tie_on_small_board(players, play):
    game = GameController(*players, height=3, width=3)
    results = play(game, [0, 0, 0, 1, 1, 1, 2, 2, 2])
    assert results[-1].outcome == MoveOutcome.TIED


@pytest.mark.parametrize("ending", ["won", "tied"])
def test_terminal_state_rejects_moves(game, play, tie_moves, ending):
    play(game, [0, 0, 1, 1, 2, 2, 3] if ending == "won" else tie_moves)
    assert game.status.name == ending.upper()
    status = game.status
    state_before = game.board.get_state(game.players).copy()

    for column in range(game.board.width):
        result = game.apply_move(column)
        assert result.outcome == MoveOutcome.ALREADY_OVER
        assert result.row is None

    assert game.status == status
    assert game.valid_moves() == []
    assert np.array_equal(state_before, game.board.get_state(game.players))


def test_observers_receive_every_result(game, play):
    observer = RecordingObserver()
    game.subscribe(observer)
    game.subscribe(observer)  # subscribing twice is a no-op

    returned = play(game, [0] * 7 + [1, 2, 1, 2, 1])

    assert observer.results == returned
    assert [r.outcome for r in observer.results].count(MoveOutcome.COLUMN_FULL) == 1


def test_unsubscribe(game):
    observer = RecordingObserver()
    game.subscribe(observer)
    game.apply_move(0)
    game.unsubscribe(observer)
    game.apply_move(1)
    assert len(observer.results) == 1


def test_observer_sees_final_state(game, play):
    seen = []

    class StatusObserver:
        def on_move(self, result):
            seen.append((result.outcome, game.status, game.board.pieces_placed))

    game.subscribe(StatusObserver())
    play(game, [0, 0, 1, 1, 2, 2, 3])
    assert seen[-1] == (MoveOutcome.WON, GameStatus.WON, 7)


def test_win_check_strategies_agree(players):
    rng = random.Random(11)
    for _ in range(40):
        full = GameController(*players, win_check=WIN_CHECK_FULL)
        last = GameController(*players, win_check=WIN_CHECK_LAST_MOVE)
        while not full.is_over():
            column = rng.choice(full.valid_moves())
            r1, r2 = full.apply_move(column), last.apply_move(column)
            assert r1 == r2
        assert last.is_over()
        assert full.winner is last.winner


def test_render_uses_player_symbols(game):
    game.apply_move(0)
    game.apply_move(1)
    bottom = game.render().splitlines()[-3]
    assert bottom.startswith("|X O")


def test_games_keep_separate_win_check_timers(players):
    first = GameController(*players)
    second = GameController(Player("Cy", "green"), Player("Di", "blue"))
    assert first._timer_key != second._timer_key

    debug.start_timer(first._timer_key)
    second.apply_move(0)
    # The other game's move must not consume this game's marker
    assert debug.end_timer(first._timer_key) is not None
