"""
rules.py - Game state management for dropfour

This module provides the GameController, which owns turn order and the
game's state machine, and the MoveResult values it reports to the
presentation layer through the GameObserver contract.
"""

from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple

from dropfour.debug import debug
from dropfour.game.board import Board
from dropfour.game.player import Player
from dropfour.utils import DEFAULT_HEIGHT, DEFAULT_WIDTH, Coord, GameStatus, MoveOutcome

WIN_CHECK_FULL = "full"
WIN_CHECK_LAST_MOVE = "last_move"
WIN_CHECK_STRATEGIES = (WIN_CHECK_FULL, WIN_CHECK_LAST_MOVE)


@dataclass(frozen=True)
class MoveResult:
    """What a single apply_move call did, in enough detail to render it."""
    outcome: MoveOutcome
    column: int
    player: Player
    status: GameStatus
    row: Optional[int] = None
    next_player: Optional[Player] = None
    winning_line: Optional[Tuple[Coord, ...]] = None

    @property
    def placed(self) -> bool:
        """True if a piece was put on the board."""
        return self.row is not None

    @property
    def is_terminal(self) -> bool:
        return self.status.is_game_over()


class GameObserver(Protocol):
    """Anything that wants to hear about moves, typically a renderer."""

    def on_move(self, result: MoveResult) -> None:
        ...


class GameController:
    """
    Runs one game between two players.

    A finished game accepts no more moves; start a new game by creating a
    new controller.
    """

    def __init__(self, player_one: Player, player_two: Player,
                 height: int = DEFAULT_HEIGHT, width: int = DEFAULT_WIDTH,
                 win_check: str = WIN_CHECK_FULL):
        """
        Initialize a new game.

        Args:
            player_one: The player who moves first
            player_two: The player who moves second
            height: Number of rows on the board
            width: Number of columns on the board
            win_check: "full" to scan the whole grid after each move, or
                "last_move" to check only the lines through the placed piece
        """
        if player_one is player_two:
            raise ValueError("A game needs two distinct players")
        if win_check not in WIN_CHECK_STRATEGIES:
            raise ValueError(f"Unknown win check {win_check!r}; expected one of {WIN_CHECK_STRATEGIES}")

        debug.debug(f"Initializing game {player_one} vs {player_two} on {height}x{width}", "game")
        self.board = Board(height, width)
        self.players: Tuple[Player, Player] = (player_one, player_two)
        self.win_check = win_check
        self._current_index = 0
        self._status = GameStatus.IN_PROGRESS
        self._winner: Optional[Player] = None
        self._observers: List[GameObserver] = []
        self._timer_key = f"win_check_{id(self):x}"

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def current_player_index(self) -> int:
        return self._current_index

    @property
    def current_player(self) -> Player:
        return self.players[self._current_index]

    @property
    def winner(self) -> Optional[Player]:
        return self._winner

    def is_over(self) -> bool:
        return self._status.is_game_over()

    def valid_moves(self) -> List[int]:
        """Columns a move may currently be played in (none once the game is over)."""
        if self.is_over():
            return []
        return self.board.valid_moves()

    def subscribe(self, observer: GameObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: GameObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self, result: MoveResult) -> MoveResult:
        for observer in list(self._observers):
            observer.on_move(result)
        return result

    def _has_won(self, row: int, column: int, player: Player) -> bool:
        if self.win_check == WIN_CHECK_LAST_MOVE:
            return self.board.has_win_through(row, column)
        return self.board.has_win_at(player)

    def apply_move(self, column: int) -> MoveResult:
        """
        Drop the current player's piece into `column`.

        Args:
            column: Column to place a piece (0-indexed)

        Returns:
            A MoveResult describing the outcome

        Raises:
            InvalidColumnError: If the column is outside the board; the game is unchanged
        """
        player = self.current_player

        if self.is_over():
            debug.debug(f"Rejecting move in column {column}: game is over ({self._status.name})", "game")
            return self._notify(MoveResult(MoveOutcome.ALREADY_OVER, column, player, self._status))

        row = self.board.find_landing_row(column)
        if row is None:
            debug.debug(f"Rejecting move in column {column}: column is full", "game")
            return self._notify(MoveResult(MoveOutcome.COLUMN_FULL, column, player, self._status,
                                           next_player=player))

        self.board.place(row, column, player)
        debug.debug(f"{player} dropped into column {column}, landed on row {row}", "game")

        debug.start_timer(self._timer_key)
        won = self._has_won(row, column, player)
        debug.end_timer(self._timer_key, "game")

        if won:
            self._status = GameStatus.WON
            self._winner = player
            line = self.board.winning_line(player)
            debug.info(f"{player} wins after move at ({row}, {column})", "game")
            return self._notify(MoveResult(MoveOutcome.WON, column, player, self._status, row=row,
                                           winning_line=tuple(line) if line else None))

        if self.board.is_full():
            self._status = GameStatus.TIED
            debug.info("Game ends in a tie", "game")
            return self._notify(MoveResult(MoveOutcome.TIED, column, player, self._status, row=row))

        self._current_index = 1 - self._current_index
        return self._notify(MoveResult(MoveOutcome.PLACED, column, player, self._status, row=row,
                                       next_player=self.current_player))

    def render(self) -> str:
        return self.board.render(self.players)
