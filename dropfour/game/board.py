"""
board.py - Board representation and win geometry for dropfour

This module implements the Board class which stores the grid of cells,
places pieces under gravity, and answers whether a player holds a winning run.
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np

from dropfour.debug import debug
from dropfour.game.player import Player
from dropfour.utils import (DEFAULT_HEIGHT, DEFAULT_WIDTH, CONNECT_N, DIRECTION_VECTORS,
                            Coord, is_valid_position, render_board_ascii, run_from)


class InvalidColumnError(ValueError):
    """Raised when a column index lies outside the board."""


class IllegalPlacementError(ValueError):
    """Raised when a piece would land on an occupied cell or float above an empty one."""


class Board:
    """
    A fixed-size grid of cells, each empty (None) or occupied by a Player.

    Row 0 is the top of the board and row ``height - 1`` is the bottom.
    Occupied cells in a column are always contiguous from the bottom up.
    """

    def __init__(self, height: int = DEFAULT_HEIGHT, width: int = DEFAULT_WIDTH):
        if height <= 0 or width <= 0:
            raise ValueError(f"Board dimensions must be positive, got {height}x{width}")

        debug.debug(f"Initializing new {height}x{width} Board", "board")
        self.height = height
        self.width = width
        self.grid = np.full((height, width), None, dtype=object)
        self.pieces_placed = 0

    def _check_column(self, column: int) -> None:
        if not (0 <= column < self.width):
            raise InvalidColumnError(f"Column {column} out of range 0..{self.width - 1}")

    def cell(self, row: int, column: int) -> Optional[Player]:
        """Occupant of (row, column), or None if the cell is empty."""
        if not is_valid_position(row, column, self.height, self.width):
            raise IndexError(f"Cell ({row}, {column}) is outside the board")
        return self.grid[row, column]

    def find_landing_row(self, column: int) -> Optional[int]:
        """
        Find the row a piece dropped into `column` would come to rest in.

        Args:
            column: The column to drop into (0-indexed)

        Returns:
            The bottommost empty row, or None if the column is full

        Raises:
            InvalidColumnError: If the column is outside the board
        """
        self._check_column(column)

        for row in range(self.height - 1, -1, -1):
            if self.grid[row, column] is None:
                return row
        return None

    def place(self, row: int, column: int, player: Player) -> None:
        """
        Put `player`'s piece at (row, column).

        The row must be the current landing row of the column; anything else
        would leave a piece floating or overwrite an existing one.
        """
        landing_row = self.find_landing_row(column)
        if landing_row is None:
            raise IllegalPlacementError(f"Column {column} is full")
        if row != landing_row:
            raise IllegalPlacementError(
                f"Cannot place at ({row}, {column}); the column's landing row is {landing_row}")

        debug.trace(f"Placing {player} at ({row}, {column})", "board")
        self.grid[row, column] = player
        self.pieces_placed += 1

    def is_full(self) -> bool:
        """True iff every cell is occupied."""
        return self.pieces_placed == self.height * self.width

    def valid_moves(self) -> List[int]:
        """Columns that still have at least one empty cell."""
        return [col for col in range(self.width) if self.grid[0, col] is None]

    def _is_winning_run(self, cells: Sequence[Coord], player: Player) -> bool:
        return all(
            is_valid_position(r, c, self.height, self.width) and self.grid[r, c] is player
            for r, c in cells
        )

    def _winning_runs(self, player: Player):
        # Anchoring every cell and sweeping only the four forward directions
        # visits each line exactly once.
        for y in range(self.height):
            for x in range(self.width):
                for direction in DIRECTION_VECTORS:
                    cells = run_from(y, x, direction)
                    if self._is_winning_run(cells, player):
                        yield cells

    def has_win_at(self, player: Player) -> bool:
        """Check the whole grid for a run of four owned by `player`."""
        return next(self._winning_runs(player), None) is not None

    def winning_line(self, player: Player) -> Optional[List[Coord]]:
        """
        Get the positions of a winning run for `player`.

        Returns:
            List of four (row, col) positions, or None if the player has no win
        """
        cells = next(self._winning_runs(player), None)
        return list(cells) if cells is not None else None

    def has_win_through(self, row: int, column: int) -> bool:
        """
        Check if the piece at (row, column) is part of a run of four.

        Each line through the cell is walked in both directions, so all eight
        neighbours are considered.
        """
        player = self.cell(row, column)
        if player is None:
            return False

        for dr, dc in DIRECTION_VECTORS.values():
            count = 1

            # Check in the positive direction
            r, c = row + dr, column + dc
            while is_valid_position(r, c, self.height, self.width) and self.grid[r, c] is player:
                count += 1
                r += dr
                c += dc

            # Check in the negative direction
            r, c = row - dr, column - dc
            while is_valid_position(r, c, self.height, self.width) and self.grid[r, c] is player:
                count += 1
                r -= dr
                c -= dc

            if count >= CONNECT_N:
                return True

        return False

    def get_state(self, players: Sequence[Player]) -> np.ndarray:
        """
        Get the board as a numeric array.

        Returns:
            int8 array with 0 for empty cells and i + 1 for cells owned by players[i]
        """
        state = np.zeros((self.height, self.width), dtype=np.int8)
        for index, player in enumerate(players, start=1):
            for r, c in self._cells_of(player):
                state[r, c] = index
        return state

    @classmethod
    def from_state(cls, state, players: Sequence[Player]) -> "Board":
        """
        Build a board from a numeric array in the layout returned by get_state.

        Pieces are dropped column by column from the bottom, so a position with
        a piece above an empty cell is rejected.
        """
        state = np.asarray(state)
        if state.ndim != 2:
            raise ValueError(f"Expected a 2D position, got shape {state.shape}")

        height, width = state.shape
        board = cls(height, width)
        for col in range(width):
            for row in range(height - 1, -1, -1):
                value = int(state[row, col])
                if value == 0:
                    continue
                if not 1 <= value <= len(players):
                    raise ValueError(f"Unknown piece value {value} at ({row}, {col})")
                board.place(row, col, players[value - 1])
        return board

    def _cells_of(self, player: Player) -> List[Tuple[int, int]]:
        return [(r, c) for r in range(self.height) for c in range(self.width)
                if self.grid[r, c] is player]

    def render(self, players: Sequence[Player] = ()) -> str:
        """Render the board as a string, X for the first player and O for the second."""
        return render_board_ascii(self.grid, players=players)

    def __str__(self) -> str:
        return self.render()
