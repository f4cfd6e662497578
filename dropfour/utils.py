"""
utils.py - Constants, enumerations, and helper functions for dropfour

This module provides the shared constants, outcome enumerations, direction
vectors, and rendering helpers used throughout the game implementation.
"""

from enum import Enum, auto
from typing import Dict, Optional, Sequence, Tuple

# Game constants
DEFAULT_HEIGHT = 6
DEFAULT_WIDTH = 7
CONNECT_N = 4  # Number of pieces in a row to win

Coord = Tuple[int, int]  # (row, col)


class GameStatus(Enum):
    """Enumeration representing the state of a game."""
    IN_PROGRESS = auto()
    WON = auto()
    TIED = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameStatus.IN_PROGRESS


class MoveOutcome(Enum):
    """Enumeration of what a single move request produced."""
    PLACED = "placed"
    COLUMN_FULL = "columnFull"
    WON = "won"
    TIED = "tied"
    ALREADY_OVER = "alreadyOver"


class Direction(Enum):
    """Enumeration of the directions a run extends from its anchor cell."""
    RIGHT = auto()       # Horizontal
    DOWN = auto()        # Vertical
    DOWN_RIGHT = auto()  # Diagonal from top-left to bottom-right
    DOWN_LEFT = auto()   # Diagonal from top-right to bottom-left


# Direction vectors (row, col) for each direction
DIRECTION_VECTORS: Dict[Direction, Coord] = {
    Direction.RIGHT: (0, 1),
    Direction.DOWN: (1, 0),
    Direction.DOWN_RIGHT: (1, 1),
    Direction.DOWN_LEFT: (1, -1),
}


def is_valid_position(row: int, col: int, height: int, width: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index
        height: Number of rows on the board
        width: Number of columns on the board

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < height and 0 <= col < width


def run_from(row: int, col: int, direction: Direction, length: int = CONNECT_N) -> Tuple[Coord, ...]:
    """Coordinates of the run of `length` cells anchored at (row, col)."""
    dr, dc = DIRECTION_VECTORS[direction]
    return tuple((row + i * dr, col + i * dc) for i in range(length))


def render_board_ascii(grid, symbols: Optional[Sequence[str]] = None, players: Sequence = ()) -> str:
    """
    Render a board grid as ASCII art.

    Args:
        grid: 2D array of cells, each either None or a player
        symbols: One display symbol per entry of `players`
        players: Players in the order their symbols are given

    Returns:
        ASCII representation of the board
    """
    height, width = grid.shape
    symbols = list(symbols) if symbols is not None else ["X", "O"]

    def symbol_for(cell) -> str:
        if cell is None:
            return "."
        for index, player in enumerate(players):
            if cell is player:
                return symbols[index]
        # Unknown occupant: fall back to the first letter of its name
        name = getattr(cell, "name", "") or "?"
        return name[0].upper()

    result = []
    result.append("|" + "-" * (width * 2 - 1) + "|")

    for row in range(height):
        line = "|" + " ".join(symbol_for(grid[row, col]) for col in range(width)) + "|"
        result.append(line)

    result.append("|" + "-" * (width * 2 - 1) + "|")
    result.append("|" + " ".join(str(i % 10) for i in range(width)) + "|")

    return "\n".join(result)
