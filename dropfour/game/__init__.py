"""
dropfour.game - Core game mechanics for dropfour

This package contains the board representation, the players, and the
game controller that applies moves and decides the outcome.
"""

from dropfour.game.board import Board, IllegalPlacementError, InvalidColumnError
from dropfour.game.player import Player
from dropfour.game.rules import GameController, GameObserver, MoveResult

__all__ = ['Board', 'IllegalPlacementError', 'InvalidColumnError', 'Player',
           'GameController', 'GameObserver', 'MoveResult']
