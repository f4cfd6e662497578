"""
dropfour - A two-player game of dropping pieces into columns

This package provides the game-state engine (board, win detection, turn
order) together with a terminal interface and a gymnasium environment
that drive it.
"""

# Version number
__version__ = '0.1.0'
