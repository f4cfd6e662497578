"""
setup.py - Game setup form for dropfour

Turns the raw values a user typed for two players into Player objects and
starts a GameController. Validation of names and colors lives here rather
than in the game core.
"""

from typing import Optional, Tuple

from dropfour.debug import debug
from dropfour.game.player import Player
from dropfour.game.rules import GameController, WIN_CHECK_FULL
from dropfour.utils import DEFAULT_HEIGHT, DEFAULT_WIDTH


class SetupError(ValueError):
    """Raised when the setup form holds values a game cannot start with."""


def _clean_name(name: Optional[str], fallback: str) -> str:
    name = (name or "").strip()
    return name or fallback


def _clean_color(color: Optional[str], label: str) -> str:
    color = (color or "").strip()
    if not color:
        raise SetupError(f"Please enter a color for {label}")
    return color


def create_players(p1_name: Optional[str], p1_color: Optional[str],
                   p2_name: Optional[str], p2_color: Optional[str]) -> Tuple[Player, Player]:
    """
    Build the two players from setup form values.

    Blank names fall back to "Player 1" / "Player 2"; blank colors are rejected.
    """
    first = Player(_clean_name(p1_name, "Player 1"), _clean_color(p1_color, "player 1"))
    second = Player(_clean_name(p2_name, "Player 2"), _clean_color(p2_color, "player 2"))
    return first, second


def start_game(p1_name: Optional[str], p1_color: Optional[str],
               p2_name: Optional[str], p2_color: Optional[str],
               height: int = DEFAULT_HEIGHT, width: int = DEFAULT_WIDTH,
               win_check: str = WIN_CHECK_FULL) -> GameController:
    """Validate the setup form and construct a new game from it."""
    players = create_players(p1_name, p1_color, p2_name, p2_color)
    debug.info(f"Starting game: {players[0]} ({players[0].color}) vs "
               f"{players[1]} ({players[1].color})", "cli")
    return GameController(*players, height=height, width=width, win_check=win_check)
