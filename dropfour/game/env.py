"""
env.py - Gymnasium environment for dropfour

Exposes a game as a gymnasium.Env so that any policy or script can act as
the input source. Both seats are driven through step(); the environment
never chooses moves itself.
"""

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from dropfour.debug import debug
from dropfour.game.player import Player
from dropfour.game.rules import GameController, WIN_CHECK_FULL
from dropfour.utils import DEFAULT_HEIGHT, DEFAULT_WIDTH, MoveOutcome


class DropFourEnv(gym.Env):
    """
    Environment following the Gymnasium interface.

    Observations are int8 grids with 0 for empty cells, 1 for the first
    player's pieces, and 2 for the second player's. Rewards are given from
    the point of view of the player who just moved.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, height: int = DEFAULT_HEIGHT, width: int = DEFAULT_WIDTH,
                 render_mode: Optional[str] = None, win_check: str = WIN_CHECK_FULL):
        debug.debug("Initializing DropFourEnv", "env")

        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.height = height
        self.width = width
        self.render_mode = render_mode
        self.win_check = win_check

        self.action_space = spaces.Discrete(width)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(height, width), dtype=np.int8
        )

        self.reward_win = 1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01  # Small negative reward to encourage faster solutions

        self.players = (Player("Player 1", "red"), Player("Player 2", "yellow"))
        self.game = self._new_game()
        self.last_result = None

    def _new_game(self) -> GameController:
        return GameController(*self.players, height=self.height, width=self.width,
                              win_check=self.win_check)

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a fresh game.

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)

        self.game = self._new_game()
        self.last_result = None

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        """
        Drop the current player's piece into column `action`.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        column = int(action)
        if not self.action_space.contains(column):
            raise ValueError(f"Invalid action {action!r} for a board {self.width} columns wide")

        result = self.game.apply_move(column)
        self.last_result = result

        reward = self.reward_step
        terminated = False
        truncated = False
        info = self._get_info()

        if result.outcome in (MoveOutcome.COLUMN_FULL, MoveOutcome.ALREADY_OVER):
            debug.warning(f"Invalid action {column}: {result.outcome.value}", "env")
            reward = self.reward_invalid_move
            truncated = True
            info['invalid_move'] = True
        elif result.outcome == MoveOutcome.WON:
            debug.info(f"Game over: {result.player} wins", "env")
            reward = self.reward_win
            terminated = True
        elif result.outcome == MoveOutcome.TIED:
            debug.info("Game over: tie", "env")
            reward = self.reward_draw
            terminated = True

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, truncated, info

    def render(self) -> Optional[str]:
        if self.render_mode is None:
            return None

        text = self.game.render()
        if self.render_mode == "human":
            print(text)
            return None
        return text

    def _get_observation(self) -> np.ndarray:
        return self.game.board.get_state(self.game.players)

    def _get_info(self) -> Dict[str, Any]:
        result = self.last_result
        return {
            'valid_moves': self.game.valid_moves(),
            'current_player': self.game.current_player_index + 1,
            'status': self.game.status.name,
            'pieces_placed': self.game.board.pieces_placed,
            'last_move': (result.row, result.column) if result is not None and result.placed else None,
            'winning_line': list(result.winning_line) if result is not None and result.winning_line else [],
        }
