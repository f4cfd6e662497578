"""
cli.py - Command-line interface for dropfour

This module provides a terminal front end: an interactive two-player game,
a position checker, and a small benchmark of the win detection.
"""

import argparse
import random
import sys
from typing import List, Optional

import numpy as np

from dropfour.debug import debug, DebugLevel
from dropfour.game.board import Board
from dropfour.game.player import Player
from dropfour.game.rules import (GameController, MoveResult, WIN_CHECK_FULL,
                                 WIN_CHECK_LAST_MOVE, WIN_CHECK_STRATEGIES)
from dropfour.interfaces.setup import start_game
from dropfour.utils import DEFAULT_HEIGHT, DEFAULT_WIDTH, MoveOutcome, render_board_ascii

QUIT = -1

RESET = "\033[0m"
ANSI_COLORS = {
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "magenta": "\033[35m",
    "purple": "\033[35m",
    "cyan": "\033[36m",
    "white": "\033[37m",
}


def colorize(text: str, color: str, enabled: bool = True) -> str:
    code = ANSI_COLORS.get(color.strip().lower())
    if not enabled or code is None:
        return text
    return f"{code}{text}{RESET}"


class TerminalRenderer:
    """Prints the board and announcements whenever the game reports a move."""

    def __init__(self, game: GameController, use_color: bool = True):
        self.game = game
        self.use_color = use_color

    def render_board(self) -> str:
        players = self.game.players
        symbols = [colorize(s, p.color, self.use_color) for s, p in zip("XO", players)]
        return render_board_ascii(self.game.board.grid, symbols=symbols, players=players)

    def on_move(self, result: MoveResult) -> None:
        if result.outcome == MoveOutcome.ALREADY_OVER:
            print("The game is over; no more moves are accepted.")
            return
        if result.outcome == MoveOutcome.COLUMN_FULL:
            print(f"Column {result.column} is full, choose another.")
            return

        print(self.render_board())
        if result.outcome == MoveOutcome.WON:
            print(f"{result.player.name} wins!")
        elif result.outcome == MoveOutcome.TIED:
            print("Tie!")
        else:
            print(f"{result.next_player.name}'s turn.")


class SimpleCLI:
    """Simple command-line interface for dropfour."""

    def __init__(self, argv: Optional[List[str]] = None):
        self.argv = argv
        self.args = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='dropfour: a two-player falling-pieces game')
        parser.add_argument('--debug', action='store_true',
                            help='Enable debug mode (equivalent to --debug_level debug)')
        parser.add_argument('--debug_level',
                            choices=[level.name.lower() for level in DebugLevel],
                            default='warning',
                            help='Set debug level: none (silent) ... trace (most verbose)')
        parser.add_argument('--log_file', type=str, default=None, help='Also write logs to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a two-player game in the terminal')
        play_parser.add_argument('--p1-name', dest='p1_name', help='Name of the first player')
        play_parser.add_argument('--p1-color', dest='p1_color', help='Color of the first player')
        play_parser.add_argument('--p2-name', dest='p2_name', help='Name of the second player')
        play_parser.add_argument('--p2-color', dest='p2_color', help='Color of the second player')
        play_parser.add_argument('--no-color', dest='use_color', action='store_false',
                                 help='Disable ANSI colors')
        self._add_board_args(play_parser)
        play_parser.add_argument('--win-check', dest='win_check', choices=WIN_CHECK_STRATEGIES,
                                 default=WIN_CHECK_FULL,
                                 help='Scan the full grid or only lines through the last move')

        test_parser = subparsers.add_parser('test', help='Check a board position for wins')
        test_parser.add_argument('--position', type=str,
                                 help='Comma-separated cell values, top row first (0 empty, 1/2 players)')
        self._add_board_args(test_parser)

        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark performance')
        benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                      help='Number of iterations for benchmarking')
        self._add_board_args(benchmark_parser)

        return parser

    @staticmethod
    def _add_board_args(parser: argparse.ArgumentParser) -> None:
        parser.add_argument('--height', type=int, default=DEFAULT_HEIGHT, help='Number of rows')
        parser.add_argument('--width', type=int, default=DEFAULT_WIDTH, help='Number of columns')

    def parse_args(self) -> argparse.Namespace:
        """Parse command-line arguments and configure logging."""
        self.args = self.build_parser().parse_args(self.argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

        return self.args

    def run(self) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args()

        if self.args.command == 'play':
            return self.play_game()
        if self.args.command == 'test':
            return self.test_position()
        if self.args.command == 'benchmark':
            return self.benchmark()

        print("Please specify a command. Use --help for options.")
        return 1

    def _prompt(self, label: str, default: Optional[str] = None) -> Optional[str]:
        if default is not None:
            return default
        return input(f"{label}: ")

    def setup_game(self) -> GameController:
        """Collect the setup form, prompting for anything not given on the command line."""
        args = self.args
        return start_game(
            self._prompt("Player 1 name", args.p1_name),
            self._prompt("Player 1 color", args.p1_color),
            self._prompt("Player 2 name", args.p2_name),
            self._prompt("Player 2 color", args.p2_color),
            height=args.height,
            width=args.width,
            win_check=args.win_check,
        )

    def play_game(self) -> int:
        """Play a game interactively."""
        try:
            game = self.setup_game()
        except ValueError as e:
            print(f"Cannot start game: {e}")
            return 1
        except EOFError:
            print()
            return 1

        renderer = TerminalRenderer(game, use_color=self.args.use_color)
        game.subscribe(renderer)

        print("Starting a new game!")
        print(f"Enter a column number (0-{game.board.width - 1}) to drop a piece, 'q' to quit.")
        print(renderer.render_board())

        while not game.is_over():
            move = self.get_human_move(game)
            if move is None:
                continue
            if move == QUIT:
                print("Quitting game.")
                return 0
            game.apply_move(move)

        return 0

    def get_human_move(self, game: GameController) -> Optional[int]:
        """
        Get a move from the player whose turn it is.

        Returns:
            Column index, QUIT, or None if the input was not usable
        """
        player = game.current_player
        width = game.board.width
        try:
            user_input = input(f"{player.name}, your move (0-{width - 1}, q): ").strip().lower()
        except EOFError:
            return QUIT

        if user_input in ('q', 'quit', 'exit'):
            return QUIT

        try:
            move = int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or 'q'.")
            return None

        if not 0 <= move < width:
            print(f"Column must be between 0 and {width - 1}.")
            return None
        return move

    def test_position(self) -> int:
        """Load a position and report what the win detection finds."""
        if not self.args.position:
            print("Please provide a position string with --position")
            return 1

        players = (Player("Player 1", "red"), Player("Player 2", "yellow"))
        height, width = self.args.height, self.args.width
        try:
            values = [int(v) for v in self.args.position.split(',')]
            if len(values) != height * width:
                raise ValueError(f"Position string must have {height * width} values")
            board = Board.from_state(np.array(values).reshape(height, width), players)
        except ValueError as e:
            print(f"Error parsing position: {e}")
            return 1

        print("Loaded position:")
        print(board.render(players))

        has_win = False
        for player in players:
            line = board.winning_line(player)
            if line:
                has_win = True
                print(f"Win for {player.name} detected: {line}")
        if not has_win:
            print("No win detected for any player")

        if board.is_full():
            print("Board is full")
        else:
            print(f"Empty spaces: {height * width - board.pieces_placed}")
            print(f"Valid moves: {board.valid_moves()}")
        return 0

    def _random_game(self, win_check: str) -> int:
        game = GameController(Player("A", "red"), Player("B", "yellow"),
                              height=self.args.height, width=self.args.width, win_check=win_check)
        moves = 0
        while not game.is_over():
            game.apply_move(random.choice(game.valid_moves()))
            moves += 1
        return moves

    def benchmark(self) -> int:
        """Benchmark board creation and full games with each win check."""
        iterations = max(1, self.args.iterations)
        try:
            Board(self.args.height, self.args.width)
        except ValueError as e:
            print(f"Error: {e}")
            return 1
        print(f"Running benchmark with {iterations} iterations...")

        debug.start_timer("board_init")
        for _ in range(iterations):
            Board(self.args.height, self.args.width)
        board_init_time = debug.end_timer("board_init")
        print(f"Board initialization: {board_init_time:.6f} seconds total, "
              f"{board_init_time / iterations * 1000:.6f} ms per board")

        games = max(1, iterations // 10)
        for win_check in (WIN_CHECK_FULL, WIN_CHECK_LAST_MOVE):
            marker = f"games_{win_check}"
            debug.start_timer(marker)
            total_moves = sum(self._random_game(win_check) for _ in range(games))
            elapsed = debug.end_timer(marker)
            print(f"[{win_check}] Played {games} games with {total_moves} total moves: "
                  f"{elapsed:.6f} seconds total, "
                  f"{elapsed / max(1, total_moves) * 1000:.6f} ms per move")
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI(argv)
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
