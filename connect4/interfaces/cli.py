"""
cli.py - Command-line interface for Connect Four

This module is a terminal presentation layer for the engine: hot-seat play
for two people, a position checker and a small benchmark.
"""

import argparse
import random
import sys
from typing import List, Optional, Union

import numpy as np

from connect4.config import SUPPORTED_COLORS, GameConfig
from connect4.debug import debug, DebugLevel
from connect4.exceptions import Connect4Error
from connect4.game.board import Board
from connect4.game.rules import ConnectFourGame
from connect4.utils import EMPTY, OutcomeKind, get_column_height

QUIT = "quit"
RESTART = "restart"


class SimpleCLI:
    """Simple command-line interface for Connect Four."""

    def __init__(self):
        self.game: Optional[ConnectFourGame] = None
        self.args = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Connect Four CLI')
        parser.add_argument('--debug', action='store_true', help='Enable debug mode')
        parser.add_argument('--debug-level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level')
        parser.add_argument('--log-file', default=None, help='Also write logs to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a two-player game')
        self._add_board_arguments(play_parser)
        play_parser.add_argument('--color1', choices=SUPPORTED_COLORS, default=None,
                                 help='Display color of player 1')
        play_parser.add_argument('--color2', choices=SUPPORTED_COLORS, default=None,
                                 help='Display color of player 2')

        check_parser = subparsers.add_parser('check', help='Analyse a board position')
        self._add_board_arguments(check_parser)
        check_parser.add_argument('--position', type=str, required=True,
                                  help='Comma separated cell values (0, 1, 2), top row first')

        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark performance')
        self._add_board_arguments(benchmark_parser)
        benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                      help='Number of iterations for benchmarking')

        return parser

    @staticmethod
    def _add_board_arguments(parser: argparse.ArgumentParser):
        parser.add_argument('--width', type=int, default=GameConfig.width, help='Number of columns')
        parser.add_argument('--height', type=int, default=GameConfig.height, help='Number of rows')

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and configure logging."""
        self.args = self.build_parser().parse_args(argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        Run the CLI based on the parsed arguments.

        Returns:
            Process exit status
        """
        if self.args is None:
            self.parse_args(argv)

        commands = {
            'play': self.play_game,
            'check': self.check_position,
            'benchmark': self.benchmark,
        }
        command = commands.get(self.args.command)
        if command is None:
            print("Please specify a command. Use --help for options.")
            return 1

        try:
            command()
        except Connect4Error as e:
            debug.error(str(e), "cli")
            print(f"Error: {e}")
            return 2
        return 0

    def _config(self) -> GameConfig:
        colors = (getattr(self.args, 'color1', None), getattr(self.args, 'color2', None))
        return GameConfig(self.args.width, self.args.height, colors).validate()

    def play_game(self) -> None:
        """Play Connect Four games until the players stop."""
        self.game = ConnectFourGame(self._config())
        width = self.game.board.width

        print("Starting a new Connect Four game!")
        print(f"Enter column number (0-{width - 1}) to make a move.")
        print("Other commands: 'q' to quit, 'r' to restart.")

        while True:
            print(self.game.render())

            while not self.game.is_game_over():
                move = self.get_human_move()
                if move is None:
                    continue
                if move == QUIT:
                    print("Quitting game.")
                    return
                if move == RESTART:
                    self.game.new_game()
                    print("Game restarted.")
                    print(self.game.render())
                    continue

                outcome = self.game.make_move(move)
                if outcome.kind == OutcomeKind.COLUMN_FULL:
                    print(f"Column {move} is full.")
                elif outcome.accepted:
                    print(self.game.render())

            print(self.game.status_message())
            if not self.ask_play_again():
                return
            self.game.new_game()

    def get_human_move(self) -> Optional[Union[int, str]]:
        """
        Get a move from the player to move.

        Returns:
            Column index, QUIT, RESTART, or None if the input was not usable
        """
        player = self.game.get_current_player()
        width = self.game.board.width
        try:
            user_input = input(f"{player.label} ({player.symbol}), your move: ").strip().lower()
        except EOFError:
            return QUIT

        if user_input == 'q':
            return QUIT
        if user_input == 'r':
            return RESTART

        try:
            move = int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or command.")
            return None

        if not 0 <= move < width:
            print(f"Column must be between 0 and {width - 1}.")
            return None
        return move

    def ask_play_again(self) -> bool:
        try:
            answer = input("Play again? (y/n): ").strip().lower()
        except EOFError:
            return False
        return answer in ('y', 'yes')

    def check_position(self) -> None:
        """Load a position and report wins, fullness and valid moves."""
        config = self._config()
        try:
            values = [int(c) for c in self.args.position.split(',')]
        except ValueError as e:
            raise Connect4Error(f"Error parsing position: {e}") from e

        if len(values) != config.width * config.height:
            raise Connect4Error(
                f"Position string must have {config.width * config.height} values, got {len(values)}")
        if any(v not in (0, 1, 2) for v in values):
            raise Connect4Error("Position values must be 0, 1 or 2")

        board = Board(config.width, config.height, config.players())
        board.grid = np.array(values, dtype=np.int8).reshape(config.height, config.width)

        print("Loaded position:")
        print(board.render())

        if has_floating_pieces(board.grid):
            print("Warning: position has pieces above empty cells")

        winners = [p for p in board.players if board.check_for_win(p)]
        for player in winners:
            print(f"Win for {player.label} detected")
        if not winners:
            print("No win detected for any player")

        if board.is_full():
            print("Board is full")
        else:
            print(f"Empty spaces: {int(np.sum(board.grid == EMPTY))}")
            print(f"Valid moves: {board.get_valid_moves()}")

        heights = [get_column_height(board.grid, col) for col in range(board.width)]
        print(f"Column heights: {heights}")

    def benchmark(self) -> None:
        """Benchmark board creation, moves and full-board win scans."""
        iterations = self.args.iterations
        if iterations < 1:
            raise Connect4Error(f"Iterations must be at least 1, got {iterations}")
        config = self._config()
        print(f"Running benchmark with {iterations} iterations...")

        debug.start_timer("board_init")
        for _ in range(iterations):
            Board(config.width, config.height)
        elapsed = debug.end_timer("board_init")
        print(f"Board initialization: {elapsed:.6f} seconds total, "
              f"{elapsed / iterations * 1000:.6f} ms per board")

        board = Board(config.width, config.height)
        moves_made = 0
        debug.start_timer("moves")
        for _ in range(iterations):
            if board.drop_piece(random.randrange(config.width)).accepted:
                moves_made += 1
            if board.finished:
                board.reset()
        elapsed = debug.end_timer("moves")
        if moves_made:
            print(f"Making {moves_made} moves: {elapsed:.6f} seconds total, "
                  f"{elapsed / moves_made * 1000:.6f} ms per move")

        debug.start_timer("win_check")
        for _ in range(iterations):
            board.check_for_win()
        elapsed = debug.end_timer("win_check")
        print(f"Performing {iterations} win scans: {elapsed:.6f} seconds total, "
              f"{elapsed / iterations * 1000:.6f} ms per scan")


def has_floating_pieces(grid: np.ndarray) -> bool:
    """True if some column has an empty cell below a filled one."""
    filled = grid != EMPTY
    # Going down a column, once filled it must stay filled
    return bool(np.any(filled[:-1] & ~filled[1:]))


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    return SimpleCLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
