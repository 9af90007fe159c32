"""
board.py - Board representation and core game mechanics for Connect Four

This module implements the Board class, which owns the grid and turn state
of one game, accepts or rejects moves, and detects wins and ties. The
module-level create() and drop_piece() functions are the plain-function
form of the same interface.
"""

import numbers
from typing import List, Optional, Sequence, Tuple

import numpy as np

from connect4.debug import debug
from connect4.exceptions import InvalidDimensionError, InvalidPlayersError
from connect4.utils import (DEFAULT_HEIGHT, DEFAULT_WIDTH, EMPTY, Direction,
                            MoveOutcome, OutcomeKind, Player, is_positive_int,
                            is_valid_position, line_from, render_board_ascii)


class Board:
    """
    Represents a Connect Four game board and its turn state.

    The grid is a (height, width) numpy array with row 0 at the top. Cells
    hold EMPTY or the number of the player owning them. Pieces only ever
    enter through drop_piece, so no column has an empty cell below a
    filled one.
    """

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT,
                 players: Optional[Sequence[Player]] = None):
        """
        Create an empty board.

        Args:
            width: Number of columns, a positive integer
            height: Number of rows, a positive integer
            players: The two players, numbered 1 and 2 (defaults to uncolored)

        Raises:
            InvalidDimensionError: width or height is not a positive integer
            InvalidPlayersError: players is not exactly player 1 then player 2
        """
        if not is_positive_int(width):
            raise InvalidDimensionError("width", width)
        if not is_positive_int(height):
            raise InvalidDimensionError("height", height)

        if players is None:
            players = (Player(1), Player(2))
        players = tuple(players)
        if len(players) != 2 or [p.number for p in players] != [1, 2]:
            raise InvalidPlayersError(f"Expected players 1 and 2, got {players!r}")

        self.width = int(width)
        self.height = int(height)
        self.players: Tuple[Player, Player] = players
        debug.debug(f"Initializing new {self.width}x{self.height} Board", "board")
        self.reset()

    def reset(self):
        """Reset the board to an empty state with player 1 to move."""
        self.grid = np.full((self.height, self.width), EMPTY, dtype=np.int8)
        self.current_player = self.players[0]
        self.finished = False
        self.winner: Optional[Player] = None
        self.last_move: Optional[Tuple[int, int]] = None
        self.moves_made = 0

    def copy(self) -> 'Board':
        """
        Create a deep copy of the current board.

        Returns:
            A new Board instance with the same state
        """
        new_board = Board(self.width, self.height, self.players)
        new_board.grid = self.grid.copy()
        new_board.current_player = self.current_player
        new_board.finished = self.finished
        new_board.winner = self.winner
        new_board.last_move = self.last_move
        new_board.moves_made = self.moves_made
        return new_board

    def other_player(self, player: Player) -> Player:
        """Get the opponent of the given player."""
        return self.players[1] if player == self.players[0] else self.players[0]

    def _is_column_index(self, column) -> bool:
        return (isinstance(column, numbers.Integral)
                and not isinstance(column, bool)
                and 0 <= column < self.width)

    def find_spot_for_col(self, column: int) -> Optional[int]:
        """
        Find where a piece dropped into a column would land.

        Returns:
            The lowest empty row of the column, or None if it is full
        """
        for row in range(self.height - 1, -1, -1):
            if self.grid[row, column] == EMPTY:
                return row
        return None

    def is_valid_move(self, column: int) -> bool:
        """
        Check if a move is valid.

        Args:
            column: The column to place a piece (0-indexed)

        Returns:
            True if the game is running, the column exists and has room
        """
        if self.finished or not self._is_column_index(column):
            return False
        return self.grid[0, column] == EMPTY

    def get_valid_moves(self) -> List[int]:
        """
        Get a list of valid columns where a piece can be placed.

        Returns:
            List of valid column indices
        """
        return [col for col in range(self.width) if self.is_valid_move(col)]

    def drop_piece(self, column: int) -> MoveOutcome:
        """
        Drop a piece for the active player into a column.

        Rejected moves (finished game, column outside the board, full
        column) return a rejection outcome and leave the board untouched.
        An accepted move changes state exactly once: it wins, ties, or
        passes the turn.

        Args:
            column: The column to place a piece (0-indexed)

        Returns:
            MoveOutcome describing what happened
        """
        if self.finished:
            debug.debug(f"Rejected move in column {column}: game is over", "board")
            return MoveOutcome(OutcomeKind.GAME_OVER, column=column)

        if not self._is_column_index(column):
            debug.debug(f"Rejected move: column {column!r} out of bounds", "board")
            return MoveOutcome(OutcomeKind.ILLEGAL_COLUMN, column=column)

        column = int(column)
        row = self.find_spot_for_col(column)
        if row is None:
            debug.debug(f"Rejected move: column {column} is full", "board")
            return MoveOutcome(OutcomeKind.COLUMN_FULL, column=column)

        player = self.current_player
        debug.trace(f"Placing piece for {player.label} at ({row}, {column})", "board")
        self.grid[row, column] = player.number
        self.last_move = (row, column)
        self.moves_made += 1

        debug.start_timer("win_check")
        won = self.check_for_win(player)
        debug.end_timer("win_check", "board")

        if won:
            self.finished = True
            self.winner = player
            debug.info(f"{player.label} wins after move at {self.last_move}", "board")
            return MoveOutcome(OutcomeKind.WIN, player, row, column)

        # Top row full means every column is full
        if not np.any(self.grid[0] == EMPTY):
            self.finished = True
            debug.info("Game ends in a tie", "board")
            return MoveOutcome(OutcomeKind.TIE, player, row, column)

        self.current_player = self.other_player(player)
        debug.debug(f"Switching to {self.current_player.label}", "board")
        return MoveOutcome(OutcomeKind.CONTINUE, player, row, column)

    def _win_at(self, cells: List[Tuple[int, int]], value: int) -> bool:
        """True if every cell is on the board and owned by value."""
        for row, col in cells:
            if (not is_valid_position(row, col, self.height, self.width)
                    or self.grid[row, col] != value):
                return False
        return True

    def _find_winning_line(self, player: Player) -> List[Tuple[int, int]]:
        """Scan every cell for a four-in-a-row of player starting there."""
        for row in range(self.height):
            for col in range(self.width):
                for direction in Direction:
                    cells = line_from(row, col, direction)
                    if self._win_at(cells, player.number):
                        return cells
        return []

    def check_for_win(self, player: Optional[Player] = None) -> bool:
        """
        Check the whole board for four-in-a-row of one player.

        Args:
            player: Player to check for (defaults to the active player)

        Returns:
            True if the player has four in a row anywhere
        """
        if player is None:
            player = self.current_player
        return bool(self._find_winning_line(player))

    def get_winning_line(self) -> List[Tuple[int, int]]:
        """
        Get the positions of the winning line if the game is won.

        Returns:
            List of (row, col) positions forming the winning line, or empty list if no win
        """
        if self.winner is None:
            return []
        return self._find_winning_line(self.winner)

    def is_full(self) -> bool:
        return not np.any(self.grid[0] == EMPTY)

    def get_state(self) -> np.ndarray:
        """Get a copy of the grid."""
        return self.grid.copy()

    def render(self) -> str:
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()


def create(width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT,
           players: Optional[Sequence[Player]] = None) -> Board:
    """Create a fresh game state. See Board for the failure modes."""
    return Board(width, height, players)


def drop_piece(board: Board, column: int) -> MoveOutcome:
    """Apply one move to board and report the outcome."""
    return board.drop_piece(column)
