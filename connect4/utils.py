"""
utils.py - Constants, value types and helper functions for Connect Four

This module provides the player and outcome types shared by the engine
and its collaborators, the direction vectors used by win detection, and
small grid helpers such as ASCII rendering.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Tuple
import numbers

import numpy as np

# Game constants
DEFAULT_WIDTH = 7
DEFAULT_HEIGHT = 6
CONNECT_N = 4  # Number of pieces in a row to win
EMPTY = 0


@dataclass(frozen=True)
class Player:
    """
    One of the two players of a game.

    The number (1 or 2) is what the engine stores in the grid. The color is
    an optional display attribute; the engine never looks at it.
    """
    number: int
    color: Optional[str] = None

    @property
    def label(self) -> str:
        """Name used in messages: the color if set, otherwise the number."""
        if self.color:
            return self.color.capitalize()
        return f"Player {self.number}"

    @property
    def symbol(self) -> str:
        return "X" if self.number == 1 else "O"

    def __str__(self):
        return self.label


class OutcomeKind(Enum):
    """Enumeration of the results a single drop can have."""
    CONTINUE = auto()
    WIN = auto()
    TIE = auto()
    COLUMN_FULL = auto()
    ILLEGAL_COLUMN = auto()
    GAME_OVER = auto()

    def is_rejection(self) -> bool:
        """Check if the move was refused without changing the board."""
        return self in (OutcomeKind.COLUMN_FULL, OutcomeKind.ILLEGAL_COLUMN,
                        OutcomeKind.GAME_OVER)

    def is_game_over(self) -> bool:
        """Check if this outcome ended the game."""
        return self in (OutcomeKind.WIN, OutcomeKind.TIE)


@dataclass(frozen=True)
class MoveOutcome:
    """
    Result of Board.drop_piece.

    For accepted moves, player is the one who moved and (row, column) is
    where the piece landed. For rejections, row is None.
    """
    kind: OutcomeKind
    player: Optional[Player] = None
    row: Optional[int] = None
    column: Optional[int] = None

    @property
    def accepted(self) -> bool:
        return not self.kind.is_rejection()

    def __str__(self):
        if self.kind == OutcomeKind.WIN:
            return f"{self.player.label} won!"
        if self.kind == OutcomeKind.TIE:
            return "Tie game"
        return self.kind.name.lower()


class Direction(Enum):
    """Enumeration representing directions for win checking."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN_RIGHT = auto()
    DIAGONAL_DOWN_LEFT = auto()


# Direction vectors (row, col), row 0 being the top of the board
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN_RIGHT: (1, 1),
    Direction.DIAGONAL_DOWN_LEFT: (1, -1),
}


def is_positive_int(value) -> bool:
    """True for ints and numpy integers greater than zero (bools excluded)."""
    return (isinstance(value, numbers.Integral)
            and not isinstance(value, bool)
            and value > 0)


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


def line_from(row: int, col: int, direction: Direction) -> List[Tuple[int, int]]:
    """Return the CONNECT_N coordinates starting at (row, col) in a direction."""
    dr, dc = DIRECTION_VECTORS[direction]
    return [(row + i * dr, col + i * dc) for i in range(CONNECT_N)]


def get_column_height(grid: np.ndarray, column: int) -> int:
    """
    Get the current height of a column (number of pieces).

    Relies on the gravity fill: pieces are contiguous from the bottom.
    """
    return int(np.count_nonzero(grid[:, column] != EMPTY))


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render the board as ASCII art.

    Args:
        grid: The game grid

    Returns:
        ASCII representation of the board, column numbers underneath
    """
    height, width = grid.shape
    symbols = {EMPTY: " ", 1: "X", 2: "O"}
    border = "|" + "-" * (width * 2 - 1) + "|"

    result = [border]
    for row in range(height):
        cells = [symbols.get(int(cell), "?") for cell in grid[row]]
        result.append("|" + " ".join(cells) + "|")
    result.append(border)

    # Only the last digit fits under each cell on wide boards
    result.append("|" + " ".join(str(col % 10) for col in range(width)) + "|")

    return "\n".join(result)
