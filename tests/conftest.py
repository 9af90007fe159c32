import pytest

from connect4.debug import DebugLevel, debug
from connect4.game.board import Board
from connect4.utils import Player

# Filling a 7x6 board with this column order ends in a tie: every pair of
# rows is laid down with the same 14-move pattern and no line of four ever
# forms.
TIE_SEQUENCE_7X6 = [2, 0, 0, 1, 1, 4, 4, 5, 5, 2, 3, 3, 6, 6] * 3


def play(board, columns):
    """Drop pieces into the given columns, returning the outcomes."""
    return [board.drop_piece(col) for col in columns]


@pytest.fixture
def board():
    return Board()


@pytest.fixture
def colored_board():
    return Board(players=(Player(1, "red"), Player(2, "yellow")))


@pytest.fixture(autouse=True)
def reset_debug():
    """Leave the shared logger at its default level after every test."""
    yield
    debug.configure(level=DebugLevel.WARNING, components=[])
