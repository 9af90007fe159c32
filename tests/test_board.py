import numpy as np
import pytest

from connect4.exceptions import Connect4Error, InvalidDimensionError, InvalidPlayersError
from connect4.game.board import Board, create, drop_piece
from connect4.utils import EMPTY, OutcomeKind, Player

from conftest import TIE_SEQUENCE_7X6, play


class TestConstruction:

    @pytest.mark.parametrize("width,height", [(1, 1), (7, 6), (4, 9), (12, 3)])
    def test_creates_empty_grid_of_requested_shape(self, width, height):
        board = create(width, height)
        assert board.grid.shape == (height, width)
        assert np.all(board.grid == EMPTY)
        assert board.current_player.number == 1
        assert not board.finished

    def test_defaults_to_seven_by_six(self, board):
        assert (board.width, board.height) == (7, 6)

    def test_accepts_numpy_integers(self):
        board = Board(np.int64(5), np.int32(4))
        assert board.grid.shape == (4, 5)
        assert isinstance(board.width, int)

    @pytest.mark.parametrize("width,height", [
        (0, 6), (7, 0), (-1, 6), (7, -3), (7.5, 6), (7, 6.0), ("7", 6), (None, 6), (True, 6),
    ])
    def test_rejects_bad_dimensions(self, width, height):
        with pytest.raises(InvalidDimensionError):
            create(width, height)

    def test_dimension_error_is_value_error(self):
        with pytest.raises(ValueError, match="Width must be positive integer"):
            Board(0, 6)
        with pytest.raises(Connect4Error, match="Height must be positive integer"):
            Board(7, 0)

    @pytest.mark.parametrize("players", [
        (Player(1),),
        (Player(2), Player(1)),
        (Player(1), Player(1)),
        (Player(1), Player(2), Player(3)),
    ])
    def test_rejects_bad_players(self, players):
        with pytest.raises(InvalidPlayersError):
            Board(players=players)


class TestDropPiece:

    def test_piece_lands_on_bottom_row(self, board):
        outcome = board.drop_piece(3)
        assert outcome.kind == OutcomeKind.CONTINUE
        assert (outcome.row, outcome.column) == (5, 3)
        assert board.grid[5, 3] == 1
        assert np.count_nonzero(board.grid) == 1

    def test_pieces_stack_in_column(self, board):
        rows = [o.row for o in play(board, [2, 2, 2])]
        assert rows == [5, 4, 3]
        assert list(board.grid[3:, 2]) == [1, 2, 1]

    def test_players_alternate(self, board):
        movers = [o.player.number for o in play(board, [0, 1, 2, 3, 4])]
        assert movers == [1, 2, 1, 2, 1]
        assert board.current_player.number == 2

    def test_full_column_is_rejected_without_change(self, board):
        play(board, [0] * 6)
        before = board.grid.copy()
        player = board.current_player

        outcome = board.drop_piece(0)

        assert outcome.kind == OutcomeKind.COLUMN_FULL
        assert not outcome.accepted
        assert outcome.row is None
        assert board.grid.tobytes() == before.tobytes()
        assert board.current_player == player
        assert board.moves_made == 6

    @pytest.mark.parametrize("column", [7, -1, 100, 2.0, "3", None, True])
    def test_illegal_column_is_rejected_without_change(self, board, column):
        board.drop_piece(1)
        before = board.grid.copy()

        outcome = board.drop_piece(column)

        assert outcome.kind == OutcomeKind.ILLEGAL_COLUMN
        assert np.array_equal(board.grid, before)
        assert board.current_player.number == 2

    def test_numpy_column_is_accepted(self, board):
        outcome = board.drop_piece(np.int64(4))
        assert outcome.kind == OutcomeKind.CONTINUE
        assert outcome.column == 4
        assert isinstance(outcome.column, int)

    def test_module_function_delegates(self, board):
        outcome = drop_piece(board, 6)
        assert outcome.kind == OutcomeKind.CONTINUE
        assert board.grid[5, 6] == 1

    def test_gravity_keeps_columns_contiguous(self):
        board = Board()
        rng = np.random.default_rng(7)
        for col in rng.integers(0, 7, size=30):
            board.drop_piece(int(col))
        filled = board.grid != EMPTY
        assert not np.any(filled[:-1] & ~filled[1:])


class TestWinDetection:

    def test_vertical_win_on_seventh_drop(self, board):
        outcomes = play(board, [0, 1, 0, 1, 0, 1, 0])

        assert [o.kind for o in outcomes[:6]] == [OutcomeKind.CONTINUE] * 6
        assert outcomes[6].kind == OutcomeKind.WIN
        assert outcomes[6].player.number == 1
        assert board.finished
        assert board.winner.number == 1
        assert board.get_winning_line() == [(2, 0), (3, 0), (4, 0), (5, 0)]

    def test_horizontal_win(self, board):
        outcomes = play(board, [0, 0, 1, 1, 2, 2, 3])
        assert outcomes[-1].kind == OutcomeKind.WIN
        assert board.get_winning_line() == [(5, 0), (5, 1), (5, 2), (5, 3)]

    def test_diagonal_down_right_win(self, board):
        outcomes = play(board, [5, 4, 4, 3, 2, 3, 3, 2, 0, 2, 2])

        assert [o.kind for o in outcomes[:-1]] == [OutcomeKind.CONTINUE] * 10
        assert outcomes[-1].kind == OutcomeKind.WIN
        assert (outcomes[-1].row, outcomes[-1].column) == (2, 2)
        assert board.get_winning_line() == [(2, 2), (3, 3), (4, 4), (5, 5)]

    def test_diagonal_down_left_win(self, board):
        outcomes = play(board, [0, 1, 1, 2, 3, 2, 2, 3, 5, 3, 3])

        assert outcomes[-1].kind == OutcomeKind.WIN
        assert board.get_winning_line() == [(2, 3), (3, 2), (4, 1), (5, 0)]

    def test_second_player_can_win(self, board):
        outcomes = play(board, [0, 1, 0, 1, 0, 1, 2, 1])
        assert outcomes[-1].kind == OutcomeKind.WIN
        assert outcomes[-1].player.number == 2
        assert board.winner == board.players[1]

    def test_three_in_a_row_is_not_a_win(self, board):
        play(board, [0, 6, 1, 6, 2])
        assert not board.check_for_win(board.players[0])
        assert not board.finished

    def test_win_is_only_checked_for_the_mover(self, board):
        board.grid[2:, 6] = 2
        outcome = board.drop_piece(0)
        assert outcome.kind == OutcomeKind.CONTINUE
        assert board.check_for_win(board.players[1])

    def test_no_winning_line_without_winner(self, board):
        play(board, [3, 3])
        assert board.get_winning_line() == []

    def test_win_that_fills_board_is_a_win(self):
        board = Board(5, 2)
        outcomes = play(board, [0, 2, 1, 0, 3, 1, 4, 2, 4, 3])

        assert outcomes[-1].kind == OutcomeKind.WIN
        assert outcomes[-1].player.number == 2
        assert board.is_full()
        assert board.winner.number == 2


class TestTie:

    def test_full_board_without_line_is_a_tie(self, board):
        outcomes = play(board, TIE_SEQUENCE_7X6)

        assert [o.kind for o in outcomes[:-1]] == [OutcomeKind.CONTINUE] * 41
        assert outcomes[-1].kind == OutcomeKind.TIE
        assert outcomes[-1].player.number == 2
        assert board.finished
        assert board.winner is None
        assert board.is_full()

    def test_small_board_where_four_cannot_fit(self):
        board = Board(3, 3)
        outcomes = play(board, [0, 1, 2] * 3)
        assert outcomes[-1].kind == OutcomeKind.TIE
        assert board.moves_made == 9


class TestFinishedGame:

    def test_moves_after_win_are_rejected(self, board):
        play(board, [0, 1, 0, 1, 0, 1, 0])
        before = board.grid.copy()

        for col in range(board.width):
            outcome = board.drop_piece(col)
            assert outcome.kind == OutcomeKind.GAME_OVER
            assert board.current_player.number == 1

        assert np.array_equal(board.grid, before)
        assert board.get_valid_moves() == []

    def test_moves_after_tie_are_rejected(self, board):
        play(board, TIE_SEQUENCE_7X6)
        assert board.drop_piece(0).kind == OutcomeKind.GAME_OVER
        assert board.drop_piece(99).kind == OutcomeKind.GAME_OVER


class TestHelpers:

    def test_find_spot_for_col(self, board):
        assert board.find_spot_for_col(2) == 5
        play(board, [2] * 6)
        assert board.find_spot_for_col(2) is None

    def test_valid_moves_skip_full_columns(self, board):
        play(board, [1] * 6)
        assert board.get_valid_moves() == [0, 2, 3, 4, 5, 6]
        assert not board.is_valid_move(1)
        assert not board.is_valid_move(7)

    def test_copy_is_independent(self, board):
        play(board, [3, 4])
        clone = board.copy()
        clone.drop_piece(3)

        assert board.grid[4, 3] == EMPTY
        assert clone.grid[4, 3] == 1
        assert board.moves_made == 2
        assert clone.moves_made == 3

    def test_colors_are_echoed_in_win(self, colored_board):
        outcomes = play(colored_board, [0, 1, 0, 1, 0, 1, 0])
        assert outcomes[-1].player.color == "red"
        assert str(outcomes[-1]) == "Red won!"

    def test_get_state_returns_copy(self, board):
        state = board.get_state()
        state[5, 0] = 2
        assert board.grid[5, 0] == EMPTY

    def test_reset_clears_game(self, board):
        play(board, [0, 1, 0, 1, 0, 1, 0])
        board.reset()
        assert not board.finished
        assert board.winner is None
        assert board.last_move is None
        assert np.all(board.grid == EMPTY)
        assert board.current_player.number == 1
