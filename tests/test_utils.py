from polytile.board import Board
from polytile.piece import Piece
from polytile.position import Position
from polytile.solver.utils import (
    has_isolated_cell,
    int_comma,
    is_walled_in,
    pruning_allowed,
    time_str,
)

MONO = Piece(9, ((0, 0),))


def _fill(board: Board, cells: list[tuple[int, int]]) -> Board:
    for x, y in cells:
        board.place(Position(x, y, board.size), MONO)
    return board


def test_empty_board_has_no_isolated_cell():
    assert not has_isolated_cell(Board(4))


def test_interior_pocket():
    board = _fill(Board(4), [(1, 0), (0, 1), (2, 1), (1, 2)])
    assert is_walled_in(board, 1, 1)
    assert has_isolated_cell(board)


def test_corner_pocket():
    board = _fill(Board(4), [(1, 0), (0, 1)])
    assert is_walled_in(board, 0, 0)
    assert has_isolated_cell(board)


def test_edge_pocket():
    board = _fill(Board(4), [(1, 0), (3, 0), (2, 1)])
    assert is_walled_in(board, 2, 0)
    assert has_isolated_cell(board)


def test_open_cell_is_not_isolated():
    board = _fill(Board(4), [(1, 0), (2, 1), (1, 2)])
    assert not is_walled_in(board, 1, 1)
    assert not has_isolated_cell(board)


def test_full_board_has_no_isolated_cell():
    board = Board(2, bytes([1, 1, 1, 1]))
    assert not has_isolated_cell(board)


def test_pruning_allowed_by_suffix():
    domino = Piece(1, ((0, 0), (1, 0)))
    groups = [(domino,), (MONO,), (domino,)]
    assert pruning_allowed(groups) == [False, False, True, True]
    assert pruning_allowed([]) == [True]


def test_formatting_helpers():
    assert int_comma(1234567) == "1,234,567"
    assert time_str(3723.5) == "01:02:03.50"
