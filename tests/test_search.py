import io
from pathlib import Path

import pytest

from polytile.board import Board
from polytile.catalog import load_catalog
from polytile.piece import Piece, fixed_group, variant_groups
from polytile.position import Position
from polytile.solver.config import SolverConfig
from polytile.solver.search import SolveStatus, solve

REFERENCE_CATALOG = Path(__file__).resolve().parent.parent / "catalogs" / "reference.txt"


def square(piece_id: int) -> Piece:
    return Piece(piece_id, ((0, 0), (1, 0), (0, 1), (1, 1)))


def l_tetromino(piece_id: int) -> Piece:
    return Piece(piece_id, ((0, 0), (0, 1), (0, 2), (1, 2)))


RING = Piece(1, ((0, 0), (1, 0), (2, 0), (0, 1), (2, 1), (0, 2), (1, 2), (2, 2)))
DOMINO = Piece(2, ((0, 0), (1, 0)))
MONO = Piece(3, ((0, 0),))


def _unsolvable_groups():
    # Three squares and a straight tetromino cannot tile 4x4: the squares always
    # cover rows in pairs, so no full row or column is left for the straight piece.
    straight = Piece(4, ((0, 0), (1, 0), (2, 0), (3, 0)))
    return variant_groups([square(1), square(2), square(3), straight])


def test_four_squares_tile_a_4x4_board():
    groups = [fixed_group(square(i)) for i in range(1, 5)]
    result = solve(Board(4), groups)

    assert result.status is SolveStatus.SOLVED
    assert result.solved
    board = result.board
    assert board is not None
    assert board.is_solved()
    assert all(board.get(pos) != 0 for pos in board.positions())

    # First fit in row-major order
    assert board.get(Position(0, 0)) == 1
    assert board.get(Position(2, 0)) == 2
    assert board.get(Position(0, 2)) == 3
    assert board.get(Position(3, 3)) == 4
    # Initial board plus one board per placement
    assert result.record.boards_checked == 5
    assert result.record.skipped_isolated == 0
    assert result.record.max_depth_reached == 4


def test_solution_is_last_logged_board():
    groups = [fixed_group(square(i)) for i in range(1, 5)]
    result = solve(Board(4), groups, config=SolverConfig(keep_boards=True))
    record = result.record
    last = len(record) - 1
    assert record.board(last) == result.board
    assert len(record.path(last)) == 5


def test_l_tetrominoes_tile_a_4x4_board_using_variants():
    groups = variant_groups([l_tetromino(i) for i in range(1, 5)])
    result = solve(Board(4), groups)

    assert result.status is SolveStatus.SOLVED
    board = result.board
    assert board is not None
    assert board.is_solved()
    for piece_id in range(1, 5):
        assert board.cells.count(piece_id) == 4


def test_partially_covered_start_board():
    start = Board(4, bytes([9] * 8 + [0] * 8))
    result = solve(start, [fixed_group(square(1)), fixed_group(square(2))])

    assert result.status is SolveStatus.SOLVED
    assert result.board is not None
    assert result.board.get(Position(0, 2)) == 1
    assert result.board.get(Position(2, 2)) == 2
    # The caller's board is not modified
    assert start.empty_count() == 8


def test_too_few_pieces_runs_out():
    groups = [fixed_group(square(i)) for i in range(1, 4)]
    result = solve(Board(4), groups)

    assert result.status is SolveStatus.NO_MORE_PIECES
    assert result.board is None
    assert not result.solved


def test_no_groups_runs_out_immediately():
    result = solve(Board(4), [])
    assert result.status is SolveStatus.NO_MORE_PIECES
    assert result.record.boards_checked == 1


def test_covered_board_with_no_groups_still_runs_out():
    result = solve(Board(2, bytes([1, 1, 1, 1])), [])
    assert result.status is SolveStatus.NO_MORE_PIECES


def test_untileable_catalog_is_not_solvable():
    result = solve(Board(4), _unsolvable_groups())
    assert result.status is SolveStatus.NOT_SOLVABLE
    assert result.board is None
    assert result.record.boards_checked > 1


def test_search_is_deterministic():
    first = solve(Board(4), _unsolvable_groups())
    second = solve(Board(4), _unsolvable_groups())
    assert first.status is second.status is SolveStatus.NOT_SOLVABLE
    assert first.record.boards_checked == second.record.boards_checked
    assert first.record.skipped_isolated == second.record.skipped_isolated

    groups = variant_groups([l_tetromino(i) for i in range(1, 5)])
    assert solve(Board(4), groups).board == solve(Board(4), groups).board


def test_interior_pocket_is_pruned_without_recursing():
    result = solve(Board(3), [fixed_group(RING), fixed_group(DOMINO)])

    assert result.status is SolveStatus.NOT_SOLVABLE
    assert result.record.skipped_isolated == 1
    assert result.record.boards_checked == 2
    assert result.record.max_depth_reached == 1
    ring_node = 1
    assert result.record.children(ring_node) == []


def test_corner_pocket_is_pruned():
    l_tromino = Piece(1, ((0, 0), (1, 0), (0, 1)))
    result = solve(Board(2), [fixed_group(l_tromino), fixed_group(DOMINO)])

    assert result.status is SolveStatus.NOT_SOLVABLE
    assert result.record.skipped_isolated == 1


def test_pruning_can_be_disabled():
    config = SolverConfig(prune_isolated_cells=False)
    result = solve(Board(3), [fixed_group(RING), fixed_group(DOMINO)], config=config)

    assert result.status is SolveStatus.NOT_SOLVABLE
    assert result.record.skipped_isolated == 0
    assert result.record.boards_checked == 2


def test_no_pruning_while_a_single_cell_piece_remains():
    result = solve(Board(3), [fixed_group(RING), fixed_group(MONO)])

    assert result.status is SolveStatus.SOLVED
    assert result.board is not None
    assert result.board.get(Position(1, 1)) == MONO.id
    assert result.record.skipped_isolated == 0


def test_board_budget():
    config = SolverConfig(max_boards_checked=3)
    result = solve(Board(4), _unsolvable_groups(), config=config)

    assert result.status is SolveStatus.BUDGET_EXHAUSTED
    assert result.board is None
    assert result.record.boards_checked == 3


def test_time_budget():
    config = SolverConfig(time_limit=-1.0)
    result = solve(Board(4), _unsolvable_groups(), config=config)
    assert result.status is SolveStatus.BUDGET_EXHAUSTED
    assert result.record.boards_checked == 0


def test_reference_catalog_within_a_budget():
    catalog = load_catalog(REFERENCE_CATALOG)
    config = SolverConfig(max_boards_checked=200, keep_boards=False)
    result = solve(Board(catalog.board_size), catalog.variant_groups(), config=config)

    assert result.status is SolveStatus.BUDGET_EXHAUSTED
    assert result.record.boards_checked == 200
    assert result.record.board(0) is None


def test_empty_group_rejected():
    with pytest.raises(ValueError):
        solve(Board(4), [fixed_group(square(1)), ()])


def test_progress_is_logged():
    logf = io.StringIO()
    config = SolverConfig(report_interval=1)
    groups = [fixed_group(square(i)) for i in range(1, 5)]
    solve(Board(4), groups, config=config, logf=logf)

    output = logf.getvalue()
    assert "Solving 4x4 board (16 empty cells) with 4 pieces." in output
    assert "Checked 2 board states" in output
    assert "Search finished: solved" in output


def test_snapshots_are_off_by_default():
    assert SolverConfig().keep_boards is False

    groups = [fixed_group(square(i)) for i in range(1, 5)]
    result = solve(Board(4), groups, config=SolverConfig())
    assert result.solved
    assert len(result.record) == 5
    assert result.record.board(0) is None
    assert result.record.path(4) == [0, 1, 2, 3, 4]
