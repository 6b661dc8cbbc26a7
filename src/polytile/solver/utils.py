"""Utility functions for the polytile solver."""

from collections.abc import Sequence

from polytile.board import Board
from polytile.piece import VariantGroup

TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S.%f %Z%z"

NEIGHBOR_STEPS: tuple[tuple[int, int], ...] = ((-1, 0), (0, -1), (1, 0), (0, 1))


def time_str(seconds: float) -> str:
    """Convert a time duration in seconds to a human-readable string.

    Args:
        seconds: Time duration in seconds.

    Returns:
        A string formatted as "HH:MM:SS.ss".
    """
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{int(hours):02}:{int(minutes):02}:{secs:05.2f}"


def int_comma(n: int) -> str:
    """Format an integer with commas as thousands separators."""
    return f"{n:,}"


def is_walled_in(board: Board, x: int, y: int) -> bool:
    """Check whether every orthogonal neighbour of (x, y) is covered or off the board."""
    size = board.size
    for dx, dy in NEIGHBOR_STEPS:
        n_x, n_y = x + dx, y + dy
        if 0 <= n_x < size and 0 <= n_y < size and not board.occupied[n_y * size + n_x]:
            return False
    return True


def has_isolated_cell(board: Board) -> bool:
    """Check whether the board has an empty cell that no multi-cell piece can reach.

    An empty cell whose four neighbours are all covered (or beyond the edge) is a
    one-cell pocket.
    """
    for idx, value in enumerate(board.cells):
        if value:
            continue
        y, x = divmod(idx, board.size)
        if is_walled_in(board, x, y):
            return True
    return False


def pruning_allowed(groups: Sequence[VariantGroup]) -> list[bool]:
    """For each suffix start `i`, whether no group in `groups[i:]` holds a one-cell piece.

    The returned list has `len(groups) + 1` entries; the last one (empty suffix) is True.
    """
    allowed = [True] * (len(groups) + 1)
    for i in range(len(groups) - 1, -1, -1):
        allowed[i] = allowed[i + 1] and all(piece.size > 1 for piece in groups[i])
    return allowed
