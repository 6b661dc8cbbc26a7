"""Depth-first backtracking search over piece variant groups."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from time import time
from typing import TextIO

from polytile.board import Board
from polytile.piece import VariantGroup
from polytile.solver.config import SolverConfig
from polytile.solver.config import config as solver_config
from polytile.solver.record import ExplorationRecord, NodeId
from polytile.solver.utils import has_isolated_cell, int_comma, pruning_allowed, time_str


class SolveStatus(str, Enum):
    """Outcome of a search."""

    SOLVED = "solved"
    NO_MORE_PIECES = "no_more_pieces"
    """Every piece was placed, but the board still has empty cells."""
    NOT_SOLVABLE = "not_solvable"
    """Every placement of every piece was tried without covering the board."""
    BUDGET_EXHAUSTED = "budget_exhausted"
    """The board or time limit was hit before the search finished."""


@dataclass(frozen=True)
class SolveResult:
    """Result of `solve()`: the outcome, the solved board if any, and the exploration record."""

    status: SolveStatus
    board: Board | None
    record: ExplorationRecord

    @property
    def solved(self) -> bool:
        return self.status is SolveStatus.SOLVED


class _BudgetExhausted(Exception):
    """Unwinds the search when the board or time limit runs out."""


class DepthFirstSearch:
    """Place the variant groups in order, one piece per level of recursion.

    At each level the first remaining group is tried at every anchor in row-major
    order, and every variant of the group at each anchor.  The first board that
    ends up fully covered wins.
    """

    def __init__(
        self,
        groups: Sequence[VariantGroup],
        *,
        config: SolverConfig = solver_config,
        logf: TextIO | None = None,
    ) -> None:
        self.groups: list[VariantGroup] = [tuple(group) for group in groups]
        for i, group in enumerate(self.groups):
            if not group:
                raise ValueError(f"Variant group {i} is empty.")

        self.config = config
        self.logf = logf
        self.record = ExplorationRecord(keep_boards=config.keep_boards)

        # prune[i]: whether isolated-cell pruning is sound once groups[:i] are placed
        if config.prune_isolated_cells:
            self._prune = pruning_allowed(self.groups)
        else:
            self._prune = [False] * (len(self.groups) + 1)

        self._deadline: float | None = None
        if config.time_limit is not None:
            self._deadline = self.record.start_time + config.time_limit

    def run(self, board: Board) -> SolveResult:
        """Search for a tiling of `board`.  The input board is not modified."""
        self._log(
            f"Solving {board.size}x{board.size} board "
            f"({board.empty_count()} empty cells) with {len(self.groups)} pieces."
        )
        try:
            self._check_budget()
            root = self.record.insert(None, board.copy())
            status, solved = self.step(board, 0, root)
        except _BudgetExhausted:
            status, solved = SolveStatus.BUDGET_EXHAUSTED, None

        self._log(
            f"Search finished: {status.value}; "
            f"checked {int_comma(self.record.boards_checked)} boards, "
            f"skipped {int_comma(self.record.skipped_isolated)} with isolated cells, "
            f"in {time_str(time() - self.record.start_time)}."
        )
        return SolveResult(status, solved, self.record)

    def step(self, board: Board, depth: int, parent: NodeId) -> tuple[SolveStatus, Board | None]:
        """Recursive helper for `run()`.

        Args:
            board: The board with `depth` pieces placed.
            depth: Number of groups consumed so far; `groups[depth:]` remain.
            parent: Record node of `board`.

        Returns:
            (status, solved board or None).
        """
        # Completion is only recognised right after a placement, so an empty
        # remainder is reported as running out of pieces even on a covered board.
        if depth == len(self.groups):
            return SolveStatus.NO_MORE_PIECES, None

        variants = self.groups[depth]
        prune = self._prune[depth + 1]
        ran_out = False

        for anchor in board.positions():
            for piece in variants:
                if not board.can_place(anchor, piece):
                    continue
                new_board = board.copy()
                new_board.place(anchor, piece)
                node = self._check(parent, new_board, depth + 1)

                if prune and has_isolated_cell(new_board):
                    self.record.skipped_isolated += 1
                    continue

                if new_board.is_solved():
                    return SolveStatus.SOLVED, new_board

                status, solved = self.step(new_board, depth + 1, node)
                if status is SolveStatus.SOLVED:
                    return status, solved
                if status is SolveStatus.NO_MORE_PIECES:
                    ran_out = True

        if ran_out:
            return SolveStatus.NO_MORE_PIECES, None
        return SolveStatus.NOT_SOLVABLE, None

    def _check(self, parent: NodeId, board: Board, depth: int) -> NodeId:
        """Log a candidate board in the record and report progress."""
        self._check_budget()
        record = self.record
        node = record.insert(parent, board)
        record.max_depth_reached = max(record.max_depth_reached, depth)

        interval = self.config.report_interval
        if interval > 0 and record.boards_checked % interval == 0:
            self._log(
                f"Checked {int_comma(record.boards_checked)} board states "
                f"after {time_str(time() - record.start_time)}; "
                f"max depth {record.max_depth_reached}, current depth {depth}; "
                f"skipped {int_comma(record.skipped_isolated)}."
            )
        return node

    def _check_budget(self) -> None:
        limit = self.config.max_boards_checked
        if limit is not None and self.record.boards_checked >= limit:
            raise _BudgetExhausted()
        if self._deadline is not None and time() > self._deadline:
            raise _BudgetExhausted()

    def _log(self, message: str) -> None:
        if self.logf is not None:
            print(message, file=self.logf, flush=True)


def solve(
    board: Board,
    groups: Sequence[VariantGroup],
    *,
    config: SolverConfig | None = None,
    logf: TextIO | None = None,
) -> SolveResult:
    """Find the first tiling of `board` that uses the variant groups in order.

    Args:
        board: The initial board (usually empty).  Not modified.
        groups: One variant group per piece, in the order the pieces are placed.
        config: Solver settings; defaults to the environment-derived configuration.
        logf: Optional text stream for progress messages.

    Returns:
        A SolveResult holding the status, the solved board (if any) and the exploration
        record with its counters.

    Raises:
        ValueError: If any variant group is empty.
    """
    search = DepthFirstSearch(groups, config=config or solver_config, logf=logf)
    return search.run(board)
