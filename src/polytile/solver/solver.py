"""Main solver module: runs the search for a catalog and logs the outcome."""

import sys
from datetime import datetime
from pathlib import Path
from pprint import pprint
from time import time
from typing import TextIO

from polytile.board import Board
from polytile.catalog import Catalog
from polytile.render import board_glyphs, grid_lines, piece_glyphs
from polytile.solver.config import config as solver_config
from polytile.solver.search import SolveResult, solve
from polytile.solver.utils import TIMESTAMP_FMT, int_comma, time_str


def run(catalog: Catalog) -> SolveResult:
    """Run the solver on the given catalog, logging to a file under the configured log dir.

    Args:
        catalog (Catalog): The pieces and board size to solve for.
    """
    print(f"Catalog: {catalog}")

    size = catalog.board_size
    logfile = Path(solver_config.log_dir) / f"{catalog.name}-{size}x{size}.log"
    print(f"Log file: {logfile}")

    logfile.parent.mkdir(parents=True, exist_ok=True)

    with open(logfile, "w", encoding="utf-8") as logf:
        try:
            result = solve_one(catalog, logf=logf)
        except KeyboardInterrupt:
            print("Solver interrupted by user.", file=logf, flush=True)
            print("Solver interrupted by user.")
            sys.exit(1)

    if result.solved and result.board is not None:
        print("Solution found!")
        result.board.print()
    else:
        print(f"No solution found ({result.status.value}).")
    print(f"Boards checked: {int_comma(result.record.boards_checked)}")
    print(f"Skipped (isolated cells): {int_comma(result.record.skipped_isolated)}")
    print(f"Time taken: {time_str(time() - result.record.start_time)}")
    print()
    return result


def solve_one(catalog: Catalog, *, logf: TextIO) -> SolveResult:
    """Solve a catalog on an empty board.

    Args:
        catalog (Catalog): The pieces and board size to solve for.
        logf: File object to log the solving process.
    """
    print(f"Selected catalog: {catalog.name}", file=logf, flush=True)
    print(f"Board: {catalog.board_size}x{catalog.board_size}", file=logf, flush=True)
    print("Solver config:", file=logf, flush=True)
    pprint(solver_config.model_dump(), stream=logf, width=120)
    print("", file=logf, flush=True)

    groups = catalog.variant_groups()
    for piece, group in zip(catalog.pieces, groups):
        print(f"Piece {piece.id}: {piece.size} cells, {len(group)} variants", file=logf, flush=True)
        for line in grid_lines(piece_glyphs(piece)):
            print(f"  {line}", file=logf, flush=True)

    if catalog.total_area != catalog.board_area:
        print(
            f"Note: pieces cover {catalog.total_area} cells but the board has "
            f"{catalog.board_area}; no exact tiling is possible.",
            file=logf,
            flush=True,
        )

    board = Board(catalog.board_size)
    print("", file=logf, flush=True)
    print(f"Start time: {datetime.now().astimezone().strftime(TIMESTAMP_FMT)}", file=logf, flush=True)

    result = solve(board, groups, logf=logf)

    if result.solved and result.board is not None:
        print("Solution found!", file=logf, flush=True)
        for line in grid_lines(board_glyphs(result.board)):
            print(line, file=logf, flush=True)
    else:
        print(f"No solution found ({result.status.value}).", file=logf, flush=True)
    print("Stats:", file=logf, flush=True)
    pprint(result.record.summary(), stream=logf, width=120)
    return result
