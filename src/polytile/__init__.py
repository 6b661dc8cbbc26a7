"""Polytile Puzzle Solver.

Attempts to tile a square board exactly with a catalog of polyomino pieces, each
usable in any of its distinct rotations and reflections.  Pieces are placed in
catalog order using depth-first backtracking, discarding boards that contain an
empty cell walled in on all four sides.
"""

from sys import argv, exit

from .catalog import load_catalog
from .solver import solver
from .solver.config import config as solver_config


def main() -> None:
    """Main entry point for the polytile solver."""
    # Expect at most one argument: path to the catalog file
    if len(argv) > 2:
        print("Usage: python -m polytile [path_to_catalog_file]")
        exit(1)
    catalog_path = argv[1] if len(argv) == 2 else solver_config.catalog_path
    catalog = load_catalog(catalog_path)

    result = solver.run(catalog)
    if not result.solved:
        exit(2)
