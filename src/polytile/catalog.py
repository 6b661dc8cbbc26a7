"""Loader for piece catalog files.

A catalog file looks like this::

    8 8

    1
    .#.
    ##.
    .##

    2
    ..#
    ###
    #..

The first line gives the board dimensions (the board must be square).  After a
blank line, each piece is a block of lines separated from the next by a blank
line: the piece id (1-255) followed by rows of '#' (cell) and '.' (gap).  Row
index is y and column index is x.  Lines starting with ';' are comments.
"""

from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from polytile.piece import Piece, VariantGroup, variant_groups

COMMENT_PREFIX = ";"
CELL_CHAR = "#"
GAP_CHAR = "."


@dataclass
class Catalog:
    """A board size plus the ordered list of pieces to tile it with."""

    name: str
    """Name of the catalog (the file stem when loaded from disk)."""

    board_size: int
    """Side length of the square board."""

    pieces: list[Piece]
    """Base pieces, in the order the solver places them."""

    def __post_init__(self) -> None:
        """Validate the catalog."""
        if self.board_size <= 0:
            raise ValueError(f"Board size must be positive, got {self.board_size}.")
        if not self.pieces:
            raise ValueError("Catalog contains no pieces.")

        seen: set[int] = set()
        for piece in self.pieces:
            if piece.id in seen:
                raise ValueError(f"Duplicate piece id {piece.id} in catalog.")
            seen.add(piece.id)

            if not piece.is_connected():
                raise ValueError(f"Piece {piece.id} is not edge-connected.")

            # Rotations only swap width and height, so this is orientation-independent
            if max(piece.width, piece.height) > self.board_size:
                raise ValueError(
                    f"Piece {piece.id} ({piece.width}x{piece.height}) does not fit on a "
                    f"{self.board_size}x{self.board_size} board."
                )

    def __str__(self) -> str:
        """Return a string representation of the Catalog."""
        return (
            f"{self.name} ({self.board_size}x{self.board_size}): "
            f"{len(self.pieces)} pieces covering {self.total_area} cells"
        )

    @property
    def total_area(self) -> int:
        """Number of cells covered by all pieces together."""
        return sum(piece.size for piece in self.pieces)

    @property
    def board_area(self) -> int:
        return self.board_size * self.board_size

    def variant_groups(self) -> list[VariantGroup]:
        """One group of distinct orientations per piece, in catalog order."""
        return variant_groups(self.pieces)


def parse_piece(block: list[str]) -> Piece:
    """Parse a piece block: an id line followed by one or more shape rows."""
    header, *rows = block
    try:
        piece_id = int(header.strip())
    except ValueError:
        raise ValueError(f"Invalid piece id line: '{header.strip()}'") from None
    if not rows:
        raise ValueError(f"Piece {piece_id} has no shape rows.")

    offsets: list[tuple[int, int]] = []
    for y, row in enumerate(rows):
        for x, ch in enumerate(row.strip()):
            if ch == CELL_CHAR:
                offsets.append((x, y))
            elif ch != GAP_CHAR:
                raise ValueError(f"Invalid character '{ch}' in shape of piece {piece_id}.")
    return Piece(piece_id, tuple(offsets))


def parse_catalog(text: str, *, name: str = "catalog") -> Catalog:
    """Parse catalog text into a Catalog.

    Raises:
        ValueError: If the text is malformed or the catalog fails validation.
    """
    lines = [
        line.rstrip() for line in text.splitlines() if not line.lstrip().startswith(COMMENT_PREFIX)
    ]

    # Skip leading blank lines, then read the dimensions
    while lines and not lines[0].strip():
        lines.pop(0)
    if not lines:
        raise ValueError("Catalog is empty.")
    first_line = lines.pop(0).strip()
    try:
        height, width = map(int, first_line.split())
    except ValueError:
        # Covers both incorrect number of values and non-integer values
        raise ValueError(f"Invalid dimensions line: '{first_line}'") from None
    if height != width:
        raise ValueError(f"Board must be square, got {height}x{width}.")

    # Read the piece blocks, each separated by one or more blank lines
    pieces: list[Piece] = []
    block: list[str] = []
    for line in [*lines, ""]:
        if line.strip():
            block.append(line)
            continue
        if block:
            pieces.append(parse_piece(block))
            block = []

    return Catalog(name=name, board_size=height, pieces=pieces)


def load_catalog(catalog_path: PathLike | str) -> Catalog:
    """Load a catalog file from the given path.

    Args:
        catalog_path: Path to the catalog file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is malformed or the catalog fails validation.
    """
    path = Path(catalog_path).resolve()
    if not path.is_file():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        return parse_catalog(f.read(), name=path.stem)
