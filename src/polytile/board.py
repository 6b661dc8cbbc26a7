"""Classes and functions for representing the game board."""

from collections.abc import Iterator
from functools import lru_cache

from bitarray import bitarray, frozenbitarray
from bitarray.util import count_and, zeros

from polytile.piece import Piece
from polytile.position import BOARD_SIZE, Position
from polytile.render import board_glyphs, format_grid


class PlacementError(ValueError):
    """Raised when a piece is placed where it does not fit."""


@lru_cache(maxsize=200_000)
def placement_mask(anchor: Position, piece: Piece, size: int) -> frozenbitarray | None:
    """Get the cells covered by `piece` anchored at `anchor` on a `size` x `size` board.

    This is a hotspot in the search, so masks are cached per (anchor, piece, size).

    Returns:
        A row-major bitarray with one bit set per covered cell, or None if any cell
        of the piece would fall off the board.
    """
    if anchor.size != size:
        if not (0 <= anchor.x < size and 0 <= anchor.y < size):
            return None
        anchor = Position(anchor.x, anchor.y, size)

    mask = zeros(size * size)
    for offset in piece.offsets:
        pos = anchor.try_add(offset)
        if pos is None:
            return None
        mask[pos.index] = 1
    return frozenbitarray(mask)


class Board:
    """Store a square grid of piece identifiers as a 1D row-major array.

    Each cell holds 0 (empty) or the id of the piece covering it.  An occupancy
    bitarray is kept in step with the cells for fast overlap tests.
    """

    def __init__(self, size: int = BOARD_SIZE, cells: bytes | bytearray | None = None) -> None:
        if size <= 0:
            raise ValueError(f"Board size must be positive, got {size}.")
        self.size = size
        self.cells = bytearray(size * size) if cells is None else bytearray(cells)
        if len(self.cells) != size * size:
            raise ValueError(
                f"Expected {size * size} cells for a {size}x{size} board, got {len(self.cells)}."
            )
        self.occupied = bitarray([value != 0 for value in self.cells])
        """Bit i is set iff cell i is covered."""

    def copy(self) -> "Board":
        """Generate a copy of the board."""
        return Board(self.size, self.cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and self.cells == other.cells

    def __hash__(self) -> int:
        return hash((self.size, self.content_key()))

    def __str__(self) -> str:
        """Returns the board drawn as a boxed glyph grid."""
        return format_grid(board_glyphs(self))

    def print(self) -> None:
        """Print the board to the console."""
        print(self)

    def content_key(self) -> bytes:
        """The raw cell contents, usable as a content-derived identifier."""
        return bytes(self.cells)

    def positions(self) -> Iterator[Position]:
        """Iterate over all board positions in row-major order (y outer, x inner)."""
        for y in range(self.size):
            for x in range(self.size):
                yield Position(x, y, self.size)

    def position_at(self, idx: int) -> Position:
        """Convert a 1D index to a Position."""
        y, x = divmod(idx, self.size)
        return Position(x, y, self.size)

    def get(self, pos: Position) -> int:
        """Get the cell value at `pos`, or 0 for positions off the board."""
        if 0 <= pos.x < self.size and 0 <= pos.y < self.size:
            return self.cells[pos.y * self.size + pos.x]
        return 0

    def _set_value(self, pos: Position, value: int) -> None:
        """Overwrite a cell unconditionally.  Positions off the board are ignored."""
        if 0 <= pos.x < self.size and 0 <= pos.y < self.size:
            idx = pos.y * self.size + pos.x
            self.cells[idx] = value
            self.occupied[idx] = value != 0

    def can_place(self, anchor: Position, piece: Piece) -> bool:
        """Check whether every cell of `piece` anchored at `anchor` is on the board and empty."""
        mask = placement_mask(anchor, piece, self.size)
        return mask is not None and count_and(mask, self.occupied) == 0

    def place(self, anchor: Position, piece: Piece) -> None:
        """Place `piece` with its local origin at `anchor`.  Modifies the board in-place.

        Raises:
            PlacementError: If the piece does not fit.  The board is left unchanged.
        """
        if not self.can_place(anchor, piece):
            raise PlacementError(f"Cannot place piece {piece.id} at ({anchor.x}, {anchor.y}).")

        origin = Position(anchor.x, anchor.y, self.size)
        for offset in piece.offsets:
            pos = origin.try_add(offset)
            # Disable assertion in production for efficiency
            assert pos is not None, "can_place() admitted an off-board cell."
            self._set_value(pos, piece.id)

    def is_solved(self) -> bool:
        """Check whether every cell is covered."""
        return self.occupied.all()

    def empty_count(self) -> int:
        """Number of uncovered cells."""
        return self.occupied.count(0)
