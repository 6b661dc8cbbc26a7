"""Pieces and their symmetry variants.

A piece is an identifier plus a set of cell offsets relative to a local origin.
Offsets are always kept in canonical form: shifted so that the smallest x and
the smallest y are both 0, and sorted by (x, y).  Two variants covering the
same cells therefore compare equal.
"""

from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TypeAlias

import numpy as np

from polytile.position import Offset
from polytile.render import format_grid, piece_glyphs

MAX_PIECE_ID = 255
"""Largest piece identifier that fits in a board cell (0 is reserved for empty)."""

Transform: TypeAlias = Callable[[int, int], Offset]


def _rotate_cw(x: int, y: int) -> Offset:
    return (-y, x)


def _rotate_ccw(x: int, y: int) -> Offset:
    return (y, -x)


def _rotate_180(x: int, y: int) -> Offset:
    return (-x, -y)


def _flip_x(x: int, y: int) -> Offset:
    return (-x, y)


def _flip_y(x: int, y: int) -> Offset:
    return (x, -y)


VariantGroup: TypeAlias = tuple["Piece", ...]
"""All distinct orientations of one catalog piece, identity first."""


def canonicalize(offsets: Iterable[Offset]) -> tuple[Offset, ...]:
    """Pack offsets against the origin and sort them by (x, y)."""
    points = list(offsets)
    if not points:
        return ()
    min_x = min(x for x, _ in points)
    min_y = min(y for _, y in points)
    return tuple(sorted((x - min_x, y - min_y) for x, y in points))


@dataclass(frozen=True)
class Piece:
    """A named shape, stored in canonical form.

    Pieces are immutable; the transform methods return new pieces with the same id.
    """

    id: int
    offsets: tuple[Offset, ...]

    def __post_init__(self) -> None:
        if not 1 <= self.id <= MAX_PIECE_ID:
            raise ValueError(f"Piece id must be in 1..{MAX_PIECE_ID}, got {self.id}.")
        offsets = canonicalize(self.offsets)
        if not offsets:
            raise ValueError(f"Piece {self.id} has no cells.")
        if len(set(offsets)) != len(offsets):
            raise ValueError(f"Piece {self.id} has duplicate cells.")
        object.__setattr__(self, "offsets", offsets)

    def __str__(self) -> str:
        return format_grid(piece_glyphs(self))

    @property
    def size(self) -> int:
        """Number of cells covered by the piece."""
        return len(self.offsets)

    @property
    def width(self) -> int:
        return max(x for x, _ in self.offsets) + 1

    @property
    def height(self) -> int:
        return max(y for _, y in self.offsets) + 1

    def transformed(self, transform: Transform) -> "Piece":
        """Apply a signed-space transform to every offset and re-canonicalize."""
        return Piece(self.id, tuple(transform(x, y) for x, y in self.offsets))

    def rotate_cw(self) -> "Piece":
        return self.transformed(_rotate_cw)

    def rotate_ccw(self) -> "Piece":
        return self.transformed(_rotate_ccw)

    def rotate_180(self) -> "Piece":
        return self.transformed(_rotate_180)

    def flip_x(self) -> "Piece":
        return self.transformed(_flip_x)

    def flip_y(self) -> "Piece":
        return self.transformed(_flip_y)

    def all_transforms(self) -> VariantGroup:
        """Get the distinct images of this piece under the 8 symmetries of the square.

        Variants are listed in the order they are first produced: the four rotations
        of the piece (identity, cw, 180, ccw) followed by the four rotations of its
        mirror image.  Symmetric shapes yield fewer than 8 variants.
        """
        mirrored = self.flip_x()
        candidates = (
            self,
            self.rotate_cw(),
            self.rotate_180(),
            self.rotate_ccw(),
            mirrored,
            mirrored.rotate_cw(),
            mirrored.rotate_180(),
            mirrored.rotate_ccw(),
        )
        # dict preserves first-insertion order
        return tuple(dict.fromkeys(candidates))

    def is_connected(self) -> bool:
        """Check whether the cells form a single edge-connected shape."""
        cells = np.zeros((self.height, self.width), dtype=bool)
        for x, y in self.offsets:
            cells[y, x] = True
        visited = np.zeros_like(cells)

        # Breadth-first search from the first cell
        start_x, start_y = self.offsets[0]
        queue = deque([(start_y, start_x)])
        visited[start_y, start_x] = True
        while queue:
            r, c = queue.popleft()
            for delta_r, delta_c in [(-1, 0), (1, 0), (0, -1), (0, 1)]:
                r_new, c_new = r + delta_r, c + delta_c
                if 0 <= r_new < self.height and 0 <= c_new < self.width:
                    if cells[r_new, c_new] and not visited[r_new, c_new]:
                        visited[r_new, c_new] = True
                        queue.append((r_new, c_new))

        return bool(np.array_equal(cells, visited))


def variant_groups(pieces: Iterable[Piece]) -> list[VariantGroup]:
    """Build one variant group per piece, preserving the catalog order."""
    return [piece.all_transforms() for piece in pieces]


def fixed_group(piece: Piece) -> VariantGroup:
    """A group holding only the given orientation."""
    return (piece,)
