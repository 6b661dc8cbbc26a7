"""Bounds-checked coordinates on a square board."""

from dataclasses import dataclass, field
from typing import TypeAlias

BOARD_SIZE = 8
"""Side length of the reference puzzle board."""

Offset: TypeAlias = tuple[int, int]
"""A signed (x, y) displacement, as used for piece cells and neighbour probing."""


@dataclass(frozen=True, order=True)
class Position:
    """A cell on an `size` x `size` board.

    Both coordinates are validated against `size` on construction.  The size takes
    no part in equality, ordering or hashing, so positions on differently sized
    boards with the same (x, y) compare equal.
    """

    x: int
    y: int
    size: int = field(default=BOARD_SIZE, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not (0 <= self.x < self.size and 0 <= self.y < self.size):
            raise ValueError(
                f"Position ({self.x}, {self.y}) is outside a {self.size}x{self.size} board."
            )

    def try_add(self, other: "Position | Offset") -> "Position | None":
        """Translate by `other`, or return None if the result leaves the board."""
        dx, dy = (other.x, other.y) if isinstance(other, Position) else other
        x = self.x + dx
        y = self.y + dy
        if 0 <= x < self.size and 0 <= y < self.size:
            return Position(x, y, self.size)
        return None

    def offset(self, dx: int, dy: int) -> Offset:
        """Apply a signed offset without bounds checking.

        The result may be negative or beyond the board edge.
        """
        return (self.x + dx, self.y + dy)

    @property
    def index(self) -> int:
        """Row-major 1D index of this position."""
        return self.y * self.size + self.x
