"""Glyph grids for boards and pieces.

Every cell maps to a single character: a blank for an empty cell, otherwise a
glyph derived from the piece identifier.  These are pure queries; printing is
left to the caller.
"""

from string import ascii_lowercase, ascii_uppercase, digits
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from polytile.board import Board
    from polytile.piece import Piece

EMPTY_GLYPH = " "

_GLYPHS = ascii_uppercase + ascii_lowercase + digits
_SYMBOLS = "@$%&*+=?!~^<>"


def glyph_for(piece_id: int) -> str:
    """Get the display glyph for a cell value.

    0 is blank, 1-26 are A-Z, 27-52 are a-z, 53-62 are 0-9, and larger identifiers
    cycle through a fixed set of symbols.
    """
    if piece_id == 0:
        return EMPTY_GLYPH
    if 1 <= piece_id <= len(_GLYPHS):
        return _GLYPHS[piece_id - 1]
    return _SYMBOLS[(piece_id - len(_GLYPHS) - 1) % len(_SYMBOLS)]


def board_glyphs(board: "Board") -> np.ndarray:
    """Return a (size, size) array of glyphs, indexed as [y, x]."""
    glyphs = np.full((board.size, board.size), EMPTY_GLYPH, dtype="<U1")
    for pos in board.positions():
        glyphs[pos.y, pos.x] = glyph_for(board.get(pos))
    return glyphs


def piece_glyphs(piece: "Piece") -> np.ndarray:
    """Return a (height, width) array of glyphs covering the piece's bounding box."""
    glyphs = np.full((piece.height, piece.width), EMPTY_GLYPH, dtype="<U1")
    for x, y in piece.offsets:
        glyphs[y, x] = glyph_for(piece.id)
    return glyphs


def format_grid(glyphs: np.ndarray) -> str:
    """Draw a glyph array as a boxed text grid."""
    n_cols = glyphs.shape[1]
    rule = "+" + "---+" * n_cols
    lines = [rule]
    for row in glyphs:
        lines.append("|" + "".join(f" {ch} |" for ch in row))
        lines.append(rule)
    return "\n".join(lines)


def grid_lines(glyphs: np.ndarray) -> list[str]:
    """Get the glyph array as plain strings, one per row."""
    return ["".join(row) for row in glyphs]
