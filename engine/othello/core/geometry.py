"""
Board geometry for Othello.

Board layout (8 x 8 = 64 squares, fits in a 64-bit int):

  8 | 56 57 58 59 60 61 62 63
  7 | 48 49 50 51 52 53 54 55
  6 | 40 41 42 43 44 45 46 47
  5 | 32 33 34 35 36 37 38 39
  4 | 24 25 26 27 28 29 30 31
  3 | 16 17 18 19 20 21 22 23
  2 |  8  9 10 11 12 13 14 15
  1 |  0  1  2  3  4  5  6  7
    +-------------------------
       a  b  c  d  e  f  g  h

Square index = row * SIZE + col (row 0 = rank 1, col 0 = file a)
"""

from __future__ import annotations
import re
from collections import namedtuple
from enum import Enum
from typing import Iterator, Optional

from .errors import InvalidPosition

# Board dimensions
SIZE = 8
NUM_SQUARES = SIZE * SIZE  # 64

# Mask for valid squares (bits 0-63)
VALID_MASK = (1 << NUM_SQUARES) - 1

FILES = "abcdefghijklmnopqrstuvwxyz"[:SIZE]

# ASCII file letter, then a row number without leading zeros
_ALGEBRAIC_RE = re.compile(r"([a-z])([1-9][0-9]*)")


class Direction(Enum):
    """The eight rays a capture line can follow, as (row_delta, col_delta)."""
    N = (1, 0)
    S = (-1, 0)
    E = (0, 1)
    W = (0, -1)
    NE = (1, 1)
    NW = (1, -1)
    SE = (-1, 1)
    SW = (-1, -1)


DIRECTIONS = tuple(Direction)


def offset(direction: Direction) -> tuple[int, int]:
    """Return (row_delta, col_delta) for a direction."""
    return direction.value


def is_valid_sq(row: int, col: int) -> bool:
    """Check if (row, col) is on the board."""
    return 0 <= row < SIZE and 0 <= col < SIZE


def rowcol_to_sq(row: int, col: int) -> int:
    """Convert (row, col) to square index."""
    return row * SIZE + col


def sq_to_rowcol(sq: int) -> tuple[int, int]:
    """Convert square index to (row, col)."""
    return sq // SIZE, sq % SIZE


class Position(namedtuple("Position", "row col")):
    """Immutable (row, col) coordinate, 0-based, always on the board."""
    __slots__ = ()

    def __new__(cls, row: int, col: int) -> Position:
        if not is_valid_sq(row, col):
            raise InvalidPosition(f"Position out of bounds: ({row}, {col})")
        return super().__new__(cls, row, col)

    @classmethod
    def from_square(cls, sq: int) -> Position:
        """Build a position from a square index."""
        if not 0 <= sq < NUM_SQUARES:
            raise InvalidPosition(f"Square index out of bounds: {sq}")
        return cls(*sq_to_rowcol(sq))

    @classmethod
    def from_algebraic(cls, text: str) -> Position:
        """
        Parse '<column-letter><row-number>' notation.

        "a1" -> Position(0, 0)
        "e3" -> Position(2, 4)
        """
        match = _ALGEBRAIC_RE.fullmatch(text.strip().lower())
        if match is None or match.group(1) not in FILES:
            raise InvalidPosition(f"Invalid position format: {text!r}")
        return cls(int(match.group(2)) - 1, FILES.index(match.group(1)))

    @property
    def square(self) -> int:
        """Square index of this position."""
        return rowcol_to_sq(self.row, self.col)

    @property
    def algebraic(self) -> str:
        """Algebraic notation (e.g., 'd3')."""
        return f"{FILES[self.col]}{self.row + 1}"

    def __repr__(self) -> str:
        return f"Position({self.row}, {self.col})"


def neighbor(position: Position, direction: Direction) -> Optional[Position]:
    """Step one square in a direction. Returns None off the board."""
    dr, dc = offset(direction)
    r, c = position.row + dr, position.col + dc
    if not is_valid_sq(r, c):
        return None
    return Position(r, c)


def is_edge(position: Position) -> bool:
    """True if the position lies on the outer ring (corners included)."""
    last = SIZE - 1
    return position.row in (0, last) or position.col in (0, last)


def is_corner(position: Position) -> bool:
    """True if the position is one of the four corners."""
    last = SIZE - 1
    return position.row in (0, last) and position.col in (0, last)


def all_positions() -> Iterator[Position]:
    """Every position in row-major order."""
    for sq in range(NUM_SQUARES):
        yield Position.from_square(sq)


def bit(sq: int) -> int:
    """Return bitboard with single bit set at square."""
    return 1 << sq


def popcount(bb: int) -> int:
    """Count number of set bits."""
    return bin(bb).count('1')


def lsb(bb: int) -> int:
    """Return index of least significant bit (or -1 if empty)."""
    bb = int(bb)  # Handle numpy int64
    if bb == 0:
        return -1
    return (bb & -bb).bit_length() - 1


def iter_bits(bb: int) -> Iterator[int]:
    """Iterate over indices of set bits, lowest first (row-major order)."""
    bb = int(bb)
    while bb:
        sq = lsb(bb)
        yield sq
        bb &= bb - 1  # Clear LSB


def positions_mask(positions) -> int:
    """Bitboard with a bit set for every given position."""
    mask = 0
    for pos in positions:
        mask |= bit(pos.square)
    return mask
