"""
Board state representation for Othello.

Uses one bitboard per color for cheap copies and counts. A Board is treated
as a value: move application returns a new Board and never mutates one that
has been handed out.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Sequence
import numpy as np

from .geometry import (
    SIZE, NUM_SQUARES, VALID_MASK, FILES,
    Position, bit, popcount, iter_bits, rowcol_to_sq, sq_to_rowcol
)


class Color(IntEnum):
    """Side color. The value indexes Board.pieces."""
    BLACK = 0
    WHITE = 1

    @property
    def other(self) -> Color:
        return Color.WHITE if self is Color.BLACK else Color.BLACK


def next_color(color: Color) -> Color:
    """Black <-> White."""
    return color.other


# None = empty square, otherwise the color occupying it
Square = Optional[Color]

_SYMBOLS = {None: '.', Color.BLACK: 'B', Color.WHITE: 'W'}
_PARSE_SYMBOLS = {
    '.': None, '_': None, '-': None,
    'b': Color.BLACK, 'x': Color.BLACK,
    'w': Color.WHITE, 'o': Color.WHITE,
}

# Starting layout: the four center squares split 2-2 diagonally
_MID = SIZE // 2
START_BLACK = bit(rowcol_to_sq(_MID - 1, _MID - 1)) | bit(rowcol_to_sq(_MID, _MID))
START_WHITE = bit(rowcol_to_sq(_MID - 1, _MID)) | bit(rowcol_to_sq(_MID, _MID - 1))


@dataclass(eq=True)
class Board:
    """
    Complete Othello game state.

    Attributes:
        pieces: Tuple of (black, white) bitboards
        turn: Color to move

    Do not reassign pieces or turn on a board that is in use; get successors
    from apply_move or change_turn.
    """
    pieces: tuple[int, int] = (START_BLACK, START_WHITE)
    turn: Color = Color.BLACK

    def __post_init__(self) -> None:
        self.turn = Color(self.turn)
        if self.pieces[0] & self.pieces[1]:
            raise ValueError("A square cannot hold both colors")
        if (self.pieces[0] | self.pieces[1]) & ~VALID_MASK:
            raise ValueError("Bitboard has bits outside the board")

    @classmethod
    def initial(cls) -> Board:
        """Create a board in the starting position, Black to move."""
        return cls()

    @classmethod
    def randomized_opening(cls, plies: int = 4,
                           rng: Optional[np.random.Generator] = None) -> Board:
        """Play a few random legal moves from the start to diversify games."""
        from .moves import random_opening
        return random_opening(cls.initial(), plies, rng)

    @classmethod
    def from_rows(cls, rows: Sequence[str], turn: Color = Color.BLACK) -> Board:
        """
        Build a board from a text diagram.

        rows[0] is row 0 (rank 1). 'B'/'X' = black, 'W'/'O' = white,
        '.' = empty. Whitespace inside a row is ignored.
        """
        if len(rows) != SIZE:
            raise ValueError(f"Expected {SIZE} rows, got {len(rows)}")
        black = white = 0
        for row, text in enumerate(rows):
            cells = "".join(text.split())
            if len(cells) != SIZE:
                raise ValueError(f"Row {row} must have {SIZE} cells: {text!r}")
            for col, ch in enumerate(cells):
                try:
                    square = _PARSE_SYMBOLS[ch.lower()]
                except KeyError:
                    raise ValueError(f"Unknown square symbol {ch!r} in row {row}") from None
                if square is Color.BLACK:
                    black |= bit(rowcol_to_sq(row, col))
                elif square is Color.WHITE:
                    white |= bit(rowcol_to_sq(row, col))
        return cls(pieces=(black, white), turn=turn)

    @property
    def occupied(self) -> int:
        """Bitboard of all occupied squares."""
        return self.pieces[0] | self.pieces[1]

    @property
    def empty(self) -> int:
        """Bitboard of all empty squares."""
        return ~self.occupied & VALID_MASK

    def piece_at(self, position: Position) -> Square:
        """Color at a position, or None if empty."""
        b = bit(position.square)
        if self.pieces[Color.BLACK] & b:
            return Color.BLACK
        if self.pieces[Color.WHITE] & b:
            return Color.WHITE
        return None

    def _set_piece_at(self, position: Position, square: Square) -> None:
        """Overwrite one square. Only used on a fresh copy while building a successor."""
        b = bit(position.square)
        black, white = self.pieces[0] & ~b, self.pieces[1] & ~b
        if square is Color.BLACK:
            black |= b
        elif square is Color.WHITE:
            white |= b
        self.pieces = (black, white)

    def count_of(self, color: Color) -> int:
        """Number of squares held by color."""
        return popcount(self.pieces[color])

    def occupied_count(self) -> int:
        return popcount(self.occupied)

    def empty_count(self) -> int:
        return NUM_SQUARES - self.occupied_count()

    def is_full(self) -> bool:
        """True iff no empty square remains."""
        return self.empty == 0

    def score(self) -> int:
        """White count minus Black count."""
        return self.count_of(Color.WHITE) - self.count_of(Color.BLACK)

    def change_turn(self) -> Board:
        """Same squares, other side to move."""
        return Board(pieces=self.pieces, turn=self.turn.other)

    def copy(self) -> Board:
        return Board(pieces=self.pieces, turn=self.turn)

    def to_array(self) -> np.ndarray:
        """(SIZE, SIZE) int8 grid: +1 White, -1 Black, 0 empty."""
        grid = np.zeros((SIZE, SIZE), dtype=np.int8)
        for sq in iter_bits(self.pieces[Color.WHITE]):
            grid[sq_to_rowcol(sq)] = 1
        for sq in iter_bits(self.pieces[Color.BLACK]):
            grid[sq_to_rowcol(sq)] = -1
        return grid

    def __hash__(self) -> int:
        return hash((self.pieces, self.turn))

    def __repr__(self) -> str:
        """Grid with rank 1 on top, matching from_rows order."""
        lines = ["    " + " ".join(FILES)]
        for row in range(SIZE):
            cells = [_SYMBOLS[self.piece_at(Position(row, col))] for col in range(SIZE)]
            lines.append(f"{row + 1:>2} | " + " ".join(cells))
        lines.append(
            f"\n{self.turn.name.capitalize()} to move "
            f"(black {self.count_of(Color.BLACK)}, white {self.count_of(Color.WHITE)})"
        )
        return "\n".join(lines)
