"""Core game logic: geometry, board state, and move generation."""

from .errors import OthelloError, InvalidPosition, IllegalMove
from .geometry import SIZE, NUM_SQUARES, Direction, Position, offset, neighbor, is_edge, is_corner
from .state import Board, Color, Square, next_color
from .moves import (
    MoveGenerator, flips, flips_in_direction, legal_moves, is_legal,
    apply_move, is_over, winner
)
