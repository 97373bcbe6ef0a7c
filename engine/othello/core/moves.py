"""
Move generation for Othello.

A move is a Position. It is legal when the square is empty and at least one
ray from it captures: a run of one or more opponent stones closed off by a
stone of the mover's color.
"""

from __future__ import annotations
import logging
from typing import Optional
import numpy as np

from .errors import IllegalMove
from .geometry import DIRECTIONS, Direction, Position, all_positions, neighbor, positions_mask
from .state import Board, Color

logger = logging.getLogger(__name__)


def flips_in_direction(board: Board, position: Position, direction: Direction) -> list[Position]:
    """
    Opponent stones captured along one ray by playing at position.

    Walks outward from the neighbor of position. An empty square or the board
    edge ends the line with no capture; the mover's own stone closes it and
    returns the opponent stones collected so far (possibly none).
    """
    mover = board.turn
    line: list[Position] = []
    current = neighbor(position, direction)
    while current is not None:
        square = board.piece_at(current)
        if square is None:
            return []
        if square == mover:
            return line
        line.append(current)
        current = neighbor(current, direction)
    return []


def flips(board: Board, position: Position) -> list[Position]:
    """All stones captured by playing at position, over all eight rays."""
    captured: list[Position] = []
    for direction in DIRECTIONS:
        captured.extend(flips_in_direction(board, position, direction))
    return captured


class MoveGenerator:
    """Generates legal moves for a board."""

    @staticmethod
    def get_legal_moves(board: Board) -> list[Position]:
        """Every empty square with a capture, in row-major order."""
        return [
            pos for pos in all_positions()
            if board.piece_at(pos) is None and flips(board, pos)
        ]

    @staticmethod
    def has_legal_move(board: Board) -> bool:
        """True if the side to move can play somewhere."""
        return any(
            board.piece_at(pos) is None and flips(board, pos)
            for pos in all_positions()
        )


# Convenience functions
def legal_moves(board: Board) -> list[Position]:
    """Get all legal moves for the side to move."""
    return MoveGenerator.get_legal_moves(board)


def is_legal(board: Board, position: Position) -> bool:
    """Check if a move is legal."""
    return board.piece_at(position) is None and bool(flips(board, position))


def apply_move(board: Board, position: Position) -> Board:
    """
    Play at position and return the successor board.

    The input board is left untouched. Raises IllegalMove if position is
    occupied or captures nothing.
    """
    if board.piece_at(position) is not None:
        raise IllegalMove(f"Square {position.algebraic} is occupied", position)
    captured = flips(board, position)
    if not captured:
        raise IllegalMove(f"Move {position.algebraic} captures nothing", position)

    child = board.copy()
    mover = board.turn
    child._set_piece_at(position, mover)
    mask = positions_mask(captured)
    pieces = list(child.pieces)
    pieces[mover] |= mask
    pieces[mover.other] &= ~mask
    child.pieces = tuple(pieces)
    child.turn = mover.other
    return child


def is_over(board: Board) -> bool:
    """True iff neither side can move (two consecutive passes)."""
    return (
        not MoveGenerator.has_legal_move(board)
        and not MoveGenerator.has_legal_move(board.change_turn())
    )


def winner(board: Board) -> Optional[Color]:
    """Winner of a finished game; None while playing or on a tie."""
    if not is_over(board):
        return None
    score = board.score()
    if score > 0:
        return Color.WHITE
    if score < 0:
        return Color.BLACK
    return None


def random_opening(board: Board, plies: int,
                   rng: Optional[np.random.Generator] = None) -> Board:
    """Play up to plies uniformly random moves, passing when stuck."""
    if rng is None:
        rng = np.random.default_rng()
    for _ in range(plies):
        if is_over(board):
            break
        moves = legal_moves(board)
        if not moves:
            logger.debug("%s has no move in opening, passing", board.turn.name)
            board = board.change_turn()
            continue
        board = apply_move(board, moves[rng.integers(len(moves))])
    return board

