"""
Static position evaluators.

Every evaluator maps a Board to an integer scored from White's perspective:
positive favors White, negative favors Black. They are interchangeable as
the leaf heuristic of the search and as the ranking function of the
one-ply heuristic agent.
"""

from __future__ import annotations
from typing import Callable
import numpy as np

from ..core.geometry import NUM_SQUARES, SIZE, Position, is_corner, is_edge
from ..core.state import Board

Evaluator = Callable[[Board], int]

CORNER_WEIGHT = 4
EDGE_WEIGHT = 2
INTERIOR_WEIGHT = 1

# Positional switches to material once more than 4/5 of the board is filled
ENDGAME_NUMERATOR = 4
ENDGAME_DENOMINATOR = 5


def _square_weight(position: Position) -> int:
    if is_corner(position):
        return CORNER_WEIGHT
    if is_edge(position):
        return EDGE_WEIGHT
    return INTERIOR_WEIGHT


POSITION_WEIGHTS = np.array(
    [[_square_weight(Position(r, c)) for c in range(SIZE)] for r in range(SIZE)],
    dtype=np.int64,
)


def material(board: Board) -> int:
    """White stones minus Black stones."""
    return board.score()


def positional(board: Board) -> int:
    """Corner/edge weighted stone difference (corner 4, edge 2, interior 1)."""
    return int((board.to_array() * POSITION_WEIGHTS).sum())


def is_endgame(board: Board) -> bool:
    """True once occupancy passes 4/5 of the board."""
    return board.occupied_count() * ENDGAME_DENOMINATOR > NUM_SQUARES * ENDGAME_NUMERATOR


def phase_mixed(board: Board) -> int:
    """Positional early, material once the board is nearly full."""
    if is_endgame(board):
        return material(board)
    return positional(board)


EVALUATORS: dict[str, Evaluator] = {
    'material': material,
    'positional': positional,
    'phase_mixed': phase_mixed,
}


def get_evaluator(name: str) -> Evaluator:
    """Look up an evaluator by name."""
    try:
        return EVALUATORS[name]
    except KeyError:
        raise ValueError(
            f"Unknown evaluator {name!r}; choose from {', '.join(EVALUATORS)}"
        ) from None
