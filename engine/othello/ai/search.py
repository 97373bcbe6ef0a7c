"""
Depth-bounded minimax search.

White maximizes, Black minimizes, over the values returned by an evaluator
at the search frontier. Finished games score the WHITE_WINS / BLACK_WINS
sentinels (0 for a tie) so a proven result always beats a heuristic
estimate.

The only cutoff is single-sided: a node stops scanning its children as soon
as one of them reaches the best value possible for the side to move. No
bounds are passed between siblings (this is not alpha-beta).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional
import logging

from ..core.geometry import Position
from ..core.moves import MoveGenerator, apply_move, is_over, legal_moves, winner
from ..core.state import Board, Color
from .evaluator import Evaluator, phase_mixed

logger = logging.getLogger(__name__)

WHITE_WINS = 2**63 - 1
BLACK_WINS = -WHITE_WINS


@dataclass
class SearchConfig:
    """Configuration for minimax search."""
    depth: int = 3  # Plies to search from the root
    evaluator: Evaluator = field(default=phase_mixed)  # Leaf heuristic


def terminal_value(board: Board) -> int:
    """Sentinel score of a finished game."""
    result = winner(board)
    if result == Color.WHITE:
        return WHITE_WINS
    if result == Color.BLACK:
        return BLACK_WINS
    return 0


def _better(value: int, best: Optional[int], maximizing: bool) -> bool:
    if best is None:
        return True
    return value > best if maximizing else value < best


class Searcher:
    """
    Runs one search and counts the nodes it visits.

    A Searcher carries no position state; a new one per search keeps the
    node count meaningful.
    """

    def __init__(self, evaluator: Evaluator):
        self.evaluator = evaluator
        self.nodes = 0

    def value(self, board: Board, depth: int) -> int:
        """Minimax value of board searched depth plies deep."""
        self.nodes += 1

        if depth <= 0:
            if is_over(board):
                return terminal_value(board)
            return self.evaluator(board)

        moves = legal_moves(board)
        if not moves:
            passed = board.change_turn()
            if not MoveGenerator.has_legal_move(passed):
                return terminal_value(board)
            # Forced pass uses up a ply
            return self.value(passed, depth - 1)

        maximizing = board.turn == Color.WHITE
        best_possible = WHITE_WINS if maximizing else BLACK_WINS
        best: Optional[int] = None

        for move in moves:
            child_value = self.value(apply_move(board, move), depth - 1)
            if child_value == best_possible:
                return child_value
            if _better(child_value, best, maximizing):
                best = child_value

        return best

    def best_move(self, board: Board, depth: int) -> tuple[Position, int]:
        """
        Pick the move with the extremal value for the side to move.

        Ties keep the earliest move in row-major order.
        """
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")
        moves = legal_moves(board)
        if not moves:
            raise ValueError(f"{board.turn.name} has no legal moves")

        maximizing = board.turn == Color.WHITE
        best_possible = WHITE_WINS if maximizing else BLACK_WINS
        best_move: Optional[Position] = None
        best_value: Optional[int] = None

        for move in moves:
            child_value = self.value(apply_move(board, move), depth - 1)
            if _better(child_value, best_value, maximizing):
                best_move, best_value = move, child_value
            if child_value == best_possible:
                break

        return best_move, best_value


def minimax(board: Board, depth: int, evaluator: Evaluator) -> int:
    """Value of board from White's perspective, searched depth plies."""
    return Searcher(evaluator).value(board, depth)


def minimax_agent(board: Board, depth: int, evaluator: Evaluator) -> Position:
    """Best move for the side to move according to a depth-ply minimax."""
    searcher = Searcher(evaluator)
    move, value = searcher.best_move(board, depth)
    logger.debug(
        "minimax depth=%d picked %s value=%d nodes=%d",
        depth, move.algebraic, value, searcher.nodes,
    )
    return move
