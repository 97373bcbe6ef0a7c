"""
Move-selection policies.

Each agent maps a Board to the Position it wants to play. Agents keep only
their configuration between calls, so one instance can play any number of
games. They must only be asked to move when the side to move has a legal
move; passing is up to the game driver.
"""

from __future__ import annotations
from typing import Optional, Protocol

import numpy as np

from ..core.geometry import Position
from ..core.moves import apply_move, flips, legal_moves
from ..core.state import Board, Color
from .evaluator import Evaluator, get_evaluator, phase_mixed
from .search import SearchConfig, minimax_agent


class Agent(Protocol):
    """Protocol for move-selection policies."""
    name: str

    def select_move(self, board: Board) -> Position:
        """Return the move to play on board."""
        ...


def _require_moves(board: Board) -> list[Position]:
    moves = legal_moves(board)
    if not moves:
        raise ValueError(f"{board.turn.name} has no legal moves")
    return moves


class RandomAgent:
    """Uniform choice over the legal moves."""

    name = 'random'

    def __init__(self, rng: Optional[np.random.Generator] = None, seed: Optional[int] = None):
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def select_move(self, board: Board) -> Position:
        moves = _require_moves(board)
        return moves[self.rng.integers(len(moves))]

    __call__ = select_move


class GreedyAgent:
    """Captures the most stones right now. No lookahead."""

    name = 'greedy'

    def select_move(self, board: Board) -> Position:
        moves = _require_moves(board)
        # max() keeps the first of equal keys, i.e. row-major order
        return max(moves, key=lambda move: len(flips(board, move)))

    __call__ = select_move


class HeuristicAgent:
    """
    One-ply search with a static evaluator.

    White takes the successor with the highest score, Black the lowest;
    ties go to the earliest move in row-major order.
    """

    name = 'heuristic'

    def __init__(self, evaluator: Evaluator = phase_mixed):
        self.evaluator = evaluator

    def select_move(self, board: Board) -> Position:
        moves = _require_moves(board)
        sign = 1 if board.turn == Color.WHITE else -1
        return max(moves, key=lambda move: sign * self.evaluator(apply_move(board, move)))

    __call__ = select_move


class MinimaxAgent:
    """Depth-limited minimax with the configured leaf evaluator."""

    name = 'minimax'

    def __init__(self, config: Optional[SearchConfig] = None):
        self.config = config or SearchConfig()

    def select_move(self, board: Board) -> Position:
        return minimax_agent(board, self.config.depth, self.config.evaluator)

    __call__ = select_move


AGENTS = ('random', 'greedy', 'heuristic', 'minimax')


def create_agent(
    name: str,
    depth: int = 3,
    evaluator: str = 'phase_mixed',
    seed: Optional[int] = None
) -> Agent:
    """Build an agent from its name (as used on the command line)."""
    if name == 'random':
        return RandomAgent(seed=seed)
    if name == 'greedy':
        return GreedyAgent()
    if name == 'heuristic':
        return HeuristicAgent(get_evaluator(evaluator))
    if name == 'minimax':
        return MinimaxAgent(SearchConfig(depth=depth, evaluator=get_evaluator(evaluator)))
    raise ValueError(f"Unknown agent {name!r}; choose from {', '.join(AGENTS)}")
