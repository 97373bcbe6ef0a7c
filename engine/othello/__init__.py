"""Othello engine: board rules, heuristic evaluators, minimax search and agents."""

__version__ = "0.1.0"
