"""AI components: static evaluators, minimax search, and agents."""

from .evaluator import EVALUATORS, Evaluator, material, positional, phase_mixed
from .search import SearchConfig, Searcher, minimax, minimax_agent
from .agents import Agent, RandomAgent, GreedyAgent, HeuristicAgent, MinimaxAgent, create_agent
