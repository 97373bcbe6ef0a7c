"""Tests for minimax search."""

import pytest
import sys
from pathlib import Path
import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent))

from othello.core.geometry import Position
from othello.core.state import Board, Color
from othello.core.moves import MoveGenerator, apply_move, legal_moves
from othello.ai.evaluator import material, positional, phase_mixed
from othello.ai.search import (
    BLACK_WINS, WHITE_WINS, SearchConfig, Searcher,
    minimax, minimax_agent, terminal_value
)

EMPTY_ROW = "........"

# White to move; both (1,2) and (2,1) capture the only black stone
WHITE_WINS_NOW = Board.from_rows([
    ".W......",
    "WB......",
] + [EMPTY_ROW] * 6, turn=Color.WHITE)

# Same position with colors swapped, Black to move
BLACK_WINS_NOW = Board.from_rows([
    ".B......",
    "BW......",
] + [EMPTY_ROW] * 6, turn=Color.BLACK)

# Black to move: a1 flips one stone, d3 flips two
GREEDY_CHOICE = Board.from_rows([
    ".WB.....",
    EMPTY_ROW,
    "BWW.....",
] + [EMPTY_ROW] * 5)


class CountingEvaluator:
    def __init__(self, evaluator=material):
        self.evaluator = evaluator
        self.calls = 0

    def __call__(self, board):
        self.calls += 1
        return self.evaluator(board)


class TestTerminal:
    def test_sentinels_are_symmetric(self):
        assert BLACK_WINS == -WHITE_WINS
        assert WHITE_WINS > 64 * 4

    def test_finished_game_scores_sentinel(self):
        white_only = Board.from_rows(["W......W"] + [EMPTY_ROW] * 7)
        black_only = Board.from_rows(["B......B"] + [EMPTY_ROW] * 7)
        for depth in (0, 1, 3):
            assert minimax(white_only, depth, material) == WHITE_WINS
            assert minimax(black_only, depth, material) == BLACK_WINS

    def test_tie_scores_zero(self):
        board = Board.from_rows(["WWWWWWWW"] * 4 + ["BBBBBBBB"] * 4)
        assert terminal_value(board) == 0
        assert minimax(board, 2, positional) == 0

    def test_terminal_ignores_evaluator(self):
        evaluator = CountingEvaluator()
        board = Board.from_rows(["B......B"] + [EMPTY_ROW] * 7)
        minimax(board, 0, evaluator)
        assert evaluator.calls == 0


class TestDepth:
    @pytest.mark.parametrize("evaluator", [material, positional, phase_mixed])
    def test_depth_zero_is_evaluator(self, evaluator):
        board = Board.randomized_opening(6, np.random.default_rng(9))
        assert minimax(board, 0, evaluator) == evaluator(board)

    def test_depth_one_black_minimizes(self):
        board = GREEDY_CHOICE
        children = [material(apply_move(board, m)) for m in legal_moves(board)]
        assert minimax(board, 1, material) == min(children) == -4

    def test_depth_one_white_maximizes(self):
        board = apply_move(Board.initial(), Position(2, 4))
        children = [positional(apply_move(board, m)) for m in legal_moves(board)]
        assert minimax(board, 1, positional) == max(children)

    def test_depth_two_matches_manual_tree(self):
        board = Board.initial()
        expected = min(
            max(material(apply_move(child, m)) for m in legal_moves(child))
            for child in (apply_move(board, m) for m in legal_moves(board))
        )
        assert minimax(board, 2, material) == expected

    def test_values_stay_in_evaluator_range(self):
        board = Board.randomized_opening(4, np.random.default_rng(21))
        value = minimax(board, 2, material)
        assert -64 <= value <= 64


class TestShortCircuit:
    def test_stops_after_winning_child(self):
        searcher = Searcher(material)
        assert searcher.value(WHITE_WINS_NOW, 3) == WHITE_WINS
        # Root plus the first (winning) child only
        assert searcher.nodes == 2

    def test_black_short_circuit(self):
        searcher = Searcher(material)
        assert searcher.value(BLACK_WINS_NOW, 3) == BLACK_WINS
        assert searcher.nodes == 2

    def test_agent_takes_first_winning_move(self):
        assert minimax_agent(WHITE_WINS_NOW, 2, material) == Position(1, 2)
        assert minimax_agent(BLACK_WINS_NOW, 2, material) == Position(1, 2)


class TestPass:
    def test_pass_consumes_a_ply(self):
        # Black cannot move; White wins by capturing on c1
        board = Board.from_rows(["WB......"] + [EMPTY_ROW] * 7)
        assert minimax(board, 1, material) == material(board.change_turn())
        assert minimax(board, 2, material) == WHITE_WINS


class TestMoveGeneration:
    def _count_calls(self, monkeypatch, name):
        original = getattr(MoveGenerator, name)
        calls = []

        def counting(board):
            calls.append(board)
            return original(board)

        monkeypatch.setattr(MoveGenerator, name, staticmethod(counting))
        return calls

    def test_interior_node_generates_moves_once(self, monkeypatch):
        generated = self._count_calls(monkeypatch, "get_legal_moves")
        checked = self._count_calls(monkeypatch, "has_legal_move")
        Searcher(material).value(Board.initial(), 1)
        assert generated == [Board.initial()]
        # One game-over check per frontier child, none at the root
        assert len(checked) == len(legal_moves(Board.initial()))

    def test_pass_checks_opponent_without_regenerating(self, monkeypatch):
        board = Board.from_rows(["WB......"] + [EMPTY_ROW] * 7)
        checked = self._count_calls(monkeypatch, "has_legal_move")
        searcher = Searcher(material)
        searcher.value(board, 1)
        # Once for the pass itself, once for the game-over check at the frontier
        assert checked == [board.change_turn(), board.change_turn()]
        assert searcher.nodes == 2


class TestMinimaxAgent:
    def test_picks_extremal_move(self):
        assert minimax_agent(GREEDY_CHOICE, 1, material) == Position(2, 3)

    def test_ties_go_to_first_move(self):
        assert minimax_agent(Board.initial(), 1, material) == Position(2, 4)

    def test_returns_legal_move(self):
        board = apply_move(Board.initial(), Position(2, 4))
        assert minimax_agent(board, 2, phase_mixed) in legal_moves(board)

    def test_depth_must_be_positive(self):
        with pytest.raises(ValueError):
            minimax_agent(Board.initial(), 0, material)

    def test_no_moves_raises(self):
        board = Board.from_rows(["WB......"] + [EMPTY_ROW] * 7)
        with pytest.raises(ValueError):
            minimax_agent(board, 2, material)

    def test_best_move_reports_value(self):
        move, value = Searcher(material).best_move(GREEDY_CHOICE, 1)
        assert move == Position(2, 3)
        assert value == -4


class TestSearchConfig:
    def test_defaults(self):
        config = SearchConfig()
        assert config.depth == 3
        assert config.evaluator is phase_mixed
