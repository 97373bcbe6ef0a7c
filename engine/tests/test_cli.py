"""Tests for the terminal client input handling."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "cli"))

from othello.core.geometry import Position
from othello.core.state import Board

import play


class TestParseUserMove:
    def test_legal_move(self):
        assert play.parse_user_move(Board.initial(), "e3") == Position(2, 4)

    def test_uppercase_and_spaces(self):
        assert play.parse_user_move(Board.initial(), "  D6 ") == Position(5, 3)

    def test_commands(self):
        board = Board.initial()
        assert play.parse_user_move(board, "q") == 'quit'
        assert play.parse_user_move(board, "help") == 'help'
        assert play.parse_user_move(board, "m") == 'show_moves'

    def test_bad_format_reported_as_format(self, capsys):
        assert play.parse_user_move(Board.initial(), "z9") is None
        out = capsys.readouterr().out
        assert "Invalid format" in out
        assert "Illegal move" not in out

    def test_off_board_reported_as_format(self, capsys):
        assert play.parse_user_move(Board.initial(), "a9") is None
        assert "Invalid format" in capsys.readouterr().out

    def test_non_ascii_digit_reported_as_format(self, capsys):
        assert play.parse_user_move(Board.initial(), "e\u00b2") is None
        assert "Invalid format" in capsys.readouterr().out

    def test_illegal_move_reported_as_illegal(self, capsys):
        assert play.parse_user_move(Board.initial(), "a1") is None
        out = capsys.readouterr().out
        assert "Illegal move" in out
        assert "Invalid format" not in out


class TestDisplay:
    def test_show_legal_moves(self, capsys):
        play.show_legal_moves(Board.initial())
        assert "e3, f4, c5, d6" in capsys.readouterr().out

    def test_print_board(self, capsys):
        play.print_board(Board.initial())
        out = capsys.readouterr().out
        assert "a b c d e f g h" in out
        assert "Black 2  White 2" in out
