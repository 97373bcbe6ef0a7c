"""
Error hierarchy for the Othello engine.

All engine exceptions inherit from OthelloError. The concrete errors also
subclass ValueError, so callers that already catch ValueError for bad
input keep working.

Usage:
    from othello.core.errors import IllegalMove, InvalidPosition

    try:
        board = apply_move(board, Position.from_algebraic(text))
    except InvalidPosition:
        ...  # bad format or off the board
    except IllegalMove:
        ...  # well-formed square that is not a legal play
"""

__all__ = [
    "OthelloError",
    "InvalidPosition",
    "IllegalMove",
]


class OthelloError(Exception):
    """Base class for all engine errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidPosition(OthelloError, ValueError):
    """Raised when coordinates or notation do not name a square on the board."""


class IllegalMove(OthelloError, ValueError):
    """Raised when a move is applied to a square that is not a legal play."""

    def __init__(self, message: str, position=None):
        super().__init__(message)
        self.position = position
