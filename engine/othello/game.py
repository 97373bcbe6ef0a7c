"""
Game driver: plays agents against each other.

Handles passes and game end so agents only ever see positions with a legal
move, and tallies wins, losses and ties over a series of games.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional
import logging
import time

import numpy as np

from .core.geometry import Position
from .core.moves import apply_move, is_over, legal_moves, winner
from .core.state import Board, Color
from .ai.agents import Agent

logger = logging.getLogger(__name__)


@dataclass
class GameRecord:
    """Record of one finished game."""
    start: Board
    final: Board
    moves: list[Optional[Position]] = field(default_factory=list)  # None = pass
    duration_sec: float = 0.0

    @property
    def winner(self) -> Optional[Color]:
        return winner(self.final)

    @property
    def score(self) -> int:
        return self.final.score()

    @property
    def num_passes(self) -> int:
        return sum(1 for move in self.moves if move is None)

    def move_text(self) -> str:
        """Moves in algebraic notation, 'pass' for passes."""
        return ' '.join(move.algebraic if move else 'pass' for move in self.moves)


@dataclass
class MatchStats:
    """Win/loss/tie tally over a series of games."""
    black_wins: int = 0
    white_wins: int = 0
    ties: int = 0
    games: list[GameRecord] = field(default_factory=list)

    @property
    def num_games(self) -> int:
        return self.black_wins + self.white_wins + self.ties

    def record(self, game: GameRecord) -> None:
        result = game.winner
        if result == Color.BLACK:
            self.black_wins += 1
        elif result == Color.WHITE:
            self.white_wins += 1
        else:
            self.ties += 1
        self.games.append(game)

    def win_rate(self, color: Color) -> float:
        """Fraction of games won by color (ties count as half)."""
        if self.num_games == 0:
            return 0.0
        wins = self.black_wins if color == Color.BLACK else self.white_wins
        return (wins + 0.5 * self.ties) / self.num_games

    def summary(self) -> str:
        return (f"{self.num_games} games: black {self.black_wins}, "
                f"white {self.white_wins}, ties {self.ties}")


def play_game(black: Agent, white: Agent, board: Optional[Board] = None) -> GameRecord:
    """
    Play one game to the end and return its record.

    Starts from the standard position unless a board is given.
    """
    start = board if board is not None else Board.initial()
    board = start
    moves: list[Optional[Position]] = []
    agents = {Color.BLACK: black, Color.WHITE: white}
    t0 = time.time()

    while not is_over(board):
        if not legal_moves(board):
            logger.debug("%s passes", board.turn.name)
            moves.append(None)
            board = board.change_turn()
            continue

        move = agents[board.turn].select_move(board)
        logger.debug("%s plays %s", board.turn.name, move.algebraic)
        board = apply_move(board, move)
        moves.append(move)

    record = GameRecord(start=start, final=board, moves=moves,
                        duration_sec=time.time() - t0)
    result = record.winner
    logger.info(
        "Game over after %d plies: %s (score %+d)",
        len(moves), result.name if result is not None else "tie", record.score,
    )
    return record


def play_match(
    black: Agent,
    white: Agent,
    num_games: int,
    randomized: bool = True,
    opening_plies: int = 4,
    seed: Optional[int] = None
) -> MatchStats:
    """
    Play num_games games between the same two agents.

    With randomized=True each game starts from a random opening of
    opening_plies moves so deterministic agents do not replay one game.
    """
    rng = np.random.default_rng(seed)
    stats = MatchStats()

    for game_id in range(num_games):
        start = (Board.randomized_opening(opening_plies, rng)
                 if randomized else Board.initial())
        stats.record(play_game(black, white, start))
        logger.debug("Game %d/%d done: %s", game_id + 1, num_games, stats.summary())

    logger.info(
        "%s vs %s: %s",
        getattr(black, 'name', type(black).__name__),
        getattr(white, 'name', type(white).__name__),
        stats.summary(),
    )
    return stats
