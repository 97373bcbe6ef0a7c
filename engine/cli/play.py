#!/usr/bin/env python3
"""
Terminal-based Othello client.

Play against an agent, watch two agents play, or benchmark a match.
"""

from __future__ import annotations
import argparse
import logging
import sys
import time
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from othello.core.errors import InvalidPosition
from othello.core.geometry import SIZE, FILES, Position
from othello.core.state import Board, Color
from othello.core.moves import legal_moves, is_legal, apply_move, is_over, winner
from othello.ai.agents import AGENTS, Agent, create_agent
from othello.ai.evaluator import EVALUATORS
from othello.game import play_match


def print_board(board: Board, highlight_moves: list[Position] = None) -> None:
    """Print the board with optional move highlighting.

    Symbols:
        B = black stone
        W = white stone
        * = legal move (when highlighted)
    """
    # ANSI color codes
    GREEN = '\033[92m'
    RESET = '\033[0m'

    targets = set(highlight_moves or [])

    print()
    print("    " + " ".join(FILES))
    print("  +" + "-" * (SIZE * 2 + 1) + "+")
    for row in range(SIZE):
        line = f"{row + 1} |"
        for col in range(SIZE):
            pos = Position(row, col)
            square = board.piece_at(pos)
            if square == Color.BLACK:
                line += " B"
            elif square == Color.WHITE:
                line += " W"
            elif pos in targets:
                line += f" {GREEN}*{RESET}"
            else:
                line += " ."
        line += " |"
        print(line)
    print("  +" + "-" * (SIZE * 2 + 1) + "+")
    print(f"  Black {board.count_of(Color.BLACK)}  White {board.count_of(Color.WHITE)}")
    print()


def parse_user_move(board: Board, input_str: str):
    """Parse user input into a move or a command name.

    Format errors and illegal moves are reported separately.
    """
    input_str = input_str.strip().lower()

    # Check for special commands
    if input_str in ['q', 'quit', 'exit']:
        return 'quit'
    if input_str in ['h', 'help', '?']:
        return 'help'
    if input_str in ['m', 'moves']:
        return 'show_moves'

    try:
        move = Position.from_algebraic(input_str)
    except InvalidPosition:
        print(f"Invalid format: {input_str}. Use notation like 'e3'")
        return None

    if not is_legal(board, move):
        print(f"Illegal move: {input_str}")
        return None
    return move


def show_legal_moves(board: Board) -> None:
    """Display all legal moves."""
    moves = legal_moves(board)
    if not moves:
        print("No legal moves!")
        return
    print("Legal moves:", ", ".join(m.algebraic for m in moves))


def announce_result(board: Board) -> None:
    result = winner(board)
    if result is None:
        print(f"Game drawn ({board.count_of(Color.BLACK)}-{board.count_of(Color.WHITE)}).")
    else:
        print(f"{result.name.capitalize()} wins "
              f"({board.count_of(Color.BLACK)}-{board.count_of(Color.WHITE)}).")


def play_human_vs_ai(agent: Agent, human_color: Color = Color.BLACK) -> None:
    """Play a game: human vs agent."""
    board = Board.initial()

    print("\n=== Othello ===")
    print("You are", human_color.name.capitalize())
    print("Commands: move (e.g., 'e3'), 'm' for moves, 'q' quit")

    while not is_over(board):
        moves = legal_moves(board)
        if not moves:
            print(f"{board.turn.name.capitalize()} has no legal move and passes.")
            board = board.change_turn()
            continue

        if board.turn == human_color:
            print_board(board, moves)
            print(f"Your turn ({board.turn.name.capitalize()})")

            while True:
                try:
                    user_input = input("> ").strip()
                except EOFError:
                    return

                result = parse_user_move(board, user_input)

                if result == 'quit':
                    print("Thanks for playing!")
                    return
                elif result == 'help':
                    print("Enter moves like 'e3' to place a stone")
                    print("'m' to see legal moves, 'q' to quit")
                elif result == 'show_moves':
                    show_legal_moves(board)
                elif result is not None:
                    board = apply_move(board, result)
                    print(f"You played: {result.algebraic}")
                    break
        else:
            print(f"{agent.name} thinking...")
            move = agent.select_move(board)
            board = apply_move(board, move)
            print(f"AI plays: {move.algebraic}")

    # Game over
    print_board(board)
    announce_result(board)


def watch_ai_vs_ai(black: Agent, white: Agent, delay: float = 0.5) -> None:
    """Watch two agents play."""
    board = Board.initial()
    agents = {Color.BLACK: black, Color.WHITE: white}

    print(f"\n=== {black.name} (Black) vs {white.name} (White) ===")

    move_count = 0
    while not is_over(board):
        print_board(board)
        if not legal_moves(board):
            print(f"{board.turn.name.capitalize()} passes")
            board = board.change_turn()
            continue

        move = agents[board.turn].select_move(board)
        print(f"Move {move_count + 1}, {board.turn.name.capitalize()} plays {move.algebraic}")
        board = apply_move(board, move)
        move_count += 1
        time.sleep(delay)

    print_board(board)
    announce_result(board)


def main():
    parser = argparse.ArgumentParser(description='Othello Terminal Client')
    parser.add_argument('--black', choices=AGENTS, default='minimax', help='Black agent')
    parser.add_argument('--white', choices=AGENTS, default='greedy', help='White agent')
    parser.add_argument('--depth', type=int, default=3, help='Minimax search depth')
    parser.add_argument('--evaluator', choices=sorted(EVALUATORS), default='phase_mixed',
                        help='Evaluator for heuristic/minimax agents')
    parser.add_argument('--seed', type=int, default=None, help='Random seed')
    parser.add_argument('--watch', action='store_true', help='Watch agent vs agent')
    parser.add_argument('--games', type=int, default=0,
                        help='Benchmark: play N games from randomized openings')
    parser.add_argument('--opening-plies', type=int, default=4,
                        help='Random moves played before each benchmark game')
    parser.add_argument('--delay', type=float, default=0.5, help='Seconds between moves when watching')
    parser.add_argument('--play-as', choices=['black', 'white'], default='black',
                        help='Play as black (moves first) or white')
    parser.add_argument('--log-level', default='WARNING', help='Logging level')

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    def build(name: str, seed_offset: int) -> Agent:
        seed = None if args.seed is None else args.seed + seed_offset
        return create_agent(name, depth=args.depth, evaluator=args.evaluator, seed=seed)

    if args.games > 0:
        stats = play_match(build(args.black, 0), build(args.white, 1), args.games,
                           opening_plies=args.opening_plies, seed=args.seed)
        print(stats.summary())
        print(f"Black win rate: {stats.win_rate(Color.BLACK):.1%}")
        print(f"White win rate: {stats.win_rate(Color.WHITE):.1%}")
    elif args.watch:
        watch_ai_vs_ai(build(args.black, 0), build(args.white, 1), args.delay)
    else:
        human = Color.BLACK if args.play_as == 'black' else Color.WHITE
        opponent = args.white if human == Color.BLACK else args.black
        play_human_vs_ai(build(opponent, 1), human)


if __name__ == '__main__':
    main()
