from __future__ import annotations

import argparse
import random
from typing import Callable, Optional, Tuple

from .board import Coord, available_cells
from .config import BOARD_SIZES, configure_logging, load_config
from .scoring import ScoringMechanism
from .session import Session, ai_turn, is_over, last_move, new_session, play, undo, winner
from .state import AISettings, Difficulty

PLAYER_NAMES = ('X', 'O')


def _print_status(session: Session) -> None:
    print(session.board.pretty())
    print(f"Scores  X: {session.scores[0]}  O: {session.scores[1]}")


def _print_result(session: Session) -> None:
    w = winner(session)
    if w is None:
        print("Draw!")
    else:
        print(f"Player {PLAYER_NAMES[w]} wins!")


def parse_move(text: str) -> Optional[Coord]:
    """Parses 'x,y' or 'x y'; returns None if the text is not two integers."""
    sep = ',' if ',' in text else ' '
    parts = [t for t in text.split(sep) if t.strip() != '']
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def run_selfplay(session: Session, settings: Tuple[AISettings, AISettings],
                 rng: random.Random, echo: bool = True) -> Session:
    """AI plays both sides until the board is full."""
    while not is_over(session):
        session = ai_turn(session, settings[session.turn], rng=rng)
        if echo:
            print()
            _print_status(session)
    return session


def run_interactive(session: Session, human: Optional[int], settings: Optional[AISettings],
                    rng: Optional[random.Random], read: Callable[[str], str] = input) -> Session:
    """Reads moves for `human`; with human=None both sides are read from input."""
    _print_status(session)
    while not is_over(session):
        if human is not None and session.turn != human:
            session = ai_turn(session, settings, rng=rng)
            print(f"\nAI ({PLAYER_NAMES[1 - human]}) played {last_move(session)}")
            _print_status(session)
            continue
        text = read(f"Your move as {PLAYER_NAMES[session.turn]} (x,y or 'undo'): ").strip()
        if text.lower() == 'undo':
            # Against the AI, rewind its reply together with the human move.
            plies = 1 if human is None else min(2, len(session.history))
            session = undo(session, plies)
            _print_status(session)
            continue
        move = parse_move(text)
        if move is None:
            print('Could not parse. Try again.')
            continue
        nxt = play(session, *move)
        if nxt is None:
            print('Illegal move. Free cells:', available_cells(session.board))
            continue
        session = nxt
        _print_status(session)
    return session


def main(argv=None) -> None:
    config = load_config()
    parser = argparse.ArgumentParser(description='Cell Extension: territory game with an AI opponent')
    parser.add_argument('--size', type=int, choices=BOARD_SIZES, default=config.board_size,
                        help='Board size (NxN)')
    parser.add_argument('--mechanism', choices=[m.value for m in ScoringMechanism],
                        default=config.mechanism.value, help='Scoring mechanism')
    parser.add_argument('--difficulty', choices=[d.value for d in Difficulty],
                        default=config.difficulty.value, help='AI difficulty')
    parser.add_argument('--depth', type=int, default=config.search_depth, help='Minimax search depth (plies)')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the AI')
    parser.add_argument('--play', action='store_true', help='Play interactively instead of AI self-play')
    parser.add_argument('--mode', choices=['ai', 'user'], default='ai',
                        help="With --play: 'ai' plays against the AI, 'user' is two players at one terminal")
    parser.add_argument('--first', choices=['human', 'ai'], default='human', help='Who moves first with --play')
    args = parser.parse_args(argv)

    configure_logging(config.log_level)
    rng = random.Random(args.seed)
    mechanism = ScoringMechanism.parse(args.mechanism)
    settings = AISettings(
        ai_difficulty=Difficulty.parse(args.difficulty),
        scoring_mechanism=mechanism,
        search_depth=args.depth,
    )

    if not args.play:
        session = new_session(args.size, mechanism=mechanism)
        print('Initial board:')
        _print_status(session)
        session = run_selfplay(session, (settings, settings), rng)
        _print_result(session)
        return

    if args.mode == 'user':
        session = new_session(args.size, mechanism=mechanism)
        print("Two-player game. X moves first.")
        session = run_interactive(session, None, None, None)
        _print_result(session)
        return

    human = 0 if args.first == 'human' else 1
    session = new_session(args.size, mechanism=mechanism, first_player=0)
    print(f"You are {PLAYER_NAMES[human]}. AI plays {PLAYER_NAMES[1 - human]} ({settings.ai_difficulty.value}).")
    session = run_interactive(session, human, settings, rng)
    _print_result(session)
