from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional, Tuple

from .ai import choose_move
from .board import BoardState, Coord, available_cells, create, place
from .scoring import ScoringMechanism, scores
from .state import AISettings, GameState

Scores = Tuple[int, int]


@dataclass(frozen=True)
class Snapshot:
    """What a session looked like before a move; used for undo."""
    board: BoardState
    scores: Scores
    turn: int


@dataclass(frozen=True)
class Session:
    """Immutable game session: board, turn, scores and move history."""
    board: BoardState
    mechanism: ScoringMechanism
    turn: int = 0
    scores: Scores = (0, 0)
    score_history: Tuple[Tuple[int, ...], Tuple[int, ...]] = ((0,), (0,))
    history: Tuple[Snapshot, ...] = ()

    def game_state(self) -> GameState:
        return GameState(board=self.board, turn=self.turn)


def new_session(width: int, height: Optional[int] = None,
                mechanism: ScoringMechanism = ScoringMechanism.MULTIPLICATION,
                first_player: int = 0) -> Session:
    if first_player not in (0, 1):
        raise ValueError(f'first_player must be 0 or 1, got {first_player!r}')
    board = create(width, height if height is not None else width)
    return Session(board=board, mechanism=ScoringMechanism.parse(mechanism), turn=first_player)


def play(session: Session, x: int, y: int) -> Optional[Session]:
    """Places a cell for the side to move. Returns None for an invalid move."""
    board = place(session.board, session.turn, x, y)
    if board is None:
        return None
    new_scores = scores(board, session.mechanism)
    snapshot = Snapshot(board=session.board, scores=session.scores, turn=session.turn)
    return Session(
        board=board,
        mechanism=session.mechanism,
        turn=1 - session.turn,
        scores=new_scores,
        score_history=(
            session.score_history[0] + (new_scores[0],),
            session.score_history[1] + (new_scores[1],),
        ),
        history=session.history + (snapshot,),
    )


def undo(session: Session, plies: int = 1) -> Session:
    """Rewinds up to `plies` moves using the stored snapshots."""
    steps = min(max(plies, 0), len(session.history))
    if steps == 0:
        return session
    target = session.history[-steps]
    keep = len(session.history) - steps + 1
    return Session(
        board=target.board,
        mechanism=session.mechanism,
        turn=target.turn,
        scores=target.scores,
        score_history=(session.score_history[0][:keep], session.score_history[1][:keep]),
        history=session.history[:-steps],
    )


def last_move(session: Session) -> Optional[Coord]:
    """Cell claimed by the most recent move, or None at the start."""
    if not session.history:
        return None
    before = session.history[-1]
    added = session.board.cells(before.turn) - before.board.cells(before.turn)
    return next(iter(added), None)


def is_over(session: Session) -> bool:
    return not available_cells(session.board)


def winner(session: Session) -> Optional[int]:
    """Index of the winning player once the board is full, else None (also on a draw)."""
    if not is_over(session):
        return None
    s0, s1 = session.scores
    if s0 == s1:
        return None
    return 0 if s0 > s1 else 1


def ai_turn(session: Session, settings: AISettings, rng: Optional[random.Random] = None) -> Session:
    """Lets the AI play for the side to move; unchanged when the game is over."""
    move = choose_move(session.game_state(), settings, rng=rng)
    if move is None:
        return session
    nxt = play(session, *move)
    if nxt is None:
        raise RuntimeError(f'AI produced an unplayable move {move}')
    return nxt
