from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from .board import (
    BoardState,
    Coord,
    available_cells,
    adjacent_coordinates,
    diagonal_coordinates,
    is_occupied_by,
    opponent,
    place,
)
from .evaluate import evaluate
from .scoring import ScoringMechanism, score

DEFAULT_DEPTH = 2

logger = logging.getLogger(__name__)


class TieBreaker:
    """Tracks the best-valued candidate, choosing uniformly among exact ties.

    Ties are resolved by reservoir sampling: the k-th equally good candidate
    replaces the current choice with probability 1/k.
    """

    def __init__(self, rng: random.Random) -> None:
        self.rng = rng
        self.best_value = -math.inf
        self.choice: Optional[Coord] = None
        self.ties = 0

    def offer(self, move: Coord, value: float) -> None:
        if self.choice is None or value > self.best_value:
            self.best_value = value
            self.choice = move
            self.ties = 1
        elif value == self.best_value:
            self.ties += 1
            if self.rng.randrange(self.ties) == 0:
                self.choice = move


@dataclass
class SearchStats:
    """Counters filled in by minimax; useful to observe pruning."""
    nodes: int = 0
    leaves: int = 0
    cutoffs: int = 0


def territorial_move(
    state: BoardState,
    candidates: Sequence[Coord],
    player: int,
    rng: Optional[random.Random] = None,
) -> Optional[Coord]:
    """Prefers open space: scores each cell's 8-neighborhood (empty +3,
    opponent -1, own -2) plus a sub-0.1 jitter."""
    rng = rng or random.Random()
    other = opponent(player)
    best: Optional[Coord] = None
    best_value = -math.inf
    for x, y in candidates:
        neighborhood = adjacent_coordinates(x, y, state.width, state.height)
        neighborhood += diagonal_coordinates(x, y, state.width, state.height)
        value = rng.random() * 0.1
        for nx, ny in neighborhood:
            if is_occupied_by(state, other, nx, ny):
                value -= 1
            elif is_occupied_by(state, player, nx, ny):
                value -= 2
            else:
                value += 3
        if value > best_value:
            best_value = value
            best = (x, y)
    return best


def greedy_move(
    state: BoardState,
    candidates: Sequence[Coord],
    player: int,
    mechanism: ScoringMechanism,
    rng: Optional[random.Random] = None,
) -> Optional[Coord]:
    """Picks the cell with the largest immediate score gain."""
    rng = rng or random.Random()
    current = score(state, player, mechanism)
    picker = TieBreaker(rng)
    for x, y in candidates:
        nxt = place(state, player, x, y)
        if nxt is None:
            logger.warning('Greedy simulation failed for move (%s, %s)', x, y)
            continue
        picker.offer((x, y), score(nxt, player, mechanism) - current)
    return picker.choice


class _Frame:
    __slots__ = ('state', 'depth', 'maximizing', 'alpha', 'beta', 'value', 'moves')

    def __init__(self, state: BoardState, depth: int, maximizing: bool, alpha: float, beta: float,
                 moves: Iterator[Coord]) -> None:
        self.state = state
        self.depth = depth
        self.maximizing = maximizing
        self.alpha = alpha
        self.beta = beta
        self.value = -math.inf if maximizing else math.inf
        self.moves = moves

    def absorb(self, child_value: float) -> None:
        if self.maximizing:
            self.value = max(self.value, child_value)
            self.alpha = max(self.alpha, child_value)
        else:
            self.value = min(self.value, child_value)
            self.beta = min(self.beta, child_value)

    def next_child(self, mover: int) -> Optional[BoardState]:
        for x, y in self.moves:
            child = place(self.state, mover, x, y)
            if child is not None:
                return child
        return None


def minimax(
    state: BoardState,
    depth: int,
    maximizing: bool,
    ai_player: int,
    mechanism: ScoringMechanism,
    alpha: float = -math.inf,
    beta: float = math.inf,
    prune: bool = True,
    stats: Optional[SearchStats] = None,
) -> float:
    """
    Depth-limited minimax with optional alpha-beta pruning, always scored
    from ai_player's point of view.

    The tree is walked with an explicit frame stack: each frame owns its
    board and its (alpha, beta) window, and hands its value to the parent
    when it runs out of moves or is cut off.
    """
    mechanism = ScoringMechanism.parse(mechanism)
    stats = stats if stats is not None else SearchStats()

    def open_node(board: BoardState, remaining: int, is_max: bool, a: float, b: float) -> Tuple[Optional[_Frame], float]:
        stats.nodes += 1
        moves = available_cells(board) if remaining > 0 else []
        if not moves:
            stats.leaves += 1
            return None, evaluate(board, ai_player, mechanism)
        return _Frame(board, remaining, is_max, a, b, iter(moves)), 0.0

    root, leaf_value = open_node(state, depth, maximizing, alpha, beta)
    if root is None:
        return leaf_value

    stack: List[_Frame] = [root]
    result: Optional[float] = None
    while stack:
        frame = stack[-1]
        if result is not None:
            frame.absorb(result)
            result = None
            if prune and frame.beta <= frame.alpha:
                stats.cutoffs += 1
                stack.pop()
                result = frame.value
                continue
        mover = ai_player if frame.maximizing else opponent(ai_player)
        child = frame.next_child(mover)
        if child is None:
            stack.pop()
            result = frame.value
            continue
        node, leaf_value = open_node(child, frame.depth - 1, not frame.maximizing, frame.alpha, frame.beta)
        if node is None:
            result = leaf_value
        else:
            stack.append(node)
    return result


def minimax_root(
    state: BoardState,
    candidates: Sequence[Coord],
    player: int,
    mechanism: ScoringMechanism,
    depth: int = DEFAULT_DEPTH,
    prune: bool = True,
    stats: Optional[SearchStats] = None,
) -> List[Tuple[Coord, float]]:
    """Values every root candidate: the AI move is ply one, the search
    continues with the opponent's reply for depth - 1 plies."""
    if depth < 1:
        raise ValueError(f'Search depth must be at least 1, got {depth}')
    results: List[Tuple[Coord, float]] = []
    for x, y in candidates:
        child = place(state, player, x, y)
        if child is None:
            logger.warning('Minimax simulation failed for move (%s, %s)', x, y)
            continue
        value = minimax(child, depth - 1, False, player, mechanism, prune=prune, stats=stats)
        results.append(((x, y), value))
    return results


def minimax_move(
    state: BoardState,
    candidates: Sequence[Coord],
    player: int,
    mechanism: ScoringMechanism,
    depth: int = DEFAULT_DEPTH,
    rng: Optional[random.Random] = None,
    prune: bool = True,
    stats: Optional[SearchStats] = None,
) -> Optional[Coord]:
    rng = rng or random.Random()
    picker = TieBreaker(rng)
    for move, value in minimax_root(state, candidates, player, mechanism, depth, prune=prune, stats=stats):
        picker.offer(move, value)
    return picker.choice
