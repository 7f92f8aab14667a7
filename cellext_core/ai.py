from __future__ import annotations

import logging
import random
from typing import List, Optional

from .board import BoardState, Coord, available_cells, is_in_bounds, is_occupied, progress
from .scoring import ScoringMechanism
from .search import greedy_move, minimax_move, territorial_move
from .state import AISettings, Difficulty, GameState

EARLY_GAME_PROGRESS = 0.25

logger = logging.getLogger(__name__)


def _is_valid_cell(board: BoardState, cell: object) -> bool:
    try:
        x, y = cell  # type: ignore[misc]
    except (TypeError, ValueError):
        return False
    if isinstance(x, bool) or isinstance(y, bool) or not isinstance(x, int) or not isinstance(y, int):
        return False
    return is_in_bounds(x, y, board.width, board.height) and not is_occupied(board, x, y)


def _validated_candidates(board: BoardState, cells: List[Coord]) -> List[Coord]:
    valid: List[Coord] = []
    for cell in cells:
        if _is_valid_cell(board, cell):
            valid.append(cell)
        else:
            logger.error('AI discarded invalid candidate %r', cell)
    return valid


def _run_strategy(state: GameState, settings: AISettings, candidates: List[Coord],
                  rng: random.Random) -> Optional[Coord]:
    board = state.board
    player = state.turn
    difficulty = Difficulty.parse(settings.ai_difficulty)
    mechanism = ScoringMechanism.parse(settings.scoring_mechanism)
    if difficulty is Difficulty.EASY:
        if progress(board) < EARLY_GAME_PROGRESS:
            logger.info('AI strategy: territorial')
            return territorial_move(board, candidates, player, rng=rng)
        logger.info('AI strategy: greedy (%s)', mechanism.value)
        return greedy_move(board, candidates, player, mechanism, rng=rng)
    logger.info('AI strategy: minimax depth %d (%s)', settings.search_depth, mechanism.value)
    return minimax_move(board, candidates, player, mechanism, depth=settings.search_depth, rng=rng)


def choose_move(state: GameState, settings: AISettings, rng: Optional[random.Random] = None) -> Optional[Coord]:
    """
    Picks the AI's next cell for the side to move.

    Returns None only when the board has no free cell left. Any failure
    inside a strategy is logged and replaced by a uniformly random free
    cell, so a move is always produced while one exists.
    """
    rng = rng or random.Random()
    board = state.board
    cells = available_cells(board)
    if not cells:
        logger.info('AI: no available cells, game is over')
        return None

    candidates = _validated_candidates(board, cells)
    if not candidates:
        logger.error('AI: every available cell failed validation')
        return None

    move: Optional[Coord] = None
    try:
        move = _run_strategy(state, settings, candidates, rng)
        if move is None:
            logger.warning('AI strategy returned no move despite %d candidates', len(candidates))
    except Exception:
        logger.exception('AI strategy failed')

    if move is None:
        move = rng.choice(candidates)
        logger.warning('AI falling back to random move %s', move)

    if not _is_valid_cell(board, move):
        logger.error('AI final move %r is invalid, using %s', move, candidates[0])
        move = candidates[0]

    logger.info('AI selected move %s', move)
    return move
