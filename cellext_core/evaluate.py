from __future__ import annotations

from typing import List

from .board import BoardState, adjacent_player_cells, available_cells, opponent, progress
from .components import Component, connected_components
from .scoring import ScoringMechanism, directed_edge_count, score

LATE_GAME_THRESHOLD = 0.7


def _link_total(components: List[Component]) -> float:
    # Halved: here each undirected link counts once, unlike the connection score.
    return sum(directed_edge_count(c) for c in components) / 2


def evaluate(state: BoardState, player: int, mechanism: ScoringMechanism) -> float:
    """
    Heuristic value of a board for `player`; higher is better.

    Starts from the score difference and layers a mechanism-specific
    positional term on top. Past 70% board progress the whole value is
    amplified so the realized score gap dominates.
    """
    mechanism = ScoringMechanism.parse(mechanism)
    other = opponent(player)
    value: float = score(state, player, mechanism) - score(state, other, mechanism)

    if mechanism is ScoringMechanism.MULTIPLICATION:
        mine = connected_components(state, player)
        theirs = connected_components(state, other)
        if mine:
            value += 0.5 * (sum(len(c) for c in mine) / len(mine))
        if theirs:
            value -= 0.3 * max(len(c) for c in theirs)
    elif mechanism is ScoringMechanism.CONNECTION:
        mine = connected_components(state, player)
        theirs = connected_components(state, other)
        value += 0.4 * (_link_total(mine) - _link_total(theirs))
    elif mechanism is ScoringMechanism.EXTENSION:
        potential = 0.0
        for x, y in available_cells(state):
            potential += len(adjacent_player_cells(state, player, x, y))
            potential -= 0.5 * len(adjacent_player_cells(state, other, x, y))
        value += 0.25 * potential

    filled = progress(state)
    if filled > LATE_GAME_THRESHOLD:
        value *= 1 + (filled - LATE_GAME_THRESHOLD) * 2
    return value
