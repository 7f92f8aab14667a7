from __future__ import annotations

import math
from enum import Enum
from typing import Iterable, Set, Tuple

from .board import BoardState, PositionKey
from .components import Component, connected_components


class ScoringMechanism(str, Enum):
    MULTIPLICATION = 'multiplication'
    CONNECTION = 'connection'
    EXTENSION = 'extension'

    @classmethod
    def parse(cls, value: object) -> 'ScoringMechanism':
        """Accepts an enum member, its value, or the legacy 'cell-*' ids."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        if text.startswith('cell-'):
            text = text[len('cell-'):]
        for member in cls:
            if member.value == text:
                return member
        raise ValueError(f'Unknown scoring mechanism: {value!r}')


def _neighbors_in(cell: PositionKey, component: Component) -> Iterable[PositionKey]:
    x, y = cell
    for other in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
        if other in component:
            yield other


def directed_edge_count(component: Component) -> int:
    """Sum over cells of same-component orthogonal neighbors (each link counted twice)."""
    return sum(1 for cell in component for _ in _neighbors_in(cell, component))


def unique_edge_count(component: Component) -> int:
    """Number of distinct undirected links inside a component."""
    edges: Set[Tuple[PositionKey, PositionKey]] = set()
    for cell in component:
        for other in _neighbors_in(cell, component):
            edges.add((min(cell, other), max(cell, other)))
    return len(edges)


def component_metric(component: Component, mechanism: ScoringMechanism) -> int:
    if mechanism is ScoringMechanism.MULTIPLICATION:
        return len(component)
    if len(component) == 1:
        return 1
    if mechanism is ScoringMechanism.CONNECTION:
        return max(directed_edge_count(component), 1)
    if mechanism is ScoringMechanism.EXTENSION:
        return max(unique_edge_count(component), 1)
    raise ValueError(f'Unknown scoring mechanism: {mechanism!r}')


def score(state: BoardState, player: int, mechanism: ScoringMechanism) -> int:
    """Product of the component metrics of a player's cells; 0 with no cells."""
    mechanism = ScoringMechanism.parse(mechanism)
    components = connected_components(state, player)
    if not components:
        return 0
    return math.prod(component_metric(c, mechanism) for c in components)


def scores(state: BoardState, mechanism: ScoringMechanism) -> Tuple[int, int]:
    return score(state, 0, mechanism), score(state, 1, mechanism)
