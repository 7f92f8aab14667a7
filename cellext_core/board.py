from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Tuple

Coord = Tuple[int, int]  # (x, y)
PositionKey = Tuple[int, int]

logger = logging.getLogger(__name__)


def position_key(x: int, y: int) -> PositionKey:
    """Canonical mapping key for a coordinate."""
    return (x, y)


def parse_position_key(key: PositionKey) -> Coord:
    x, y = key
    return x, y


def opponent(player: int) -> int:
    return 1 - player


@dataclass(frozen=True)
class BoardState:
    """Immutable grid with one occupied-cell set per player."""
    width: int
    height: int
    occupied: Tuple[FrozenSet[PositionKey], FrozenSet[PositionKey]] = (frozenset(), frozenset())

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f'Board dimensions must be positive, got {self.width}x{self.height}')
        if len(self.occupied) != 2:
            raise ValueError('Expected exactly two occupancy sets')
        shared = self.occupied[0] & self.occupied[1]
        if shared:
            raise ValueError(f'Cells owned by both players: {sorted(shared)}')

    def cells(self, player: int) -> FrozenSet[PositionKey]:
        """Cells owned by the given player (empty for an invalid index)."""
        if player not in (0, 1):
            return frozenset()
        return self.occupied[player]

    def owner(self, x: int, y: int) -> Optional[int]:
        key = position_key(x, y)
        if key in self.occupied[0]:
            return 0
        if key in self.occupied[1]:
            return 1
        return None

    def pretty(self) -> str:
        """Generates a human-readable grid: X for player 0, O for player 1."""
        symbols = {0: 'X', 1: 'O', None: '.'}
        lines: List[str] = []
        for y in range(self.height):
            lines.append(' '.join(symbols[self.owner(x, y)] for x in range(self.width)))
        return '\n'.join(lines)


def create(width: int, height: int) -> BoardState:
    """Creates an empty board."""
    return BoardState(width=width, height=height, occupied=(frozenset(), frozenset()))


def from_cells(width: int, height: int, cells0: Iterable[Coord], cells1: Iterable[Coord]) -> BoardState:
    """Builds a board from explicit cell lists, rejecting out-of-bounds cells."""
    occupied = []
    for cells in (cells0, cells1):
        keys = set()
        for x, y in cells:
            if not is_in_bounds(x, y, width, height):
                raise ValueError(f'Cell ({x}, {y}) is outside a {width}x{height} board')
            keys.add(position_key(x, y))
        occupied.append(frozenset(keys))
    return BoardState(width=width, height=height, occupied=(occupied[0], occupied[1]))


def is_in_bounds(x: int, y: int, width: int, height: int) -> bool:
    return 0 <= x < width and 0 <= y < height


def is_occupied(state: BoardState, x: int, y: int) -> bool:
    key = position_key(x, y)
    return key in state.occupied[0] or key in state.occupied[1]


def is_occupied_by(state: BoardState, player: int, x: int, y: int) -> bool:
    if player not in (0, 1):
        return False
    return position_key(x, y) in state.occupied[player]


def place(state: BoardState, player: int, x: int, y: int) -> Optional[BoardState]:
    """Claims (x, y) for player and returns the new board, or None if the
    placement is invalid. The input board is never modified."""
    if player not in (0, 1):
        logger.debug('Rejected placement for invalid player index %r', player)
        return None
    if not is_in_bounds(x, y, state.width, state.height):
        logger.debug('Rejected placement at (%s, %s): out of bounds', x, y)
        return None
    if is_occupied(state, x, y):
        logger.debug('Rejected placement at (%s, %s): already occupied', x, y)
        return None
    key = position_key(x, y)
    if player == 0:
        occupied = (state.occupied[0] | {key}, state.occupied[1])
    else:
        occupied = (state.occupied[0], state.occupied[1] | {key})
    return BoardState(width=state.width, height=state.height, occupied=occupied)


def available_cells(state: BoardState) -> List[Coord]:
    """All unoccupied cells in column-major order (x outer, y inner).

    AI tie-breaking depends on this order, so it must stay stable.
    """
    return [
        (x, y)
        for x in range(state.width)
        for y in range(state.height)
        if not is_occupied(state, x, y)
    ]


def total_cells(state: BoardState) -> int:
    return state.width * state.height


def progress(state: BoardState) -> float:
    """Fraction of the board already claimed, in [0, 1]."""
    return 1 - len(available_cells(state)) / total_cells(state)


def adjacent_coordinates(x: int, y: int, width: int, height: int) -> List[Coord]:
    """Orthogonal in-bounds neighbors: right, left, down, up."""
    candidates = [(x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)]
    return [(nx, ny) for nx, ny in candidates if is_in_bounds(nx, ny, width, height)]


def diagonal_coordinates(x: int, y: int, width: int, height: int) -> List[Coord]:
    """Diagonal in-bounds neighbors. Only used by the territorial heuristic."""
    candidates = [(x - 1, y - 1), (x + 1, y - 1), (x - 1, y + 1), (x + 1, y + 1)]
    return [(nx, ny) for nx, ny in candidates if is_in_bounds(nx, ny, width, height)]


def adjacent_player_cells(state: BoardState, player: int, x: int, y: int) -> List[Coord]:
    """Orthogonal neighbors of (x, y) owned by player."""
    owned = state.cells(player)
    return [c for c in adjacent_coordinates(x, y, state.width, state.height) if position_key(*c) in owned]
