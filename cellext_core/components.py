from __future__ import annotations

from typing import FrozenSet, List, Set

from .board import BoardState, PositionKey, adjacent_coordinates

Component = FrozenSet[PositionKey]


def connected_components(state: BoardState, player: int) -> List[Component]:
    """
    Splits a player's cells into maximal orthogonally connected groups.
    Uses an explicit stack so large boards do not hit the recursion limit.
    """
    owned = state.cells(player)
    if not owned:
        return []
    visited: Set[PositionKey] = set()
    components: List[Component] = []
    for seed in sorted(owned):
        if seed in visited:
            continue
        visited.add(seed)
        stack = [seed]
        members: Set[PositionKey] = set()
        while stack:
            current = stack.pop()
            members.add(current)
            for neighbor in adjacent_coordinates(current[0], current[1], state.width, state.height):
                if neighbor in owned and neighbor not in visited:
                    visited.add(neighbor)
                    stack.append(neighbor)
        components.append(frozenset(members))
    return components
