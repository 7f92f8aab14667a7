from __future__ import annotations

# Facade module that re-exports the Cell Extension core.
# Used by the Flask app, the tests and as the CLI entry point.
# Single-responsibility modules live under cellext_core/*.

from cellext_core.board import (  # noqa: F401
    BoardState,
    Coord,
    PositionKey,
    position_key,
    parse_position_key,
    opponent,
    create,
    from_cells,
    is_in_bounds,
    is_occupied,
    is_occupied_by,
    place,
    available_cells,
    total_cells,
    progress,
    adjacent_coordinates,
    diagonal_coordinates,
    adjacent_player_cells,
)
from cellext_core.components import Component, connected_components  # noqa: F401
from cellext_core.scoring import (  # noqa: F401
    ScoringMechanism,
    score,
    scores,
    component_metric,
    directed_edge_count,
    unique_edge_count,
)
from cellext_core.evaluate import evaluate  # noqa: F401
from cellext_core.search import (  # noqa: F401
    DEFAULT_DEPTH,
    SearchStats,
    TieBreaker,
    territorial_move,
    greedy_move,
    minimax,
    minimax_root,
    minimax_move,
)
from cellext_core.state import AISettings, Difficulty, GameState  # noqa: F401
from cellext_core.ai import choose_move  # noqa: F401
from cellext_core.session import (  # noqa: F401
    Session,
    Snapshot,
    new_session,
    play,
    undo,
    last_move,
    is_over,
    winner,
    ai_turn,
)


def main() -> None:
    # CLI driver delegated to cellext_core.cli
    from cellext_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
