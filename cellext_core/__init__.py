"""
Cell Extension core Python package.

Pure game logic for the territory-claiming board game: board model,
component analysis, scoring and the AI opponent. Every function takes its
inputs explicitly and never mutates a board.
Modules:
- board.py: BoardState, Coord, placement and adjacency
- components.py: connected-component flood fill
- scoring.py: ScoringMechanism and the three scoring formulas
- evaluate.py: heuristic board evaluation
- search.py: territorial, greedy and minimax move selection
- ai.py: choose_move, the AI entry point
- session.py: turns, scores and undo for a running game
- config.py: CELLEXT_* environment settings and logging setup
- cli.py: command-line self-play, human-vs-AI and two-player games
"""
