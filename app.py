from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, jsonify, request

from cellext_core.config import BOARD_SIZES, configure_logging, load_config
from game import (
    AISettings,
    BoardState,
    Difficulty,
    ScoringMechanism,
    Session,
    Snapshot,
    ai_turn,
    available_cells,
    connected_components,
    evaluate,
    from_cells,
    is_over,
    last_move,
    new_session,
    play,
    scores,
    undo,
    winner,
)

CONFIG = load_config()

app = Flask(__name__)
logger = logging.getLogger(__name__)


class InvalidRequest(ValueError):
    pass


def _cells_to_json(board: BoardState) -> List[List[List[int]]]:
    return [[[int(x), int(y)] for (x, y) in sorted(board.cells(p))] for p in (0, 1)]


def _session_to_json(s: Session) -> Dict[str, Any]:
    return {
        "width": int(s.board.width),
        "height": int(s.board.height),
        "cells": _cells_to_json(s.board),
        "mechanism": s.mechanism.value,
        "turn": int(s.turn),
        "scores": [int(s.scores[0]), int(s.scores[1])],
        "scoreHistory": [list(s.score_history[0]), list(s.score_history[1])],
        "history": [
            {"cells": _cells_to_json(h.board), "scores": list(h.scores), "turn": int(h.turn)}
            for h in s.history
        ],
    }


def _strict_int(value: Any, what: str) -> int:
    # bool is an int subclass; floats would be truncated by int()
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRequest(f"{what} must be an integer, got {value!r}")
    return value


def _player(value: Any, what: str) -> int:
    player = int(value)
    if player not in (0, 1):
        raise InvalidRequest(f"{what} must be 0 or 1, got {player}")
    return player


def _board_from_json(width: int, height: int, cells: Any) -> BoardState:
    if not isinstance(cells, list) or len(cells) != 2:
        raise InvalidRequest("cells must hold one list per player")
    parsed: List[List[Tuple[int, int]]] = []
    for player_cells in cells:
        parsed.append([(_strict_int(x, "x"), _strict_int(y, "y")) for x, y in player_cells])
    return from_cells(width, height, parsed[0], parsed[1])


def _snapshot_from_json(width: int, height: int, mechanism: ScoringMechanism, obj: Any) -> Snapshot:
    """Scores are recomputed from the snapshot board rather than taken from the client."""
    if not isinstance(obj, dict):
        raise InvalidRequest("history entries must be objects")
    board = _board_from_json(width, height, obj["cells"])
    return Snapshot(board=board, scores=scores(board, mechanism), turn=_player(obj["turn"], "history turn"))


def _json_to_session(obj: Any) -> Session:
    if not isinstance(obj, dict):
        raise InvalidRequest("state required")
    try:
        width = int(obj["width"])
        height = int(obj["height"])
        board = _board_from_json(width, height, obj.get("cells", [[], []]))
        mechanism = ScoringMechanism.parse(obj.get("mechanism", CONFIG.mechanism.value))
        turn = _player(obj.get("turn", 0), "turn")
        history = tuple(_snapshot_from_json(width, height, mechanism, h) for h in obj.get("history", []))
        current = scores(board, mechanism)
        sh = obj.get("scoreHistory")
        if sh:
            score_history = (tuple(int(v) for v in sh[0]), tuple(int(v) for v in sh[1]))
        else:
            past = [h.scores for h in history] + [current]
            score_history = (tuple(p[0] for p in past), tuple(p[1] for p in past))
    except (KeyError, IndexError, TypeError) as e:
        raise InvalidRequest(f"bad state: {e}") from e
    return Session(
        board=board,
        mechanism=mechanism,
        turn=turn,
        scores=current,
        score_history=score_history,
        history=history,
    )


def _settings_from_json(obj: Any, session: Session) -> AISettings:
    obj = obj if isinstance(obj, dict) else {}
    depth = int(obj.get("searchDepth", CONFIG.search_depth))
    if depth < 1:
        raise InvalidRequest(f"searchDepth must be at least 1, got {depth}")
    return AISettings(
        ai_difficulty=Difficulty.parse(obj.get("aiDifficulty", CONFIG.difficulty.value)),
        scoring_mechanism=ScoringMechanism.parse(obj.get("scoringMechanism", session.mechanism.value)),
        search_depth=depth,
    )


def _ok(s: Session, **extra: Any) -> Any:
    body: Dict[str, Any] = {
        "ok": True,
        "state": _session_to_json(s),
        "availableCells": [[x, y] for (x, y) in available_cells(s.board)],
    }
    body.update(extra)
    return jsonify(body)


def _error(message: str, status: int, **extra: Any) -> Any:
    body: Dict[str, Any] = {"ok": False, "error": message}
    body.update(extra)
    return jsonify(body), status


def _load_session(body: Dict[str, Any]) -> Session:
    try:
        return _json_to_session(body.get("state"))
    except ValueError as e:
        raise InvalidRequest(str(e)) from e


@app.errorhandler(InvalidRequest)
def _bad_request(e: InvalidRequest) -> Any:
    return _error(str(e), 400)


@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        size = int(body.get("size", CONFIG.board_size))
        if size not in BOARD_SIZES:
            raise InvalidRequest(f"size must be one of {BOARD_SIZES}, got {size}")
        mechanism = ScoringMechanism.parse(body.get("mechanism", CONFIG.mechanism.value))
        first = body.get("firstPlayer", 0)
        first_player = {"human": 0, "ai": 1}.get(first, first)
        session = new_session(size, mechanism=mechanism, first_player=int(first_player))
    except (TypeError, ValueError) as e:
        raise InvalidRequest(str(e)) from e
    return _ok(session)


@app.post("/api/move")
def api_move() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    session = _load_session(body)
    try:
        x, y = (_strict_int(v, "move") for v in body["move"])
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidRequest(f"move must be [x, y]: {e}") from e
    nxt = play(session, x, y)
    if nxt is None:
        return _error("Illegal move", 400, availableCells=[[cx, cy] for (cx, cy) in available_cells(session.board)])
    return _ok(nxt, winner=winner(nxt), over=is_over(nxt))


@app.post("/api/ai")
def api_ai() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    session = _load_session(body)
    try:
        settings = _settings_from_json(body.get("settings"), session)
    except (TypeError, ValueError) as e:
        raise InvalidRequest(str(e)) from e
    if is_over(session):
        return _error("Game is over", 409, winner=winner(session))
    seed: Optional[int] = body.get("seed")
    if seed is not None:
        seed = _strict_int(seed, "seed")
    nxt = ai_turn(session, settings, rng=random.Random(seed))
    move = last_move(nxt)
    logger.info("AI (%s) played %s", settings.ai_difficulty.value, move)
    return _ok(nxt, move=list(move) if move else None, winner=winner(nxt), over=is_over(nxt))


@app.post("/api/undo")
def api_undo() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    session = _load_session(body)
    try:
        plies = int(body.get("plies", 1))
    except (TypeError, ValueError) as e:
        raise InvalidRequest(f"plies must be an integer: {e}") from e
    return _ok(undo(session, plies))


@app.post("/api/score")
def api_score() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    session = _load_session(body)
    board = session.board
    components = [
        [[[x, y] for (x, y) in sorted(c)] for c in connected_components(board, p)]
        for p in (0, 1)
    ]
    return jsonify({
        "ok": True,
        "scores": list(session.scores),
        "components": components,
        "evaluation": [evaluate(board, p, session.mechanism) for p in (0, 1)],
    })


# Entrypoint for "python app.py"
if __name__ == "__main__":
    configure_logging(CONFIG.log_level)
    app.run(host="127.0.0.1", port=5000, debug=CONFIG.debug)
