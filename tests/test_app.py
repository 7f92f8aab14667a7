import json
import unittest

from app import app as flask_app


def _post(client, path, payload):
    return client.post(path, data=json.dumps(payload), content_type="application/json")


class TestFlaskAPI(unittest.TestCase):
    def setUp(self):
        self.client = flask_app.test_client()

    def _new(self, **body):
        r = _post(self.client, "/api/new", body)
        self.assertEqual(r.status_code, 200)
        return r.get_json()

    def test_given_size_and_mechanism_when_new_game_then_empty_state(self):
        data = self._new(size=4, mechanism="cell-extension", firstPlayer="ai")
        self.assertTrue(data["ok"])
        state = data["state"]
        self.assertEqual((state["width"], state["height"]), (4, 4))
        self.assertEqual(state["mechanism"], "extension")
        self.assertEqual(state["turn"], 1)
        self.assertEqual(state["cells"], [[], []])
        self.assertEqual(len(data["availableCells"]), 16)

    def test_given_bad_options_when_new_game_then_400(self):
        r = _post(self.client, "/api/new", {"size": 4, "mechanism": "addition"})
        self.assertEqual(r.status_code, 400)
        self.assertFalse(r.get_json()["ok"])
        r = _post(self.client, "/api/new", {"size": 0})
        self.assertEqual(r.status_code, 400)
        r = _post(self.client, "/api/new", {"size": 300})
        self.assertEqual(r.status_code, 400)
        r = _post(self.client, "/api/new", {"size": 7})
        self.assertEqual(r.status_code, 400)

    def test_given_legal_move_when_posting_then_state_advances(self):
        state = self._new(size=4)["state"]
        r = _post(self.client, "/api/move", {"state": state, "move": [1, 2]})
        self.assertEqual(r.status_code, 200)
        data = r.get_json()
        self.assertEqual(data["state"]["cells"], [[[1, 2]], []])
        self.assertEqual(data["state"]["turn"], 1)
        self.assertEqual(data["state"]["scores"], [1, 0])
        self.assertEqual(len(data["state"]["history"]), 1)
        self.assertNotIn([1, 2], data["availableCells"])
        self.assertFalse(data["over"])

    def test_given_occupied_cell_when_posting_move_then_400_with_free_cells(self):
        state = self._new(size=4)["state"]
        state = _post(self.client, "/api/move", {"state": state, "move": [0, 0]}).get_json()["state"]
        r = _post(self.client, "/api/move", {"state": state, "move": [0, 0]})
        self.assertEqual(r.status_code, 400)
        data = r.get_json()
        self.assertEqual(data["error"], "Illegal move")
        self.assertEqual(len(data["availableCells"]), 15)

    def test_given_state_when_ai_moves_then_move_is_applied(self):
        state = self._new(size=4)["state"]
        state = _post(self.client, "/api/move", {"state": state, "move": [0, 0]}).get_json()["state"]
        r = _post(self.client, "/api/ai", {
            "state": state,
            "settings": {"aiDifficulty": "hard", "scoringMechanism": "multiplication"},
            "seed": 4,
        })
        self.assertEqual(r.status_code, 200)
        data = r.get_json()
        self.assertIn(data["move"], [c for c in _free(state)])
        self.assertEqual(data["state"]["cells"][1], [data["move"]])
        self.assertEqual(data["state"]["turn"], 0)

    def test_given_full_board_when_ai_moves_then_409(self):
        state = {"width": 2, "height": 1, "cells": [[[0, 0]], [[1, 0]]], "mechanism": "multiplication", "turn": 0}
        r = _post(self.client, "/api/ai", {"state": state})
        self.assertEqual(r.status_code, 409)
        self.assertIsNone(r.get_json()["winner"])

    def test_given_history_when_undoing_then_previous_state_returned(self):
        state = self._new(size=4)["state"]
        moved = _post(self.client, "/api/move", {"state": state, "move": [3, 3]}).get_json()["state"]
        r = _post(self.client, "/api/undo", {"state": moved})
        self.assertEqual(r.status_code, 200)
        back = r.get_json()["state"]
        self.assertEqual(back["cells"], [[], []])
        self.assertEqual(back["turn"], 0)
        self.assertEqual(back["history"], [])
        self.assertEqual(back["scoreHistory"], [[0], [0]])

    def test_given_line_when_scoring_then_components_and_scores(self):
        state = {
            "width": 4, "height": 4, "mechanism": "connection", "turn": 0,
            "cells": [[[0, 0], [1, 0], [2, 0]], [[3, 3]]],
        }
        r = _post(self.client, "/api/score", {"state": state})
        self.assertEqual(r.status_code, 200)
        data = r.get_json()
        self.assertEqual(data["scores"], [4, 1])
        self.assertEqual(data["components"], [[[[0, 0], [1, 0], [2, 0]]], [[[3, 3]]]])
        self.assertEqual(len(data["evaluation"]), 2)

    def test_given_malformed_state_when_posting_then_400(self):
        bad_states = [
            None,
            {"height": 3},
            {"width": 3, "height": 3, "cells": [[[5, 5]], []]},
            {"width": 3, "height": 3, "cells": [[[0, 0]], [[0, 0]]]},
            {"width": 3, "height": 3, "cells": [[]]},
            {"width": 3, "height": 3, "cells": [[], []], "turn": 3},
            {"width": 3, "height": 3, "cells": [[[1.7, 0]], []]},
            {"width": 3, "height": 3, "cells": [[[True, 0]], []]},
        ]
        for bad in bad_states:
            r = _post(self.client, "/api/move", {"state": bad, "move": [0, 0]})
            self.assertEqual(r.status_code, 400, bad)
            self.assertFalse(r.get_json()["ok"])

    def test_given_bad_depth_when_ai_moves_then_400(self):
        state = self._new(size=4)["state"]
        r = _post(self.client, "/api/ai", {"state": state, "settings": {"aiDifficulty": "hard", "searchDepth": 0}})
        self.assertEqual(r.status_code, 400)


    def test_given_bad_seed_when_ai_moves_then_400(self):
        state = self._new(size=4)["state"]
        for seed in ([1, 2], {"a": 1}, 1.5, True, "7"):
            r = _post(self.client, "/api/ai", {"state": state, "seed": seed})
            self.assertEqual(r.status_code, 400, seed)
            self.assertFalse(r.get_json()["ok"])

    def test_given_fractional_move_when_posting_then_400(self):
        state = self._new(size=4)["state"]
        r = _post(self.client, "/api/move", {"state": state, "move": [1.7, 0]})
        self.assertEqual(r.status_code, 400)

    def test_given_bad_history_turn_when_undoing_then_400(self):
        state = self._new(size=4)["state"]
        state["history"] = [{"cells": [[], []], "scores": [0, 0], "turn": 7}]
        r = _post(self.client, "/api/undo", {"state": state})
        self.assertEqual(r.status_code, 400)
        self.assertFalse(r.get_json()["ok"])

    def test_given_forged_history_scores_when_undoing_then_scores_recomputed(self):
        state = self._new(size=4, mechanism="multiplication")["state"]
        state = _post(self.client, "/api/move", {"state": state, "move": [0, 0]}).get_json()["state"]
        state = _post(self.client, "/api/move", {"state": state, "move": [3, 3]}).get_json()["state"]
        state["history"][1]["scores"] = [99, 99]
        state.pop("scoreHistory")
        r = _post(self.client, "/api/undo", {"state": state})
        self.assertEqual(r.status_code, 200)
        back = r.get_json()["state"]
        self.assertEqual(back["cells"], [[[0, 0]], []])
        self.assertEqual(back["scores"], [1, 0])
        self.assertEqual(back["turn"], 1)


def _free(state):
    taken = {tuple(c) for cells in state["cells"] for c in cells}
    return [[x, y] for x in range(state["width"]) for y in range(state["height"]) if (x, y) not in taken]


if __name__ == "__main__":
    unittest.main()
