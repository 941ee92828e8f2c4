from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify, request

# Ensure project root is importable when running this file directly
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from checkers import Difficulty, GameSession, MoveError
from checkers.config import CONFIG, Config


def _square(payload, key):
    value = payload.get(key)
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"'{key}' must be an [x, y] pair")
    return int(value[0]), int(value[1])


def create_app(config: Optional[Config] = None, session: Optional[GameSession] = None) -> Flask:
    config = config or CONFIG
    logging.basicConfig(level=config.log_level)

    app = Flask(__name__)
    session = session or GameSession(config)
    app.extensions["checkers_session"] = session

    @app.get("/api/state")
    def api_state():
        return jsonify(session.state())

    @app.post("/api/new")
    def api_new():
        data = request.get_json(silent=True) or {}
        rows = data.get("rows")
        try:
            session.reset(int(rows) if rows is not None else None)
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400
        return jsonify(session.state())

    @app.post("/api/click")
    def api_click():
        data = request.get_json(silent=True) or {}
        try:
            x, y = int(data["x"]), int(data["y"])
        except (KeyError, TypeError, ValueError):
            return jsonify({"error": "Missing or invalid x/y"}), 400
        changed = session.click(x, y)
        snap = session.state()
        snap["changed"] = changed
        return jsonify(snap)

    @app.post("/api/move")
    def api_move():
        payload = request.get_json(silent=True) or {}
        try:
            sx, sy = _square(payload, "from")
            tx, ty = _square(payload, "to")
            switched = session.move(sx, sy, tx, ty)
        except (MoveError, ValueError) as exc:
            return jsonify({"error": str(exc)}), 400
        snap = session.state()
        snap["turn_switched"] = switched
        return jsonify(snap)

    @app.post("/api/difficulty")
    def api_difficulty():
        data = request.get_json(silent=True) or {}
        try:
            session.set_difficulty(Difficulty(str(data.get("difficulty", "")).lower()))
        except ValueError:
            choices = ", ".join(d.value for d in Difficulty)
            return jsonify({"error": f"Difficulty must be one of: {choices}"}), 400
        return jsonify(session.state())

    @app.get("/api/moves")
    def api_moves():
        try:
            x = int(request.args["x"])
            y = int(request.args["y"])
        except (KeyError, ValueError):
            return jsonify({"error": "Missing or invalid x/y"}), 400
        with session.lock:
            moves = session.game.get_legal_moves(x, y)
            allowed = session.game.allowed_moves(x, y)
        return jsonify({
            "moves": [[m.x, m.y] for m in moves],
            "allowed": [
                {"to": [m.x, m.y], "capture": m.capture, "captured": list(m.captured) if m.captured else None}
                for m in allowed
            ],
        })

    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
