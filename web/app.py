"""Letter Boxed web application: Flask backend around a SolverSession."""
from __future__ import annotations

import sys
import threading
import time
from pathlib import Path

# Ensure project root is on sys.path so `letterbox.*` imports work
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from flask import Flask, jsonify, request

from letterbox.board import BoardError, sides_from_spec
from letterbox.constants import DEFAULT_MAX_SOLUTIONS
from letterbox.dictionary import load_default_dictionary
from letterbox.session import SolveCancelled, SolveInProgress, SolverSession

app = Flask(__name__)

# Created on first use so importing the app doesn't require data/ to exist
SESSION: SolverSession | None = None
_session_lock = threading.Lock()


def get_session() -> SolverSession:
    global SESSION
    with _session_lock:
        if SESSION is None:
            SESSION = SolverSession(load_default_dictionary())
            print(f"Dictionary loaded: {SESSION.dictionary.word_count} words")
        return SESSION


def _parse_sides(raw: object) -> list[str]:
    """Accept a list of side strings or a single comma-separated string."""
    if isinstance(raw, str):
        return sides_from_spec(raw)
    if isinstance(raw, list) and all(isinstance(s, str) for s in raw):
        return [s.strip().lower() for s in raw]
    raise BoardError("sides must be a list of strings or a comma-separated string")


@app.route("/")
def index():
    session = get_session()
    return jsonify({
        "words": session.dictionary.word_count,
        "solving": session.is_solving,
    })


@app.route("/solve", methods=["POST"])
def solve_route():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400
    try:
        sides = _parse_sides(data.get("sides", []))
        max_solutions = int(data.get("max_solutions", DEFAULT_MAX_SOLUTIONS))
    except BoardError as e:
        return jsonify({"error": str(e)}), 400
    except (TypeError, ValueError):
        return jsonify({"error": "max_solutions must be an integer"}), 400
    if max_solutions < 1:
        return jsonify({"error": "max_solutions must be at least 1"}), 400

    session = get_session()
    start = time.time()
    try:
        solutions = session.solve(sides, max_solutions)
    except BoardError as e:
        return jsonify({"error": str(e)}), 400
    except SolveInProgress as e:
        return jsonify({"error": str(e)}), 409
    except SolveCancelled:
        return jsonify({"error": "Cancelled", "cancelled": True}), 200

    return jsonify({
        "solutions": solutions,
        "count": len(solutions),
        "duration": round(time.time() - start, 3),
    })


@app.route("/cancel", methods=["POST"])
def cancel():
    return jsonify({"cancelled": get_session().cancel_current()})


if __name__ == "__main__":
    get_session()
    app.run(debug=True, host="0.0.0.0", port=8080, threaded=True)
