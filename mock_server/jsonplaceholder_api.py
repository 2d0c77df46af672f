from __future__ import annotations

import json
import os
import time
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

FIXTURES_DIR = Path(__file__).parent / "fixtures"
ROUTES = ("posts", "users")

_lock = Lock()


def _env_int(name: str, default: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _load_fixture(route: str) -> Any:
    path = FIXTURES_DIR / f"mock_{route}.json"
    return json.loads(path.read_text(encoding="utf-8"))


# Per-route stubs: {"status_code": int, "body": Any, "delay_ms": int}
STATE: Dict[str, Any] = {
    "stubs": {},
    "hits": {route: 0 for route in ROUTES},
    "default_delay_ms": _env_int("MOCK_API_DELAY_MS", default=0),
}


def _handle_health() -> Tuple[int, Any]:
    return 200, {"status": "ok"}


def _handle_resource(route: str) -> Tuple[int, Any, int]:
    with _lock:
        STATE["hits"][route] += 1
        stub = STATE["stubs"].get(route)
        default_delay = STATE["default_delay_ms"]

    if stub is None:
        return 200, _load_fixture(route), default_delay

    body = stub["body"] if "body" in stub else _load_fixture(route)
    return stub["status_code"], body, stub["delay_ms"]


def _handle_stub(body: Dict[str, Any]) -> Tuple[int, Dict[str, Any]]:
    route = body.get("route")
    if route not in ROUTES:
        return 400, {"error": f"`route` must be one of: {', '.join(ROUTES)}"}

    status_code = body.get("status_code", 200)
    if isinstance(status_code, bool) or not isinstance(status_code, int) or not 100 <= status_code <= 599:
        return 400, {"error": "`status_code` must be an integer HTTP status"}

    delay_ms = body.get("delay_ms", 0)
    if isinstance(delay_ms, bool) or not isinstance(delay_ms, int) or delay_ms < 0:
        return 400, {"error": "`delay_ms` must be a non-negative integer"}

    stub: Dict[str, Any] = {"status_code": status_code, "delay_ms": delay_ms}
    if "body" in body:
        stub["body"] = body["body"]

    with _lock:
        STATE["stubs"][route] = stub

    return 200, {"status": "stubbed", "route": route, "stub": stub}


def _handle_reset() -> Tuple[int, Dict[str, Any]]:
    with _lock:
        STATE["stubs"] = {}
        STATE["hits"] = {route: 0 for route in ROUTES}
        return 200, {"status": "reset"}


def _handle_hits(route: Optional[str]) -> Tuple[int, Dict[str, Any]]:
    with _lock:
        if route:
            if route not in STATE["hits"]:
                return 404, {"error": f"Route {route} not found"}
            return 200, {"hits": {route: STATE["hits"][route]}}
        return 200, {"hits": dict(STATE["hits"])}


app = Flask(__name__)


@app.get("/health")
def health() -> Any:
    status, payload = _handle_health()
    return jsonify(payload), status


@app.get("/posts")
def posts() -> Any:
    status, payload, delay_ms = _handle_resource("posts")
    if delay_ms:
        time.sleep(delay_ms / 1000)
    return jsonify(payload), status


@app.get("/users")
def users() -> Any:
    status, payload, delay_ms = _handle_resource("users")
    if delay_ms:
        time.sleep(delay_ms / 1000)
    return jsonify(payload), status


@app.get("/__hits")
def hits() -> Any:
    status, payload = _handle_hits(request.args.get("route"))
    return jsonify(payload), status


@app.post("/__stub")
def stub() -> Any:
    body = request.get_json(silent=True) or {}
    status, payload = _handle_stub(body)
    return jsonify(payload), status


@app.post("/__reset")
def reset() -> Any:
    status, payload = _handle_reset()
    return jsonify(payload), status


if __name__ == "__main__":
    host = os.getenv("MOCK_API_HOST", "127.0.0.1")
    port = _env_int("MOCK_API_PORT", default=5000)
    app.run(host=host, port=port, debug=False, threaded=True)
