"""
main.py — Graph Algorithm Engine Flask App
============================================
JSON API in front of the engine.  Presentation (SVG, force layout,
charts) lives in the browser; every response here is plain data.

Routes:
  GET  /api/topologies          – the twelve generator names
  GET  /api/algorithms          – registry metadata (+ pseudocode), ?tag= filters
  POST /api/graph/generate      – generate a graph of one topology
  POST /api/benchmark           – time all six algorithms over node counts
  POST /api/step/start          – open a step session (BFS / Prim / Dijkstra)
  POST /api/step/next           – advance one unit
  POST /api/step/play           – phase → running
  POST /api/step/pause          – phase → paused
  POST /api/step/reset          – back to ready, new generation
  POST /api/step/speed          – preset or seconds per tick
  GET  /api/step/<session>      – current snapshot
  DELETE /api/step/<session>    – discard a session

State management:
  Step sessions live in an in-memory dict keyed by a random token.  The
  dict is guarded by one lock; each engine by its own lock, so two
  browser tabs never interleave steps on the same session.  At most
  `max_sessions` are kept; opening one more evicts the least recently
  used.

Errors:
  GraphEngineError → 400 {"error", "type"}; unknown session → 404.
"""

import logging
import secrets
import threading
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Optional

from flask import Flask, jsonify, request

from config import Settings
from graph import (
    GeneratorParams,
    Graph,
    GraphEngineError,
    InvalidParameter,
    generate,
    generate_random_connected,
    list_topologies,
)
from algorithms import algorithms_by_tag, list_algorithms, steppable_algorithms
from benchmark import BenchmarkHarness, group_series
from engine import KEEP, StepEngine

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["SETTINGS"] = Settings.from_env()


# ---------------------------------------------------------------------------
# Session store
# ---------------------------------------------------------------------------
class SessionNotFound(LookupError):
    pass


@dataclass
class _Session:
    engine: StepEngine
    lock:   threading.Lock = field(default_factory=threading.Lock)


_SESSIONS: "OrderedDict[str, _Session]" = OrderedDict()
_SESSIONS_LOCK = threading.Lock()


def _get_session(session_id) -> _Session:
    with _SESSIONS_LOCK:
        sess = _SESSIONS.get(session_id)
        if sess is not None:
            _SESSIONS.move_to_end(session_id)
    if sess is None:
        raise SessionNotFound(f"Unknown step session {session_id!r}")
    return sess


def _add_session(engine: StepEngine) -> str:
    session_id = secrets.token_hex(8)
    limit = max(1, settings().max_sessions)
    with _SESSIONS_LOCK:
        while len(_SESSIONS) >= limit:
            evicted, _ = _SESSIONS.popitem(last=False)
            logger.info("Evicted step session %s (limit %d)", evicted, limit)
        _SESSIONS[session_id] = _Session(engine)
    return session_id


# ---------------------------------------------------------------------------
# Request helpers
# ---------------------------------------------------------------------------
def settings() -> Settings:
    return app.config["SETTINGS"]


def _payload() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _int_field(data: dict, name: str, default=None) -> Optional[int]:
    value = data.get(name, default)
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidParameter(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidParameter(f"{name} must be an integer, got {value!r}")


def _bool_field(data: dict, name: str, default: bool) -> bool:
    value = data.get(name, default)
    if not isinstance(value, bool):
        raise InvalidParameter(f"{name} must be true or false, got {value!r}")
    return value


def _check_size(n: int) -> None:
    limit = settings().max_nodes
    if n > limit:
        raise InvalidParameter(f"At most {limit} nodes are allowed, got {n}")


def _graph_field(data: dict) -> Optional[Graph]:
    """The request's inline graph, size-checked before it is built."""
    raw = data.get("graph")
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise InvalidParameter(f"graph must be an object, got {raw!r}")
    return Graph.from_dict(raw, max_nodes=settings().max_nodes)


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------
@app.errorhandler(GraphEngineError)
def handle_engine_error(exc):
    logger.info("Rejected %s %s: %s", request.method, request.path, exc)
    return jsonify({"error": str(exc), "type": type(exc).__name__}), 400


@app.errorhandler(SessionNotFound)
def handle_missing_session(exc):
    return jsonify({"error": str(exc), "type": type(exc).__name__}), 404


# ---------------------------------------------------------------------------
# API: Catalogue
# ---------------------------------------------------------------------------
@app.route("/api/topologies")
def api_topologies():
    return jsonify({"topologies": list_topologies()})


@app.route("/api/algorithms")
def api_algorithms():
    tag = request.args.get("tag")
    algos = algorithms_by_tag(tag) if tag else list_algorithms()
    return jsonify({
        "algorithms": [a.to_dict() for a in algos],
        "steppable":  [a.key for a in steppable_algorithms()],
    })


# ---------------------------------------------------------------------------
# API: Graph Generation
# ---------------------------------------------------------------------------
@app.route("/api/graph/generate", methods=["POST"])
def api_graph_generate():
    data = _payload()
    n = _int_field(data, "nodes", 10)
    _check_size(n)

    graph = generate(
        data.get("topology", "Simple"),
        n,
        _bool_field(data, "weighted", True),
        GeneratorParams.from_dict(data.get("params")),
        seed=_int_field(data, "seed", settings().seed),
    )
    body = graph.to_dict()
    body["components"] = graph.components()
    return jsonify(body)


# ---------------------------------------------------------------------------
# API: Benchmark
# ---------------------------------------------------------------------------
@app.route("/api/benchmark", methods=["POST"])
def api_benchmark():
    data = _payload()
    counts = data.get("node_counts") or list(settings().node_counts)
    if not isinstance(counts, list):
        raise InvalidParameter(f"node_counts must be a list, got {counts!r}")
    counts = [_int_field({"node_count": c}, "node_count") for c in counts]
    for n in counts:
        _check_size(n)

    harness = BenchmarkHarness(
        seed=_int_field(data, "seed", settings().seed),
        params=GeneratorParams.from_dict(data.get("params")),
    )
    report = harness.run(data.get("topology", "Complete"), counts, _bool_field(data, "weighted", True))

    body = report.to_dict()
    body["series"] = {
        title: {label: [list(p) for p in points] for label, points in pair.items()}
        for title, pair in group_series(report.records).items()
    }
    return jsonify(body)


# ---------------------------------------------------------------------------
# API: Step Sessions
# ---------------------------------------------------------------------------
@app.route("/api/step/start", methods=["POST"])
def api_step_start():
    data = _payload()
    graph = _graph_field(data)
    if graph is None:
        n = _int_field(data, "nodes", 10)
        _check_size(n)
        density = data.get("density", 0.2)
        graph = generate_random_connected(
            n,
            density,
            _bool_field(data, "weighted", True),
            seed=_int_field(data, "seed", settings().seed),
        )

    engine = StepEngine(
        data.get("algorithm", "bfs"),
        graph,
        _int_field(data, "source", 0),
        _int_field(data, "target"),
    )
    session_id = _add_session(engine)
    logger.info("Opened step session %s (%s, %d nodes)", session_id, engine.algorithm, graph.node_count())

    return jsonify({
        "session":  session_id,
        "graph":    graph.to_dict(),
        "snapshot": engine.snapshot(),
    })


@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    data = _payload()
    sess = _get_session(data.get("session"))
    generation = _int_field(data, "generation")
    with sess.lock:
        stale = generation is not None and generation != sess.engine.generation
        result = sess.engine.step(generation)
        snapshot = sess.engine.snapshot()
    return jsonify({
        "events":   [e.to_dict() for e in result.events],
        "finished": result.finished,
        "stale":    stale,
        "snapshot": snapshot,
    })


@app.route("/api/step/play", methods=["POST"])
def api_step_play():
    sess = _get_session(_payload().get("session"))
    with sess.lock:
        sess.engine.play()
        return jsonify(sess.engine.snapshot())


@app.route("/api/step/pause", methods=["POST"])
def api_step_pause():
    sess = _get_session(_payload().get("session"))
    with sess.lock:
        sess.engine.pause()
        return jsonify(sess.engine.snapshot())


@app.route("/api/step/reset", methods=["POST"])
def api_step_reset():
    data = _payload()
    sess = _get_session(data.get("session"))
    graph = _graph_field(data)
    with sess.lock:
        sess.engine.reset(
            graph=graph,
            source=_int_field(data, "source"),
            target=_int_field(data, "target") if "target" in data else KEEP,
            algorithm=data.get("algorithm"),
        )
        return jsonify(sess.engine.snapshot())


@app.route("/api/step/speed", methods=["POST"])
def api_step_speed():
    data = _payload()
    sess = _get_session(data.get("session"))
    with sess.lock:
        if "seconds" in data:
            try:
                seconds = float(data["seconds"])
            except (TypeError, ValueError):
                raise InvalidParameter(f"seconds must be a number, got {data['seconds']!r}")
            sess.engine.set_speed_value(seconds)
        else:
            sess.engine.set_speed(data.get("preset", "medium"))
        return jsonify(sess.engine.snapshot())


@app.route("/api/step/<session_id>", methods=["GET"])
def api_step_snapshot(session_id):
    sess = _get_session(session_id)
    with sess.lock:
        return jsonify(sess.engine.snapshot())


@app.route("/api/step/<session_id>", methods=["DELETE"])
def api_step_discard(session_id):
    with _SESSIONS_LOCK:
        sess = _SESSIONS.pop(session_id, None)
    if sess is None:
        raise SessionNotFound(f"Unknown step session {session_id!r}")
    return jsonify({"discarded": session_id})


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    cfg = settings()
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Graph Algorithm Engine listening on http://%s:%d", cfg.host, cfg.port)
    app.run(debug=cfg.debug, host=cfg.host, port=cfg.port)
