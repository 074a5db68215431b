"""
main.py — Shortest-Path Visualizer JSON API
============================================
Thin Flask layer over the core.  A viewer builds a graph, runs one of the
engines, then drives playback and polls the current state.

Routes:
  GET  /api/algorithms     – registered engines
  POST /api/graph          – replace the graph  {directed, nodes, edges}
  GET  /api/graph          – current graph
  POST /api/run            – run an engine and load it  {algorithm, source, target}
  POST /api/step/next      – advance one step
  POST /api/step/prev      – rewind one step
  POST /api/step/goto      – jump to step N  {index}
  POST /api/play           – start automatic playback
  POST /api/pause          – pause automatic playback
  POST /api/stop           – rewind to step 0, stopped
  POST /api/speed          – set speed multiplier  {speed}
  GET  /api/state          – playback state + current step

State management:
  One Graph and one Stepper per application instance, in memory only.
  Invalid input (ValueError anywhere in the core) becomes a 400 response.
"""

import logging

from flask import Flask, jsonify, request

import config
from graph import Graph
from algorithms import list_algorithms, run_algorithm
from playback import Stepper

logger = logging.getLogger(__name__)


def build_graph(data: dict) -> Graph:
    """Graph from a plain {directed, nodes: [...], edges: [...]} payload."""
    g = Graph(directed=bool(data.get("directed", True)))
    for nd in data.get("nodes", []):
        g.create_node(nd["id"], x=nd.get("x", 0.0), y=nd.get("y", 0.0), label=nd.get("label"))
    for ed in data.get("edges", []):
        g.create_edge(ed["source"], ed["target"], weight=ed.get("weight", 1.0))
    return g


def create_app(stepper: Stepper = None) -> Flask:
    app = Flask(__name__)

    graph_holder = {"graph": Graph()}
    player       = stepper or Stepper()
    app.extensions["stepper"] = player

    def snapshot():
        step = player.current_step
        return {
            "state":  player.state.to_dict(),
            "step":   step.to_dict() if step else None,
            "result": player.result.to_dict() if player.result else None,
        }

    def body() -> dict:
        return request.get_json(silent=True) or {}

    @app.errorhandler(ValueError)
    def handle_value_error(err):
        logger.info("rejected request to %s: %s", request.path, err)
        return jsonify({"error": str(err)}), 400

    @app.errorhandler(KeyError)
    def handle_key_error(err):
        return jsonify({"error": f"missing field {err}"}), 400

    # ------------------------------------------------------------------
    # Graph & algorithms
    # ------------------------------------------------------------------
    @app.route("/api/algorithms")
    def api_algorithms():
        return jsonify([info.to_dict() for info in list_algorithms()])

    @app.route("/api/graph", methods=["POST"])
    def api_graph_set():
        graph_holder["graph"] = build_graph(body())
        return jsonify(graph_holder["graph"].to_dict())

    @app.route("/api/graph")
    def api_graph_get():
        return jsonify(graph_holder["graph"].to_dict())

    @app.route("/api/run", methods=["POST"])
    def api_run():
        data   = body()
        key    = data.get("algorithm", "dijkstra")
        result = run_algorithm(key, graph_holder["graph"], data.get("source"), data.get("target"))
        player.load(result)
        logger.info("ran %s", result)
        return jsonify(snapshot())

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------
    @app.route("/api/step/next", methods=["POST"])
    def api_step_next():
        player.step_forward()
        return jsonify(snapshot())

    @app.route("/api/step/prev", methods=["POST"])
    def api_step_prev():
        player.step_backward()
        return jsonify(snapshot())

    @app.route("/api/step/goto", methods=["POST"])
    def api_step_goto():
        index = body().get("index")
        if isinstance(index, bool) or not isinstance(index, int):
            raise ValueError("index must be an integer")
        player.goto_step(index)
        return jsonify(snapshot())

    @app.route("/api/play", methods=["POST"])
    def api_play():
        player.play()
        return jsonify(snapshot())

    @app.route("/api/pause", methods=["POST"])
    def api_pause():
        player.pause()
        return jsonify(snapshot())

    @app.route("/api/stop", methods=["POST"])
    def api_stop():
        player.stop()
        return jsonify(snapshot())

    @app.route("/api/speed", methods=["POST"])
    def api_speed():
        player.set_speed(body().get("speed"))
        return jsonify(snapshot())

    @app.route("/api/state")
    def api_state():
        return jsonify(snapshot())

    return app


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    logger.info("Starting shortest-path visualizer API on http://localhost:5000")
    create_app().run(debug=False, host="0.0.0.0", port=5000)
