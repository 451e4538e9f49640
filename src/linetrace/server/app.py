"""linetrace.server.app - Flask app factory and JSON API routes.

This is a THIN wrapper: selection, modes and lifecycle events are
forwarded to the AnalysisSession, which owns all state.

State pattern:
    _state = {"session": session, "config": config}

The session is replaced by ``POST /api/reanalyze``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from flask import Flask, jsonify, request
from flask_cors import CORS

from linetrace.graph.categories import Category
from linetrace.graph.query import Depth, Direction
from linetrace.graph.serialize import graph_summary, serialize_graph
from linetrace.html.generator import GraphViewGenerator
from linetrace.session import AnalysisSession, Origin

logger = logging.getLogger(__name__)


def _error(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


def _parse_line(value: Any) -> int | None:
    """Accept non-negative ints (bools excluded); None if invalid."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return None
    return value


def create_app(session: AnalysisSession, config: dict[str, Any] | None = None) -> Flask:
    """Create the Flask application with the JSON API routes.

    Args:
        session: Session over the analyzed file.
        config: linetrace configuration dict.

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)
    CORS(app)

    @app.after_request
    def _no_cache(response):
        response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
        return response

    _state: dict[str, Any] = {
        "session": session,
        "config": config if config is not None else session.config,
    }

    def _session() -> AnalysisSession:
        return _state["session"]

    def _result_payload(result) -> dict[str, Any]:
        s = _session()
        payload: dict[str, Any] = {"status": s.status()}
        if result is not None:
            payload["result"] = result.to_message()
            payload["sequence"] = result.sequence
            payload["out_of_range"] = result.out_of_range
        return payload

    # ─────────────────────────────────────────────────────────────────
    # Page and read-only endpoints
    # ─────────────────────────────────────────────────────────────────

    @app.route("/")
    def index():
        """Serve the graph page in live mode."""
        s = _session()
        if s.closed:
            return _error("no graph available", 404)
        gen = GraphViewGenerator(s.graph)
        return gen.generate(live=True, enabled=s.category_filter)

    @app.route("/api/graph")
    def api_graph():
        """GET /api/graph - Element JSON of the graph."""
        s = _session()
        if s.closed:
            return _error("no graph available", 404)
        return jsonify(serialize_graph(s.graph))

    @app.route("/api/status")
    def api_status():
        """GET /api/status - Graph summary and session modes."""
        s = _session()
        return jsonify({"graph": graph_summary(s.graph), "session": s.status()})

    @app.route("/api/current")
    def api_current():
        """GET /api/current - Last published highlight (polled by the page)."""
        s = _session()
        current = s.current
        return jsonify(
            {
                "status": s.status(),
                "sequence": current.sequence if current is not None else 0,
                "result": current.to_message() if current is not None else None,
            }
        )

    @app.route("/api/external/<int:line>")
    def api_external(line: int):
        """GET /api/external/<line> - Cross-file justifications of a line."""
        s = _session()
        if s.closed or line not in s.graph:
            return _error(f"no vertex for line {line}", 404)
        return jsonify({"line": line, "external": s.external_disclosure(line)})

    # ─────────────────────────────────────────────────────────────────
    # Selection and modes
    # ─────────────────────────────────────────────────────────────────

    @app.route("/api/select", methods=["POST"])
    def api_select():
        """POST /api/select - Select a line from the cursor or the graph view.

        Body: ``{"line": int, "origin": "cursor"|"pointer", "seq": int?}``.
        ``line`` 0 clears the selection.
        """
        data = request.get_json(force=True, silent=True) or {}
        line = _parse_line(data.get("line"))
        if line is None:
            return _error("line must be a non-negative integer", 400)
        try:
            origin = Origin(data.get("origin", Origin.CURSOR.value))
        except ValueError:
            return _error(f"unknown origin: {data.get('origin')}", 400)
        sequence = data.get("seq")
        if sequence is not None and _parse_line(sequence) is None:
            return _error("seq must be a non-negative integer", 400)

        s = _session()
        if not s.active:
            return _error("highlights are disabled until the file is re-analyzed", 409)

        result = s.select(line, origin, sequence)
        payload = _result_payload(result)
        payload["published"] = result is not None
        return jsonify(payload)

    @app.route("/api/mode", methods=["POST"])
    def api_mode():
        """POST /api/mode - Change direction, depth and/or the category filter.

        Body: ``{"direction": "causes"|"effects"?, "depth": "direct"|"indirect"?,
        "filter": [toggle names]?}``. Returns the re-run result for the
        current selection, if any.
        """
        data = request.get_json(force=True, silent=True) or {}
        s = _session()
        if not s.active:
            return _error("highlights are disabled until the file is re-analyzed", 409)

        try:
            direction = Direction(data["direction"]) if "direction" in data else None
            depth = Depth(data["depth"]) if "depth" in data else None
        except ValueError as e:
            return _error(str(e), 400)
        toggles = None
        if "filter" in data:
            if not isinstance(data["filter"], list):
                return _error("filter must be a list of category names", 400)
            try:
                toggles = {Category.parse(name) for name in data["filter"]}
            except ValueError as e:
                return _error(str(e), 400)

        result = None
        if direction is not None:
            result = s.set_direction(direction) or result
        if depth is not None:
            result = s.set_depth(depth) or result
        if toggles is not None:
            result = s.set_filter_toggles(toggles) or result
        return jsonify(_result_payload(result))

    # ─────────────────────────────────────────────────────────────────
    # Navigation and lifecycle
    # ─────────────────────────────────────────────────────────────────

    @app.route("/api/open-file", methods=["POST"])
    def api_open_file():
        """POST /api/open-file - Resolve a file named by an external dependency.

        Body: ``{"file": str, "line": int?}``.
        """
        data = request.get_json(force=True, silent=True) or {}
        file_name = data.get("file")
        if not file_name or not isinstance(file_name, str):
            return _error("file required", 400)
        line = data.get("line")
        if line is not None and _parse_line(line) is None:
            return _error("line must be a non-negative integer", 400)

        s = _session()
        path = s.resolve_external_file(file_name)
        if path is None:
            return _error(f"Could not find file: {file_name}", 404)
        payload = s.open_file_request(file_name, line)
        payload["path"] = str(path)
        logger.info("Open request for %s", path)
        return jsonify(payload)

    @app.route("/api/document-changed", methods=["POST"])
    def api_document_changed():
        """POST /api/document-changed - An editor changed a document.

        Body: ``{"path": str?}`` (defaults to the analyzed file).
        """
        data = request.get_json(force=True, silent=True) or {}
        s = _session()
        s.document_changed(Path(data.get("path") or s.analyzed_file))
        return jsonify({"status": s.status()})

    @app.route("/api/active-file", methods=["POST"])
    def api_active_file():
        """POST /api/active-file - The editor's active file changed.

        Body: ``{"path": str}``.
        """
        data = request.get_json(force=True, silent=True) or {}
        path = data.get("path")
        if not path or not isinstance(path, str):
            return _error("path required", 400)
        s = _session()
        s.active_file_changed(Path(path))
        return jsonify({"status": s.status()})

    @app.route("/api/reanalyze", methods=["POST"])
    def api_reanalyze():
        """POST /api/reanalyze - Rebuild the graph from disk in a new session."""
        old = _session()
        new_session = AnalysisSession.from_file(
            old.analyzed_file,
            workspace=old.workspace,
            config=_state["config"],
        )
        if new_session is None:
            return _error("no trace records available", 404)
        old.close()
        _state["session"] = new_session
        return jsonify({"success": True, "graph": graph_summary(new_session.graph)})

    return app
