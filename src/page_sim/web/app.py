"""Flask application factory for the simulator's JSON API.

Requests that run a simulation send a JSON body such as::

    {"frames": 3, "references": "7, 0, 1, 2", "policy": "lru"}

``references`` may be a list of integers or the textual form.  A bad
frame count, page token, or policy name yields HTTP 400 with an
``error`` field.
"""

from __future__ import annotations

from typing import Any

from flask import Flask, Response, jsonify, request

from page_sim.config import DEFAULT_FRAMES, InvalidConfigurationError, SimulationConfig
from page_sim.engine import ReplacementEngine, compare_policies
from page_sim.logging import Logger, LogLevel
from page_sim.policies import Policy, UnknownPolicyError
from page_sim.scenarios import list_scenarios
from page_sim.trace import format_trace, trace_filename, trace_to_dict

_HTTP_BAD_REQUEST = 400
_LOG_CAPACITY = 200


def _config_from_body(data: dict[str, Any]) -> SimulationConfig:
    """Build a validated config from a request body."""
    references = data.get("references", "")
    if isinstance(references, list):
        if not all(isinstance(p, int) and not isinstance(p, bool) for p in references):
            msg = "'references' must contain only integers"
            raise InvalidConfigurationError(msg)
    elif not isinstance(references, str):
        msg = "'references' must be a list or a string"
        raise InvalidConfigurationError(msg)
    return SimulationConfig.from_text(
        frames=data.get("frames", DEFAULT_FRAMES),
        references=references,
        policy=data.get("policy", Policy.FIFO),
    )


def create_app(*, engine: ReplacementEngine | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        engine: Engine that serves simulation requests.  If omitted, one is
            built with an INFO-level logger holding the last
            ``_LOG_CAPACITY`` entries, since it lives as long as the app.

    Returns:
        A configured Flask application ready to serve.

    """
    if engine is None:
        engine = ReplacementEngine(
            logger=Logger(min_level=LogLevel.INFO, capacity=_LOG_CAPACITY)
        )
    app = Flask(__name__)
    app.extensions["page_sim.engine"] = engine

    def _request_config() -> SimulationConfig:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            msg = "Expected a JSON object body"
            raise InvalidConfigurationError(msg)
        return _config_from_body(data)

    @app.errorhandler(InvalidConfigurationError)
    @app.errorhandler(UnknownPolicyError)
    def bad_request(error: ValueError) -> tuple[Response, int]:  # pyright: ignore[reportUnusedFunction]
        """Report a rejected configuration as HTTP 400."""
        return jsonify({"error": str(error)}), _HTTP_BAD_REQUEST

    @app.route("/api/policies")
    def policies() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return every policy with its description."""
        return jsonify([{"name": str(p), "description": p.description} for p in Policy])

    @app.route("/api/scenarios")
    def scenarios() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the preset workloads."""
        return jsonify(
            [
                {
                    "key": s.key,
                    "name": s.name,
                    "frames": s.frames,
                    "references": list(s.references),
                    "description": s.description,
                }
                for s in list_scenarios()
            ]
        )

    @app.route("/api/simulate", methods=["POST"])
    def simulate() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Run one policy and return the full trace as JSON."""
        config = _request_config()
        trace = engine.run(
            capacity=config.frames, references=config.references, policy=config.policy
        )
        return jsonify(trace_to_dict(trace))

    @app.route("/api/trace", methods=["POST"])
    def trace() -> Response | tuple[Response, int]:  # pyright: ignore[reportUnusedFunction]
        """Run one policy and return the plain-text trace as a download."""
        config = _request_config()
        result = engine.run(
            capacity=config.frames, references=config.references, policy=config.policy
        )
        if result.total_steps == 0:
            return jsonify({"error": "No simulation data to export"}), _HTTP_BAD_REQUEST
        response = Response(format_trace(result), mimetype="text/plain")
        response.headers["Content-Disposition"] = (
            f"attachment; filename={trace_filename(result.policy)}"
        )
        return response

    @app.route("/api/compare", methods=["POST"])
    def compare() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Run every policy on the same input and return the totals."""
        config = _request_config()
        traces = compare_policies(config.frames, config.references, engine=engine)
        return jsonify(
            {str(p): trace_to_dict(t)["result"] for p, t in traces.items()}
        )

    return app


def main() -> None:
    """Run the web API development server.

    This is the ``page-sim-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
