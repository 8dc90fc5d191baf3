"""Tests for the JSON web API.

Tests use ``pytest.importorskip`` so they are skipped gracefully when
Flask is not installed.
"""

from __future__ import annotations

from typing import Any

import pytest

flask = pytest.importorskip("flask")

from page_sim.engine import ReplacementEngine  # noqa: E402
from page_sim.logging import Logger, LogLevel  # noqa: E402
from page_sim.web.app import create_app  # noqa: E402

HTTP_OK = 200
HTTP_BAD_REQUEST = 400

NORMAL_LOAD = [7, 0, 1, 2, 0, 3, 0, 4, 2, 3, 0, 3, 2, 1, 2, 0, 1, 7, 0, 1]


def _create_client() -> Any:
    """Create a test client from a fresh app."""
    app = create_app()
    app.config["TESTING"] = True
    return app.test_client()


class TestAppCreation:
    """Verify the app factory."""

    def test_create_app_returns_flask(self) -> None:
        """create_app should return a Flask application."""
        assert isinstance(create_app(), flask.Flask)

    def test_uses_given_engine(self) -> None:
        """Simulations should run on the engine passed to the factory."""
        logger = Logger()
        app = create_app(engine=ReplacementEngine(logger=logger))
        client = app.test_client()
        client.post("/api/simulate", json={"frames": 1, "references": [1]})
        assert logger.entries


class TestCatalogue:
    """Verify the read-only endpoints."""

    def test_policies(self) -> None:
        """GET /api/policies should list four policies with descriptions."""
        response = _create_client().get("/api/policies")
        assert response.status_code == HTTP_OK
        names = [p["name"] for p in response.get_json()]
        assert names == ["FIFO", "LRU", "OPTIMAL", "CLOCK"]

    def test_scenarios(self) -> None:
        """GET /api/scenarios should list the presets."""
        data = _create_client().get("/api/scenarios").get_json()
        assert [s["key"] for s in data] == ["scenario1", "scenario2", "scenario3", "scenario4"]
        assert data[1]["references"] == NORMAL_LOAD


class TestSimulate:
    """Verify POST /api/simulate."""

    def test_list_references(self) -> None:
        """A list of pages should produce the full trace."""
        response = _create_client().post(
            "/api/simulate",
            json={"frames": 3, "references": [1, 2, 3, 1, 2, 3], "policy": "fifo"},
        )
        assert response.status_code == HTTP_OK
        data = response.get_json()
        assert data["policy"] == "FIFO"
        assert len(data["steps"]) == len([1, 2, 3, 1, 2, 3])
        assert data["result"]["page_faults"] == len([1, 2, 3])
        assert data["result"]["hit_rate"] == pytest.approx(50.0)

    def test_text_references(self) -> None:
        """A textual reference string should be parsed."""
        data = (
            _create_client()
            .post("/api/simulate", json={"frames": "3", "references": "1, 2 3", "policy": "LRU"})
            .get_json()
        )
        assert data["references"] == [1, 2, 3]

    @pytest.mark.parametrize(
        "body",
        [
            {"frames": 0, "references": [1]},
            {"frames": 3, "references": "1, x"},
            {"frames": 3, "references": ["1"]},
            {"frames": 3, "references": 5},
            {"frames": 3, "references": [1], "policy": "mru"},
        ],
    )
    def test_bad_input_is_400(self, body: dict[str, Any]) -> None:
        """Rejected configurations should return 400 with an error message."""
        response = _create_client().post("/api/simulate", json=body)
        assert response.status_code == HTTP_BAD_REQUEST
        assert "error" in response.get_json()

    def test_missing_body_is_400(self) -> None:
        """A request without a JSON body should return 400."""
        response = _create_client().post("/api/simulate")
        assert response.status_code == HTTP_BAD_REQUEST


class TestTraceAndCompare:
    """Verify the export and comparison endpoints."""

    def test_trace_download(self) -> None:
        """POST /api/trace should return the text export as an attachment."""
        response = _create_client().post(
            "/api/trace", json={"frames": 3, "references": NORMAL_LOAD, "policy": "lru"}
        )
        assert response.status_code == HTTP_OK
        assert response.mimetype == "text/plain"
        assert "os-simulator-trace-LRU-" in response.headers["Content-Disposition"]
        text = response.get_data(as_text=True)
        assert text.startswith("OS MEMORY SIMULATOR - EXECUTION TRACE")
        assert "Total Page Faults: 12" in text

    def test_compare(self) -> None:
        """POST /api/compare should return totals for every policy."""
        data = (
            _create_client()
            .post("/api/compare", json={"frames": 3, "references": NORMAL_LOAD})
            .get_json()
        )
        assert set(data) == {"FIFO", "LRU", "OPTIMAL", "CLOCK"}
        assert data["FIFO"]["page_faults"] == 15  # noqa: PLR2004
        assert data["OPTIMAL"]["page_faults"] == 9  # noqa: PLR2004

    def test_trace_without_references_is_400(self) -> None:
        """An empty reference string has nothing to export."""
        response = _create_client().post("/api/trace", json={"frames": 3, "references": []})
        assert response.status_code == HTTP_BAD_REQUEST
        assert response.get_json() == {"error": "No simulation data to export"}


class TestServerLog:
    """Verify the log of the engine the app keeps for its lifetime."""

    COMPARE_REQUESTS = 40

    def test_log_stays_bounded_across_requests(self) -> None:
        """Repeated comparisons should never grow the log past its capacity."""
        app = create_app()
        client = app.test_client()
        logger = app.extensions["page_sim.engine"].logger
        counts = []
        for _ in range(self.COMPARE_REQUESTS):
            response = client.post("/api/compare", json={"frames": 3, "references": NORMAL_LOAD})
            assert response.status_code == HTTP_OK
            counts.append(len(logger.entries))
        assert max(counts) <= logger.capacity
        assert counts[-1] == counts[-2] == logger.capacity
        assert logger.dropped > 0

    def test_default_log_skips_evictions(self) -> None:
        """The app's own engine should log at INFO and above only."""
        app = create_app()
        client = app.test_client()
        client.post("/api/simulate", json={"frames": 1, "references": [1, 2, 3]})
        levels = [e.level for e in app.extensions["page_sim.engine"].logger.entries]
        assert levels == [LogLevel.INFO, LogLevel.INFO]
