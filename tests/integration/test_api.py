"""
Integration Tests - HTTP API

Tests the assess endpoint, health probes, metrics and startup
behaviour through the FastAPI test client.
"""

from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from calmline.api.middleware import request_context
from calmline.config import DetectorSettings, Settings
from calmline.main import create_application
from calmline.services.detection.lexicon_loader import LexiconConfigError


@pytest.fixture
def client(test_settings: Settings) -> Iterator[TestClient]:
    """Test client with the lifespan (lexicon load) running."""
    with TestClient(create_application(test_settings)) as test_client:
        yield test_client


class TestAssessEndpoint:
    """Tests for POST /api/v1/safety/assess."""

    def test_moderate_message(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/safety/assess",
            json={"message": "I feel so overwhelmed and anxious lately"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["assessment"]["tier"] == "MODERATE"
        assert data["assessment"]["score"] == 4.0
        assert data["assessment"]["matched_categories"] == ["anxiety", "stress"]
        assert data["assessment"]["lexicon_version"] == "test-fixture-1"
        assert data["directive"]["action"] == "suggest_resources"
        assert data["directive"]["error"] is False

    def test_matches_carry_no_message_text(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/safety/assess",
            json={"message": "I feel so overwhelmed and anxious lately"},
        )

        matches = response.json()["assessment"]["matches"]
        assert [m["signal_id"] for m in matches] == ["overwhelmed", "anxious"]
        assert all(set(m) == {"signal_id", "category", "weight", "position"} for m in matches)
        assert "overwhelmed and anxious" not in response.text

    def test_crisis_message(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/safety/assess",
            json={"message": "I want to kill myself"},
        )

        data = response.json()
        assert data["assessment"]["tier"] == "CRITICAL"
        assert data["directive"]["action"] == "trigger_crisis_protocol"
        assert "Test Crisis Line (000)" in data["directive"]["message"]

    def test_neutral_message(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/safety/assess",
            json={"message": "What a nice day"},
        )

        data = response.json()
        assert data["assessment"]["tier"] == "NONE"
        assert data["assessment"]["matches"] == []
        assert data["directive"] == {
            "tier": "NONE",
            "action": "no_action",
            "message": "",
            "error": False,
        }

    def test_missing_message_rejected(self, client: TestClient) -> None:
        response = client.post("/api/v1/safety/assess", json={})

        assert response.status_code == 422

    def test_oversized_message_rejected(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/safety/assess",
            json={"message": "a" * 8001},
        )

        assert response.status_code == 422

    def test_correlation_id_echoed(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/safety/assess",
            json={"message": "stressed"},
            headers={"X-Correlation-ID": "test-correlation-123"},
        )

        assert response.headers["X-Correlation-ID"] == "test-correlation-123"

    def test_correlation_id_generated(self, client: TestClient) -> None:
        response = client.post("/api/v1/safety/assess", json={"message": "stressed"})

        assert response.headers["X-Correlation-ID"]


class _RecordingLogger:
    """Collects structlog-style calls."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict]] = []

    def info(self, event: str, **kwargs) -> None:
        self.events.append(("info", event, kwargs))

    def error(self, event: str, **kwargs) -> None:
        self.events.append(("error", event, kwargs))


class TestRequestContext:
    """Tests for access logging and security headers."""

    def test_security_headers(self, client: TestClient) -> None:
        response = client.get("/api/v1/health/live")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Referrer-Policy"] == "no-referrer"
        assert "Strict-Transport-Security" not in response.headers

    def test_hsts_in_production(self, detector_settings: DetectorSettings) -> None:
        settings = Settings(env="production", detector=detector_settings)

        with TestClient(create_application(settings)) as client:
            response = client.get("/api/v1/health/live")

        assert response.headers["Strict-Transport-Security"].startswith("max-age=")

    def test_security_headers_on_server_error(self, test_settings: Settings) -> None:
        client = TestClient(create_application(test_settings))

        response = client.post("/api/v1/safety/assess", json={"message": "stressed"})

        assert response.status_code == 500
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Correlation-ID"]

    def test_access_log_without_body(
        self,
        client: TestClient,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        recorder = _RecordingLogger()
        monkeypatch.setattr(request_context, "logger", recorder)

        client.post(
            "/api/v1/safety/assess",
            json={"message": "I feel so overwhelmed and anxious lately"},
        )

        (level, event, fields) = recorder.events[-1]
        assert (level, event) == ("info", "Request completed")
        assert fields["method"] == "POST"
        assert fields["path"] == "/api/v1/safety/assess"
        assert fields["status_code"] == 200
        assert fields["duration_ms"] >= 0
        assert "overwhelmed" not in repr(recorder.events)

    def test_oversized_correlation_id_replaced(self, client: TestClient) -> None:
        response = client.get("/api/v1/health/live", headers={"X-Correlation-ID": "x" * 500})

        assert response.headers["X-Correlation-ID"] != "x" * 500


class TestHealthEndpoints:
    """Tests for health probes."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_live(self, client: TestClient) -> None:
        response = client.get("/api/v1/health/live")

        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    def test_ready_reports_lexicon(self, client: TestClient) -> None:
        response = client.get("/api/v1/health/ready")

        data = response.json()
        assert data["ready"] is True
        assert data["components"]["lexicon_version"] == "test-fixture-1"
        assert data["components"]["signal_count"] == 9


class TestMetricsEndpoint:
    """Tests for the Prometheus scrape endpoint."""

    def test_metrics_exposed(self, client: TestClient) -> None:
        client.post("/api/v1/safety/assess", json={"message": "I want to kill myself"})

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "calmline_risk_assessments_total" in response.text
        assert "calmline_escalation_directives_total" in response.text


class TestStartup:
    """Tests for lexicon loading at startup."""

    def test_missing_lexicon_refuses_to_start(self, tmp_path: Path) -> None:
        app = create_application(Settings(
            detector=DetectorSettings(lexicon_path=tmp_path / "missing.json"),
        ))

        with pytest.raises(LexiconConfigError):
            with TestClient(app):
                pass

    def test_invalid_lexicon_refuses_to_start(self, tmp_path: Path) -> None:
        lexicon_file = tmp_path / "lexicon.json"
        lexicon_file.write_text('{"version": "broken", "signals": []}')
        app = create_application(Settings(
            detector=DetectorSettings(lexicon_path=lexicon_file),
        ))

        with pytest.raises(LexiconConfigError):
            with TestClient(app):
                pass

    def test_assess_before_startup_is_server_error(self, test_settings: Settings) -> None:
        """Without a loaded lexicon the endpoint errors instead of answering NO_ACTION."""
        client = TestClient(create_application(test_settings))

        response = client.post("/api/v1/safety/assess", json={"message": "stressed"})

        assert response.status_code == 500
        assert "correlation_id" in response.json()
