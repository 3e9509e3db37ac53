"""애플리케이션 진입점 및 API 동작 테스트."""

from __future__ import annotations

import importlib

from fastapi.testclient import TestClient

from app.core.airport_data import get_airport_data
from app.core.config import get_settings

AUTH_HEADERS = {"x-service-secret": "test-service-secret"}


def _set_required_env(monkeypatch, **overrides: str) -> None:
    monkeypatch.setenv("SERVICE_SECRET", "test-service-secret")
    monkeypatch.setenv("DOCS_MODE", "disabled")
    for key, value in overrides.items():
        monkeypatch.setenv(key, value)
    get_settings.cache_clear()
    get_airport_data.cache_clear()


def _load_main_module():
    import app.main as main_module

    return importlib.reload(main_module)


def _client(monkeypatch, **overrides: str) -> TestClient:
    _set_required_env(monkeypatch, **overrides)
    return TestClient(_load_main_module().app)


def _trip_payload(**overrides) -> dict:
    payload = {
        "arrival_time": "2026-01-31T13:30:00",
        "terminal": "t1",
        "is_domestic": True,
        "next_flight_time": "2026-01-31T14:00:00",
        "gate_number": "b10",
    }
    payload.update(overrides)
    return payload


def test_health_check_endpoint(monkeypatch) -> None:
    client = _client(monkeypatch)
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "message": "GateBuddy AI Server is running"}


def test_readiness_endpoint(monkeypatch) -> None:
    client = _client(monkeypatch)
    response = client.get("/health/ready")

    assert response.status_code == 200
    assert response.json()["status"] == "ready"


def test_readiness_endpoint_not_ready_without_catalog(monkeypatch, tmp_path) -> None:
    client = _client(monkeypatch, AIRPORT_DATA_PATH=str(tmp_path / "missing.json"))
    response = client.get("/health/ready")

    assert response.status_code == 503
    assert response.json()["checks"]["airport_data"]["status"] == "fail"


def test_docs_disabled_by_default(monkeypatch) -> None:
    client = _client(monkeypatch)

    assert client.get("/docs").status_code == 404
    assert client.get("/redoc").status_code == 404
    assert client.get("/openapi.json").status_code == 404


def test_docs_secret_mode_requires_service_secret(monkeypatch) -> None:
    client = _client(monkeypatch, DOCS_MODE="secret")

    assert client.get("/docs").status_code == 401
    assert client.get("/docs", headers=AUTH_HEADERS).status_code == 200


def test_plan_openapi_example(monkeypatch) -> None:
    _set_required_env(monkeypatch)
    main_module = _load_main_module()

    schema = main_module.app.openapi()
    examples = schema["paths"]["/api/v1/plan"]["post"]["responses"]["200"]["content"]["application/json"]["examples"]

    assert examples["domestic_connection"]["value"]["minutes_until_boarding"] == 210


def test_security_headers_are_attached(monkeypatch) -> None:
    client = _client(monkeypatch)
    response = client.get("/")

    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "DENY"
    assert response.headers["referrer-policy"] == "no-referrer"
    assert response.headers["permissions-policy"] == "geolocation=(), microphone=(), camera=()"
    assert response.headers["cache-control"] == "no-store"


def test_hsts_is_left_to_the_proxy(monkeypatch) -> None:
    _set_required_env(monkeypatch)
    client = TestClient(_load_main_module().app, base_url="https://testserver")
    response = client.get("/")

    assert response.status_code == 200
    assert "strict-transport-security" not in response.headers


def test_security_headers_can_be_disabled(monkeypatch) -> None:
    client = _client(monkeypatch, SECURITY_HEADERS_ENABLED="false")
    response = client.get("/")

    assert "x-frame-options" not in response.headers
    assert "cache-control" not in response.headers


def test_cors_allowlist_from_env(monkeypatch) -> None:
    client = _client(monkeypatch, CORS_ALLOW_ORIGINS="https://example.com")
    response = client.get("/", headers={"Origin": "https://example.com"})

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "https://example.com"


class TestServiceSecret:
    """서비스 시크릿 인증 테스트."""

    def test_missing_header_is_unauthorized(self, monkeypatch):
        client = _client(monkeypatch)
        response = client.post("/api/v1/route", json={"arrival_gate_id": "A1", "departure_gate_id": "D2"})

        assert response.status_code == 401

    def test_wrong_secret_is_unauthorized(self, monkeypatch):
        client = _client(monkeypatch)
        response = client.post(
            "/api/v1/route",
            json={"arrival_gate_id": "A1", "departure_gate_id": "D2"},
            headers={"x-service-secret": "wrong"},
        )

        assert response.status_code == 401

    def test_unset_secret_is_server_error(self, monkeypatch):
        client = _client(monkeypatch, SERVICE_SECRET="")
        response = client.post(
            "/api/v1/route",
            json={"arrival_gate_id": "A1", "departure_gate_id": "D2"},
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 500


class TestPlanApi:
    """플랜 API 엔드포인트 테스트."""

    def test_recommendations(self, monkeypatch):
        client = _client(monkeypatch)
        response = client.post(
            "/api/v1/recommendations",
            json={
                "location": {"x": 120, "y": 480, "terminal": "T1"},
                "preferences": {"dietary": ["vegan"]},
                "now": "2026-01-31T10:30:00",
            },
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 200
        results = response.json()["results"]
        assert [poi["id"] for poi in results[:3]] == ["brew-haven", "harbor-kitchen", "aurora-lounge"]
        assert results[0]["travel_time"] == 4
        assert results[0]["openingHours"] == "05:00-22:00"

    def test_timeline_reports_unknown_pois(self, monkeypatch):
        client = _client(monkeypatch)
        response = client.post(
            "/api/v1/timeline",
            json={"trip": _trip_payload(), "selected_poi_ids": ["ghost"]},
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["unknown_poi_ids"] == ["ghost"]
        assert [step["id"] for step in body["steps"]] == ["security", "gate"]
        assert body["steps"][0]["status"] == "risky"

    def test_timeline_rejects_mixed_timezones(self, monkeypatch):
        client = _client(monkeypatch)
        response = client.post(
            "/api/v1/timeline",
            json={"trip": _trip_payload(next_flight_time="2026-01-31T14:00:00+09:00")},
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 422

    def test_route(self, monkeypatch):
        client = _client(monkeypatch)
        response = client.post(
            "/api/v1/route",
            json={"arrival_gate_id": "A1", "departure_gate_id": "D2", "preference_text": "coffee"},
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["total_distance"] == 420
        assert body["preferences"]["visited"] == ["brew-haven"]
        assert set(body["segments"][0]) == {"from", "to", "distance", "polyline"}

    def test_route_unknown_gate(self, monkeypatch):
        client = _client(monkeypatch)
        response = client.post(
            "/api/v1/route",
            json={"arrival_gate_id": "A1", "departure_gate_id": "Z99"},
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 200
        assert response.json()["stops"] == []

    def test_plan(self, monkeypatch):
        client = _client(monkeypatch)
        response = client.post(
            "/api/v1/plan",
            json={
                "trip": _trip_payload(arrival_time="2026-01-31T10:00:00", arriving_gate="A1", gate_number="B1"),
                "preferences": {"custom_preferences": "coffee"},
            },
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["selected_poi_ids"] == ["press-and-go", "brew-haven"]
        assert body["route"]["total_distance"] == 220
        assert body["minutes_until_boarding"] == 210

    def test_plan_rejects_aware_now_for_naive_trip(self, monkeypatch):
        client = _client(monkeypatch)
        response = client.post(
            "/api/v1/plan",
            json={"trip": _trip_payload(), "now": "2026-01-31T13:30:00+00:00"},
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 422

    def test_catalog_failure_is_service_unavailable(self, monkeypatch, tmp_path):
        client = _client(monkeypatch, AIRPORT_DATA_PATH=str(tmp_path / "missing.json"))
        response = client.post(
            "/api/v1/route",
            json={"arrival_gate_id": "A1", "departure_gate_id": "D2"},
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 503
        assert response.json() == {"detail": "공항 데이터를 불러올 수 없습니다."}
