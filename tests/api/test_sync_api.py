"""
API tests for sync, cache status and snapshot endpoints.

Tests cover:
- POST /sync success, validation and upstream failure (502)
- Cache status listing after requests
- Snapshot document with unavailable sections as null
"""

from fastapi.testclient import TestClient


class TestSyncAPI:
    """Tests for POST /sync."""

    def test_sync_success(self, client: TestClient):
        """
        GIVEN one open position and four orders upstream
        WHEN I POST /sync for user-1
        THEN response is 200 with the counts written
        """
        response = client.post("/sync", json={"user_id": "user-1"})

        assert response.status_code == 200
        data = response.json()
        assert data["user_id"] == "user-1"
        assert data["positions"] == 1
        assert data["orders"] == 4
        assert data["portfolio_value"] == 101000.0

    def test_sync_missing_user_returns_422(self, client: TestClient):
        assert client.post("/sync", json={}).status_code == 422
        assert client.post("/sync", json={"user_id": ""}).status_code == 422

    def test_sync_upstream_failure_returns_502(self, failing_client: TestClient):
        """
        GIVEN the brokerage API is unreachable
        WHEN I POST /sync
        THEN response is 502 with UPSTREAM_ERROR
        """
        response = failing_client.post("/sync", json={"user_id": "user-1"})

        assert response.status_code == 502
        assert response.json()["error"] == "UPSTREAM_ERROR"


class TestCacheStatusAPI:
    """Tests for GET /cache/status."""

    def test_empty_cache(self, client: TestClient):
        assert client.get("/cache/status").json() == {"entries": [], "count": 0}

    def test_entries_after_requests(self, client: TestClient):
        """
        GIVEN /account and /benchmark were requested
        WHEN I GET /cache/status
        THEN both keys are listed, sorted, with their TTLs
        """
        client.get("/account")
        client.get("/benchmark", params={"start": "2024-06-10", "end": "2024-06-10"})

        data = client.get("/cache/status").json()

        assert data["count"] == 2
        keys = [e["key"] for e in data["entries"]]
        assert keys == sorted(keys)
        by_key = {e["key"]: e for e in data["entries"]}
        assert by_key["account"]["ttl_seconds"] == 60
        assert by_key["account"]["valid"] is True
        assert by_key["bars:SPY:2024-06-10:2024-06-10"]["ttl_seconds"] == 3600

    def test_status_does_not_fetch(self, client: TestClient, brokerage_provider):
        client.get("/cache/status")

        assert sum(brokerage_provider.calls.values()) == 0


class TestSnapshotAPI:
    """Tests for GET /snapshot."""

    def test_snapshot_contains_all_sections(self, client: TestClient):
        data = client.get("/snapshot").json()

        assert data["account"]["portfolio_value"] == 101000.0
        assert [p["symbol"] for p in data["positions"]] == ["AAPL"]
        assert len(data["portfolio_history"]) == 7
        assert len(data["orders"]) == 4
        assert data["benchmark"]["symbol"] == "SPY"
        assert len(data["benchmark"]["bars"]) == 12

    def test_snapshot_sections_null_when_unavailable(self, failing_client: TestClient):
        data = failing_client.get("/snapshot").json()

        assert data["timestamp"] is not None
        assert data["account"] is None
        assert data["positions"] is None
        assert data["portfolio_history"] is None
        assert data["benchmark"] is None
