"""Tests for root and health endpoints."""


def test_root(client):
    data = client.get("/").json()
    assert data["message"] == "Pakistan Property Marketplace API"
    assert data["docs"] == "/docs"


def test_health_reports_sqlite_and_cache(client):
    data = client.get("/health").json()
    assert data["status"] == "healthy"
    assert data["database"]["type"] == "sqlite"
    assert data["database"]["connected"] is True
    assert data["cache"]["total_entries"] == 0
