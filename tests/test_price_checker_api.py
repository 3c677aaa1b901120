"""Tests for the price checker endpoint."""

import asyncio
import json
from unittest.mock import MagicMock, patch

import requests

_REQUEST = {
    "asking_price": 15_000_000,
    "property_type": "plot",
    "city": "Islamabad",
    "area": "F-7",
    "size": 1,
    "size_unit": "kanal",
    "road_access": "main-boulevard",
}


def test_heuristic_is_default(client):
    response = client.post("/api/price-checker/", json=_REQUEST)
    assert response.status_code == 200
    data = response.json()
    assert data["verdict"] == "fair"
    assert data["source"] == "heuristic"
    assert data["estimated_range"] == {"min": 13_500_000, "max": 16_500_000}


def test_invalid_request_is_rejected(client):
    response = client.post("/api/price-checker/", json=dict(_REQUEST, asking_price=0))
    assert response.status_code == 422


def test_unknown_mode_returns_400(client):
    response = client.post("/api/price-checker/", params={"mode": "oracle"}, json=_REQUEST)
    assert response.status_code == 400


def test_llm_mode_without_key_returns_503(client):
    with patch("config.AI_GATEWAY_API_KEY", None):
        response = client.post("/api/price-checker/", params={"mode": "llm"}, json=_REQUEST)
    assert response.status_code == 503


def test_llm_mode_uses_gateway(client):
    reply = {
        "verdict": "underpriced",
        "estimatedRange": {"min": 18_000_000, "max": 22_000_000},
        "confidence": "medium",
        "explanation": "F-7 plots on the main boulevard trade higher.",
        "factors": [],
    }
    gateway = MagicMock()
    gateway.raise_for_status = MagicMock()
    gateway.json.return_value = {
        "choices": [{"message": {"content": "```json\n" + json.dumps(reply) + "\n```"}}]
    }
    with patch("config.AI_GATEWAY_API_KEY", "test-key"), patch(
        "api.services.price_checker.requests.post", return_value=gateway
    ):
        response = client.post("/api/price-checker/", params={"mode": "llm"}, json=_REQUEST)

    assert response.status_code == 200
    data = response.json()
    assert data["verdict"] == "underpriced"
    assert data["source"] == "llm"
    assert data["estimated_range"]["max"] == 22_000_000


def test_llm_gateway_failure_returns_502(client):
    with patch("config.AI_GATEWAY_API_KEY", "test-key"), patch(
        "api.services.price_checker.requests.post",
        side_effect=requests.exceptions.Timeout("slow"),
    ):
        response = client.post("/api/price-checker/", params={"mode": "llm"}, json=_REQUEST)
    assert response.status_code == 502


def test_gateway_call_runs_off_the_event_loop(client):
    # the gateway must be called from a worker thread, where no event loop is running
    loops = []

    def fake_post(*args, **kwargs):
        try:
            loops.append(asyncio.get_running_loop())
        except RuntimeError:
            loops.append(None)
        raise requests.exceptions.Timeout("slow")

    with patch("config.AI_GATEWAY_API_KEY", "test-key"), patch(
        "api.services.price_checker.requests.post", side_effect=fake_post
    ):
        response = client.post("/api/price-checker/", params={"mode": "llm"}, json=_REQUEST)

    assert response.status_code == 502
    assert loops == [None]
