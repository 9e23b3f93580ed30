"""Tests for the HTTP routes."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from conftest import ScriptedProvider, make_client, speaker_responder
from versus.debate_engine.analysis import ProductAnalyzer
from versus.debate_engine.registry import DebateRegistry
from versus.web.api import app
from versus.web.endpoints.debates import get_debate_registry, get_product_analyzer

PRODUCTS = {
    "products": [
        {"name": "Alpha", "details": {"category": "laptop"}},
        {"name": "Beta", "details": None},
    ]
}


def moderated_responder(fail_verdict: bool = False):
    def responder(prompt: str):
        if "Analyze this product" in prompt:
            if "Name: Broken," in prompt:
                return RuntimeError("backend down")
            return '```json\n{"specs": "fast", "category": "laptop", "base_price": "$1"}\n```'
        if fail_verdict and prompt.startswith("You are a neutral moderator."):
            return RuntimeError("backend down")
        return speaker_responder(prompt)

    return responder


def build_client(fail_verdict: bool = False) -> tuple[TestClient, DebateRegistry]:
    generation_client = make_client(ScriptedProvider(responder=moderated_responder(fail_verdict)))
    registry = DebateRegistry(generation_client)
    analyzer = ProductAnalyzer(generation_client)

    app.dependency_overrides[get_debate_registry] = lambda: registry
    app.dependency_overrides[get_product_analyzer] = lambda: analyzer
    return TestClient(app), registry


@pytest.fixture
def api() -> Iterator[tuple[TestClient, DebateRegistry]]:
    yield build_client()
    app.dependency_overrides.clear()


@pytest.fixture
def failing_verdict_api() -> Iterator[tuple[TestClient, DebateRegistry]]:
    yield build_client(fail_verdict=True)
    app.dependency_overrides.clear()


def test_health(api) -> None:
    client, _ = api

    assert client.get("/api/health").json() == {"status": "ok"}


def test_analyze_products(api) -> None:
    client, _ = api

    response = client.post(
        "/api/products/analyze",
        json={"products": [{"name": "Alpha", "url": "https://alpha.example"}]},
    )

    assert response.status_code == 200
    assert response.json() == [
        {
            "name": "Alpha",
            "url": "https://alpha.example",
            "details": {"specs": "fast", "category": "laptop", "base_price": "$1"},
        }
    ]


def test_analyze_failure_is_reported(api) -> None:
    client, _ = api

    response = client.post(
        "/api/products/analyze",
        json={"products": [{"name": "Alpha", "url": None}, {"name": "Broken", "url": None}]},
    )

    assert response.status_code == 500
    assert "Analysis failed" in response.json()["detail"]


def test_full_debate_over_http(api) -> None:
    client, registry = api

    started = client.post("/api/debate/start", json=PRODUCTS)
    assert started.status_code == 200
    body = started.json()
    debate_id = body["debateId"]
    assert body["round"] == 1
    assert [m["type"] for m in body["messages"]] == ["intro", "intro"]
    assert [m["sender"] for m in body["messages"]] == ["Alpha", "Beta"]

    rounds = [client.post("/api/debate/next", json={"debateId": debate_id}).json() for _ in range(4)]

    assert [r["round"] for r in rounds] == [2, 3, 4, 99]
    assert [len(r["messages"]) for r in rounds] == [2, 2, 2, 1]
    assert rounds[2]["messages"][0]["type"] == "rebuttal"
    assert rounds[3]["messages"][0] == {
        "sender": "Moderator",
        "content": "You are a neutral moderator.",
        "type": "conclusion",
    }
    assert rounds[3]["finished"] is True

    state = client.get(f"/api/debate/{debate_id}").json()
    assert state["round"] == 99
    assert state["finished"] is True
    assert state["products"] == ["Alpha", "Beta"]
    assert len(state["messages"]) == 9

    finished = client.post("/api/debate/next", json={"debateId": debate_id})
    assert finished.status_code == 409
    assert len(registry.get(debate_id).session.transcript) == 9


def test_unknown_debate_is_404(api) -> None:
    client, _ = api

    assert client.post("/api/debate/next", json={"debateId": "nope"}).status_code == 404
    assert client.get("/api/debate/nope").status_code == 404
    assert client.delete("/api/debate/nope").status_code == 404


def test_single_product_is_rejected(api) -> None:
    client, registry = api

    response = client.post("/api/debate/start", json={"products": [{"name": "Alpha"}]})

    assert response.status_code == 422
    assert len(registry) == 0


def test_round_failure_keeps_transcript(failing_verdict_api) -> None:
    client, _ = failing_verdict_api
    debate_id = client.post("/api/debate/start", json=PRODUCTS).json()["debateId"]
    for _ in range(3):
        client.post("/api/debate/next", json={"debateId": debate_id})

    failed = client.post("/api/debate/next", json={"debateId": debate_id})

    assert failed.status_code == 500
    assert failed.json()["detail"] == "Failed to process round"
    state = client.get(f"/api/debate/{debate_id}").json()
    assert state["round"] == 4
    assert len(state["messages"]) == 8


def test_delete_discards_debate(api) -> None:
    client, registry = api
    debate_id = client.post("/api/debate/start", json=PRODUCTS).json()["debateId"]

    response = client.delete(f"/api/debate/{debate_id}")

    assert response.status_code == 200
    assert debate_id not in registry


def test_debate_deleted_during_round_still_answers() -> None:
    doomed: dict[str, str] = {}

    def responder(prompt: str):
        if doomed.get("id") in registry and "COMPETITORS:" not in prompt:
            registry.discard(doomed["id"])
        return speaker_responder(prompt)

    registry = DebateRegistry(make_client(ScriptedProvider(responder=responder)))
    app.dependency_overrides[get_debate_registry] = lambda: registry
    try:
        client = TestClient(app)
        doomed["id"] = client.post("/api/debate/start", json=PRODUCTS).json()["debateId"]

        response = client.post("/api/debate/next", json={"debateId": doomed["id"]})

        assert response.status_code == 200
        assert response.json()["round"] == 2
        assert response.json()["finished"] is False
        assert [m["sender"] for m in response.json()["messages"]] == ["Alpha", "Beta"]
        assert client.get(f"/api/debate/{doomed['id']}").status_code == 404
        assert client.post("/api/debate/next", json={"debateId": doomed["id"]}).status_code == 404
    finally:
        app.dependency_overrides.clear()
