from __future__ import annotations

from datetime import datetime, timezone

from fastapi.testclient import TestClient

from content_engines.element_store.repository import InMemoryElementStore
from content_engines.element_store.routes import get_backend_store, set_backend_store
from content_engines.server import create_app


def _client() -> TestClient:
    return TestClient(create_app())


def test_crud_and_reorder_over_http(valid_candidate):
    client = _client()

    ids = []
    for title in ("Seguridad", "Calidad", "Innovación"):
        resp = client.post("/api/pillars", json=valid_candidate("pillars", title=title))
        assert resp.status_code == 201
        body = resp.json()
        assert body["order"] == len(ids) + 1
        assert body["created_at"] and body["updated_at"]
        ids.append(body["id"])

    resp = client.patch(f"/api/pillars/{ids[0]}", json={"enabled": False})
    assert resp.status_code == 200
    assert resp.json()["enabled"] is False

    resp = client.put(
        "/api/pillars/order",
        json={"items": [{"id": ids[2], "order": 1}, {"id": ids[0], "order": 2}, {"id": ids[1], "order": 3}]},
    )
    assert resp.status_code == 200

    listed = client.get("/api/pillars").json()
    assert [item["id"] for item in listed] == [ids[2], ids[0], ids[1]]

    resp = client.delete(f"/api/pillars/{ids[1]}")
    assert resp.status_code == 204
    assert len(client.get("/api/pillars").json()) == 2


def test_validation_failure_returns_field_errors(valid_candidate):
    client = _client()
    payload = valid_candidate("pillars")
    del payload["title"]
    resp = client.post("/api/pillars", json=payload)
    assert resp.status_code == 400
    body = resp.json()
    assert body["errors"] == {"title": "Título es requerido"}
    assert body["error"]["code"] == "elements.validation_failed"


def test_unknown_ids_and_kinds_are_404():
    client = _client()
    resp = client.patch("/api/projects/missing", json={"title": "x"})
    assert resp.status_code == 404
    assert resp.json()["detail"]["error"]["code"] == "elements.not_found"
    assert client.delete("/api/projects/missing").status_code == 404
    resp = client.get("/api/testimonials")
    assert resp.status_code == 404
    assert resp.json()["detail"]["error"]["code"] == "elements.unknown_kind"


def test_inconsistent_reorder_is_409_and_not_applied(valid_candidate):
    client = _client()
    ids = [client.post("/api/policies", json=valid_candidate("policies", title=t)).json()["id"] for t in "AB"]
    resp = client.put("/api/policies/order", json={"items": [{"id": ids[0], "order": 1}, {"id": ids[1], "order": 1}]})
    assert resp.status_code == 409
    listed = client.get("/api/policies").json()
    assert [(item["id"], item["order"]) for item in listed] == [(ids[0], 1), (ids[1], 2)]


def test_health():
    resp = _client().get("/health")
    assert resp.status_code == 200
    assert "statistics" in resp.json()["kinds"]


def test_post_with_explicit_order_still_appends(valid_candidate):
    client = _client()
    client.post("/api/statistics", json=valid_candidate("statistics", title="A"))
    for order in (1, 7):
        resp = client.post("/api/statistics", json=valid_candidate("statistics", title=f"o{order}", order=order))
        assert resp.status_code == 201
    listed = client.get("/api/statistics").json()
    assert [(item["title"], item["order"]) for item in listed] == [("A", 1), ("o1", 2), ("o7", 3)]


def test_injected_backend_store_serves_requests(valid_candidate):
    stamp = datetime(2026, 5, 4, 9, 30, tzinfo=timezone.utc)
    store = InMemoryElementStore("projects", id_fn=lambda: "proj-fixed", clock=lambda: stamp)
    set_backend_store(store)
    assert get_backend_store("projects") is store

    client = _client()
    resp = client.post("/api/projects", json=valid_candidate("projects"))
    assert resp.status_code == 201
    body = resp.json()
    assert body["id"] == "proj-fixed"
    assert datetime.fromisoformat(body["created_at"].replace("Z", "+00:00")) == stamp
    assert client.get("/api/projects").json()[0]["id"] == "proj-fixed"
