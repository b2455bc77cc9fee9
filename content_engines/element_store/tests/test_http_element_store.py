from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from content_engines.element_store.http_adapter import HttpElementStore
from content_engines.elements.errors import ElementValidationError, NotFoundError, ReorderError, StoreError
from content_engines.elements.models import ProjectElement
from content_engines.server import create_app


def _run_against_app(kind, scenario):
    async def _main():
        transport = httpx.ASGITransport(app=create_app())
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            return await scenario(HttpElementStore(kind, client=client))

    return asyncio.run(_main())


def test_round_trip_against_reference_backend(valid_candidate):
    async def scenario(store):
        first = await store.create(valid_candidate("projects"))
        second = await store.create(valid_candidate("projects", name="Lurín", type="Industrial"))
        await store.update(first.id, {"title": "Plaza Norte II"})
        await store.bulk_reorder([second.model_copy(update={"order": 1}), first.model_copy(update={"order": 2})])
        listed = await store.list()
        await store.delete(second.id)
        return listed, await store.list()

    listed, after_delete = _run_against_app("projects", scenario)
    assert all(isinstance(item, ProjectElement) for item in listed)
    assert [item.name for item in listed] == ["Lurín", "Plaza Norte"]
    assert listed[1].title == "Plaza Norte II"
    assert [item.name for item in after_delete] == ["Plaza Norte"]


def test_error_mapping(valid_candidate):
    async def scenario(store):
        with pytest.raises(ElementValidationError) as exc_info:
            await store.create(valid_candidate("statistics", icon="NotARealIcon"))
        assert exc_info.value.errors == {"icon": "Ícono no válido"}

        with pytest.raises(NotFoundError):
            await store.update("nope", {"title": "x"})
        with pytest.raises(NotFoundError):
            await store.delete("nope")

        created = await store.create(valid_candidate("statistics"))
        with pytest.raises(ReorderError):
            await store.bulk_reorder([created.model_copy(update={"order": 7})])

    _run_against_app("statistics", scenario)


def test_server_and_transport_failures_become_store_errors():
    def failing(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"detail": "boom"})

    def unreachable(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async def _main(handler):
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://cms") as client:
            await HttpElementStore("pillars", client=client).list()

    with pytest.raises(StoreError) as exc_info:
        asyncio.run(_main(failing))
    assert exc_info.value.message == "boom"
    with pytest.raises(StoreError):
        asyncio.run(_main(unreachable))


def test_create_request_omits_server_owned_fields(valid_candidate):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        body = {**seen["body"], "id": "srv-1", "order": 1, "created_at": "2026-01-01T00:00:00Z"}
        return httpx.Response(201, json=body)

    async def _main():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://cms") as client:
            return await HttpElementStore("pillars", client=client).create(
                valid_candidate("pillars", id="guess", created_at="x", updated_at="y")
            )

    created = asyncio.run(_main())
    assert created.id == "srv-1"
    assert (seen["method"], seen["path"]) == ("POST", "/api/pillars")
    assert not {"id", "created_at", "updated_at"} & set(seen["body"])
