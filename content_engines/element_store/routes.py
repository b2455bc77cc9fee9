"""Reference backend for the ``/api/<kind>`` element contract, over in-memory stores."""
from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from content_engines.common.error_envelope import raise_http_error, validation_response
from content_engines.elements.errors import ElementsError, ElementValidationError
from content_engines.elements.models import ElementKind, element_data
from content_engines.elements.registry import resolve_kind
from content_engines.element_store.repository import InMemoryElementStore, ReorderItem

router = APIRouter(prefix="/api", tags=["elements"])

_stores: Dict[ElementKind, InMemoryElementStore] = {}


class ReorderPayload(BaseModel):
    items: List[ReorderItem]


def get_backend_store(kind: str) -> InMemoryElementStore:
    resolved = resolve_kind(kind)
    if resolved not in _stores:
        _stores[resolved] = InMemoryElementStore(resolved)
    return _stores[resolved]


def set_backend_store(store: InMemoryElementStore) -> None:
    _stores[store.kind] = store


def reset_backend_stores() -> None:
    _stores.clear()


def _fail(exc: ElementsError, kind: str) -> JSONResponse:
    if isinstance(exc, ElementValidationError):
        return validation_response(exc, resource_kind=kind)
    raise_http_error(exc, resource_kind=kind)


@router.get("/{kind}")
async def list_elements(kind: str):
    try:
        items = await get_backend_store(kind).list()
    except ElementsError as exc:
        return _fail(exc, kind)
    return [element_data(item) for item in items]


@router.post("/{kind}", status_code=201)
async def create_element(kind: str, payload: Dict[str, Any] = Body(...)):
    try:
        created = await get_backend_store(kind).create(payload)
    except ElementsError as exc:
        return _fail(exc, kind)
    return element_data(created)


# Declared before the /{element_id} routes so "order" is never taken for an id.
@router.put("/{kind}/order")
async def reorder_elements(kind: str, payload: ReorderPayload):
    try:
        await get_backend_store(kind).bulk_reorder(payload.items)
    except ElementsError as exc:
        return _fail(exc, kind)
    return {"status": "reordered", "count": len(payload.items)}


@router.api_route("/{kind}/{element_id}", methods=["PATCH", "PUT"])
async def update_element(kind: str, element_id: str, payload: Dict[str, Any] = Body(...)):
    try:
        updated = await get_backend_store(kind).update(element_id, payload)
    except ElementsError as exc:
        return _fail(exc, kind)
    return element_data(updated)


@router.delete("/{kind}/{element_id}", status_code=204)
async def delete_element(kind: str, element_id: str):
    try:
        await get_backend_store(kind).delete(element_id)
    except ElementsError as exc:
        return _fail(exc, kind)
    return Response(status_code=204)
