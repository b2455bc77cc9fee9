"""Storage abstractions for card elements, one store per kind."""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Sequence, Union
from uuid import uuid4

from pydantic import BaseModel, ValidationError

from content_engines.config import runtime_config
from content_engines.element_validation.service import prepare_payload, validate
from content_engines.elements.errors import (
    ElementValidationError,
    ErrorMap,
    NotFoundError,
    ReorderError,
)
from content_engines.elements.models import (
    BaseCardElement,
    ElementKind,
    element_data,
    element_model_for,
    merge_element_data,
)
from content_engines.elements.registry import resolve_kind

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ReorderItem(BaseModel):
    id: str
    order: int


OrderedRef = Union[BaseCardElement, ReorderItem]


class ElementStore(Protocol):
    kind: ElementKind

    async def list(self) -> List[BaseCardElement]:
        ...

    async def create(self, payload: Mapping[str, Any]) -> BaseCardElement:
        ...

    async def update(self, element_id: str, partial: Mapping[str, Any]) -> BaseCardElement:
        ...

    async def delete(self, element_id: str) -> None:
        ...

    async def bulk_reorder(self, sequence: Sequence[OrderedRef]) -> None:
        ...


def _pydantic_errors(exc: ValidationError) -> ErrorMap:
    errors: ErrorMap = {}
    for err in exc.errors():
        key = ".".join(str(part) for part in err.get("loc", ())) or "__root__"
        errors.setdefault(key, err.get("msg", "invalid value"))
    return errors


def check_reorder_sequence(current_ids: Sequence[str], sequence: Sequence[OrderedRef]) -> Dict[str, int]:
    """Validate a bulk reorder request and return ``id -> order``.

    The request must name every current id exactly once and carry the dense
    order values 1..N; anything else is rejected before a single write.
    """
    ids = [item.id for item in sequence]
    orders = [item.order for item in sequence]
    if len(ids) != len(set(ids)):
        raise ReorderError("reorder sequence repeats an id")
    if len(orders) != len(set(orders)):
        raise ReorderError("reorder sequence repeats an order value")
    if set(ids) != set(current_ids):
        raise ReorderError(
            "reorder sequence does not match the collection",
            details={
                "missing": sorted(set(current_ids) - set(ids)),
                "unknown": sorted(set(ids) - set(current_ids)),
            },
        )
    if sorted(orders) != list(range(1, len(orders) + 1)):
        raise ReorderError("reorder sequence is not a dense 1..N ranking")
    return dict(zip(ids, orders))


class InMemoryElementStore:
    """Dict-backed store for one kind; re-validates writes like a real backend would."""

    def __init__(
        self,
        kind: Union[ElementKind, str],
        id_fn: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.kind = resolve_kind(kind)
        self._model = element_model_for(self.kind)
        self._items: Dict[str, BaseCardElement] = {}
        self._id_fn = id_fn or (lambda: uuid4().hex)
        self._clock = clock or _now

    def _build(self, data: Mapping[str, Any]) -> BaseCardElement:
        try:
            return self._model.model_validate(dict(data))
        except ValidationError as exc:
            raise ElementValidationError(_pydantic_errors(exc)) from exc

    async def list(self) -> List[BaseCardElement]:
        await asyncio.sleep(0)
        items = sorted(self._items.values(), key=lambda item: item.order)
        return [item.model_copy(deep=True) for item in items]

    async def create(self, payload: Mapping[str, Any]) -> BaseCardElement:
        await asyncio.sleep(0)
        data = prepare_payload(self.kind, payload)
        data.pop("order", None)
        errors = validate(self.kind, data)
        if errors:
            raise ElementValidationError(errors)
        # appended at the end; client-sent order is never trusted
        data["order"] = max((item.order for item in self._items.values()), default=0) + 1
        now = self._clock()
        element = self._build({**data, "id": self._id_fn(), "created_at": now, "updated_at": now})
        self._items[element.id] = element
        logger.debug("created %s element %s", self.kind.value, element.id)
        return element.model_copy(deep=True)

    async def update(self, element_id: str, partial: Mapping[str, Any]) -> BaseCardElement:
        await asyncio.sleep(0)
        existing = self._items.get(element_id)
        if existing is None:
            raise NotFoundError(self.kind.value, element_id)
        changes = {k: v for k, v in prepare_payload(self.kind, partial).items() if k != "order"}
        merged = merge_element_data(element_data(existing), changes)
        errors = validate(self.kind, merged)
        if errors:
            raise ElementValidationError(errors)
        merged.update({"id": existing.id, "created_at": existing.created_at, "updated_at": self._clock()})
        element = self._build(merged)
        self._items[element_id] = element
        return element.model_copy(deep=True)

    async def delete(self, element_id: str) -> None:
        await asyncio.sleep(0)
        if self._items.pop(element_id, None) is None:
            raise NotFoundError(self.kind.value, element_id)

    async def bulk_reorder(self, sequence: Sequence[OrderedRef]) -> None:
        await asyncio.sleep(0)
        # Checked in full before any write; no await between check and write.
        assignment = check_reorder_sequence(list(self._items), sequence)
        now = self._clock()
        for element_id, order in assignment.items():
            current = self._items[element_id]
            if current.order != order:
                self._items[element_id] = current.model_copy(update={"order": order, "updated_at": now})


def element_store_from_env(kind: Union[ElementKind, str]) -> ElementStore:
    backend = runtime_config.get_elements_backend()
    if backend == "http":
        from content_engines.element_store.http_adapter import HttpElementStore

        return HttpElementStore(kind)
    if backend not in ("", "memory"):
        logger.warning("unknown ELEMENTS_BACKEND=%r, using in-memory store", backend)
    return InMemoryElementStore(kind)
