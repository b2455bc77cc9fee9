"""CRUD orchestrator: one per kind, serializes every mutation of its collection.

States are ``Idle`` and ``Mutating(op, target)``. A second intent arriving
while a mutation is in flight raises ConcurrencyConflict before any store
call; nothing is queued. The state flips to Mutating before the first await,
so two coroutines started in the same tick cannot both reach the store.

create/update/delete are confirm-before-apply. Reorder is optimistic: the new
arrangement is visible immediately and rolled back to the exact pre-drag
snapshot if the store refuses it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

from content_engines.element_store.repository import ElementStore, element_store_from_env
from content_engines.element_validation.service import prepare_payload, validate
from content_engines.elements.errors import (
    ConcurrencyConflict,
    ElementsError,
    ElementValidationError,
    NotFoundError,
)
from content_engines.elements.models import (
    BaseCardElement,
    ElementKind,
    element_data,
    merge_element_data,
    strip_server_fields,
)
from content_engines.elements.registry import ElementTypeConfig, get_element_config, resolve_kind
from content_engines.logging.audit import emit_audit_event
from content_engines.reorder.engine import move_element, renumber, reorder_by_ids, same_arrangement

logger = logging.getLogger(__name__)

Listener = Callable[[List[BaseCardElement]], None]


@dataclass(frozen=True)
class OrchestratorState:
    op: Optional[str] = None
    target: Optional[str] = None

    @property
    def idle(self) -> bool:
        return self.op is None


IDLE = OrchestratorState()


class ElementOrchestrator:
    def __init__(self, kind: Union[ElementKind, str], store: Optional[ElementStore] = None) -> None:
        self.kind = resolve_kind(kind)
        self._store = store or element_store_from_env(self.kind)
        self._elements: List[BaseCardElement] = []
        self._state = IDLE
        self._listeners: List[Listener] = []

    @property
    def config(self) -> ElementTypeConfig:
        return get_element_config(self.kind)

    @property
    def state(self) -> OrchestratorState:
        return self._state

    @property
    def elements(self) -> List[BaseCardElement]:
        return [item.model_copy(deep=True) for item in self._elements]

    def get(self, element_id: str) -> Optional[BaseCardElement]:
        found = self._find(element_id)
        return found.model_copy(deep=True) if found else None

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with the collection after every visible change."""
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    # --- state machine -------------------------------------------------

    def _ensure_idle(self, op: str, target: Optional[str] = None) -> None:
        if not self._state.idle:
            logger.warning(
                "%s: rejected %s(%s) while %s(%s) in flight",
                self.kind.value, op, target or "", self._state.op, self._state.target or "",
            )
            raise ConcurrencyConflict(self.kind.value, self._state.op or "", self._state.target)

    def _begin(self, op: str, target: Optional[str] = None) -> None:
        self._ensure_idle(op, target)
        self._state = OrchestratorState(op=op, target=target)

    def _end(self) -> None:
        self._state = IDLE

    def _find(self, element_id: str) -> Optional[BaseCardElement]:
        for item in self._elements:
            if item.id == element_id:
                return item
        return None

    def _set_elements(self, elements: Sequence[BaseCardElement]) -> None:
        self._elements = list(elements)
        snapshot = self.elements
        for listener in list(self._listeners):
            listener(snapshot)

    async def _reload_after_missing(self) -> None:
        try:
            items = await self._store.list()
        except ElementsError:
            logger.warning("%s: refresh after missing element failed", self.kind.value, exc_info=True)
            return
        self._set_elements(renumber(sorted(items, key=lambda item: item.order)))

    # --- operations ----------------------------------------------------

    async def load(self) -> List[BaseCardElement]:
        self._begin("load")
        try:
            items = await self._store.list()
            self._set_elements(renumber(sorted(items, key=lambda item: item.order)))
        finally:
            self._end()
        logger.info("%s: loaded %d elements", self.kind.value, len(self._elements))
        return self.elements

    refresh = load

    async def create(self, candidate: Mapping[str, Any]) -> BaseCardElement:
        self._ensure_idle("create")
        errors = validate(self.kind, candidate)
        if errors:
            logger.info("%s: create blocked by validation on %s", self.kind.value, sorted(errors))
            raise ElementValidationError(errors)

        payload = prepare_payload(self.kind, candidate)
        payload["order"] = max((item.order for item in self._elements), default=0) + 1

        self._begin("create")
        try:
            created = await self._store.create(payload)
            self._set_elements(renumber([*self._elements, created]))
        except ElementsError as exc:
            logger.warning("%s: create failed: %s", self.kind.value, exc.message)
            raise
        finally:
            self._end()

        result = self._elements[-1]
        logger.info("%s: created %s", self.kind.value, result.id)
        emit_audit_event(self.kind.value, "elements.create", metadata={"id": result.id})
        return result.model_copy(deep=True)

    async def update(self, element_id: str, partial: Mapping[str, Any]) -> BaseCardElement:
        self._ensure_idle("update", element_id)
        existing = self._find(element_id)
        if existing is None:
            raise NotFoundError(self.kind.value, element_id)

        # order only moves through reorder()
        changes = {k: v for k, v in strip_server_fields(partial).items() if k != "order"}
        errors = validate(self.kind, merge_element_data(element_data(existing), changes))
        if errors:
            logger.info("%s: update of %s blocked by validation on %s", self.kind.value, element_id, sorted(errors))
            raise ElementValidationError(errors)

        snapshot = list(self._elements)
        self._begin("update", element_id)
        try:
            updated = await self._store.update(element_id, prepare_payload(self.kind, changes))
            updated = updated.model_copy(update={"order": existing.order})
            self._set_elements([updated if item.id == element_id else item for item in self._elements])
        except NotFoundError:
            self._elements = snapshot
            logger.warning("%s: %s vanished before update; refreshing", self.kind.value, element_id)
            await self._reload_after_missing()
            raise
        except ElementsError as exc:
            self._elements = snapshot
            logger.warning("%s: update of %s failed: %s", self.kind.value, element_id, exc.message)
            raise
        finally:
            self._end()

        logger.info("%s: updated %s", self.kind.value, element_id)
        emit_audit_event(self.kind.value, "elements.update", metadata={"id": element_id, "fields": sorted(changes)})
        return updated.model_copy(deep=True)

    async def delete(self, element_id: str) -> None:
        self._ensure_idle("delete", element_id)
        if self._find(element_id) is None:
            raise NotFoundError(self.kind.value, element_id)

        self._begin("delete", element_id)
        try:
            try:
                await self._store.delete(element_id)
            except NotFoundError:
                logger.warning("%s: %s already gone; refreshing", self.kind.value, element_id)
                await self._reload_after_missing()
                raise
            except ElementsError as exc:
                logger.warning("%s: delete of %s failed: %s", self.kind.value, element_id, exc.message)
                raise

            remaining = renumber([item for item in self._elements if item.id != element_id])
            self._set_elements(remaining)
            try:
                await self._store.bulk_reorder(remaining)
            except ElementsError as exc:
                # The delete is confirmed; the local sequence stays dense and the next reorder repairs the store.
                logger.warning("%s: renumber after deleting %s failed: %s", self.kind.value, element_id, exc.message)
                raise
        finally:
            self._end()

        logger.info("%s: deleted %s", self.kind.value, element_id)
        emit_audit_event(self.kind.value, "elements.delete", metadata={"id": element_id})

    async def reorder(self, id_sequence: Sequence[str]) -> List[BaseCardElement]:
        self._ensure_idle("reorder")
        return await self._apply_order(reorder_by_ids(self._elements, id_sequence))

    async def move(self, source_index: int, destination_index: int) -> List[BaseCardElement]:
        """Drag gesture form of reorder: move one element between positions."""
        self._ensure_idle("reorder")
        return await self._apply_order(move_element(self._elements, source_index, destination_index))

    async def _apply_order(self, proposed: List[BaseCardElement]) -> List[BaseCardElement]:
        if same_arrangement(proposed, self._elements):
            return self.elements

        snapshot = list(self._elements)
        self._begin("reorder")
        self._set_elements(proposed)
        try:
            await self._store.bulk_reorder(proposed)
        except ElementsError as exc:
            logger.warning("%s: reorder rejected, rolling back: %s", self.kind.value, exc.message)
            self._set_elements(snapshot)
            raise
        finally:
            self._end()

        logger.info("%s: reordered %d elements", self.kind.value, len(proposed))
        emit_audit_event(self.kind.value, "elements.reorder", metadata={"ids": [item.id for item in proposed]})
        return self.elements
