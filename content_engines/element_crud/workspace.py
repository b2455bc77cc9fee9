"""Workspace holding one orchestrator per element kind."""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional, Union

from content_engines.element_crud.insights import ActivityEntry, WorkspaceSummary, recent_activity, summarize
from content_engines.element_crud.orchestrator import ElementOrchestrator
from content_engines.element_store.repository import ElementStore, element_store_from_env
from content_engines.elements.models import ElementKind
from content_engines.elements.registry import resolve_kind

logger = logging.getLogger(__name__)

StoreFactory = Callable[[ElementKind], ElementStore]


class ElementWorkspace:
    def __init__(self, store_factory: Optional[StoreFactory] = None) -> None:
        factory = store_factory or element_store_from_env
        self._orchestrators: Dict[ElementKind, ElementOrchestrator] = {
            kind: ElementOrchestrator(kind, factory(kind)) for kind in ElementKind
        }

    def orchestrator(self, kind: Union[ElementKind, str]) -> ElementOrchestrator:
        return self._orchestrators[resolve_kind(kind)]

    async def load_all(self) -> Dict[str, int]:
        """Load every kind concurrently; collections share no state."""
        kinds = list(self._orchestrators)
        results = await asyncio.gather(
            *(self._orchestrators[kind].load() for kind in kinds),
            return_exceptions=True,
        )
        counts: Dict[str, int] = {}
        failures = []
        for kind, result in zip(kinds, results):
            if isinstance(result, BaseException):
                logger.warning("loading %s failed: %s", kind.value, result)
                failures.append(result)
                continue
            counts[kind.value] = len(result)
        if failures:
            raise failures[0]
        return counts

    def _collections(self):
        return {kind.value: orch.elements for kind, orch in self._orchestrators.items()}

    def summary(self, now: Optional[datetime] = None, recent_days: Optional[int] = None) -> WorkspaceSummary:
        return summarize(self._collections(), now=now, recent_days=recent_days)

    def recent_activity(self, limit: int = 10) -> List[ActivityEntry]:
        return recent_activity(self._collections(), limit=limit)


_default_workspace: Optional[ElementWorkspace] = None


def get_element_workspace() -> ElementWorkspace:
    global _default_workspace
    if _default_workspace is None:
        _default_workspace = ElementWorkspace()
    return _default_workspace


def set_element_workspace(workspace: Optional[ElementWorkspace]) -> None:
    global _default_workspace
    _default_workspace = workspace
