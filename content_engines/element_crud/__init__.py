"""CRUD orchestration for card element collections."""

from content_engines.element_crud.insights import (
    CollectionStats,
    WorkspaceSummary,
    collection_stats,
    filter_elements,
    summarize,
)
from content_engines.element_crud.orchestrator import IDLE, ElementOrchestrator, OrchestratorState
from content_engines.element_crud.workspace import ElementWorkspace, get_element_workspace, set_element_workspace

__all__ = [
    "CollectionStats",
    "ElementOrchestrator",
    "ElementWorkspace",
    "IDLE",
    "OrchestratorState",
    "WorkspaceSummary",
    "collection_stats",
    "filter_elements",
    "get_element_workspace",
    "set_element_workspace",
    "summarize",
]
