"""Element store adapters (in-memory, HTTP) and the reference REST backend."""

from content_engines.element_store.http_adapter import HttpElementStore
from content_engines.element_store.repository import (
    ElementStore,
    InMemoryElementStore,
    ReorderItem,
    check_reorder_sequence,
    element_store_from_env,
)

__all__ = [
    "ElementStore",
    "HttpElementStore",
    "InMemoryElementStore",
    "ReorderItem",
    "check_reorder_sequence",
    "element_store_from_env",
]
