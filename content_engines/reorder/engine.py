"""Pure reorder functions over ordered element sequences.

No I/O and no shared state. Inputs are never mutated; every function returns
fresh element copies whose ``order`` is the dense 1..N rank of their index.
"""
from __future__ import annotations

from typing import List, Sequence, TypeVar

from content_engines.elements.errors import ReorderError
from content_engines.elements.models import BaseCardElement

E = TypeVar("E", bound=BaseCardElement)


def renumber(sequence: Sequence[E]) -> List[E]:
    return [item.model_copy(update={"order": index + 1}) for index, item in enumerate(sequence)]


def move_element(sequence: Sequence[E], source_index: int, destination_index: int) -> List[E]:
    """Remove the item at ``source_index`` and reinsert it at ``destination_index``."""
    size = len(sequence)
    if not 0 <= source_index < size:
        raise ReorderError(f"source index {source_index} out of range for {size} elements")
    if not 0 <= destination_index < size:
        raise ReorderError(f"destination index {destination_index} out of range for {size} elements")
    items = list(sequence)
    moved = items.pop(source_index)
    items.insert(destination_index, moved)
    return renumber(items)


def reorder_by_ids(sequence: Sequence[E], id_sequence: Sequence[str]) -> List[E]:
    """Rebuild ``sequence`` following ``id_sequence``; both must hold the same ids."""
    by_id = {item.id: item for item in sequence}
    if len(id_sequence) != len(set(id_sequence)):
        raise ReorderError("id sequence contains duplicates")
    if set(id_sequence) != set(by_id):
        missing = sorted(set(by_id) - set(id_sequence))
        unknown = sorted(set(id_sequence) - set(by_id))
        raise ReorderError(
            "id sequence does not match the collection",
            details={"missing": missing, "unknown": unknown},
        )
    return renumber([by_id[element_id] for element_id in id_sequence])


def is_dense(sequence: Sequence[BaseCardElement]) -> bool:
    orders = sorted(item.order for item in sequence)
    return orders == list(range(1, len(sequence) + 1))


def same_arrangement(left: Sequence[BaseCardElement], right: Sequence[BaseCardElement]) -> bool:
    """True when both sequences hold the same ids with the same order values, in the same positions."""
    return [(i.id, i.order) for i in left] == [(i.id, i.order) for i in right]
