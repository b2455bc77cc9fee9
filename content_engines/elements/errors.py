"""Error taxonomy shared by the element engines.

Every error carries ``error_code``/``status_code``/``message`` so routes can
turn it into the canonical error envelope without inspecting its type.
"""
from __future__ import annotations

from typing import Dict, Optional

ErrorMap = Dict[str, str]


class ElementsError(Exception):
    """Base element-management error."""

    error_code = "elements.error"
    status_code = 500

    def __init__(self, message: str, details: Optional[dict] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ElementValidationError(ElementsError):
    """Field-level validation failed; carries the ErrorMap."""

    error_code = "elements.validation_failed"
    status_code = 400

    def __init__(self, errors: ErrorMap, message: str = "Hay errores de validación") -> None:
        self.errors: ErrorMap = dict(errors)
        super().__init__(message, details={"errors": self.errors})


class NotFoundError(ElementsError):
    """Target element is missing from the kind's collection."""

    error_code = "elements.not_found"
    status_code = 404

    def __init__(self, kind: str, element_id: str) -> None:
        self.kind = kind
        self.element_id = element_id
        super().__init__(
            f"{kind} element {element_id} not found",
            details={"kind": kind, "id": element_id},
        )


class StoreError(ElementsError):
    """Persistence or transport failure."""

    error_code = "elements.store_error"
    status_code = 502


class ReorderError(StoreError):
    """A reorder request does not describe a consistent dense sequence."""

    error_code = "elements.reorder_invalid"
    status_code = 409


class ConcurrencyConflict(ElementsError):
    """A mutation was requested while another one is in flight."""

    error_code = "elements.concurrency_conflict"
    status_code = 409

    def __init__(self, kind: str, in_flight: str, target: Optional[str] = None) -> None:
        self.kind = kind
        self.in_flight = in_flight
        self.target = target
        super().__init__(
            f"{kind}: '{in_flight}' still in progress",
            details={"kind": kind, "in_flight": in_flight, "target": target},
        )


class UnknownElementKind(ElementsError):
    error_code = "elements.unknown_kind"
    status_code = 404

    def __init__(self, kind: object) -> None:
        self.kind = kind
        super().__init__(f"unknown element kind: {kind}", details={"kind": str(kind)})
