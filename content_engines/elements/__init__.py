"""Card element kinds, their registry and the shared error taxonomy."""

from content_engines.elements.errors import (
    ConcurrencyConflict,
    ElementsError,
    ElementValidationError,
    ErrorMap,
    NotFoundError,
    ReorderError,
    StoreError,
    UnknownElementKind,
)
from content_engines.elements.models import (
    BaseCardElement,
    CardElement,
    ElementKind,
    PillarElement,
    PolicyElement,
    ProjectElement,
    ProjectType,
    ServiceCta,
    ServiceElement,
    StatisticElement,
    element_model_for,
)
from content_engines.elements.registry import (
    ELEMENT_CONFIGS,
    ElementTypeConfig,
    FieldSpec,
    FieldType,
    FieldValidation,
    default_element,
    get_element_config,
    list_element_configs,
    resolve_kind,
)

__all__ = [
    "BaseCardElement",
    "CardElement",
    "ConcurrencyConflict",
    "ELEMENT_CONFIGS",
    "ElementKind",
    "ElementTypeConfig",
    "ElementValidationError",
    "ElementsError",
    "ErrorMap",
    "FieldSpec",
    "FieldType",
    "FieldValidation",
    "NotFoundError",
    "PillarElement",
    "PolicyElement",
    "ProjectElement",
    "ProjectType",
    "ReorderError",
    "ServiceCta",
    "ServiceElement",
    "StatisticElement",
    "StoreError",
    "UnknownElementKind",
    "default_element",
    "element_model_for",
    "get_element_config",
    "list_element_configs",
    "resolve_kind",
]
