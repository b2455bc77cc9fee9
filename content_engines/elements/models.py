"""Pydantic models for the card element kinds."""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, Literal, Mapping, Optional, Type, Union

from pydantic import BaseModel, Field


class ElementKind(str, Enum):
    statistics = "statistics"
    pillars = "pillars"
    policies = "policies"
    services = "services"
    projects = "projects"


class ProjectType(str, Enum):
    comercial = "Comercial"
    industrial = "Industrial"
    residencial = "Residencial"
    institucional = "Institucional"
    infraestructura = "Infraestructura"


# Never accepted from clients on create/update.
SERVER_OWNED_FIELDS = frozenset({"id", "created_at", "updated_at", "kind"})


class BaseCardElement(BaseModel):
    id: str
    title: str = ""
    description: str = ""
    order: int = 0
    enabled: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StatisticElement(BaseCardElement):
    kind: Literal["statistics"] = "statistics"
    value: float = 0
    suffix: str = ""
    label: str = ""
    icon: str = ""


class PillarElement(BaseCardElement):
    kind: Literal["pillars"] = "pillars"
    icon: str = ""
    image: str = ""
    image_fallback: str = ""


class PolicyElement(BaseCardElement):
    kind: Literal["policies"] = "policies"
    icon: str = ""
    image: str = ""
    image_fallback: str = ""


class ServiceCta(BaseModel):
    text: str = ""
    url: str = ""


class ServiceElement(BaseCardElement):
    kind: Literal["services"] = "services"
    image_url: str = ""
    image_url_fallback: str = ""
    icon_url: str = ""
    cta: ServiceCta = Field(default_factory=ServiceCta)


class ProjectElement(BaseCardElement):
    kind: Literal["projects"] = "projects"
    name: str = ""
    type: ProjectType = ProjectType.comercial
    image_url: str = ""
    image_url_fallback: str = ""


CardElement = Annotated[
    Union[StatisticElement, PillarElement, PolicyElement, ServiceElement, ProjectElement],
    Field(discriminator="kind"),
]

_MODELS: Dict[ElementKind, Type[BaseCardElement]] = {
    ElementKind.statistics: StatisticElement,
    ElementKind.pillars: PillarElement,
    ElementKind.policies: PolicyElement,
    ElementKind.services: ServiceElement,
    ElementKind.projects: ProjectElement,
}


def element_model_for(kind: ElementKind) -> Type[BaseCardElement]:
    return _MODELS[ElementKind(kind)]


def element_data(element: BaseCardElement) -> Dict[str, Any]:
    """Plain JSON-compatible dict of an element (enums as values, ISO datetimes)."""
    return element.model_dump(mode="json")


def merge_element_data(base: Mapping[str, Any], partial: Mapping[str, Any]) -> Dict[str, Any]:
    """Overlay ``partial`` onto ``base``; nested objects (``cta``) merge one level deep."""
    merged = dict(base)
    for key, value in partial.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = {**current, **value}
        else:
            merged[key] = value
    return merged


def strip_server_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k not in SERVER_OWNED_FIELDS}
