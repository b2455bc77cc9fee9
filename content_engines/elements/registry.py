"""Element type registry: static field schemas and display metadata per kind.

Built once at import and never mutated afterwards; callers get frozen
dataclasses and a read-only mapping, so the registry can be shared freely.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from content_engines.elements.errors import UnknownElementKind
from content_engines.elements.models import ElementKind, ProjectType


class FieldType(str, Enum):
    text = "text"
    textarea = "textarea"
    number = "number"
    select = "select"
    icon = "icon"
    url = "url"
    image = "image"


@dataclass(frozen=True)
class FieldValidation:
    min: Optional[float] = None
    max: Optional[float] = None


@dataclass(frozen=True)
class FieldSpec:
    key: str
    label: str
    type: FieldType
    required: bool = False
    validation: Optional[FieldValidation] = None
    options: Tuple[str, ...] = ()
    placeholder: Optional[str] = None


@dataclass(frozen=True)
class ElementTypeConfig:
    kind: ElementKind
    display_name: str
    plural_name: str
    description: str
    fields: Tuple[FieldSpec, ...]
    # key -> message, enforced on top of the field schema
    required_extras: Tuple[Tuple[str, str], ...] = ()

    def get_field(self, key: str) -> Optional[FieldSpec]:
        for spec in self.fields:
            if spec.key == key:
                return spec
        return None

    @property
    def required_keys(self) -> List[str]:
        keys = [spec.key for spec in self.fields if spec.required]
        keys.extend(key for key, _ in self.required_extras if key not in keys)
        return keys


_TITLE = FieldSpec("title", "Título", FieldType.text, required=True, placeholder="Título de la tarjeta")
_DESCRIPTION = FieldSpec("description", "Descripción", FieldType.textarea, required=True)


_CONFIGS: Dict[ElementKind, ElementTypeConfig] = {
    ElementKind.statistics: ElementTypeConfig(
        kind=ElementKind.statistics,
        display_name="Estadística",
        plural_name="Estadísticas",
        description="Métricas y logros destacados de la empresa",
        fields=(
            _TITLE,
            FieldSpec("description", "Descripción", FieldType.textarea),
            FieldSpec(
                "value",
                "Valor",
                FieldType.number,
                required=True,
                validation=FieldValidation(min=0, max=1_000_000_000),
                placeholder="150",
            ),
            FieldSpec("icon", "Ícono", FieldType.icon, required=True),
        ),
        required_extras=(
            ("label", "La etiqueta es requerida para estadísticas"),
            ("suffix", "El sufijo es requerido para estadísticas"),
        ),
    ),
    ElementKind.pillars: ElementTypeConfig(
        kind=ElementKind.pillars,
        display_name="Pilar",
        plural_name="Pilares",
        description="Pilares temáticos que sostienen la propuesta de valor",
        fields=(
            _TITLE,
            _DESCRIPTION,
            FieldSpec("icon", "Ícono", FieldType.icon, required=True),
            FieldSpec("image", "Imagen", FieldType.image),
            FieldSpec("image_fallback", "Imagen alternativa", FieldType.image),
        ),
    ),
    ElementKind.policies: ElementTypeConfig(
        kind=ElementKind.policies,
        display_name="Política",
        plural_name="Políticas",
        description="Políticas y compromisos corporativos",
        fields=(
            _TITLE,
            _DESCRIPTION,
            FieldSpec("icon", "Ícono", FieldType.icon, required=True),
            FieldSpec("image", "Imagen", FieldType.image),
            FieldSpec("image_fallback", "Imagen alternativa", FieldType.image),
        ),
    ),
    ElementKind.services: ElementTypeConfig(
        kind=ElementKind.services,
        display_name="Servicio",
        plural_name="Servicios",
        description="Servicios ofrecidos por la empresa",
        fields=(
            _TITLE,
            _DESCRIPTION,
            FieldSpec("image_url", "Imagen", FieldType.image),
            FieldSpec("image_url_fallback", "Imagen alternativa", FieldType.image),
            FieldSpec("icon_url", "URL del ícono", FieldType.url),
            FieldSpec("cta.text", "Texto del botón", FieldType.text, placeholder="Ver más"),
            FieldSpec("cta.url", "Enlace del botón", FieldType.url),
        ),
    ),
    ElementKind.projects: ElementTypeConfig(
        kind=ElementKind.projects,
        display_name="Proyecto",
        plural_name="Proyectos",
        description="Casos de estudio y proyectos destacados",
        fields=(
            FieldSpec("name", "Nombre", FieldType.text, required=True),
            _TITLE,
            FieldSpec("description", "Descripción", FieldType.textarea),
            FieldSpec(
                "type",
                "Tipo",
                FieldType.select,
                required=True,
                options=tuple(t.value for t in ProjectType),
            ),
            FieldSpec("image_url", "Imagen", FieldType.image),
            FieldSpec("image_url_fallback", "Imagen alternativa", FieldType.image),
        ),
        required_extras=(
            ("name", "El nombre del proyecto es requerido"),
            ("type", "El tipo de proyecto es requerido"),
        ),
    ),
}

ELEMENT_CONFIGS: Mapping[ElementKind, ElementTypeConfig] = MappingProxyType(_CONFIGS)


def resolve_kind(kind: Union[ElementKind, str]) -> ElementKind:
    try:
        return ElementKind(kind)
    except ValueError as exc:
        raise UnknownElementKind(kind) from exc


def get_element_config(kind: Union[ElementKind, str]) -> ElementTypeConfig:
    return ELEMENT_CONFIGS[resolve_kind(kind)]


def list_element_configs() -> List[ElementTypeConfig]:
    return [ELEMENT_CONFIGS[kind] for kind in ElementKind]


def _set_path(data: Dict[str, Any], key: str, value: Any) -> None:
    head, _, rest = key.partition(".")
    if not rest:
        data[head] = value
        return
    nested = data.setdefault(head, {})
    _set_path(nested, rest, value)


def default_element(kind: Union[ElementKind, str]) -> Dict[str, Any]:
    """Initial values for a create form of ``kind``."""
    config = get_element_config(kind)
    data: Dict[str, Any] = {"title": "", "description": "", "order": 0, "enabled": True}
    for spec in config.fields:
        if spec.type == FieldType.number:
            value: Any = 0
        elif spec.type == FieldType.select and spec.options:
            value = spec.options[0]
        else:
            value = ""
        _set_path(data, spec.key, value)

    if config.kind == ElementKind.statistics:
        data.update({"icon": "Award", "value": 0, "suffix": "", "label": ""})
    elif config.kind == ElementKind.projects:
        data.update({"name": "", "type": ProjectType.comercial.value})
    return data
