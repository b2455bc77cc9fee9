"""Field validation for card elements.

``validate`` is pure and synchronous: it reads the registry schema for the
kind and returns an ErrorMap (field key -> display message). An empty map
means the candidate may be sent to a store.
"""
from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Optional, Union

from content_engines.elements.errors import ErrorMap
from content_engines.elements.models import ElementKind, strip_server_fields
from content_engines.elements.registry import FieldSpec, FieldType, get_element_config
from content_engines.icons.catalog import is_valid_icon

MSG_INVALID_NUMBER = "Debe ser un número válido"
MSG_INVALID_ICON = "Ícono no válido"
MSG_INVALID_URL = "Debe ser una URL válida (http/https) o ruta relativa (/)"
MSG_INVALID_OPTION = "Opción no válida"

_MISSING = object()


def get_path(data: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """Resolve a dotted key (``cta.text``) against nested mappings."""
    current: Any = data
    for part in key.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return default
        current = current[part]
    return current


def is_empty(value: Any) -> bool:
    if value is None or value is _MISSING:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def to_number(value: Any) -> Optional[float]:
    """Numeric value of ``value`` or None when it is not a finite number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def _fmt(bound: float) -> str:
    return str(int(bound)) if float(bound).is_integer() else str(bound)


def _check_field(spec: FieldSpec, value: Any) -> Optional[str]:
    if spec.type == FieldType.number:
        number = to_number(value)
        if number is None:
            return MSG_INVALID_NUMBER
        rules = spec.validation
        if rules is not None and rules.min is not None and number < rules.min:
            return f"Debe ser mayor o igual a {_fmt(rules.min)}"
        if rules is not None and rules.max is not None and number > rules.max:
            return f"Debe ser menor o igual a {_fmt(rules.max)}"
        return None
    if spec.type == FieldType.icon:
        return None if is_valid_icon(value) else MSG_INVALID_ICON
    if spec.type in (FieldType.url, FieldType.image):
        if not isinstance(value, str) or not (value.startswith("http") or value.startswith("/")):
            return MSG_INVALID_URL
        return None
    if spec.type == FieldType.select:
        option = getattr(value, "value", value)
        return None if option in spec.options else MSG_INVALID_OPTION
    return None


def validate(kind: Union[ElementKind, str], candidate: Mapping[str, Any]) -> ErrorMap:
    config = get_element_config(kind)
    errors: ErrorMap = {}

    for spec in config.fields:
        value = get_path(candidate, spec.key, _MISSING)
        if is_empty(value):
            if spec.required:
                errors[spec.key] = f"{spec.label} es requerido"
            continue
        message = _check_field(spec, value)
        if message:
            errors[spec.key] = message

    for key, message in config.required_extras:
        if is_empty(get_path(candidate, key, _MISSING)):
            errors[key] = message

    return errors


def is_valid(kind: Union[ElementKind, str], candidate: Mapping[str, Any]) -> bool:
    return not validate(kind, candidate)


def prepare_payload(kind: Union[ElementKind, str], data: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy of ``data`` ready for a store: server-owned keys dropped, numbers coerced."""
    config = get_element_config(kind)
    payload = strip_server_fields(data)
    for spec in config.fields:
        if spec.type != FieldType.number or "." in spec.key or spec.key not in payload:
            continue
        number = to_number(payload[spec.key])
        if number is not None:
            payload[spec.key] = int(number) if number.is_integer() else number
    return payload
