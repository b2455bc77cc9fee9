"""Runtime configuration helpers for the element engines."""
from __future__ import annotations

import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "http://localhost:8000"
DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_RECENT_DAYS = 7


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(name, default)


def _float_env(name: str, default: float) -> float:
    raw = _get_env(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("ignoring non-numeric %s=%r", name, raw)
        return default


def get_elements_backend() -> str:
    return (_get_env("ELEMENTS_BACKEND") or "memory").strip().lower()


def get_elements_api_base_url() -> str:
    return (_get_env("ELEMENTS_API_BASE_URL") or DEFAULT_API_BASE_URL).rstrip("/")


def get_elements_http_timeout() -> float:
    return _float_env("ELEMENTS_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT)


def get_recent_days() -> int:
    return int(_float_env("ELEMENTS_RECENT_DAYS", DEFAULT_RECENT_DAYS))


def audit_strict() -> bool:
    return _get_env("AUDIT_STRICT") == "1"
