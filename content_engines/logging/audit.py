"""Audit helper for element mutations."""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, Field

from content_engines.config.runtime_config import audit_strict

logger = logging.getLogger(__name__)
_sink_logger = logging.getLogger("content_engines.audit")


def _now() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    kind: str
    action: str
    surface: str = "elements"
    metadata: Dict[str, Any] = Field(default_factory=dict)
    at: datetime = Field(default_factory=_now)


def _log_sink(event: AuditEvent) -> dict:
    _sink_logger.info(json.dumps(event.model_dump(mode="json"), ensure_ascii=False))
    return {"status": "accepted"}


_audit_logger: Callable[[AuditEvent], Optional[dict]] = _log_sink


def set_audit_logger(sink: Callable[[AuditEvent], Optional[dict]]) -> None:
    global _audit_logger
    _audit_logger = sink


def reset_audit_logger() -> None:
    set_audit_logger(_log_sink)


def emit_audit_event(
    kind: str,
    action: str,
    surface: str = "elements",
    metadata: Optional[Dict[str, Any]] = None,
) -> None:
    event = AuditEvent(kind=str(kind), action=action, surface=surface, metadata=metadata or {})
    result = _audit_logger(event)
    if not result or result.get("status") != "accepted":
        detail = (result or {}).get("error", "audit persistence failed")
        if audit_strict():
            raise RuntimeError(detail)
        logger.warning("audit persistence failed: %s", detail)
