import json
import logging

import pytest

from content_engines.logging import audit


def test_emit_passes_event_to_sink(audit_events):
    audit.emit_audit_event("pillars", "elements.create", metadata={"id": "p1"})
    assert len(audit_events) == 1
    event = audit_events[0]
    assert (event.kind, event.action, event.surface) == ("pillars", "elements.create", "elements")
    assert event.metadata == {"id": "p1"}
    assert event.at.tzinfo is not None


def test_default_sink_logs_json(caplog):
    audit.reset_audit_logger()
    with caplog.at_level(logging.INFO, logger="content_engines.audit"):
        audit.emit_audit_event("statistics", "elements.reorder", metadata={"ids": ["a", "b"]})
    record = next(r for r in caplog.records if r.name == "content_engines.audit")
    payload = json.loads(record.getMessage())
    assert payload["action"] == "elements.reorder"
    assert payload["metadata"] == {"ids": ["a", "b"]}


def test_sink_failure_is_logged_when_not_strict(monkeypatch, caplog):
    monkeypatch.delenv("AUDIT_STRICT", raising=False)
    audit.set_audit_logger(lambda event: {"status": "rejected", "error": "disk full"})
    with caplog.at_level(logging.WARNING, logger="content_engines.logging.audit"):
        audit.emit_audit_event("services", "elements.delete")
    assert "disk full" in caplog.text


def test_sink_failure_raises_in_strict_mode(monkeypatch):
    monkeypatch.setenv("AUDIT_STRICT", "1")
    audit.set_audit_logger(lambda event: None)
    with pytest.raises(RuntimeError, match="audit persistence failed"):
        audit.emit_audit_event("services", "elements.delete")
