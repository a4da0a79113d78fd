from __future__ import annotations

import logging
import re

from afrotech.core.security.audit import StoreAuditSink
from afrotech.core.security.compliance import ensure_compliance
from afrotech.core.store import DataStore, StoreError


def test_hipaa_checklist() -> None:
    result = ensure_compliance({"type": "message", "details": "x"}, {"user_id": "u1"}, "HIPAA")

    assert result.compliant is True
    assert result.checks_passed == ["data_encryption", "audit_logging", "access_controls", "phi_protection"]
    assert result.restrictions_applied == ["no_public_sharing", "minimum_necessary"]
    assert re.fullmatch(r"audit_\d+", result.audit_log_id)


def test_unknown_level_uses_standard_checklist() -> None:
    for level in ("ISO9001", None, ""):
        result = ensure_compliance({"type": "message"}, {}, level)
        assert result.compliant is True
        assert result.compliance_level == "standard"
        assert result.checks_passed == ["audit_logging"]
        assert result.restrictions_applied == []


def test_audit_sink_writes_entry(tmp_path) -> None:
    store = DataStore(state_dir=tmp_path)
    StoreAuditSink(store).audit_action("u1", {"type": "task_completion", "details": "hello"}, {"success": True, "task_id": "t1"})

    [entry] = store.entity("AuditLog").list()
    assert entry["user_id"] == "u1"
    assert entry["action_type"] == "task_completion"
    assert entry["action_details"] == "hello"
    assert entry["ip_address"] == "masked_for_privacy"
    assert entry["timestamp"]


def test_audit_sink_never_raises(tmp_path, monkeypatch, caplog) -> None:
    store = DataStore(state_dir=tmp_path)

    def broken_create(self, data):
        raise StoreError("disk full")

    monkeypatch.setattr("afrotech.core.store.jsonl.JsonlEntityStore.create", broken_create)
    logger = logging.getLogger("afrotech.audit")
    logger.addHandler(caplog.handler)
    try:
        with caplog.at_level(logging.WARNING, logger="afrotech.audit"):
            StoreAuditSink(store).audit_action("u1", {"type": "task_completion", "details": "hello"}, {"success": True})
    finally:
        logger.removeHandler(caplog.handler)

    assert "audit logging failed" in caplog.text
