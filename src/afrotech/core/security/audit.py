from __future__ import annotations

import logging
from typing import Any, Protocol

from afrotech.core.store import DataStore, StoreError
from afrotech.core.store.jsonl import now_iso

logger = logging.getLogger("afrotech.audit")


class AuditSink(Protocol):
    def audit_action(self, user_id: str, action: dict[str, Any], result: Any) -> None: ...


class StoreAuditSink:
    """Writes AuditLog entries; a failed write is logged and never raised."""

    def __init__(self, store: DataStore) -> None:
        self.store = store

    def audit_action(self, user_id: str, action: dict[str, Any], result: Any) -> None:
        try:
            self.store.entity("AuditLog").create(
                {
                    "user_id": user_id,
                    "created_by": user_id,
                    "action_type": action.get("type"),
                    "action_details": action.get("details"),
                    "result": result,
                    "ip_address": "masked_for_privacy",
                    "timestamp": now_iso(),
                }
            )
        except (StoreError, OSError) as exc:
            logger.warning("audit logging failed: %s", exc, extra={"extra_fields": {"action_type": action.get("type")}})
