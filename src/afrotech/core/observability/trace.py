from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass
class Trace:
    task: str
    task_id: str | None = None
    correlation_id: str | None = None
    events: list[dict[str, Any]] = field(default_factory=list)

    def emit(self, name: str, payload: dict[str, Any] | None = None) -> None:
        enriched_payload = dict(payload or {})
        if self.task_id:
            enriched_payload.setdefault("task_id", self.task_id)
        if self.correlation_id:
            enriched_payload.setdefault("correlation_id", self.correlation_id)
        self.events.append(
            {
                "event": name,
                "ts_iso": datetime.now(timezone.utc).isoformat(),
                "payload": enriched_payload,
            }
        )

    def names(self) -> list[str]:
        return [event["event"] for event in self.events]
