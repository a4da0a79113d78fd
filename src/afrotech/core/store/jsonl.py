from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from uuid import uuid4

from afrotech.core.config.loader import default_state_dir

from .base import EntityNotFoundError, StoreError

ENTITY_NAMES = (
    "Task",
    "Conversation",
    "Contact",
    "ContentCalendar",
    "AuditLog",
    "AgentInteraction",
    "PowerUp",
    "UserSecurity",
)

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _file_name(entity: str) -> str:
    return _CAMEL_RE.sub("_", entity).casefold() + ".jsonl"


class JsonlEntityStore:
    """Document collection kept as one JSON object per line.

    Every record carries ``id``, ``created_date`` and ``updated_date``.
    ``order_by`` takes a field name, prefixed with ``-`` for descending.
    """

    def __init__(self, state_dir: Path, entity: str, max_records: int | None = None) -> None:
        self.entity = entity
        self.state_dir = state_dir
        self.file_path = state_dir / "entities" / _file_name(entity)
        self.max_records = max_records
        self.file_path.parent.mkdir(parents=True, exist_ok=True)

    def _load_all(self) -> list[dict[str, Any]]:
        if not self.file_path.exists():
            return []
        records: list[dict[str, Any]] = []
        try:
            with self.file_path.open("r", encoding="utf-8") as handle:
                for line in handle:
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        payload = json.loads(line)
                    except json.JSONDecodeError:
                        continue
                    if isinstance(payload, dict) and payload.get("id"):
                        records.append(payload)
        except OSError as exc:
            raise StoreError(f"could not read {self.entity} records: {exc}") from exc
        return records

    def _rewrite(self, records: list[dict[str, Any]]) -> None:
        if self.max_records is not None and len(records) > self.max_records:
            records = records[-max(1, self.max_records) :]
        tmp_path = self.file_path.with_suffix(".tmp")
        try:
            with tmp_path.open("w", encoding="utf-8") as handle:
                for record in records:
                    handle.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")
            tmp_path.replace(self.file_path)
        except OSError as exc:
            raise StoreError(f"could not write {self.entity} records: {exc}") from exc

    @staticmethod
    def _sorted(records: list[dict[str, Any]], order_by: str | None) -> list[dict[str, Any]]:
        if not order_by:
            return records
        reverse = order_by.startswith("-")
        field = order_by.lstrip("-+")
        return sorted(records, key=lambda item: str(item.get(field) or ""), reverse=reverse)

    @staticmethod
    def _limited(records: list[dict[str, Any]], limit: int | None) -> list[dict[str, Any]]:
        if limit is None:
            return records
        return records[: max(0, limit)]

    def list(self, order_by: str | None = None, limit: int | None = None) -> list[dict[str, Any]]:
        return self._limited(self._sorted(self._load_all(), order_by), limit)

    def filter(self, predicate: dict[str, Any], order_by: str | None = None, limit: int | None = None) -> list[dict[str, Any]]:
        matches = [
            record
            for record in self._load_all()
            if all(record.get(key) == value for key, value in predicate.items())
        ]
        return self._limited(self._sorted(matches, order_by), limit)

    def get(self, id: str) -> dict[str, Any]:
        for record in self._load_all():
            if record.get("id") == id:
                return record
        raise EntityNotFoundError(self.entity, id)

    def create(self, data: dict[str, Any]) -> dict[str, Any]:
        timestamp = now_iso()
        record = dict(data)
        record["id"] = str(record.get("id") or uuid4().hex)
        record.setdefault("created_date", timestamp)
        record["updated_date"] = timestamp
        try:
            with self.file_path.open("a", encoding="utf-8") as handle:
                handle.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")
        except OSError as exc:
            raise StoreError(f"could not append {self.entity} record: {exc}") from exc
        if self.max_records is not None:
            records = self._load_all()
            if len(records) > self.max_records:
                self._rewrite(records)
        return record

    def update(self, id: str, data: dict[str, Any]) -> dict[str, Any]:
        records = self._load_all()
        for idx, current in enumerate(records):
            if current.get("id") == id:
                merged = {**current, **data, "id": id, "created_date": current.get("created_date")}
                merged["updated_date"] = now_iso()
                records[idx] = merged
                self._rewrite(records)
                return merged
        raise EntityNotFoundError(self.entity, id)

    def delete(self, id: str) -> dict[str, Any]:
        records = self._load_all()
        remaining = [record for record in records if record.get("id") != id]
        if len(remaining) == len(records):
            raise EntityNotFoundError(self.entity, id)
        self._rewrite(remaining)
        return {"id": id}


class DataStore:
    """Entry point to every entity collection, keyed by entity name."""

    def __init__(self, state_dir: Path | None = None, max_records: dict[str, int] | None = None) -> None:
        self.state_dir = state_dir or default_state_dir()
        self.state_dir.mkdir(parents=True, exist_ok=True)
        self._max_records = dict(max_records or {})
        self._collections: dict[str, JsonlEntityStore] = {}

    def entity(self, name: str) -> JsonlEntityStore:
        if name not in ENTITY_NAMES:
            raise StoreError(f"unknown entity: {name}")
        collection = self._collections.get(name)
        if collection is None:
            collection = JsonlEntityStore(self.state_dir, name, max_records=self._max_records.get(name))
            self._collections[name] = collection
        return collection
