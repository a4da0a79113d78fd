from __future__ import annotations

from typing import Any, Protocol


class StoreError(RuntimeError):
    """Base error for entity store operations."""


class EntityNotFoundError(StoreError):
    def __init__(self, entity: str, id: str) -> None:
        super().__init__(f"{entity} not found: {id}")
        self.entity = entity
        self.id = id


class EntityStore(Protocol):
    entity: str

    def list(self, order_by: str | None = None, limit: int | None = None) -> list[dict[str, Any]]: ...

    def filter(self, predicate: dict[str, Any], order_by: str | None = None, limit: int | None = None) -> list[dict[str, Any]]: ...

    def get(self, id: str) -> dict[str, Any]: ...

    def create(self, data: dict[str, Any]) -> dict[str, Any]: ...

    def update(self, id: str, data: dict[str, Any]) -> dict[str, Any]: ...

    def delete(self, id: str) -> dict[str, Any]: ...
