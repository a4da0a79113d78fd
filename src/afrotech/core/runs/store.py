from __future__ import annotations

from typing import Any, Sequence

from afrotech.core.store import DataStore, EntityNotFoundError

from .schemas import ALLOWED_TRANSITIONS, InvalidTaskTransition, Task, TaskPriority, TaskStatus


class TaskStore:
    """Durable Task records kept in the ``Task`` entity collection.

    Status only moves forward (pending -> processing -> completed | failed);
    records are never deleted here.
    """

    def __init__(self, store: DataStore) -> None:
        self._collection = store.entity("Task")

    def create(
        self,
        user_id: str,
        user_request: str,
        priority: TaskPriority = "medium",
        correlation_id: str | None = None,
    ) -> Task:
        record = self._collection.create(
            {
                "user_id": user_id,
                "created_by": user_id,
                "user_request": user_request,
                "status": "pending",
                "priority": priority,
                "assigned_agents": [],
                "execution_log": [],
                "result": None,
                "correlation_id": correlation_id,
            }
        )
        return Task.model_validate(record)

    def get(self, task_id: str, user_id: str | None = None) -> Task | None:
        try:
            record = self._collection.get(task_id)
        except EntityNotFoundError:
            return None
        if user_id is not None and record.get("user_id") != user_id:
            return None
        return Task.model_validate(record)

    def _require(self, task_id: str) -> Task:
        task = self.get(task_id)
        if task is None:
            raise EntityNotFoundError("Task", task_id)
        return task

    def transition(self, task_id: str, status: TaskStatus, **fields: Any) -> Task:
        current = self._require(task_id)
        if status not in ALLOWED_TRANSITIONS[current.status]:
            raise InvalidTaskTransition(task_id, current.status, status)
        record = self._collection.update(task_id, {**fields, "status": status})
        return Task.model_validate(record)

    def assign(self, task_id: str, agents: Sequence[str]) -> Task:
        self._require(task_id)
        return Task.model_validate(self._collection.update(task_id, {"assigned_agents": list(agents)}))

    def persist_task(
        self,
        task_id: str,
        final_status: TaskStatus,
        result: str,
        log: Sequence[dict[str, Any]],
    ) -> Task:
        return self.transition(task_id, final_status, result=result, execution_log=list(log))

    def list_recent(self, user_id: str, limit: int = 50) -> list[Task]:
        if limit <= 0:
            return []
        records = self._collection.filter({"user_id": user_id}, order_by="-created_date", limit=limit)
        return [Task.model_validate(record) for record in records]

    def search(self, user_id: str, q: str, limit: int = 50) -> list[Task]:
        query = q.casefold().strip()
        if limit <= 0:
            return []
        if not query:
            return self.list_recent(user_id, limit)

        matches: list[Task] = []
        for record in self._collection.filter({"user_id": user_id}, order_by="-created_date"):
            haystack = " ".join(
                [
                    str(record.get("id") or ""),
                    str(record.get("correlation_id") or ""),
                    str(record.get("user_request") or ""),
                    str(record.get("result") or ""),
                ]
            ).casefold()
            if query in haystack:
                matches.append(Task.model_validate(record))
            if len(matches) >= limit:
                break
        return matches
