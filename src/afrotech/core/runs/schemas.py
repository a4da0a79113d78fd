from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

TaskStatus = Literal["pending", "processing", "completed", "failed"]
TaskPriority = Literal["low", "medium", "high", "urgent"]

ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    "pending": frozenset({"processing"}),
    "processing": frozenset({"completed", "failed"}),
    "completed": frozenset(),
    "failed": frozenset(),
}


class InvalidTaskTransition(RuntimeError):
    def __init__(self, task_id: str, current: str, target: str) -> None:
        super().__init__(f"task {task_id}: cannot move from {current} to {target}")
        self.task_id = task_id
        self.current = current
        self.target = target


class Task(BaseModel):
    id: str
    user_id: str
    user_request: str
    status: TaskStatus = "pending"
    priority: TaskPriority = "medium"
    assigned_agents: list[str] = Field(default_factory=list)
    execution_log: list[dict[str, Any]] = Field(default_factory=list)
    result: Optional[str] = None
    correlation_id: Optional[str] = None
    created_date: Optional[str] = None
    updated_date: Optional[str] = None
