from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from afrotech.core.runs.store import TaskStore

from .auth import get_current_user
from .deps import get_task_store

router = APIRouter()


@router.get("")
def list_tasks(
    q: str = Query(default=""),
    limit: int = Query(default=50),
    user_id: str = Depends(get_current_user),
    tasks: TaskStore = Depends(get_task_store),
) -> dict:
    normalized_limit = max(1, min(200, limit))
    records = tasks.search(user_id, q, limit=normalized_limit)
    return {"q": q, "limit": normalized_limit, "tasks": [record.model_dump() for record in records]}


@router.get("/{task_id}")
def get_task(
    task_id: str,
    user_id: str = Depends(get_current_user),
    tasks: TaskStore = Depends(get_task_store),
) -> dict:
    record = tasks.get(task_id, user_id=user_id)
    if record is None:
        raise HTTPException(status_code=404, detail="task not found")
    return record.model_dump()
