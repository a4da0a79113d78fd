from __future__ import annotations

import pytest

from afrotech.apps.api import deps
from afrotech.core.runs.schemas import InvalidTaskTransition
from afrotech.core.runs.store import TaskStore
from afrotech.core.store import DataStore


def test_task_lifecycle_moves_forward(tmp_path) -> None:
    tasks = TaskStore(DataStore(state_dir=tmp_path))

    task = tasks.create("u1", "Write an Instagram caption", correlation_id="corr-1")
    assert task.status == "pending"
    assert task.priority == "medium"

    tasks.transition(task.id, "processing")
    tasks.assign(task.id, ["Creative & Content Director"])
    done = tasks.persist_task(task.id, "completed", "Here it is", [{"actor": "Master Orchestrator"}])

    assert done.status == "completed"
    assert done.result == "Here it is"
    assert done.assigned_agents == ["Creative & Content Director"]
    assert done.execution_log == [{"actor": "Master Orchestrator"}]


def test_task_store_refuses_backwards_and_skipping_transitions(tmp_path) -> None:
    tasks = TaskStore(DataStore(state_dir=tmp_path))
    task = tasks.create("u1", "hello")

    with pytest.raises(InvalidTaskTransition):
        tasks.transition(task.id, "completed")

    tasks.transition(task.id, "processing")
    tasks.transition(task.id, "failed")

    with pytest.raises(InvalidTaskTransition):
        tasks.transition(task.id, "processing")
    with pytest.raises(InvalidTaskTransition):
        tasks.persist_task(task.id, "completed", "late", [])


def test_task_store_is_scoped_by_user_and_searchable(tmp_path) -> None:
    tasks = TaskStore(DataStore(state_dir=tmp_path))
    first = tasks.create("u1", "draft a newsletter")
    tasks.create("u1", "plan a trip")
    tasks.create("u2", "draft a contract")

    assert tasks.get(first.id, user_id="u2") is None
    assert tasks.get(first.id, user_id="u1") is not None

    assert [task.user_request for task in tasks.search("u1", "draft")] == ["draft a newsletter"]
    assert len(tasks.list_recent("u1")) == 2
    assert tasks.list_recent("u1", limit=0) == []


def test_default_store_keeps_every_task(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("AFROTECH_STATE_DIR", str(tmp_path))
    monkeypatch.delenv("AFROTECH_TASKS_MAX", raising=False)
    deps.clear_caches()
    try:
        store = deps.get_data_store()
        tasks = TaskStore(store)
        created = [tasks.create("u1", f"request {idx}") for idx in range(501)]
        tasks.transition(created[-1].id, "processing")
    finally:
        deps.clear_caches()

    assert store.entity("Task").max_records is None
    assert tasks.get(created[0].id) is not None
    assert len(store.entity("Task").list()) == 501
