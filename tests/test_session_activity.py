from __future__ import annotations

import pytest

from afrotech.core.orchestration.session import ActivityLog, SessionBusyError, SessionRegistry, SessionState


def test_activity_log_keeps_twenty_most_recent() -> None:
    log = ActivityLog()
    for index in range(25):
        log.add("Master Orchestrator", f"step {index}", "completed")

    entries = log.entries()
    assert len(entries) == 20
    assert entries[0].action == "step 5"
    assert entries[-1].action == "step 24"


def test_activity_timestamps_never_decrease() -> None:
    log = ActivityLog()
    for index in range(30):
        log.add("Master Orchestrator", f"step {index}", "processing")

    stamps = [entry["timestamp"] for entry in log.snapshot()]
    assert stamps == sorted(stamps)


def test_session_refuses_concurrent_runs_and_always_clears_flag() -> None:
    session = SessionState("u1")

    with session.processing():
        assert session.is_processing is True
        with pytest.raises(SessionBusyError):
            with session.processing():
                pass

    assert session.is_processing is False

    with pytest.raises(RuntimeError):
        with session.processing():
            raise RuntimeError("boom")
    assert session.is_processing is False


def test_session_registry_returns_same_session_per_user() -> None:
    sessions = SessionRegistry()
    assert sessions.get("u1") is sessions.get("u1")
    assert sessions.get("u1") is not sessions.get("u2")


def test_activity_accepts_every_status() -> None:
    log = ActivityLog()

    for status in ("pending", "processing", "completed", "failed"):
        log.add("Content Manager", f"step {status}", status)

    assert [entry.status for entry in log.entries()] == ["pending", "processing", "completed", "failed"]
