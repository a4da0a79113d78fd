from __future__ import annotations

from collections import deque
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Literal

from pydantic import BaseModel

ActivityStatus = Literal["pending", "processing", "completed", "failed"]

MAX_ACTIVITY_ENTRIES = 20


class SessionBusyError(RuntimeError):
    def __init__(self, user_id: str) -> None:
        super().__init__(f"a request is already processing for {user_id}")
        self.user_id = user_id


class ActivityEntry(BaseModel):
    actor: str
    action: str
    status: ActivityStatus
    timestamp: str


class ActivityLog:
    """Most recent activity entries, oldest evicted first.

    Timestamps are clamped so they never go backwards within the log.
    """

    def __init__(self, maxlen: int = MAX_ACTIVITY_ENTRIES) -> None:
        self._entries: deque[ActivityEntry] = deque(maxlen=maxlen)
        self._last: datetime | None = None

    def add(self, actor: str, action: str, status: ActivityStatus) -> ActivityEntry:
        now = datetime.now(timezone.utc)
        if self._last is not None and now < self._last:
            now = self._last
        self._last = now
        entry = ActivityEntry(actor=actor, action=action, status=status, timestamp=now.isoformat())
        self._entries.append(entry)
        return entry

    def entries(self) -> list[ActivityEntry]:
        return list(self._entries)

    def snapshot(self) -> list[dict]:
        return [entry.model_dump() for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)


class SessionState:
    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        self.activity = ActivityLog()
        self.is_processing = False

    def add_activity(self, actor: str, action: str, status: ActivityStatus) -> ActivityEntry:
        return self.activity.add(actor, action, status)

    @contextmanager
    def processing(self) -> Iterator["SessionState"]:
        if self.is_processing:
            raise SessionBusyError(self.user_id)
        self.is_processing = True
        try:
            yield self
        finally:
            self.is_processing = False


class SessionRegistry:
    def __init__(self) -> None:
        self._sessions: dict[str, SessionState] = {}

    def get(self, user_id: str) -> SessionState:
        session = self._sessions.get(user_id)
        if session is None:
            session = SessionState(user_id)
            self._sessions[user_id] = session
        return session
