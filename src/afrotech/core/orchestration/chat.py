from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from afrotech.core.logging.context import log_context
from afrotech.core.models.gateway import GatewayError
from afrotech.core.observability.trace import Trace
from afrotech.core.roles.base import RoleError
from afrotech.core.runs.schemas import TaskPriority
from afrotech.core.runs.store import TaskStore
from afrotech.core.security.audit import AuditSink
from afrotech.core.security.compliance import ensure_compliance
from afrotech.core.store import DataStore
from afrotech.core.store.jsonl import now_iso
from afrotech.core.store.schemas import ChatMessage, Conversation

from .orchestrator import ORCHESTRATOR_NAME, Orchestrator
from .session import SessionRegistry, SessionState

logger = logging.getLogger("afrotech.chat")

HISTORY_TURNS = 10


def apology(reason: str) -> str:
    return (
        f"I encountered an issue processing your request: {reason}. The technical team has been notified. "
        "Please try rephrasing your request, or ask me to try a different approach."
    )


@dataclass
class ChatTurn:
    task_id: str
    response: str
    status: str
    primary_director: Optional[str] = None
    assigned_agents: list[str] = field(default_factory=list)
    trace_events: list[dict[str, Any]] = field(default_factory=list)


class ConversationLog:
    """The user's active conversation is the most recently created one."""

    def __init__(self, store: DataStore) -> None:
        self._collection = store.entity("Conversation")

    def active(self, user_id: str) -> Conversation | None:
        records = self._collection.filter({"created_by": user_id}, order_by="-created_date", limit=1)
        return Conversation.model_validate(records[0]) if records else None

    def append(self, user_id: str, message: ChatMessage) -> Conversation:
        conversation = self.active(user_id)
        if conversation is None:
            record = self._collection.create({"created_by": user_id, "messages": [message.model_dump()]})
            return Conversation.model_validate(record)
        messages = [*conversation.messages, message]
        record = self._collection.update(conversation.id, {"messages": [item.model_dump() for item in messages]})
        return Conversation.model_validate(record)


class ChatService:
    """Handles one chat message end to end for a user session."""

    def __init__(
        self,
        store: DataStore,
        orchestrator: Orchestrator,
        tasks: TaskStore,
        sessions: SessionRegistry,
        audit: AuditSink,
        default_compliance_level: Optional[str] = None,
    ) -> None:
        self.store = store
        self.orchestrator = orchestrator
        self.tasks = tasks
        self.sessions = sessions
        self.audit = audit
        self.conversations = ConversationLog(store)
        self.default_compliance_level = default_compliance_level

    def compliance_level(self, user_id: str) -> Optional[str]:
        profiles = self.store.entity("UserSecurity").filter({"user_id": user_id}, order_by="-created_date", limit=1)
        if profiles and profiles[0].get("compliance_level"):
            return str(profiles[0]["compliance_level"])
        return self.default_compliance_level

    async def handle_message(
        self,
        user_id: str,
        message: str,
        priority: TaskPriority = "medium",
        correlation_id: Optional[str] = None,
    ) -> ChatTurn:
        session = self.sessions.get(user_id)
        with session.processing(), log_context(user_id=user_id):
            user_message = ChatMessage(role="user", content=message, timestamp=now_iso())
            conversation = self.conversations.active(user_id)
            history = [
                {"role": item.role, "content": item.content}
                for item in (conversation.messages if conversation else [])[-HISTORY_TURNS:]
            ]
            self.conversations.append(user_id, user_message)

            level = self.compliance_level(user_id)
            if level:
                ensure_compliance({"type": "message", "details": message}, {"user_id": user_id}, level)

            task = self.tasks.create(user_id, message, priority=priority, correlation_id=correlation_id)
            task = self.tasks.transition(task.id, "processing")

            with log_context(task_id=task.id):
                trace = Trace(task=message, task_id=task.id, correlation_id=correlation_id)
                assigned: list[str] = []

                def _on_routed(_routing, order: list[str]) -> None:
                    assigned.extend(order)
                    self.tasks.assign(task.id, order)

                try:
                    outcome = await self.orchestrator.run(
                        message,
                        history,
                        session=session,
                        trace=trace,
                        on_routed=_on_routed,
                    )
                    if not outcome.ok:
                        return self._fail(session, task.id, user_message, outcome.error or "routing failed", trace)

                    reply = outcome.final_response or ""
                    self.conversations.append(
                        user_id,
                        ChatMessage(
                            role="assistant",
                            content=reply,
                            timestamp=max(now_iso(), user_message.timestamp),
                            agent_name=ORCHESTRATOR_NAME,
                        ),
                    )
                except (GatewayError, RoleError) as exc:
                    logger.warning("orchestration failed: %s", exc)
                    return self._fail(session, task.id, user_message, str(exc), trace, assigned)

                self.tasks.persist_task(task.id, "completed", reply, session.activity.snapshot())
                self.audit.audit_action(
                    user_id,
                    {"type": "task_completion", "details": message},
                    {"success": True, "task_id": task.id},
                )
                session.add_activity(ORCHESTRATOR_NAME, "Task completed successfully", "completed")
                return ChatTurn(
                    task_id=task.id,
                    response=reply,
                    status="completed",
                    primary_director=outcome.routing.primary_director if outcome.routing else None,
                    assigned_agents=outcome.execution_order,
                    trace_events=trace.events,
                )

    def _fail(
        self,
        session: SessionState,
        task_id: str,
        user_message: ChatMessage,
        reason: str,
        trace: Trace,
        assigned: list[str] | None = None,
    ) -> ChatTurn:
        reply = apology(reason)
        self.conversations.append(
            session.user_id,
            ChatMessage(role="assistant", content=reply, timestamp=max(now_iso(), user_message.timestamp)),
        )
        session.add_activity(ORCHESTRATOR_NAME, f"Task failed: {reason}", "failed")
        self.tasks.persist_task(task_id, "failed", reply, session.activity.snapshot())
        return ChatTurn(
            task_id=task_id,
            response=reply,
            status="failed",
            assigned_agents=list(assigned or []),
            trace_events=trace.events,
        )
