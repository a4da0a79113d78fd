from __future__ import annotations

import logging
from typing import Any

from afrotech.core.models.gateway import LLMGateway
from afrotech.core.models.prompts import agent_matching_prompt
from afrotech.core.observability.trace import Trace
from afrotech.core.store import DataStore, StoreError

from .registry import RoleRegistry
from .schemas import AgentSelection

logger = logging.getLogger("afrotech.coordinator")

AGENT_EXPERTISE: dict[str, list[str]] = {
    "SEO Agent": ["search optimization", "keywords", "ranking", "technical SEO"],
    "Viral Content Agent": ["viral mechanics", "trending topics", "engagement"],
    "Instagram Agent": ["visual content", "reels", "stories", "influencer marketing"],
    "TikTok Agent": ["short video", "trending sounds", "Gen Z content"],
    "YouTube Agent": ["long-form video", "video SEO", "monetization"],
    "Lead Qualification Agent": ["lead scoring", "BANT framework", "prospect analysis"],
    "Sales Nurturing Agent": ["relationship building", "follow-up sequences", "objection handling"],
    "Closing Agent": ["negotiation", "deal closing", "contract finalization"],
    "Graphic Design Agent": ["visual design", "branding", "graphics"],
    "Video Script Agent": ["scriptwriting", "storyboarding", "video planning"],
    "Email Marketing Agent": ["email campaigns", "subject lines", "deliverability"],
}


class AgentCoordinator:
    def __init__(self, gateway: LLMGateway, registry: RoleRegistry, store: DataStore) -> None:
        self.gateway = gateway
        self.registry = registry
        self.store = store

    @staticmethod
    def get_agent_expertise(agent_name: str) -> list[str]:
        return list(AGENT_EXPERTISE.get(agent_name, []))

    def _catalog(self) -> list[tuple[str, str]]:
        roles = [*self.registry.roles("agent"), *self.registry.roles("manager")]
        return [(role.name, role.description) for role in roles]

    async def find_best_agent(self, task: str, context: Any = None, trace: Trace | None = None) -> AgentSelection:
        prompt = agent_matching_prompt(task, context or {}, self._catalog())
        return await self.gateway.invoke(prompt, AgentSelection, trace=trace)

    def request_agent_help(
        self,
        requesting_agent: str,
        target_agent: str,
        request_context: Any,
        task_id: str | None = None,
    ) -> dict[str, Any] | None:
        try:
            return self.store.entity("AgentInteraction").create(
                {
                    "requesting_agent": requesting_agent,
                    "target_agent": target_agent,
                    "interaction_type": "collaboration",
                    "request_context": request_context,
                    "task_id": task_id,
                    "status": "pending",
                }
            )
        except StoreError as exc:
            logger.error("agent interaction create failed: %s", exc)
            return None

    def complete_interaction(
        self,
        interaction_id: str,
        response: Any,
        data_shared: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        try:
            return self.store.entity("AgentInteraction").update(
                interaction_id,
                {"response": response, "data_shared": dict(data_shared or {}), "status": "completed"},
            )
        except StoreError as exc:
            logger.error("agent interaction update failed: %s", exc)
            return None
