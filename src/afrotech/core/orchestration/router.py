from __future__ import annotations

import logging
from typing import Iterable

from afrotech.core.models.gateway import GatewayError, LLMGateway
from afrotech.core.models.prompts import fallback_routing_prompt, routing_prompt
from afrotech.core.observability.trace import Trace
from afrotech.core.roles.registry import RoleRegistry
from afrotech.core.roles.schemas import FallbackRoutingDecision, RoutingDecision

logger = logging.getLogger("afrotech.router")


class DirectorRouter:
    """Picks a director for a request: one structured call, then at most one fallback."""

    def __init__(self, gateway: LLMGateway, registry: RoleRegistry) -> None:
        self.gateway = gateway
        self.registry = registry

    async def route(
        self,
        user_request: str,
        history: Iterable[dict[str, str]] = (),
        trace: Trace | None = None,
    ) -> RoutingDecision | None:
        trace = trace or Trace(task=user_request)
        directors = self.registry.directors()
        trace.emit("RoutingStarted", {"directors": len(directors)})

        try:
            decision = await self.gateway.invoke(
                routing_prompt(user_request, directors, history),
                RoutingDecision,
                trace=trace,
            )
        except GatewayError as exc:
            logger.warning("primary director not identified, using fallback: %s", exc)
            trace.emit("RoutingFallback", {"reason": str(exc)})
        else:
            trace.emit("RoutingSucceeded", {"primary_director": decision.primary_director, "fallback": False})
            return decision

        try:
            fallback = await self.gateway.invoke(
                fallback_routing_prompt(user_request, [name for name, _ in directors]),
                FallbackRoutingDecision,
                trace=trace,
            )
        except GatewayError as exc:
            logger.error("no valid director found in routing decision: %s", exc)
            trace.emit("RoutingFailed", {"reason": str(exc)})
            return None

        trace.emit("RoutingSucceeded", {"primary_director": fallback.primary_director, "fallback": True})
        return RoutingDecision(primary_director=fallback.primary_director)
