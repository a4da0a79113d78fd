from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from afrotech.core.models.gateway import LLMGateway
from afrotech.core.models.prompts import synthesis_prompt
from afrotech.core.observability.trace import Trace
from afrotech.core.roles.registry import RoleRegistry
from afrotech.core.roles.schemas import RoutingDecision

from .router import DirectorRouter
from .session import SessionState

logger = logging.getLogger("afrotech.orchestrator")

ORCHESTRATOR_NAME = "Master Orchestrator"
ROUTING_FAILURE_MESSAGE = "Could not determine which director should handle this request."


@dataclass
class OrchestrationResult:
    ok: bool
    routing: RoutingDecision | None
    results: list[dict[str, Any]] = field(default_factory=list)
    final_response: str | None = None
    execution_order: list[str] = field(default_factory=list)
    error: str | None = None
    trace_events: list[dict[str, Any]] = field(default_factory=list)


def execution_order_for(routing: RoutingDecision) -> list[str]:
    return list(routing.execution_order) or [routing.primary_director]


class Orchestrator:
    """Route, run each director in order, then write one reply.

    Roles run sequentially and each one sees every earlier result under
    ``previous_results``. Errors raised after routing propagate to the caller.
    """

    def __init__(self, gateway: LLMGateway, registry: RoleRegistry, router: DirectorRouter | None = None) -> None:
        self.gateway = gateway
        self.registry = registry
        self.router = router or DirectorRouter(gateway, registry)

    async def route(
        self,
        user_request: str,
        history: Iterable[dict[str, str]] = (),
        trace: Trace | None = None,
    ) -> RoutingDecision | None:
        return await self.router.route(user_request, history, trace=trace)

    async def execute_request(
        self,
        user_request: str,
        routing: RoutingDecision | None,
        trace: Trace | None = None,
        session: SessionState | None = None,
    ) -> list[dict[str, Any]]:
        if routing is None:
            return [{"error": ROUTING_FAILURE_MESSAGE}]

        results: list[dict[str, Any]] = []
        for name in execution_order_for(routing):
            role = self.registry.get(name)
            output = await role.execute(user_request, {"previous_results": list(results)}, trace=trace)
            results.append(output.model_dump())
            if session is not None:
                session.add_activity(name, "Execution plan ready", "completed")
        return results

    async def synthesize(self, user_request: str, results: list[dict[str, Any]], trace: Trace | None = None) -> str:
        reply = await self.gateway.invoke(synthesis_prompt(user_request, results), trace=trace)
        if trace is not None:
            trace.emit("ResponseSynthesized", {"length": len(reply)})
        return reply

    async def run(
        self,
        user_request: str,
        history: Iterable[dict[str, str]] = (),
        session: SessionState | None = None,
        trace: Trace | None = None,
        on_routed: Callable[[RoutingDecision, list[str]], Any] | None = None,
    ) -> OrchestrationResult:
        trace = trace or Trace(task=user_request)
        if session is not None:
            session.add_activity(ORCHESTRATOR_NAME, "Analyzing request...", "processing")

        routing = await self.route(user_request, history, trace=trace)
        if routing is None:
            return OrchestrationResult(
                ok=False,
                routing=None,
                results=await self.execute_request(user_request, None),
                error=ROUTING_FAILURE_MESSAGE,
                trace_events=trace.events,
            )

        order = execution_order_for(routing)
        if session is not None:
            session.add_activity(ORCHESTRATOR_NAME, f"Routing to {routing.primary_director}", "completed")
        if on_routed is not None:
            on_routed(routing, order)

        results = await self.execute_request(user_request, routing, trace=trace, session=session)
        final_response = await self.synthesize(user_request, results, trace=trace)
        logger.info(
            "orchestration_completed",
            extra={"extra_fields": {"primary_director": routing.primary_director, "steps": len(results)}},
        )
        return OrchestrationResult(
            ok=True,
            routing=routing,
            results=results,
            final_response=final_response,
            execution_order=order,
            trace_events=trace.events,
        )
