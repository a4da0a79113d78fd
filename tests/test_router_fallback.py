from __future__ import annotations

import asyncio

from afrotech.core.http.errors import AfrotechHTTPNetworkError
from afrotech.core.observability.trace import Trace
from afrotech.core.orchestration.orchestrator import ROUTING_FAILURE_MESSAGE, Orchestrator
from afrotech.core.orchestration.router import DirectorRouter
from afrotech.core.roles.registry import build_default_registry


def test_router_uses_first_decision_when_valid(gateway, script) -> None:
    router = DirectorRouter(gateway, build_default_registry(gateway))
    script.queue({"primary_director": "Health & Wellness Director", "user_intent": "meal plan"})
    trace = Trace(task="plan my meals")

    decision = asyncio.run(router.route("plan my meals", [{"role": "user", "content": "hi"}], trace=trace))

    assert decision is not None
    assert decision.primary_director == "Health & Wellness Director"
    assert len(script.calls) == 1
    assert "Health & Wellness Director: Focuses on medical" in script.calls[0]["user"]
    assert "user: hi" in script.calls[0]["user"]
    assert "RoutingFallback" not in trace.names()


def test_router_makes_exactly_one_fallback_call(gateway, script) -> None:
    router = DirectorRouter(gateway, build_default_registry(gateway))
    script.queue(
        {"primary_director": "Chief Vibes Director"},
        {"primary_director": "Business Operations Director"},
    )
    trace = Trace(task="hire a salesperson")

    decision = asyncio.run(router.route("hire a salesperson", trace=trace))

    assert decision is not None
    assert decision.primary_director == "Business Operations Director"
    assert decision.execution_order == []
    assert len(script.calls) == 2
    assert "Respond with JSON containing only the 'primary_director' key." in script.calls[1]["user"]
    assert trace.names().count("RoutingFallback") == 1


def test_routing_failure_runs_no_roles(gateway, script) -> None:
    orchestrator = Orchestrator(gateway, build_default_registry(gateway))
    script.queue(AfrotechHTTPNetworkError("down"), AfrotechHTTPNetworkError("still down"))
    trace = Trace(task="anything")

    result = asyncio.run(orchestrator.run("anything", trace=trace))

    assert result.ok is False
    assert result.results == [{"error": ROUTING_FAILURE_MESSAGE}]
    assert result.final_response is None
    assert len(script.calls) == 2
    assert "RoutingFailed" in trace.names()
    assert "RoleStarted" not in trace.names()


def test_execute_request_without_routing_returns_error_entry(gateway, script) -> None:
    orchestrator = Orchestrator(gateway, build_default_registry(gateway))

    results = asyncio.run(orchestrator.execute_request("anything", None))

    assert results == [{"error": "Could not determine which director should handle this request."}]
    assert script.calls == []


def test_router_keeps_decision_with_free_form_lists(gateway, script) -> None:
    router = DirectorRouter(gateway, build_default_registry(gateway))
    script.queue(
        {
            "primary_director": "Business Operations Director",
            "supporting_directors": ["Content Manager"],
            "execution_order": ["Business Operations Director", "Chief Vibes Director"],
        }
    )
    trace = Trace(task="launch plan")

    decision = asyncio.run(router.route("launch plan", trace=trace))

    assert decision is not None
    assert decision.primary_director == "Business Operations Director"
    assert decision.supporting_directors == ["Content Manager"]
    assert decision.execution_order == ["Business Operations Director", "Chief Vibes Director"]
    assert len(script.calls) == 1
    assert "RoutingFallback" not in trace.names()
