from __future__ import annotations

import asyncio

import httpx
import pytest

from afrotech.core.http.errors import AfrotechHTTPStatusError
from afrotech.core.models.gateway import GatewayConfig, GatewayOutputError, GatewayUnavailable, LLMGateway
from afrotech.core.observability.trace import Trace
from afrotech.core.roles.schemas import LeadQualification, RoutingDecision


def test_gateway_validates_json_into_response_model(gateway, script) -> None:
    script.queue({"primary_director": "Creative & Content Director", "complexity_level": "simple"})

    decision = asyncio.run(gateway.invoke("route this", RoutingDecision))

    assert isinstance(decision, RoutingDecision)
    assert decision.primary_director == "Creative & Content Director"
    assert decision.execution_order == []
    assert script.calls[0]["json"] is True
    assert "primary_director" in script.calls[0]["user"]


def test_gateway_strips_code_fences(gateway, script) -> None:
    script.queue('```json\n{"primary_director": "Personal Life Director"}\n```')

    decision = asyncio.run(gateway.invoke("route this", RoutingDecision))

    assert decision.primary_director == "Personal Life Director"


def test_gateway_rejects_non_json_reply(gateway, script) -> None:
    script.queue("I think the Personal Life Director fits best.")

    with pytest.raises(GatewayOutputError):
        asyncio.run(gateway.invoke("route this", RoutingDecision))


def test_gateway_rejects_disallowed_enum_value(gateway, script) -> None:
    script.queue({"qualification_score": 80, "qualification_level": "lukewarm"})
    trace = Trace(task="qualify")

    with pytest.raises(GatewayOutputError):
        asyncio.run(gateway.invoke("qualify this lead", LeadQualification, trace=trace))

    assert "GatewayOutputRejected" in trace.names()


def test_gateway_rejects_unknown_director(gateway, script) -> None:
    script.queue({"primary_director": "Space Exploration Director"})

    with pytest.raises(GatewayOutputError):
        asyncio.run(gateway.invoke("route this", RoutingDecision))


def test_gateway_text_mode_and_internet_flag(gateway, script) -> None:
    script.queue("Here is your summary.")

    reply = asyncio.run(gateway.invoke("summarize", add_context_from_internet=True))

    assert reply == "Here is your summary."
    assert script.calls[0]["json"] is False
    assert "current, publicly available information" in script.calls[0]["system"]


def test_gateway_transport_failure_is_unavailable(gateway, script) -> None:
    script.queue(AfrotechHTTPStatusError("HTTP status 503 for [redacted-url]", status_code=503))
    trace = Trace(task="route")

    with pytest.raises(GatewayUnavailable):
        asyncio.run(gateway.invoke("route this", RoutingDecision, trace=trace))

    assert "GatewayUnavailable" in trace.names()
    [event] = [event for event in trace.events if event["event"] == "GatewayUnavailable"]
    assert event["payload"]["status_code"] == 503


def test_gateway_provider_off_is_unavailable(monkeypatch) -> None:
    monkeypatch.setenv("AFROTECH_LLM_PROVIDER", "off")
    gateway = LLMGateway(config=GatewayConfig.from_env())

    assert gateway.enabled is False
    with pytest.raises(GatewayUnavailable):
        asyncio.run(gateway.invoke("hello"))


@pytest.mark.parametrize("body", [[{"choices": []}], "just text", {"choices": ["hello"]}, {"choices": [{"message": "hi"}]}])
def test_gateway_malformed_completion_body_is_unavailable(monkeypatch, body) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, request=request, json=body)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    monkeypatch.setattr("afrotech.core.http.client.get_http_client", lambda: client)
    monkeypatch.setenv("AFROTECH_LLM_PROVIDER", "http")
    monkeypatch.setenv("AFROTECH_LLM_URL", "http://llm.test/v1/chat/completions")
    gateway = LLMGateway(config=GatewayConfig.from_env())
    trace = Trace(task="hello")

    with pytest.raises(GatewayUnavailable):
        asyncio.run(gateway.invoke("hello", trace=trace))

    assert "GatewayUnavailable" in trace.names()
