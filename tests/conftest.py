from __future__ import annotations

import json
from typing import Any

import pytest

from afrotech.apps.api import deps
from afrotech.core.http.errors import AfrotechHTTPNetworkError
from afrotech.core.models.gateway import GatewayConfig, LLMGateway
from afrotech.core.models.llm_openai_compat import OpenAICompatClient


class ScriptedCompletions:
    """Stands in for the completion endpoint; replies are served in order.

    A dict is sent back as JSON text, an exception is raised as-is.
    """

    def __init__(self, replies: list[Any] | None = None) -> None:
        self.replies = list(replies or [])
        self.calls: list[dict[str, Any]] = []

    def queue(self, *replies: Any) -> None:
        self.replies.extend(replies)

    async def __call__(self, system: str, user: str, temperature: float, max_tokens: int, response_format: dict | None = None) -> str:
        self.calls.append(
            {
                "system": system,
                "user": user,
                "json": response_format is not None,
                "max_tokens": max_tokens,
            }
        )
        if not self.replies:
            raise AfrotechHTTPNetworkError("no scripted reply left")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, dict):
            return json.dumps(reply)
        return str(reply)


def make_gateway(script: ScriptedCompletions) -> LLMGateway:
    config = GatewayConfig(
        provider="http",
        url="http://llm.test/v1/chat/completions",
        model="test-model",
        timeout_s=5.0,
        temperature=0.4,
        max_tokens_json=2000,
        max_tokens_text=1200,
        retries=0,
    )
    client = OpenAICompatClient(url=config.url, model=config.model)
    client.chat_completion = script  # type: ignore[method-assign]
    return LLMGateway(config=config, client=client)


@pytest.fixture(autouse=True)
def disable_auth_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AFROTECH_AUTH_MODE", "off")
    monkeypatch.delenv("AFROTECH_AUTH_TOKEN", raising=False)
    monkeypatch.delenv("AFROTECH_AUTH_USERS", raising=False)
    monkeypatch.delenv("AFROTECH_CONFIG_PATH", raising=False)
    monkeypatch.delenv("AFROTECH_IMAGE_URL", raising=False)
    monkeypatch.setenv("AFROTECH_LOG_TO_FILE", "off")


@pytest.fixture
def script() -> ScriptedCompletions:
    return ScriptedCompletions()


@pytest.fixture
def gateway(script: ScriptedCompletions) -> LLMGateway:
    return make_gateway(script)


@pytest.fixture
def api_state(tmp_path, monkeypatch: pytest.MonkeyPatch, script: ScriptedCompletions):
    """Fresh state dir and an LLM served by ``script`` for API tests."""
    monkeypatch.setenv("AFROTECH_STATE_DIR", str(tmp_path))
    monkeypatch.setenv("AFROTECH_LLM_PROVIDER", "http")
    monkeypatch.setattr(OpenAICompatClient, "chat_completion", lambda self, **kwargs: script(**kwargs))
    deps.clear_caches()
    yield tmp_path
    deps.clear_caches()
