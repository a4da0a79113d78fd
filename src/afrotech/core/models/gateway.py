from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass
from typing import TypeVar, overload

from pydantic import BaseModel, ValidationError

from afrotech.core.http.errors import AfrotechHTTPError
from afrotech.core.logging.redact import redact_string
from afrotech.core.observability.trace import Trace

from .llm_openai_compat import OpenAICompatClient
from .prompts import SYSTEM_PROMPT, internet_context_instruction, json_instruction

ModelT = TypeVar("ModelT", bound=BaseModel)

_DEFAULT_URL = "http://127.0.0.1:8001/v1/chat/completions"


class GatewayError(RuntimeError):
    """Base error for every LLM gateway failure."""


class GatewayUnavailable(GatewayError):
    pass


class GatewayOutputError(GatewayError):
    pass


@dataclass
class GatewayConfig:
    provider: str
    url: str
    model: str
    timeout_s: float
    temperature: float
    max_tokens_json: int
    max_tokens_text: int
    retries: int

    @classmethod
    def from_env(cls) -> "GatewayConfig":
        return cls(
            provider=os.getenv("AFROTECH_LLM_PROVIDER", "off").strip().casefold(),
            url=os.getenv("AFROTECH_LLM_URL", _DEFAULT_URL),
            model=os.getenv("AFROTECH_LLM_MODEL", "gpt-4o-mini"),
            timeout_s=float(os.getenv("AFROTECH_LLM_TIMEOUT_S", "60")),
            temperature=float(os.getenv("AFROTECH_LLM_TEMPERATURE", "0.4")),
            max_tokens_json=int(os.getenv("AFROTECH_LLM_MAX_TOKENS_JSON", "2000")),
            max_tokens_text=int(os.getenv("AFROTECH_LLM_MAX_TOKENS_TEXT", "1200")),
            retries=int(os.getenv("AFROTECH_LLM_RETRIES", "0")),
        )


class LLMGateway:
    """Single entry point for every call to the completion provider.

    ``invoke`` returns free text, or an instance of ``response_model`` when one
    is given. The gateway does not retry: callers own any fallback.
    """

    def __init__(self, config: GatewayConfig | None = None, client: OpenAICompatClient | None = None) -> None:
        self.config = config or GatewayConfig.from_env()
        self._compat = client or OpenAICompatClient(
            url=self.config.url,
            model=self.config.model,
            timeout_s=self.config.timeout_s,
            api_key=os.getenv("AFROTECH_LLM_API_KEY") or None,
            retries=self.config.retries,
        )
        self.logger = logging.getLogger("afrotech.gateway")

    @property
    def enabled(self) -> bool:
        return self.config.provider in {"http", "vllm"}

    @overload
    async def invoke(self, prompt: str, response_model: None = None, *, add_context_from_internet: bool = False, trace: Trace | None = None) -> str: ...

    @overload
    async def invoke(self, prompt: str, response_model: type[ModelT], *, add_context_from_internet: bool = False, trace: Trace | None = None) -> ModelT: ...

    async def invoke(self, prompt, response_model=None, *, add_context_from_internet=False, trace=None):
        system = SYSTEM_PROMPT
        if add_context_from_internet:
            system = f"{system}\n{internet_context_instruction()}"

        if response_model is None:
            return await self._call(
                system=system,
                user=prompt,
                max_tokens=self.config.max_tokens_text,
                temperature=self.config.temperature,
                mode="text",
                internet=add_context_from_internet,
                trace=trace,
            )

        schema = response_model.model_json_schema()
        raw = await self._call(
            system=system,
            user=f"{prompt}\n\n{json_instruction(schema)}",
            max_tokens=self.config.max_tokens_json,
            temperature=0.0,
            response_format={"type": "json_object"},
            mode="json",
            internet=add_context_from_internet,
            trace=trace,
        )
        parsed = self._parse_json(raw)
        if parsed is None:
            raise GatewayOutputError(f"{response_model.__name__}: response was not a JSON object")
        try:
            return response_model.model_validate(parsed)
        except ValidationError as exc:
            if trace is not None:
                trace.emit("GatewayOutputRejected", {"model": response_model.__name__, "errors": exc.error_count()})
            raise GatewayOutputError(f"{response_model.__name__}: response did not match schema ({exc.error_count()} errors)") from exc

    async def _call(
        self,
        system: str,
        user: str,
        max_tokens: int,
        temperature: float,
        response_format: dict | None = None,
        mode: str = "text",
        internet: bool = False,
        trace: Trace | None = None,
    ) -> str:
        if not self.enabled:
            raise GatewayUnavailable(f"LLM provider is {self.config.provider}")

        start = time.perf_counter()
        ok = False
        try:
            output = await self._compat.chat_completion(
                system=system,
                user=user,
                temperature=temperature,
                max_tokens=max_tokens,
                response_format=response_format,
            )
            ok = True
            return output
        except (AfrotechHTTPError, ValueError) as exc:
            reason = redact_string(str(exc))
            status_code = exc.status_code if isinstance(exc, AfrotechHTTPError) else None
            if trace is not None:
                trace.emit("GatewayUnavailable", {"mode": mode, "reason": reason, "status_code": status_code})
            raise GatewayUnavailable(f"LLM request failed: {reason}") from exc
        finally:
            self.logger.info(
                "llm_call",
                extra={
                    "extra_fields": {
                        "provider": self.config.provider,
                        "model": self.config.model,
                        "mode": mode,
                        "internet": internet,
                        "duration_ms": int((time.perf_counter() - start) * 1000),
                        "ok": ok,
                        "prompt_len": len(user),
                    }
                },
            )

    def _parse_json(self, raw: str) -> dict | None:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            cleaned = cleaned.strip("`")
            if cleaned.startswith("json"):
                cleaned = cleaned[4:].strip()
        start = cleaned.find("{")
        end = cleaned.rfind("}")
        if start == -1 or end == -1 or end < start:
            return None
        snippet = cleaned[start : end + 1]
        try:
            parsed = json.loads(snippet)
        except json.JSONDecodeError:
            return None
        return parsed if isinstance(parsed, dict) else None
