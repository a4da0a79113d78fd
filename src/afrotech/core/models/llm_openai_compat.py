from __future__ import annotations

from afrotech.core.http.client import request_with_retry


class OpenAICompatClient:
    def __init__(self, url: str, model: str, timeout_s: float = 45.0, api_key: str | None = None, retries: int = 0) -> None:
        self.url = url
        self.model = model
        self.timeout_s = timeout_s
        self.api_key = api_key
        self.retries = retries

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def chat_completion(
        self,
        system: str,
        user: str,
        temperature: float,
        max_tokens: int,
        response_format: dict | None = None,
    ) -> str:
        payload: dict[str, object] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if response_format is not None:
            payload["response_format"] = response_format

        response = await request_with_retry(
            "POST",
            self.url,
            headers=self._headers(),
            json=payload,
            timeout_override=self.timeout_s,
            retries=self.retries,
            redact_url=True,
        )
        try:
            data = response.json()
        except ValueError as exc:
            raise ValueError("LLM endpoint returned a non-JSON body") from exc
        if not isinstance(data, dict):
            raise ValueError(f"LLM endpoint returned a JSON {type(data).__name__}, expected an object")
        choices = data.get("choices") or []
        if not choices:
            return ""
        if not isinstance(choices, list) or not isinstance(choices[0], dict):
            raise ValueError("LLM endpoint returned malformed choices")
        message = choices[0].get("message") or {}
        if not isinstance(message, dict):
            raise ValueError("LLM endpoint returned a malformed message")
        return str(message.get("content") or "")
