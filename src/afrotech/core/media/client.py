from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from uuid import uuid4

from afrotech.core.http.client import request_with_retry
from afrotech.core.http.errors import AfrotechHTTPError
from afrotech.core.logging.redact import redact_string

logger = logging.getLogger("afrotech.media")

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class MediaError(RuntimeError):
    """Raised when image generation or file upload fails."""


class MediaClient:
    """Image generation over an OpenAI-compatible endpoint plus local uploads."""

    def __init__(self, state_dir: Path, image_url: str | None = None, api_key: str | None = None) -> None:
        self.uploads_dir = state_dir / "uploads"
        self.image_url = image_url if image_url is not None else os.getenv("AFROTECH_IMAGE_URL", "")
        self.api_key = api_key if api_key is not None else os.getenv("AFROTECH_LLM_API_KEY", "")
        self.size = os.getenv("AFROTECH_IMAGE_SIZE", "1024x1024")

    @property
    def image_enabled(self) -> bool:
        return bool(self.image_url.strip())

    async def generate_image(self, prompt: str) -> dict[str, str]:
        if not self.image_enabled:
            raise MediaError("image generation is not configured")
        if not prompt.strip():
            raise MediaError("image prompt is empty")

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            response = await request_with_retry(
                "POST",
                self.image_url,
                headers=headers,
                json={"prompt": prompt, "n": 1, "size": self.size},
                redact_url=True,
            )
            data = response.json()
        except AfrotechHTTPError as exc:
            raise MediaError(f"image request failed: {redact_string(str(exc))}") from exc
        except ValueError as exc:
            raise MediaError("image endpoint returned a non-JSON body") from exc

        if not isinstance(data, dict):
            raise MediaError("image endpoint returned a malformed body")
        items = data.get("data") or []
        url = items[0].get("url") if isinstance(items, list) and items and isinstance(items[0], dict) else None
        if not url:
            raise MediaError("image endpoint returned no url")
        logger.info("image_generated", extra={"extra_fields": {"prompt_len": len(prompt)}})
        return {"url": str(url)}

    def upload_file(self, filename: str, content: bytes) -> dict[str, str]:
        safe_name = _UNSAFE_CHARS.sub("_", Path(filename or "upload").name).strip("._") or "upload"
        target = self.uploads_dir / f"{uuid4().hex[:12]}_{safe_name}"
        try:
            self.uploads_dir.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as exc:
            raise MediaError(f"could not store upload: {exc}") from exc
        return {"file_url": target.resolve().as_uri()}
