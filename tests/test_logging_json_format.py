from __future__ import annotations

import io
import json
import logging

from afrotech.core.logging.context import log_context
from afrotech.core.logging.json_formatter import JSONFormatter


def _capture(name: str) -> tuple[logging.Logger, io.StringIO]:
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())

    logger = logging.getLogger(name)
    logger.handlers = []
    logger.setLevel(logging.INFO)
    logger.propagate = False
    logger.addHandler(handler)
    return logger, stream


def test_logging_json_line_with_context() -> None:
    logger, stream = _capture("afrotech.test.json")

    with log_context(correlation_id="c1", task_id="t1", user_id="u1"):
        with log_context(role="SEO Agent"):
            logger.info("hello", extra={"extra_fields": {"mode": "json"}})

    payload = json.loads(stream.getvalue().strip())
    assert payload["msg"] == "hello"
    assert payload["level"] == "INFO"
    assert payload["service"] == "afrotech"
    assert payload["logger"] == "afrotech.test.json"
    assert payload["correlation_id"] == "c1"
    assert payload["task_id"] == "t1"
    assert payload["user_id"] == "u1"
    assert payload["role"] == "SEO Agent"
    assert payload["mode"] == "json"
    assert "ts_iso_utc" in payload


def test_logging_redacts_secrets_in_message() -> None:
    logger, stream = _capture("afrotech.test.redact")

    logger.warning("request failed: api_key=sk-123 Authorization: Bearer abc.def")

    payload = json.loads(stream.getvalue().strip())
    assert "sk-123" not in payload["msg"]
    assert "abc.def" not in payload["msg"]
    assert "role" not in payload


def test_logging_masks_secret_extra_fields() -> None:
    logger, stream = _capture("afrotech.test.redact_fields")

    logger.info(
        "llm_call",
        extra={"extra_fields": {"api_key": "sk-123", "headers": {"Authorization": "Bearer abc"}, "model": "m1"}},
    )

    payload = json.loads(stream.getvalue().strip())
    assert payload["api_key"] == "***"
    assert payload["headers"] == {"Authorization": "***"}
    assert payload["model"] == "m1"
