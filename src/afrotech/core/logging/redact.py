from __future__ import annotations

import re
from typing import Any

MASK = "***"

_SECRET_FIELD_RE = re.compile(r"(token|api[_-]?key|secret|password|authorization)", re.IGNORECASE)

# (pattern, replacement) pairs applied in order to free text.
_TEXT_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"(?i)(bearer\s+)\S+"), rf"\1{MASK}"),
    (re.compile(r"(?i)\b(token|api[_-]?key|key|secret|password)(\s*[=:]\s*)[^\s,;&]+"), rf"\1\2{MASK}"),
)


def redact_string(s: str) -> str:
    for pattern, replacement in _TEXT_PATTERNS:
        s = pattern.sub(replacement, s)
    return s


def redact_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Copy of ``fields`` with secret-looking keys masked, nested dicts included."""
    output: dict[str, Any] = {}
    for key, value in fields.items():
        if _SECRET_FIELD_RE.search(str(key)):
            output[key] = MASK
        elif isinstance(value, dict):
            output[key] = redact_fields(value)
        elif isinstance(value, str):
            output[key] = redact_string(value)
        else:
            output[key] = value
    return output
