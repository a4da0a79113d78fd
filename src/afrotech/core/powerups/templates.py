from __future__ import annotations

import re
from typing import Mapping

_VARIABLE_RE = re.compile(r"\{(.*?)\}")


def extract_variables(template: str) -> list[str]:
    """Unique ``{name}`` placeholders in first-seen order."""
    seen: list[str] = []
    for name in _VARIABLE_RE.findall(template):
        if name not in seen:
            seen.append(name)
    return seen


def render_prompt(template: str, inputs: Mapping[str, str]) -> str:
    # Every occurrence is replaced; variables without input become empty.
    return _VARIABLE_RE.sub(lambda match: str(inputs.get(match.group(1), "") or ""), template)
