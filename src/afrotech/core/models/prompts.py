from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from typing import Any

SYSTEM_PROMPT = "You are part of Afro-Tech AI Command, a team of specialist AI directors, managers and agents."


def json_instruction(schema: dict[str, Any]) -> str:
    return (
        "Return strict JSON only with no markdown fences and no prose.\n"
        f"The JSON must follow this JSON Schema: {json.dumps(schema, ensure_ascii=False)}"
    )


def internet_context_instruction() -> str:
    return "Ground the answer in current, publicly available information and mention sources where you rely on them."


def serialize_context(context: Any) -> str:
    return json.dumps(context, ensure_ascii=False, default=str)


def _history_block(history: Iterable[dict[str, str]]) -> str:
    return "\n".join(f"{turn.get('role', 'user')}: {turn.get('content', '')}" for turn in history)


def routing_prompt(user_request: str, directors: Sequence[tuple[str, str]], history: Iterable[dict[str, str]] = ()) -> str:
    listing = "\n".join(f"- {name}: {description}" for name, description in directors)
    return (
        "You are the Master Orchestrator, an AI expert at routing user requests to the correct specialized AI Director. "
        "Your primary goal is to analyze the user's request and select the single best director to handle it from the provided list.\n\n"
        f"AVAILABLE DIRECTORS:\n{listing}\n\n"
        f'USER REQUEST: "{user_request}"\n\n'
        f"CONVERSATION HISTORY:\n{_history_block(history)}\n\n"
        "Analyze the user's request. Your task is to select the most appropriate director to handle this request.\n\n"
        "IMPORTANT: You MUST return a JSON object with a 'primary_director' key. The value MUST be one of the exact "
        "director names from the list above. You may optionally include 'execution_order' as a list of directors if "
        "multiple steps are needed, but 'primary_director' is mandatory."
    )


def fallback_routing_prompt(user_request: str, director_names: Sequence[str]) -> str:
    return (
        f'The user request is: "{user_request}". Which of the following directors is the absolute best fit to handle '
        f"this request? Directors: {', '.join(director_names)}. "
        "Respond with JSON containing only the 'primary_director' key."
    )


def synthesis_prompt(user_request: str, results: Sequence[dict[str, Any]]) -> str:
    rendered = "\n".join(json.dumps(result, ensure_ascii=False, indent=2, default=str) for result in results)
    return (
        "You are the Master Orchestrator, a super-intelligent AI coordinating a team of specialist AIs. "
        "Your team has just executed a user's request.\n\n"
        f'USER REQUEST: "{user_request}"\n\n'
        f"EXECUTION RESULTS & ANALYSIS:\n{rendered}\n\n"
        "Your task is to synthesize these results into a single, clear, and friendly response for the user.\n"
        "- Be conversational and direct.\n"
        "- Confirm what was accomplished.\n"
        "- Provide the key results or outputs directly. Don't just say 'I did it', show the result.\n"
        "- If actions were taken (e.g., 'sent an email'), state it clearly.\n"
        "- If relevant, suggest a next step or ask a clarifying question.\n"
        "- Format your response for readability using markdown (e.g., lists, bolding)."
    )


def agent_matching_prompt(task: str, context: Any, catalog: Sequence[tuple[str, str]]) -> str:
    listing = "\n".join(f"- {name}: {summary}" for name, summary in catalog)
    return (
        "You are an AI agent coordinator. Given this task and context, determine which specialized agent(s) "
        "would be best suited to handle it.\n\n"
        f"TASK: {task}\n"
        f"CONTEXT: {serialize_context(context)}\n\n"
        f"AVAILABLE AGENTS:\n{listing}\n\n"
        "Return the best agent(s) to handle this task."
    )
