from __future__ import annotations

from afrotech.core.models.gateway import LLMGateway

from .base import PromptRole
from .schemas import DirectorAgentPlan, DirectorPlan

DIRECTORS: dict[str, str] = {
    "Business Operations Director": "Handles sales, marketing, HR, operations, and project management.",
    "Creative & Content Director": "Manages content creation, social media, design, branding.",
    "Technology & Security Director": "Oversees cybersecurity, IT, software development, data.",
    "Personal Life Director": "Assists with daily tasks, travel, education, home management.",
    "Financial & Legal Director": "Manages personal finance, investments, taxes, legal services.",
    "Health & Wellness Director": "Focuses on medical, fitness, nutrition, mental health.",
}

_DIRECTOR_TEMPLATE = """You are the {name}. {description}

USER REQUEST: {{task}}

PREVIOUS RESULTS: {{context}}

Based on your area of expertise, determine:
1. Which of your managers should handle this
2. What specific tasks they should execute
3. What outcomes you expect

Return detailed execution plan for your team."""

DIRECTOR_AGENT_TEMPLATE = """You are the Director Agent - the executive coordinator of an AI agent team managing a complete tech stack.

YOUR ROLE:
You orchestrate 4 Manager Agents and their specialized sub-agents to execute complex workflows.

YOUR MANAGER AGENTS:
1. Communication Manager - Handles all communication channels (email, messages, calls, calendar)
2. Project Manager - Manages CRM, documents, project tracking
3. Research Manager - Performs web research, data gathering, competitive analysis
4. Content Manager - Creates and publishes content across platforms

YOUR RESPONSIBILITIES:
1. Break down user requests into actionable subtasks
2. Determine which manager agents are needed
3. Create detailed instructions for each manager agent
4. Coordinate multi-step workflows
5. Ensure quality and completeness
6. Provide clear status updates

USER REQUEST: "{task}"

CONTEXT:
{context}

Analyze this request and create an execution plan with a brief analysis, the manager agents needed,
one execution step per manager task with its expected output, and an estimated complexity of low, medium or high."""


def build_directors(gateway: LLMGateway) -> list[PromptRole]:
    return [
        PromptRole(
            name=name,
            kind="director",
            template=_DIRECTOR_TEMPLATE.format(name=name, description=description),
            response_model=DirectorPlan,
            gateway=gateway,
            description=description,
        )
        for name, description in DIRECTORS.items()
    ]


def build_director_agent(gateway: LLMGateway) -> PromptRole:
    return PromptRole(
        name="Director Agent",
        kind="director",
        template=DIRECTOR_AGENT_TEMPLATE,
        response_model=DirectorAgentPlan,
        gateway=gateway,
        description="Executive Coordinator",
        sub_agents=["Communication Manager", "Project Manager", "Research Manager", "Content Manager"],
    )
