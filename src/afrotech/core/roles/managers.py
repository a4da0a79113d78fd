from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from afrotech.core.models.gateway import LLMGateway
from afrotech.core.store import DataStore, StoreError

from .base import PromptRole
from .schemas import CommunicationReport, ContentReport, ProjectReport, ResearchReport

logger = logging.getLogger("afrotech.roles")

COMMUNICATION_TEMPLATE = """You are the Communication Manager - responsible for all communication channels.

YOUR SUB-AGENTS:
- Email Agent: Send/retrieve emails
- Message Agent: Handle WhatsApp, Slack, LinkedIn messages
- Calendar Agent: Manage calendar events
- Call Agent: Make voice calls on behalf of the user

TASK: {task}

CONTEXT: {context}

Execute this communication task. For each action:
1. Identify which sub-agent(s) to use
2. Specify exact parameters needed
3. Handle any follow-up actions

Report every action taken, a brief summary of all actions and any recommended follow-up."""

CONTENT_TEMPLATE = """You are the Content Manager - responsible for creating and publishing content.

YOUR SUB-AGENTS:
- Blog Writer: Write blog posts
- LinkedIn Writer: Create LinkedIn content
- Twitter Writer: Craft tweets and threads
- Email Writer: Compose professional emails
- Video Script Writer: Write video scripts

TASK: {task}

CONTEXT: {context}

Create high-quality content with a title, the full body, the target platform and tone,
SEO keywords, hashtags, a call to action and an engagement prediction."""

PROJECT_TEMPLATE = """You are the Project Manager - responsible for CRM, documents, and project tracking.

YOUR SUB-AGENTS:
- CRM Agent: Manage contacts, leads, opportunities
- Document Agent: Create, update, organize documents
- Task Agent: Track tasks and projects

TASK: {task}

CONTEXT: {context}

Execute this project management task. Report every action taken, the documents created,
the records updated and a brief summary."""

RESEARCH_TEMPLATE = """You are the Research Manager - responsible for gathering information and conducting analysis.

YOUR SUB-AGENTS:
- Web Research Agent: Search internet, scrape websites
- LinkedIn Research Agent: Research people/companies on LinkedIn
- Competitive Analysis Agent: Analyze competitors
- Data Analysis Agent: Process and analyze data

TASK: {task}

CONTEXT: {context}

Conduct thorough research. Return an executive summary of findings, the key discoveries,
the sources, facts and insights gathered, and recommended actions based on the research."""


@dataclass
class ContentManagerRole(PromptRole):
    store: DataStore | None = None

    def add_to_content_calendar(self, content_data: dict[str, Any]) -> dict[str, Any]:
        if self.store is None:
            return {"success": False, "error": "no entity store configured"}
        try:
            entry = self.store.entity("ContentCalendar").create(content_data)
        except StoreError as exc:
            logger.warning("content calendar write failed: %s", exc)
            return {"success": False, "error": str(exc)}
        return {"success": True, "entry": entry}


@dataclass
class ProjectManagerRole(PromptRole):
    store: DataStore | None = None

    def add_contact(self, contact_data: dict[str, Any]) -> dict[str, Any]:
        if self.store is None:
            return {"success": False, "error": "no entity store configured"}
        try:
            contact = self.store.entity("Contact").create(contact_data)
        except StoreError as exc:
            logger.warning("contact write failed: %s", exc)
            return {"success": False, "error": str(exc)}
        return {"success": True, "contact": contact}


def build_managers(gateway: LLMGateway, store: DataStore | None = None) -> list[PromptRole]:
    return [
        PromptRole(
            name="Communication Manager",
            kind="manager",
            template=COMMUNICATION_TEMPLATE,
            response_model=CommunicationReport,
            gateway=gateway,
            description="Email, messaging, calendar management",
            sub_agents=["Email Agent", "Message Agent", "Calendar Agent", "Call Agent"],
        ),
        ProjectManagerRole(
            name="Project Manager",
            kind="manager",
            template=PROJECT_TEMPLATE,
            response_model=ProjectReport,
            gateway=gateway,
            description="CRM, documents, project tracking",
            sub_agents=["CRM Agent", "Document Agent", "Task Agent"],
            store=store,
        ),
        PromptRole(
            name="Research Manager",
            kind="manager",
            template=RESEARCH_TEMPLATE,
            response_model=ResearchReport,
            gateway=gateway,
            internet=True,
            description="Web research, competitive analysis",
            sub_agents=["Web Research", "LinkedIn Research", "Competitive Analysis"],
        ),
        ContentManagerRole(
            name="Content Manager",
            kind="manager",
            template=CONTENT_TEMPLATE,
            response_model=ContentReport,
            gateway=gateway,
            description="Blog posts, social media content",
            sub_agents=["Blog Writer", "LinkedIn Writer", "Email Writer", "Video Script"],
            store=store,
        ),
    ]
