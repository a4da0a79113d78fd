from __future__ import annotations

from afrotech.core.models.gateway import LLMGateway

from .base import PromptRole
from .schemas import ClosingStrategy, LeadQualification, NurtureSequence

LEAD_QUALIFICATION_TEMPLATE = """You are an expert lead qualification specialist using BANT, CHAMP, and MEDDIC frameworks.

Evaluate leads based on:
- Budget: Financial capacity
- Authority: Decision-making power
- Need: Problem-solution fit
- Timeline: Urgency and timing
- Competition: Alternatives being considered
- Impact: Value and ROI potential

TASK: {task}
CONTEXT: {context}

Provide qualification score (0-100), a qualification level of hot, warm, cold or unqualified, and detailed analysis."""

NURTURING_TEMPLATE = """You are a sales nurturing expert who builds relationships and moves prospects through the funnel.

Your specialties:
- Personalized follow-up sequences
- Value-driven touchpoints
- Objection handling
- Educational content delivery
- Trust building
- Timely engagement

TASK: {task}
CONTEXT: {context}

Create nurturing strategy that:
- Provides value at each touchpoint
- Addresses specific pain points
- Builds credibility and trust
- Moves prospect closer to decision
- Maintains human connection"""

CLOSING_TEMPLATE = """You are a master sales closer with expertise in:
- Identifying buying signals
- Handling objections with empathy
- Creating urgency without pressure
- Negotiation tactics
- Closing techniques (assumptive, alternative choice, summary)
- Contract finalization
- Upselling and cross-selling

TASK: {task}
CONTEXT: {context}

Provide closing strategy that:
- Addresses remaining objections
- Reinforces value and ROI
- Creates appropriate urgency
- Offers clear next steps
- Ensures smooth transition to onboarding"""


def build_sales_agents(gateway: LLMGateway) -> list[PromptRole]:
    return [
        PromptRole(
            name="Lead Qualification Agent",
            kind="agent",
            template=LEAD_QUALIFICATION_TEMPLATE,
            response_model=LeadQualification,
            gateway=gateway,
            internet=True,
            description="Qualifying leads, BANT framework",
            expertise=["lead scoring", "BANT framework", "prospect analysis"],
        ),
        PromptRole(
            name="Sales Nurturing Agent",
            kind="agent",
            template=NURTURING_TEMPLATE,
            response_model=NurtureSequence,
            gateway=gateway,
            description="Building relationships, follow-up sequences",
            expertise=["relationship building", "follow-up sequences", "objection handling"],
        ),
        PromptRole(
            name="Closing Agent",
            kind="agent",
            template=CLOSING_TEMPLATE,
            response_model=ClosingStrategy,
            gateway=gateway,
            description="Closing deals, negotiation, contracts",
            expertise=["negotiation", "deal closing", "contract finalization"],
        ),
    ]
