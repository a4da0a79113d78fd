from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

DirectorName = Literal[
    "Business Operations Director",
    "Creative & Content Director",
    "Technology & Security Director",
    "Personal Life Director",
    "Financial & Legal Director",
    "Health & Wellness Director",
]

RoleKind = Literal["director", "manager", "agent"]


# Routing

class RoutingDecision(BaseModel):
    primary_director: DirectorName
    supporting_directors: list[str] = Field(default_factory=list)
    execution_order: list[str] = Field(default_factory=list)
    user_intent: Optional[str] = None
    complexity_level: Optional[Literal["simple", "moderate", "complex", "enterprise"]] = None
    estimated_time: Optional[str] = None


class FallbackRoutingDecision(BaseModel):
    primary_director: DirectorName


class AgentSelection(BaseModel):
    primary_agent: str
    supporting_agents: list[str] = Field(default_factory=list)
    reasoning: str = ""
    collaboration_strategy: str = ""


# Directors

class DirectorStep(BaseModel):
    manager: str
    task: str
    agents_needed: list[str] = Field(default_factory=list)


class DirectorPlan(BaseModel):
    director_name: str
    assigned_managers: list[str] = Field(default_factory=list)
    execution_steps: list[DirectorStep] = Field(default_factory=list)
    expected_outcomes: list[str] = Field(default_factory=list)


class DirectorAgentStep(BaseModel):
    manager: str
    task: str
    expected_output: str = ""


class DirectorAgentPlan(BaseModel):
    analysis: str
    required_managers: list[str] = Field(default_factory=list)
    execution_steps: list[DirectorAgentStep] = Field(default_factory=list)
    estimated_complexity: str = ""


# Managers

class ManagerAction(BaseModel):
    sub_agent: str = ""
    action: str
    result: str = ""
    data: dict = Field(default_factory=dict)


class CommunicationReport(BaseModel):
    actions_taken: list[ManagerAction] = Field(default_factory=list)
    summary: str
    next_steps: list[str] = Field(default_factory=list)


class CreatedContent(BaseModel):
    title: str = ""
    body: str = ""
    platform: str = ""
    tone: str = ""


class ContentReport(BaseModel):
    content_created: CreatedContent = Field(default_factory=CreatedContent)
    seo_keywords: list[str] = Field(default_factory=list)
    hashtags: list[str] = Field(default_factory=list)
    call_to_action: str = ""
    estimated_engagement: str = ""


class ProjectReport(BaseModel):
    actions_taken: list[ManagerAction] = Field(default_factory=list)
    created_documents: list[str] = Field(default_factory=list)
    updated_records: list[str] = Field(default_factory=list)
    summary: str


class ResearchData(BaseModel):
    sources: list[str] = Field(default_factory=list)
    facts: list[str] = Field(default_factory=list)
    insights: list[str] = Field(default_factory=list)


class ResearchReport(BaseModel):
    research_summary: str
    key_findings: list[str] = Field(default_factory=list)
    data_gathered: ResearchData = Field(default_factory=ResearchData)
    recommendations: list[str] = Field(default_factory=list)


# Marketing agents

class SEORecommendation(BaseModel):
    action: str
    priority: str = ""
    impact: str = ""
    effort: str = ""


class SEOReport(BaseModel):
    analysis: str
    recommendations: list[SEORecommendation] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    estimated_ranking_improvement: str = ""


class ViralContentPlan(BaseModel):
    hook: str
    main_content: str = ""
    viral_elements: list[str] = Field(default_factory=list)
    hashtags: list[str] = Field(default_factory=list)
    posting_strategy: str = ""
    expected_engagement: str = ""


class EmailCampaign(BaseModel):
    subject_lines: list[str] = Field(default_factory=list)
    email_body: str
    call_to_action: str = ""
    personalization_tokens: list[str] = Field(default_factory=list)
    segmentation_strategy: str = ""
    follow_up_sequence: list[str] = Field(default_factory=list)


# Social agents

class InstagramPost(BaseModel):
    caption: str
    visual_concept: str = ""
    hashtags: list[str] = Field(default_factory=list)
    posting_time: str = ""
    engagement_strategy: str = ""
    story_ideas: list[str] = Field(default_factory=list)


class TikTokVideo(BaseModel):
    video_concept: str
    hook: str = ""
    script: str = ""
    trending_sounds: list[str] = Field(default_factory=list)
    caption: str = ""
    hashtags: list[str] = Field(default_factory=list)


class YouTubeVideo(BaseModel):
    title: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    thumbnail_concept: str = ""
    video_script: str = ""
    timestamps: list[str] = Field(default_factory=list)
    seo_keywords: list[str] = Field(default_factory=list)


# Sales agents

class LeadQualification(BaseModel):
    qualification_score: float
    qualification_level: Literal["hot", "warm", "cold", "unqualified"]
    analysis: str = ""
    red_flags: list[str] = Field(default_factory=list)
    opportunities: list[str] = Field(default_factory=list)
    recommended_approach: str = ""
    next_steps: list[str] = Field(default_factory=list)


class NurtureTouch(BaseModel):
    day: int
    channel: str = ""
    message: str = ""
    goal: str = ""


class NurtureSequence(BaseModel):
    nurture_sequence: list[NurtureTouch] = Field(default_factory=list)
    personalization_points: list[str] = Field(default_factory=list)
    content_recommendations: list[str] = Field(default_factory=list)
    engagement_triggers: list[str] = Field(default_factory=list)


class ObjectionResponse(BaseModel):
    objection: str
    response: str


class ClosingStrategy(BaseModel):
    closing_approach: str
    objection_responses: list[ObjectionResponse] = Field(default_factory=list)
    value_reinforcement: list[str] = Field(default_factory=list)
    urgency_elements: list[str] = Field(default_factory=list)
    closing_script: str = ""
    upsell_opportunities: list[str] = Field(default_factory=list)


# Creative agents

class Typography(BaseModel):
    primary_font: str = ""
    secondary_font: str = ""
    sizes: dict = Field(default_factory=dict)


class DesignSpecifications(BaseModel):
    dimensions: str = ""
    format: str = ""
    resolution: str = ""


class DesignSpec(BaseModel):
    design_concept: str
    color_palette: list[str] = Field(default_factory=list)
    typography: Typography = Field(default_factory=Typography)
    layout_description: str = ""
    visual_elements: list[str] = Field(default_factory=list)
    specifications: DesignSpecifications = Field(default_factory=DesignSpecifications)
    image_prompt: str = ""


class VideoScript(BaseModel):
    title: str
    hook: str = ""
    script: str = ""
    visual_cues: list[str] = Field(default_factory=list)
    duration: str = ""
    music_style: str = ""
    text_overlays: list[str] = Field(default_factory=list)
    call_to_action: str = ""


class Slide(BaseModel):
    slide_number: int
    title: str
    content: str = ""
    visual_concept: str = ""
    talking_points: list[str] = Field(default_factory=list)


class PresentationOutline(BaseModel):
    presentation_title: str
    target_audience: str = ""
    key_message: str = ""
    slides: list[Slide] = Field(default_factory=list)
    design_theme: str = ""
    color_scheme: list[str] = Field(default_factory=list)
