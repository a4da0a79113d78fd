from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from afrotech.core.media.client import MediaClient, MediaError
from afrotech.core.models.gateway import LLMGateway

from .base import PromptRole
from .schemas import DesignSpec, PresentationOutline, VideoScript

logger = logging.getLogger("afrotech.roles")

GRAPHIC_DESIGN_TEMPLATE = """You are an expert graphic designer with mastery in:
- Visual hierarchy and composition
- Color theory and psychology
- Typography and readability
- Brand consistency
- Design trends and styles
- Platform-specific specifications
- Conversion-focused design

TASK: {task}
CONTEXT: {context}

Provide comprehensive design specifications including:
- Design concept and rationale
- Color palette with hex codes
- Typography recommendations
- Layout structure
- Visual elements needed
- Technical specifications
- A detailed prompt for image generation"""

VIDEO_SCRIPT_TEMPLATE = """You are a video script specialist who creates engaging video content for:
- YouTube videos and Shorts
- TikTok and Instagram Reels
- Advertising and promotional videos
- Educational and tutorial content
- Explainer videos
- Social media stories

TASK: {task}
CONTEXT: {context}

Create video script with:
- Attention-grabbing hook (first 3-5 seconds)
- Clear structure (intro, body, conclusion)
- Visual cue descriptions
- Timing notes
- Call-to-action
- Music/sound suggestions
- Text overlay recommendations"""

PRESENTATION_TEMPLATE = """You are a presentation design expert specializing in:
- Compelling storytelling
- Data visualization
- Slide design principles
- Persuasive structure
- Audience engagement
- Professional templates

TASK: {task}
CONTEXT: {context}

Create presentation outline with:
- Clear narrative arc
- Slide-by-slide breakdown
- Visual suggestions for each slide
- Key talking points
- Data visualization recommendations
- Design notes"""


@dataclass
class GraphicDesignRole(PromptRole):
    media: MediaClient | None = None

    async def generate_image(self, design_spec: DesignSpec | dict[str, Any]) -> dict[str, Any]:
        spec = design_spec if isinstance(design_spec, DesignSpec) else DesignSpec.model_validate(design_spec)
        spec_payload = spec.model_dump()
        if self.media is None:
            return {"success": False, "error": "no media client configured", "design_spec": spec_payload}
        try:
            image = await self.media.generate_image(spec.image_prompt or spec.design_concept)
        except MediaError as exc:
            logger.warning("image generation failed: %s", exc)
            return {"success": False, "error": str(exc), "design_spec": spec_payload}
        return {"success": True, "image_url": image["url"], "design_spec": spec_payload}


def build_creative_agents(gateway: LLMGateway, media: MediaClient | None = None) -> list[PromptRole]:
    return [
        GraphicDesignRole(
            name="Graphic Design Agent",
            kind="agent",
            template=GRAPHIC_DESIGN_TEMPLATE,
            response_model=DesignSpec,
            gateway=gateway,
            internet=True,
            description="Visual design, graphics, branding",
            expertise=["visual design", "branding", "graphics"],
            media=media,
        ),
        PromptRole(
            name="Video Script Agent",
            kind="agent",
            template=VIDEO_SCRIPT_TEMPLATE,
            response_model=VideoScript,
            gateway=gateway,
            description="Video scripts, storyboards",
            expertise=["scriptwriting", "storyboarding", "video planning"],
        ),
        PromptRole(
            name="Presentation Agent",
            kind="agent",
            template=PRESENTATION_TEMPLATE,
            response_model=PresentationOutline,
            gateway=gateway,
            description="Slide decks, storytelling, data visualization",
            expertise=["storytelling", "slide design", "data visualization"],
        ),
    ]
