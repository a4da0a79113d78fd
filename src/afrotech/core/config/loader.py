"""Tenant configuration loader.

Runtime knobs come from ``AFROTECH_*`` environment variables read where they
are used. The optional YAML file pointed to by ``AFROTECH_CONFIG_PATH`` carries
tenant-level settings: agency branding, default compliance level, quick
actions and the power-ups seeded into a fresh state dir.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field

ComplianceLevel = Literal["HIPAA", "GDPR", "SOC2", "FERPA", "FINRA", "PCI-DSS", "standard"]


class QuickAction(BaseModel):
    title: str
    description: str = ""
    prompt: str
    category: str = "general"


class PowerUpSeed(BaseModel):
    name: str
    description: str = ""
    category: str = "automation"
    icon: Optional[str] = None
    prompt_template: str
    estimated_time: Optional[str] = None
    is_active: bool = True


class BrandingSettings(BaseModel):
    agency_name: str = "Afro-Tech AI Command"
    primary_color: Optional[str] = None
    logo_url: Optional[str] = None


class TenantConfig(BaseModel):
    branding: BrandingSettings = Field(default_factory=BrandingSettings)
    default_compliance_level: Optional[ComplianceLevel] = None
    quick_actions: list[QuickAction] = Field(default_factory=list)
    power_ups: list[PowerUpSeed] = Field(default_factory=list)


DEFAULT_QUICK_ACTIONS: list[QuickAction] = [
    QuickAction(
        title="Check All Messages",
        description="Review messages from all channels",
        prompt="Please check all my messages across email, social media, and other channels, summarize them, and highlight anything urgent.",
        category="communication",
    ),
    QuickAction(
        title="Daily Brief",
        description="Morning summary of everything",
        prompt="Give me my daily brief: calendar events, important tasks, messages, news relevant to my interests, and weather.",
        category="personal",
    ),
    QuickAction(
        title="Research & Analyze",
        description="Deep research on any topic",
        prompt="Research [topic] and provide comprehensive analysis with sources, key findings, and actionable insights.",
        category="research",
    ),
    QuickAction(
        title="Create Content",
        description="Generate social media posts",
        prompt="Create engaging content for my social media about [topic] including captions, images, and hashtags.",
        category="creative",
    ),
    QuickAction(
        title="Health Check-in",
        description="Review health and wellness",
        prompt="Help me with a health check-in: review my fitness goals, suggest meals for today, and give me wellness tips.",
        category="health",
    ),
]


def default_state_dir() -> Path:
    configured = os.getenv("AFROTECH_STATE_DIR")
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".afrotech"


def load_config(path: Optional[str] = None) -> TenantConfig:
    """Load and validate the tenant YAML file; missing file means defaults."""
    raw_path = path or os.getenv("AFROTECH_CONFIG_PATH")
    if not raw_path:
        return TenantConfig(quick_actions=list(DEFAULT_QUICK_ACTIONS))
    cfg_path = Path(raw_path).expanduser()
    with cfg_path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    config = TenantConfig.model_validate(data)
    if not config.quick_actions:
        config.quick_actions = list(DEFAULT_QUICK_ACTIONS)
    return config
