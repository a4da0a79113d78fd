from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from afrotech.core.config.loader import ComplianceLevel


class StoredEntity(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    created_by: Optional[str] = None
    created_date: Optional[str] = None
    updated_date: Optional[str] = None


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str
    timestamp: str
    agent_name: Optional[str] = None


class Conversation(StoredEntity):
    messages: list[ChatMessage] = Field(default_factory=list)


class Contact(StoredEntity):
    name: str
    email: Optional[str] = None
    company: Optional[str] = None
    phone: Optional[str] = None
    status: str = "lead"
    notes: Optional[str] = None


class ContentCalendarEntry(StoredEntity):
    title: str
    body: Optional[str] = None
    platform: Optional[str] = None
    scheduled_for: Optional[str] = None
    status: str = "draft"


class AgentInteraction(StoredEntity):
    requesting_agent: str
    target_agent: str
    interaction_type: str = "collaboration"
    request_context: Any = None
    task_id: Optional[str] = None
    status: Literal["pending", "completed"] = "pending"
    response: Any = None
    data_shared: dict[str, Any] = Field(default_factory=dict)


class AuditLogEntry(StoredEntity):
    user_id: str
    action_type: str
    action_details: Any = None
    result: Any = None
    ip_address: str = "masked_for_privacy"
    timestamp: str


class UserSecurity(StoredEntity):
    user_id: str
    compliance_level: Optional[ComplianceLevel] = None
    mfa_enabled: bool = False


class PowerUp(StoredEntity):
    name: str
    description: str = ""
    category: str = "automation"
    icon: Optional[str] = None
    prompt_template: str
    estimated_time: Optional[str] = None
    is_active: bool = True
