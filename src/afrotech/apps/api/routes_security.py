from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from afrotech.core.config.loader import ComplianceLevel
from afrotech.core.orchestration.chat import ChatService
from afrotech.core.security.audit import StoreAuditSink
from afrotech.core.security.compliance import ensure_compliance
from afrotech.core.store import DataStore

from .auth import get_current_user
from .deps import get_audit_sink, get_chat_service, get_data_store

router = APIRouter()


class SecurityProfileUpdate(BaseModel):
    compliance_level: Optional[ComplianceLevel] = None
    mfa_enabled: Optional[bool] = None


class ComplianceAction(BaseModel):
    type: str
    details: Any = None


class ComplianceCheckRequest(BaseModel):
    action: ComplianceAction
    compliance_level: Optional[str] = None
    context: dict[str, Any] = Field(default_factory=dict)


def _latest_profile(store: DataStore, user_id: str) -> dict | None:
    profiles = store.entity("UserSecurity").filter({"user_id": user_id}, order_by="-created_date", limit=1)
    return profiles[0] if profiles else None


@router.get("/profile")
def get_profile(
    user_id: str = Depends(get_current_user),
    store: DataStore = Depends(get_data_store),
    chat_service: ChatService = Depends(get_chat_service),
) -> dict:
    profile = _latest_profile(store, user_id)
    if profile is None:
        return {
            "id": None,
            "user_id": user_id,
            "compliance_level": chat_service.default_compliance_level,
            "mfa_enabled": False,
        }
    return profile


@router.put("/profile")
def update_profile(
    payload: SecurityProfileUpdate,
    user_id: str = Depends(get_current_user),
    store: DataStore = Depends(get_data_store),
    audit: StoreAuditSink = Depends(get_audit_sink),
) -> dict:
    changes = payload.model_dump(exclude_unset=True)
    collection = store.entity("UserSecurity")
    current = _latest_profile(store, user_id)
    if current is None:
        profile = collection.create({"user_id": user_id, "created_by": user_id, "mfa_enabled": False, **changes})
    else:
        profile = collection.update(current["id"], changes)
    audit.audit_action(user_id, {"type": "security_profile_update", "details": changes}, {"success": True})
    return profile


@router.post("/compliance/check")
def compliance_check(
    payload: ComplianceCheckRequest,
    user_id: str = Depends(get_current_user),
    chat_service: ChatService = Depends(get_chat_service),
) -> dict:
    level = payload.compliance_level or chat_service.compliance_level(user_id)
    result = ensure_compliance(payload.action.model_dump(), {"user_id": user_id, **payload.context}, level)
    return result.model_dump()
