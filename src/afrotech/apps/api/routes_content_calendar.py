from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from afrotech.core.roles.registry import RoleRegistry
from afrotech.core.store import DataStore
from afrotech.core.store.schemas import ContentCalendarEntry

from .auth import get_current_user
from .deps import get_data_store, get_role_registry

router = APIRouter()


class CalendarEntryCreate(BaseModel):
    title: str
    body: Optional[str] = None
    platform: Optional[str] = None
    scheduled_for: Optional[str] = None
    status: str = "draft"


@router.get("", response_model=list[ContentCalendarEntry])
def list_entries(user_id: str = Depends(get_current_user), store: DataStore = Depends(get_data_store)) -> list[dict]:
    return store.entity("ContentCalendar").filter({"created_by": user_id}, order_by="scheduled_for")


@router.post("", response_model=ContentCalendarEntry)
def create_entry(
    payload: CalendarEntryCreate,
    user_id: str = Depends(get_current_user),
    registry: RoleRegistry = Depends(get_role_registry),
) -> dict:
    content_manager = registry.get("Content Manager")
    outcome = content_manager.add_to_content_calendar({**payload.model_dump(), "created_by": user_id})
    if not outcome["success"]:
        raise HTTPException(status_code=500, detail=outcome["error"])
    return outcome["entry"]
