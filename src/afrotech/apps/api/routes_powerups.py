from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, ValidationError

from afrotech.core.orchestration.chat import ChatService
from afrotech.core.powerups.catalog import PowerUpCatalog, PowerUpNotFound
from afrotech.core.powerups.templates import extract_variables

from .auth import get_current_user
from .deps import get_chat_service, get_powerup_catalog
from .routes_chat import submit_message, turn_payload

router = APIRouter()


class PowerUpCreate(BaseModel):
    name: str
    description: str = ""
    category: str = "automation"
    icon: Optional[str] = None
    prompt_template: str
    estimated_time: Optional[str] = None
    is_active: bool = True


class PowerUpExecuteRequest(BaseModel):
    inputs: dict[str, str] = Field(default_factory=dict)


@router.get("")
def list_powerups(catalog: PowerUpCatalog = Depends(get_powerup_catalog)) -> dict:
    return {
        "powerups": [
            {**power_up.model_dump(), "variables": extract_variables(power_up.prompt_template)}
            for power_up in catalog.list_active()
        ]
    }


@router.post("")
def create_powerup(
    payload: PowerUpCreate,
    user_id: str = Depends(get_current_user),
    catalog: PowerUpCatalog = Depends(get_powerup_catalog),
) -> dict:
    try:
        power_up = catalog.create(payload.model_dump(), created_by=user_id)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {**power_up.model_dump(), "variables": extract_variables(power_up.prompt_template)}


@router.post("/{power_up_id}/execute")
async def execute_powerup(
    power_up_id: str,
    payload: PowerUpExecuteRequest,
    user_id: str = Depends(get_current_user),
    catalog: PowerUpCatalog = Depends(get_powerup_catalog),
    chat_service: ChatService = Depends(get_chat_service),
) -> dict:
    try:
        prompt = catalog.render(power_up_id, payload.inputs)
    except PowerUpNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    turn = await submit_message(chat_service, user_id, prompt)
    return {"prompt": prompt, **turn_payload(turn)}
