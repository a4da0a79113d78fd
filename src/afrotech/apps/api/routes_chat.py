from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from afrotech.core.config.loader import TenantConfig
from afrotech.core.logging.context import get_log_context
from afrotech.core.orchestration.chat import ChatService, ChatTurn
from afrotech.core.orchestration.session import SessionBusyError
from afrotech.core.runs.schemas import TaskPriority

from .auth import get_current_user
from .deps import get_chat_service, get_tenant_config

router = APIRouter()


class ChatRequest(BaseModel):
    message: str
    priority: TaskPriority = "medium"


def turn_payload(turn: ChatTurn) -> dict:
    return {
        "task_id": turn.task_id,
        "response": turn.response,
        "status": turn.status,
        "primary_director": turn.primary_director,
        "assigned_agents": turn.assigned_agents,
    }


async def submit_message(chat: ChatService, user_id: str, message: str, priority: TaskPriority = "medium") -> ChatTurn:
    if not message.strip():
        raise HTTPException(status_code=400, detail="message must not be empty")
    try:
        return await chat.handle_message(
            user_id,
            message,
            priority=priority,
            correlation_id=get_log_context().get("correlation_id"),
        )
    except SessionBusyError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc


@router.post("/")
async def chat(
    payload: ChatRequest,
    user_id: str = Depends(get_current_user),
    chat_service: ChatService = Depends(get_chat_service),
) -> dict:
    turn = await submit_message(chat_service, user_id, payload.message, payload.priority)
    return turn_payload(turn)


@router.get("/conversation")
def conversation(
    user_id: str = Depends(get_current_user),
    chat_service: ChatService = Depends(get_chat_service),
) -> dict:
    active = chat_service.conversations.active(user_id)
    if active is None:
        return {"id": None, "messages": []}
    return {"id": active.id, "messages": [message.model_dump() for message in active.messages]}


@router.get("/quick-actions")
def quick_actions(config: TenantConfig = Depends(get_tenant_config)) -> dict:
    return {
        "agency_name": config.branding.agency_name,
        "quick_actions": [action.model_dump() for action in config.quick_actions],
    }
