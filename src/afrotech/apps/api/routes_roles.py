from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from afrotech.core.models.gateway import GatewayError
from afrotech.core.roles.base import UnknownRoleError
from afrotech.core.roles.coordinator import AgentCoordinator
from afrotech.core.roles.registry import RoleRegistry
from afrotech.core.roles.schemas import RoleKind

from .deps import get_coordinator, get_role_registry

router = APIRouter()


class RoleTaskRequest(BaseModel):
    task: str
    context: dict[str, Any] = Field(default_factory=dict)


class InteractionRequest(BaseModel):
    requesting_agent: str
    target_agent: str
    request_context: dict[str, Any] = Field(default_factory=dict)
    task_id: Optional[str] = None


class InteractionResponse(BaseModel):
    response: Any = None
    data_shared: dict[str, Any] = Field(default_factory=dict)


@router.get("")
def list_roles(kind: Optional[RoleKind] = None, registry: RoleRegistry = Depends(get_role_registry)) -> dict:
    return {"roles": [registry.describe(name) for name in registry.names(kind)]}


@router.get("/hierarchy")
def hierarchy(registry: RoleRegistry = Depends(get_role_registry)) -> dict:
    return registry.hierarchy()


@router.post("/match")
async def match_agent(payload: RoleTaskRequest, coordinator: AgentCoordinator = Depends(get_coordinator)) -> dict:
    try:
        selection = await coordinator.find_best_agent(payload.task, payload.context)
    except GatewayError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return {
        **selection.model_dump(),
        "expertise": {
            name: coordinator.get_agent_expertise(name)
            for name in [selection.primary_agent, *selection.supporting_agents]
        },
    }


@router.post("/interactions")
def request_help(payload: InteractionRequest, coordinator: AgentCoordinator = Depends(get_coordinator)) -> dict:
    interaction = coordinator.request_agent_help(
        payload.requesting_agent,
        payload.target_agent,
        payload.request_context,
        task_id=payload.task_id,
    )
    if interaction is None:
        raise HTTPException(status_code=500, detail="could not record interaction")
    return interaction


@router.post("/interactions/{interaction_id}/complete")
def complete_interaction(
    interaction_id: str,
    payload: InteractionResponse,
    coordinator: AgentCoordinator = Depends(get_coordinator),
) -> dict:
    interaction = coordinator.complete_interaction(interaction_id, payload.response, payload.data_shared)
    if interaction is None:
        raise HTTPException(status_code=404, detail="interaction not found")
    return interaction


@router.post("/{name}/execute")
async def execute_role(name: str, payload: RoleTaskRequest, registry: RoleRegistry = Depends(get_role_registry)) -> dict:
    try:
        role = registry.get(name)
    except UnknownRoleError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    try:
        result = await role.execute(payload.task, payload.context)
    except GatewayError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return {"role": role.name, "kind": role.kind, "result": result.model_dump()}
