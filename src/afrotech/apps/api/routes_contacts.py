from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from afrotech.core.roles.registry import RoleRegistry
from afrotech.core.store import DataStore, EntityNotFoundError
from afrotech.core.store.schemas import Contact

from .auth import get_current_user
from .deps import get_data_store, get_role_registry

router = APIRouter()


class ContactCreate(BaseModel):
    name: str
    email: Optional[str] = None
    company: Optional[str] = None
    phone: Optional[str] = None
    status: str = "lead"
    notes: Optional[str] = None


class ContactUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    company: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None


def _owned(store: DataStore, contact_id: str, user_id: str) -> dict:
    try:
        record = store.entity("Contact").get(contact_id)
    except EntityNotFoundError as exc:
        raise HTTPException(status_code=404, detail="contact not found") from exc
    if record.get("created_by") != user_id:
        raise HTTPException(status_code=404, detail="contact not found")
    return record


@router.get("", response_model=list[Contact])
def list_contacts(
    status: Optional[str] = Query(default=None),
    user_id: str = Depends(get_current_user),
    store: DataStore = Depends(get_data_store),
) -> list[dict]:
    predicate = {"created_by": user_id}
    if status:
        predicate["status"] = status
    return store.entity("Contact").filter(predicate, order_by="-created_date")


@router.post("", response_model=Contact)
def create_contact(
    payload: ContactCreate,
    user_id: str = Depends(get_current_user),
    registry: RoleRegistry = Depends(get_role_registry),
) -> dict:
    project_manager = registry.get("Project Manager")
    outcome = project_manager.add_contact({**payload.model_dump(), "created_by": user_id})
    if not outcome["success"]:
        raise HTTPException(status_code=500, detail=outcome["error"])
    return outcome["contact"]


@router.patch("/{contact_id}", response_model=Contact)
def update_contact(
    contact_id: str,
    payload: ContactUpdate,
    user_id: str = Depends(get_current_user),
    store: DataStore = Depends(get_data_store),
) -> dict:
    _owned(store, contact_id, user_id)
    return store.entity("Contact").update(contact_id, payload.model_dump(exclude_unset=True))


@router.delete("/{contact_id}")
def delete_contact(
    contact_id: str,
    user_id: str = Depends(get_current_user),
    store: DataStore = Depends(get_data_store),
) -> dict:
    _owned(store, contact_id, user_id)
    return {"deleted": True, **store.entity("Contact").delete(contact_id)}
