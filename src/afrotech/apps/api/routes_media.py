from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel

from afrotech.core.media.client import MediaClient, MediaError
from afrotech.core.roles.registry import RoleRegistry
from afrotech.core.roles.schemas import DesignSpec

from .deps import get_media_client, get_role_registry

router = APIRouter()


class ImageRequest(BaseModel):
    prompt: str
    design_concept: Optional[str] = None


@router.post("/images")
async def generate_image(payload: ImageRequest, registry: RoleRegistry = Depends(get_role_registry)) -> dict:
    if not payload.prompt.strip():
        raise HTTPException(status_code=400, detail="prompt must not be empty")
    spec = DesignSpec(design_concept=payload.design_concept or payload.prompt, image_prompt=payload.prompt)
    outcome = await registry.get("Graphic Design Agent").generate_image(spec)
    if not outcome["success"]:
        raise HTTPException(status_code=502, detail=outcome["error"])
    return {"url": outcome["image_url"], "design_spec": outcome["design_spec"]}


@router.post("/uploads")
async def upload_file(file: UploadFile = File(...), media: MediaClient = Depends(get_media_client)) -> dict:
    content = await file.read()
    try:
        return media.upload_file(file.filename or "upload", content)
    except MediaError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
