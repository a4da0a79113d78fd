from __future__ import annotations

import sys
from pathlib import Path
from uuid import uuid4

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse

from afrotech.core.config.loader import default_state_dir
from afrotech.core.http.client import close_http_client, request_with_retry
from afrotech.core.http.errors import AfrotechHTTPError
from afrotech.core.logging import configure_logging
from afrotech.core.logging.context import log_context
from afrotech.core.orchestration.session import SessionRegistry

from .auth import (
    TenantMismatchError,
    get_auth_mode,
    get_current_user,
    has_configured_tokens,
    is_auth_enabled,
    is_request_authenticated,
    resolve_user,
)
from .deps import (
    get_data_store,
    get_gateway,
    get_media_client,
    get_role_registry,
    get_session_registry,
    get_task_store,
    get_tenant_config,
)
from .routes_chat import router as chat_router
from .routes_contacts import router as contacts_router
from .routes_content_calendar import router as content_calendar_router
from .routes_media import router as media_router
from .routes_powerups import router as powerups_router
from .routes_roles import router as roles_router
from .routes_security import router as security_router
from .routes_tasks import router as tasks_router

_CHAT_COMPLETIONS_SUFFIX = "/v1/chat/completions"


def _state_dir_writable(state_dir: Path) -> bool:
    try:
        state_dir.mkdir(parents=True, exist_ok=True)
        marker = state_dir / ".write-check"
        marker.write_text("ok", encoding="utf-8")
        marker.unlink(missing_ok=True)
        return True
    except OSError:
        return False


def _llm_base_url(url: str) -> str:
    if url.endswith(_CHAT_COMPLETIONS_SUFFIX):
        return url[: -len(_CHAT_COMPLETIONS_SUFFIX)]
    return url.rstrip("/")


async def _llm_reachable(timeout_s: float = 1.0) -> bool:
    gateway = get_gateway()
    if not gateway.enabled:
        return False
    endpoint = f"{_llm_base_url(gateway.config.url)}/v1/models"
    try:
        response = await request_with_retry(
            "GET",
            endpoint,
            timeout_override=timeout_s,
            retries=0,
            allowed_statuses={200},
            redact_url=True,
        )
        return response.status_code == 200
    except AfrotechHTTPError:
        return False


app = FastAPI(title="Afro-Tech AI Command API")
configure_logging(default_state_dir())

app.include_router(chat_router, prefix="/chat", tags=["chat"])
app.include_router(tasks_router, prefix="/tasks", tags=["tasks"])
app.include_router(roles_router, prefix="/roles", tags=["roles"])
app.include_router(media_router, prefix="/media", tags=["media"])
app.include_router(contacts_router, prefix="/contacts", tags=["contacts"])
app.include_router(content_calendar_router, prefix="/content-calendar", tags=["content-calendar"])
app.include_router(powerups_router, prefix="/powerups", tags=["powerups"])
app.include_router(security_router, prefix="/security", tags=["security"])


@app.middleware("http")
async def request_context_middleware(request, call_next):
    correlation_id = request.headers.get("X-Correlation-ID") or str(uuid4())
    try:
        user_id = resolve_user(request)
    except TenantMismatchError:
        user_id = None
    with log_context(correlation_id=correlation_id, user_id=user_id):
        response = await call_next(request)
    response.headers["X-Correlation-ID"] = correlation_id
    return response


@app.middleware("http")
async def auth_middleware(request, call_next):
    if request.url.path.startswith("/healthz"):
        return await call_next(request)

    if not is_auth_enabled():
        return await call_next(request)

    if not is_request_authenticated(request):
        return JSONResponse(status_code=401, content={"detail": "unauthorized"})

    try:
        resolve_user(request)
    except TenantMismatchError as exc:
        return JSONResponse(status_code=403, content={"detail": str(exc)})

    return await call_next(request)


@app.on_event("startup")
def startup() -> None:
    app.state.tenant_config = get_tenant_config()
    app.state.data_store = get_data_store()
    app.state.task_store = get_task_store()
    app.state.role_registry = get_role_registry()
    app.state.session_registry = get_session_registry()


@app.on_event("shutdown")
async def shutdown() -> None:
    await close_http_client()


@app.get("/activity")
def activity(
    user_id: str = Depends(get_current_user),
    sessions: SessionRegistry = Depends(get_session_registry),
) -> dict:
    session = sessions.get(user_id)
    return {"is_processing": session.is_processing, "activities": session.activity.snapshot()}


@app.get("/healthz")
def healthz() -> dict[str, bool]:
    return {"ok": True}


@app.get("/healthz/full")
async def healthz_full() -> dict[str, object]:
    state_dir = default_state_dir()
    auth_mode = get_auth_mode()
    auth_enabled = is_auth_enabled()
    gateway = get_gateway()
    registry = get_role_registry()

    state_writable = _state_dir_writable(state_dir)
    payload: dict[str, object] = {
        "ok": True,
        "python": {"version": sys.version.split()[0]},
        "state_dir": {"path": str(state_dir), "writable": state_writable},
        "auth": {"mode": auth_mode, "enabled": auth_enabled},
        "llm": {
            "provider": gateway.config.provider,
            "model": gateway.config.model,
            "url": _llm_base_url(gateway.config.url) if gateway.enabled else "",
            "reachable": await _llm_reachable(),
        },
        "images": {"enabled": get_media_client().image_enabled},
        "roles": {
            "directors": len(registry.directors()),
            "managers": len(registry.names("manager")),
            "agents": len(registry.names("agent")),
        },
        "tenant": {"agency_name": get_tenant_config().branding.agency_name},
    }

    if auth_enabled and not has_configured_tokens():
        payload["ok"] = False
    if not state_writable:
        payload["ok"] = False

    return payload


def run() -> None:
    uvicorn.run("afrotech.apps.api.main:app", reload=True, host="127.0.0.1", port=8000)
