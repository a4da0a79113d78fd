from __future__ import annotations

import os
from functools import lru_cache

from afrotech.core.config.loader import TenantConfig, default_state_dir, load_config
from afrotech.core.media.client import MediaClient
from afrotech.core.models.gateway import LLMGateway
from afrotech.core.orchestration.chat import ChatService
from afrotech.core.orchestration.orchestrator import Orchestrator
from afrotech.core.orchestration.session import SessionRegistry
from afrotech.core.powerups.catalog import PowerUpCatalog
from afrotech.core.roles.coordinator import AgentCoordinator
from afrotech.core.roles.registry import RoleRegistry, build_default_registry
from afrotech.core.runs.store import TaskStore
from afrotech.core.security.audit import StoreAuditSink
from afrotech.core.store import DataStore


@lru_cache(maxsize=1)
def get_tenant_config() -> TenantConfig:
    return load_config()


@lru_cache(maxsize=1)
def get_data_store() -> DataStore:
    # Task records are kept indefinitely unless the operator sets a retention cap.
    max_records: dict[str, int] = {}
    tasks_max = os.getenv("AFROTECH_TASKS_MAX", "").strip()
    if tasks_max:
        max_records["Task"] = int(tasks_max)
    return DataStore(state_dir=default_state_dir(), max_records=max_records)


@lru_cache(maxsize=1)
def get_gateway() -> LLMGateway:
    return LLMGateway()


@lru_cache(maxsize=1)
def get_media_client() -> MediaClient:
    return MediaClient(state_dir=get_data_store().state_dir)


@lru_cache(maxsize=1)
def get_role_registry() -> RoleRegistry:
    return build_default_registry(get_gateway(), store=get_data_store(), media=get_media_client())


@lru_cache(maxsize=1)
def get_orchestrator() -> Orchestrator:
    return Orchestrator(gateway=get_gateway(), registry=get_role_registry())


@lru_cache(maxsize=1)
def get_task_store() -> TaskStore:
    return TaskStore(get_data_store())


@lru_cache(maxsize=1)
def get_session_registry() -> SessionRegistry:
    return SessionRegistry()


@lru_cache(maxsize=1)
def get_audit_sink() -> StoreAuditSink:
    return StoreAuditSink(get_data_store())


@lru_cache(maxsize=1)
def get_chat_service() -> ChatService:
    return ChatService(
        store=get_data_store(),
        orchestrator=get_orchestrator(),
        tasks=get_task_store(),
        sessions=get_session_registry(),
        audit=get_audit_sink(),
        default_compliance_level=get_tenant_config().default_compliance_level,
    )


@lru_cache(maxsize=1)
def get_coordinator() -> AgentCoordinator:
    return AgentCoordinator(gateway=get_gateway(), registry=get_role_registry(), store=get_data_store())


@lru_cache(maxsize=1)
def get_powerup_catalog() -> PowerUpCatalog:
    return PowerUpCatalog(get_data_store(), seeds=get_tenant_config().power_ups)


PROVIDERS = (
    get_tenant_config,
    get_data_store,
    get_gateway,
    get_media_client,
    get_role_registry,
    get_orchestrator,
    get_task_store,
    get_session_registry,
    get_audit_sink,
    get_chat_service,
    get_coordinator,
    get_powerup_catalog,
)


def clear_caches() -> None:
    for provider in PROVIDERS:
        provider.cache_clear()
