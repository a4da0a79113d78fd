from __future__ import annotations

from typing import Any

from afrotech.core.media.client import MediaClient
from afrotech.core.models.gateway import LLMGateway
from afrotech.core.store import DataStore

from .base import RoleExecutor, UnknownRoleError
from .creative import build_creative_agents
from .directors import DIRECTORS, build_director_agent, build_directors
from .managers import build_managers
from .marketing import build_marketing_agents
from .sales import build_sales_agents
from .schemas import RoleKind
from .social import build_social_agents


class RoleRegistry:
    """Closed name -> executor table; lookups of unregistered names fail loudly."""

    def __init__(self) -> None:
        self._roles: dict[str, RoleExecutor] = {}

    def register(self, role: RoleExecutor) -> None:
        self._roles[role.name] = role

    def get(self, name: str) -> RoleExecutor:
        try:
            return self._roles[name]
        except KeyError:
            raise UnknownRoleError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._roles

    def names(self, kind: RoleKind | None = None) -> list[str]:
        return sorted(name for name, role in self._roles.items() if kind is None or role.kind == kind)

    def roles(self, kind: RoleKind | None = None) -> list[RoleExecutor]:
        return [self._roles[name] for name in self.names(kind)]

    def directors(self) -> list[tuple[str, str]]:
        """Routable directors, in their canonical order, as (name, description)."""
        return [(name, self._roles[name].description) for name in DIRECTORS if name in self._roles]

    def describe(self, name: str) -> dict[str, Any]:
        role = self.get(name)
        return {
            "name": role.name,
            "kind": role.kind,
            "description": role.description,
            "expertise": list(role.expertise),
            "internet": bool(getattr(role, "internet", False)),
        }

    def hierarchy(self) -> dict[str, Any]:
        director_agent = self._roles.get("Director Agent")
        managers = []
        if director_agent is not None:
            for manager_name in getattr(director_agent, "sub_agents", []):
                if manager_name in self._roles:
                    manager = self._roles[manager_name]
                    managers.append({"name": manager.name, "sub_agents": list(getattr(manager, "sub_agents", []))})
        return {
            "directors": [{"name": name, "description": description} for name, description in self.directors()],
            "director_agent": {"name": "Director Agent", "role": "Executive Coordinator"} if director_agent else None,
            "managers": managers,
            "agents": [{"name": role.name, "description": role.description} for role in self.roles("agent")],
        }


def build_default_registry(
    gateway: LLMGateway,
    store: DataStore | None = None,
    media: MediaClient | None = None,
) -> RoleRegistry:
    registry = RoleRegistry()
    roles: list[RoleExecutor] = [
        *build_directors(gateway),
        build_director_agent(gateway),
        *build_managers(gateway, store),
        *build_marketing_agents(gateway),
        *build_sales_agents(gateway),
        *build_social_agents(gateway),
        *build_creative_agents(gateway, media),
    ]
    for role in roles:
        registry.register(role)
    return registry
