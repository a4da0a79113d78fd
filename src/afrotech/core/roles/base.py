from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from pydantic import BaseModel

from afrotech.core.logging.context import log_context
from afrotech.core.models.gateway import LLMGateway
from afrotech.core.models.prompts import serialize_context
from afrotech.core.observability.trace import Trace

from .schemas import RoleKind

logger = logging.getLogger("afrotech.roles")


class RoleError(RuntimeError):
    """Base error for role dispatch and execution."""


class UnknownRoleError(RoleError):
    def __init__(self, name: str) -> None:
        super().__init__(f"unknown role: {name}")
        self.name = name


class RoleExecutor(Protocol):
    name: str
    kind: RoleKind
    description: str
    expertise: list[str]

    async def execute(self, task: str, context: dict[str, Any] | None = None, trace: Trace | None = None) -> BaseModel: ...


@dataclass
class PromptRole:
    """A role backed by one prompt template and one response contract.

    Templates carry ``{task}`` and ``{context}`` placeholders and no other braces.
    """

    name: str
    kind: RoleKind
    template: str
    response_model: type[BaseModel]
    gateway: LLMGateway
    internet: bool = False
    description: str = ""
    expertise: list[str] = field(default_factory=list)
    sub_agents: list[str] = field(default_factory=list)

    def render(self, task: str, context: dict[str, Any] | None = None) -> str:
        return self.template.format(task=task, context=serialize_context(context or {}))

    async def execute(self, task: str, context: dict[str, Any] | None = None, trace: Trace | None = None) -> BaseModel:
        prompt = self.render(task, context)
        with log_context(role=self.name):
            if trace is not None:
                trace.emit("RoleStarted", {"role": self.name, "kind": self.kind})
            result = await self.gateway.invoke(
                prompt,
                self.response_model,
                add_context_from_internet=self.internet,
                trace=trace,
            )
            logger.info("role_executed", extra={"extra_fields": {"role": self.name, "kind": self.kind}})
            if trace is not None:
                trace.emit("RoleCompleted", {"role": self.name})
        return result
