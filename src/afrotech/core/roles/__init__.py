from .base import PromptRole, RoleError, RoleExecutor, UnknownRoleError
from .registry import RoleRegistry, build_default_registry

__all__ = ["PromptRole", "RoleError", "RoleExecutor", "RoleRegistry", "UnknownRoleError", "build_default_registry"]
