from .base import EntityNotFoundError, EntityStore, StoreError
from .jsonl import ENTITY_NAMES, DataStore, JsonlEntityStore

__all__ = ["DataStore", "ENTITY_NAMES", "EntityNotFoundError", "EntityStore", "JsonlEntityStore", "StoreError"]
