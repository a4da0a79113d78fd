from __future__ import annotations

import logging
from typing import Any, Mapping

from afrotech.core.config.loader import PowerUpSeed
from afrotech.core.store import DataStore, EntityNotFoundError
from afrotech.core.store.schemas import PowerUp

from .templates import extract_variables, render_prompt

logger = logging.getLogger("afrotech.powerups")


class PowerUpNotFound(RuntimeError):
    def __init__(self, power_up_id: str) -> None:
        super().__init__(f"power-up not found: {power_up_id}")
        self.power_up_id = power_up_id


class PowerUpCatalog:
    """Tenant-wide catalog of saved prompt templates.

    An empty collection is seeded from the tenant config on first read.
    """

    def __init__(self, store: DataStore, seeds: list[PowerUpSeed] | None = None) -> None:
        self._collection = store.entity("PowerUp")
        self._seeds = list(seeds or [])
        self._seeded = False

    def _ensure_seeded(self) -> None:
        if self._seeded:
            return
        self._seeded = True
        if not self._seeds or self._collection.list(limit=1):
            return
        for seed in self._seeds:
            self._collection.create(seed.model_dump())
        logger.info("power-ups seeded", extra={"extra_fields": {"count": len(self._seeds)}})

    def list_active(self) -> list[PowerUp]:
        self._ensure_seeded()
        records = self._collection.filter({"is_active": True}, order_by="name")
        return [PowerUp.model_validate(record) for record in records]

    def get(self, power_up_id: str) -> PowerUp:
        self._ensure_seeded()
        try:
            return PowerUp.model_validate(self._collection.get(power_up_id))
        except EntityNotFoundError:
            raise PowerUpNotFound(power_up_id) from None

    def create(self, data: Mapping[str, Any], created_by: str | None = None) -> PowerUp:
        payload = PowerUpSeed.model_validate(dict(data)).model_dump()
        payload["created_by"] = created_by
        return PowerUp.model_validate(self._collection.create(payload))

    def variables(self, power_up_id: str) -> list[str]:
        return extract_variables(self.get(power_up_id).prompt_template)

    def render(self, power_up_id: str, inputs: Mapping[str, str]) -> str:
        power_up = self.get(power_up_id)
        if not power_up.is_active:
            raise PowerUpNotFound(power_up_id)
        return render_prompt(power_up.prompt_template, inputs)
