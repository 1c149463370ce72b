"""Wiring: builds the JSON-backed unit of work the CLI hands to use cases."""

from __future__ import annotations

from ims.infrastructure.config import Settings, load_settings
from ims.infrastructure.persistence.json_store import JsonStore
from ims.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork


def unit_of_work(config: Settings | None = None) -> JsonUnitOfWork:
    config = config or load_settings()
    return JsonUnitOfWork(JsonStore(config.store_path))
