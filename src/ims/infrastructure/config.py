"""Runtime settings, read from the environment (and a ``.env`` file if present)."""

from __future__ import annotations

import os
import uuid
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Default data directory: <repo root>/data when installed in editable mode.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    log_level: str = "INFO"
    low_stock_threshold: int = 10
    conflict_retries: int = 3
    actor_id: uuid.UUID | None = None

    @property
    def store_path(self) -> Path:
        return self.data_dir / "inventory.json"


def load_settings() -> Settings:
    """Build Settings from ``IMS_*`` variables. Invalid values raise ValueError."""
    load_dotenv()

    log_level = os.getenv("IMS_LOG_LEVEL", "INFO").upper()
    if log_level not in _LOG_LEVELS:
        raise ValueError(f"IMS_LOG_LEVEL must be one of {', '.join(sorted(_LOG_LEVELS))}")

    threshold = int(os.getenv("IMS_LOW_STOCK_THRESHOLD", 10))
    if threshold < 0:
        raise ValueError("IMS_LOW_STOCK_THRESHOLD cannot be negative")

    retries = int(os.getenv("IMS_CONFLICT_RETRIES", 3))
    if retries < 1:
        raise ValueError("IMS_CONFLICT_RETRIES must be at least 1")

    raw_actor = os.getenv("IMS_ACTOR_ID")
    actor_id = uuid.UUID(raw_actor) if raw_actor else None

    return Settings(
        data_dir=Path(os.getenv("IMS_DATA_DIR", str(_DEFAULT_DATA_DIR))),
        log_level=log_level,
        low_stock_threshold=threshold,
        conflict_retries=retries,
        actor_id=actor_id,
    )
