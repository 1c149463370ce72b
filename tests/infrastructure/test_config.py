"""Tests for environment-driven settings."""

import uuid
from pathlib import Path

import pytest

from ims.infrastructure.config import load_settings

_VARS = (
    "IMS_DATA_DIR",
    "IMS_LOG_LEVEL",
    "IMS_LOW_STOCK_THRESHOLD",
    "IMS_CONFLICT_RETRIES",
    "IMS_ACTOR_ID",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


class TestLoadSettings:

    def test_defaults(self):
        config = load_settings()
        assert config.log_level == "INFO"
        assert config.low_stock_threshold == 10
        assert config.conflict_retries == 3
        assert config.actor_id is None
        assert config.store_path.name == "inventory.json"

    def test_values_from_environment(self, monkeypatch, tmp_path):
        actor = uuid.uuid4()
        monkeypatch.setenv("IMS_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("IMS_LOG_LEVEL", "debug")
        monkeypatch.setenv("IMS_LOW_STOCK_THRESHOLD", "25")
        monkeypatch.setenv("IMS_CONFLICT_RETRIES", "5")
        monkeypatch.setenv("IMS_ACTOR_ID", str(actor))

        config = load_settings()

        assert config.store_path == Path(tmp_path) / "inventory.json"
        assert config.log_level == "DEBUG"
        assert config.low_stock_threshold == 25
        assert config.conflict_retries == 5
        assert config.actor_id == actor

    @pytest.mark.parametrize(
        "name, value",
        [
            ("IMS_LOG_LEVEL", "LOUD"),
            ("IMS_LOW_STOCK_THRESHOLD", "-1"),
            ("IMS_LOW_STOCK_THRESHOLD", "ten"),
            ("IMS_CONFLICT_RETRIES", "0"),
            ("IMS_ACTOR_ID", "not-a-uuid"),
        ],
    )
    def test_invalid_values_rejected(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(ValueError):
            load_settings()
