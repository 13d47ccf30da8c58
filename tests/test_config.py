"""Tests for config management."""

import json

import pydantic
import pytest

from app_driver.config import ConfigStore, DriverConfig, LoggingConfig, TimeoutConfig
from app_driver.constants import DEFAULT_TIMEOUT_MS


def test_defaults():
    config = DriverConfig()
    assert config.timeouts.default_ms == DEFAULT_TIMEOUT_MS
    assert config.logging.log_path is None
    assert config.logging.echo_stderr is True


def test_negative_timeout_rejected():
    with pytest.raises(pydantic.ValidationError):
        TimeoutConfig(default_ms=-1)


def test_load_missing_file_gives_defaults(tmp_path):
    store = ConfigStore(tmp_path / "app-driver.json")
    assert store.load() == DriverConfig()


def test_save_and_load(tmp_path):
    store = ConfigStore(tmp_path / "nested" / "app-driver.json")
    config = DriverConfig(
        timeouts=TimeoutConfig(default_ms=2500),
        logging=LoggingConfig(log_path="logs/commands.log", echo_stderr=False),
    )
    store.save(config)
    assert store.load() == config
    raw = json.loads(store.path.read_text(encoding="utf-8"))
    assert raw["timeouts"]["default_ms"] == 2500


def test_ensure_default(tmp_path):
    store = ConfigStore(tmp_path / "app-driver.json")
    assert store.ensure_default() is True
    assert store.path.exists()
    assert store.ensure_default() is False
    assert store.load().timeouts.default_ms == DEFAULT_TIMEOUT_MS
