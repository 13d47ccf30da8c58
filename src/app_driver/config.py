"""Configuration management."""

from __future__ import annotations

import json
import pathlib
from typing import Any, Optional

from pydantic import BaseModel, Field

from app_driver.constants import CONFIG_FILE, DEFAULT_TIMEOUT_MS


class TimeoutConfig(BaseModel):
    default_ms: int = Field(default=DEFAULT_TIMEOUT_MS, ge=0)


class LoggingConfig(BaseModel):
    log_path: Optional[str] = None
    echo_stderr: bool = True


class DriverConfig(BaseModel):
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class ConfigStore:
    """Manages app-driver.json read/write."""

    def __init__(self, path: str | pathlib.Path | None = None):
        self.path = pathlib.Path(path or CONFIG_FILE)

    def _load_raw(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        return json.loads(self.path.read_text(encoding="utf-8"))

    def load(self) -> DriverConfig:
        return DriverConfig(**self._load_raw())

    def save(self, config: DriverConfig) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(config.model_dump(exclude_none=True), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )

    def ensure_default(self) -> bool:
        """Write the default config if none exists. Returns True if written."""
        if self.path.exists():
            return False
        self.save(DriverConfig())
        return True
