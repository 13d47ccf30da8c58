"""Structured per-command logging."""

from __future__ import annotations

import json
import pathlib
import sys
import time
from typing import Any

from app_driver.config import LoggingConfig
from app_driver.constants import DEFAULT_LOG_TAIL


class CommandLogger:
    """Append-only structured log of handled wait commands."""

    def __init__(
        self,
        log_path: str | pathlib.Path | None = None,
        echo_stderr: bool = True,
    ):
        self._log_path = pathlib.Path(log_path) if log_path else None
        self._echo_stderr = echo_stderr
        self._fh = None
        self._step = 0

    @classmethod
    def from_config(cls, config: LoggingConfig) -> CommandLogger:
        return cls(config.log_path, echo_stderr=config.echo_stderr)

    def open(self) -> None:
        if self._log_path is None:
            return
        self._log_path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = open(self._log_path, "a", encoding="utf-8")

    def close(self) -> None:
        if self._fh:
            self._fh.close()
            self._fh = None

    def __enter__(self) -> CommandLogger:
        self.open()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def log_command(
        self,
        command: str | None,
        args: dict[str, Any],
        result: dict[str, Any] | None = None,
        error: str | None = None,
        elapsed_ms: float | None = None,
    ) -> dict[str, Any]:
        self._step += 1
        entry = {
            "step": self._step,
            "timestamp": time.time(),
            "command": command,
            "args": args,
            "result": result,
            "error": error,
            "elapsed_ms": elapsed_ms,
        }
        line = json.dumps(entry, ensure_ascii=False, default=str)
        if self._fh:
            self._fh.write(line + "\n")
            self._fh.flush()
        if self._echo_stderr:
            print(line, file=sys.stderr)
        return entry

    def read_last_n(self, n: int = DEFAULT_LOG_TAIL) -> list[dict[str, Any]]:
        if n <= 0:
            return []
        if self._log_path is None or not self._log_path.exists():
            return []
        lines = self._log_path.read_text(encoding="utf-8").strip().splitlines()
        return [json.loads(l) for l in lines[-n:]]
