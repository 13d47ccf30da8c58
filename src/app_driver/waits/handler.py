"""Target-side handling of wait commands."""

from __future__ import annotations

import asyncio
import json
import time
from typing import Any, Mapping, Optional

from pydantic import BaseModel

from app_driver.config import DriverConfig
from app_driver.constants import COMMAND_KEY
from app_driver.core.errors import AppDriverError, SerializationException, WaitTimeoutError
from app_driver.runner.logging import CommandLogger
from app_driver.waits.commands import decode_command


class CommandResult(BaseModel):
    success: bool = True
    data: Any = None
    error: Optional[str] = None


class WaitCommandHandler:
    """Decodes wait commands and runs them on the current event loop.

    The timeout is imposed here; an expired ``wait()`` is cancelled at
    whatever suspension point it reached.
    """

    def __init__(
        self,
        config: DriverConfig | None = None,
        logger: CommandLogger | None = None,
    ):
        self.config = config or DriverConfig()
        self.logger = logger

    async def handle(self, params: Mapping[str, Any]) -> CommandResult:
        started = time.monotonic()
        try:
            command = decode_command(params)
        except SerializationException as exc:
            result = CommandResult(success=False, error=f"Serialization error: {exc}")
            return self._finish(params, result, started)

        timeout_ms = (
            command.timeout_ms
            if command.timeout_ms is not None
            else self.config.timeouts.default_ms
        )
        description = command.condition.describe()
        try:
            # Already satisfied: answer without scheduling a wait, even at timeout 0.
            if not command.condition.condition:
                await asyncio.wait_for(command.condition.wait(), timeout_ms / 1000.0)
        except asyncio.TimeoutError:
            result = CommandResult(
                success=False,
                data={"condition": description, "timed_out": True},
                error=str(WaitTimeoutError(description, timeout_ms)),
            )
        except AppDriverError as exc:
            result = CommandResult(
                success=False,
                data={"condition": description, "timed_out": False},
                error=str(exc),
            )
        else:
            result = CommandResult(
                data={"condition": description, "timed_out": False},
            )
        return self._finish(params, result, started)

    async def handle_json(self, payload: str) -> str:
        """Handle a raw JSON request and return the JSON response."""
        try:
            params = json.loads(payload)
        except ValueError as exc:
            result = CommandResult(success=False, error=f"Serialization error: {exc}")
            return result.model_dump_json()
        if not isinstance(params, dict):
            result = CommandResult(
                success=False,
                error=f"Serialization error: expected a JSON object, got {type(params).__name__}",
            )
            return result.model_dump_json()
        result = await self.handle(params)
        return result.model_dump_json()

    def _finish(
        self, params: Mapping[str, Any], result: CommandResult, started: float
    ) -> CommandResult:
        if self.logger is not None:
            self.logger.log_command(
                params.get(COMMAND_KEY),
                dict(params),
                result=result.data,
                error=result.error,
                elapsed_ms=round((time.monotonic() - started) * 1000.0, 3),
            )
        return result
