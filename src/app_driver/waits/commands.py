"""Driver command envelope for wait conditions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Optional

from app_driver.constants import COMMAND_KEY, TIMEOUT_KEY
from app_driver.core.errors import SerializationException
from app_driver.waits.conditions import (
    FirstFrameRasterizedCondition,
    NoPendingFrameCondition,
    NoTransientCallbacksCondition,
    WaitCondition,
    deserialize_condition,
)


@dataclass(frozen=True)
class WaitForCondition:
    """A driver command that waits until *condition* is satisfied."""

    condition: WaitCondition
    timeout_ms: Optional[int] = None

    kind: ClassVar[str] = "waitForCondition"

    def __post_init__(self):
        if self.timeout_ms is not None and self.timeout_ms < 0:
            raise ValueError(f"timeout_ms must be >= 0, got {self.timeout_ms}")

    @classmethod
    def deserialize(cls, json_map: Mapping[str, Any]) -> WaitForCondition:
        if json_map.get(COMMAND_KEY) != cls.kind:
            raise SerializationException(
                f"Expected a {cls.kind} command, got {json_map.get(COMMAND_KEY)}"
            )
        return cls(
            condition=deserialize_condition(json_map),
            timeout_ms=_parse_timeout(json_map),
        )

    def serialize(self) -> dict[str, str]:
        json_map = {COMMAND_KEY: self.kind}
        if self.timeout_ms is not None:
            json_map[TIMEOUT_KEY] = str(self.timeout_ms)
        json_map.update(self.condition.serialize())
        return json_map


def _parse_timeout(json_map: Mapping[str, Any]) -> int | None:
    raw = json_map.get(TIMEOUT_KEY)
    if raw is None:
        return None
    try:
        timeout_ms = int(raw)
    except (TypeError, ValueError) as exc:
        raise SerializationException(f"Invalid timeout {raw!r}") from exc
    if timeout_ms < 0:
        raise SerializationException(f"Invalid timeout {raw!r}")
    return timeout_ms


# ── Legacy single-condition commands ──────────────────────────────
# Older drivers send these kinds; they map onto WaitForCondition.

def wait_until_no_transient_callbacks(timeout_ms: int | None = None) -> WaitForCondition:
    return WaitForCondition(NoTransientCallbacksCondition(), timeout_ms)


def wait_until_no_pending_frame(timeout_ms: int | None = None) -> WaitForCondition:
    return WaitForCondition(NoPendingFrameCondition(), timeout_ms)


def wait_until_first_frame_rasterized(timeout_ms: int | None = None) -> WaitForCondition:
    return WaitForCondition(FirstFrameRasterizedCondition(), timeout_ms)


_LEGACY_COMMANDS = {
    "waitUntilNoTransientCallbacks": wait_until_no_transient_callbacks,
    "waitUntilNoPendingFrame": wait_until_no_pending_frame,
    "waitUntilFirstFrameRasterized": wait_until_first_frame_rasterized,
}


def decode_command(json_map: Mapping[str, Any]) -> WaitForCondition:
    """Decode a wait command, accepting the legacy single-condition kinds."""
    kind = json_map.get(COMMAND_KEY)
    if kind == WaitForCondition.kind:
        return WaitForCondition.deserialize(json_map)
    legacy = _LEGACY_COMMANDS.get(kind)
    if legacy is not None:
        return legacy(_parse_timeout(json_map))
    raise SerializationException(f"Unsupported command {kind} in the JSON string {dict(json_map)}")
