"""Serializable wait conditions evaluated inside the target application."""

from __future__ import annotations

import abc
import json
from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Sequence

from app_driver.constants import CONDITION_NAME_KEY, CONDITIONS_KEY
from app_driver.core.binding import SchedulerBinding
from app_driver.core.errors import SerializationException


class WaitCondition(abc.ABC):
    """Base class for a condition that can be waited upon.

    ``condition`` reports the current status inside the target app: True if
    the condition is satisfied, False otherwise. The coroutine returned by
    :meth:`wait` completes once ``condition`` turns True.
    """

    condition_name: ClassVar[str]

    @property
    @abc.abstractmethod
    def condition(self) -> bool:
        ...

    @abc.abstractmethod
    async def wait(self) -> None:
        ...

    @abc.abstractmethod
    def serialize(self) -> dict[str, str]:
        ...

    def describe(self) -> str:
        return self.condition_name


def _check_condition_name(json_map: Mapping[str, Any], expected: str) -> None:
    if json_map.get(CONDITION_NAME_KEY) != expected:
        raise SerializationException(
            f"Error occurred during deserializing the {expected} JSON string: {dict(json_map)}"
        )


class _LeafCondition(WaitCondition):
    """Stateless condition identified only by its name."""

    @classmethod
    def deserialize(cls, json_map: Mapping[str, Any]) -> _LeafCondition:
        _check_condition_name(json_map, cls.condition_name)
        return cls()

    def serialize(self) -> dict[str, str]:
        return {CONDITION_NAME_KEY: self.condition_name}


@dataclass(frozen=True)
class NoTransientCallbacksCondition(_LeafCondition):
    """Waits until no transient callbacks are scheduled."""

    condition_name: ClassVar[str] = "NoTransientCallbacksCondition"

    @property
    def condition(self) -> bool:
        return SchedulerBinding.get_instance().transient_callback_count == 0

    async def wait(self) -> None:
        while not self.condition:
            await SchedulerBinding.get_instance().end_of_cycle()


@dataclass(frozen=True)
class NoPendingFrameCondition(_LeafCondition):
    """Waits until no frame is scheduled."""

    condition_name: ClassVar[str] = "NoPendingFrameCondition"

    @property
    def condition(self) -> bool:
        return not SchedulerBinding.get_instance().has_scheduled_frame

    async def wait(self) -> None:
        while not self.condition:
            await SchedulerBinding.get_instance().end_of_cycle()


@dataclass(frozen=True)
class FirstFrameRasterizedCondition(_LeafCondition):
    """Waits until the target has rasterized its first frame.

    Rasterization is the last expensive phase of a frame that is still under
    the app's control, so it is a close proxy for the frame being presented.
    """

    condition_name: ClassVar[str] = "FirstFrameRasterizedCondition"

    @property
    def condition(self) -> bool:
        return SchedulerBinding.get_instance().first_frame_rasterized

    async def wait(self) -> None:
        # One-shot signal, resolves immediately once the frame is out.
        await SchedulerBinding.get_instance().wait_until_first_frame_rasterized()


@dataclass(frozen=True, init=False)
class CombinedCondition(WaitCondition):
    """Waits until all of the given conditions are met.

    Children are kept in declared order. ``wait()`` awaits each child in
    turn and repeats the whole pass until every child holds at once.
    """

    conditions: tuple[WaitCondition, ...] = ()

    condition_name: ClassVar[str] = "CombinedCondition"

    def __init__(self, conditions: Sequence[WaitCondition] = ()):
        object.__setattr__(self, "conditions", tuple(conditions))

    @classmethod
    def deserialize(cls, json_map: Mapping[str, Any]) -> CombinedCondition:
        _check_condition_name(json_map, cls.condition_name)
        encoded = json_map.get(CONDITIONS_KEY)
        if encoded is None:
            return cls()
        try:
            children = json.loads(encoded)
        except (TypeError, ValueError) as exc:
            raise SerializationException(
                f"Invalid {CONDITIONS_KEY} field in CombinedCondition JSON string: {dict(json_map)}"
            ) from exc
        if not isinstance(children, list):
            raise SerializationException(
                f"Expected a JSON array of conditions, got {type(children).__name__}: {dict(json_map)}"
            )
        return cls([deserialize_condition(child) for child in children])

    @property
    def condition(self) -> bool:
        # Evaluate every child, no short-circuit.
        return all([child.condition for child in self.conditions])

    async def wait(self) -> None:
        while not self.condition:
            for child in self.conditions:
                await child.wait()

    def serialize(self) -> dict[str, str]:
        return {
            CONDITION_NAME_KEY: self.condition_name,
            CONDITIONS_KEY: json.dumps(
                [child.serialize() for child in self.conditions],
                separators=(",", ":"),
            ),
        }

    def describe(self) -> str:
        inner = ", ".join(child.describe() for child in self.conditions)
        return f"{self.condition_name}({inner})"


CONDITION_NAMES = (
    NoTransientCallbacksCondition.condition_name,
    NoPendingFrameCondition.condition_name,
    FirstFrameRasterizedCondition.condition_name,
    CombinedCondition.condition_name,
)


def deserialize_condition(json_map: Mapping[str, Any]) -> WaitCondition:
    """Parse a :class:`WaitCondition` or its subclass from *json_map*.

    This is the only place condition kinds are registered.
    """
    if not isinstance(json_map, Mapping):
        raise SerializationException(
            f"Expected a JSON object for a wait condition, got {json_map!r}"
        )
    condition_name = json_map.get(CONDITION_NAME_KEY)
    if condition_name == NoTransientCallbacksCondition.condition_name:
        return NoTransientCallbacksCondition.deserialize(json_map)
    if condition_name == NoPendingFrameCondition.condition_name:
        return NoPendingFrameCondition.deserialize(json_map)
    if condition_name == FirstFrameRasterizedCondition.condition_name:
        return FirstFrameRasterizedCondition.deserialize(json_map)
    if condition_name == CombinedCondition.condition_name:
        return CombinedCondition.deserialize(json_map)
    raise SerializationException(
        f"Unsupported wait condition {condition_name} in the JSON string {dict(json_map)}"
    )
