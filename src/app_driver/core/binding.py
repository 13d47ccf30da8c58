"""Scheduler probes exposed by the hosting application."""

from __future__ import annotations

import abc
import asyncio
import threading
from typing import Optional

from app_driver.core.errors import BindingError


class SchedulerBinding(abc.ABC):
    """Read-only view of the target's scheduling and rendering state.

    Wait conditions never own any of this state; they read the probes and
    await the two notifications below on the target's own event loop.
    """

    _instance: Optional[SchedulerBinding] = None
    _lock = threading.Lock()

    @classmethod
    def install(cls, binding: SchedulerBinding) -> None:
        with cls._lock:
            SchedulerBinding._instance = binding

    @classmethod
    def get_instance(cls) -> SchedulerBinding:
        binding = SchedulerBinding._instance
        if binding is None:
            raise BindingError(
                "No scheduler binding installed; call SchedulerBinding.install() first"
            )
        return binding

    @classmethod
    def reset(cls) -> None:
        with cls._lock:
            SchedulerBinding._instance = None

    @property
    @abc.abstractmethod
    def transient_callback_count(self) -> int:
        """Number of scheduled transient (animation) callbacks."""

    @property
    @abc.abstractmethod
    def has_scheduled_frame(self) -> bool:
        """Whether a rendering pass is currently scheduled."""

    @property
    @abc.abstractmethod
    def first_frame_rasterized(self) -> bool:
        """Whether the first frame has completed rasterization."""

    @abc.abstractmethod
    async def end_of_cycle(self) -> None:
        """Suspend until the next scheduling cycle boundary."""

    @abc.abstractmethod
    async def wait_until_first_frame_rasterized(self) -> None:
        """Suspend until the first frame is rasterized; immediate afterwards."""


class ManualBinding(SchedulerBinding):
    """Binding whose state and notifications are driven explicitly.

    Hosts that run their own frame loop call :meth:`complete_cycle` at every
    frame boundary and :meth:`mark_first_frame_rasterized` once. Tests use it
    to step a condition through a known sequence of states.
    """

    def __init__(
        self,
        transient_callback_count: int = 0,
        has_scheduled_frame: bool = False,
        first_frame_rasterized: bool = False,
    ):
        self._transient_callback_count = transient_callback_count
        self._has_scheduled_frame = has_scheduled_frame
        self._first_frame_rasterized = first_frame_rasterized
        self._cycle_event: asyncio.Event | None = None
        self._first_frame_event: asyncio.Event | None = None
        self.cycles = 0
        self.end_of_cycle_waits = 0
        self.first_frame_waits = 0

    @property
    def transient_callback_count(self) -> int:
        return self._transient_callback_count

    @transient_callback_count.setter
    def transient_callback_count(self, value: int) -> None:
        self._transient_callback_count = value

    @property
    def has_scheduled_frame(self) -> bool:
        return self._has_scheduled_frame

    @has_scheduled_frame.setter
    def has_scheduled_frame(self, value: bool) -> None:
        self._has_scheduled_frame = value

    @property
    def first_frame_rasterized(self) -> bool:
        return self._first_frame_rasterized

    async def end_of_cycle(self) -> None:
        if self._cycle_event is None:
            self._cycle_event = asyncio.Event()
        event = self._cycle_event
        self.end_of_cycle_waits += 1
        await event.wait()

    def complete_cycle(self) -> None:
        """Mark a frame boundary, waking everyone waiting on it."""
        event, self._cycle_event = self._cycle_event, None
        self.cycles += 1
        if event is not None:
            event.set()

    async def wait_until_first_frame_rasterized(self) -> None:
        if self._first_frame_rasterized:
            return
        if self._first_frame_event is None:
            self._first_frame_event = asyncio.Event()
        self.first_frame_waits += 1
        await self._first_frame_event.wait()

    def mark_first_frame_rasterized(self) -> None:
        if self._first_frame_rasterized:
            return
        self._first_frame_rasterized = True
        if self._first_frame_event is not None:
            self._first_frame_event.set()
