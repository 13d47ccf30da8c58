"""Tests for the wait command envelope."""

import pytest

from app_driver.core.errors import SerializationException
from app_driver.waits.commands import (
    WaitForCondition,
    decode_command,
    wait_until_first_frame_rasterized,
    wait_until_no_pending_frame,
    wait_until_no_transient_callbacks,
)
from app_driver.waits.conditions import (
    CombinedCondition,
    FirstFrameRasterizedCondition,
    NoPendingFrameCondition,
    NoTransientCallbacksCondition,
)


def test_serialize_without_timeout():
    command = WaitForCondition(NoPendingFrameCondition())
    assert command.serialize() == {
        "command": "waitForCondition",
        "conditionName": "NoPendingFrameCondition",
    }


def test_serialize_with_timeout():
    command = WaitForCondition(NoTransientCallbacksCondition(), timeout_ms=1500)
    json_map = command.serialize()
    assert json_map["timeout"] == "1500"
    assert json_map["conditionName"] == "NoTransientCallbacksCondition"


def test_round_trip_combined():
    command = WaitForCondition(
        CombinedCondition([NoPendingFrameCondition(), FirstFrameRasterizedCondition()]),
        timeout_ms=200,
    )
    assert WaitForCondition.deserialize(command.serialize()) == command


def test_deserialize_wrong_kind():
    with pytest.raises(SerializationException):
        WaitForCondition.deserialize({"command": "tap", "conditionName": "NoPendingFrameCondition"})


@pytest.mark.parametrize("timeout", ["abc", "-5", "1.5"])
def test_deserialize_bad_timeout(timeout):
    with pytest.raises(SerializationException):
        WaitForCondition.deserialize({
            "command": "waitForCondition",
            "timeout": timeout,
            "conditionName": "NoPendingFrameCondition",
        })


def test_deserialize_bad_condition():
    with pytest.raises(SerializationException) as exc_info:
        WaitForCondition.deserialize({"command": "waitForCondition", "conditionName": "Bogus"})
    assert "Bogus" in str(exc_info.value)


@pytest.mark.parametrize("factory,cls", [
    (wait_until_no_transient_callbacks, NoTransientCallbacksCondition),
    (wait_until_no_pending_frame, NoPendingFrameCondition),
    (wait_until_first_frame_rasterized, FirstFrameRasterizedCondition),
])
def test_legacy_constructors(factory, cls):
    command = factory(timeout_ms=100)
    assert isinstance(command, WaitForCondition)
    assert command.condition == cls()
    assert command.timeout_ms == 100


@pytest.mark.parametrize("kind,cls", [
    ("waitUntilNoTransientCallbacks", NoTransientCallbacksCondition),
    ("waitUntilNoPendingFrame", NoPendingFrameCondition),
    ("waitUntilFirstFrameRasterized", FirstFrameRasterizedCondition),
])
def test_decode_legacy_kinds(kind, cls):
    command = decode_command({"command": kind, "timeout": "300"})
    assert command.condition == cls()
    assert command.timeout_ms == 300


def test_decode_wait_for_condition():
    command = decode_command({"command": "waitForCondition", "conditionName": "CombinedCondition"})
    assert command.condition == CombinedCondition([])
    assert command.timeout_ms is None


def test_decode_unknown_command():
    with pytest.raises(SerializationException) as exc_info:
        decode_command({"command": "waitUntilSomething"})
    assert "waitUntilSomething" in str(exc_info.value)


def test_negative_timeout_rejected_at_construction():
    with pytest.raises(ValueError):
        WaitForCondition(NoPendingFrameCondition(), timeout_ms=-5)


def test_zero_timeout_round_trip():
    command = WaitForCondition(NoPendingFrameCondition(), timeout_ms=0)
    assert decode_command(command.serialize()) == command
