"""Wait conditions and the command that carries them."""

from app_driver.waits.conditions import (
    CombinedCondition,
    FirstFrameRasterizedCondition,
    NoPendingFrameCondition,
    NoTransientCallbacksCondition,
    WaitCondition,
    deserialize_condition,
)

__all__ = [
    "CombinedCondition",
    "FirstFrameRasterizedCondition",
    "NoPendingFrameCondition",
    "NoTransientCallbacksCondition",
    "WaitCondition",
    "deserialize_condition",
]
