"""Human-authored condition trees (YAML/JSON documents).

A document is the wire format with two conveniences: ``conditions`` is a
nested list rather than an embedded JSON string, and a condition may be
written as a short alias::

    conditionName: all
    conditions:
      - no-pending-frame
      - conditionName: NoTransientCallbacksCondition

A bare list is shorthand for a combined condition. Documents are lowered to
wire maps and decoded by :func:`deserialize_condition`.
"""

from __future__ import annotations

import json
import pathlib
from typing import Any, Sequence

import yaml

from app_driver.constants import CONDITION_NAME_KEY, CONDITIONS_KEY
from app_driver.core.errors import SerializationException
from app_driver.waits.conditions import (
    CombinedCondition,
    FirstFrameRasterizedCondition,
    NoPendingFrameCondition,
    NoTransientCallbacksCondition,
    WaitCondition,
    deserialize_condition,
)

ALIASES = {
    "no-transient-callbacks": NoTransientCallbacksCondition.condition_name,
    "no-pending-frame": NoPendingFrameCondition.condition_name,
    "first-frame-rasterized": FirstFrameRasterizedCondition.condition_name,
    "all": CombinedCondition.condition_name,
}


def _encode_children(children: list[dict[str, str]]) -> str:
    return json.dumps(children, separators=(",", ":"))


def _to_wire(node: Any) -> dict[str, str]:
    if isinstance(node, str):
        return {CONDITION_NAME_KEY: ALIASES.get(node, node)}
    if isinstance(node, list):
        return {
            CONDITION_NAME_KEY: CombinedCondition.condition_name,
            CONDITIONS_KEY: _encode_children([_to_wire(c) for c in node]),
        }
    if not isinstance(node, dict):
        raise SerializationException(f"Cannot read a wait condition from {node!r}")

    wire: dict[str, str] = {}
    name = node.get(CONDITION_NAME_KEY)
    if name is not None:
        wire[CONDITION_NAME_KEY] = ALIASES.get(name, name) if isinstance(name, str) else name
    children = node.get(CONDITIONS_KEY)
    if isinstance(children, list):
        wire[CONDITIONS_KEY] = _encode_children([_to_wire(c) for c in children])
    elif isinstance(children, str):
        wire[CONDITIONS_KEY] = children
    elif children is not None:
        raise SerializationException(
            f"Expected a list of conditions, got {type(children).__name__}: {node}"
        )
    return wire


def condition_from_document(doc: Any) -> WaitCondition:
    return deserialize_condition(_to_wire(doc))


def condition_from_aliases(names: Sequence[str]) -> WaitCondition:
    """One alias gives that condition; several are combined in order."""
    if len(names) == 1:
        return condition_from_document(names[0])
    return condition_from_document(list(names))


def wire_to_document(json_map: dict[str, Any]) -> dict[str, Any]:
    """Expand embedded ``conditions`` strings into nested lists."""
    doc = dict(json_map)
    children = doc.get(CONDITIONS_KEY)
    if isinstance(children, str):
        doc[CONDITIONS_KEY] = [wire_to_document(c) for c in json.loads(children)]
    return doc


def condition_to_document(condition: WaitCondition) -> dict[str, Any]:
    return wire_to_document(condition.serialize())


def load_condition_document(path: str | pathlib.Path) -> WaitCondition:
    text = pathlib.Path(path).read_text(encoding="utf-8")
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SerializationException(f"Invalid condition document {path}: {exc}") from exc
    return condition_from_document(doc)
