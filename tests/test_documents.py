"""Tests for YAML/JSON condition documents."""

import json

import pytest

from app_driver.core.errors import SerializationException
from app_driver.waits.conditions import (
    CombinedCondition,
    FirstFrameRasterizedCondition,
    NoPendingFrameCondition,
    NoTransientCallbacksCondition,
)
from app_driver.waits.documents import (
    condition_from_aliases,
    condition_from_document,
    condition_to_document,
    load_condition_document,
)


def test_alias_string():
    assert condition_from_document("no-pending-frame") == NoPendingFrameCondition()


def test_full_name_string():
    assert condition_from_document("FirstFrameRasterizedCondition") == FirstFrameRasterizedCondition()


def test_bare_list_is_combined():
    cond = condition_from_document(["no-pending-frame", "no-transient-callbacks"])
    assert cond == CombinedCondition([NoPendingFrameCondition(), NoTransientCallbacksCondition()])


def test_nested_document():
    doc = {
        "conditionName": "all",
        "conditions": [
            "first-frame-rasterized",
            {"conditionName": "CombinedCondition", "conditions": ["no-pending-frame"]},
        ],
    }
    cond = condition_from_document(doc)
    assert cond == CombinedCondition([
        FirstFrameRasterizedCondition(),
        CombinedCondition([NoPendingFrameCondition()]),
    ])


def test_document_with_embedded_conditions_string():
    doc = {
        "conditionName": "CombinedCondition",
        "conditions": json.dumps([{"conditionName": "NoPendingFrameCondition"}]),
    }
    assert condition_from_document(doc) == CombinedCondition([NoPendingFrameCondition()])


def test_unknown_alias():
    with pytest.raises(SerializationException) as exc_info:
        condition_from_document("Bogus")
    assert "Bogus" in str(exc_info.value)


@pytest.mark.parametrize("doc", [42, {"conditionName": "all", "conditions": {"a": 1}}])
def test_invalid_documents(doc):
    with pytest.raises(SerializationException):
        condition_from_document(doc)


def test_condition_from_aliases():
    assert condition_from_aliases(["no-pending-frame"]) == NoPendingFrameCondition()
    assert condition_from_aliases(["no-pending-frame", "first-frame-rasterized"]) == CombinedCondition([
        NoPendingFrameCondition(),
        FirstFrameRasterizedCondition(),
    ])


def test_condition_to_document():
    cond = CombinedCondition([
        NoPendingFrameCondition(),
        CombinedCondition([NoTransientCallbacksCondition()]),
    ])
    assert condition_to_document(cond) == {
        "conditionName": "CombinedCondition",
        "conditions": [
            {"conditionName": "NoPendingFrameCondition"},
            {
                "conditionName": "CombinedCondition",
                "conditions": [{"conditionName": "NoTransientCallbacksCondition"}],
            },
        ],
    }
    assert condition_from_document(condition_to_document(cond)) == cond


def test_load_yaml_document(tmp_path):
    path = tmp_path / "ready.yaml"
    path.write_text(
        "conditionName: all\n"
        "conditions:\n"
        "  - first-frame-rasterized\n"
        "  - no-pending-frame\n",
        encoding="utf-8",
    )
    assert load_condition_document(path) == CombinedCondition([
        FirstFrameRasterizedCondition(),
        NoPendingFrameCondition(),
    ])


def test_load_json_document(tmp_path):
    path = tmp_path / "ready.json"
    path.write_text(json.dumps({"conditionName": "NoTransientCallbacksCondition"}), encoding="utf-8")
    assert load_condition_document(path) == NoTransientCallbacksCondition()


def test_load_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("conditionName: [unclosed\n", encoding="utf-8")
    with pytest.raises(SerializationException):
        load_condition_document(path)
