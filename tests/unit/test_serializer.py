"""Unit tests for modorder.serializer."""
from __future__ import annotations

import json

import pytest
import yaml

from modorder.resolver.diagnostics import (
    CircularDependency,
    ConflictingConstraints,
    MissingRequiredDependency,
    ResolutionResult,
)
from modorder.serializer import ResultSerializer


@pytest.fixture()
def result() -> ResolutionResult:
    return ResolutionResult(
        order=["core", "addon", "a", "b"],
        warnings=[
            CircularDependency(cycle=("a", "b")),
            MissingRequiredDependency(mod_id="addon", missing="ghost"),
        ],
    )


class TestResultSerializer:
    def test_warning_to_dict(self) -> None:
        data = ResultSerializer().warning_to_dict(
            ConflictingConstraints(mod_id="n", details="Required position range [2, 0] is invalid")
        )
        assert data == {
            "kind": "conflicting_constraints",
            "mod_id": "n",
            "details": "Required position range [2, 0] is invalid",
            "message": "Conflicting dependency constraints for mod 'n': "
            "Required position range [2, 0] is invalid",
        }

    def test_cycle_becomes_list(self) -> None:
        data = ResultSerializer().warning_to_dict(CircularDependency(cycle=("a", "b")))
        assert data["cycle"] == ["a", "b"]
        assert data["kind"] == "circular_dependency"

    def test_to_dict(self, result: ResolutionResult) -> None:
        data = ResultSerializer().to_dict(result)
        assert data["order"] == ["core", "addon", "a", "b"]
        assert [w["kind"] for w in data["warnings"]] == [
            "circular_dependency",
            "missing_required_dependency",
        ]

    def test_json(self, result: ResolutionResult) -> None:
        text = ResultSerializer().to_json(result)
        assert json.loads(text) == ResultSerializer().to_dict(result)

    def test_yaml_keeps_key_order(self, result: ResolutionResult) -> None:
        text = ResultSerializer().to_yaml(result)
        assert text.startswith("order:")
        assert yaml.safe_load(text) == ResultSerializer().to_dict(result)

    def test_empty_result(self) -> None:
        assert ResultSerializer().to_dict(ResolutionResult()) == {"order": [], "warnings": []}
