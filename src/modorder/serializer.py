"""Serialization of resolution results to JSON and YAML.

The serialized form is a plain dict/list structure::

    {
      "order": ["finn.core", "finn.savanna"],
      "warnings": [
        {"kind": "missing_required_dependency", "mod_id": "finn.savanna",
         "missing": "finn.grass", "message": "..."}
      ]
    }

Usage
-----
::

    from modorder.serializer import ResultSerializer

    text = ResultSerializer().to_yaml(result)
"""
from __future__ import annotations

import json
from dataclasses import fields
from typing import Any

import yaml

from modorder.resolver.diagnostics import ResolutionResult, ResolutionWarning


class ResultSerializer:

    # ------------------------------------------------------------------
    # Dict helpers
    # ------------------------------------------------------------------

    def warning_to_dict(self, warning: ResolutionWarning) -> dict[str, Any]:
        """Serialize one warning, tagging it with its lower-case kind name."""
        data: dict[str, Any] = {"kind": warning.kind.name.lower()}
        for f in fields(warning):
            if f.name == "kind":
                continue
            value = getattr(warning, f.name)
            data[f.name] = list(value) if isinstance(value, tuple) else value
        data["message"] = str(warning)
        return data

    def to_dict(self, result: ResolutionResult) -> dict[str, Any]:
        return {
            "order": list(result.order),
            "warnings": [self.warning_to_dict(w) for w in result.warnings],
        }

    # ------------------------------------------------------------------
    # JSON / YAML
    # ------------------------------------------------------------------

    def to_json(self, result: ResolutionResult, indent: int = 2) -> str:
        """Serialize a ``ResolutionResult`` to a JSON string."""
        return json.dumps(self.to_dict(result), indent=indent, ensure_ascii=False)

    def to_yaml(self, result: ResolutionResult) -> str:
        """Serialize a ``ResolutionResult`` to a YAML string."""
        return yaml.dump(
            self.to_dict(result),
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )
