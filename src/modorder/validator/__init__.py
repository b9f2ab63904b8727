"""Load-order validator module.

Exports the ``Validator`` class, the ``validate_load_order`` convenience
function, ``Diagnostic`` types, and all built-in validation rules.
"""
from __future__ import annotations

from modorder.validator.diagnostics import Diagnostic, DiagnosticSeverity
from modorder.validator.rules import DEFAULT_RULES, LoadOrderContext, Rule
from modorder.validator.validator import ValidationResult, Validator, validate_load_order

__all__ = [
    "Validator",
    "ValidationResult",
    "validate_load_order",
    "Diagnostic",
    "DiagnosticSeverity",
    "LoadOrderContext",
    "Rule",
    "DEFAULT_RULES",
]
