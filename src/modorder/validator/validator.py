"""Load-order validator: checks an order without changing it.

The ``Validator`` runs a configurable set of rules against an order and
the installed mods and returns a ``ValidationResult``.  In strict mode,
warnings are promoted to errors so that CI pipelines can enforce tighter
quality gates.

Usage
-----
::

    from modorder.validator import Validator

    result = Validator().validate(order, mods)
    if not result.is_valid:
        for d in result.errors:
            print(d)
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace

from modorder.meta.models import Meta
from modorder.validator.diagnostics import Diagnostic, DiagnosticSeverity
from modorder.validator.rules import DEFAULT_RULES, LoadOrderContext, Rule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """All findings for one validated order."""

    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_error]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if not d.is_error]

    @property
    def is_valid(self) -> bool:
        """Return True when no ERROR-level diagnostic was produced."""
        return not self.errors


class Validator:
    """Validator for mod load orders.

    Parameters
    ----------
    rules:
        The list of validation rules to run.  Defaults to all built-in
        rules (``DEFAULT_RULES``).
    strict:
        When ``True``, WARNING-level diagnostics are promoted to ERROR.
    """

    def __init__(
        self,
        rules: list[Rule] | None = None,
        strict: bool = False,
    ) -> None:
        self._rules: list[Rule] = rules if rules is not None else list(DEFAULT_RULES)
        self._strict: bool = strict

    def validate(self, order: Sequence[str], mods: Mapping[str, Meta]) -> ValidationResult:
        """Run all rules and return the collected findings.

        Diagnostics are sorted by the position of their mod in the
        order, then by code.
        """
        ctx = LoadOrderContext.build(order, mods)
        all_diagnostics: list[Diagnostic] = []
        for rule in self._rules:
            try:
                all_diagnostics.extend(rule(ctx))
            except Exception as exc:  # noqa: BLE001
                # A broken rule is reported, not allowed to abort validation.
                logger.exception("Validation rule %r failed", rule.__name__)
                all_diagnostics.append(
                    Diagnostic(
                        severity=DiagnosticSeverity.ERROR,
                        code="MOD999",
                        message=f"Internal validator error in rule {rule.__name__!r}: {exc}",
                        mod_id="",
                        suggestion="Please report this as a bug",
                        rule=rule.__name__,
                    )
                )

        if self._strict:
            all_diagnostics = [
                replace(d, severity=DiagnosticSeverity.ERROR)
                if d.severity == DiagnosticSeverity.WARNING
                else d
                for d in all_diagnostics
            ]

        all_diagnostics.sort(key=lambda d: (d.position, d.code))
        result = ValidationResult(diagnostics=all_diagnostics)
        if result.is_valid and not result.diagnostics:
            logger.info("Mod load order validation passed with no issues")
        else:
            logger.info(
                "Mod load order validation found %d error(s), %d warning(s)",
                len(result.errors),
                len(result.warnings),
            )
        return result

    def add_rule(self, rule: Rule) -> None:
        """Add a custom rule to this validator instance."""
        self._rules.append(rule)

    @property
    def rule_count(self) -> int:
        """Return the number of rules currently registered."""
        return len(self._rules)


def validate_load_order(
    order: Sequence[str],
    mods: Mapping[str, Meta],
    strict: bool = False,
) -> ValidationResult:
    """Convenience function: validate ``order`` with the default rules."""
    return Validator(strict=strict).validate(order, mods)
