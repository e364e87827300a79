"""RuleRegistry — ordered per-field rules and their evaluator.

Registries are plain instances owned by whoever builds them; independent
forms hold independent registries.

INVARIANT: ``validate`` and ``validate_all`` never raise for a rule that
misbehaves at evaluation time. A raising predicate is reported as
:data:`EVALUATION_FAULT_MESSAGE` in that rule's position.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from formrules.domain.descriptors import RuleConfig, build_rules
from formrules.domain.results import ValidationResult
from formrules.domain.rules import Rule, RuleConfigurationError

logger = logging.getLogger(__name__)

EVALUATION_FAULT_MESSAGE = "Validation rule failed to evaluate"


def check_field_name(field: Any) -> str:
    """Return *field* if it is a usable field name, else raise."""
    if not isinstance(field, str) or not field.strip():
        msg = f"Field name must be a non-empty string, got {field!r}"
        raise RuleConfigurationError(msg)
    return field


class RuleRegistry:
    """Maps field names to the ordered rules that validate them.

    Usage::

        registry = RuleRegistry()
        registry.add_rule("name", rules.required())
        registry.add_rule("name", rules.min_length(3))
        registry.validate("name", "a").errors  # ("Minimum length is 3",)
    """

    def __init__(self) -> None:
        self._rules: dict[str, list[Rule]] = {}

    @classmethod
    def from_config(cls, config: RuleConfig) -> RuleRegistry:
        """Build a registry from a field -> descriptors mapping."""
        registry = cls()
        for field, field_rules in build_rules(config).items():
            check_field_name(field)
            for rule in field_rules:
                registry.add_rule(field, rule)
        return registry

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_rule(self, field: str, rule: Rule) -> None:
        """Append *rule* to *field*'s rule list. Duplicates are kept."""
        check_field_name(field)
        if not isinstance(rule, Rule):
            msg = f"Expected a Rule for field {field!r}, got {rule!r}"
            raise RuleConfigurationError(msg)
        self._rules.setdefault(field, []).append(rule)

    def rules_for(self, field: str) -> tuple[Rule, ...]:
        """Rules registered for *field*, in evaluation order."""
        return tuple(self._rules.get(field, ()))

    @property
    def fields(self) -> list[str]:
        """Fields with at least one rule, in registration order."""
        return list(self._rules)

    def __contains__(self, field: object) -> bool:
        return field in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._rules))

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def validate(self, field: str, value: Any) -> ValidationResult:
        """Run every rule for *field* and collect all failure messages."""
        errors: list[str] = []
        for rule in self._rules.get(field, ()):
            try:
                passed = rule.predicate(value)
            except Exception:
                logger.debug(
                    "Rule %s raised while validating field %s",
                    rule.name,
                    field,
                    exc_info=True,
                )
                errors.append(EVALUATION_FAULT_MESSAGE)
                continue
            if not passed:
                errors.append(rule.message)
        return ValidationResult.from_errors(errors)

    def validate_all(self, record: Mapping[str, Any]) -> dict[str, ValidationResult]:
        """Validate each field present in *record*.

        Fields that have rules but are absent from *record* are skipped.
        """
        return {field: self.validate(field, value) for field, value in record.items()}
