"""Tests for RuleRegistry evaluation, ordering, and fault containment."""

from __future__ import annotations

import logging

import pytest

from formrules.domain import rules
from formrules.domain.registry import EVALUATION_FAULT_MESSAGE, RuleRegistry
from formrules.domain.results import ValidationResult
from formrules.domain.rules import Rule, RuleConfigurationError


def _raising_rule() -> Rule:
    def boom(value: object) -> bool:
        raise RuntimeError("predicate exploded")

    return Rule(name="boom", test=boom, message="never shown")


@pytest.fixture
def registry() -> RuleRegistry:
    reg = RuleRegistry()
    reg.add_rule("name", rules.required())
    reg.add_rule("name", rules.min_length(3))
    reg.add_rule("email", rules.required())
    reg.add_rule("email", rules.email())
    return reg


class TestValidate:
    def test_required_passes_min_length_fails(self, registry: RuleRegistry) -> None:
        result = registry.validate("name", "a")
        assert result.is_valid is False
        assert result.errors == ("Minimum length is 3",)

    def test_all_failures_collected_in_order(self) -> None:
        reg = RuleRegistry()
        reg.add_rule("code", rules.min_length(5))
        reg.add_rule("code", rules.pattern(r"^\d+$"))
        reg.add_rule("code", rules.max_length(1))
        result = reg.validate("code", "ab")
        assert result.errors == ("Minimum length is 5", "Invalid format", "Maximum length is 1")

    def test_valid_value(self, registry: RuleRegistry) -> None:
        result = registry.validate("name", "Ada")
        assert result == ValidationResult(is_valid=True, errors=())

    def test_unknown_field_is_valid(self, registry: RuleRegistry) -> None:
        assert registry.validate("nickname", "").is_valid is True

    def test_duplicate_rules_run_twice(self) -> None:
        reg = RuleRegistry()
        rule = rules.required()
        reg.add_rule("x", rule)
        reg.add_rule("x", rule)
        assert reg.validate("x", "").errors == ("This field is required",) * 2

    def test_idempotent(self, registry: RuleRegistry) -> None:
        first = registry.validate("email", "bad")
        second = registry.validate("email", "bad")
        assert first == second
        assert first.model_dump_json() == second.model_dump_json()


class TestFaultContainment:
    def test_raising_predicate_becomes_message(self) -> None:
        reg = RuleRegistry()
        reg.add_rule("x", _raising_rule())
        result = reg.validate("x", "value")
        assert result.errors == (EVALUATION_FAULT_MESSAGE,)

    def test_remaining_rules_still_run(self) -> None:
        reg = RuleRegistry()
        reg.add_rule("x", _raising_rule())
        reg.add_rule("x", rules.min_length(10))
        result = reg.validate("x", "short")
        assert result.errors == (EVALUATION_FAULT_MESSAGE, "Minimum length is 10")

    def test_type_error_in_builtin_rule(self) -> None:
        reg = RuleRegistry()
        reg.add_rule("qty", rules.min_length(2))
        assert reg.validate("qty", 12).errors == (EVALUATION_FAULT_MESSAGE,)

    def test_fault_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        reg = RuleRegistry()
        reg.add_rule("x", _raising_rule())
        with caplog.at_level(logging.DEBUG, logger="formrules.domain.registry"):
            reg.validate("x", "value")
        assert any("boom" in record.getMessage() for record in caplog.records)


class TestValidateAll:
    def test_email_rule_message_only(self, registry: RuleRegistry) -> None:
        results = registry.validate_all({"email": "bad"})
        assert results["email"].is_valid is False
        assert results["email"].errors == ("Invalid email format",)

    def test_only_record_keys_are_validated(self, registry: RuleRegistry) -> None:
        results = registry.validate_all({"email": "a@b.com"})
        assert set(results) == {"email"}

    def test_unregistered_field_is_valid(self, registry: RuleRegistry) -> None:
        results = registry.validate_all({"extra": None})
        assert results["extra"].is_valid is True

    def test_does_not_mutate_record(self, registry: RuleRegistry) -> None:
        record = {"name": "a", "email": ""}
        registry.validate_all(record)
        assert record == {"name": "a", "email": ""}


class TestRegistration:
    @pytest.mark.parametrize("field", ["", "   ", None, 3])
    def test_malformed_field_name(self, field: object) -> None:
        with pytest.raises(RuleConfigurationError):
            RuleRegistry().add_rule(field, rules.required())  # type: ignore[arg-type]

    def test_non_rule_rejected(self) -> None:
        with pytest.raises(RuleConfigurationError):
            RuleRegistry().add_rule("x", lambda v: True)  # type: ignore[arg-type]

    def test_introspection(self, registry: RuleRegistry) -> None:
        assert registry.fields == ["name", "email"]
        assert "name" in registry
        assert "other" not in registry
        assert len(registry) == 2
        assert [r.name for r in registry.rules_for("email")] == ["required", "email"]
        assert registry.rules_for("missing") == ()

    def test_independent_instances(self) -> None:
        a = RuleRegistry()
        b = RuleRegistry()
        a.add_rule("x", rules.required())
        assert "x" not in b

    def test_from_config(self) -> None:
        reg = RuleRegistry.from_config(
            {"name": ["required", {"rule": "minLength", "min": 3}], "age": [rules.number()]}
        )
        assert reg.validate("name", "ab").errors == ("Minimum length is 3",)
        assert reg.validate("age", "x").errors == ("Must be a number",)

    def test_from_config_bad_field(self) -> None:
        with pytest.raises(RuleConfigurationError):
            RuleRegistry.from_config({"": ["required"]})
