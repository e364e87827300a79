"""Tests for rule descriptor parsing."""

from __future__ import annotations

import pytest

from formrules.domain import rules
from formrules.domain.descriptors import RuleDescriptor, build_rule, build_rules
from formrules.domain.rules import RuleConfigurationError


class TestBuildRule:
    def test_rule_instance_passthrough(self) -> None:
        rule = rules.email()
        assert build_rule(rule) is rule

    def test_name_string(self) -> None:
        assert build_rule("required").name == "required"

    def test_mapping_with_params_and_message(self) -> None:
        rule = build_rule({"rule": "minLength", "min": 3, "message": "Too short"})
        assert rule.name == "minLength"
        assert rule.message == "Too short"
        assert rule.predicate("ab") is False

    def test_snake_case_alias(self) -> None:
        assert build_rule({"rule": "max_length", "max": 2}).name == "maxLength"

    def test_pattern_with_flags(self) -> None:
        rule = build_rule({"rule": "pattern", "pattern": "^abc$", "flags": ["ignorecase"]})
        assert rule.predicate("ABC") is True

    def test_numeric_bounds(self) -> None:
        assert build_rule({"rule": "min", "min": 1.5}).predicate("1") is False
        assert build_rule({"rule": "max", "max": 10}).predicate("10") is True


class TestConfigurationFaults:
    def test_missing_parameter(self) -> None:
        with pytest.raises(RuleConfigurationError, match="requires parameter 'min'"):
            build_rule({"rule": "minLength"})

    def test_unknown_rule(self) -> None:
        with pytest.raises(RuleConfigurationError, match="Unknown rule"):
            build_rule("phone")

    def test_unknown_key(self) -> None:
        with pytest.raises(RuleConfigurationError, match="Malformed"):
            build_rule({"rule": "required", "strict": True})

    def test_missing_rule_key(self) -> None:
        with pytest.raises(RuleConfigurationError):
            build_rule({"min": 3})

    def test_flags_on_non_pattern(self) -> None:
        with pytest.raises(RuleConfigurationError):
            build_rule({"rule": "email", "flags": ["ignorecase"]})

    @pytest.mark.parametrize(
        "descriptor",
        [
            {"rule": "min", "min": 1, "max": 5},
            {"rule": "required", "min": 3},
            {"rule": "email", "pattern": "x"},
        ],
    )
    def test_unused_parameter_rejected(self, descriptor: dict[str, object]) -> None:
        with pytest.raises(RuleConfigurationError, match="does not accept"):
            build_rule(descriptor)

    def test_unknown_flag(self) -> None:
        with pytest.raises(RuleConfigurationError, match="regex flag"):
            build_rule({"rule": "pattern", "pattern": "x", "flags": ["sideways"]})

    def test_invalid_parameter_value(self) -> None:
        with pytest.raises(RuleConfigurationError):
            build_rule({"rule": "minLength", "min": -2})

    def test_unsupported_descriptor_type(self) -> None:
        with pytest.raises(RuleConfigurationError):
            build_rule(42)  # type: ignore[arg-type]


class TestBuildRules:
    def test_order_preserved(self) -> None:
        built = build_rules({"email": ["required", "email"], "name": ["required"]})
        assert list(built) == ["email", "name"]
        assert [r.name for r in built["email"]] == ["required", "email"]

    def test_bare_string_instead_of_list(self) -> None:
        with pytest.raises(RuleConfigurationError, match="must be a list"):
            build_rules({"email": "required"})  # type: ignore[dict-item]

    def test_non_mapping_config(self) -> None:
        with pytest.raises(RuleConfigurationError):
            build_rules([("email", ["required"])])  # type: ignore[arg-type]

    def test_descriptor_model_frozen(self) -> None:
        desc = RuleDescriptor(rule="required")
        with pytest.raises(Exception):
            desc.rule = "email"  # type: ignore[misc]
