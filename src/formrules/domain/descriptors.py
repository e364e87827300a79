"""Rule descriptors — the declarative rule configuration format.

A rule configuration maps each field to an ordered list of descriptors.
A descriptor is one of:

- a :class:`Rule` instance (used as-is),
- a catalog name (``"required"``, ``"email"``, ``"number"`` ...),
- a mapping such as ``{"rule": "minLength", "min": 3, "message": "..."}``.

Malformed descriptors raise :class:`RuleConfigurationError` immediately.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from formrules.domain.rules import (
    RULE_CATALOG,
    RULE_PARAMS,
    Rule,
    RuleConfigurationError,
    canonical_name,
)

RuleConfig = Mapping[str, Sequence[Rule | str | Mapping[str, Any]]]


class RuleDescriptor(BaseModel):
    """Mapping form of a rule descriptor."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    rule: str
    message: str | None = None
    min: int | float | None = None
    max: int | float | None = None
    pattern: str | None = None
    flags: list[str] = Field(default_factory=list)

    def build(self) -> Rule:
        """Construct the Rule this descriptor names."""
        name = canonical_name(self.rule)
        if name not in RULE_PARAMS:
            known = ", ".join(sorted(RULE_PARAMS))
            msg = f"Unknown rule {self.rule!r} (known: {known})"
            raise RuleConfigurationError(msg)

        unexpected = [
            param
            for param in ("min", "max", "pattern")
            if getattr(self, param) is not None and param not in RULE_PARAMS[name]
        ]
        if unexpected:
            msg = f"Rule {self.rule!r} does not accept {', '.join(map(repr, unexpected))}"
            raise RuleConfigurationError(msg)

        args: list[Any] = []
        for param in RULE_PARAMS[name]:
            value = getattr(self, param)
            if value is None:
                msg = f"Rule {self.rule!r} requires parameter {param!r}"
                raise RuleConfigurationError(msg)
            args.append(value)

        if self.flags and name != "pattern":
            msg = f"Rule {self.rule!r} does not accept 'flags'"
            raise RuleConfigurationError(msg)

        constructor = RULE_CATALOG[name]
        if name == "pattern":
            return constructor(*args, self.message, flags=_parse_flags(self.flags))
        return constructor(*args, self.message)


def _parse_flags(names: list[str]) -> int:
    flags = 0
    for name in names:
        flag = getattr(re, name.upper(), None)
        if not isinstance(flag, re.RegexFlag):
            msg = f"Unknown regex flag {name!r}"
            raise RuleConfigurationError(msg)
        flags |= flag
    return flags


def build_rule(descriptor: Rule | str | Mapping[str, Any]) -> Rule:
    """Turn a single descriptor into a Rule."""
    if isinstance(descriptor, Rule):
        return descriptor
    if isinstance(descriptor, str):
        return RuleDescriptor(rule=descriptor).build()
    if isinstance(descriptor, Mapping):
        try:
            parsed = RuleDescriptor.model_validate(dict(descriptor))
        except ValidationError as exc:
            msg = f"Malformed rule descriptor {dict(descriptor)!r}: {exc}"
            raise RuleConfigurationError(msg) from exc
        return parsed.build()
    msg = f"Unsupported rule descriptor {descriptor!r}"
    raise RuleConfigurationError(msg)


def build_rules(config: RuleConfig) -> dict[str, list[Rule]]:
    """Build every field's rule list, preserving the order supplied."""
    if not isinstance(config, Mapping):
        msg = f"Rule configuration must be a mapping, got {type(config).__name__}"
        raise RuleConfigurationError(msg)

    built: dict[str, list[Rule]] = {}
    for field, descriptors in config.items():
        if isinstance(descriptors, (str, bytes, Mapping, Rule)) or not isinstance(
            descriptors, Sequence
        ):
            msg = f"Rules for field {field!r} must be a list of descriptors"
            raise RuleConfigurationError(msg)
        built[field] = [build_rule(d) for d in descriptors]
    return built
