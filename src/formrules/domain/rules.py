"""Rule type and the built-in rule catalog.

A rule is a pure predicate over a single value plus the message shown when
it fails. Presence and format are checked separately: only ``required``
rejects empty input, every other rule lets empty input through so a field
can be optional yet format-checked when supplied.

The empty check lives in one place (:meth:`Rule.predicate`) rather than in
each rule body.
"""

from __future__ import annotations

import math
import numbers
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


class RuleConfigurationError(ValueError):
    """Raised when a rule, registry, or session is configured incorrectly.

    This is a programmer error surfaced at configuration time, never a
    validation outcome.
    """


EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def is_empty(value: Any) -> bool:
    """Return True for the values treated as "not supplied".

    Examples:
        >>> is_empty(None), is_empty(""), is_empty(0), is_empty(" ")
        (True, True, False, False)
    """
    return value is None or (isinstance(value, str) and value == "")


def to_number(value: Any) -> float:
    """Coerce *value* to a float, returning NaN when it cannot be coerced."""
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan


@dataclass(frozen=True, slots=True)
class Rule:
    """A named predicate over one value plus its failure message.

    Attributes:
        name: Catalog name of the rule (e.g. ``"minLength"``).
        test: Core predicate; only sees non-empty values when
            ``skip_empty`` is set.
        message: Human-readable message reported when the rule fails.
        skip_empty: Whether empty input passes without calling ``test``.
        params: Constructor parameters, kept for display.
    """

    name: str
    test: Callable[[Any], bool]
    message: str
    skip_empty: bool = True
    params: tuple[tuple[str, Any], ...] = ()

    def predicate(self, value: Any) -> bool:
        """Evaluate the rule against *value*.

        Exceptions raised by ``test`` propagate; the registry contains them.
        """
        if self.skip_empty and is_empty(value):
            return True
        return bool(self.test(value))


# --- Parameter checks (fail fast at construction) ---


def _require_length(name: str, bound: Any) -> int:
    if isinstance(bound, bool) or not isinstance(bound, int) or bound < 0:
        msg = f"{name} expects a non-negative integer, got {bound!r}"
        raise RuleConfigurationError(msg)
    return bound


def _require_number(name: str, bound: Any) -> float | int:
    if isinstance(bound, bool) or not isinstance(bound, numbers.Real):
        msg = f"{name} expects a number, got {bound!r}"
        raise RuleConfigurationError(msg)
    if math.isnan(bound):
        msg = f"{name} bound must not be NaN"
        raise RuleConfigurationError(msg)
    return bound


def _message(message: str | None, default: str) -> str:
    return default if message is None else message


def _compile(regex: Any, flags: int = 0) -> re.Pattern[str]:
    if isinstance(regex, re.Pattern):
        if flags:
            msg = "pattern flags cannot be applied to an already compiled regex"
            raise RuleConfigurationError(msg)
        return regex
    if not isinstance(regex, str):
        msg = f"pattern expects a string or compiled regex, got {regex!r}"
        raise RuleConfigurationError(msg)
    try:
        return re.compile(regex, flags)
    except re.error as exc:
        msg = f"pattern {regex!r} does not compile: {exc}"
        raise RuleConfigurationError(msg) from exc


# --- Rule library ---


def required(message: str | None = None) -> Rule:
    """Value must be present: not None and not the empty string."""
    return Rule(
        name="required",
        test=lambda value: not is_empty(value),
        message=_message(message, "This field is required"),
        skip_empty=False,
    )


def email(message: str | None = None) -> Rule:
    """Value must look like ``local@domain.tld``."""
    return Rule(
        name="email",
        test=lambda value: EMAIL_PATTERN.fullmatch(str(value)) is not None,
        message=_message(message, "Invalid email format"),
    )


def min_length(min: int, message: str | None = None) -> Rule:  # noqa: A002
    """Value must have at least *min* items/characters."""
    bound = _require_length("minLength", min)
    return Rule(
        name="minLength",
        test=lambda value: len(value) >= bound,
        message=_message(message, f"Minimum length is {bound}"),
        params=(("min", bound),),
    )


def max_length(max: int, message: str | None = None) -> Rule:  # noqa: A002
    """Value must have at most *max* items/characters."""
    bound = _require_length("maxLength", max)
    return Rule(
        name="maxLength",
        test=lambda value: len(value) <= bound,
        message=_message(message, f"Maximum length is {bound}"),
        params=(("max", bound),),
    )


def number(message: str | None = None) -> Rule:
    """Value must coerce to a finite number."""
    return Rule(
        name="number",
        test=lambda value: math.isfinite(to_number(value)),
        message=_message(message, "Must be a number"),
    )


def min_value(min: float, message: str | None = None) -> Rule:  # noqa: A002
    """Numeric value must be >= *min*. Non-numeric values fail."""
    bound = _require_number("min", min)
    return Rule(
        name="min",
        test=lambda value: to_number(value) >= bound,
        message=_message(message, f"Minimum value is {bound}"),
        params=(("min", bound),),
    )


def max_value(max: float, message: str | None = None) -> Rule:  # noqa: A002
    """Numeric value must be <= *max*. Non-numeric values fail."""
    bound = _require_number("max", max)
    return Rule(
        name="max",
        test=lambda value: to_number(value) <= bound,
        message=_message(message, f"Maximum value is {bound}"),
        params=(("max", bound),),
    )


def pattern(regex: str | re.Pattern[str], message: str | None = None, *, flags: int = 0) -> Rule:
    """Value (as a string) must contain a match for *regex*.

    Anchor the expression (``^...$``) to require a full match.
    """
    compiled = _compile(regex, flags)
    return Rule(
        name="pattern",
        test=lambda value: compiled.search(str(value)) is not None,
        message=_message(message, "Invalid format"),
        params=(("pattern", compiled.pattern),),
    )


# Descriptor name -> constructor. Both camelCase and snake_case spellings
# resolve to the same constructor.
RULE_CATALOG: dict[str, Callable[..., Rule]] = {
    "required": required,
    "email": email,
    "minLength": min_length,
    "min_length": min_length,
    "maxLength": max_length,
    "max_length": max_length,
    "number": number,
    "min": min_value,
    "max": max_value,
    "pattern": pattern,
}

# Parameter names each catalog rule requires, in positional order.
RULE_PARAMS: dict[str, tuple[str, ...]] = {
    "required": (),
    "email": (),
    "minLength": ("min",),
    "maxLength": ("max",),
    "number": (),
    "min": ("min",),
    "max": ("max",),
    "pattern": ("pattern",),
}


def canonical_name(name: str) -> str:
    """Map snake_case aliases to their catalog name.

    Examples:
        >>> canonical_name("min_length")
        'minLength'
        >>> canonical_name("email")
        'email'
    """
    return {"min_length": "minLength", "max_length": "maxLength"}.get(name, name)
