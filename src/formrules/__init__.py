"""formrules — declarative field validation for forms and records."""

from __future__ import annotations

from formrules.domain.registry import RuleRegistry
from formrules.domain.results import ValidationResult
from formrules.domain.rules import Rule, RuleConfigurationError
from formrules.domain.session import ValidationSession

__version__ = "0.1.0"

__all__ = [
    "Rule",
    "RuleConfigurationError",
    "RuleRegistry",
    "ValidationResult",
    "ValidationSession",
    "__version__",
]
