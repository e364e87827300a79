"""ValidationSession — binds a RuleRegistry to live, editable form state.

One session per form, owned by a single caller. Per-field lifecycle:

- untouched -> ``handle_change`` -> edited, validated
- ``handle_blur`` marks a field touched at any point (no validation)
- ``reset`` returns every field to untouched, unvalidated

``errors`` only reflects whichever of ``handle_change`` / ``validate_all``
ran most recently for a field; fields never edited have no entry until a
full validation is run.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from formrules.domain.descriptors import RuleConfig
from formrules.domain.registry import RuleRegistry

logger = logging.getLogger(__name__)


class ValidationSession:
    """Interactive validation state for one form.

    Args:
        initial_values: Starting record. Deep-copied; later edits never
            reach the stored snapshot.
        rule_config: Field -> ordered rule descriptors.
    """

    def __init__(
        self,
        initial_values: Mapping[str, Any] | None = None,
        rule_config: RuleConfig | None = None,
    ) -> None:
        self._initial: dict[str, Any] = copy.deepcopy(dict(initial_values or {}))
        self._registry = RuleRegistry.from_config(rule_config or {})
        self._values: dict[str, Any] = copy.deepcopy(self._initial)
        self._errors: dict[str, list[str]] = {}
        self._touched: dict[str, bool] = {}

    # --- Read-only snapshots ---

    @property
    def registry(self) -> RuleRegistry:
        return self._registry

    @property
    def initial_values(self) -> dict[str, Any]:
        return copy.deepcopy(self._initial)

    @property
    def values(self) -> dict[str, Any]:
        return copy.deepcopy(self._values)

    @property
    def errors(self) -> dict[str, list[str]]:
        return {field: list(messages) for field, messages in self._errors.items()}

    @property
    def touched(self) -> dict[str, bool]:
        return dict(self._touched)

    @property
    def is_valid(self) -> bool:
        """True when no field currently carries an error message."""
        return not any(self._errors.values())

    # --- Operations ---

    def handle_change(self, field: str, value: Any) -> None:
        """Store *value* and re-validate *field* alone."""
        self._values[field] = value
        result = self._registry.validate(field, value)
        self._errors[field] = list(result.errors)
        logger.debug("Field %s changed (valid=%s)", field, result.is_valid)

    def handle_blur(self, field: str) -> None:
        """Mark *field* as touched."""
        self._touched[field] = True

    def validate_all(self) -> bool:
        """Validate the current record and replace ``errors`` with failures only."""
        results = self._registry.validate_all(self._values)
        self._errors = {
            field: list(result.errors) for field, result in results.items() if not result.is_valid
        }
        logger.debug("Validated %d fields, %d failing", len(results), len(self._errors))
        return not self._errors

    def reset(self) -> None:
        """Restore the initial snapshot and clear errors and touched state."""
        self._values = copy.deepcopy(self._initial)
        self._errors = {}
        self._touched = {}
