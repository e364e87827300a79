"""ValidationResult — the outcome of validating one field."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ValidationResult(BaseModel):
    """Pass/fail outcome plus ordered failure messages for one evaluation.

    ``is_valid`` is True iff ``errors`` is empty. Serializes to the
    ``{"isValid": ..., "errors": [...]}`` shape UI code binds to.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_valid: bool = Field(alias="isValid")
    errors: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _check_consistency(self) -> ValidationResult:
        if self.is_valid == bool(self.errors):
            msg = "is_valid must be True exactly when errors is empty"
            raise ValueError(msg)
        return self

    @classmethod
    def from_errors(cls, errors: Iterable[str]) -> ValidationResult:
        """Build a result from the collected failure messages."""
        collected = tuple(errors)
        return cls(is_valid=not collected, errors=collected)

    def to_payload(self) -> dict[str, Any]:
        """Return the external ``{"isValid", "errors"}`` dict."""
        return {"isValid": self.is_valid, "errors": list(self.errors)}
