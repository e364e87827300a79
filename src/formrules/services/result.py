"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: All FormService methods return ServiceResult. A record that
fails validation is ``ok=False`` with an INVALID_RECORD error carrying the
full check payload; UNKNOWN_FORM, INVALID_CONFIG and INVALID_INPUT cover
the other failures. The CLI maps ``ok`` to its exit code.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name: ``check``, ``describe_form``, ``list_forms`` or
            ``rules``.
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
