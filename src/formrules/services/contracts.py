"""Typed payload contracts for service boundaries.

These models validate operation payload shapes before they leave the
service layer so key regressions fail fast in tests and during development.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


def dump_validated[T: BaseModel](model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class FieldReport(BaseModel):
    """Outcome for one field of a checked record."""

    field: str
    status: Literal["ok", "invalid", "skipped"]
    errors: list[str] = Field(default_factory=list)
    touched: bool = False


class CheckResultData(BaseModel):
    """Payload contract for ``FormService.check``."""

    form: str
    valid: bool
    values: dict[str, Any]
    errors: dict[str, list[str]]
    fields: list[FieldReport]


class RuleSummary(BaseModel):
    """One configured rule on a form field."""

    rule: str
    message: str
    params: dict[str, Any] = Field(default_factory=dict)


class FieldRules(BaseModel):
    field: str
    rules: list[RuleSummary]


class DescribeFormData(BaseModel):
    """Payload contract for ``FormService.describe``."""

    form: str
    description: str
    initial: dict[str, Any]
    fields: list[FieldRules]


class FormSummary(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    description: str
    field_count: int


class ListFormsData(BaseModel):
    """Payload contract for ``FormService.list_forms``."""

    count: int
    items: list[FormSummary]


class CatalogItem(BaseModel):
    rule: str
    params: list[str]
    skips_empty: bool
    aliases: list[str] = Field(default_factory=list)


class CatalogData(BaseModel):
    """Payload contract for ``FormService.catalog``."""

    count: int
    items: list[CatalogItem]
