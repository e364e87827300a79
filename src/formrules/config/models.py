"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, formrules.toml only contains
form definitions and overrides.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# --- formrules.toml sections ---


class FormConfig(BaseModel):
    """[forms.<name>] section.

    ``rules`` holds raw descriptors. They are turned into Rules only when a
    session is built, so a bad descriptor is reported against its own form.
    """

    model_config = {"frozen": True}

    description: str = ""
    initial: dict[str, Any] = Field(default_factory=dict)
    rules: dict[str, Any] = Field(default_factory=dict)


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    width: int = 120


class FormrulesConfig(BaseModel):
    """Root config model — the full formrules.toml contents."""

    model_config = {"frozen": True}

    forms: dict[str, FormConfig] = Field(default_factory=dict)
    output: OutputConfig = Field(default_factory=OutputConfig)
