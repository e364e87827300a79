"""Shared pytest fixtures and test helpers for formrules tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from formrules.config.settings import FormrulesSettings

FORMS_TOML = """\
[forms.signup]
description = "Account signup"

[forms.signup.initial]
email = ""
name = ""

[forms.signup.rules]
email = ["required", { rule = "email" }]
name = ["required", { rule = "minLength", min = 3 }]
age = [{ rule = "number" }, { rule = "min", min = 18, message = "Must be an adult" }]

[forms.product]
description = "Catalog product"

[forms.product.initial]
sku = ""
price = 0

[forms.product.rules]
sku = ["required", { rule = "pattern", pattern = "^[A-Z]{3}-\\\\d{4}$", message = "SKU looks like ABC-1234" }]
price = ["required", "number", { rule = "min", min = 0 }]

[forms.broken.rules]
code = [{ rule = "minLength" }]
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def config_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary directory holding a formrules.toml with sample forms."""
    monkeypatch.delenv("FORMRULES_CONFIG", raising=False)
    (tmp_path / "formrules.toml").write_text(FORMS_TOML, encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(config_root: Path) -> FormrulesSettings:
    """Settings loaded from the sample formrules.toml."""
    return FormrulesSettings.from_cli(root=config_root)


@pytest.fixture
def _isolated_config(config_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the sample config root so the CLI discovers it.

    Use via ``@pytest.mark.usefixtures("_isolated_config")`` on command test
    classes.
    """
    monkeypatch.chdir(config_root)
