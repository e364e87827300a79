"""Locating and reading formrules.toml.

The file holds ``[forms.<name>]`` definitions (initial values plus rule
descriptors) and an optional ``[output]`` section. It is found by walking
up from the working directory, unless FORMRULES_CONFIG or ``--config``
names it explicitly.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from formrules.config.models import FormrulesConfig

CONFIG_FILENAME = "formrules.toml"
CONFIG_ENV_VAR = "FORMRULES_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for formrules.toml.

    FORMRULES_CONFIG wins when set; if it names a missing file the result
    is None rather than falling back to the walk-up.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> FormrulesConfig:
    """Read form definitions and output options from formrules.toml.

    If *path* is None, uses find_config(*cwd*) to discover the file. With
    no file, the result has no forms. Rule descriptors are kept raw here.
    """
    if path is None:
        path = find_config(cwd)

    if path is None:
        return FormrulesConfig()

    raw = path.read_text(encoding="utf-8")
    data: dict[str, Any] = tomllib.loads(raw)
    return FormrulesConfig.model_validate(data)
